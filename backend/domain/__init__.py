"""
Domain entities for the snake rules engine.

This module contains the board data model, independent of the rules
that transform it from one turn to the next.
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, MOVE_DELTAS,
    SNAKE_MAX_HEALTH, SNAKE_START_SIZE,
    NOT_ELIMINATED,
    ELIMINATED_BY_COLLISION,
    ELIMINATED_BY_SELF_COLLISION,
    ELIMINATED_BY_OUT_OF_HEALTH,
    ELIMINATED_BY_HEAD_TO_HEAD_COLLISION,
    ELIMINATED_BY_OUT_OF_BOUNDS,
)
from .point import Point
from .snake import Snake, SnakeMove
from .board_state import BoardState

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'MOVE_DELTAS',
    'SNAKE_MAX_HEALTH', 'SNAKE_START_SIZE',
    'NOT_ELIMINATED',
    'ELIMINATED_BY_COLLISION',
    'ELIMINATED_BY_SELF_COLLISION',
    'ELIMINATED_BY_OUT_OF_HEALTH',
    'ELIMINATED_BY_HEAD_TO_HEAD_COLLISION',
    'ELIMINATED_BY_OUT_OF_BOUNDS',
    'Point',
    'Snake',
    'SnakeMove',
    'BoardState',
]
