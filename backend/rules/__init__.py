"""
Rules engine for the snake game.

Computes the next board from the current board, the match settings and
one move per living snake. Importing this package registers every stage.
"""

from .errors import (
    RulesError,
    ConfigurationError,
    NoMoveFoundError,
    ZeroLengthSnakeError,
    StageNotFoundError,
    EmptyPipelineError,
    StageRegisteredError,
    UnknownGameTypeError,
    TooManySnakesError,
    NoRoomForSnakeError,
    NoRoomForFoodError,
)
from .settings import Settings, RoyaleSettings
from .pipeline import Pipeline, StageRegistry, GLOBAL_REGISTRY, register_stage
from .stages import STANDARD_STAGES
from .ruleset import Ruleset, PipelineRuleset
from .standard import StandardRuleset, GAME_TYPE_STANDARD
from .royale import RoyaleRuleset, ROYALE_STAGES, GAME_TYPE_ROYALE
from .solo import SoloRuleset, SOLO_STAGES, GAME_TYPE_SOLO
from .builder import RulesetBuilder, params_from_env, AVAILABLE_GAME_TYPES
from .board import create_default_board_state, MinRand, MaxRand

__all__ = [
    'RulesError',
    'ConfigurationError',
    'NoMoveFoundError',
    'ZeroLengthSnakeError',
    'StageNotFoundError',
    'EmptyPipelineError',
    'StageRegisteredError',
    'UnknownGameTypeError',
    'TooManySnakesError',
    'NoRoomForSnakeError',
    'NoRoomForFoodError',
    'Settings',
    'RoyaleSettings',
    'Pipeline',
    'StageRegistry',
    'GLOBAL_REGISTRY',
    'register_stage',
    'STANDARD_STAGES',
    'ROYALE_STAGES',
    'SOLO_STAGES',
    'Ruleset',
    'PipelineRuleset',
    'StandardRuleset',
    'RoyaleRuleset',
    'SoloRuleset',
    'GAME_TYPE_STANDARD',
    'GAME_TYPE_ROYALE',
    'GAME_TYPE_SOLO',
    'RulesetBuilder',
    'params_from_env',
    'AVAILABLE_GAME_TYPES',
    'create_default_board_state',
    'MinRand',
    'MaxRand',
]
