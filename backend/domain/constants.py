"""
Game constants for the rules engine.
"""

# Movement directions
UP = "up"
DOWN = "down"
LEFT = "left"
RIGHT = "right"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

# Unit vector for each move. (0,0) is the bottom left, so UP => y + 1
MOVE_DELTAS = {
    UP: (0, 1),
    DOWN: (0, -1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Snake settings
SNAKE_MAX_HEALTH = 100
SNAKE_START_SIZE = 3

# Elimination causes
NOT_ELIMINATED = ""
ELIMINATED_BY_COLLISION = "snake-collision"
ELIMINATED_BY_SELF_COLLISION = "snake-self-collision"
ELIMINATED_BY_OUT_OF_HEALTH = "out-of-health"
ELIMINATED_BY_HEAD_TO_HEAD_COLLISION = "head-collision"
ELIMINATED_BY_OUT_OF_BOUNDS = "wall-collision"
