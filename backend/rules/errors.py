"""
Errors raised by the rules engine.

Every failure is raised to the caller synchronously; the engine never
retries or recovers, a failure means the call itself was invalid.
"""


class RulesError(Exception):
    """Base class for all rules engine errors."""


class ConfigurationError(RulesError, ValueError):
    """Ruleset parameters that can never produce a valid turn."""


class NoMoveFoundError(RulesError):
    """A living snake has no move for this turn."""

    def __init__(self, snake_id: str = ""):
        self.snake_id = snake_id
        super().__init__("move not provided for snake")


class ZeroLengthSnakeError(RulesError):
    """A living snake has an empty body."""

    def __init__(self, snake_id: str = ""):
        self.snake_id = snake_id
        super().__init__("snake is length zero")


class StageNotFoundError(RulesError):
    """A pipeline was assembled with a stage name that isn't registered."""


class EmptyPipelineError(RulesError):
    """A pipeline was assembled with no stages."""


class StageRegisteredError(RulesError):
    """A stage name was registered twice."""


class UnknownGameTypeError(RulesError, ValueError):
    """No stage list exists for the requested game type."""


class TooManySnakesError(RulesError):
    """More snakes than fixed start positions."""


class NoRoomForSnakeError(RulesError):
    """No unoccupied cell left to place a snake on."""


class NoRoomForFoodError(RulesError):
    """No valid cell left to place starting food on."""
