"""
Solo ruleset - standard rules for a single snake.

Only the termination rule differs: one surviving snake is not a winner,
the game runs until no snake is left.
"""

from typing import Optional

from domain import BoardState

from .pipeline import (
    MoveMap,
    Pipeline,
    register_stage,
    STAGE_GAME_OVER_SOLO_SNAKE,
    STAGE_GAME_OVER_STANDARD,
)
from .ruleset import PipelineRuleset
from .settings import Settings
from .stages import STANDARD_STAGES

GAME_TYPE_SOLO = "solo"


@register_stage(STAGE_GAME_OVER_SOLO_SNAKE, game_over=True)
def game_over_solo(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    return len(board.living_snakes()) == 0


SOLO_STAGES = [
    STAGE_GAME_OVER_SOLO_SNAKE if stage == STAGE_GAME_OVER_STANDARD else stage
    for stage in STANDARD_STAGES
]


class SoloRuleset(PipelineRuleset):
    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(
            GAME_TYPE_SOLO,
            Pipeline(*SOLO_STAGES),
            settings if settings is not None else self.default_settings(),
        )

    @classmethod
    def default_settings(cls) -> Settings:
        return Settings()
