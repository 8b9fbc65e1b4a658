"""
Standard ruleset - the baseline multi-snake rules.
"""

from typing import Optional

from .pipeline import Pipeline
from .ruleset import PipelineRuleset
from .settings import Settings
from .stages import STANDARD_STAGES

GAME_TYPE_STANDARD = "standard"


class StandardRuleset(PipelineRuleset):
    """Last snake standing; the game ends once one or no snakes remain."""

    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(
            GAME_TYPE_STANDARD,
            Pipeline(*STANDARD_STAGES),
            settings if settings is not None else self.default_settings(),
        )

    @classmethod
    def default_settings(cls) -> Settings:
        return Settings()
