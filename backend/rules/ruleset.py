"""
Ruleset interface.

A ruleset is a named policy: it knows its default settings, computes the
next board from the current one, and says whether a board is finished.
Every variant here is a PipelineRuleset over a different stage list.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from domain import BoardState

from .pipeline import Moves, Pipeline
from .settings import Settings


class Ruleset(ABC):
    """Base class/interface for ruleset variants."""

    @abstractmethod
    def name(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def settings(self) -> Settings:
        raise NotImplementedError

    @abstractmethod
    def execute(self, state: BoardState, settings: Settings, moves: Moves) -> Tuple[bool, BoardState]:
        """
        Compute the next turn.

        Args:
            state: current board, never modified
            settings: settings for this match
            moves: exactly one move per living snake

        Returns:
            (is_game_over, next_state)

        Raises:
            RulesError: the turn could not be computed
        """
        raise NotImplementedError

    @abstractmethod
    def is_game_over(self, state: BoardState) -> bool:
        raise NotImplementedError

    def create_next_board_state(self, state: BoardState, moves: Moves) -> BoardState:
        """Execute with this ruleset's own settings and return only the board."""
        _, next_state = self.execute(state, self.settings(), moves)
        return next_state


class PipelineRuleset(Ruleset):
    """A ruleset that runs a Pipeline each turn."""

    def __init__(self, name: str, pipeline: Pipeline, settings: Optional[Settings] = None):
        self._name = name
        self.pipeline = pipeline
        self._settings = settings if settings is not None else Settings()

    def name(self) -> str:
        return self._name

    def settings(self) -> Settings:
        return self._settings

    def execute(self, state: BoardState, settings: Settings, moves: Moves) -> Tuple[bool, BoardState]:
        return self.pipeline.execute(state, settings, moves)

    def is_game_over(self, state: BoardState) -> bool:
        return self.pipeline.is_game_over(state, self._settings)

    def __repr__(self):
        return f"<{self.__class__.__name__} name={self._name!r} stages={self.pipeline.stage_names}>"
