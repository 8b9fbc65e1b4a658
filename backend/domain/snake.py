"""
Snake entity for the rules engine.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, NamedTuple

from .constants import NOT_ELIMINATED
from .point import Point


@dataclass
class Snake:
    """
    Represents one agent on the board.

    Attributes:
        id: stable identifier within a match
        body: list of Points from head at index 0 to tail at the end
        health: 0..100, a snake at 0 has starved
        eliminated_cause: '' while alive, otherwise one of the ELIMINATED_BY_* causes
        eliminated_by: id of the snake that caused the elimination ('' if none)
        eliminated_on_turn: the turn the snake was eliminated on (0 while alive)
    """

    id: str
    body: List[Point] = field(default_factory=list)
    health: int = 0
    eliminated_cause: str = NOT_ELIMINATED
    eliminated_by: str = ""
    eliminated_on_turn: int = 0

    @property
    def head(self) -> Point:
        """Return the head position (first element)."""
        return self.body[0]

    @property
    def is_eliminated(self) -> bool:
        return self.eliminated_cause != NOT_ELIMINATED

    def eliminate(self, cause: str, by: str, turn: int) -> None:
        # A cause, once set, is never replaced
        if self.is_eliminated:
            return
        self.eliminated_cause = cause
        self.eliminated_by = by
        self.eliminated_on_turn = turn

    def clone(self) -> "Snake":
        return Snake(
            id=self.id,
            body=list(self.body),
            health=self.health,
            eliminated_cause=self.eliminated_cause,
            eliminated_by=self.eliminated_by,
            eliminated_on_turn=self.eliminated_on_turn,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "body": [p.to_dict() for p in self.body],
            "health": self.health,
            "eliminatedCause": self.eliminated_cause,
            "eliminatedBy": self.eliminated_by,
            "eliminatedOnTurn": self.eliminated_on_turn,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Snake":
        return cls(
            id=str(data["id"]),
            body=[Point.from_dict(p) for p in data.get("body", [])],
            health=int(data.get("health", 0)),
            eliminated_cause=data.get("eliminatedCause", NOT_ELIMINATED),
            eliminated_by=data.get("eliminatedBy", ""),
            eliminated_on_turn=int(data.get("eliminatedOnTurn", 0)),
        )


class SnakeMove(NamedTuple):
    """One snake's move for one turn."""

    id: str
    move: str
