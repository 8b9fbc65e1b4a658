"""
Point value type - an (x, y) board coordinate.
"""

from typing import NamedTuple, Dict


class Point(NamedTuple):
    x: int
    y: int

    def moved(self, dx: int, dy: int) -> "Point":
        return Point(self.x + dx, self.y + dy)

    def to_dict(self) -> Dict[str, int]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data) -> "Point":
        """Accept either {"x": .., "y": ..} or an (x, y) pair."""
        if isinstance(data, dict):
            return cls(int(data["x"]), int(data["y"]))
        x, y = data
        return cls(int(x), int(y))
