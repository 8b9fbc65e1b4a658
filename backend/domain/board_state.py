"""
BoardState entity - a snapshot of the game at a point in time.
"""

from typing import List, Dict, Any, Optional

from .point import Point
from .snake import Snake


class BoardState:
    """
    A snapshot of the game at a specific point in time.

    Attributes:
        turn: which turn we are on (0 before the first move)
        width, height: board dimensions
        snakes: list of Snake, in a stable order (resolution order matters for tie-breaks)
        food: list of Points holding food, no duplicates
        hazards: list of Points that amplify damage for a head standing on them
    """

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        turn: int = 0,
        snakes: Optional[List[Snake]] = None,
        food: Optional[List[Point]] = None,
        hazards: Optional[List[Point]] = None,
    ):
        self.width = width
        self.height = height
        self.turn = turn
        self.snakes = snakes if snakes is not None else []
        self.food = food if food is not None else []
        self.hazards = hazards if hazards is not None else []

    def clone(self) -> "BoardState":
        """Deep copy; stages mutate the clone, never the caller's state."""
        return BoardState(
            width=self.width,
            height=self.height,
            turn=self.turn,
            snakes=[snake.clone() for snake in self.snakes],
            food=list(self.food),
            hazards=list(self.hazards),
        )

    def living_snakes(self) -> List[Snake]:
        return [snake for snake in self.snakes if not snake.is_eliminated]

    def in_bounds(self, point: Point) -> bool:
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def __eq__(self, other) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and self.turn == other.turn
            and self.snakes == other.snakes
            and self.food == other.food
            and self.hazards == other.hazards
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "turn": self.turn,
            "width": self.width,
            "height": self.height,
            "snakes": [snake.to_dict() for snake in self.snakes],
            "food": [p.to_dict() for p in self.food],
            "hazards": [p.to_dict() for p in self.hazards],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardState":
        return cls(
            width=int(data["width"]),
            height=int(data["height"]),
            turn=int(data.get("turn", 0)),
            snakes=[Snake.from_dict(s) for s in data.get("snakes", [])],
            food=[Point.from_dict(p) for p in data.get("food", [])],
            hazards=[Point.from_dict(p) for p in data.get("hazards", [])],
        )

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        H = hazard
        F = food
        T = snake body
        0,1,2... = snake head (showing snake index)
        (0,0) is at the bottom left and x-axis labels are at the bottom
        """
        # Create empty board
        board = [['.' for _ in range(self.width)] for _ in range(self.height)]

        for p in self.hazards:
            if self.in_bounds(p):
                board[p.y][p.x] = 'H'

        for p in self.food:
            if self.in_bounds(p):
                board[p.y][p.x] = 'F'

        # Place snakes, eliminated ones are not shown
        for i, snake in enumerate(self.snakes):
            if snake.is_eliminated:
                continue

            # Draw the tail first so the head wins on stacked segments
            for pos_idx in range(len(snake.body) - 1, -1, -1):
                p = snake.body[pos_idx]
                if not self.in_bounds(p):
                    continue
                board[p.y][p.x] = str(i) if pos_idx == 0 else 'T'

        # Print rows in reverse order (bottom to top)
        result = []
        for y in range(self.height - 1, -1, -1):
            result.append(f"{y:2d} {' '.join(board[y])}")

        # Add x-axis labels at the bottom
        result.append("   " + " ".join(str(i) for i in range(self.width)))

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<BoardState turn={self.turn}, size={self.width}x{self.height}, "
            f"snakes={len(self.snakes)}, food={len(self.food)}, hazards={len(self.hazards)}>"
        )
