"""
Initial board placement.

Creates the turn-0 board: snakes placed at fixed start points on the known
board sizes and at random (even parity) cells otherwise, then food next to
each snake. Any object with randrange(n) and shuffle(seq) works as the
random source; MinRand and MaxRand make placement predictable in tests.
"""

import logging
from typing import List, Sequence

from domain import BoardState, Point, Snake, SNAKE_MAX_HEALTH, SNAKE_START_SIZE

from .errors import NoRoomForFoodError, NoRoomForSnakeError, TooManySnakesError

logger = logging.getLogger(__name__)

BOARD_SIZE_SMALL = 7
BOARD_SIZE_MEDIUM = 11
BOARD_SIZE_LARGE = 19
KNOWN_BOARD_SIZES = {
    (BOARD_SIZE_SMALL, BOARD_SIZE_SMALL),
    (BOARD_SIZE_MEDIUM, BOARD_SIZE_MEDIUM),
    (BOARD_SIZE_LARGE, BOARD_SIZE_LARGE),
}


class MinRand:
    """Random source that always draws the lowest value and never shuffles."""

    def randrange(self, n: int) -> int:
        return 0

    def shuffle(self, seq: list) -> None:
        return None


class MaxRand:
    """Random source that always draws the highest value and never shuffles."""

    def randrange(self, n: int) -> int:
        return n - 1

    def shuffle(self, seq: list) -> None:
        return None


def create_default_board_state(rand, width: int, height: int, snake_ids: Sequence[str]) -> BoardState:
    board = BoardState(width=width, height=height)
    place_snakes_automatically(rand, board, snake_ids)
    place_food_automatically(rand, board)
    return board


def is_known_board_size(board: BoardState) -> bool:
    return (board.width, board.height) in KNOWN_BOARD_SIZES


def place_snakes_automatically(rand, board: BoardState, snake_ids: Sequence[str]) -> None:
    if is_known_board_size(board):
        place_snakes_fixed(rand, board, snake_ids)
    else:
        place_snakes_randomly(rand, board, snake_ids)


def _new_snake(snake_id: str, start: Point) -> Snake:
    # Snakes start stacked on a single cell and unfold as they move
    return Snake(id=snake_id, body=[start] * SNAKE_START_SIZE, health=SNAKE_MAX_HEALTH)


def place_snakes_fixed(rand, board: BoardState, snake_ids: Sequence[str]) -> None:
    """Corners first, then edge midpoints when there are more than four snakes."""
    mn, md, mx = 1, (board.width - 1) // 2, board.width - 2
    start_points = [Point(mn, mn), Point(mn, mx), Point(mx, mn), Point(mx, mx)]
    if len(snake_ids) > 4:
        start_points += [Point(mn, md), Point(md, mn), Point(md, mx), Point(mx, md)]

    if len(snake_ids) > len(start_points):
        raise TooManySnakesError(
            f"{len(snake_ids)} snakes don't fit on a {board.width}x{board.height} board"
        )

    rand.shuffle(start_points)
    board.snakes = [_new_snake(sid, start_points[i]) for i, sid in enumerate(snake_ids)]


def place_snakes_randomly(rand, board: BoardState, snake_ids: Sequence[str]) -> None:
    board.snakes = []
    for sid in snake_ids:
        unoccupied = get_even_unoccupied_points(board)
        if not unoccupied:
            raise NoRoomForSnakeError(f"no room left to place snake {sid}")
        board.snakes.append(_new_snake(sid, unoccupied[rand.randrange(len(unoccupied))]))


def get_unoccupied_points(board: BoardState, include_possible_moves: bool = True) -> List[Point]:
    """
    Cells free of food, hazards and living snakes, in row order from the
    bottom. With include_possible_moves=False the cells next to each head
    count as occupied too.
    """
    occupied = set(board.food) | set(board.hazards)
    for snake in board.living_snakes():
        occupied.update(snake.body)
        if snake.body and not include_possible_moves:
            head = snake.head
            occupied.update([head.moved(-1, 0), head.moved(1, 0), head.moved(0, -1), head.moved(0, 1)])

    return [
        Point(x, y)
        for y in range(board.height)
        for x in range(board.width)
        if Point(x, y) not in occupied
    ]


def get_even_unoccupied_points(board: BoardState) -> List[Point]:
    return [p for p in get_unoccupied_points(board) if (p.x + p.y) % 2 == 0]


def place_food_automatically(rand, board: BoardState) -> None:
    if is_known_board_size(board):
        place_food_fixed(rand, board)
    else:
        place_food_randomly(rand, board, len(board.snakes))


def place_food_randomly(rand, board: BoardState, n: int) -> None:
    for _ in range(n):
        unoccupied = get_unoccupied_points(board, include_possible_moves=False)
        if not unoccupied:
            logger.debug(f"No room to place food on turn {board.turn}")
            return
        board.food.append(unoccupied[rand.randrange(len(unoccupied))])


def _is_away_from_center(p: Point, head: Point, center: Point) -> bool:
    # Food has to be further from the center than the head on at least one axis
    return (
        (p.x < head.x < center.x)
        or (center.x < head.x < p.x)
        or (p.y < head.y < center.y)
        or (center.y < head.y < p.y)
    )


def place_food_fixed(rand, board: BoardState) -> None:
    """One food diagonal to each snake head, away from the center, plus one in the center."""
    center = Point((board.width - 1) // 2, (board.height - 1) // 2)
    is_small_board = board.width * board.height < BOARD_SIZE_MEDIUM * BOARD_SIZE_MEDIUM

    # Only up to 4 snakes get nearby food on small boards
    if len(board.snakes) <= 4 or not is_small_board:
        for snake in board.snakes:
            head = snake.head
            candidates = [
                head.moved(-1, -1), head.moved(-1, 1),
                head.moved(1, -1), head.moved(1, 1),
            ]
            available = []
            for p in candidates:
                if p == center or p in board.food or p in board.hazards:
                    continue
                if not _is_away_from_center(p, head, center):
                    continue
                is_corner = p.x in (0, board.width - 1) and p.y in (0, board.height - 1)
                if is_corner:
                    continue
                available.append(p)

            if not available:
                raise NoRoomForFoodError(f"no room for starting food near snake {snake.id}")
            board.food.append(available[rand.randrange(len(available))])

    if center not in get_unoccupied_points(board):
        raise NoRoomForFoodError("center of the board is occupied")
    board.food.append(center)
