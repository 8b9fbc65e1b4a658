"""
Standard rule stages.

Every variant is assembled from these; the per-turn order is
movement, starvation, hazard damage, feeding, elimination, food spawn,
game over. Stages read `board.turn` as the previous turn, the turn being
computed is `board.turn + 1`.
"""

import logging
from typing import List, Optional, Tuple

from domain import (
    BoardState,
    Point,
    Snake,
    MOVE_DELTAS,
    VALID_MOVES,
    UP, DOWN, LEFT, RIGHT,
    SNAKE_MAX_HEALTH,
    ELIMINATED_BY_COLLISION,
    ELIMINATED_BY_SELF_COLLISION,
    ELIMINATED_BY_OUT_OF_HEALTH,
    ELIMINATED_BY_HEAD_TO_HEAD_COLLISION,
    ELIMINATED_BY_OUT_OF_BOUNDS,
)

from .board import place_food_randomly
from .errors import NoMoveFoundError, ZeroLengthSnakeError
from .pipeline import (
    MoveMap,
    register_stage,
    STAGE_MOVEMENT_STANDARD,
    STAGE_STARVATION_STANDARD,
    STAGE_HAZARD_DAMAGE_STANDARD,
    STAGE_FEED_SNAKES_STANDARD,
    STAGE_ELIMINATION_STANDARD,
    STAGE_SPAWN_FOOD_STANDARD,
    STAGE_GAME_OVER_STANDARD,
)
from .settings import Settings

logger = logging.getLogger(__name__)


def default_move(body: List[Point]) -> str:
    """
    Direction a snake keeps travelling in when its move is not one of the
    four valid moves: whatever the neck says the last move was, else up.
    """
    if len(body) >= 2:
        head, neck = body[0], body[1]
        if head.x == neck.x + 1:
            return RIGHT
        if head.x == neck.x - 1:
            return LEFT
        if head.y == neck.y + 1:
            return UP
        if head.y == neck.y - 1:
            return DOWN
    return UP


@register_stage(STAGE_MOVEMENT_STANDARD)
def move_snakes_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    """
    Prepend the new head to every living snake. The tail is left in place;
    feed_snakes_standard decides whether it drops.
    """
    # Check every living snake before moving any of them
    for snake in board.snakes:
        if snake.is_eliminated:
            continue
        if len(snake.body) == 0:
            raise ZeroLengthSnakeError(snake.id)
        if snake.id not in moves:
            raise NoMoveFoundError(snake.id)

    for snake in board.living_snakes():
        move = moves[snake.id]
        if move not in VALID_MOVES:
            move = default_move(snake.body)
        dx, dy = MOVE_DELTAS[move]
        snake.body.insert(0, snake.head.moved(dx, dy))

    return False


@register_stage(STAGE_STARVATION_STANDARD)
def reduce_snake_health_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    for snake in board.living_snakes():
        snake.health = max(0, snake.health - settings.damage_per_turn)
    return False


@register_stage(STAGE_HAZARD_DAMAGE_STANDARD)
def damage_hazards_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    """
    Extra damage for heads on hazard cells, unless the cell also holds food.
    A snake drained to zero starves here and takes no part in this turn's
    collisions.
    """
    if settings.hazard_damage_per_turn <= 0 or not board.hazards:
        return False

    turn = board.turn + 1
    hazards = set(board.hazards)
    food = set(board.food)
    for snake in board.living_snakes():
        if not snake.body:
            continue
        head = snake.head
        if head not in hazards or head in food:
            continue
        snake.health = max(0, snake.health - settings.hazard_damage_per_turn)
        if snake.health == 0:
            snake.eliminate(ELIMINATED_BY_OUT_OF_HEALTH, "", turn)
            logger.debug(f"Turn {turn}: snake {snake.id} starved on a hazard")

    return False


@register_stage(STAGE_FEED_SNAKES_STANDARD)
def feed_snakes_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    """
    Snakes whose head is on food eat it: health back to max and the tail is
    kept (one segment of growth). Every other living snake drops its tail.
    """
    food = set(board.food)
    eaten = set()

    for snake in board.living_snakes():
        if not snake.body:
            continue
        if snake.head in food:
            eaten.add(snake.head)
            snake.health = SNAKE_MAX_HEALTH
        elif len(snake.body) > 1:
            snake.body.pop()

    if eaten:
        board.food = [p for p in board.food if p not in eaten]
    return False


def _has_body_collided(head: Point, other: Snake) -> bool:
    return head in other.body[1:]


def _elimination_for(snake: Snake, contenders: List[Snake], board: BoardState) -> Optional[Tuple[str, str]]:
    """Return (cause, eliminated_by) if `snake` is eliminated this turn."""
    if snake.health <= 0:
        return ELIMINATED_BY_OUT_OF_HEALTH, ""

    head = snake.head
    if not board.in_bounds(head):
        return ELIMINATED_BY_OUT_OF_BOUNDS, ""

    if _has_body_collided(head, snake):
        return ELIMINATED_BY_SELF_COLLISION, ""

    for other in contenders:
        if other.id != snake.id and _has_body_collided(head, other):
            return ELIMINATED_BY_COLLISION, other.id

    for other in contenders:
        if other.id == snake.id or other.head != head:
            continue
        # Equal lengths lose too, so both snakes go
        if len(snake.body) <= len(other.body):
            return ELIMINATED_BY_HEAD_TO_HEAD_COLLISION, other.id

    return None


@register_stage(STAGE_ELIMINATION_STANDARD)
def eliminate_snakes_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    """
    Decide every elimination against the same post-movement board, then
    apply them all, so evaluation order never changes the outcome.
    """
    turn = board.turn + 1
    contenders = board.living_snakes()
    for snake in contenders:
        if len(snake.body) == 0:
            raise ZeroLengthSnakeError(snake.id)

    eliminations = []
    for snake in contenders:
        result = _elimination_for(snake, contenders, board)
        if result is not None:
            eliminations.append((snake, result[0], result[1]))

    for snake, cause, by in eliminations:
        snake.eliminate(cause, by, turn)
        logger.debug(f"Turn {turn}: snake {snake.id} eliminated ({cause}{' by ' + by if by else ''})")

    return False


@register_stage(STAGE_SPAWN_FOOD_STANDARD)
def spawn_food_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    rand = settings.get_rand(board.turn + 1)
    shortfall = settings.minimum_food - len(board.food)
    if shortfall > 0:
        place_food_randomly(rand, board, shortfall)
    elif settings.food_spawn_chance > 0 and rand.randrange(100) < settings.food_spawn_chance:
        place_food_randomly(rand, board, 1)
    return False


@register_stage(STAGE_GAME_OVER_STANDARD, game_over=True)
def game_over_standard(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    """Over once at most one snake is left."""
    return len(board.living_snakes()) <= 1


STANDARD_STAGES = [
    STAGE_MOVEMENT_STANDARD,
    STAGE_STARVATION_STANDARD,
    STAGE_HAZARD_DAMAGE_STANDARD,
    STAGE_FEED_SNAKES_STANDARD,
    STAGE_ELIMINATION_STANDARD,
    STAGE_SPAWN_FOOD_STANDARD,
    STAGE_GAME_OVER_STANDARD,
]
