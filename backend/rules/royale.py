"""
Royale ruleset - standard rules plus a shrinking safe zone.

Every `shrink_every_n_turns` turns one edge of the safe rectangle moves in
by a row or column and the cells it leaves behind become hazards for good.
Edges are taken in a fixed rotation (left, bottom, right, top) starting
from an edge drawn from the match seed. The rotation skips edges that
don't fit the zone's shape: a zone one row or column thick is cut along
its length, which empties it, and otherwise only the longer dimension
shrinks. On a 3x3 board that always gives 3, 5, 7 and then 9 hazards.

The whole sequence is replayed from the seed each turn, so the hazards for
a turn depend only on the turn number, the board size and the seed.
"""

import logging
from typing import List, Optional, Set, Tuple

from domain import BoardState, Point

from .errors import ConfigurationError
from .pipeline import (
    Moves,
    MoveMap,
    Pipeline,
    register_stage,
    STAGE_GAME_OVER_STANDARD,
    STAGE_SPAWN_HAZARDS_SHRINK_MAP,
)
from .ruleset import PipelineRuleset
from .settings import RoyaleSettings, Settings
from .stages import STANDARD_STAGES

logger = logging.getLogger(__name__)

GAME_TYPE_ROYALE = "royale"

DEFAULT_HAZARD_DAMAGE_PER_TURN = 14
DEFAULT_SHRINK_EVERY_N_TURNS = 25

# Shrink rotation
EDGE_LEFT = "left"
EDGE_BOTTOM = "bottom"
EDGE_RIGHT = "right"
EDGE_TOP = "top"
SHRINK_EDGES = [EDGE_LEFT, EDGE_BOTTOM, EDGE_RIGHT, EDGE_TOP]
COLUMN_EDGES = {EDGE_LEFT, EDGE_RIGHT}
ROW_EDGES = {EDGE_BOTTOM, EDGE_TOP}


def validate_royale_settings(settings: Settings) -> None:
    if settings.hazard_damage_per_turn < 1:
        raise ConfigurationError("royale damage per turn must be greater than zero")
    if settings.royale.shrink_every_n_turns < 1:
        raise ConfigurationError("royale game can't shrink more frequently than every turn")


def shrinkable_edges(zone_width: int, zone_height: int) -> Set[str]:
    """Edges the rotation may take next for a non-empty zone of this size."""
    if zone_width == 1 and zone_height == 1:
        return set(SHRINK_EDGES)
    # Strips go in one cut
    if zone_height == 1:
        return ROW_EDGES
    if zone_width == 1:
        return COLUMN_EDGES
    if zone_width > zone_height:
        return COLUMN_EDGES
    if zone_height > zone_width:
        return ROW_EDGES
    return set(SHRINK_EDGES)


def safe_zone(width: int, height: int, turn: int, settings: Settings, rand=None) -> Tuple[int, int, int, int]:
    """
    Return the safe rectangle (min_x, max_x, min_y, max_y) for `turn`.
    An empty zone has min_x > max_x or min_y > max_y.

    `rand` overrides the match generator for choosing the starting edge.
    """
    min_x, max_x = 0, width - 1
    min_y, max_y = 0, height - 1

    interval = settings.royale.shrink_every_n_turns
    if interval < 1 or turn < interval:
        return min_x, max_x, min_y, max_y

    if rand is None:
        rand = settings.royale_rand()
    edge = rand.randrange(len(SHRINK_EDGES))

    for _ in range(turn // interval):
        # Fully consumed, later shrinks are no-ops
        if min_x > max_x or min_y > max_y:
            break

        allowed = shrinkable_edges(max_x - min_x + 1, max_y - min_y + 1)
        while SHRINK_EDGES[edge % len(SHRINK_EDGES)] not in allowed:
            edge += 1

        side = SHRINK_EDGES[edge % len(SHRINK_EDGES)]
        if side == EDGE_LEFT:
            min_x += 1
        elif side == EDGE_BOTTOM:
            min_y += 1
        elif side == EDGE_RIGHT:
            max_x -= 1
        else:
            max_y -= 1
        edge += 1

    return min_x, max_x, min_y, max_y


def royale_hazards(width: int, height: int, turn: int, settings: Settings, rand=None) -> List[Point]:
    """All cells outside the safe zone at `turn`, column by column."""
    min_x, max_x, min_y, max_y = safe_zone(width, height, turn, settings, rand=rand)
    return [
        Point(x, y)
        for x in range(width)
        for y in range(height)
        if x < min_x or x > max_x or y < min_y or y > max_y
    ]


@register_stage(STAGE_SPAWN_HAZARDS_SHRINK_MAP)
def populate_hazards_royale(board: BoardState, settings: Settings, moves: MoveMap) -> bool:
    validate_royale_settings(settings)

    # Royale works off the turn being computed, not the one in the board
    turn = board.turn + 1

    existing = set(board.hazards)
    added = [p for p in royale_hazards(board.width, board.height, turn, settings) if p not in existing]
    if added:
        logger.debug(f"Turn {turn}: safe zone shrank, {len(added)} new hazard cells")
        board.hazards.extend(added)

    return False


# Hazards grow after eliminations, before the game-over check
ROYALE_STAGES = list(STANDARD_STAGES)
ROYALE_STAGES.insert(ROYALE_STAGES.index(STAGE_GAME_OVER_STANDARD), STAGE_SPAWN_HAZARDS_SHRINK_MAP)


class RoyaleRuleset(PipelineRuleset):
    def __init__(self, settings: Optional[Settings] = None):
        super().__init__(
            GAME_TYPE_ROYALE,
            Pipeline(*ROYALE_STAGES),
            settings if settings is not None else self.default_settings(),
        )

    @classmethod
    def default_settings(cls) -> Settings:
        return Settings(
            hazard_damage_per_turn=DEFAULT_HAZARD_DAMAGE_PER_TURN,
            royale=RoyaleSettings(shrink_every_n_turns=DEFAULT_SHRINK_EVERY_N_TURNS),
        )

    def validate(self) -> None:
        validate_royale_settings(self.settings())

    def execute(self, state: BoardState, settings: Settings, moves: Moves):
        # Bad settings fail the turn before anything else is looked at
        validate_royale_settings(settings)
        return super().execute(state, settings, moves)
