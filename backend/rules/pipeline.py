"""
Stage registry and pipeline.

A stage is a function (board, settings, moves) -> bool that mutates the
board in place. Returning True halts the pipeline for this turn (the game
has ended); raising aborts the turn. A pipeline runs its stages strictly in
the order they were assembled, against a clone of the caller's board.
"""

import logging
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from domain import BoardState, SnakeMove

from .errors import EmptyPipelineError, StageNotFoundError, StageRegisteredError
from .settings import Settings

logger = logging.getLogger(__name__)

MoveMap = Dict[str, str]
StageFunc = Callable[[BoardState, Settings, MoveMap], bool]
Moves = Union[Mapping[str, str], Iterable[SnakeMove], None]

# Stage names
STAGE_MOVEMENT_STANDARD = "movement.standard"
STAGE_STARVATION_STANDARD = "starvation.standard"
STAGE_HAZARD_DAMAGE_STANDARD = "hazard_damage.standard"
STAGE_FEED_SNAKES_STANDARD = "feed_snakes.standard"
STAGE_ELIMINATION_STANDARD = "elimination.standard"
STAGE_SPAWN_FOOD_STANDARD = "spawn_food.standard"
STAGE_SPAWN_HAZARDS_SHRINK_MAP = "spawn_hazards.shrink_map"
STAGE_GAME_OVER_STANDARD = "game_over.standard"
STAGE_GAME_OVER_SOLO_SNAKE = "game_over.solo_snake"


class StageRegistry:
    """Maps stage names to stage functions."""

    def __init__(self):
        self._stages: Dict[str, StageFunc] = {}
        self._game_over_stages = set()

    def register(self, name: str, fn: StageFunc, game_over: bool = False) -> None:
        if name in self._stages:
            raise StageRegisteredError(f"stage '{name}' is already registered")
        self._stages[name] = fn
        if game_over:
            self._game_over_stages.add(name)

    def get(self, name: str) -> Optional[StageFunc]:
        return self._stages.get(name)

    def is_game_over_stage(self, name: str) -> bool:
        return name in self._game_over_stages

    def __contains__(self, name: str) -> bool:
        return name in self._stages

    def names(self) -> List[str]:
        return list(self._stages.keys())


GLOBAL_REGISTRY = StageRegistry()


def register_stage(name: str, game_over: bool = False, registry: Optional[StageRegistry] = None):
    """Decorator registering a stage function under a name."""
    def decorator(fn: StageFunc) -> StageFunc:
        (registry or GLOBAL_REGISTRY).register(name, fn, game_over=game_over)
        return fn
    return decorator


def normalize_moves(moves: Moves) -> MoveMap:
    """
    Turn a {id: move} mapping or a sequence of SnakeMove into a {id: move} dict.
    The first move listed for a snake wins.
    """
    if moves is None:
        return {}
    if isinstance(moves, Mapping):
        return dict(moves)
    move_map: MoveMap = {}
    for snake_id, move in moves:
        move_map.setdefault(snake_id, move)
    return move_map


class Pipeline:
    """
    An ordered, fixed list of stages. Holds no state between turns.

    Assembly problems (no stages, unknown stage name) are recorded on
    `error` and raised from execute(), so a pipeline can always be built.
    """

    def __init__(self, *stage_names: str, registry: Optional[StageRegistry] = None):
        self.registry = registry or GLOBAL_REGISTRY
        self.stage_names: List[str] = list(stage_names)
        self.stages: List[StageFunc] = []
        self.error: Optional[Exception] = None

        if not self.stage_names:
            self.error = EmptyPipelineError("pipeline has no stages")
            return

        for name in self.stage_names:
            fn = self.registry.get(name)
            if fn is None:
                available = ", ".join(self.registry.names())
                self.error = StageNotFoundError(f"stage '{name}' not found in registry. Available stages: {available}")
                return
            self.stages.append(fn)

    def execute(self, state: BoardState, settings: Settings, moves: Moves):
        """
        Run every stage against a clone of `state`.

        Returns:
            (ended, next_state) where next_state.turn == state.turn + 1

        Raises:
            RulesError: the first error raised by a stage; no state is returned
        """
        if self.error is not None:
            raise self.error

        move_map = normalize_moves(moves)
        next_state = state.clone()
        ended = False

        for name, stage in zip(self.stage_names, self.stages):
            logger.debug(f"Turn {state.turn + 1}: running stage {name}")
            if stage(next_state, settings, move_map):
                logger.debug(f"Turn {state.turn + 1}: stage {name} ended the game")
                ended = True
                break

        next_state.turn = state.turn + 1
        return ended, next_state

    def is_game_over(self, state: BoardState, settings: Settings) -> bool:
        """Evaluate only the game-over stages, on a throwaway clone."""
        if self.error is not None:
            raise self.error

        scratch = state.clone()
        for name, stage in zip(self.stage_names, self.stages):
            if self.registry.is_game_over_stage(name) and stage(scratch, settings, {}):
                return True
        return False

    def __repr__(self):
        return f"<Pipeline stages={self.stage_names}>"
