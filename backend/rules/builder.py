"""
Builds rulesets from a flat string parameter mapping.

Parameter values arrive as strings (query params, env vars, CLI flags);
anything that doesn't parse falls back to the ruleset's default.
"""

import logging
import os
import time
from typing import Dict, Mapping, Optional

from .errors import UnknownGameTypeError
from .pipeline import Pipeline
from .royale import GAME_TYPE_ROYALE, ROYALE_STAGES, RoyaleRuleset
from .ruleset import PipelineRuleset, Ruleset
from .settings import RoyaleSettings, Settings
from .solo import GAME_TYPE_SOLO, SOLO_STAGES, SoloRuleset
from .standard import GAME_TYPE_STANDARD, StandardRuleset
from .stages import STANDARD_STAGES

logger = logging.getLogger(__name__)

# Parameter names
PARAM_GAME_TYPE = "name"
PARAM_FOOD_SPAWN_CHANCE = "foodSpawnChance"
PARAM_MINIMUM_FOOD = "minimumFood"
# Sets hazard_damage_per_turn; the base decay (damage_per_turn) has no parameter
PARAM_HAZARD_DAMAGE_PER_TURN = "damagePerTurn"
PARAM_SHRINK_EVERY_N_TURNS = "shrinkEveryNTurns"

# Environment variable for each parameter, read by params_from_env()
ENV_PARAMS = {
    "RULES_GAME_TYPE": PARAM_GAME_TYPE,
    "RULES_FOOD_SPAWN_CHANCE": PARAM_FOOD_SPAWN_CHANCE,
    "RULES_MINIMUM_FOOD": PARAM_MINIMUM_FOOD,
    "RULES_HAZARD_DAMAGE_PER_TURN": PARAM_HAZARD_DAMAGE_PER_TURN,
    "RULES_SHRINK_EVERY_N_TURNS": PARAM_SHRINK_EVERY_N_TURNS,
}

RULESET_STAGES = {
    GAME_TYPE_STANDARD: STANDARD_STAGES,
    GAME_TYPE_ROYALE: ROYALE_STAGES,
    GAME_TYPE_SOLO: SOLO_STAGES,
}

RULESET_CLASSES = {
    GAME_TYPE_STANDARD: StandardRuleset,
    GAME_TYPE_ROYALE: RoyaleRuleset,
    GAME_TYPE_SOLO: SoloRuleset,
}

AVAILABLE_GAME_TYPES = list(RULESET_CLASSES.keys())


def params_from_env(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collect builder params from RULES_* environment variables that are set."""
    environ = os.environ if environ is None else environ
    return {param: environ[var] for var, param in ENV_PARAMS.items() if environ.get(var)}


def _param_int(params: Mapping[str, str], name: str, default: int) -> int:
    value = params.get(name)
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring parameter {name}={value!r}: not an integer, using {default}")
        return default


class RulesetBuilder:
    """
    Usage:
        ruleset = RulesetBuilder().with_params({"name": "royale"}).with_seed(1234).ruleset()
    """

    def __init__(self):
        self.params: Dict[str, str] = {}
        self.seed = time.time_ns()

    def with_params(self, params: Mapping[str, str]) -> "RulesetBuilder":
        self.params.update(params)
        return self

    def with_seed(self, seed: int) -> "RulesetBuilder":
        self.seed = seed
        return self

    @property
    def game_type(self) -> str:
        return self.params.get(PARAM_GAME_TYPE) or GAME_TYPE_STANDARD

    def settings(self, game_type: Optional[str] = None) -> Settings:
        """Settings for `game_type`, with the params layered over its defaults."""
        ruleset_class = RULESET_CLASSES.get(game_type or self.game_type)
        defaults = ruleset_class.default_settings() if ruleset_class else Settings()

        return Settings(
            food_spawn_chance=_param_int(self.params, PARAM_FOOD_SPAWN_CHANCE, defaults.food_spawn_chance),
            minimum_food=_param_int(self.params, PARAM_MINIMUM_FOOD, defaults.minimum_food),
            damage_per_turn=defaults.damage_per_turn,
            hazard_damage_per_turn=_param_int(
                self.params, PARAM_HAZARD_DAMAGE_PER_TURN, defaults.hazard_damage_per_turn
            ),
            royale=RoyaleSettings(
                shrink_every_n_turns=_param_int(
                    self.params, PARAM_SHRINK_EVERY_N_TURNS, defaults.royale.shrink_every_n_turns
                ),
            ),
            seed=self.seed,
        )

    def ruleset(self) -> Ruleset:
        game_type = self.game_type
        ruleset_class = RULESET_CLASSES.get(game_type)
        if ruleset_class is None:
            available = ", ".join(AVAILABLE_GAME_TYPES)
            raise UnknownGameTypeError(f"Unknown game type '{game_type}'. Available game types: {available}")
        return ruleset_class(self.settings(game_type))

    def pipeline(self, game_type: Optional[str] = None) -> Pipeline:
        """A pipeline with the stage list for `game_type`."""
        game_type = game_type or self.game_type
        stages = RULESET_STAGES.get(game_type)
        if stages is None:
            available = ", ".join(AVAILABLE_GAME_TYPES)
            raise UnknownGameTypeError(f"Unknown game type '{game_type}'. Available game types: {available}")
        return Pipeline(*stages)

    def pipeline_ruleset(self, name: str, pipeline: Pipeline) -> PipelineRuleset:
        """Wrap any pipeline as a ruleset carrying this builder's settings."""
        return PipelineRuleset(name, pipeline, self.settings(name))
