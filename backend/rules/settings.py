"""
Per-match ruleset configuration.

Settings are immutable. Randomness is derived from the match seed on
demand, so two matches never share a generator and a turn can be
replayed from its inputs alone.
"""

import random
from dataclasses import dataclass, field, replace


@dataclass(frozen=True)
class RoyaleSettings:
    shrink_every_n_turns: int = 0


@dataclass(frozen=True)
class Settings:
    food_spawn_chance: int = 0       # percent chance of spawning one food per turn
    minimum_food: int = 0
    damage_per_turn: int = 1         # ordinary per-turn health decay
    hazard_damage_per_turn: int = 0  # extra damage for a head on a hazard cell
    royale: RoyaleSettings = field(default_factory=RoyaleSettings)
    seed: int = 0

    def with_seed(self, seed: int) -> "Settings":
        return replace(self, seed=seed)

    def get_rand(self, turn: int) -> random.Random:
        """Return a fresh generator for one turn of this match."""
        return random.Random(self.seed + turn)

    def royale_rand(self) -> random.Random:
        """Return a fresh generator positioned at the start of the shrink sequence."""
        return random.Random(self.seed)
