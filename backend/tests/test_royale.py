"""
Tests for the royale ruleset and the shrinking safe zone.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import BoardState, Point, Snake, ELIMINATED_BY_OUT_OF_BOUNDS  # noqa: E402
from rules import (  # noqa: E402
    ConfigurationError,
    NoMoveFoundError,
    Pipeline,
    RoyaleRuleset,
    RoyaleSettings,
    Ruleset,
    RulesetBuilder,
    MaxRand,
    MinRand,
    Settings,
    ROYALE_STAGES,
    STANDARD_STAGES,
    ZeroLengthSnakeError,
)
from rules.royale import populate_hazards_royale, royale_hazards, safe_zone, shrinkable_edges  # noqa: E402

from game_cases import (  # noqa: E402
    case_move_and_collide_mad,
    case_move_eat_and_grow,
    case_no_move_found,
    case_zero_length_snake,
)

SEED = 25543234525


def _settings(shrink_every_n_turns, seed=SEED, hazard_damage_per_turn=1):
    return Settings(
        hazard_damage_per_turn=hazard_damage_per_turn,
        royale=RoyaleSettings(shrink_every_n_turns=shrink_every_n_turns),
    ).with_seed(seed)


def _is_edge_line(points, width, height):
    """True if the points are exactly one full outer row or column."""
    xs = {p.x for p in points}
    ys = {p.y for p in points}
    full_column = len(xs) == 1 and xs <= {0, width - 1} and len(points) == height
    full_row = len(ys) == 1 and ys <= {0, height - 1} and len(points) == width
    return full_column or full_row


def _rulesets():
    settings = _settings(1, seed=1234)
    builder = RulesetBuilder().with_params({
        "name": "royale",
        "damagePerTurn": "1",
        "shrinkEveryNTurns": "1",
    }).with_seed(1234)
    return [
        RoyaleRuleset(settings),
        builder.ruleset(),
        builder.pipeline_ruleset("royale", Pipeline(*ROYALE_STAGES)),
    ]


class TestRoyaleRuleset:
    """Tests for RoyaleRuleset identity, defaults and validation."""

    def test_is_a_ruleset(self):
        assert isinstance(RoyaleRuleset(), Ruleset)

    def test_name(self):
        assert RoyaleRuleset().name() == "royale"

    def test_default_settings(self):
        settings = RoyaleRuleset().settings()
        assert settings.hazard_damage_per_turn == 14
        assert settings.royale.shrink_every_n_turns == 25

    def test_stage_order(self):
        """Hazards grow after eliminations and before the game-over check."""
        assert ROYALE_STAGES[:-2] == STANDARD_STAGES[:-1]
        assert ROYALE_STAGES[-2:] == ["spawn_hazards.shrink_map", "game_over.standard"]

    def test_zero_shrink_interval_rejected(self):
        board = BoardState(snakes=[
            Snake(id="1", body=[Point(0, 0)]),
            Snake(id="2", body=[Point(0, 1)]),
        ])
        settings = _settings(0)
        with pytest.raises(ConfigurationError, match="royale game can't shrink more frequently than every turn"):
            RoyaleRuleset(settings).execute(board, settings, {"1": "right", "2": "right"})

    def test_zero_hazard_damage_rejected(self):
        """Bad settings are reported before the moves are even looked at."""
        board = BoardState(snakes=[
            Snake(id="1", body=[Point(0, 0)]),
            Snake(id="2", body=[Point(0, 1)]),
        ])
        settings = _settings(1, hazard_damage_per_turn=0)
        with pytest.raises(ConfigurationError, match="royale damage per turn must be greater than zero"):
            RoyaleRuleset(settings).execute(board, settings, {})

    def test_validate(self):
        RoyaleRuleset().validate()
        with pytest.raises(ConfigurationError):
            RoyaleRuleset(Settings()).validate()

    def test_configuration_error_is_a_value_error(self):
        with pytest.raises(ValueError):
            RoyaleRuleset(Settings()).validate()

    def test_valid_settings_on_empty_board(self):
        """A zero-size board never grows hazards."""
        board = BoardState(snakes=[
            Snake(id="1", body=[Point(0, 0)], health=100),
            Snake(id="2", body=[Point(0, 1)], health=100),
        ])
        settings = _settings(1)
        ended, next_state = RoyaleRuleset(settings).execute(board, settings, {"1": "right", "2": "right"})
        assert ended is True
        assert next_state.hazards == []
        assert all(s.eliminated_cause == ELIMINATED_BY_OUT_OF_BOUNDS for s in next_state.snakes)


class TestRoyaleHazards:
    """Tests for the shrink schedule."""

    def _hazards_at(self, width, height, turn, shrink_every_n_turns, seed=SEED):
        board = BoardState(width=width, height=height, turn=turn - 1)
        populate_hazards_royale(board, _settings(shrink_every_n_turns, seed=seed), {})
        return board.hazards

    def test_zero_shrink_interval_rejected(self):
        with pytest.raises(ConfigurationError):
            self._hazards_at(3, 3, 1, 0)

    @pytest.mark.parametrize("width, height, turn, shrink, count", [
        (0, 0, 0, 1, 0),
        (0, 0, 1, 1, 0),
        (3, 3, 1, 10, 0),
        (3, 3, 9, 10, 0),
        (3, 3, 10, 10, 3),
        (3, 3, 11, 10, 3),
        (3, 3, 19, 10, 3),
        (3, 3, 20, 10, 5),
        (3, 3, 29, 10, 5),
        (3, 3, 31, 10, 7),
        (3, 3, 39, 10, 7),
        (3, 3, 42, 10, 9),
        (3, 3, 53, 10, 9),
        (3, 3, 64, 10, 9),
        (3, 3, 6987, 10, 9),
    ])
    def test_hazard_count_schedule(self, width, height, turn, shrink, count):
        hazards = self._hazards_at(width, height, turn, shrink)
        assert len(hazards) == count
        assert len(set(hazards)) == count

    def test_first_shrink_takes_one_edge(self):
        hazards = self._hazards_at(3, 3, 10, 10)
        assert _is_edge_line(hazards, 3, 3)

    def test_board_ends_fully_covered(self):
        hazards = self._hazards_at(3, 3, 6987, 10)
        assert sorted(hazards) == [Point(x, y) for x in range(3) for y in range(3)]

    def test_hazards_listed_column_by_column(self):
        hazards = self._hazards_at(3, 3, 6987, 10)
        assert hazards == sorted(hazards)

    def test_edges_rotate(self):
        """Four shrinks take one row or column from every side."""
        settings = _settings(1)
        assert safe_zone(10, 10, 4, settings) == (1, 8, 1, 8)
        assert safe_zone(10, 10, 8, settings) == (2, 7, 2, 7)

    @pytest.mark.parametrize("turn, expected", [
        (10, [(0, 0), (0, 1), (0, 2)]),
        (20, [(0, 0), (0, 1), (0, 2), (1, 0), (2, 0)]),
        (31, [(0, 0), (0, 1), (0, 2), (1, 0), (2, 0), (2, 1), (2, 2)]),
        (42, [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2), (2, 0), (2, 1), (2, 2)]),
    ])
    def test_cells_starting_from_left(self, turn, expected):
        hazards = royale_hazards(3, 3, turn, _settings(10), rand=MinRand())
        assert hazards == [Point(x, y) for x, y in expected]

    @pytest.mark.parametrize("turn, expected", [
        (10, [(0, 2), (1, 2), (2, 2)]),
        (20, [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]),
        (31, [(0, 0), (0, 1), (0, 2), (1, 0), (1, 2), (2, 0), (2, 2)]),
        (42, [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2), (2, 0), (2, 1), (2, 2)]),
    ])
    def test_cells_starting_from_top(self, turn, expected):
        hazards = royale_hazards(3, 3, turn, _settings(10), rand=MaxRand())
        assert hazards == [Point(x, y) for x, y in expected]

    @pytest.mark.parametrize("seed", range(20))
    def test_small_board_schedule_holds_for_any_seed(self, seed):
        counts = [len(self._hazards_at(3, 3, turn, 10, seed=seed)) for turn in (9, 10, 20, 31, 42)]
        assert counts == [0, 3, 5, 7, 9]

    def test_strip_is_cut_along_its_length(self):
        assert shrinkable_edges(2, 1) == {"bottom", "top"}
        assert shrinkable_edges(1, 5) == {"left", "right"}
        assert shrinkable_edges(4, 3) == {"left", "right"}
        assert shrinkable_edges(3, 4) == {"bottom", "top"}
        assert shrinkable_edges(3, 3) == {"left", "bottom", "right", "top"}
        assert shrinkable_edges(1, 1) == {"left", "bottom", "right", "top"}

    def test_hazards_only_grow(self):
        """Every turn's hazards contain the previous turn's, on a non-square board."""
        settings = _settings(3, seed=7)
        previous = set()
        for turn in range(0, 60):
            current = set(royale_hazards(7, 4, turn, settings))
            assert previous <= current
            previous = current
        assert len(previous) == 7 * 4

    def test_same_seed_same_hazards(self):
        for turn in (10, 20, 30, 40):
            assert self._hazards_at(5, 5, turn, 10, seed=1) == self._hazards_at(5, 5, turn, 10, seed=1)

    def test_existing_hazards_are_kept(self):
        """Hazards already on the board are never cleared."""
        board = BoardState(width=5, height=5, turn=0, hazards=[Point(2, 2)])
        populate_hazards_royale(board, _settings(10), {})
        assert board.hazards == [Point(2, 2)]

    def test_turns_do_not_share_randomness(self):
        """Running other turns in between never changes a turn's hazards."""
        settings = _settings(1, seed=5)
        expected = royale_hazards(6, 6, 3, settings)
        royale_hazards(6, 6, 9, settings)
        assert royale_hazards(6, 6, 3, settings) == expected


class TestRoyaleCases:
    """Whole-turn cases, run through every way of building the royale rules."""

    @pytest.mark.parametrize("ruleset", _rulesets(), ids=["class", "builder", "pipeline"])
    def test_standard_errors_carry_over(self, ruleset):
        board, moves = case_no_move_found()
        with pytest.raises(NoMoveFoundError):
            ruleset.execute(board, ruleset.settings(), moves)
        board, moves = case_zero_length_snake()
        with pytest.raises(ZeroLengthSnakeError):
            ruleset.execute(board, ruleset.settings(), moves)

    @pytest.mark.parametrize("ruleset", _rulesets(), ids=["class", "builder", "pipeline"])
    def test_hazards_placed(self, ruleset):
        """Standard movement, feeding and decay apply, and the first edge becomes hazard."""
        board, moves, expected = case_move_eat_and_grow()
        ended, next_state = ruleset.execute(board, ruleset.settings(), moves)

        assert ended is False
        assert _is_edge_line(next_state.hazards, 10, 10)
        assert next_state.hazards == royale_hazards(10, 10, 1, ruleset.settings())

        # Hazards grow after damage, so nobody was hurt by them this turn
        next_state.hazards = []
        assert next_state == expected

    @pytest.mark.parametrize("ruleset", _rulesets(), ids=["class", "builder", "pipeline"])
    def test_move_and_collide_mad(self, ruleset):
        board, moves, expected = case_move_and_collide_mad()
        ended, next_state = ruleset.execute(board, ruleset.settings(), moves)
        assert ended is True
        next_state.hazards = []
        assert next_state == expected

    def test_builder_settings_match(self):
        builder = RulesetBuilder().with_params({
            "name": "royale",
            "damagePerTurn": "1",
            "shrinkEveryNTurns": "1",
        }).with_seed(1234)
        assert builder.settings() == _settings(1, seed=1234)

    def test_hazard_damage_applies(self):
        """A head on a hazard cell takes decay plus hazard damage."""
        board = BoardState(width=10, height=10, snakes=[
            Snake(id="one", body=[Point(5, 5), Point(5, 4)], health=100),
            Snake(id="two", body=[Point(2, 2)], health=100),
        ], hazards=[Point(5, 6)])
        settings = _settings(100, hazard_damage_per_turn=14)
        _, next_state = RoyaleRuleset(settings).execute(board, settings, {"one": "up", "two": "up"})
        assert next_state.snakes[0].health == 85
        assert next_state.snakes[1].health == 99

    def test_match_is_reproducible(self):
        """Replaying a whole match with the same seed gives identical boards."""
        def play():
            settings = _settings(2, seed=77, hazard_damage_per_turn=5)
            ruleset = RoyaleRuleset(settings)
            state = BoardState(width=7, height=7, snakes=[
                Snake(id="a", body=[Point(3, 3)], health=100),
            ])
            states = []
            for _ in range(6):
                _, state = ruleset.execute(state, settings, {"a": "up" if state.turn % 2 else "down"})
                states.append(state)
            return states

        assert play() == play()
