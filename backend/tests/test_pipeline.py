"""
Tests for the stage registry and Pipeline.
"""

import os
import sys

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain import BoardState, Point, Snake, SnakeMove  # noqa: E402
from rules import (  # noqa: E402
    GLOBAL_REGISTRY,
    EmptyPipelineError,
    Pipeline,
    Settings,
    StageNotFoundError,
    StageRegisteredError,
    StageRegistry,
    STANDARD_STAGES,
    ROYALE_STAGES,
    SOLO_STAGES,
)
from rules.pipeline import normalize_moves  # noqa: E402


def _board():
    return BoardState(
        width=5,
        height=5,
        snakes=[Snake(id="a", body=[Point(2, 2)], health=100)],
    )


def _recording_registry(calls):
    registry = StageRegistry()

    def make(name, halt=False):
        def stage(board, settings, moves):
            calls.append(name)
            return halt
        return stage

    registry.register("first", make("first"))
    registry.register("second", make("second"))
    registry.register("halt", make("halt", halt=True), game_over=True)
    registry.register("never", make("never"))
    return registry


class TestStageRegistry:
    """Tests for StageRegistry."""

    def test_duplicate_registration_fails(self):
        """Registering the same stage name twice is an error."""
        registry = StageRegistry()
        registry.register("x", lambda b, s, m: False)
        with pytest.raises(StageRegisteredError):
            registry.register("x", lambda b, s, m: False)

    def test_global_registry_has_every_variant_stage(self):
        """All stages used by the built-in variants are registered on import."""
        for name in STANDARD_STAGES + ROYALE_STAGES + SOLO_STAGES:
            assert name in GLOBAL_REGISTRY


class TestPipeline:
    """Tests for Pipeline assembly and execution."""

    def test_empty_pipeline_errors_on_execute(self):
        """A pipeline with no stages records an error and raises it when run."""
        pipeline = Pipeline()
        assert isinstance(pipeline.error, EmptyPipelineError)
        with pytest.raises(EmptyPipelineError):
            pipeline.execute(_board(), Settings(), {"a": "up"})

    def test_unknown_stage_errors_on_execute(self):
        """An unregistered stage name records an error and raises it when run."""
        pipeline = Pipeline("movement.standard", "does.not.exist")
        assert isinstance(pipeline.error, StageNotFoundError)
        with pytest.raises(StageNotFoundError):
            pipeline.execute(_board(), Settings(), {"a": "up"})

    def test_unknown_stage_error_lists_registered_stages(self):
        pipeline = Pipeline("does.not.exist")
        message = str(pipeline.error)
        assert "does.not.exist" in message
        assert "movement.standard" in message
        assert "spawn_hazards.shrink_map" in message

    def test_stages_run_in_assembly_order(self):
        """Stages run exactly in the order they were given."""
        calls = []
        pipeline = Pipeline("second", "first", "second", registry=_recording_registry(calls))
        ended, _ = pipeline.execute(_board(), Settings(), {})
        assert ended is False
        assert calls == ["second", "first", "second"]

    def test_halt_stops_later_stages(self):
        """A stage returning True ends the game and skips the rest."""
        calls = []
        pipeline = Pipeline("first", "halt", "never", registry=_recording_registry(calls))
        ended, next_state = pipeline.execute(_board(), Settings(), {})
        assert ended is True
        assert calls == ["first", "halt"]
        assert next_state.turn == 1

    def test_stage_error_aborts_turn(self):
        """An error from a stage propagates and later stages don't run."""
        calls = []
        registry = _recording_registry(calls)

        def broken(board, settings, moves):
            board.snakes[0].health = 0
            raise RuntimeError("boom")

        registry.register("broken", broken)
        board = _board()
        with pytest.raises(RuntimeError):
            Pipeline("first", "broken", "second", registry=registry).execute(board, Settings(), {})
        assert calls == ["first"]
        # the caller's board was never touched
        assert board.snakes[0].health == 100

    def test_turn_increments_and_input_untouched(self):
        """execute() returns a new board one turn later and leaves the input alone."""
        board = _board()
        before = board.clone()
        ended, next_state = Pipeline(*STANDARD_STAGES).execute(board, Settings(), {"a": "up"})
        assert next_state is not board
        assert next_state.turn == board.turn + 1
        assert next_state.snakes[0].head == Point(2, 3)
        assert board == before

    def test_is_game_over_only_runs_game_over_stages(self):
        """is_game_over() evaluates just the game-over stages."""
        calls = []
        pipeline = Pipeline("first", "halt", "never", registry=_recording_registry(calls))
        assert pipeline.is_game_over(_board(), Settings()) is True
        assert calls == ["halt"]

    def test_pipeline_is_reusable(self):
        """The same pipeline can run many turns; it keeps no state."""
        pipeline = Pipeline(*STANDARD_STAGES)
        _, first = pipeline.execute(_board(), Settings(), {"a": "up"})
        _, again = pipeline.execute(_board(), Settings(), {"a": "up"})
        assert first == again


class TestNormalizeMoves:
    """Tests for move normalization."""

    def test_none_is_empty(self):
        assert normalize_moves(None) == {}

    def test_mapping_is_copied(self):
        moves = {"a": "up"}
        result = normalize_moves(moves)
        assert result == moves
        assert result is not moves

    def test_snake_moves_first_wins(self):
        """For a sequence of SnakeMove, the first move listed for a snake is used."""
        moves = [SnakeMove("a", "up"), SnakeMove("b", "left"), SnakeMove("a", "down")]
        assert normalize_moves(moves) == {"a": "up", "b": "left"}
