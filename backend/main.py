"""
Command-line match driver.

Runs a match turn by turn from a JSON file of moves, either from a saved
board or from a freshly placed default board, and optionally writes the
turn-by-turn history.

    python main.py --game-type royale --snakes one two --moves moves.json --seed 42
"""

import argparse
import json
import logging
import os
import random
import time
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from domain import BoardState
from rules import Ruleset, RulesetBuilder, create_default_board_state, params_from_env
from rules.builder import PARAM_GAME_TYPE

load_dotenv()

logger = logging.getLogger(__name__)


class Match:
    """
    Manages:
      - the ruleset and its settings
      - the current board
      - history for replay
    """

    def __init__(self, ruleset: Ruleset, initial_state: BoardState):
        self.ruleset = ruleset
        self.state = initial_state
        self.history: List[BoardState] = [initial_state]
        self.move_history: List[Dict[str, str]] = []
        self.game_over = False

    def run_turn(self, moves: Dict[str, str]) -> bool:
        """Apply one turn of moves. Returns True once the game is over."""
        if self.game_over:
            logger.info("Game is already over. No more turns.")
            return True

        self.game_over, self.state = self.ruleset.execute(self.state, self.ruleset.settings(), moves)
        self.move_history.append(dict(moves))
        self.history.append(self.state)

        alive = [snake.id for snake in self.state.living_snakes()]
        logger.info(f"Finished turn {self.state.turn}. Alive: {alive}")
        logger.debug("\n" + self.state.print_board())
        return self.game_over

    def serialize_history(self) -> List[Dict[str, Any]]:
        output = []
        for i, state in enumerate(self.history):
            state_dict = state.to_dict()
            # moves that produced this state; the initial board has none
            state_dict["moves"] = self.move_history[i - 1] if i > 0 else {}
            output.append(state_dict)
        return output

    def summary(self) -> Dict[str, Any]:
        return {
            "ruleset": self.ruleset.name(),
            "turns": self.state.turn,
            "game_over": self.game_over,
            "alive": [snake.id for snake in self.state.living_snakes()],
            "eliminations": {
                snake.id: {
                    "cause": snake.eliminated_cause,
                    "by": snake.eliminated_by,
                    "turn": snake.eliminated_on_turn,
                }
                for snake in self.state.snakes
                if snake.is_eliminated
            },
        }

    def save_history_to_json(self, filename: str) -> None:
        data = {
            "summary": self.summary(),
            "turns": self.serialize_history(),
        }
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(filename, "w") as f:
            json.dump(data, f, indent=2)


def load_moves(path: str) -> List[Dict[str, str]]:
    """Moves file: a JSON list with one {snake_id: move} object per turn."""
    with open(path) as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a JSON list of per-turn move objects")
    return [{str(k): str(v) for k, v in turn.items()} for turn in data]


def load_board(path: str) -> BoardState:
    with open(path) as f:
        return BoardState.from_dict(json.load(f))


def run_match(ruleset: Ruleset, initial_state: BoardState, turns: List[Dict[str, str]]) -> Match:
    """Play turns until the game ends or the moves run out."""
    match = Match(ruleset, initial_state)
    for moves in turns:
        if match.run_turn(moves):
            break
    return match


def parse_params(pairs: Optional[List[str]]) -> Dict[str, str]:
    params: Dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Parameter '{pair}' must look like key=value")
        params[key.strip()] = value.strip()
    return params


def main(argv: Optional[List[str]] = None) -> Dict[str, Any]:
    parser = argparse.ArgumentParser(description="Run a snake match through the rules engine.")
    parser.add_argument("--game-type", type=str, default=None,
                        help="standard, royale or solo (default: RULES_GAME_TYPE or standard)")
    parser.add_argument("--param", action="append", default=[],
                        help="Ruleset parameter as key=value, e.g. shrinkEveryNTurns=10 (repeatable)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Match seed (default: RULES_SEED or the current time)")
    parser.add_argument("--state", type=str, default=None,
                        help="JSON board to start from instead of a default board")
    parser.add_argument("--width", type=int, default=11, help="Board width for a default board")
    parser.add_argument("--height", type=int, default=11, help="Board height for a default board")
    parser.add_argument("--snakes", type=str, nargs="+", default=["one", "two"],
                        help="Snake ids for a default board")
    parser.add_argument("--moves", type=str, required=True,
                        help="JSON list of per-turn {snake_id: move} objects")
    parser.add_argument("--output", type=str, default=None, help="Write the match history here")
    parser.add_argument("--log-level", type=str, default=os.getenv("RULES_LOG_LEVEL", "INFO"))

    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    seed = args.seed
    if seed is None:
        seed = int(os.getenv("RULES_SEED") or time.time_ns())

    params = params_from_env()
    params.update(parse_params(args.param))
    if args.game_type:
        params[PARAM_GAME_TYPE] = args.game_type

    ruleset = RulesetBuilder().with_params(params).with_seed(seed).ruleset()
    logger.info(f"Ruleset {ruleset.name()} with {ruleset.settings()}")

    if args.state:
        initial_state = load_board(args.state)
    else:
        initial_state = create_default_board_state(random.Random(seed), args.width, args.height, args.snakes)

    match = run_match(ruleset, initial_state, load_moves(args.moves))

    if args.output:
        match.save_history_to_json(args.output)
        logger.info(f"Match history written to {args.output}")

    result = match.summary()
    print(match.state.print_board())
    print(json.dumps(result, indent=2))
    return result


if __name__ == "__main__":
    main()
