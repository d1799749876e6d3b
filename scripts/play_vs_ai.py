#!/usr/bin/env python3
"""Play Othello against an AI difficulty tier via the console, with optional logging & replay."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

import numpy as np

from othello.config import load_config
from othello.core import (
    BoardState,
    GameResult,
    Move,
    Side,
    TurnState,
    game_result,
    initial_state,
    legal_moves,
    next_side,
    play,
    score,
)
from othello.policy import Difficulty, DifficultyPolicy


def format_board(board: BoardState) -> str:
    header = "  " + "".join(str(c) for c in range(board.size))
    rows = [f"{r} {line}" for r, line in enumerate(board.render().splitlines())]
    return "\n".join([header, *rows])


def prompt_human_move(board: BoardState, side: Side) -> Move:
    moves = legal_moves(board, side)
    print("Legal moves: " + ", ".join(f"{m.row},{m.col}" for m in moves))
    while True:
        raw = input("Your move as row,col (q to quit): ").strip()
        if raw.lower() in {"q", "quit", "exit"}:
            print("Quitting.")
            sys.exit(0)
        try:
            row, col = (int(part) for part in raw.split(","))
        except ValueError:
            print("Enter two numbers separated by a comma.")
            continue
        move = Move(row, col)
        if move in moves:
            return move
        print("Illegal move, try again.")


def save_log(log: Dict, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(log, indent=2))
    print(f"Game log saved to {path}.")


def _advance(state: TurnState, move: Move, mover: Side) -> TurnState:
    result, state = play(state, move)
    if not result.success:
        raise ValueError(f"Illegal move {move.as_tuple()} for {mover.name}.")
    following = next_side(state.board, mover)
    return TurnState(board=state.board, side_to_move=following or mover.opponent)


def replay_logged_game(log_path: Path, *, verbose: bool = True) -> Dict[str, object]:
    data = json.loads(Path(log_path).read_text())
    moves = data.get("moves", [])
    board_size = data.get("metadata", {}).get("board_size", 8)
    state = initial_state(board_size)
    if verbose:
        print("Replaying game.")
        print(format_board(state.board))
    for entry in moves:
        side = Side[entry["side"]]
        if side != state.side_to_move:
            raise ValueError(f"Move {entry['move_index']} is for {side.name} but {state.side_to_move.name} is to move.")
        move = Move(*entry["move"])
        state = _advance(state, move, side)
        if verbose:
            print(f"{entry.get('actor', 'unknown')} ({side.name}) plays {move.row},{move.col}")
            print(format_board(state.board))
    result = game_result(state.board)
    black, white = score(state.board)
    summary = {
        "result": result.value,
        "moves": len(moves),
        "score": {"black": black, "white": white},
        "board": state.board.cells.tolist(),
    }
    if verbose:
        print("Replay finished.")
        print(f"Result: {summary['result']}")
    return summary


def play_interactive(args: argparse.Namespace) -> None:
    cfg = load_config(args.config)
    difficulty = Difficulty.parse(args.difficulty) if args.difficulty else cfg.difficulty
    seed = args.seed if args.seed is not None else cfg.seed
    policy_ai: DifficultyPolicy = cfg.policy_for(difficulty, np.random.default_rng(seed))
    human_side = Side[args.human_side]
    print(f"Playing against {difficulty.value} (depth {policy_ai.profile.search_depth}).")

    log_records: List[Dict] = []
    state = initial_state(cfg.board_size)
    move_index = 0
    while True:
        side = state.side_to_move
        print("\nBoard:")
        print(format_board(state.board))
        black, white = score(state.board)
        print(f"Score: BLACK {black} - WHITE {white}. {side.name} to move.")

        if side == human_side:
            move = prompt_human_move(state.board, side)
            actor = "human"
        else:
            move = policy_ai.select(state.board, side)
            actor = "ai"
            print(f"AI ({side.name}) plays {move.row},{move.col}")

        log_records.append({"move_index": move_index, "actor": actor, "side": side.name, "move": list(move.as_tuple())})
        move_index += 1

        state = _advance(state, move, side)
        if game_result(state.board) != GameResult.ONGOING:
            break
        if state.side_to_move == side:
            print(f"{side.opponent.name} has no legal move and passes.")

    print("\nFinal board:")
    print(format_board(state.board))
    result = game_result(state.board)
    black, white = score(state.board)
    if result == GameResult.DRAW:
        print(f"Draw, {black}-{white}.")
    else:
        winner = "BLACK" if result == GameResult.BLACK_WIN else "WHITE"
        print(f"{winner} wins, {black}-{white}.")

    if args.log_file:
        metadata = {
            "human_side": human_side.name,
            "difficulty": difficulty.value,
            "board_size": cfg.board_size,
            "seed": seed,
            "result": result.value,
        }
        save_log({"metadata": metadata, "moves": log_records}, Path(args.log_file))


def main() -> None:
    parser = argparse.ArgumentParser(description="Play Othello in the console against AI.")
    parser.add_argument("--config", type=str, default="configs/othello.yaml")
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty])
    parser.add_argument("--human-side", choices=["BLACK", "WHITE"], default="BLACK")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-file", type=str)
    parser.add_argument("--replay-log", type=str, help="Replay a logged game and exit")
    parser.add_argument("--replay-quiet", action="store_true")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.replay_log:
        replay_logged_game(Path(args.replay_log), verbose=not args.replay_quiet)
        return

    play_interactive(args)


if __name__ == "__main__":
    main()
