from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from tqdm.auto import trange

from othello.core import (
    BOARD_SIZE,
    BoardState,
    GameResult,
    Move,
    Side,
    apply_move,
    game_result,
    initial_state,
    next_side,
    score,
)

logger = logging.getLogger(__name__)


class MoveSelector(Protocol):
    def select(self, board: BoardState, side: Side) -> Optional[Move]:
        ...


@dataclass
class EvaluationResult:
    games_played: int
    black_wins: int
    white_wins: int
    draws: int
    average_length: float
    average_margin: float  # black discs minus white discs at the end

    def winrate_black(self) -> float:
        return self.black_wins / max(1, self.games_played)

    def winrate_white(self) -> float:
        return self.white_wins / max(1, self.games_played)


def play_game(black: MoveSelector, white: MoveSelector, *, board_size: int = BOARD_SIZE):
    """Play one full game and return ``(final_board, result, plies)``."""
    state = initial_state(board_size)
    board, side = state.board, state.side_to_move
    players = {Side.BLACK: black, Side.WHITE: white}
    plies = 0

    while True:
        move = players[side].select(board, side)
        if move is None:
            raise RuntimeError(f"{side.name} returned no move on its turn.")
        result = apply_move(board, move, side)
        if not result.success:
            raise RuntimeError(f"{side.name} selected illegal move {move}.")
        board = result.board
        plies += 1
        following = next_side(board, side)
        if following is None:
            break
        side = following

    return board, game_result(board), plies


def evaluate_policies(
    policy_black: MoveSelector,
    policy_white: MoveSelector,
    *,
    episodes: int,
    board_size: int = BOARD_SIZE,
    progress: bool = False,
) -> EvaluationResult:
    black_wins = 0
    white_wins = 0
    draws = 0
    total_ply = 0
    total_margin = 0

    for episode in trange(episodes, desc="Games", disable=not progress):
        board, result, plies = play_game(policy_black, policy_white, board_size=board_size)
        total_ply += plies
        black, white = score(board)
        total_margin += black - white
        if result == GameResult.BLACK_WIN:
            black_wins += 1
        elif result == GameResult.WHITE_WIN:
            white_wins += 1
        else:
            draws += 1
        logger.debug("episode %d: %s (%d-%d) in %d plies", episode, result.value, black, white, plies)

    return EvaluationResult(
        games_played=episodes,
        black_wins=black_wins,
        white_wins=white_wins,
        draws=draws,
        average_length=total_ply / max(1, episodes),
        average_margin=total_margin / max(1, episodes),
    )
