from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .errors import ConfigurationError, IllegalPassError
from .state import (
    MIN_BOARD_SIZE,
    BoardState,
    CaptureSet,
    Cell,
    GameResult,
    Move,
    MoveResult,
    Side,
    TurnState,
)

BOARD_SIZE = 8
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def new_board(size: int = BOARD_SIZE) -> BoardState:
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise ConfigurationError(f"Board size must be an integer, got {size!r}.")
    if size < MIN_BOARD_SIZE or size % 2 != 0:
        raise ConfigurationError(f"Board size must be even and at least {MIN_BOARD_SIZE}, got {size}.")

    board = np.zeros((size, size), dtype=np.int8)
    mid = size // 2
    board[mid - 1, mid - 1] = Cell.BLACK
    board[mid, mid] = Cell.BLACK
    board[mid - 1, mid] = Cell.WHITE
    board[mid, mid - 1] = Cell.WHITE
    return BoardState(board)


def initial_state(size: int = BOARD_SIZE) -> TurnState:
    return TurnState(board=new_board(size), side_to_move=Side.BLACK)


def capture_set(board: BoardState, move: Move, side: Side) -> CaptureSet:
    board.check_bounds(move.row, move.col)
    rows = board.rows
    if rows[move.row][move.col] != Cell.EMPTY:
        return ()
    return _collect_captures(rows, board.size, move.row, move.col, int(side))


def is_legal(board: BoardState, move: Move, side: Side) -> bool:
    return bool(capture_set(board, move, side))


def legal_moves(board: BoardState, side: Side) -> List[Move]:
    """All legal placements for ``side`` in row-major order."""
    rows = board.rows
    size = board.size
    player = int(side)
    legal: List[Move] = []
    for row in range(size):
        for col in range(size):
            if rows[row][col] != Cell.EMPTY:
                continue
            if _has_capture(rows, size, row, col, player):
                legal.append(Move(row, col))
    return legal


def has_legal_move(board: BoardState, side: Side) -> bool:
    rows = board.rows
    size = board.size
    player = int(side)
    for row in range(size):
        for col in range(size):
            if rows[row][col] == Cell.EMPTY and _has_capture(rows, size, row, col, player):
                return True
    return False


def apply_move(board: BoardState, move: Move, side: Side) -> MoveResult:
    captured = capture_set(board, move, side)
    if not captured:
        return MoveResult(success=False, board=board, captured=())

    next_board = board.cells.copy()
    for flipped in captured:
        next_board[flipped.row, flipped.col] = int(side)
    next_board[move.row, move.col] = int(side)
    return MoveResult(success=True, board=BoardState(next_board), captured=captured)


def score(board: BoardState) -> Tuple[int, int]:
    return board.count(Cell.BLACK), board.count(Cell.WHITE)


def is_terminal(board: BoardState) -> bool:
    return not has_legal_move(board, Side.BLACK) and not has_legal_move(board, Side.WHITE)


def game_result(board: BoardState) -> GameResult:
    if not is_terminal(board):
        return GameResult.ONGOING
    black, white = score(board)
    if black > white:
        return GameResult.BLACK_WIN
    if white > black:
        return GameResult.WHITE_WIN
    return GameResult.DRAW


def next_side(board: BoardState, just_moved: Side) -> Optional[Side]:
    """Side to move after ``just_moved`` played, or None when the game is over."""
    if has_legal_move(board, just_moved.opponent):
        return just_moved.opponent
    if has_legal_move(board, just_moved):
        return just_moved
    return None


def play(state: TurnState, move: Move) -> Tuple[MoveResult, TurnState]:
    result = apply_move(state.board, move, state.side_to_move)
    if not result.success:
        return result, state
    return result, TurnState(board=result.board, side_to_move=state.side_to_move.opponent)


def pass_turn(state: TurnState) -> TurnState:
    if has_legal_move(state.board, state.side_to_move):
        raise IllegalPassError(f"{state.side_to_move.name} has a legal move and cannot pass.")
    return TurnState(board=state.board, side_to_move=state.side_to_move.opponent)


def _collect_captures(
    rows: Tuple[Tuple[int, ...], ...],
    size: int,
    row: int,
    col: int,
    player: int,
) -> CaptureSet:
    captures: List[Move] = []
    for dr, dc in DIRECTIONS:
        run: List[Move] = []
        r, c = row + dr, col + dc
        while 0 <= r < size and 0 <= c < size:
            occupant = rows[r][c]
            if occupant == Cell.EMPTY:
                break
            if occupant == player:
                captures.extend(run)
                break
            run.append(Move(r, c))
            r += dr
            c += dc
        # running off the board leaves the run uncaptured
    return tuple(captures)


def _has_capture(rows: Tuple[Tuple[int, ...], ...], size: int, row: int, col: int, player: int) -> bool:
    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        seen_opponent = False
        while 0 <= r < size and 0 <= c < size:
            occupant = rows[r][c]
            if occupant == Cell.EMPTY:
                break
            if occupant == player:
                if seen_opponent:
                    return True
                break
            seen_opponent = True
            r += dr
            c += dc
    return False
