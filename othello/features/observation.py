from __future__ import annotations

import numpy as np

from othello.core import BoardState, Move, Side, legal_moves

BOARD_CHANNELS = 2  # discs of the side to move, discs of its opponent


def build_board_tensor(board: BoardState, side: Side) -> np.ndarray:
    """Return a float32 tensor of shape (2, N, N), channel-first, relative to ``side``."""
    tensor = np.zeros((BOARD_CHANNELS, board.size, board.size), dtype=np.float32)
    tensor[0] = board.cells == int(side)
    tensor[1] = board.cells == int(side.opponent)
    return tensor


def legal_move_mask(board: BoardState, side: Side) -> np.ndarray:
    mask = np.zeros(board.size * board.size, dtype=np.int8)
    for move in legal_moves(board, side):
        mask[encode_move(move.row, move.col, board.size)] = 1
    return mask


def encode_move(row: int, col: int, size: int) -> int:
    return row * size + col


def decode_move(index: int, size: int) -> Move:
    row, col = divmod(int(index), size)
    return Move(row, col)
