"""Feature extraction helpers for Othello."""

from .observation import BOARD_CHANNELS, build_board_tensor, decode_move, encode_move, legal_move_mask

__all__ = [
    "BOARD_CHANNELS",
    "build_board_tensor",
    "decode_move",
    "encode_move",
    "legal_move_mask",
]
