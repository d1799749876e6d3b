"""Core game logic for Othello."""

from .errors import ConfigurationError, IllegalPassError, OthelloError, OutOfBoundsError
from .state import BoardState, CaptureSet, Cell, GameResult, Move, MoveResult, Position, Side, TurnState
from .rules import (
    BOARD_SIZE,
    DIRECTIONS,
    MIN_BOARD_SIZE,
    apply_move,
    capture_set,
    game_result,
    has_legal_move,
    initial_state,
    is_legal,
    is_terminal,
    legal_moves,
    new_board,
    next_side,
    pass_turn,
    play,
    score,
)

__all__ = [
    "BoardState",
    "CaptureSet",
    "Cell",
    "GameResult",
    "Move",
    "MoveResult",
    "Position",
    "Side",
    "TurnState",
    "OthelloError",
    "ConfigurationError",
    "OutOfBoundsError",
    "IllegalPassError",
    "BOARD_SIZE",
    "DIRECTIONS",
    "MIN_BOARD_SIZE",
    "apply_move",
    "capture_set",
    "game_result",
    "has_legal_move",
    "initial_state",
    "is_legal",
    "is_terminal",
    "legal_moves",
    "new_board",
    "next_side",
    "pass_turn",
    "play",
    "score",
]
