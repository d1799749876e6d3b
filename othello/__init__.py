"""Othello rules engine and adversarial search."""

from . import core, env, evaluation, features, policy, search
from .core import (
    BoardState,
    Cell,
    ConfigurationError,
    GameResult,
    Move,
    MoveResult,
    OutOfBoundsError,
    Side,
    TurnState,
    apply_move,
    legal_moves,
    new_board,
    score,
)
from .env import OthelloEnv
from .evaluation import EvaluationResult, evaluate_policies
from .policy import Difficulty, DifficultyPolicy, DifficultyProfile, choose_move
from .search import AlphaBetaSearch, evaluate

__all__ = [
    "core",
    "env",
    "evaluation",
    "features",
    "policy",
    "search",
    "BoardState",
    "Cell",
    "ConfigurationError",
    "GameResult",
    "Move",
    "MoveResult",
    "OutOfBoundsError",
    "Side",
    "TurnState",
    "apply_move",
    "legal_moves",
    "new_board",
    "score",
    "OthelloEnv",
    "EvaluationResult",
    "evaluate_policies",
    "Difficulty",
    "DifficultyPolicy",
    "DifficultyProfile",
    "choose_move",
    "AlphaBetaSearch",
    "evaluate",
]
