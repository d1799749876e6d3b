"""Difficulty tiers and the move-selection strategies behind them.

Each tier is a :class:`DifficultyProfile`: a search depth, the probability of
taking the tier's "weak" branch, and a :class:`Strategy` tag describing what
the weak and strong branches do. All randomness comes from the injected
``numpy.random.Generator`` so a seeded policy replays the same decisions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from numbers import Real
from typing import Callable, Dict, Optional, Sequence, Union

import numpy as np

from othello.core import BoardState, ConfigurationError, Move, Side, apply_move, capture_set, legal_moves
from othello.search import AlphaBetaSearch, evaluate

logger = logging.getLogger(__name__)

EvaluationFn = Callable[[BoardState, Side], float]


class Difficulty(Enum):
    FACILE = "Facile"
    MOYEN = "Moyen"
    DIFFICILE = "Difficile"
    EXPERT = "Expert"

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        if isinstance(value, Difficulty):
            return value
        for member in cls:
            if str(value).strip().lower() in (member.value.lower(), member.name.lower()):
                return member
        raise ConfigurationError(f"Unknown difficulty {value!r}.")


class Strategy(Enum):
    RANDOM_OR_GREEDY = "random_or_greedy"
    RANDOM_GREEDY_OR_SEARCH = "random_greedy_or_search"
    TOP_K_OR_SEARCH = "top_k_or_search"
    SEARCH = "search"


@dataclass(frozen=True)
class DifficultyProfile:
    search_depth: int
    random_probability: float
    strategy: Strategy
    greedy_probability: float = 0.8
    top_k: int = 3

    def __post_init__(self) -> None:
        if isinstance(self.search_depth, bool) or not isinstance(self.search_depth, int) or self.search_depth < 1:
            raise ConfigurationError(f"search_depth must be a positive integer, got {self.search_depth!r}.")
        for name in ("random_probability", "greedy_probability"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real) or not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be a number in [0, 1], got {value!r}.")
        if isinstance(self.top_k, bool) or not isinstance(self.top_k, int) or self.top_k < 1:
            raise ConfigurationError(f"top_k must be a positive integer, got {self.top_k!r}.")


DIFFICULTY_PROFILES: Dict[Difficulty, DifficultyProfile] = {
    Difficulty.FACILE: DifficultyProfile(1, 0.90, Strategy.RANDOM_OR_GREEDY),
    Difficulty.MOYEN: DifficultyProfile(2, 0.30, Strategy.RANDOM_GREEDY_OR_SEARCH),
    Difficulty.DIFFICILE: DifficultyProfile(3, 0.08, Strategy.TOP_K_OR_SEARCH),
    Difficulty.EXPERT: DifficultyProfile(5, 0.0, Strategy.SEARCH),
}


def random_move(moves: Sequence[Move], rng: np.random.Generator) -> Move:
    return moves[int(rng.integers(len(moves)))]


def greedy_move(board: BoardState, moves: Sequence[Move], side: Side) -> Move:
    """Move flipping the most discs right now; the first one wins ties."""
    best = moves[0]
    best_flips = -1
    for move in moves:
        flips = len(capture_set(board, move, side))
        if flips > best_flips:
            best_flips = flips
            best = move
    return best


def top_k_move(
    board: BoardState,
    moves: Sequence[Move],
    side: Side,
    k: int,
    rng: np.random.Generator,
    evaluator: EvaluationFn = evaluate,
) -> Move:
    # One-ply static ranking, independent of the profile's search depth.
    scored = [(evaluator(apply_move(board, move, side).board, side), move) for move in moves]
    scored.sort(key=lambda entry: entry[0], reverse=True)
    top = [move for _, move in scored[: max(1, min(k, len(scored)))]]
    return random_move(top, rng)


class DifficultyPolicy:
    def __init__(
        self,
        profile: DifficultyProfile,
        rng: Optional[np.random.Generator] = None,
        *,
        evaluator: EvaluationFn = evaluate,
    ) -> None:
        self.profile = profile
        self.rng = rng or np.random.default_rng()
        self.evaluator = evaluator
        self.search = AlphaBetaSearch(evaluator)

    @classmethod
    def for_difficulty(
        cls,
        difficulty: Union[str, Difficulty],
        rng: Optional[np.random.Generator] = None,
    ) -> "DifficultyPolicy":
        return cls(DIFFICULTY_PROFILES[Difficulty.parse(difficulty)], rng)

    def select(self, board: BoardState, side: Side) -> Optional[Move]:
        moves = legal_moves(board, side)
        if not moves:
            return None

        profile = self.profile
        strategy = profile.strategy
        if strategy is Strategy.SEARCH:
            return self._search(board, side)

        draw = float(self.rng.random())
        weak = draw < profile.random_probability

        if strategy is Strategy.RANDOM_OR_GREEDY:
            if weak:
                return self._log("random", random_move(moves, self.rng))
            return self._log("greedy", greedy_move(board, moves, side))

        if strategy is Strategy.RANDOM_GREEDY_OR_SEARCH:
            if weak:
                return self._log("random", random_move(moves, self.rng))
            if float(self.rng.random()) < profile.greedy_probability:
                return self._log("greedy", greedy_move(board, moves, side))
            return self._search(board, side)

        if weak:
            move = top_k_move(board, moves, side, profile.top_k, self.rng, self.evaluator)
            return self._log("top_k", move)
        return self._search(board, side)

    def _search(self, board: BoardState, side: Side) -> Optional[Move]:
        return self._log("search", self.search.decide(board, side, self.profile.search_depth))

    def _log(self, strategy: str, move: Optional[Move]) -> Optional[Move]:
        logger.debug("difficulty depth=%d strategy=%s move=%s", self.profile.search_depth, strategy, move)
        return move


def choose_move(
    board: BoardState,
    side: Side,
    difficulty: Union[str, Difficulty],
    rng: Optional[np.random.Generator] = None,
) -> Optional[Move]:
    return DifficultyPolicy.for_difficulty(difficulty, rng).select(board, side)
