"""Position evaluation and minimax search."""

from .heuristic import DEFAULT_WEIGHTS, HeuristicWeights, evaluate, evaluation_breakdown
from .alphabeta import AlphaBetaSearch, SearchResult, decide

__all__ = [
    "DEFAULT_WEIGHTS",
    "HeuristicWeights",
    "evaluate",
    "evaluation_breakdown",
    "AlphaBetaSearch",
    "SearchResult",
    "decide",
]
