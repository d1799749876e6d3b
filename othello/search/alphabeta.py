from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from othello.core import BoardState, Move, Side, apply_move, has_legal_move, legal_moves

from .heuristic import evaluate

logger = logging.getLogger(__name__)

EvaluationFn = Callable[[BoardState, Side], float]
StopFn = Callable[[], bool]


@dataclass
class SearchResult:
    move: Optional[Move]
    value: float
    nodes: int


class AlphaBetaSearch:
    """Depth-bounded minimax over fresh board values.

    Nodes where ``root_side`` is to move maximise ``evaluator(board, root_side)``,
    the others minimise it. A side without a legal move passes without
    consuming depth. With ``use_pruning=False`` the search is plain minimax.
    """

    def __init__(
        self,
        evaluator: EvaluationFn = evaluate,
        *,
        use_pruning: bool = True,
        should_stop: Optional[StopFn] = None,
    ) -> None:
        self.evaluator = evaluator
        self.use_pruning = use_pruning
        self.should_stop = should_stop
        self._nodes = 0

    # ------------------------------------------------------------------
    def run(self, board: BoardState, root_side: Side, depth: int) -> SearchResult:
        self._nodes = 0
        moves = legal_moves(board, root_side)
        if not moves:
            return SearchResult(move=None, value=self.evaluator(board, root_side), nodes=0)

        best_move: Optional[Move] = None
        best_value = -math.inf
        alpha, beta = -math.inf, math.inf

        for move in moves:
            # Root siblings are the only place a stop request is honoured.
            if best_move is not None and self.should_stop is not None and self.should_stop():
                logger.debug("search stopped early after %d nodes", self._nodes)
                break
            child = apply_move(board, move, root_side).board
            value = self._minimax(child, depth - 1, alpha, beta, root_side, root_side.opponent)
            if value > best_value:
                best_value = value
                best_move = move
            if self.use_pruning:
                alpha = max(alpha, best_value)

        logger.debug(
            "search depth=%d side=%s move=%s value=%.2f nodes=%d",
            depth,
            root_side.name,
            best_move,
            best_value,
            self._nodes,
        )
        return SearchResult(move=best_move, value=best_value, nodes=self._nodes)

    def decide(self, board: BoardState, root_side: Side, depth: int) -> Optional[Move]:
        return self.run(board, root_side, depth).move

    # ------------------------------------------------------------------
    def _minimax(
        self,
        board: BoardState,
        depth: int,
        alpha: float,
        beta: float,
        root_side: Side,
        to_move: Side,
    ) -> float:
        self._nodes += 1
        if depth <= 0:
            return self.evaluator(board, root_side)

        moves = legal_moves(board, to_move)
        if not moves:
            if not has_legal_move(board, to_move.opponent):
                return self.evaluator(board, root_side)
            return self._minimax(board, depth, alpha, beta, root_side, to_move.opponent)

        if to_move == root_side:
            value = -math.inf
            for move in moves:
                child = apply_move(board, move, to_move).board
                value = max(value, self._minimax(child, depth - 1, alpha, beta, root_side, to_move.opponent))
                if self.use_pruning:
                    alpha = max(alpha, value)
                    if alpha >= beta:
                        break
            return value

        value = math.inf
        for move in moves:
            child = apply_move(board, move, to_move).board
            value = min(value, self._minimax(child, depth - 1, alpha, beta, root_side, to_move.opponent))
            if self.use_pruning:
                beta = min(beta, value)
                if alpha >= beta:
                    break
        return value


def decide(
    board: BoardState,
    root_side: Side,
    depth: int,
    evaluator: EvaluationFn = evaluate,
) -> Optional[Move]:
    return AlphaBetaSearch(evaluator).decide(board, root_side, depth)
