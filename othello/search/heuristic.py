"""Static position evaluation.

The score combines mobility, edge and corner ownership, X-square exposure and
material, always from an explicit ``perspective``. Callers must pass the side
they are scoring for; nothing here assumes a relation between the two
perspectives.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Tuple

import numpy as np

from othello.core import BoardState, Cell, Side, legal_moves


@dataclass(frozen=True)
class HeuristicWeights:
    mobility: float = 10.0
    edge: float = 5.0
    corner: float = 50.0 / 30.0
    material: float = 2.0
    x_square: float = 1.0
    corner_value: int = 30
    edge_value: int = 4
    x_square_value: int = 8
    endgame_empties: int = 12
    endgame_factor: float = 2.0


DEFAULT_WEIGHTS = HeuristicWeights()


@lru_cache(maxsize=None)
def _region_masks(size: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    corners = np.zeros((size, size), dtype=bool)
    for r, c in ((0, 0), (0, size - 1), (size - 1, 0), (size - 1, size - 1)):
        corners[r, c] = True

    edges = np.zeros((size, size), dtype=bool)
    edges[0, :] = edges[-1, :] = edges[:, 0] = edges[:, -1] = True
    edges &= ~corners

    x_squares = np.zeros((size, size), dtype=bool)
    for r, c in ((1, 1), (1, size - 2), (size - 2, 1), (size - 2, size - 2)):
        x_squares[r, c] = True

    for mask in (corners, edges, x_squares):
        mask.setflags(write=False)
    return corners, edges, x_squares


def _owned_difference(cells: np.ndarray, mask: np.ndarray, own: int, opp: int) -> int:
    region = cells[mask]
    return int(np.count_nonzero(region == own)) - int(np.count_nonzero(region == opp))


def evaluation_breakdown(
    board: BoardState,
    perspective: Side,
    weights: HeuristicWeights = DEFAULT_WEIGHTS,
) -> Dict[str, float]:
    opp = perspective.opponent
    own_value, opp_value = int(perspective), int(opp)
    cells = board.cells
    corners, edges, x_squares = _region_masks(board.size)

    own_count = board.count(perspective.cell)
    opp_count = board.count(opp.cell)
    empties = board.count(Cell.EMPTY)

    piece_diff = own_count - opp_count
    mobility = len(legal_moves(board, perspective)) - len(legal_moves(board, opp))
    corner_score = weights.corner_value * _owned_difference(cells, corners, own_value, opp_value)
    edge_score = weights.edge_value * _owned_difference(cells, edges, own_value, opp_value)
    # Negated here and subtracted below, so an owned X-square raises the total.
    x_penalty = -weights.x_square_value * _owned_difference(cells, x_squares, own_value, opp_value)
    endgame_factor = weights.endgame_factor if empties <= weights.endgame_empties else 1.0

    total = (
        weights.mobility * mobility
        + weights.edge * edge_score
        + weights.corner * corner_score
        + weights.material * endgame_factor * piece_diff
        - weights.x_square * x_penalty
    )
    return {
        "piece_diff": float(piece_diff),
        "mobility": float(mobility),
        "corner_score": float(corner_score),
        "edge_score": float(edge_score),
        "x_penalty": float(x_penalty),
        "endgame_factor": float(endgame_factor),
        "empties": float(empties),
        "total": float(total),
    }


def evaluate(board: BoardState, perspective: Side, weights: HeuristicWeights = DEFAULT_WEIGHTS) -> float:
    return evaluation_breakdown(board, perspective, weights)["total"]
