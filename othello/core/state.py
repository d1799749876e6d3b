from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from functools import cached_property
from typing import Iterable, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .errors import ConfigurationError, OutOfBoundsError

BoardArray = NDArray[np.int8]

MIN_BOARD_SIZE = 4


class Cell(IntEnum):
    EMPTY = 0
    BLACK = 1
    WHITE = 2


class Side(IntEnum):
    """A player. BLACK moves first and starts on the (m-1, m-1)/(m, m) diagonal."""

    BLACK = 1
    WHITE = 2

    @property
    def opponent(self) -> "Side":
        return Side.WHITE if self is Side.BLACK else Side.BLACK

    @property
    def cell(self) -> Cell:
        return Cell(int(self))


class GameResult(Enum):
    ONGOING = "ongoing"
    BLACK_WIN = "black_win"
    WHITE_WIN = "white_win"
    DRAW = "draw"


@dataclass(frozen=True, order=True)
class Move:
    row: int
    col: int

    def as_tuple(self) -> Tuple[int, int]:
        return (self.row, self.col)


CaptureSet = Tuple[Move, ...]


@dataclass(frozen=True, eq=False)
class BoardState:
    cells: BoardArray  # shape (N, N), dtype=np.int8, values Cell

    def __post_init__(self) -> None:
        raw = np.asarray(self.cells)
        if raw.ndim != 2 or raw.shape[0] != raw.shape[1]:
            raise ConfigurationError(f"Board must be a square 2-D array, got shape {raw.shape}.")
        size = raw.shape[0]
        if size < MIN_BOARD_SIZE or size % 2 != 0:
            raise ConfigurationError(f"Board size must be even and at least {MIN_BOARD_SIZE}, got {size}.")
        if not np.isin(raw, [int(cell) for cell in Cell]).all():
            raise ConfigurationError("Board cells must hold EMPTY, BLACK or WHITE values only.")
        cells = np.array(raw, dtype=np.int8, copy=True)
        cells.setflags(write=False)
        object.__setattr__(self, "cells", cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "BoardState":
        return cls(np.asarray(rows, dtype=np.int8))

    @property
    def size(self) -> int:
        return int(self.cells.shape[0])

    @cached_property
    def rows(self) -> Tuple[Tuple[int, ...], ...]:
        # Plain-int view; scanning rays over Python tuples is much faster than numpy scalars.
        return tuple(tuple(row) for row in self.cells.tolist())

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def check_bounds(self, row: int, col: int) -> None:
        if not self.in_bounds(row, col):
            raise OutOfBoundsError(f"({row}, {col}) is outside a {self.size}x{self.size} board.")

    def cell(self, row: int, col: int) -> Cell:
        self.check_bounds(row, col)
        return Cell(self.rows[row][col])

    def count(self, cell: Cell) -> int:
        return int(np.count_nonzero(self.cells == int(cell)))

    @property
    def empty_count(self) -> int:
        return self.count(Cell.EMPTY)

    def with_cells(self, positions: Iterable[Tuple[int, int]], cell: Cell) -> "BoardState":
        board = self.cells.copy()
        for row, col in positions:
            self.check_bounds(row, col)
            board[row, col] = int(cell)
        return BoardState(board)

    def occupied_positions(self, cell: Cell) -> List[Tuple[int, int]]:
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == int(cell))]

    def render(self) -> str:
        symbols = {0: ".", 1: "X", 2: "O"}
        return "\n".join("".join(symbols[value] for value in row) for row in self.rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardState):
            return NotImplemented
        return self.cells.shape == other.cells.shape and bool(np.array_equal(self.cells, other.cells))

    def __hash__(self) -> int:
        return hash((self.cells.shape, self.cells.tobytes()))

    def __repr__(self) -> str:
        return f"BoardState(size={self.size})\n{self.render()}"


@dataclass(frozen=True)
class MoveResult:
    success: bool
    board: BoardState
    captured: CaptureSet = field(default_factory=tuple)


@dataclass(frozen=True)
class TurnState:
    board: BoardState
    side_to_move: Side

    def __repr__(self) -> str:
        return f"TurnState(side_to_move={self.side_to_move.name})\n{self.board.render()}"


# Convenient tuple alias used across modules
Position = Tuple[int, int]
