import numpy as np
import pytest

from othello.core import (
    BoardState,
    Cell,
    ConfigurationError,
    GameResult,
    IllegalPassError,
    Move,
    OutOfBoundsError,
    Side,
    TurnState,
    apply_move,
    capture_set,
    game_result,
    initial_state,
    is_terminal,
    legal_moves,
    new_board,
    next_side,
    pass_turn,
    play,
    score,
)


def empty_board(size: int = 8) -> np.ndarray:
    return np.zeros((size, size), dtype=np.int8)


def black_stuck_board() -> BoardState:
    # BLACK cannot flank the corner disc; WHITE can capture along row 0.
    cells = empty_board()
    cells[0, 0] = Cell.WHITE
    cells[0, 1] = Cell.BLACK
    return BoardState(cells)


def test_start_position_layout() -> None:
    board = new_board()
    assert board.size == 8
    assert board.cell(3, 3) == Cell.BLACK
    assert board.cell(4, 4) == Cell.BLACK
    assert board.cell(3, 4) == Cell.WHITE
    assert board.cell(4, 3) == Cell.WHITE
    assert board.empty_count == 60


@pytest.mark.parametrize("size", [3, 2, 0, -2, 7, 9])
def test_invalid_board_size_rejected(size: int) -> None:
    with pytest.raises(ConfigurationError):
        new_board(size)


@pytest.mark.parametrize(
    "cells",
    [
        np.zeros((8, 6), dtype=np.int8),
        np.zeros((5, 5), dtype=np.int8),
        np.zeros((2, 2), dtype=np.int8),
        np.zeros(16, dtype=np.int8),
        np.zeros((4, 4, 4), dtype=np.int8),
        np.full((8, 8), 7, dtype=np.int8),
        np.full((4, 4), -1, dtype=np.int8),
    ],
)
def test_malformed_board_array_rejected(cells: np.ndarray) -> None:
    with pytest.raises(ConfigurationError):
        BoardState(cells)


def test_small_board_uses_centre() -> None:
    board = new_board(4)
    assert board.occupied_positions(Cell.BLACK) == [(1, 1), (2, 2)]
    assert board.occupied_positions(Cell.WHITE) == [(1, 2), (2, 1)]


def test_start_legal_moves_capture_single_disc() -> None:
    board = new_board()
    moves = legal_moves(board, Side.BLACK)

    assert moves == [Move(2, 4), Move(3, 5), Move(4, 2), Move(5, 3)]
    assert capture_set(board, Move(2, 4), Side.BLACK) == (Move(3, 4),)
    assert capture_set(board, Move(3, 5), Side.BLACK) == (Move(3, 4),)
    assert capture_set(board, Move(4, 2), Side.BLACK) == (Move(4, 3),)
    assert capture_set(board, Move(5, 3), Side.BLACK) == (Move(4, 3),)


def test_apply_move_flips_and_places() -> None:
    board = new_board()
    result = apply_move(board, Move(2, 4), Side.BLACK)

    assert result.success
    assert result.captured == (Move(3, 4),)
    assert result.board.cell(2, 4) == Cell.BLACK
    assert result.board.cell(3, 4) == Cell.BLACK
    assert score(result.board) == (4, 1)
    assert result.board.empty_count == 59
    # the input board is a separate value
    assert board == new_board()


def test_apply_move_on_occupied_cell_fails() -> None:
    board = new_board()
    result = apply_move(board, Move(3, 3), Side.WHITE)

    assert not result.success
    assert result.board is board
    assert result.captured == ()


def test_apply_move_without_capture_fails() -> None:
    board = new_board()
    result = apply_move(board, Move(0, 0), Side.BLACK)

    assert not result.success
    assert result.board is board


def test_capture_in_several_directions() -> None:
    cells = empty_board()
    cells[2, 3] = Cell.WHITE
    cells[2, 4] = Cell.BLACK
    cells[3, 3] = Cell.WHITE
    cells[4, 4] = Cell.BLACK
    # run ending on an empty cell
    cells[1, 2] = Cell.WHITE
    # run falling off the board
    cells[2, 1] = Cell.WHITE
    cells[2, 0] = Cell.WHITE
    board = BoardState(cells)

    assert capture_set(board, Move(2, 2), Side.BLACK) == (Move(2, 3), Move(3, 3))
    result = apply_move(board, Move(2, 2), Side.BLACK)
    assert result.board.cell(1, 2) == Cell.WHITE
    assert result.board.cell(2, 1) == Cell.WHITE
    assert score(result.board) == (5, 3)


def test_out_of_bounds_coordinates_raise() -> None:
    board = new_board()
    with pytest.raises(OutOfBoundsError):
        apply_move(board, Move(8, 0), Side.BLACK)
    with pytest.raises(OutOfBoundsError):
        capture_set(board, Move(-1, 3), Side.BLACK)


def test_board_is_read_only() -> None:
    board = new_board()
    with pytest.raises(ValueError):
        board.cells[0, 0] = Cell.BLACK


def test_every_legal_move_applies_during_random_playout() -> None:
    rng = np.random.default_rng(7)
    state = initial_state()
    for _ in range(60):
        moves = legal_moves(state.board, state.side_to_move)
        for move in moves:
            assert capture_set(state.board, move, state.side_to_move)
            assert apply_move(state.board, move, state.side_to_move).success
        if not moves:
            if is_terminal(state.board):
                break
            state = pass_turn(state)
            continue
        result, state = play(state, moves[int(rng.integers(len(moves)))])
        assert result.success


def test_side_without_moves_is_not_terminal() -> None:
    board = black_stuck_board()

    assert legal_moves(board, Side.BLACK) == []
    assert legal_moves(board, Side.WHITE) == [Move(0, 2)]
    assert not is_terminal(board)
    assert game_result(board) == GameResult.ONGOING


def test_pass_turn_only_when_stuck() -> None:
    board = black_stuck_board()

    passed = pass_turn(TurnState(board, Side.BLACK))
    assert passed.side_to_move == Side.WHITE
    assert passed.board == board

    with pytest.raises(IllegalPassError):
        pass_turn(TurnState(board, Side.WHITE))


def test_next_side_repeats_mover_when_opponent_stuck() -> None:
    board = black_stuck_board()
    assert next_side(board, Side.WHITE) == Side.WHITE
    assert next_side(new_board(), Side.BLACK) == Side.WHITE


def test_terminal_board_results() -> None:
    cells = empty_board()
    cells[0, 0] = Cell.BLACK
    lone = BoardState(cells)
    assert legal_moves(lone, Side.BLACK) == []
    assert legal_moves(lone, Side.WHITE) == []
    assert is_terminal(lone)
    assert next_side(lone, Side.BLACK) is None
    assert game_result(lone) == GameResult.BLACK_WIN

    cells[7, 7] = Cell.WHITE
    assert game_result(BoardState(cells)) == GameResult.DRAW

    cells[6, 6] = Cell.WHITE
    assert game_result(BoardState(cells)) == GameResult.WHITE_WIN


def test_play_threads_turn_state() -> None:
    state = initial_state()
    result, next_state = play(state, Move(2, 4))
    assert result.success
    assert next_state.side_to_move == Side.WHITE
    assert next_state.board == result.board

    failed, same = play(next_state, Move(0, 0))
    assert not failed.success
    assert same is next_state


def test_board_equality_and_hash() -> None:
    a = new_board()
    b = BoardState.from_rows(a.cells.tolist())
    assert a == b
    assert hash(a) == hash(b)
    assert a != new_board(6)
