import numpy as np
import pytest

from othello import OthelloEnv
from othello.core import Cell, Side, legal_moves
from othello.features import encode_move


def test_reset_returns_valid_observation():
    env = OthelloEnv()
    obs, info = env.reset()

    assert obs.shape == (2, 8, 8)
    assert obs.sum() == 4
    assert info["legal_action_mask"].shape == (64,)
    assert np.count_nonzero(info["legal_action_mask"]) == 4
    assert info["side_to_move"] == Side.BLACK


def test_legal_mask_matches_enumeration():
    env = OthelloEnv()
    env.reset()
    mask = env.legal_action_mask()
    legal = legal_moves(env.state.board, env.state.side_to_move)
    assert np.count_nonzero(mask) == len(legal)
    for move in legal:
        assert mask[encode_move(move.row, move.col, 8)] == 1


def test_step_advances_state_and_returns_reward():
    env = OthelloEnv()
    obs, info = env.reset()

    next_obs, reward, terminated, truncated, next_info = env.step(encode_move(2, 4, 8))

    assert reward == 0.0
    assert not terminated
    assert not truncated
    assert next_info["captured"] == 1
    assert next_info["side_to_move"] == Side.WHITE
    assert env.state.board.cell(3, 4) == Cell.BLACK
    assert np.any(next_obs != obs)


def test_illegal_action_raises_when_enforced():
    env = OthelloEnv()
    env.reset()
    with pytest.raises(ValueError):
        env.step(0)
    with pytest.raises(ValueError):
        env.step(64)


def test_illegal_action_ignored_when_not_enforced():
    env = OthelloEnv(enforce_legal_actions=False)
    env.reset()
    before = env.state
    _, reward, terminated, _, info = env.step(0)
    assert info["illegal"]
    assert reward == 0.0
    assert not terminated
    assert env.state is before


def test_opponent_replies_inside_step():
    env = OthelloEnv(opponent="Facile")
    env.reset(seed=0)
    _, _, terminated, _, info = env.step(encode_move(2, 4, 8))

    assert not terminated
    assert info["side_to_move"] == Side.BLACK
    assert env.state.board.empty_count == 58


def test_agent_as_white_sees_opponent_opening():
    env = OthelloEnv(opponent="Expert", agent_side=Side.WHITE, board_size=6)
    _, info = env.reset(seed=0)

    assert info["side_to_move"] == Side.WHITE
    assert env.state.board.empty_count == 31


def test_full_game_against_opponent_terminates():
    env = OthelloEnv(opponent="Facile", board_size=6)
    _, info = env.reset(seed=1)
    rng = np.random.default_rng(1)
    terminated = False
    reward = 0.0
    while not terminated:
        legal = np.flatnonzero(info["legal_action_mask"])
        _, reward, terminated, _, info = env.step(int(rng.choice(legal)))

    assert reward in (-1.0, 0.0, 1.0)
    assert not info["legal_action_mask"].any()
    with pytest.raises(ValueError):
        env.step(0)


def test_render_ansi():
    env = OthelloEnv(render_mode="ansi", board_size=4)
    env.reset()
    assert env.render() == "....\n.XO.\n.OX.\n...."
