import json
from pathlib import Path

import pytest

from scripts.play_vs_ai import replay_logged_game


def create_sample_log(path: Path, moves) -> None:
    log = {"metadata": {"board_size": 8}, "moves": moves}
    path.write_text(json.dumps(log))


def test_replay_logged_game(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(
        log_path,
        [
            {"move_index": 0, "actor": "human", "side": "BLACK", "move": [2, 4]},
            {"move_index": 1, "actor": "ai", "side": "WHITE", "move": [2, 3]},
        ],
    )
    summary = replay_logged_game(log_path, verbose=False)

    assert summary["moves"] == 2
    assert summary["result"] == "ongoing"
    assert summary["score"] == {"black": 3, "white": 3}
    board = summary["board"]
    assert board[2][4] == 1
    assert board[2][3] == 2
    assert board[3][3] == 2


def test_replay_rejects_out_of_turn_move(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path, [{"move_index": 0, "actor": "ai", "side": "WHITE", "move": [2, 3]}])
    with pytest.raises(ValueError):
        replay_logged_game(log_path, verbose=False)


def test_replay_rejects_illegal_move(tmp_path):
    log_path = tmp_path / "game.json"
    create_sample_log(log_path, [{"move_index": 0, "actor": "human", "side": "BLACK", "move": [0, 0]}])
    with pytest.raises(ValueError):
        replay_logged_game(log_path, verbose=False)
