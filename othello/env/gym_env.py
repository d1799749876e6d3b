from __future__ import annotations

import logging
from typing import Dict, Optional, Union

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from othello.core import (
    BOARD_SIZE,
    GameResult,
    Side,
    TurnState,
    apply_move,
    game_result,
    initial_state,
    next_side,
)
from othello.features import BOARD_CHANNELS, build_board_tensor, decode_move, legal_move_mask
from othello.policy import Difficulty, DifficultyPolicy

logger = logging.getLogger(__name__)


class OthelloEnv(gym.Env):
    """Game loop around the rules engine.

    The env owns the current :class:`TurnState` and resolves forced passes
    after every move. With an ``opponent`` tier, the opponent's moves are
    played inside :meth:`step` so the caller only ever acts for ``agent_side``.
    """

    metadata = {"render_modes": ["ansi"], "render_fps": 4}

    def __init__(
        self,
        *,
        board_size: int = BOARD_SIZE,
        opponent: Optional[Union[str, Difficulty]] = None,
        agent_side: Side = Side.BLACK,
        enforce_legal_actions: bool = True,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._board_size = board_size
        self._opponent_difficulty = Difficulty.parse(opponent) if opponent is not None else None
        self._agent_side = agent_side
        self._enforce_legal = enforce_legal_actions
        self.render_mode = render_mode

        board_shape = (BOARD_CHANNELS, board_size, board_size)
        self.observation_space = spaces.Box(low=0.0, high=1.0, shape=board_shape, dtype=np.float32)
        self.action_space = spaces.Discrete(board_size * board_size)

        self._state: TurnState = initial_state(board_size)
        self._done = False
        self._opponent: Optional[DifficultyPolicy] = None

    @property
    def state(self) -> TurnState:
        return self._state

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict] = None):
        super().reset(seed=seed)
        self._state = initial_state(self._board_size)
        self._done = False
        if self._opponent_difficulty is not None:
            self._opponent = DifficultyPolicy.for_difficulty(self._opponent_difficulty, self.np_random)

        passed = False
        if self._opponent is not None and self._state.side_to_move != self._agent_side:
            passed = self._play_opponent()
        return self._build_observation(), self._build_info(passed=passed)

    def step(self, action_index: int):
        if self._done:
            raise ValueError("Game is over; call reset() before stepping again.")
        if not self.action_space.contains(action_index):
            raise ValueError(f"Action index {action_index} out of bounds.")

        mover = self._state.side_to_move
        move = decode_move(action_index, self._board_size)
        result = apply_move(self._state.board, move, mover)
        if not result.success:
            if self._enforce_legal:
                raise ValueError("Illegal action provided and enforce_legal_actions=True.")
            return self._build_observation(), 0.0, False, False, self._build_info(illegal=True)

        passed = self._advance(result.board, mover)
        if self._opponent is not None and not self._done and self._state.side_to_move != self._agent_side:
            passed = self._play_opponent() or passed

        info = self._build_info(passed=passed, captured=len(result.captured))
        return self._build_observation(), self._compute_reward(), self._done, False, info

    def legal_action_mask(self) -> np.ndarray:
        if self._done:
            return np.zeros(self.action_space.n, dtype=np.int8)
        return legal_move_mask(self._state.board, self._state.side_to_move)

    def render(self):
        if self.render_mode != "ansi":
            raise NotImplementedError("Only 'ansi' render mode is supported.")
        return self._state.board.render()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _advance(self, board, mover: Side) -> bool:
        """Install the board after ``mover`` played; True when the opponent had to pass."""
        following = next_side(board, mover)
        if following is None:
            self._state = TurnState(board=board, side_to_move=mover.opponent)
            self._done = True
            return False
        self._state = TurnState(board=board, side_to_move=following)
        if following == mover:
            logger.debug("%s has no legal move and passes", mover.opponent.name)
            return True
        return False

    def _play_opponent(self) -> bool:
        passed = False
        while not self._done and self._state.side_to_move != self._agent_side:
            side = self._state.side_to_move
            move = self._opponent.select(self._state.board, side)
            if move is None:
                # next_side never hands the turn to a side without moves.
                raise RuntimeError("Opponent has no legal move on its turn.")
            result = apply_move(self._state.board, move, side)
            passed = self._advance(result.board, side) or passed
        return passed

    def _build_observation(self) -> np.ndarray:
        return build_board_tensor(self._state.board, self._state.side_to_move)

    def _build_info(self, *, passed: bool = False, illegal: bool = False, captured: int = 0) -> Dict[str, object]:
        return {
            "legal_action_mask": self.legal_action_mask(),
            "side_to_move": self._state.side_to_move,
            "passed": passed,
            "illegal": illegal,
            "captured": captured,
        }

    def _compute_reward(self) -> float:
        if not self._done:
            return 0.0
        result = game_result(self._state.board)
        perspective = self._agent_side if self._opponent is not None else Side.BLACK
        if result == GameResult.DRAW:
            return 0.0
        winner = Side.BLACK if result == GameResult.BLACK_WIN else Side.WHITE
        return 1.0 if winner == perspective else -1.0
