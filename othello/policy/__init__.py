"""Difficulty-tuned move selection."""

from .difficulty import (
    DIFFICULTY_PROFILES,
    Difficulty,
    DifficultyPolicy,
    DifficultyProfile,
    Strategy,
    choose_move,
    greedy_move,
    random_move,
    top_k_move,
)

__all__ = [
    "DIFFICULTY_PROFILES",
    "Difficulty",
    "DifficultyPolicy",
    "DifficultyProfile",
    "Strategy",
    "choose_move",
    "greedy_move",
    "random_move",
    "top_k_move",
]
