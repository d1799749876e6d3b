"""Match play between move selectors."""

from .match import EvaluationResult, MoveSelector, evaluate_policies, play_game

__all__ = ["EvaluationResult", "MoveSelector", "evaluate_policies", "play_game"]
