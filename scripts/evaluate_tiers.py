#!/usr/bin/env python3
"""Play two difficulty tiers against each other and report the results."""

import argparse
import json
import logging

import numpy as np

from othello.config import load_config
from othello.evaluation import evaluate_policies
from othello.policy import Difficulty


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", type=str, default="configs/othello.yaml")
    parser.add_argument("--episodes", type=int)
    parser.add_argument("--black", choices=[d.value for d in Difficulty])
    parser.add_argument("--white", choices=[d.value for d in Difficulty])
    parser.add_argument("--seed", type=int)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cfg = load_config(args.config)
    episodes = args.episodes if args.episodes is not None else cfg.match.episodes
    black = Difficulty.parse(args.black) if args.black else cfg.match.black
    white = Difficulty.parse(args.white) if args.white else cfg.match.white
    seed = args.seed if args.seed is not None else cfg.seed

    seeds = np.random.SeedSequence(seed).spawn(2)
    policy_black = cfg.policy_for(black, np.random.default_rng(seeds[0]))
    policy_white = cfg.policy_for(white, np.random.default_rng(seeds[1]))

    result = evaluate_policies(
        policy_black,
        policy_white,
        episodes=episodes,
        board_size=cfg.board_size,
        progress=True,
    )

    output = {
        "black": black.value,
        "white": white.value,
        "games": result.games_played,
        "black_wins": result.black_wins,
        "white_wins": result.white_wins,
        "draws": result.draws,
        "average_length": result.average_length,
        "average_margin": result.average_margin,
        "black_winrate": result.winrate_black(),
        "white_winrate": result.winrate_white(),
    }
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
