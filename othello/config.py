from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import numpy as np
import yaml

from othello.core import BOARD_SIZE, ConfigurationError, new_board
from othello.policy import DIFFICULTY_PROFILES, Difficulty, DifficultyPolicy, DifficultyProfile, Strategy

_PROFILE_FIELDS = {f.name for f in fields(DifficultyProfile)}


@dataclass
class MatchConfig:
    episodes: int = 10
    black: Difficulty = Difficulty.DIFFICILE
    white: Difficulty = Difficulty.EXPERT


@dataclass
class OthelloConfig:
    board_size: int = BOARD_SIZE
    difficulty: Difficulty = Difficulty.MOYEN
    seed: Optional[int] = None
    profiles: Dict[Difficulty, Dict[str, Any]] = field(default_factory=dict)
    match: MatchConfig = field(default_factory=MatchConfig)

    def profile_for(self, difficulty: Union[str, Difficulty]) -> DifficultyProfile:
        tier = Difficulty.parse(difficulty)
        return replace(DIFFICULTY_PROFILES[tier], **self.profiles.get(tier, {}))

    def policy_for(
        self,
        difficulty: Union[str, Difficulty],
        rng: Optional[np.random.Generator] = None,
    ) -> DifficultyPolicy:
        """Build a policy for a tier.

        Without an explicit ``rng`` each tier gets its own stream derived from
        ``seed``, so two tiers built from one config never share draws. Building
        the same tier twice replays the same stream.
        """
        tier = Difficulty.parse(difficulty)
        if rng is None:
            rng = np.random.default_rng(_tier_seed(self.seed, tier))
        return DifficultyPolicy(self.profile_for(tier), rng)


def _tier_seed(seed: Optional[int], tier: Difficulty) -> Optional[np.random.SeedSequence]:
    if seed is None:
        return None
    return np.random.SeedSequence(seed, spawn_key=(list(Difficulty).index(tier),))


def _as_int(value: Any, name: str, minimum: Optional[int] = None) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}.")
    if minimum is not None and value < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {value}.")
    return value


def _as_mapping(value: Any, name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"{name} must be a mapping, got {value!r}.")
    return value


def config_from_dict(data: Mapping[str, Any]) -> OthelloConfig:
    known = {"board_size", "difficulty", "seed", "profiles", "match"}
    unknown = set(data) - known
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {sorted(unknown)}")

    config = OthelloConfig()
    if "board_size" in data:
        config.board_size = data["board_size"]
        new_board(config.board_size)  # validates
    if "difficulty" in data:
        config.difficulty = Difficulty.parse(data["difficulty"])
    if data.get("seed") is not None:
        config.seed = _as_int(data["seed"], "seed", minimum=0)

    for name, overrides in _as_mapping(data.get("profiles"), "profiles").items():
        tier = Difficulty.parse(name)
        overrides = dict(_as_mapping(overrides, f"profiles.{tier.value}"))
        bad = set(overrides) - _PROFILE_FIELDS
        if bad:
            raise ConfigurationError(f"Unknown profile fields for {tier.value}: {sorted(bad)}")
        if "strategy" in overrides:
            try:
                overrides["strategy"] = Strategy(overrides["strategy"])
            except ValueError as exc:
                raise ConfigurationError(f"Unknown strategy {overrides['strategy']!r}.") from exc
        config.profiles[tier] = overrides
        config.profile_for(tier)  # validates the merged profile

    match = _as_mapping(data.get("match"), "match")
    bad = set(match) - {"episodes", "black", "white"}
    if bad:
        raise ConfigurationError(f"Unknown match keys: {sorted(bad)}")
    config.match = MatchConfig(
        episodes=_as_int(match.get("episodes", config.match.episodes), "match.episodes", minimum=1),
        black=Difficulty.parse(match.get("black", config.match.black)),
        white=Difficulty.parse(match.get("white", config.match.white)),
    )
    return config


def load_config(path: Union[str, Path, None]) -> OthelloConfig:
    if path is None:
        return OthelloConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return OthelloConfig()
    data = yaml.safe_load(cfg_path.read_text()) or {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{cfg_path} must contain a mapping at the top level.")
    return config_from_dict(data)
