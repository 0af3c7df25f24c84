from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class EngineConfig:
    """Justerbara konstanter för simuleringsmotorn."""

    # Lagstyrka
    home_advantage: float = 0.10
    empty_team_strength: float = 30.0

    # Snabbsimulering
    jitter: float = 10.0
    max_goals: int = 10
    favourite_goal_share: float = 0.60
    favourite_share_slope: float = 0.005  # per styrkepoäng i övertag
    favourite_share_cap: float = 0.80

    # Livematch
    live_goal_probability: float = 0.015
    ball_step: float = 5.0
    live_minutes_per_second: float = 2.0
    full_time_minute: int = 90
    half_time_minute: int = 45

    # Kalender
    training_weekday: int = 0  # måndag
    autosave_interval: int = 7

    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        cfg = cls()
        seed = os.getenv("KICKOFF_SEED")
        weekday = os.getenv("KICKOFF_TRAINING_WEEKDAY")
        speed = os.getenv("KICKOFF_LIVE_SPEED")
        autosave = os.getenv("KICKOFF_AUTOSAVE_DAYS")
        goal_prob = os.getenv("KICKOFF_LIVE_GOAL_PROB")

        if seed:
            try:
                cfg.seed = int(seed)
            except ValueError:
                pass
        if weekday:
            try:
                value = int(weekday)
            except ValueError:
                value = -1
            if 0 <= value <= 6:
                cfg.training_weekday = value
        if speed:
            try:
                cfg.live_minutes_per_second = max(0.1, float(speed))
            except ValueError:
                pass
        if autosave:
            try:
                cfg.autosave_interval = max(1, int(autosave))
            except ValueError:
                pass
        if goal_prob:
            try:
                cfg.live_goal_probability = max(0.0, min(1.0, float(goal_prob)))
            except ValueError:
                pass
        return cfg


DEFAULT_CONFIG = EngineConfig()
