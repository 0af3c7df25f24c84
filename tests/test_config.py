from __future__ import annotations

import pytest

from kickoff.core.config import EngineConfig


def test_engine_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KICKOFF_SEED", "42")
    monkeypatch.setenv("KICKOFF_TRAINING_WEEKDAY", "3")
    monkeypatch.setenv("KICKOFF_LIVE_SPEED", "10")
    monkeypatch.setenv("KICKOFF_AUTOSAVE_DAYS", "14")
    monkeypatch.setenv("KICKOFF_LIVE_GOAL_PROB", "0.05")
    cfg = EngineConfig.from_env()
    assert cfg.seed == 42
    assert cfg.training_weekday == 3
    assert cfg.live_minutes_per_second == 10.0
    assert cfg.autosave_interval == 14
    assert cfg.live_goal_probability == 0.05


def test_bad_env_values_are_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("KICKOFF_SEED", "abc")
    monkeypatch.setenv("KICKOFF_TRAINING_WEEKDAY", "9")
    monkeypatch.setenv("KICKOFF_LIVE_SPEED", "snabbt")
    monkeypatch.setenv("KICKOFF_AUTOSAVE_DAYS", "0")
    monkeypatch.setenv("KICKOFF_LIVE_GOAL_PROB", "2")
    cfg = EngineConfig.from_env()
    default = EngineConfig()
    assert cfg.seed is None
    assert cfg.training_weekday == default.training_weekday
    assert cfg.live_minutes_per_second == default.live_minutes_per_second
    assert cfg.autosave_interval == 1
    assert cfg.live_goal_probability == 1.0


def test_env_is_optional(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "KICKOFF_SEED",
        "KICKOFF_TRAINING_WEEKDAY",
        "KICKOFF_LIVE_SPEED",
        "KICKOFF_AUTOSAVE_DAYS",
        "KICKOFF_LIVE_GOAL_PROB",
    ):
        monkeypatch.delenv(name, raising=False)
    assert EngineConfig.from_env() == EngineConfig()
