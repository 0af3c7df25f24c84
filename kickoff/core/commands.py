from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, Union

from .config import EngineConfig
from .live import (
    end_live_match,
    pause_live_match,
    resume_live_match,
    start_live_match,
    tick_live_match,
)
from .season import advance_time
from .state import GameState
from .training import run_weekly_training

# Kommandon som UI/CLI skickar in; varje kommando ger ett nytt state.


@dataclass(slots=True, frozen=True)
class AdvanceTime:
    days: int


@dataclass(slots=True, frozen=True)
class StartLiveMatch:
    match_id: str


@dataclass(slots=True, frozen=True)
class TickLiveMatch:
    pass


@dataclass(slots=True, frozen=True)
class PauseLiveMatch:
    pass


@dataclass(slots=True, frozen=True)
class ResumeLiveMatch:
    pass


@dataclass(slots=True, frozen=True)
class EndLiveMatch:
    pass


@dataclass(slots=True, frozen=True)
class ProcessWeeklyTraining:
    pass


Command = Union[
    AdvanceTime,
    StartLiveMatch,
    TickLiveMatch,
    PauseLiveMatch,
    ResumeLiveMatch,
    EndLiveMatch,
    ProcessWeeklyTraining,
]


def apply_command(
    state: GameState,
    command: Command,
    rng: Optional[random.Random] = None,
    config: EngineConfig | None = None,
) -> GameState:
    """Kör ett kommando mot `state` och returnera det nya spelläget."""
    if isinstance(command, AdvanceTime):
        return advance_time(state, command.days, rng, config)
    if isinstance(command, StartLiveMatch):
        return start_live_match(state, command.match_id)
    if isinstance(command, TickLiveMatch):
        return tick_live_match(state, rng, config)
    if isinstance(command, PauseLiveMatch):
        return pause_live_match(state)
    if isinstance(command, ResumeLiveMatch):
        return resume_live_match(state)
    if isinstance(command, EndLiveMatch):
        return end_live_match(state, config)
    if isinstance(command, ProcessWeeklyTraining):
        return run_weekly_training(state, rng)
    raise TypeError(f"Okänt kommando: {type(command).__name__}")
