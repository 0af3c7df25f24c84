from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence

from .config import DEFAULT_CONFIG, EngineConfig
from .fixtures import Commentary, EventType, MatchEvent
from .ratings import team_match_strength

if TYPE_CHECKING:
    from .state import GameState


class LiveStatus(Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    HALF_TIME = "half-time"
    FULL_TIME = "full-time"


@dataclass(slots=True)
class BallPosition:
    x: float = 50.0
    y: float = 50.0


@dataclass(slots=True)
class LiveMatchState:
    match_id: str
    minute: int = 0
    home_score: int = 0
    away_score: int = 0
    status: LiveStatus = LiveStatus.PLAYING
    ball_position: BallPosition = field(default_factory=BallPosition)
    commentary: List[Commentary] = field(default_factory=list)
    home_tactics: Dict[str, str] = field(default_factory=dict)
    away_tactics: Dict[str, str] = field(default_factory=dict)
    events: List[MatchEvent] = field(default_factory=list)
    finalized: bool = False


@dataclass(slots=True)
class MinuteResult:
    new_events: List[Commentary]
    new_home_score: int
    new_away_score: int
    new_ball_position: BallPosition


# ---------------------------------
# Kommentarsrader
# ---------------------------------


def kickoff_line(home_name: str, away_name: str) -> Commentary:
    return Commentary(0, f"Avspark: {home_name} – {away_name}", EventType.KICKOFF)


def half_time_line(minute: int, home_name: str, away_name: str, hs: int, as_: int) -> Commentary:
    return Commentary(
        minute, f"Halvtid: {home_name} {hs}–{as_} {away_name}", EventType.HALF_TIME
    )


def full_time_line(minute: int, home_name: str, away_name: str, hs: int, as_: int) -> Commentary:
    return Commentary(
        minute, f"Slut: {home_name} {hs}–{as_} {away_name}", EventType.FULL_TIME
    )


def goal_line(minute: int, scorer_team: str, hs: int, as_: int) -> Commentary:
    return Commentary(minute, f"MÅL! {scorer_team} gör mål! ({hs}-{as_})", EventType.GOAL)


def _zone_line(minute: int, ball: BallPosition, home_name: str, away_name: str) -> Commentary:
    # x = 0 är hemmalagets mål, x = 100 bortalagets
    if ball.x >= 80:
        text = f"{home_name} trycker på i straffområdet."
    elif ball.x >= 60:
        text = f"{home_name} bygger upp anfall på offensiv planhalva."
    elif ball.x > 40:
        text = "Bollen flyttas runt på mittfältet."
    elif ball.x > 20:
        text = f"{away_name} för fram bollen mot {home_name}s mål."
    else:
        text = f"{away_name} skapar oro framför {home_name}s mål."
    if ball.y <= 15 or ball.y >= 85:
        text += " Spelet går längs kanten."
    return Commentary(minute, f"Minut {minute}: {text}", EventType.PLAY)


def build_commentary_log(
    events: Sequence[MatchEvent],
    home_id: str,
    home_name: str,
    away_name: str,
    *,
    half_time: int = 45,
    full_time: int = 90,
) -> List[Commentary]:
    """Kommentarslogg för en snabbsimulerad match, byggd ur målhändelserna."""
    lines: List[Commentary] = [kickoff_line(home_name, away_name)]
    score_h = 0
    score_a = 0
    ht_written = False
    for ev in sorted(events, key=lambda e: e.minute):
        if not ht_written and ev.minute > half_time:
            lines.append(half_time_line(half_time, home_name, away_name, score_h, score_a))
            ht_written = True
        if ev.type is not EventType.GOAL:
            continue
        if ev.team_id == home_id:
            score_h += 1
            lines.append(goal_line(ev.minute, home_name, score_h, score_a))
        else:
            score_a += 1
            lines.append(goal_line(ev.minute, away_name, score_h, score_a))
    if not ht_written:
        lines.append(half_time_line(half_time, home_name, away_name, score_h, score_a))
    lines.append(full_time_line(full_time, home_name, away_name, score_h, score_a))
    return lines


# ---------------------------------
# En minut av livematch
# ---------------------------------


def _clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def home_goal_share(home_strength: float, away_strength: float) -> float:
    total = home_strength + away_strength
    if total <= 0:
        return 0.5
    return _clamp(0.5 + (home_strength - away_strength) / total / 2.0, 0.3, 0.7)


def simulate_minute(
    live: LiveMatchState,
    state: "GameState",
    rng: Optional[random.Random] = None,
    config: EngineConfig | None = None,
) -> MinuteResult:
    """
    Spelar en minut: bollen flyttas lite, ibland blir det mål, och minst en
    kommentarsrad skrivs. Varken `live` eller `state` ändras – allt nytt
    returneras och slås ihop av anroparen.
    """
    rnd = rng or random
    cfg = config or DEFAULT_CONFIG
    unchanged = MinuteResult(
        [], live.home_score, live.away_score, BallPosition(live.ball_position.x, live.ball_position.y)
    )

    found = state.find_match(live.match_id)
    if found is None:
        return unchanged
    _league, match = found
    home = state.team_by_id(match.home_team_id)
    away = state.team_by_id(match.away_team_id)
    if home is None or away is None:
        return unchanged

    minute = live.minute + 1
    step = cfg.ball_step
    ball = BallPosition(
        _clamp(live.ball_position.x + rnd.uniform(-step, step)),
        _clamp(live.ball_position.y + rnd.uniform(-step, step)),
    )

    events: List[Commentary] = [_zone_line(minute, ball, home.name, away.name)]
    home_score = live.home_score
    away_score = live.away_score

    if rnd.random() < cfg.live_goal_probability:
        players = state.players_index()
        share = home_goal_share(
            team_match_strength(home, players, True, cfg),
            team_match_strength(away, players, False, cfg),
        )
        if rnd.random() < share:
            home_score += 1
            events.append(goal_line(minute, home.name, home_score, away_score))
        else:
            away_score += 1
            events.append(goal_line(minute, away.name, home_score, away_score))
        # avspark från mitten efter mål
        ball = BallPosition(50.0, 50.0)

    return MinuteResult(events, home_score, away_score, ball)
