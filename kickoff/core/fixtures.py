from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class MatchStatus(Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    PLAYED = "played"


class EventType(Enum):
    GOAL = "Goal"
    KICKOFF = "Kickoff"
    HALF_TIME = "HalfTime"
    FULL_TIME = "FullTime"
    PLAY = "Play"


@dataclass(slots=True)
class MatchEvent:
    minute: int
    type: EventType
    team_id: Optional[str] = None
    player_id: Optional[str] = None
    details: str = ""


@dataclass(slots=True)
class Commentary:
    minute: int
    text: str
    type: Optional[EventType] = None


@dataclass(slots=True)
class MatchResult:
    home_score: int = 0
    away_score: int = 0

    @property
    def scoreline(self) -> str:
        return f"{self.home_score}-{self.away_score}"


@dataclass(slots=True)
class MatchStats:
    home_shots: int = 0
    away_shots: int = 0
    home_shots_on_target: int = 0
    away_shots_on_target: int = 0
    home_possession: int = 50
    away_possession: int = 50


@dataclass(slots=True)
class Match:
    id: str
    home_team_id: str
    away_team_id: str
    date: dt.date
    league_id: str
    status: MatchStatus = MatchStatus.SCHEDULED
    result: MatchResult = field(default_factory=MatchResult)
    events: List[MatchEvent] = field(default_factory=list)
    stats: MatchStats = field(default_factory=MatchStats)
    commentary_log: List[Commentary] = field(default_factory=list)
    round: int = 0

    def involves(self, team_id: Optional[str]) -> bool:
        if not team_id:
            return False
        return team_id in (self.home_team_id, self.away_team_id)

    def __str__(self) -> str:
        return f"{self.round}: {self.home_team_id} vs {self.away_team_id} ({self.date})"


def round_robin(
    team_ids: Sequence[str],
    league_id: str,
    start_date: dt.date,
    *,
    double_round: bool = True,
    days_between: int = 7,
) -> List[Match]:
    # Klassisk round-robin: varje lag möter varje lag en gång (eller två gånger)
    if len(team_ids) < 2:
        return []

    teams: List[Optional[str]] = list(team_ids)
    n = len(teams)
    if n % 2:
        teams.append(None)  # bye om ojämnt antal
        n += 1

    schedule: List[List[tuple]] = []
    for _ in range(n - 1):
        mid = n // 2
        l1 = teams[:mid]
        l2 = teams[mid:]
        l2.reverse()
        schedule.append(list(zip(l1, l2)))
        teams.insert(1, teams.pop())

    matches: List[Match] = []
    round_num = 1
    for round_pairs in schedule:
        for home, away in round_pairs:
            if home is None or away is None:
                continue
            matches.append(_fixture(league_id, home, away, round_num, start_date, days_between))
        round_num += 1

    if double_round:
        first_leg = list(matches)
        for m in first_leg:
            r = m.round + (round_num - 1)
            matches.append(
                _fixture(league_id, m.away_team_id, m.home_team_id, r, start_date, days_between)
            )

    return matches


def _fixture(
    league_id: str,
    home: str,
    away: str,
    round_no: int,
    start_date: dt.date,
    days_between: int,
) -> Match:
    return Match(
        id=f"{league_id}-r{round_no}-{home}-{away}",
        home_team_id=home,
        away_team_id=away,
        date=start_date + dt.timedelta(days=days_between * (round_no - 1)),
        league_id=league_id,
        round=round_no,
    )
