from __future__ import annotations

import copy
import datetime as dt
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from uuid import uuid4

from .club import Team
from .fixtures import Match
from .league import League
from .livefeed import LiveMatchState
from .player import Player


@dataclass(slots=True)
class NewsItem:
    id: str
    date: dt.date
    type: str
    subject: str
    message: str
    is_read: bool = False
    team_id: Optional[str] = None


@dataclass(slots=True)
class GameSettings:
    autosave_interval: int = 7


def new_news_id() -> str:
    return f"n-{uuid4().hex[:8]}"


@dataclass(slots=True)
class GameState:
    current_date: dt.date
    season_year: int
    player_team_id: Optional[str] = None
    teams: List[Team] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)
    leagues: List[League] = field(default_factory=list)
    news: List[NewsItem] = field(default_factory=list)
    settings: GameSettings = field(default_factory=GameSettings)
    autosave_counter: int = 0
    live_match: Optional[LiveMatchState] = None
    last_training_date: Optional[dt.date] = None
    pending_match_day: Optional[dt.date] = None

    def ensure_containers(self) -> None:
        if self.teams is None:
            self.teams = []
        if self.players is None:
            self.players = []
        if self.leagues is None:
            self.leagues = []
        if self.news is None:
            self.news = []
        if self.settings is None:
            self.settings = GameSettings()
        if self.autosave_counter is None:
            self.autosave_counter = 0
        for league in self.leagues:
            if league.fixtures is None:
                league.fixtures = []
            if league.team_ids is None:
                league.team_ids = []
            league.ensure_table()

    def copy(self) -> "GameState":
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Uppslag
    # ------------------------------------------------------------------

    def team_by_id(self, team_id: Optional[str]) -> Optional[Team]:
        if team_id is None:
            return None
        return next((t for t in self.teams if t is not None and t.id == team_id), None)

    def player_by_id(self, player_id: Optional[str]) -> Optional[Player]:
        if player_id is None:
            return None
        return next((p for p in self.players if p is not None and p.id == player_id), None)

    def league_by_id(self, league_id: Optional[str]) -> Optional[League]:
        if league_id is None:
            return None
        return next((lg for lg in self.leagues if lg is not None and lg.id == league_id), None)

    def players_index(self) -> Dict[str, Player]:
        return {p.id: p for p in self.players if p is not None}

    def find_match(self, match_id: Optional[str]) -> Optional[Tuple[League, Match]]:
        if match_id is None:
            return None
        for league in self.leagues:
            for match in league.fixtures or []:
                if match is not None and match.id == match_id:
                    return league, match
        return None

    def all_fixtures(self) -> List[Match]:
        return [m for lg in self.leagues for m in (lg.fixtures or []) if m is not None]

    def add_news(
        self,
        type_: str,
        subject: str,
        message: str,
        *,
        team_id: Optional[str] = None,
        date: Optional[dt.date] = None,
    ) -> NewsItem:
        item = NewsItem(
            id=new_news_id(),
            date=date or self.current_date,
            type=type_,
            subject=subject,
            message=message,
            team_id=team_id,
        )
        # nyast först
        self.news.insert(0, item)
        return item

    # ------------------------------------------------------------------
    # Ögonblicksbild
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, ensure_ascii=False, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> "GameState":
        p = Path(path)
        with p.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        from .serialize import game_state_from_dict

        return game_state_from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        from .serialize import game_state_to_dict

        return game_state_to_dict(self)
