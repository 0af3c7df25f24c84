from __future__ import annotations

import datetime as dt
from dataclasses import asdict, fields
from typing import Any, Dict, Optional

from .club import Finances, Squad, Team
from .fixtures import Commentary, EventType, Match, MatchEvent, MatchResult, MatchStats, MatchStatus
from .league import League
from .livefeed import BallPosition, LiveMatchState, LiveStatus
from .player import (
    Contract,
    Morale,
    Personality,
    Player,
    PlayerStats,
    Position,
    SeasonalStats,
    morale_enum,
    position_enum,
)
from .standings import LeagueTableEntry
from .state import GameSettings, GameState, NewsItem, new_news_id
from .tactics import tactics_from_dict

# -------------------------------------------------------------------
# Småhjälpare
# -------------------------------------------------------------------


def _date_to_str(value: Optional[dt.date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _date_from(value: Any, default: Optional[dt.date] = None) -> Optional[dt.date]:
    if isinstance(value, dt.date):
        return value
    if not value:
        return default
    try:
        return dt.date.fromisoformat(str(value)[:10])
    except ValueError:
        return default


def _enum_from(enum_cls, raw, default):
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError:
        return default


def _flat_from_dict(cls, d: Optional[Dict[str, Any]]):
    """Bygger en platt dataklass ur de nycklar som finns; okända ignoreras."""
    d = d or {}
    known = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in d.items() if k in known})


# -------------------------------------------------------------------
# PLAYER
# -------------------------------------------------------------------


def player_to_dict(p: Player) -> Dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "age": int(p.age),
        "position": p.position,
        "general_position": p.general_position.value,
        "stats": p.stats.as_dict(),
        "personality": asdict(p.personality),
        "contract": asdict(p.contract),
        "morale": morale_enum(p.morale).value,
        "form": int(p.form),
        "value": int(p.value),
        "seasonal_stats": asdict(p.seasonal_stats),
    }


def player_from_dict(d: Dict[str, Any]) -> Player:
    general = position_enum(d.get("general_position") or d.get("position")) or Position.MF
    return Player(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        age=int(d.get("age", 22)),
        position=d.get("position", general.value),
        general_position=general,
        stats=_flat_from_dict(PlayerStats, d.get("stats")),
        personality=_flat_from_dict(Personality, d.get("personality")),
        contract=_flat_from_dict(Contract, d.get("contract")),
        morale=morale_enum(d.get("morale", Morale.CONTENT.value)),
        form=int(d.get("form", 5)),
        value=int(d.get("value", 0)),
        seasonal_stats=_flat_from_dict(SeasonalStats, d.get("seasonal_stats")),
    )


# -------------------------------------------------------------------
# TEAM
# -------------------------------------------------------------------


def team_to_dict(t: Team) -> Dict[str, Any]:
    return {
        "id": t.id,
        "name": t.name,
        "short_name": t.short_name,
        "league_id": t.league_id,
        "player_ids": list(t.player_ids),
        "squad": asdict(t.squad),
        "formation": t.formation,
        "tactics": t.tactics.snapshot(),
        "finances": asdict(t.finances),
        "training_facilities_level": int(t.training_facilities_level),
        "is_human": bool(t.is_human),
    }


def team_from_dict(d: Dict[str, Any]) -> Team:
    squad = d.get("squad") or {}
    return Team(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        short_name=d.get("short_name", ""),
        league_id=d.get("league_id"),
        player_ids=list(d.get("player_ids", []) or []),
        squad=Squad(
            starting_xi=list(squad.get("starting_xi", []) or []),
            subs=list(squad.get("subs", []) or []),
            reserves=list(squad.get("reserves", []) or []),
        ),
        formation=d.get("formation", "4-4-2"),
        tactics=tactics_from_dict(d.get("tactics")),
        finances=_flat_from_dict(Finances, d.get("finances")),
        training_facilities_level=int(d.get("training_facilities_level", 1)),
        is_human=bool(d.get("is_human", False)),
    )


# -------------------------------------------------------------------
# MATCH
# -------------------------------------------------------------------


def event_to_dict(e: MatchEvent) -> Dict[str, Any]:
    return {
        "minute": int(e.minute),
        "type": e.type.value,
        "team_id": e.team_id,
        "player_id": e.player_id,
        "details": e.details,
    }


def event_from_dict(d: Dict[str, Any]) -> MatchEvent:
    return MatchEvent(
        minute=int(d.get("minute", 0)),
        type=_enum_from(EventType, d.get("type"), EventType.PLAY),
        team_id=d.get("team_id"),
        player_id=d.get("player_id"),
        details=d.get("details", ""),
    )


def commentary_to_dict(c: Commentary) -> Dict[str, Any]:
    return {
        "minute": int(c.minute),
        "text": c.text,
        "type": c.type.value if c.type is not None else None,
    }


def commentary_from_dict(d: Dict[str, Any]) -> Commentary:
    raw = d.get("type")
    return Commentary(
        minute=int(d.get("minute", 0)),
        text=d.get("text", ""),
        type=_enum_from(EventType, raw, None) if raw is not None else None,
    )


def match_to_dict(m: Match) -> Dict[str, Any]:
    return {
        "id": m.id,
        "home_team_id": m.home_team_id,
        "away_team_id": m.away_team_id,
        "date": _date_to_str(m.date),
        "league_id": m.league_id,
        "status": m.status.value,
        "result": asdict(m.result),
        "events": [event_to_dict(e) for e in m.events],
        "stats": asdict(m.stats),
        "commentary_log": [commentary_to_dict(c) for c in m.commentary_log],
        "round": int(m.round),
    }


def match_from_dict(d: Dict[str, Any], default_date: dt.date) -> Match:
    return Match(
        id=str(d.get("id", "")),
        home_team_id=d.get("home_team_id", ""),
        away_team_id=d.get("away_team_id", ""),
        date=_date_from(d.get("date"), default_date),
        league_id=d.get("league_id", ""),
        status=_enum_from(MatchStatus, d.get("status"), MatchStatus.SCHEDULED),
        result=_flat_from_dict(MatchResult, d.get("result")),
        events=[event_from_dict(x) for x in d.get("events", []) or []],
        stats=_flat_from_dict(MatchStats, d.get("stats")),
        commentary_log=[commentary_from_dict(x) for x in d.get("commentary_log", []) or []],
        round=int(d.get("round", 0)),
    )


# -------------------------------------------------------------------
# LEAGUE
# -------------------------------------------------------------------


def league_to_dict(league: League) -> Dict[str, Any]:
    return {
        "id": league.id,
        "name": league.name,
        "team_ids": list(league.team_ids),
        "fixtures": [match_to_dict(m) for m in league.fixtures],
        "table": [asdict(e) for e in league.table],
        "promotion_spots": league.promotion_spots,
        "relegation_spots": league.relegation_spots,
        "current_matchday": league.current_matchday,
    }


def league_from_dict(d: Dict[str, Any], default_date: dt.date) -> League:
    return League(
        id=str(d.get("id", "")),
        name=d.get("name", ""),
        team_ids=list(d.get("team_ids", []) or []),
        fixtures=[match_from_dict(x, default_date) for x in d.get("fixtures", []) or []],
        table=[
            _flat_from_dict(LeagueTableEntry, x)
            for x in d.get("table", []) or []
            if isinstance(x, dict) and x.get("team_id")
        ],
        promotion_spots=d.get("promotion_spots", 0) or 0,
        relegation_spots=d.get("relegation_spots", 0) or 0,
        current_matchday=int(d.get("current_matchday", 0) or 0),
    )


# -------------------------------------------------------------------
# LIVE MATCH
# -------------------------------------------------------------------


def live_match_to_dict(live: Optional[LiveMatchState]) -> Optional[Dict[str, Any]]:
    if live is None:
        return None
    return {
        "match_id": live.match_id,
        "minute": live.minute,
        "home_score": live.home_score,
        "away_score": live.away_score,
        "status": live.status.value,
        "ball_position": {"x": live.ball_position.x, "y": live.ball_position.y},
        "commentary": [commentary_to_dict(c) for c in live.commentary],
        "home_tactics": dict(live.home_tactics),
        "away_tactics": dict(live.away_tactics),
        "events": [event_to_dict(e) for e in live.events],
        "finalized": live.finalized,
    }


def live_match_from_dict(d: Optional[Dict[str, Any]]) -> Optional[LiveMatchState]:
    if not d or not d.get("match_id"):
        return None
    ball = d.get("ball_position") or {}
    return LiveMatchState(
        match_id=str(d["match_id"]),
        minute=int(d.get("minute", 0)),
        home_score=int(d.get("home_score", 0)),
        away_score=int(d.get("away_score", 0)),
        status=_enum_from(LiveStatus, d.get("status"), LiveStatus.PAUSED),
        ball_position=BallPosition(float(ball.get("x", 50.0)), float(ball.get("y", 50.0))),
        commentary=[commentary_from_dict(x) for x in d.get("commentary", []) or []],
        home_tactics=dict(d.get("home_tactics", {}) or {}),
        away_tactics=dict(d.get("away_tactics", {}) or {}),
        events=[event_from_dict(x) for x in d.get("events", []) or []],
        finalized=bool(d.get("finalized", False)),
    )


# -------------------------------------------------------------------
# NEWS
# -------------------------------------------------------------------


def news_to_dict(n: NewsItem) -> Dict[str, Any]:
    return {
        "id": n.id,
        "date": _date_to_str(n.date),
        "type": n.type,
        "subject": n.subject,
        "message": n.message,
        "is_read": n.is_read,
        "team_id": n.team_id,
    }


def news_from_dict(d: Dict[str, Any], default_date: dt.date) -> NewsItem:
    return NewsItem(
        id=d.get("id") or new_news_id(),
        date=_date_from(d.get("date"), default_date),
        type=d.get("type", "general"),
        subject=d.get("subject", ""),
        message=d.get("message", ""),
        is_read=bool(d.get("is_read", False)),
        team_id=d.get("team_id"),
    )


# -------------------------------------------------------------------
# GAME STATE
# -------------------------------------------------------------------


def game_state_to_dict(gs: GameState) -> Dict[str, Any]:
    return {
        "current_date": _date_to_str(gs.current_date),
        "season_year": gs.season_year,
        "player_team_id": gs.player_team_id,
        "teams": [team_to_dict(t) for t in gs.teams],
        "players": [player_to_dict(p) for p in gs.players],
        "leagues": [league_to_dict(lg) for lg in gs.leagues],
        "news": [news_to_dict(n) for n in gs.news],
        "settings": {"autosave_interval": gs.settings.autosave_interval},
        "autosave_counter": gs.autosave_counter,
        "live_match": live_match_to_dict(gs.live_match),
        "last_training_date": _date_to_str(gs.last_training_date),
        "pending_match_day": _date_to_str(gs.pending_match_day),
    }


def game_state_from_dict(d: Dict[str, Any]) -> GameState:
    current = _date_from(d.get("current_date"), dt.date.today())
    settings = d.get("settings") or {}
    gs = GameState(
        current_date=current,
        season_year=int(d.get("season_year", current.year)),
        player_team_id=d.get("player_team_id"),
        teams=[team_from_dict(x) for x in d.get("teams", []) or []],
        players=[player_from_dict(x) for x in d.get("players", []) or []],
        leagues=[league_from_dict(x, current) for x in d.get("leagues", []) or []],
        news=[news_from_dict(x, current) for x in d.get("news", []) or []],
        settings=GameSettings(
            autosave_interval=int(settings.get("autosave_interval", 7))
        ),
        autosave_counter=int(d.get("autosave_counter", 0) or 0),
        live_match=live_match_from_dict(d.get("live_match")),
        last_training_date=_date_from(d.get("last_training_date")),
        pending_match_day=_date_from(d.get("pending_match_day")),
    )
    gs.ensure_containers()
    return gs
