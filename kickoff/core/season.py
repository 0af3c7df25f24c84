from __future__ import annotations

import datetime as dt
import logging
import random
from typing import Iterator, List, Optional

from .config import DEFAULT_CONFIG, EngineConfig
from .fixtures import Match, MatchStatus
from .league import League
from .live import is_live, kick_off
from .match import apply_outcome, resolve_match, result_summary
from .standings import LeagueTableEntry, sort_table
from .state import GameState
from .training import apply_training, process_weekly_training

logger = logging.getLogger(__name__)


# ---------------------------
# En dag i kalendern
# ---------------------------


def _todays_fixtures(gs: GameState, today: dt.date) -> List[tuple[League, Match]]:
    # ligaordning, sedan fixturordning
    return [
        (league, m)
        for league in gs.leagues
        for m in (league.fixtures or [])
        if m is not None and m.status is MatchStatus.SCHEDULED and m.date == today
    ]


def _train_if_due(gs: GameState, today: dt.date, rnd, cfg: EngineConfig) -> None:
    if today.weekday() != cfg.training_weekday:
        return
    if gs.last_training_date == today:
        return
    result = process_weekly_training(gs, rnd)
    apply_training(gs, result)
    logger.info(
        "Veckoträning %s: %d spelare, %d noterbara förändringar",
        today.isoformat(),
        len(result.updated_players),
        len(result.development_events),
    )


def _play_day(gs: GameState, today: dt.date, rnd, cfg: EngineConfig) -> bool:
    """
    Spelar dagens matcher i `gs` (muteras). Returnerar True om det egna lagets
    match satte igång som livematch; då avbryts dagen innan träningen.
    """
    for league, fixture in _todays_fixtures(gs, today):
        if fixture.involves(gs.player_team_id):
            if kick_off(gs, fixture.id):
                return True
            logger.warning("Egen match %s kunde inte starta – avgörs direkt", fixture.id)

        outcome = resolve_match(fixture, gs.teams, gs.players, league, rnd, cfg)
        apply_outcome(gs, outcome)
        summary = result_summary(gs, outcome.updated_fixture)
        gs.add_news("match_result", summary["subject"], summary["message"], date=today)

    _train_if_due(gs, today, rnd, cfg)
    return False


# ---------------------------
# Tidsframflyttning
# ---------------------------


def advance_time(
    state: GameState,
    days: int,
    rng: Optional[random.Random] = None,
    config: EngineConfig | None = None,
) -> GameState:
    """
    Flytta fram kalendern `days` dagar.

    Varje dag spelas schemalagda matcher: AI-matcher avgörs direkt, det
    egna lagets match startar som livematch och stoppar framflyttningen.
    Matchdagen räknas då inte som avklarad (`pending_match_day`); nästa
    anrop gör först klart den dagen. Med en pågående livematch händer
    ingenting.
    """
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        logger.debug("Ogiltigt antal dagar %r – ingen förändring", days)
        return state
    if is_live(state):
        logger.debug("Livematch pågår – avsluta den innan tiden flyttas fram")
        return state
    if days == 0 and state.pending_match_day is None:
        return state

    rnd = rng or random
    cfg = config or DEFAULT_CONFIG
    gs = state.copy()

    if gs.pending_match_day is not None:
        pending = gs.pending_match_day
        if _play_day(gs, pending, rnd, cfg):
            return gs
        gs.pending_match_day = None
        gs.autosave_counter += 1

    for _ in range(days):
        gs.current_date = gs.current_date + dt.timedelta(days=1)
        if _play_day(gs, gs.current_date, rnd, cfg):
            gs.pending_match_day = gs.current_date
            logger.info("Matchdag %s: livematch startad", gs.current_date.isoformat())
            break
        gs.autosave_counter += 1

    return gs


def advance_time_chunked(
    state: GameState,
    days: int,
    chunk: int = 7,
    rng: Optional[random.Random] = None,
    config: EngineConfig | None = None,
) -> Iterator[GameState]:
    """Som advance_time men i bitar om `chunk` dagar; ger state efter varje bit."""
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        return
    step = max(1, int(chunk))
    left = days
    gs = state
    while left > 0:
        n = min(step, left)
        gs = advance_time(gs, n, rng, config)
        left -= n
        yield gs
        if gs.live_match is not None:
            break


# ---------------------------
# Uppslag kring kalendern
# ---------------------------


def next_match_for_team(state: GameState, team_id: Optional[str] = None) -> Optional[Match]:
    team_id = team_id or state.player_team_id
    upcoming = [
        m
        for m in state.all_fixtures()
        if m.involves(team_id)
        and m.status is not MatchStatus.PLAYED
        and m.date >= state.current_date
    ]
    if not upcoming:
        return None
    return min(upcoming, key=lambda m: (m.date, m.round, m.id))


def days_until_next_match(state: GameState, team_id: Optional[str] = None) -> Optional[int]:
    m = next_match_for_team(state, team_id)
    if m is None:
        return None
    return (m.date - state.current_date).days


def league_standings(league: League) -> List[LeagueTableEntry]:
    return sort_table(league.table or [])


def autosave_due(state: GameState) -> bool:
    interval = state.settings.autosave_interval if state.settings else 0
    return interval > 0 and state.autosave_counter >= interval
