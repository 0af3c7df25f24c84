from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional

from .config import DEFAULT_CONFIG, EngineConfig
from .fixtures import EventType, MatchEvent, MatchResult, MatchStatus
from .livefeed import (
    LiveMatchState,
    LiveStatus,
    full_time_line,
    half_time_line,
    kickoff_line,
    simulate_minute,
)
from .match import choose_scorer, derive_stats, record_appearances, replace_fixture, update_morale
from .ratings import team_match_strength
from .standings import apply_result_to_table, merge_entries
from .state import GameState

logger = logging.getLogger(__name__)

# Livematchens livscykel:
#   avspark → playing ⇄ paused → full-time → (avslutad, live_match = None)
# Endast en livematch åt gången.


def is_live(state: GameState) -> bool:
    return state.live_match is not None


# ---------------------------------
# Interna steg (muterar ett redan kopierat state)
# ---------------------------------


def kick_off(gs: GameState, match_id: str) -> bool:
    found = gs.find_match(match_id)
    if found is None:
        logger.debug("Okänd match %s – ingen avspark", match_id)
        return False
    league, match = found
    if match.status is not MatchStatus.SCHEDULED:
        logger.debug("Match %s är %s – ingen avspark", match_id, match.status.value)
        return False
    home = gs.team_by_id(match.home_team_id)
    away = gs.team_by_id(match.away_team_id)
    if home is None or away is None:
        logger.warning("Lag saknas för match %s – ingen avspark", match_id)
        return False

    replace_fixture(league, replace(match, status=MatchStatus.IN_PROGRESS))
    gs.live_match = LiveMatchState(
        match_id=match_id,
        commentary=[kickoff_line(home.name, away.name)],
        home_tactics=home.tactics.snapshot(),
        away_tactics=away.tactics.snapshot(),
    )
    logger.info("Avspark: %s – %s (%s)", home.name, away.name, match_id)
    return True


def finalize_live_match(gs: GameState, cfg: EngineConfig) -> None:
    """Skriver tillbaka livematchens resultat till fixtur och tabell – en gång."""
    live = gs.live_match
    if live is None or live.finalized:
        return
    live.finalized = True

    found = gs.find_match(live.match_id)
    if found is None:
        logger.warning("Livematchen %s finns inte längre i någon liga", live.match_id)
        return
    league, match = found
    if match.status is MatchStatus.PLAYED:
        return

    home = gs.team_by_id(match.home_team_id)
    away = gs.team_by_id(match.away_team_id)
    players = gs.players_index()
    diff = 0.0
    if home is not None and away is not None:
        diff = team_match_strength(home, players, True, cfg) - team_match_strength(
            away, players, False, cfg
        )

    hs, as_ = live.home_score, live.away_score
    updated = replace(
        match,
        status=MatchStatus.PLAYED,
        result=MatchResult(hs, as_),
        events=sorted(live.events, key=lambda e: e.minute),
        stats=derive_stats(hs, as_, diff),
        commentary_log=list(live.commentary),
    )
    replace_fixture(league, updated)

    entries = apply_result_to_table(league.table, match.home_team_id, match.away_team_id, hs, as_)
    if entries is None:
        logger.warning("Tabellrad saknas för livematch %s – tabellen lämnas orörd", match.id)
    else:
        league.table = merge_entries(league.table, list(entries))
    record_appearances(gs, updated)
    update_morale(gs, updated)

    h_name = home.name if home else match.home_team_id
    a_name = away.name if away else match.away_team_id
    gs.add_news(
        "match_result",
        f"{h_name} {hs}–{as_} {a_name}",
        f"Slutsignal! {h_name} och {a_name} skiljdes åt med {hs}–{as_}.",
        team_id=gs.player_team_id,
    )
    logger.info("Livematch %s avgjord: %s-%s", match.id, hs, as_)


def _tick(gs: GameState, rnd, cfg: EngineConfig) -> None:
    live = gs.live_match
    if live is None:
        return
    result = simulate_minute(live, gs, rnd, cfg)

    minute = live.minute + 1
    found = gs.find_match(live.match_id)
    match = found[1] if found else None
    if match is not None:
        players = gs.players_index()
        if result.new_home_score > live.home_score:
            home = gs.team_by_id(match.home_team_id)
            scorer = choose_scorer(home, players, rnd) if home else None
            live.events.append(MatchEvent(minute, EventType.GOAL, match.home_team_id, scorer, "Mål"))
        if result.new_away_score > live.away_score:
            away = gs.team_by_id(match.away_team_id)
            scorer = choose_scorer(away, players, rnd) if away else None
            live.events.append(MatchEvent(minute, EventType.GOAL, match.away_team_id, scorer, "Mål"))

    live.minute = minute
    live.home_score = result.new_home_score
    live.away_score = result.new_away_score
    live.ball_position = result.new_ball_position
    live.commentary.extend(result.new_events)

    if match is None:
        return
    home = gs.team_by_id(match.home_team_id)
    away = gs.team_by_id(match.away_team_id)
    h_name = home.name if home else match.home_team_id
    a_name = away.name if away else match.away_team_id

    if minute == cfg.half_time_minute:
        live.commentary.append(
            half_time_line(minute, h_name, a_name, live.home_score, live.away_score)
        )
    if minute >= cfg.full_time_minute:
        live.status = LiveStatus.FULL_TIME
        live.commentary.append(
            full_time_line(minute, h_name, a_name, live.home_score, live.away_score)
        )
        finalize_live_match(gs, cfg)


# ---------------------------------
# Publika övergångar (state in → nytt state ut)
# ---------------------------------


def start_live_match(state: GameState, match_id: str) -> GameState:
    if state.live_match is not None:
        logger.debug("Livematch %s pågår redan – ny avspark ignoreras", state.live_match.match_id)
        return state
    gs = state.copy()
    if not kick_off(gs, match_id):
        return state
    return gs


def tick_live_match(
    state: GameState,
    rng: Optional[random.Random] = None,
    config: EngineConfig | None = None,
) -> GameState:
    live = state.live_match
    if live is None or live.status is not LiveStatus.PLAYING:
        logger.debug("Ingen spelande livematch att stega")
        return state
    gs = state.copy()
    _tick(gs, rng or random, config or DEFAULT_CONFIG)
    return gs


def pause_live_match(state: GameState) -> GameState:
    live = state.live_match
    if live is None or live.status is not LiveStatus.PLAYING:
        return state
    gs = state.copy()
    gs.live_match.status = LiveStatus.PAUSED
    return gs


def resume_live_match(state: GameState) -> GameState:
    live = state.live_match
    if live is None or live.status not in (LiveStatus.PAUSED, LiveStatus.HALF_TIME):
        return state
    gs = state.copy()
    gs.live_match.status = LiveStatus.PLAYING
    return gs


def end_live_match(state: GameState, config: EngineConfig | None = None) -> GameState:
    """Avsluta (eller hoppa över) livematchen: samma avslut som vid slutsignal."""
    if state.live_match is None:
        return state
    gs = state.copy()
    finalize_live_match(gs, config or DEFAULT_CONFIG)
    gs.live_match = None
    return gs
