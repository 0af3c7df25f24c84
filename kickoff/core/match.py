from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Dict, Iterable, List, Mapping, Optional, Union

from .club import Team
from .config import DEFAULT_CONFIG, EngineConfig
from .fixtures import Match, MatchEvent, MatchResult, MatchStats, MatchStatus, EventType
from .league import League
from .livefeed import build_commentary_log
from .player import Player, Position, shift_morale
from .ratings import team_match_strength
from .standings import LeagueTableEntry, apply_result_to_table, merge_entries

if TYPE_CHECKING:
    from .state import GameState

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class MatchOutcome:
    updated_fixture: Match
    updated_table_entries: List[LeagueTableEntry] = field(default_factory=list)
    match_events: List[MatchEvent] = field(default_factory=list)


# ---------------------------------
# Hjälpfunktioner
# ---------------------------------

_SCORER_WEIGHT = {
    Position.FW: 6.0,
    Position.MF: 3.0,
    Position.DF: 1.5,
    Position.GK: 0.3,
}


def _team_index(teams) -> Mapping[str, Team]:
    if isinstance(teams, Mapping):
        return teams
    return {t.id: t for t in (teams or []) if t is not None}


def _player_index(players) -> Mapping[str, Player]:
    if isinstance(players, Mapping):
        return players
    return {p.id: p for p in (players or []) if p is not None}


def choose_scorer(
    team: Team, players: Mapping[str, Player], rnd
) -> Optional[str]:
    """Välj målskytt bland startelvan, viktat på position: FW > MF > DF > GK."""
    pool = [players[pid] for pid in team.starters() if pid in players]
    if not pool:
        return None
    weights = [_SCORER_WEIGHT.get(p.general_position, 1.0) for p in pool]
    r = rnd.random() * sum(weights)
    acc = 0.0
    for p, w in zip(pool, weights):
        acc += w
        if r <= acc:
            return p.id
    return pool[-1].id


def derive_stats(home_goals: int, away_goals: int, strength_diff: float) -> MatchStats:
    """Skott och bollinnehav ur resultat och styrkeskillnad (ingen slump)."""
    edge = strength_diff / 10.0

    home_on = home_goals + 1 + max(0, round(edge / 2))
    away_on = away_goals + 1 + max(0, round(-edge / 2))
    home_shots = home_on + 3 + max(0, round(edge))
    away_shots = away_on + 3 + max(0, round(-edge))

    home_pos = max(30, min(70, 50 + round(strength_diff / 2)))
    return MatchStats(
        home_shots=home_shots,
        away_shots=away_shots,
        home_shots_on_target=home_on,
        away_shots_on_target=away_on,
        home_possession=home_pos,
        away_possession=100 - home_pos,
    )


def _forfeit(fixture: Match) -> MatchOutcome:
    updated = replace(
        fixture,
        status=MatchStatus.PLAYED,
        result=MatchResult(0, 0),
        events=[],
        stats=MatchStats(),
        commentary_log=[],
    )
    return MatchOutcome(updated_fixture=updated)


# ---------------------------------
# Snabbsimulering
# ---------------------------------


def resolve_match(
    fixture: Match,
    teams: Union[Iterable[Team], Mapping[str, Team]],
    players: Union[Iterable[Player], Mapping[str, Player]],
    league: Optional[League],
    rng: Optional[random.Random] = None,
    config: EngineConfig | None = None,
) -> MatchOutcome:
    """
    Avgör en match direkt (AI mot AI):
      1) Lagstyrka för båda lagen
      2) Skillnad + slumpmässig svängning avgör antal mål och vem som gynnas
      3) Målminuter, sorterade stigande
      4) Statistik, kommentarer och nya tabellrader
    Fixturen som skickas in ändras inte; en ny returneras.
    """
    rnd = rng or random
    cfg = config or DEFAULT_CONFIG

    if fixture.status is not MatchStatus.SCHEDULED:
        logger.debug("Match %s är redan %s – hoppar över", fixture.id, fixture.status.value)
        return MatchOutcome(updated_fixture=fixture)

    team_ix = _team_index(teams)
    player_ix = _player_index(players)
    home = team_ix.get(fixture.home_team_id)
    away = team_ix.get(fixture.away_team_id)
    if home is None or away is None or league is None or not isinstance(league.table, list):
        logger.warning(
            "Kunde inte hitta lag, liga eller tabell för match %s – sätts till 0-0", fixture.id
        )
        return _forfeit(fixture)

    home_strength = team_match_strength(home, player_ix, True, cfg)
    away_strength = team_match_strength(away, player_ix, False, cfg)
    diff = home_strength - away_strength
    swing = diff + rnd.uniform(-cfg.jitter, cfg.jitter)

    goal_factor = abs(swing) / 50.0
    n_goals = min(cfg.max_goals, int(rnd.random() * (3 + goal_factor * 3)))

    # Favoriten får större andel av målen ju större övertaget är
    share = min(
        cfg.favourite_share_cap,
        cfg.favourite_goal_share + cfg.favourite_share_slope * abs(swing),
    )
    home_share = share if swing > 0 else 1.0 - share

    home_goals = 0
    away_goals = 0
    events: List[MatchEvent] = []
    for _ in range(n_goals):
        minute = rnd.randint(1, 90)
        if rnd.random() < home_share:
            home_goals += 1
            scorer = choose_scorer(home, player_ix, rnd)
            events.append(MatchEvent(minute, EventType.GOAL, home.id, scorer, "Mål"))
        else:
            away_goals += 1
            scorer = choose_scorer(away, player_ix, rnd)
            events.append(MatchEvent(minute, EventType.GOAL, away.id, scorer, "Mål"))
    events.sort(key=lambda e: e.minute)

    updated = replace(
        fixture,
        status=MatchStatus.PLAYED,
        result=MatchResult(home_goals, away_goals),
        events=list(events),
        stats=derive_stats(home_goals, away_goals, diff),
        commentary_log=build_commentary_log(
            events,
            home.id,
            home.name,
            away.name,
            half_time=cfg.half_time_minute,
            full_time=cfg.full_time_minute,
        ),
    )

    entries = apply_result_to_table(league.table, home.id, away.id, home_goals, away_goals)
    if entries is None:
        logger.warning("Tabellrad saknas för match %s – tabellen lämnas orörd", fixture.id)
        table_entries: List[LeagueTableEntry] = []
    else:
        table_entries = list(entries)

    return MatchOutcome(updated, table_entries, events)


# ---------------------------------
# Slå ihop resultat i spelläget
# ---------------------------------


def replace_fixture(league: League, fixture: Match) -> None:
    league.fixtures = [fixture if m.id == fixture.id else m for m in league.fixtures]
    league.current_matchday = max(league.current_matchday, int(fixture.round or 0))


def record_appearances(state: "GameState", fixture: Match) -> None:
    """Säsongsstatistik: framträdanden för startelvorna och mål för målskyttarna."""
    players = state.players_index()
    for team_id in (fixture.home_team_id, fixture.away_team_id):
        team = state.team_by_id(team_id)
        if team is None:
            continue
        for pid in team.starters():
            player = players.get(pid)
            if player is not None:
                player.seasonal_stats.appearances += 1
    for ev in fixture.events:
        if ev.type is EventType.GOAL and ev.player_id in players:
            players[ev.player_id].seasonal_stats.goals += 1


def update_morale(state: "GameState", fixture: Match) -> None:
    """Vinst höjer startelvans moral ett steg, förlust sänker den. Oavgjort lämnas."""
    home_goals, away_goals = fixture.result.home_score, fixture.result.away_score
    if home_goals == away_goals:
        return
    players = state.players_index()
    home_won = home_goals > away_goals
    for team_id, won in ((fixture.home_team_id, home_won), (fixture.away_team_id, not home_won)):
        team = state.team_by_id(team_id)
        if team is None:
            continue
        for pid in team.starters():
            player = players.get(pid)
            if player is not None:
                player.morale = shift_morale(player.morale, 1 if won else -1)


def apply_outcome(state: "GameState", outcome: MatchOutcome) -> None:
    """Skriver in en avgjord match i ligan (fixtur + tabell) i `state`."""
    fixture = outcome.updated_fixture
    found = state.find_match(fixture.id)
    if found is None:
        logger.warning("Match %s finns inte i någon liga", fixture.id)
        return
    league, current = found
    if current.status is MatchStatus.PLAYED and current is fixture:
        return
    replace_fixture(league, fixture)
    if outcome.updated_table_entries:
        league.table = merge_entries(league.table, outcome.updated_table_entries)
    if fixture.events or fixture.commentary_log:
        record_appearances(state, fixture)
        update_morale(state, fixture)


def result_summary(state: "GameState", fixture: Match) -> Dict[str, str]:
    home = state.team_by_id(fixture.home_team_id)
    away = state.team_by_id(fixture.away_team_id)
    h = home.name if home else fixture.home_team_id
    a = away.name if away else fixture.away_team_id
    score = f"{fixture.result.home_score}–{fixture.result.away_score}"
    return {
        "subject": f"{h} {score} {a}",
        "message": f"{h} och {a} möttes, slutresultat {score}.",
    }
