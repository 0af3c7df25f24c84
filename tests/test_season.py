import datetime as dt
import random

from kickoff.core.club import Squad, Team
from kickoff.core.config import EngineConfig
from kickoff.core.fixtures import Match, MatchStatus
from kickoff.core.league import League
from kickoff.core.live import end_live_match, start_live_match
from kickoff.core.player import SKILL_ATTRIBUTES, Player, PlayerStats, Position
from kickoff.core.season import (
    advance_time,
    advance_time_chunked,
    autosave_due,
    days_until_next_match,
    league_standings,
    next_match_for_team,
)
from kickoff.core.standings import table_is_consistent
from kickoff.core.state import GameState

START = dt.date(2025, 3, 2)  # söndag


def _day(n: int) -> dt.date:
    return START + dt.timedelta(days=n)


def _make_team(tid: str, level: float):
    layout = [Position.GK] + [Position.DF] * 4 + [Position.MF] * 4 + [Position.FW] * 2
    players = [
        Player(
            id=f"{tid}-{i}",
            name=f"Spelare {tid}{i}",
            age=22,
            position=pos.value,
            general_position=pos,
            stats=PlayerStats(**{name: level for name in SKILL_ATTRIBUTES}, potential=80),
        )
        for i, pos in enumerate(layout)
    ]
    team = Team(
        id=tid,
        name=f"Lag {tid}",
        league_id="l1",
        player_ids=[p.id for p in players],
        squad=Squad(starting_xi=[p.id for p in players]),
        is_human=tid == "t1",
    )
    return team, players


def _fixture(mid: str, home: str, away: str, day: int) -> Match:
    return Match(id=mid, home_team_id=home, away_team_id=away, date=_day(day), league_id="l1", round=day)


def _make_state() -> GameState:
    teams, players = [], []
    for i, level in enumerate((60, 55, 65, 50), start=1):
        team, squad = _make_team(f"t{i}", level)
        teams.append(team)
        players.extend(squad)
    league = League(
        id="l1",
        name="Testligan",
        team_ids=[t.id for t in teams],
        fixtures=[
            _fixture("m1", "t3", "t4", 1),
            _fixture("m2", "t1", "t2", 2),
            _fixture("m3", "t4", "t3", 2),
            _fixture("m4", "t2", "t1", 3),
        ],
    )
    gs = GameState(
        current_date=START,
        season_year=2025,
        player_team_id="t1",
        teams=teams,
        players=players,
        leagues=[league],
    )
    gs.ensure_containers()
    return gs


def _status(gs: GameState, mid: str) -> MatchStatus:
    return gs.find_match(mid)[1].status


def test_advance_stops_on_own_match_day():
    gs = _make_state()
    out = advance_time(gs, 3, random.Random(1))

    assert out.current_date == _day(2)
    assert out.live_match is not None
    assert out.live_match.match_id == "m2"
    assert out.autosave_counter == 1
    assert out.pending_match_day == _day(2)
    assert _status(out, "m1") is MatchStatus.PLAYED
    assert _status(out, "m2") is MatchStatus.IN_PROGRESS
    assert _status(out, "m3") is MatchStatus.SCHEDULED
    assert _status(out, "m4") is MatchStatus.SCHEDULED
    assert any(n.type == "match_result" for n in out.news)

    # ursprungsläget orört
    assert gs.current_date == START
    assert _status(gs, "m1") is MatchStatus.SCHEDULED


def test_pending_match_day_is_settled_on_next_advance():
    gs = advance_time(_make_state(), 3, random.Random(1))
    assert advance_time(gs, 1, random.Random(2)) is gs  # livematch pågår

    gs = end_live_match(gs)
    settled = advance_time(gs, 0, random.Random(2))
    assert settled.current_date == _day(2)
    assert settled.pending_match_day is None
    assert settled.autosave_counter == 2
    assert _status(settled, "m3") is MatchStatus.PLAYED

    nxt = advance_time(settled, 1, random.Random(3))
    assert nxt.current_date == _day(3)
    assert nxt.live_match.match_id == "m4"
    assert table_is_consistent(nxt.leagues[0].table)


def test_invalid_day_counts_do_nothing():
    gs = _make_state()
    assert advance_time(gs, -1) is gs
    assert advance_time(gs, 0) is gs
    assert advance_time(gs, "3") is gs
    assert advance_time(gs, True) is gs


def test_training_runs_once_on_training_weekday():
    gs = _make_state()
    cfg = EngineConfig(training_weekday=_day(1).weekday())
    out = advance_time(gs, 1, random.Random(4), cfg)
    assert out.last_training_date == _day(1)
    changed = [
        p for p, q in zip(out.players, gs.players) if p.stats.as_dict() != q.stats.as_dict()
    ]
    assert changed

    # annan veckodag → ingen träning
    cfg_other = EngineConfig(training_weekday=_day(3).weekday())
    assert advance_time(gs, 1, random.Random(4), cfg_other).last_training_date is None


def test_chunked_advance_matches_single_run():
    gs = _make_state()
    gs.leagues[0].fixtures = [m for m in gs.leagues[0].fixtures if not m.involves("t1")]
    single = advance_time(gs, 10, random.Random(7))
    chunks = list(advance_time_chunked(gs, 10, 3, random.Random(7)))

    assert len(chunks) == 4
    last = chunks[-1]
    assert last.current_date == single.current_date == _day(10)
    assert last.autosave_counter == single.autosave_counter == 10
    assert [m.result.scoreline for m in last.all_fixtures()] == [
        m.result.scoreline for m in single.all_fixtures()
    ]
    assert [p.stats.as_dict() for p in last.players] == [p.stats.as_dict() for p in single.players]


def test_chunked_advance_stops_at_live_match():
    chunks = list(advance_time_chunked(_make_state(), 14, 1, random.Random(1)))
    assert len(chunks) == 2
    assert chunks[-1].live_match is not None


def test_next_match_lookup():
    gs = _make_state()
    m = next_match_for_team(gs)
    assert m.id == "m2"
    assert days_until_next_match(gs) == 2
    assert next_match_for_team(gs, "t3").id == "m1"
    assert next_match_for_team(gs, "okänd") is None
    assert days_until_next_match(gs, "okänd") is None

    live = start_live_match(gs, "m2")
    assert next_match_for_team(live).id == "m2"


def test_league_standings_sorted():
    gs = advance_time(_make_state(), 1, random.Random(5))
    rows = league_standings(gs.leagues[0])
    assert [r.position for r in rows] == [1, 2, 3, 4]
    assert rows[0].points >= rows[-1].points


def test_autosave_due():
    gs = _make_state()
    assert not autosave_due(gs)
    gs.autosave_counter = gs.settings.autosave_interval
    assert autosave_due(gs)
