import datetime as dt
import json
import random
from pathlib import Path

from kickoff.core.fixtures import MatchStatus
from kickoff.core.generator import generate_world
from kickoff.core.live import start_live_match, tick_live_match
from kickoff.core.livefeed import LiveStatus
from kickoff.core.player import Morale, Position
from kickoff.core.season import advance_time, next_match_for_team
from kickoff.core.state import GameState
from kickoff.core.tactics import Mentality


def test_snapshot_keeps_played_results_and_players(tmp_path: Path):
    gs = generate_world(n_teams=4, rng=random.Random(1))
    gs.teams[1].tactics.mentality = Mentality.DEFENSIVE
    gs.players[0].morale = Morale.UNHAPPY
    gs = advance_time(gs, 6, random.Random(2))

    path = tmp_path / "saves" / "career.json"
    gs.save(path)
    loaded = GameState.load(path)

    assert loaded.current_date == gs.current_date
    assert loaded.player_team_id == gs.player_team_id
    assert loaded.last_training_date == gs.last_training_date
    assert loaded.autosave_counter == gs.autosave_counter
    assert len(loaded.players) == len(gs.players)
    assert loaded.players[0].morale is Morale.UNHAPPY
    assert loaded.players[0].general_position is gs.players[0].general_position
    assert loaded.players[0].stats == gs.players[0].stats
    assert loaded.teams[1].tactics.mentality is Mentality.DEFENSIVE
    assert loaded.teams[0].squad.starting_xi == gs.teams[0].squad.starting_xi
    assert [m.status for m in loaded.all_fixtures()] == [m.status for m in gs.all_fixtures()]
    assert loaded.leagues[0].table == gs.leagues[0].table
    assert [n.subject for n in loaded.news] == [n.subject for n in gs.news]

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["current_date"] == gs.current_date.isoformat()


def test_live_match_survives_snapshot():
    gs = generate_world(n_teams=4, rng=random.Random(3))
    gs = start_live_match(gs, next_match_for_team(gs).id)
    rng = random.Random(4)
    for _ in range(30):
        gs = tick_live_match(gs, rng)

    loaded = GameState.from_dict(gs.to_dict())
    live = loaded.live_match
    assert live.minute == 30
    assert live.status is LiveStatus.PLAYING
    assert (live.home_score, live.away_score) == (gs.live_match.home_score, gs.live_match.away_score)
    assert [c.text for c in live.commentary] == [c.text for c in gs.live_match.commentary]
    assert loaded.find_match(live.match_id)[1].status is MatchStatus.IN_PROGRESS


def test_missing_fields_fall_back_to_defaults():
    data = {
        "current_date": "2025-04-01",
        "teams": [{"id": "a", "name": "A"}, {"id": "b"}],
        "players": [{"id": "p1", "name": "Nisse", "position": "FW"}],
        "leagues": [
            {
                "id": "l1",
                "name": "Ligan",
                "team_ids": ["a", "b"],
                "fixtures": [{"id": "m1", "home_team_id": "a", "away_team_id": "b"}],
            }
        ],
    }
    gs = GameState.from_dict(data)

    assert gs.current_date == dt.date(2025, 4, 1)
    assert gs.season_year == 2025
    assert gs.news == []
    assert gs.live_match is None
    assert gs.settings.autosave_interval == 7
    assert gs.autosave_counter == 0
    assert [r.team_id for r in gs.leagues[0].table] == ["a", "b"]

    fixture = gs.leagues[0].fixtures[0]
    assert fixture.status is MatchStatus.SCHEDULED
    assert fixture.date == dt.date(2025, 4, 1)

    player = gs.players[0]
    assert player.general_position is Position.FW
    assert player.seasonal_stats.appearances == 0
    assert player.stats.passing == 50
    assert player.morale is Morale.CONTENT
    assert gs.teams[1].tactics.mentality is Mentality.BALANCED


def test_unknown_enum_values_are_tolerated():
    data = {
        "current_date": "2025-04-01",
        "players": [{"id": "p1", "general_position": "ZZ", "morale": "Grumpy"}],
        "leagues": [
            {"id": "l1", "team_ids": [], "fixtures": [{"id": "m1", "status": "postponed"}]}
        ],
        "live_match": {"match_id": "m1", "status": "weird"},
    }
    gs = GameState.from_dict(data)
    assert gs.players[0].general_position is Position.MF
    assert gs.players[0].morale is Morale.CONTENT
    assert gs.leagues[0].fixtures[0].status is MatchStatus.SCHEDULED
    assert gs.live_match.status is LiveStatus.PAUSED
