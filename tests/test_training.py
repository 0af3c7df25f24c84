import datetime as dt
import random

import pytest

from kickoff.core.club import Squad, Team
from kickoff.core.player import (
    SKILL_ATTRIBUTES,
    Contract,
    Morale,
    Personality,
    Player,
    PlayerStats,
    Position,
)
from kickoff.core.state import GameState
from kickoff.core.training import (
    DevelopmentEvent,
    DevelopmentFactors,
    DevelopmentType,
    TrainingResult,
    age_factor,
    apply_training,
    development_probability,
    personality_factor,
    playtime_factor,
    process_weekly_training,
    run_weekly_training,
)

TODAY = dt.date(2025, 3, 3)


def _make_player(pid: str, level: float = 50.0, potential: float = 80.0, age: int = 19) -> Player:
    stats = PlayerStats(**{name: level for name in SKILL_ATTRIBUTES}, potential=potential)
    return Player(
        id=pid,
        name=f"Spelare {pid}",
        age=age,
        position="MF",
        general_position=Position.MF,
        stats=stats,
        personality=Personality(ambition=80, professionalism=90),
        contract=Contract(club_id="h"),
        morale=Morale.HAPPY,
    )


def _make_state(players) -> GameState:
    team = Team(
        id="h",
        name="Hemmalaget",
        player_ids=[p.id for p in players],
        squad=Squad(starting_xi=[p.id for p in players]),
        training_facilities_level=3,
        is_human=True,
    )
    return GameState(current_date=TODAY, season_year=2025, player_team_id="h", teams=[team], players=list(players))


def test_factor_tables():
    assert personality_factor(Personality(ambition=50, professionalism=50)) == pytest.approx(1.3)
    assert personality_factor(None) == 1.0
    assert [age_factor(a) for a in (17, 23, 24, 31, 32)] == [1.2, 1.1, 1.0, 0.9, 0.7]
    assert [playtime_factor(n) for n in (25, 10, 5, 0)] == [1.2, 1.1, 1.0, 0.8]


def test_probability_is_capped():
    high = DevelopmentFactors(1.0, 1.3, 1.7, 1.2, 1.2)
    assert development_probability(high) == 0.8
    low = DevelopmentFactors(0.0, 0.7, 0.8, 0.7, 0.8)
    assert 0.0 <= development_probability(low) < 0.3


def test_training_does_not_mutate_input_players():
    gs = _make_state([_make_player(f"p{i}") for i in range(11)])
    before = [p.stats.as_dict() for p in gs.players]

    result = process_weekly_training(gs, random.Random(3))

    assert [p.stats.as_dict() for p in gs.players] == before
    assert len(result.updated_players) == len(gs.players)
    assert all(new is not old for new, old in zip(result.updated_players, gs.players))
    assert any(new.stats.as_dict() != old for new, old in zip(result.updated_players, before))


def test_growth_never_passes_potential():
    gs = _make_state([_make_player(f"p{i}", level=60, potential=70, age=17) for i in range(3)])
    rng = random.Random(42)
    for _ in range(500):
        apply_training(gs, process_weekly_training(gs, rng))

    for p in gs.players:
        for name in SKILL_ATTRIBUTES:
            assert getattr(p.stats, name) <= 70 + 1e-6
    assert max(getattr(p.stats, n) for p in gs.players for n in SKILL_ATTRIBUTES) > 69


def test_stats_stay_within_bounds():
    gs = _make_state([_make_player("low", level=1, potential=1), _make_player("high", level=99, potential=99)])
    rng = random.Random(9)
    for _ in range(50):
        apply_training(gs, process_weekly_training(gs, rng))
    for p in gs.players:
        assert all(1 <= getattr(p.stats, n) <= 99 for n in SKILL_ATTRIBUTES)


def test_events_carry_player_and_attribute():
    gs = _make_state([_make_player(f"p{i}", level=30, potential=99, age=16) for i in range(11)])
    result = process_weekly_training(gs, random.Random(7))
    assert result.development_events
    for ev in result.development_events:
        assert ev.attribute in SKILL_ATTRIBUTES
        assert abs(ev.change) >= 0.5
        assert gs.player_by_id(ev.player_id).name in ev.reason


def test_apply_training_adds_news_for_own_breakthroughs():
    player = _make_player("p1")
    gs = _make_state([player])
    improved = _make_player("p1", level=53)
    result = TrainingResult(
        updated_players=[improved],
        development_events=[
            DevelopmentEvent("p1", DevelopmentType.BREAKTHROUGH, "passing", 3.0, "Spelare p1s passing lyfte."),
            DevelopmentEvent("p1", DevelopmentType.IMPROVEMENT, "pace", 0.6, "Spelare p1s pace blev bättre."),
            DevelopmentEvent("x9", DevelopmentType.BREAKTHROUGH, "pace", 2.5, "Någon annan."),
        ],
    )
    apply_training(gs, result)
    assert gs.players[0].stats.passing == 53
    assert gs.last_training_date == TODAY
    assert len(gs.news) == 1
    assert gs.news[0].type == "development"
    assert gs.news[0].team_id == "h"


def test_run_weekly_training_returns_new_state():
    gs = _make_state([_make_player("p1")])
    trained = run_weekly_training(gs, random.Random(1))
    assert trained is not gs
    assert gs.last_training_date is None
    assert trained.last_training_date == TODAY
