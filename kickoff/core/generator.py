from __future__ import annotations

import datetime as dt
import random
from typing import List, Optional, Sequence

from .club import Finances, Team, auto_pick_squad
from .fixtures import round_robin
from .league import League
from .player import (
    SKILL_ATTRIBUTES,
    Contract,
    Personality,
    Player,
    PlayerStats,
    Position,
)
from .ratings import POSITION_WEIGHTS
from .state import GameState

# Demovärld för CLI och tester. Ingen riktig karriärgenerering.

FIRST_NAMES = (
    "Erik", "Johan", "Anders", "Oskar", "Viktor", "Emil", "Linus", "Albin",
    "Hugo", "Filip", "Adam", "Simon", "Marcus", "Jonas", "Isak", "Noah",
)
LAST_NAMES = (
    "Andersson", "Johansson", "Karlsson", "Nilsson", "Eriksson", "Larsson",
    "Olsson", "Persson", "Svensson", "Gustafsson", "Pettersson", "Lindberg",
    "Holm", "Berg", "Lund", "Ek",
)
TEAM_NAMES = (
    "Norrby IF", "Ekdala FF", "Sjöviks BK", "Hammarby Södra", "Lindö IK",
    "Bergsjö AIK", "Ljungby Forward", "Vallens GoIF", "Åkersberga SK",
    "Tallbacka FC", "Strandvik IS", "Granhult United",
)

# 2 GK, 7 DF, 7 MF, 5 FW → 21 spelare
SQUAD_LAYOUT = ((Position.GK, 2), (Position.DF, 7), (Position.MF, 7), (Position.FW, 5))


def _rand_age(rnd) -> int:
    r = rnd.random()
    if r < 0.55:
        return rnd.randint(18, 27)
    if r < 0.85:
        return rnd.randint(16, 32)
    return rnd.randint(33, 36)


def _rand_stats(position: Position, level: float, rnd) -> PlayerStats:
    # positionens viktiga färdigheter hamnar runt `level`, övriga lägre
    key = POSITION_WEIGHTS[position.value]
    values = {}
    for attr in SKILL_ATTRIBUTES:
        centre = level if attr in key else level - 15
        values[attr] = float(max(1, min(99, round(rnd.gauss(centre, 6)))))
    potential = max(level, min(99, round(level + rnd.uniform(0, 20))))
    return PlayerStats(
        **values,
        potential=float(potential),
        consistency=float(rnd.randint(1, 20)),
        injury_proneness=float(rnd.randint(1, 20)),
    )


def generate_player(
    player_id: str,
    position: Position,
    *,
    club_id: Optional[str] = None,
    level: float = 55.0,
    rng: Optional[random.Random] = None,
) -> Player:
    rnd = rng or random
    name = f"{rnd.choice(FIRST_NAMES)} {rnd.choice(LAST_NAMES)}"
    return Player(
        id=player_id,
        name=name,
        age=_rand_age(rnd),
        position=position.value,
        general_position=position,
        stats=_rand_stats(position, level, rnd),
        personality=Personality(
            ambition=rnd.randint(20, 90),
            professionalism=rnd.randint(20, 90),
            loyalty=rnd.randint(20, 90),
            leadership=rnd.randint(20, 90),
            temperament=rnd.randint(20, 90),
        ),
        contract=Contract(club_id=club_id, wage=rnd.randint(5, 40) * 1000),
        form=rnd.randint(4, 7),
    )


def generate_team(
    team_id: str,
    name: str,
    league_id: str,
    *,
    level: float = 55.0,
    rng: Optional[random.Random] = None,
) -> tuple[Team, List[Player]]:
    rnd = rng or random
    players: List[Player] = []
    n = 1
    for pos, count in SQUAD_LAYOUT:
        for _ in range(count):
            players.append(
                generate_player(f"{team_id}-p{n:02d}", pos, club_id=team_id, level=level, rng=rnd)
            )
            n += 1

    team = Team(
        id=team_id,
        name=name,
        short_name=name[:3].upper(),
        league_id=league_id,
        player_ids=[p.id for p in players],
        finances=Finances(balance=rnd.randint(1, 10) * 1_000_000),
        training_facilities_level=rnd.randint(0, 3),
    )
    team.squad = auto_pick_squad(team, {p.id: p for p in players})
    return team, players


def _unique_team_names(n: int) -> List[str]:
    out: List[str] = []
    i = 0
    while len(out) < n:
        name = TEAM_NAMES[i % len(TEAM_NAMES)]
        suffix = i // len(TEAM_NAMES)
        out.append(name if suffix == 0 else f"{name} {suffix + 1}")
        i += 1
    return out


def generate_world(
    *,
    n_teams: int = 8,
    season_year: int = 2025,
    human_index: int = 0,
    names: Optional[Sequence[str]] = None,
    rng: Optional[random.Random] = None,
) -> GameState:
    """
    Bygger ett komplett startläge: en liga med `n_teams` lag, trupper,
    dubbelmötesschema med omgång var sjunde dag och en tom tabell.
    Lag nummer `human_index` styrs av spelaren.
    """
    rnd = rng or random
    n_teams = max(2, int(n_teams))
    league_id = "l-1"
    team_names = list(names or [])
    # fyll på med standardnamn om listan är för kort
    for extra in _unique_team_names(n_teams):
        if len(team_names) >= n_teams:
            break
        if extra not in team_names:
            team_names.append(extra)

    teams: List[Team] = []
    players: List[Player] = []
    for i in range(n_teams):
        level = rnd.uniform(45, 70)
        team, squad = generate_team(f"t-{i + 1:02d}", team_names[i], league_id, level=level, rng=rnd)
        teams.append(team)
        players.extend(squad)

    human = teams[human_index % n_teams]
    human.is_human = True

    start = dt.date(season_year, 3, 1)
    # första omgången på lördagen efter start
    first_round = start + dt.timedelta(days=(5 - start.weekday()) % 7 or 7)
    league = League(
        id=league_id,
        name="Allsvenskan",
        team_ids=[t.id for t in teams],
        fixtures=round_robin([t.id for t in teams], league_id, first_round),
        promotion_spots=0,
        relegation_spots=2,
    )

    gs = GameState(
        current_date=start,
        season_year=season_year,
        player_team_id=human.id,
        teams=teams,
        players=players,
        leagues=[league],
    )
    gs.ensure_containers()
    gs.add_news(
        "general",
        f"Välkommen till {human.name}",
        f"Säsongen {season_year} börjar {first_round.isoformat()}.",
        team_id=human.id,
    )
    return gs
