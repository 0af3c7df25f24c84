from __future__ import annotations

import math
from typing import Dict, Iterable, Mapping, Optional, Union

from .club import Team
from .config import DEFAULT_CONFIG, EngineConfig
from .player import META_ATTRIBUTES, SKILL_ATTRIBUTES, Morale, Player, PlayerStats, morale_enum
from .tactics import mentality_multiplier

ABILITY_FLOOR = 20

# Allroundegenskaper som räknas in för alla utespelare och målvakter
_ALL_ROUNDER = {"work_rate": 1.0, "stamina": 1.0, "composure": 1.0}

POSITION_WEIGHTS: Dict[str, Dict[str, float]] = {
    "GK": {
        "handling": 3.0,
        "reflexes": 3.0,
        "positioning": 2.0,
        "strength": 1.0,
        "pace": 0.5,
        **_ALL_ROUNDER,
    },
    "DF": {
        "tackling": 3.0,
        "heading": 2.0,
        "positioning": 2.0,
        "strength": 1.5,
        "pace": 1.0,
        "aggression": 1.0,
        **_ALL_ROUNDER,
    },
    "MF": {
        "passing": 2.5,
        "vision": 2.0,
        "technique": 2.0,
        "dribbling": 1.5,
        "positioning": 1.5,
        "tackling": 1.0,
        **_ALL_ROUNDER,
    },
    "FW": {
        "shooting": 3.0,
        "heading": 1.5,
        "dribbling": 1.5,
        "pace": 1.5,
        "technique": 1.5,
        "strength": 0.5,
        "positioning": 1.0,
        **_ALL_ROUNDER,
    },
}

# Okänd position → alla färdigheter lika mycket
DEFAULT_WEIGHTS: Dict[str, float] = {name: 1.0 for name in SKILL_ATTRIBUTES}

MORALE_MULTIPLIER: Dict[Morale, float] = {
    Morale.ECSTATIC: 1.10,
    Morale.HAPPY: 1.05,
    Morale.CONTENT: 1.00,
    Morale.UNSETTLED: 0.98,
    Morale.UNHAPPY: 0.95,
    Morale.VERY_UNHAPPY: 0.95,
}

StatsLike = Union[PlayerStats, Mapping[str, float]]


def _stat_value(stats: StatsLike, name: str) -> Optional[float]:
    if isinstance(stats, Mapping):
        raw = stats.get(name)
    else:
        raw = getattr(stats, name, None)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    if math.isnan(raw) or math.isinf(raw):
        return None
    return float(raw)


def _weights_for(general_position) -> Dict[str, float]:
    key = getattr(general_position, "value", general_position)
    key = str(key).upper() if key is not None else ""
    return POSITION_WEIGHTS.get(key, DEFAULT_WEIGHTS)


def current_ability(stats: StatsLike, general_position) -> int:
    """
    Samlat förmågevärde (0–100) för en spelare på sin position.
    Viktat medel av de attribut som positionen bryr sig om. Saknas vikter
    eller användbara värden returneras golvet 20 – funktionen kastar aldrig.
    """
    if stats is None:
        return ABILITY_FLOOR
    weights = _weights_for(general_position)
    if not weights:
        return ABILITY_FLOOR

    weighted_sum = 0.0
    total_weight = 0.0
    for name, weight in weights.items():
        if name in META_ATTRIBUTES:
            continue
        value = _stat_value(stats, name)
        if value is None:
            continue
        weighted_sum += value * weight
        total_weight += weight

    if total_weight <= 0:
        return ABILITY_FLOOR
    return max(0, min(100, int(round(weighted_sum / total_weight))))


def player_ability(player: Player) -> int:
    return current_ability(player.stats, player.general_position)


def _player_index(players) -> Mapping[str, Player]:
    if isinstance(players, Mapping):
        return players
    return {p.id: p for p in (players or []) if p is not None}


def _fitness_ratio(stats: StatsLike) -> float:
    stamina = _stat_value(stats, "stamina") if stats is not None else None
    if stamina is None:
        return 0.5
    return stamina / 100.0


def team_match_strength(
    team: Team,
    players: Union[Iterable[Player], Mapping[str, Player]],
    is_home: bool,
    config: EngineConfig | None = None,
) -> float:
    """
    Lagets matchstyrka: snitt av startelvans förmåga × moral × kondition,
    sedan hemmafördel och mentalitet. Ren funktion, inget muteras.
    """
    cfg = config or DEFAULT_CONFIG
    squad = getattr(team, "squad", None)
    starters = list(getattr(squad, "starting_xi", []) or [])[:11]
    if not starters:
        return cfg.empty_team_strength

    index = _player_index(players)
    total = 0.0
    for pid in starters:
        player = index.get(pid)
        if player is None or player.stats is None:
            continue
        ability = current_ability(player.stats, player.general_position)
        morale = MORALE_MULTIPLIER.get(morale_enum(player.morale), 1.0)
        total += ability * morale * _fitness_ratio(player.stats)

    average = total / len(starters)
    home = 1.0 + cfg.home_advantage if is_home else 1.0
    tactics = getattr(team, "tactics", None)
    tactic = mentality_multiplier(getattr(tactics, "mentality", None))
    return average * home * tactic
