from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, Optional

from .player import SKILL_ATTRIBUTES, Morale, Personality, Player, morale_enum
from .state import GameState


class DevelopmentType(Enum):
    IMPROVEMENT = "improvement"
    DECLINE = "decline"
    BREAKTHROUGH = "breakthrough"
    SETBACK = "setback"


@dataclass(slots=True)
class DevelopmentFactors:
    training_facility_bonus: float
    morale_factor: float
    personality_factor: float
    age_factor: float
    playtime_factor: float


@dataclass(slots=True)
class DevelopmentEvent:
    player_id: str
    type: DevelopmentType
    attribute: str
    change: float
    reason: str


@dataclass(slots=True)
class TrainingResult:
    updated_players: List[Player] = field(default_factory=list)
    development_events: List[DevelopmentEvent] = field(default_factory=list)


BASE_PROBABILITY = 0.3  # chans per attribut och vecka
MAX_PROBABILITY = 0.8
DECLINE_ABOVE_POTENTIAL = -0.1
BREAKTHROUGH_THRESHOLD = 2.0
NOTABLE_THRESHOLD = 0.5

MORALE_FACTOR: Dict[Morale, float] = {
    Morale.ECSTATIC: 1.3,
    Morale.HAPPY: 1.2,
    Morale.CONTENT: 1.0,
    Morale.UNSETTLED: 0.9,
    Morale.UNHAPPY: 0.8,
    Morale.VERY_UNHAPPY: 0.7,
}


# --------- Faktorer ---------


def personality_factor(personality: Optional[Personality]) -> float:
    if personality is None:
        return 1.0
    ambition = personality.ambition / 100 * 0.3
    professionalism = personality.professionalism / 100 * 0.7
    return 0.8 + ambition + professionalism


def age_factor(age: int) -> float:
    if age < 18:
        return 1.2
    if age < 24:
        return 1.1
    if age < 28:
        return 1.0
    if age < 32:
        return 0.9
    return 0.7


def playtime_factor(appearances: int) -> float:
    if appearances >= 20:
        return 1.2
    if appearances >= 10:
        return 1.1
    if appearances >= 5:
        return 1.0
    return 0.8


def development_factors(player: Player, state: GameState) -> DevelopmentFactors:
    team = state.team_by_id(player.contract.club_id) if player.contract else None
    facility = team.training_facilities_level * 0.1 if team else 0.0
    return DevelopmentFactors(
        training_facility_bonus=facility,
        morale_factor=MORALE_FACTOR.get(morale_enum(player.morale), 1.0),
        personality_factor=personality_factor(player.personality),
        age_factor=age_factor(player.age),
        playtime_factor=playtime_factor(player.seasonal_stats.appearances),
    )


def development_probability(f: DevelopmentFactors) -> float:
    p = BASE_PROBABILITY * (
        1
        + f.training_facility_bonus
        + (f.morale_factor - 1)
        + (f.personality_factor - 1)
        + (f.playtime_factor - 1)
    )
    return max(0.0, min(MAX_PROBABILITY, p))


def _stat_change(current: float, potential: float, chance: float, f: DevelopmentFactors, rnd) -> float:
    if rnd.random() > chance:
        return 0.0
    headroom = potential - current
    if headroom <= 0:
        return DECLINE_ABOVE_POTENTIAL
    base = rnd.random() * 0.3 * (headroom / 20)
    total = f.training_facility_bonus + (
        f.morale_factor * f.personality_factor * f.age_factor * f.playtime_factor
    )
    # aldrig över taket på en vecka
    return min(headroom, base * total)


def _reason(player: Player, attribute: str, change: float) -> str:
    label = attribute.replace("_", " ")
    if change > 0:
        return f"{player.name}s {label} har förbättrats genom idogt träningsarbete."
    return f"{player.name}s {label} har försämrats i brist på matchträning."


def _classify(change: float) -> Optional[DevelopmentType]:
    if abs(change) >= BREAKTHROUGH_THRESHOLD:
        return DevelopmentType.BREAKTHROUGH if change > 0 else DevelopmentType.SETBACK
    if abs(change) >= NOTABLE_THRESHOLD:
        return DevelopmentType.IMPROVEMENT if change > 0 else DevelopmentType.DECLINE
    return None


# --------- API ---------


def develop_player(
    player: Player, state: GameState, rnd
) -> tuple[Player, List[DevelopmentEvent]]:
    factors = development_factors(player, state)
    chance = development_probability(factors)
    potential = float(player.stats.potential)

    changes: Dict[str, float] = {}
    events: List[DevelopmentEvent] = []
    for attr in SKILL_ATTRIBUTES:
        old = getattr(player.stats, attr)
        if not isinstance(old, (int, float)):
            continue
        delta = _stat_change(float(old), potential, chance, factors, rnd)
        if delta == 0:
            continue
        new = max(1.0, min(99.0, old + delta))
        changes[attr] = new
        kind = _classify(new - old)
        if kind is not None:
            events.append(
                DevelopmentEvent(
                    player_id=player.id,
                    type=kind,
                    attribute=attr,
                    change=new - old,
                    reason=_reason(player, attr, new - old),
                )
            )

    if not changes:
        return replace(player, stats=replace(player.stats)), events
    return replace(player, stats=replace(player.stats, **changes)), events


def process_weekly_training(
    state: GameState, rng: Optional[random.Random] = None
) -> TrainingResult:
    """
    Veckans utvecklingspass för alla spelare. Spelarna i `state` lämnas
    orörda; en ny spelarlista returneras tillsammans med notiser om
    större förändringar.
    """
    rnd = rng or random
    result = TrainingResult()
    for player in state.players:
        if player is None:
            continue
        updated, events = develop_player(player, state, rnd)
        result.updated_players.append(updated)
        result.development_events.extend(events)
    return result


def apply_training(state: GameState, result: TrainingResult) -> None:
    """Slår ihop träningsresultatet i `state` och skriver nyheter för det egna laget."""
    by_id = {p.id: p for p in result.updated_players}
    state.players = [by_id.get(p.id, p) if p is not None else p for p in state.players]
    state.last_training_date = state.current_date

    own = set()
    team = state.team_by_id(state.player_team_id)
    if team is not None:
        own = set(team.player_ids) | set(team.squad.all_ids())
    for ev in result.development_events:
        if ev.player_id not in own or ev.type not in (
            DevelopmentType.BREAKTHROUGH,
            DevelopmentType.SETBACK,
        ):
            continue
        subject = "Genombrott på träningen" if ev.type is DevelopmentType.BREAKTHROUGH else "Bakslag på träningen"
        state.add_news("development", subject, ev.reason, team_id=state.player_team_id)


def run_weekly_training(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    gs = state.copy()
    apply_training(gs, process_weekly_training(gs, rng))
    return gs
