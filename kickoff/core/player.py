from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Optional


class Position(Enum):
    GK = "GK"
    DF = "DF"
    MF = "MF"
    FW = "FW"


class Morale(Enum):
    ECSTATIC = "Ecstatic"
    HAPPY = "Happy"
    CONTENT = "Content"
    UNSETTLED = "Unsettled"
    UNHAPPY = "Unhappy"
    VERY_UNHAPPY = "Very Unhappy"


# Sämst → bäst
MORALE_LADDER = (
    Morale.VERY_UNHAPPY,
    Morale.UNHAPPY,
    Morale.UNSETTLED,
    Morale.CONTENT,
    Morale.HAPPY,
    Morale.ECSTATIC,
)


def shift_morale(morale: Morale, steps: int) -> Morale:
    """Flyttar moralen `steps` nivåer upp (positivt) eller ner, inom skalan."""
    idx = MORALE_LADDER.index(morale) + steps
    return MORALE_LADDER[max(0, min(len(MORALE_LADDER) - 1, idx))]


# Attribut som inte tränas (tak och dolda egenskaper)
META_ATTRIBUTES = ("potential", "consistency", "injury_proneness")


@dataclass(slots=True)
class PlayerStats:
    # Färdigheter (1–99)
    passing: float = 50
    shooting: float = 50
    tackling: float = 50
    dribbling: float = 50
    heading: float = 50
    technique: float = 50
    handling: float = 50
    reflexes: float = 50
    aggression: float = 50
    positioning: float = 50
    vision: float = 50
    composure: float = 50
    work_rate: float = 50
    pace: float = 50
    stamina: float = 50
    strength: float = 50
    # Tak och dolda egenskaper
    potential: float = 60
    consistency: float = 10
    injury_proneness: float = 10

    def as_dict(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


SKILL_ATTRIBUTES = tuple(
    f.name for f in fields(PlayerStats) if f.name not in META_ATTRIBUTES
)


@dataclass(slots=True)
class Personality:
    ambition: int = 50
    professionalism: int = 50
    loyalty: int = 50
    leadership: int = 50
    temperament: int = 50


@dataclass(slots=True)
class Contract:
    club_id: Optional[str] = None
    wage: int = 0
    expiry_date: Optional[str] = None


@dataclass(slots=True)
class SeasonalStats:
    appearances: int = 0
    goals: int = 0
    assists: int = 0
    avg_rating: float = 0.0


@dataclass(slots=True)
class Player:
    id: str
    name: str
    age: int
    position: str
    general_position: Position

    stats: PlayerStats = field(default_factory=PlayerStats)
    personality: Personality = field(default_factory=Personality)
    contract: Contract = field(default_factory=Contract)
    morale: Morale = Morale.CONTENT
    form: int = 5  # 1–10
    value: int = 0
    seasonal_stats: SeasonalStats = field(default_factory=SeasonalStats)

    @property
    def club_id(self) -> Optional[str]:
        return self.contract.club_id


def position_enum(value) -> Optional[Position]:
    if isinstance(value, Position):
        return value
    if hasattr(value, "value"):
        return position_enum(getattr(value, "value"))
    if value is None:
        return None
    try:
        return Position(value)
    except ValueError:
        try:
            return Position[str(value).upper()]
        except KeyError:
            return None


def morale_enum(value) -> Morale:
    if isinstance(value, Morale):
        return value
    if value is None:
        return Morale.CONTENT
    try:
        return Morale(value)
    except ValueError:
        try:
            return Morale[str(value).upper().replace(" ", "_")]
        except KeyError:
            return Morale.CONTENT
