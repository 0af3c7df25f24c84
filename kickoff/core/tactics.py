from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class Mentality(Enum):
    ATTACKING = "attacking"
    BALANCED = "balanced"
    DEFENSIVE = "defensive"


class PassingStyle(Enum):
    SHORT = "short"
    MIXED = "mixed"
    DIRECT = "direct"


class PressingIntensity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(slots=True)
class Tactics:
    """Lagets matchplan. Motorn läser den bara, ändras av spelaren."""

    mentality: Mentality = Mentality.BALANCED
    passing_style: PassingStyle = PassingStyle.MIXED
    pressing_intensity: PressingIntensity = PressingIntensity.MEDIUM

    def snapshot(self) -> Dict[str, str]:
        return {
            "mentality": self.mentality.value,
            "passing_style": self.passing_style.value,
            "pressing_intensity": self.pressing_intensity.value,
        }


# Multiplikator på lagstyrkan beroende på mentalitet
MENTALITY_MULTIPLIER: Dict[Mentality, float] = {
    Mentality.ATTACKING: 1.10,
    Mentality.BALANCED: 1.00,
    Mentality.DEFENSIVE: 0.90,
}


def mentality_multiplier(mentality) -> float:
    if not isinstance(mentality, Mentality):
        try:
            mentality = Mentality(str(mentality).lower())
        except ValueError:
            return 1.0
    return MENTALITY_MULTIPLIER.get(mentality, 1.0)


def tactics_from_dict(d: Dict[str, str] | None) -> Tactics:
    d = d or {}

    def _pick(enum_cls, raw, default):
        try:
            return enum_cls(str(raw).lower())
        except ValueError:
            return default

    return Tactics(
        mentality=_pick(Mentality, d.get("mentality"), Mentality.BALANCED),
        passing_style=_pick(PassingStyle, d.get("passing_style"), PassingStyle.MIXED),
        pressing_intensity=_pick(
            PressingIntensity, d.get("pressing_intensity"), PressingIntensity.MEDIUM
        ),
    )
