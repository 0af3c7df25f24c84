from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .tactics import Tactics


@dataclass(slots=True)
class Squad:
    starting_xi: List[str] = field(default_factory=list)
    subs: List[str] = field(default_factory=list)
    reserves: List[str] = field(default_factory=list)

    def all_ids(self) -> List[str]:
        return [*self.starting_xi, *self.subs, *self.reserves]


@dataclass(slots=True)
class Finances:
    balance: int = 0
    wage_budget: int = 0
    transfer_budget: int = 0


@dataclass(slots=True)
class Team:
    id: str
    name: str
    short_name: str = ""
    league_id: Optional[str] = None
    player_ids: List[str] = field(default_factory=list)
    squad: Squad = field(default_factory=Squad)
    formation: str = "4-4-2"
    tactics: Tactics = field(default_factory=Tactics)
    finances: Finances = field(default_factory=Finances)
    training_facilities_level: int = 1  # 0–3
    is_human: bool = False

    def starters(self, n: int = 11) -> List[str]:
        return list(self.squad.starting_xi[:n])


def auto_pick_squad(team: Team, players_by_id, n: int = 11) -> Squad:
    """Enkel elvaväljare: bästa spelaren per position i 4-4-2, resten på bänken."""
    from .ratings import player_ability  # undvik cirkulär import

    layout = {"GK": 1, "DF": 4, "MF": 4, "FW": 2}
    pool = [players_by_id[pid] for pid in team.player_ids if pid in players_by_id]
    pool.sort(key=player_ability, reverse=True)

    starting: List[str] = []
    for pos, count in layout.items():
        picked = [p for p in pool if p.general_position.value == pos][:count]
        starting.extend(p.id for p in picked)
    # fyll upp om någon position saknas
    for p in pool:
        if len(starting) >= n:
            break
        if p.id not in starting:
            starting.append(p.id)

    rest = [p.id for p in pool if p.id not in starting]
    return Squad(starting_xi=starting[:n], subs=rest[:7], reserves=rest[7:])
