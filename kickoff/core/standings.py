from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence, Tuple

# ---------- LIGATABELL ----------


@dataclass(slots=True)
class LeagueTableEntry:
    team_id: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
    position: Optional[int] = None


def find_entry(
    table: Sequence[LeagueTableEntry], team_id: str
) -> Optional[LeagueTableEntry]:
    return next((e for e in table if e is not None and e.team_id == team_id), None)


def apply_result_to_table(
    table: Sequence[LeagueTableEntry],
    home_id: str,
    away_id: str,
    home_goals: int,
    away_goals: int,
) -> Optional[Tuple[LeagueTableEntry, LeagueTableEntry]]:
    """
    Räknar fram nya tabellrader för båda lagen ur ett enda matchresultat.
    Raderna i `table` lämnas orörda. Saknas någon rad returneras None.
    """
    h_old = find_entry(table, home_id)
    a_old = find_entry(table, away_id)
    if h_old is None or a_old is None:
        return None

    h = replace(h_old)
    a = replace(a_old)

    h.played += 1
    a.played += 1

    h.goals_for += home_goals
    h.goals_against += away_goals
    a.goals_for += away_goals
    a.goals_against += home_goals

    h.goal_difference = h.goals_for - h.goals_against
    a.goal_difference = a.goals_for - a.goals_against

    if home_goals > away_goals:
        h.won += 1
        a.lost += 1
        h.points += 3
    elif home_goals < away_goals:
        a.won += 1
        h.lost += 1
        a.points += 3
    else:
        h.drawn += 1
        a.drawn += 1
        h.points += 1
        a.points += 1

    return h, a


def merge_entries(
    table: List[LeagueTableEntry], updated: Sequence[LeagueTableEntry]
) -> List[LeagueTableEntry]:
    by_team: Dict[str, LeagueTableEntry] = {e.team_id: e for e in updated}
    return [by_team.get(e.team_id, e) for e in table]


def sort_table(table: Sequence[LeagueTableEntry]) -> List[LeagueTableEntry]:
    # Sortera på poäng, målskillnad, gjorda mål, lag-id (stabilt)
    ordered = sorted(
        (e for e in table if e is not None),
        key=lambda r: (-r.points, -r.goal_difference, -r.goals_for, r.team_id),
    )
    out: List[LeagueTableEntry] = []
    for idx, row in enumerate(ordered, start=1):
        out.append(replace(row, position=idx))
    return out


def table_is_consistent(table: Sequence[LeagueTableEntry]) -> bool:
    for e in table:
        if e.points != 3 * e.won + e.drawn:
            return False
        if e.goal_difference != e.goals_for - e.goals_against:
            return False
        if e.played != e.won + e.drawn + e.lost:
            return False
    return True
