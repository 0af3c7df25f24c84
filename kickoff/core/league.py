from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .fixtures import Match
from .standings import LeagueTableEntry


@dataclass(slots=True)
class League:
    id: str
    name: str
    team_ids: List[str] = field(default_factory=list)
    fixtures: List[Match] = field(default_factory=list)
    table: List[LeagueTableEntry] = field(default_factory=list)
    promotion_spots: int = 0
    relegation_spots: int = 0
    current_matchday: int = 0

    def __post_init__(self) -> None:
        # Säkra rimliga värden även om äldre sparfiler saknar fältet
        self.promotion_spots = max(0, int(self.promotion_spots))
        self.relegation_spots = max(0, int(self.relegation_spots))

    def ensure_table(self) -> None:
        """Varje lag i ligan ska ha exakt en tabellrad."""
        seen = set()
        rows: List[LeagueTableEntry] = []
        for row in self.table or []:
            if row is None or row.team_id in seen:
                continue
            seen.add(row.team_id)
            rows.append(row)
        for team_id in self.team_ids:
            if team_id not in seen:
                rows.append(LeagueTableEntry(team_id=team_id))
                seen.add(team_id)
        self.table = rows
