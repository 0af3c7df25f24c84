from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from kickoff.core.commands import (
    AdvanceTime,
    Command,
    EndLiveMatch,
    PauseLiveMatch,
    ProcessWeeklyTraining,
    ResumeLiveMatch,
    StartLiveMatch,
    TickLiveMatch,
    apply_command,
)
from kickoff.core.config import EngineConfig
from kickoff.core.fixtures import Match
from kickoff.core.generator import generate_world
from kickoff.core.livefeed import LiveMatchState, LiveStatus
from kickoff.core.season import autosave_due, days_until_next_match, league_standings, next_match_for_team
from kickoff.core.state import GameState

logger = logging.getLogger(__name__)


class ServiceError(RuntimeError):
    """Raised when a CLI operation fails in a controlled manner."""


@dataclass
class ServiceContext:
    """Holds the save location and engine configuration used across operations."""

    saves_dir: Path
    file_path: Path
    config: EngineConfig = field(default_factory=EngineConfig.from_env)

    @classmethod
    def from_paths(
        cls,
        saves_dir: Path,
        file_path: Optional[Path] = None,
        *,
        config: Optional[EngineConfig] = None,
    ) -> "ServiceContext":
        base = Path(saves_dir)
        base.mkdir(parents=True, exist_ok=True)
        target = Path(file_path) if file_path else base / "career.json"
        target.parent.mkdir(parents=True, exist_ok=True)
        return cls(saves_dir=base, file_path=target, config=config or EngineConfig.from_env())


# ----------------------------------------------------------------------
# JSON views
# ----------------------------------------------------------------------


def match_view(state: GameState, m: Match) -> Dict[str, Any]:
    home = state.team_by_id(m.home_team_id)
    away = state.team_by_id(m.away_team_id)
    return {
        "id": m.id,
        "date": m.date.isoformat(),
        "round": m.round,
        "home": home.name if home else m.home_team_id,
        "away": away.name if away else m.away_team_id,
        "status": m.status.value,
        "score": m.result.scoreline,
    }


def live_view(live: Optional[LiveMatchState], last_lines: int = 5) -> Optional[Dict[str, Any]]:
    if live is None:
        return None
    return {
        "match_id": live.match_id,
        "minute": live.minute,
        "score": f"{live.home_score}-{live.away_score}",
        "status": live.status.value,
        "ball": {"x": round(live.ball_position.x, 1), "y": round(live.ball_position.y, 1)},
        "commentary": [c.text for c in live.commentary[-last_lines:]],
    }


# ----------------------------------------------------------------------
# Service
# ----------------------------------------------------------------------


class GameService:
    """High level operations on one authoritative GameState."""

    def __init__(self, context: ServiceContext, rng: Optional[random.Random] = None) -> None:
        self.context = context
        seed = context.config.seed
        self.rng = rng or (random.Random(seed) if seed is not None else None)
        self._state: Optional[GameState] = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load_state(self) -> GameState:
        target = self.context.file_path
        if not target.exists():
            raise ServiceError(f"Save file '{target}' does not exist.")
        gs = GameState.load(target)
        gs.ensure_containers()
        logger.debug("Loaded state from %s (%s)", target, gs.current_date)
        return gs

    def _save_state(self, gs: GameState) -> Path:
        target = self.context.file_path
        target.parent.mkdir(parents=True, exist_ok=True)
        gs.save(target)
        logger.debug("Saved state to %s", target)
        return target

    @property
    def state(self) -> GameState:
        if self._state is None:
            self._state = self._load_state()
        return self._state

    # ------------------------------------------------------------------
    # Creation / persistence
    # ------------------------------------------------------------------

    def create(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        gs = generate_world(
            n_teams=int(payload.get("teams", 8)),
            season_year=int(payload.get("season", 2025)),
            human_index=int(payload.get("human_index", 0)),
            rng=self.rng,
        )
        gs.settings.autosave_interval = self.context.config.autosave_interval
        self._state = gs
        path = self._save_state(gs)
        team = gs.team_by_id(gs.player_team_id)
        logger.info("Created new career for %s at %s", team.name if team else "?", path)
        return {
            "path": str(path),
            "date": gs.current_date.isoformat(),
            "team_id": gs.player_team_id,
            "team": team.name if team else None,
            "teams": len(gs.teams),
            "fixtures": len(gs.all_fixtures()),
        }

    def save(self) -> Dict[str, Any]:
        gs = self.state
        gs.autosave_counter = 0
        path = self._save_state(gs)
        return {"saved": str(path), "date": gs.current_date.isoformat()}

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def apply(self, command: Command) -> GameState:
        before = self.state
        after = apply_command(before, command, self.rng, self.context.config)
        self._state = after
        if after is before:
            logger.debug("%s left the state unchanged", type(command).__name__)
        if autosave_due(after):
            logger.info("Autosave after %d days", after.autosave_counter)
            self.save()
        return after

    def advance(self, days: int) -> Dict[str, Any]:
        if days < 0:
            raise ServiceError("Number of days must be zero or positive.")
        if self.state.live_match is not None:
            raise ServiceError("A live match is in progress; end it before advancing time.")
        start = self.state.current_date
        gs = self.apply(AdvanceTime(days))
        return {
            "from": start.isoformat(),
            "date": gs.current_date.isoformat(),
            "live_match": live_view(gs.live_match),
            "news": [n.subject for n in gs.news[:5]],
        }

    def start_live(self, match_id: Optional[str] = None) -> Dict[str, Any]:
        gs = self.state
        if match_id is None:
            nxt = next_match_for_team(gs)
            if nxt is None:
                raise ServiceError("No upcoming match for the managed team.")
            match_id = nxt.id
        if gs.find_match(match_id) is None:
            raise ServiceError(f"Unknown match '{match_id}'.")
        gs = self.apply(StartLiveMatch(match_id))
        if gs.live_match is None:
            raise ServiceError(f"Match '{match_id}' could not be started.")
        return live_view(gs.live_match)

    def tick_live(self, minutes: int = 1) -> Dict[str, Any]:
        self._require_live()
        gs = self.state
        for _ in range(max(1, minutes)):
            gs = self.apply(TickLiveMatch())
            if gs.live_match is None or gs.live_match.status is not LiveStatus.PLAYING:
                break
        return live_view(gs.live_match)

    def pause_live(self) -> Dict[str, Any]:
        self._require_live()
        return live_view(self.apply(PauseLiveMatch()).live_match)

    def resume_live(self) -> Dict[str, Any]:
        self._require_live()
        return live_view(self.apply(ResumeLiveMatch()).live_match)

    def end_live(self) -> Dict[str, Any]:
        live = self._require_live()
        gs = self.apply(EndLiveMatch())
        found = gs.find_match(live.match_id)
        return match_view(gs, found[1]) if found else {"match_id": live.match_id}

    def run_live_match(
        self,
        *,
        sleep: Callable[[float], None] = time.sleep,
        on_tick: Optional[Callable[[LiveMatchState], None]] = None,
    ) -> Dict[str, Any]:
        """
        Drives the live match in real time until full time, then ends it.
        Stops early (without ending) if the match gets paused.
        """
        self._require_live()
        speed = max(0.1, self.context.config.live_minutes_per_second)
        interval = 1.0 / speed
        gs = self.state
        while gs.live_match is not None and gs.live_match.status is LiveStatus.PLAYING:
            gs = self.apply(TickLiveMatch())
            if on_tick is not None and gs.live_match is not None:
                on_tick(gs.live_match)
                gs = self.state
            if gs.live_match is not None and gs.live_match.status is LiveStatus.PLAYING:
                sleep(interval)
        if gs.live_match is not None and gs.live_match.status is LiveStatus.FULL_TIME:
            return self.end_live()
        return live_view(gs.live_match)

    def train(self) -> Dict[str, Any]:
        before = {p.id: p.stats.as_dict() for p in self.state.players}
        gs = self.apply(ProcessWeeklyTraining())
        changed = sum(1 for p in gs.players if before.get(p.id) != p.stats.as_dict())
        return {"date": gs.current_date.isoformat(), "players_changed": changed}

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def table(self, league_id: Optional[str] = None) -> List[Dict[str, Any]]:
        gs = self.state
        league = gs.league_by_id(league_id) if league_id else (gs.leagues[0] if gs.leagues else None)
        if league is None:
            raise ServiceError(f"Unknown league '{league_id}'.")
        rows = []
        for row in league_standings(league):
            team = gs.team_by_id(row.team_id)
            rows.append(
                {
                    "pos": row.position,
                    "team": team.name if team else row.team_id,
                    "p": row.played,
                    "w": row.won,
                    "d": row.drawn,
                    "l": row.lost,
                    "gf": row.goals_for,
                    "ga": row.goals_against,
                    "gd": row.goal_difference,
                    "pts": row.points,
                }
            )
        return rows

    def news(self, limit: int = 10) -> List[Dict[str, Any]]:
        return [
            {"date": n.date.isoformat(), "type": n.type, "subject": n.subject, "message": n.message}
            for n in self.state.news[: max(0, limit)]
        ]

    def next_match(self) -> Dict[str, Any]:
        gs = self.state
        m = next_match_for_team(gs)
        if m is None:
            return {"match": None, "days": None}
        return {"match": match_view(gs, m), "days": days_until_next_match(gs)}

    def _require_live(self) -> LiveMatchState:
        live = self.state.live_match
        if live is None:
            raise ServiceError("No live match in progress.")
        return live
