# Gör det lättare att importera i resten av projektet
from .club import Finances, Squad, Team, auto_pick_squad
from .commands import (
    AdvanceTime,
    EndLiveMatch,
    PauseLiveMatch,
    ProcessWeeklyTraining,
    ResumeLiveMatch,
    StartLiveMatch,
    TickLiveMatch,
    apply_command,
)
from .config import DEFAULT_CONFIG, EngineConfig
from .fixtures import Commentary, EventType, Match, MatchEvent, MatchStatus, round_robin
from .generator import generate_team, generate_world
from .league import League
from .live import (
    end_live_match,
    pause_live_match,
    resume_live_match,
    start_live_match,
    tick_live_match,
)
from .livefeed import BallPosition, LiveMatchState, LiveStatus, MinuteResult, simulate_minute
from .match import MatchOutcome, apply_outcome, resolve_match
from .player import Morale, Player, PlayerStats, Position
from .ratings import current_ability, team_match_strength
from .season import (
    advance_time,
    advance_time_chunked,
    autosave_due,
    days_until_next_match,
    league_standings,
    next_match_for_team,
)
from .standings import LeagueTableEntry, apply_result_to_table, sort_table
from .state import GameState, NewsItem
from .tactics import Mentality, Tactics
from .training import DevelopmentEvent, TrainingResult, apply_training, process_weekly_training

__all__ = [
    "Team",
    "Squad",
    "Finances",
    "auto_pick_squad",
    "AdvanceTime",
    "StartLiveMatch",
    "TickLiveMatch",
    "PauseLiveMatch",
    "ResumeLiveMatch",
    "EndLiveMatch",
    "ProcessWeeklyTraining",
    "apply_command",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "Match",
    "MatchEvent",
    "MatchStatus",
    "EventType",
    "Commentary",
    "round_robin",
    "generate_team",
    "generate_world",
    "League",
    "start_live_match",
    "tick_live_match",
    "pause_live_match",
    "resume_live_match",
    "end_live_match",
    "LiveMatchState",
    "LiveStatus",
    "BallPosition",
    "MinuteResult",
    "simulate_minute",
    "MatchOutcome",
    "resolve_match",
    "apply_outcome",
    "Player",
    "PlayerStats",
    "Position",
    "Morale",
    "current_ability",
    "team_match_strength",
    "advance_time",
    "advance_time_chunked",
    "next_match_for_team",
    "days_until_next_match",
    "league_standings",
    "autosave_due",
    "LeagueTableEntry",
    "apply_result_to_table",
    "sort_table",
    "GameState",
    "NewsItem",
    "Tactics",
    "Mentality",
    "DevelopmentEvent",
    "TrainingResult",
    "process_weekly_training",
    "apply_training",
]
