"""Service layer exposing the simulation engine to the CLI."""

from .services import GameService, ServiceContext, ServiceError, live_view, match_view

__all__ = [
    "GameService",
    "ServiceContext",
    "ServiceError",
    "live_view",
    "match_view",
]
