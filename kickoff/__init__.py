"""Season and match simulation engine for a football management game."""

__version__ = "0.1.0"
