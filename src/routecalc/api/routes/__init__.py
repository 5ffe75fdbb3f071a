"""Route group exports."""

from . import health, positions, sessions, trips

__all__ = ["health", "positions", "sessions", "trips"]
