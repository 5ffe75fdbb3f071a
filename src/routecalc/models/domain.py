"""Domain models for positions, route entries and trip summaries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class Line(str, Enum):
    """Directional cluster a position is reached through."""

    EAST = "EAST"
    WEST = "WEST"
    SOUTH = "SOUTH"
    CENTER = "CENTER"


@dataclass(frozen=True, slots=True)
class Position:
    """A named destination with its one-way travel time from the hub."""

    stop_id: str
    one_way_minutes: float
    line: Line

    @property
    def round_trip_minutes(self) -> float:
        return self.one_way_minutes * 2


@dataclass(slots=True)
class RouteEntry:
    """One stop of a route paired with the orders delivered there."""

    stop_id: str
    order_count: int = 0


@dataclass(frozen=True, slots=True)
class TripSummary:
    total_time: float
    total_orders: int
    average: float
    path: str
    stop_ids: Tuple[str, ...]
