"""Stateful route calculator driven by one dispatch desk."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ...data.positions_repository import load_positions, resolve_position
from ...models.domain import Position, RouteEntry, TripSummary
from .engine import calculate_route, parse_order_count
from .errors import RouteCalculatorError, StopIndexError


@dataclass
class RouteCalculator:
    """
    Owns the route being assembled and the last computed trip summary.

    Each entry pairs a stop with its order count, so removing a stop takes
    its count with it and later counts keep lining up with their stops.
    Any change to the route drops the cached summary; only ``calculate``
    produces a new one.
    """

    positions: Mapping[str, Position] = field(default_factory=load_positions)
    _entries: List[RouteEntry] = field(default_factory=list)
    _summary: Optional[TripSummary] = None

    # --- Public API ---

    def add_stop(self, stop_id: str) -> RouteEntry:
        resolve_position(stop_id, self.positions)
        entry = RouteEntry(stop_id=stop_id)
        self._entries.append(entry)
        self._summary = None
        return entry

    def remove_stop(self, index: int) -> RouteEntry:
        self._check_index(index)
        removed = self._entries.pop(index)
        self._summary = None
        return removed

    def set_order_count(self, index: int, raw_value: Any) -> int:
        self._check_index(index)
        count = parse_order_count(raw_value)
        self._entries[index].order_count = count
        self._summary = None
        return count

    def reset(self) -> None:
        self._entries.clear()
        self._summary = None

    def calculate(self) -> TripSummary:
        try:
            summary = calculate_route(self._entries, self.positions)
        except RouteCalculatorError as exc:
            logging.warning(f"Trip calculation rejected ({exc.code}): {exc.message}")
            raise
        self._summary = summary
        return summary

    # --- Views ---

    @property
    def route(self) -> List[str]:
        return [entry.stop_id for entry in self._entries]

    @property
    def order_counts(self) -> Dict[int, int]:
        return {index: entry.order_count for index, entry in enumerate(self._entries)}

    @property
    def entries(self) -> List[RouteEntry]:
        return [RouteEntry(stop_id=entry.stop_id, order_count=entry.order_count) for entry in self._entries]

    @property
    def summary(self) -> Optional[TripSummary]:
        return self._summary

    def __len__(self) -> int:
        return len(self._entries)

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._entries):
            raise StopIndexError(index, len(self._entries))
