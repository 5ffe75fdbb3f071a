"""Position table loader: built-in defaults, optionally replaced by a JSON file."""

from __future__ import annotations

import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Mapping

from ..config import settings
from ..models.domain import Line, Position
from ..services.calculator.errors import UnknownStopError

# (id, round-trip minutes, line) as published on the depot board.
_BUILTIN_POSITIONS: tuple[tuple[str, float, Line], ...] = (
    ("CENTRO", 0, Line.CENTER),
    ("K48.11", 60, Line.EAST),
    ("K48.12", 40, Line.EAST),
    ("15.20A", 60, Line.SOUTH),
    ("15.20.1", 60, Line.WEST),
    ("15.20.2", 80, Line.WEST),
    ("15.20.3", 120, Line.WEST),
    ("15.20.4", 140, Line.WEST),
)


def _one_way(round_trip: float) -> float:
    half = round_trip / 2
    return int(half) if float(half).is_integer() else half


def _freeze(positions: Iterable[Position]) -> Mapping[str, Position]:
    table: dict[str, Position] = {}
    for position in positions:
        if position.stop_id in table:
            raise ValueError(f"Duplicate position id '{position.stop_id}'.")
        table[position.stop_id] = position
    return MappingProxyType(table)


def _builtin_positions() -> Mapping[str, Position]:
    return _freeze(
        Position(stop_id=stop_id, one_way_minutes=_one_way(round_trip), line=line)
        for stop_id, round_trip, line in _BUILTIN_POSITIONS
    )


def _parse_position(row: Any) -> Position:
    if not isinstance(row, dict):
        raise ValueError(f"Position entry must be an object, got {type(row).__name__}.")
    try:
        raw_id = row["id"]
        line = Line(str(row["line"]).strip().upper())
    except KeyError as exc:
        raise ValueError(f"Position entry missing field {exc}.") from exc

    if not isinstance(raw_id, str) or not raw_id.strip():
        raise ValueError(f"Position id must be a non-empty string, got {raw_id!r}.")
    stop_id = raw_id.strip()

    try:
        if "one_way_minutes" in row:
            one_way = float(row["one_way_minutes"])
        elif "round_trip_minutes" in row:
            one_way = _one_way(float(row["round_trip_minutes"]))
        else:
            raise ValueError(f"Position '{stop_id}' needs one_way_minutes or round_trip_minutes.")
    except TypeError as exc:
        raise ValueError(f"Position '{stop_id}' has a non-numeric travel time.") from exc

    if not math.isfinite(one_way):
        raise ValueError(f"Position '{stop_id}' has a non-finite travel time.")
    if one_way < 0:
        raise ValueError(f"Position '{stop_id}' has a negative travel time.")
    if float(one_way).is_integer():
        one_way = int(one_way)
    return Position(stop_id=stop_id, one_way_minutes=one_way, line=line)


def _load_positions_from_file(source: Path) -> Mapping[str, Position]:
    """Load the position table from a JSON document."""
    if not source.exists():
        raise FileNotFoundError(f"Position file not found: {source}")

    with source.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Position file '{source}' is not valid JSON: {exc}") from exc

    rows = payload.get("positions") if isinstance(payload, dict) else payload
    if not isinstance(rows, list) or not rows:
        raise ValueError(f"Position file '{source}' has no positions.")

    table = _freeze(_parse_position(row) for row in rows)
    logging.info(f"Loaded {len(table)} positions from {source}")
    return table


@lru_cache(maxsize=1)
def load_positions() -> Mapping[str, Position]:
    """Return the process-wide, read-only position table."""
    if settings.positions_file is not None:
        return _load_positions_from_file(settings.positions_file)
    return _builtin_positions()


def list_positions(positions: Mapping[str, Position] | None = None) -> list[Position]:
    table = positions if positions is not None else load_positions()
    return list(table.values())


def resolve_position(stop_id: str, positions: Mapping[str, Position] | None = None) -> Position:
    table = positions if positions is not None else load_positions()
    try:
        return table[stop_id]
    except KeyError:
        raise UnknownStopError(stop_id) from None
