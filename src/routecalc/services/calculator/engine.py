"""Route-time accumulation over the position table."""

from __future__ import annotations

import logging
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Mapping, Sequence

from ...config import settings
from ...data.positions_repository import load_positions, resolve_position
from ...models.domain import Line, Position, RouteEntry, TripSummary
from .errors import EmptyRouteError, ZeroOrdersError

_LEADING_INT = re.compile(r"[+-]?\d+")


def parse_order_count(raw_value: Any) -> int:
    """Coerce free-form desk input into a non-negative order count.

    Whitespace is ignored and the leading integer is taken, so ``"12abc"``
    gives 12 and ``"3.7"`` gives 3. Anything unparsable or negative is 0.
    """
    if isinstance(raw_value, bool) or raw_value is None:
        return 0
    if isinstance(raw_value, int):
        return max(raw_value, 0)
    if isinstance(raw_value, float):
        if raw_value != raw_value or raw_value in (float("inf"), float("-inf")):
            return 0
        return max(int(raw_value), 0)

    match = _LEADING_INT.match(str(raw_value).strip())
    if not match:
        return 0
    return max(int(match.group()), 0)


def leg_minutes(
    current_line: Line,
    current_distance: float,
    target: Position,
    *,
    transfer_penalty: float | None = None,
) -> float:
    """Travel time from the current point to ``target``.

    Leaving the hub is a straight run out. Staying on a line costs the
    difference in distance plus the handling penalty. Changing lines goes
    back through the hub, there is no cross-line path.
    """
    penalty = settings.transfer_penalty_minutes if transfer_penalty is None else transfer_penalty
    if current_line is Line.CENTER:
        return target.one_way_minutes
    if current_line is target.line:
        return abs(current_distance - target.one_way_minutes) + penalty
    return current_distance + target.one_way_minutes


def round_half_up(value: float, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def build_path(stop_ids: Sequence[str], *, hub_label: str | None = None, separator: str | None = None) -> str:
    hub = settings.hub_label if hub_label is None else hub_label
    joiner = settings.path_separator if separator is None else separator
    return joiner.join([hub, *stop_ids, hub])


def calculate_route(
    entries: Sequence[RouteEntry],
    positions: Mapping[str, Position] | None = None,
    *,
    transfer_penalty: float | None = None,
) -> TripSummary:
    """Compute the trip summary for an ordered route.

    Raises ``EmptyRouteError`` for an empty route, ``UnknownStopError`` when a
    stop is not in the table and ``ZeroOrdersError`` when no stop carries
    orders. Stops with zero orders still count towards travel time.
    """
    if not entries:
        raise EmptyRouteError()

    table = positions if positions is not None else load_positions()

    current_line = Line.CENTER
    current_distance: float = 0
    total_time: float = 0
    total_orders = 0

    for entry in entries:
        # A negative count contributes no orders; its leg is still driven.
        if entry.order_count >= 0:
            total_orders += entry.order_count

        target = resolve_position(entry.stop_id, table)
        total_time += leg_minutes(current_line, current_distance, target, transfer_penalty=transfer_penalty)
        current_line = target.line
        current_distance = target.one_way_minutes

    total_time += current_distance

    if total_orders == 0:
        raise ZeroOrdersError()

    stop_ids = tuple(entry.stop_id for entry in entries)
    summary = TripSummary(
        total_time=total_time,
        total_orders=total_orders,
        average=round_half_up(total_time / total_orders, 2),
        path=build_path(stop_ids),
        stop_ids=stop_ids,
    )
    logging.info(
        f"Calculated trip over {len(entries)} stops: {summary.total_time} min, "
        f"{summary.total_orders} orders, {summary.average} min/order"
    )
    return summary


def calculate_trip(
    stops: Sequence[tuple[str, Any]],
    positions: Mapping[str, Position] | None = None,
) -> TripSummary:
    """Stateless variant taking ``(stop_id, raw_order_count)`` pairs."""
    entries = [RouteEntry(stop_id=stop_id, order_count=parse_order_count(raw)) for stop_id, raw in stops]
    return calculate_route(entries, positions)
