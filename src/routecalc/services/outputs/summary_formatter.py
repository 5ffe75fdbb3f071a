"""Serializers for trip summaries."""

from __future__ import annotations

from ...models.domain import TripSummary


def _minutes(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def trip_summary_to_json(summary: TripSummary) -> dict:
    return {
        "total_time": summary.total_time,
        "total_orders": summary.total_orders,
        "average": summary.average,
        "path": summary.path,
    }


def trip_summary_to_text(summary: TripSummary) -> str:
    """Plain-text block for pasting into the dispatch chat."""
    lines = [
        f"Tiempo: {_minutes(summary.total_time)} min",
        f"Órdenes: {summary.total_orders}",
        f"Promedio: {summary.average} min/ord",
        f"Ruta: {summary.path}",
    ]
    return "\n".join(lines) + "\n"
