"""Calculator request/response schemas."""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field

from ..models.domain import Line, Position, TripSummary
from ..services.outputs.summary_formatter import trip_summary_to_json


class PositionModel(BaseModel):
    stop_id: str
    line: Line
    one_way_minutes: float
    round_trip_minutes: float

    @classmethod
    def from_domain(cls, position: Position) -> "PositionModel":
        return cls(
            stop_id=position.stop_id,
            line=position.line,
            one_way_minutes=position.one_way_minutes,
            round_trip_minutes=position.round_trip_minutes,
        )


class AddStopRequest(BaseModel):
    stop_id: str = Field(..., description="Position id taken from the catalog (e.g., 'K48.11').")


class OrderCountRequest(BaseModel):
    value: Any = Field(
        default=None,
        description="Raw desk input; unparsable or negative values are stored as 0.",
    )


class TripStopRequest(BaseModel):
    stop_id: str
    orders: Any = None


class TripRequest(BaseModel):
    stops: List[TripStopRequest] = Field(default_factory=list)


class TripSummaryModel(BaseModel):
    total_time: float
    total_orders: int
    average: float
    path: str

    @classmethod
    def from_domain(cls, summary: TripSummary) -> "TripSummaryModel":
        return cls(**trip_summary_to_json(summary))


class RouteStopModel(BaseModel):
    index: int
    position: int = Field(..., description="1-based place in the route, as shown on the desk.")
    stop_id: str
    line: Line
    order_count: int


class SessionStateModel(BaseModel):
    session_id: str
    stops: List[RouteStopModel]
    total_orders_entered: int
    summary: Optional[TripSummaryModel] = None
