"""Position catalog endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, status

from ...data.positions_repository import list_positions, resolve_position
from ...schemas.calculator import PositionModel
from ...services.calculator.errors import UnknownStopError

router = APIRouter(prefix="/positions", tags=["positions"])


@router.get("", response_model=List[PositionModel], status_code=status.HTTP_200_OK)
def get_positions() -> List[PositionModel]:
    """Destinations available to add to a route, in board order."""
    return [PositionModel.from_domain(position) for position in list_positions()]


@router.get("/{stop_id}", response_model=PositionModel, status_code=status.HTTP_200_OK)
def get_position(stop_id: str) -> PositionModel:
    try:
        return PositionModel.from_domain(resolve_position(stop_id))
    except UnknownStopError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.to_detail()) from exc
