"""Stateless trip calculation endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.calculator import TripRequest, TripSummaryModel
from ...services.calculator.engine import calculate_trip
from ...services.calculator.errors import RouteCalculatorError

router = APIRouter(prefix="/trips", tags=["trips"])


@router.post("/calculate", response_model=TripSummaryModel, status_code=status.HTTP_200_OK)
def calculate(payload: TripRequest) -> TripSummaryModel:
    try:
        summary = calculate_trip([(stop.stop_id, stop.orders) for stop in payload.stops])
    except RouteCalculatorError as exc:
        logging.warning(f"Trip calculation rejected ({exc.code}): {exc.message}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_detail()) from exc
    except Exception as exc:
        logging.exception(f"Error calculating trip: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate trip: {str(exc)}",
        ) from exc
    return TripSummaryModel.from_domain(summary)
