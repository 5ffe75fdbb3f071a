"""Desk session endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import PlainTextResponse

from ...schemas.calculator import (
    AddStopRequest,
    OrderCountRequest,
    RouteStopModel,
    SessionStateModel,
    TripSummaryModel,
)
from ...services.calculator.errors import RouteCalculatorError, SessionNotFoundError, StopIndexError
from ...services.calculator.session import RouteCalculator
from ...services.calculator.store import get_session_store
from ...services.outputs.summary_formatter import trip_summary_to_text

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_calculator(session_id: str) -> RouteCalculator:
    try:
        return get_session_store().get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


def _to_http_error(exc: RouteCalculatorError) -> HTTPException:
    if isinstance(exc, StopIndexError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=exc.to_detail())
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.to_detail())


def _state(session_id: str, calculator: RouteCalculator) -> SessionStateModel:
    stops = [
        RouteStopModel(
            index=index,
            position=index + 1,
            stop_id=entry.stop_id,
            line=calculator.positions[entry.stop_id].line,
            order_count=entry.order_count,
        )
        for index, entry in enumerate(calculator.entries)
    ]
    summary = calculator.summary
    return SessionStateModel(
        session_id=session_id,
        stops=stops,
        total_orders_entered=sum(max(stop.order_count, 0) for stop in stops),
        summary=TripSummaryModel.from_domain(summary) if summary else None,
    )


@router.post("", response_model=SessionStateModel, status_code=status.HTTP_201_CREATED)
def create_session() -> SessionStateModel:
    session_id, calculator = get_session_store().create()
    return _state(session_id, calculator)


@router.get("/{session_id}", response_model=SessionStateModel, status_code=status.HTTP_200_OK)
def get_session(session_id: str) -> SessionStateModel:
    return _state(session_id, _get_calculator(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str) -> None:
    try:
        get_session_store().discard(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.post("/{session_id}/stops", response_model=SessionStateModel, status_code=status.HTTP_200_OK)
def add_stop(session_id: str, payload: AddStopRequest) -> SessionStateModel:
    calculator = _get_calculator(session_id)
    try:
        calculator.add_stop(payload.stop_id)
    except RouteCalculatorError as exc:
        logging.warning(f"Session {session_id}: rejected stop '{payload.stop_id}': {exc.message}")
        raise _to_http_error(exc) from exc
    return _state(session_id, calculator)


@router.delete("/{session_id}/stops/{index}", response_model=SessionStateModel, status_code=status.HTTP_200_OK)
def remove_stop(session_id: str, index: int) -> SessionStateModel:
    calculator = _get_calculator(session_id)
    try:
        calculator.remove_stop(index)
    except RouteCalculatorError as exc:
        raise _to_http_error(exc) from exc
    return _state(session_id, calculator)


@router.put(
    "/{session_id}/stops/{index}/orders",
    response_model=SessionStateModel,
    status_code=status.HTTP_200_OK,
)
def set_order_count(session_id: str, index: int, payload: OrderCountRequest) -> SessionStateModel:
    calculator = _get_calculator(session_id)
    try:
        calculator.set_order_count(index, payload.value)
    except RouteCalculatorError as exc:
        raise _to_http_error(exc) from exc
    return _state(session_id, calculator)


@router.post("/{session_id}/calculate", response_model=TripSummaryModel, status_code=status.HTTP_200_OK)
def calculate(session_id: str) -> TripSummaryModel:
    calculator = _get_calculator(session_id)
    try:
        summary = calculator.calculate()
    except RouteCalculatorError as exc:
        raise _to_http_error(exc) from exc
    except Exception as exc:
        logging.exception(f"Error calculating trip for session {session_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to calculate trip: {str(exc)}",
        ) from exc
    return TripSummaryModel.from_domain(summary)


@router.post("/{session_id}/reset", response_model=SessionStateModel, status_code=status.HTTP_200_OK)
def reset(session_id: str) -> SessionStateModel:
    calculator = _get_calculator(session_id)
    calculator.reset()
    return _state(session_id, calculator)


@router.get("/{session_id}/summary/text", response_class=PlainTextResponse, status_code=status.HTTP_200_OK)
def summary_text(session_id: str) -> str:
    """Last computed summary as copyable text."""
    calculator = _get_calculator(session_id)
    if calculator.summary is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No trip has been calculated for this route yet.",
        )
    return trip_summary_to_text(calculator.summary)
