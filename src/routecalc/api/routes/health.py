"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...data.positions_repository import load_positions

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/positions", status_code=status.HTTP_200_OK)
def health_positions() -> dict:
    """Check that the position table can be loaded."""
    try:
        positions = load_positions()
        return {"service": "positions", "healthy": True, "count": len(positions)}
    except (OSError, ValueError) as e:
        return {"service": "positions", "healthy": False, "error": str(e)}
