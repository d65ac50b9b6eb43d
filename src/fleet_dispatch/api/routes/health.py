"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ..dependencies import get_broadcaster
from ...services.events import Broadcaster

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/realtime", status_code=status.HTTP_200_OK)
def health_realtime(broadcaster: Broadcaster = Depends(get_broadcaster)) -> dict:
    return {"service": "realtime", "subscribers": len(broadcaster)}
