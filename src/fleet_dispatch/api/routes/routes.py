"""Routing endpoints."""

from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_broadcaster, get_storage
from ...persistence.storage import Storage
from ...schemas.routing import RouteModel, RouteOptimizeRequest, RouteOptimizeResponse
from ...services.events import Broadcaster
from ...services.routing.errors import RoutingError
from ...services.routing.service import TruckNotFound, optimize_truck_route

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RouteOptimizeResponse, status_code=status.HTTP_200_OK)
def optimize(
    payload: RouteOptimizeRequest,
    storage: Storage = Depends(get_storage),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> RouteOptimizeResponse:
    try:
        return optimize_truck_route(payload, storage=storage, broadcaster=broadcaster)
    except TruckNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except RoutingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": exc.kind, "message": str(exc)},
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception("Error optimizing route for truck %s", payload.truck_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {exc}",
        ) from exc


@router.get("", response_model=list[RouteModel], status_code=status.HTTP_200_OK)
def list_routes(storage: Storage = Depends(get_storage)) -> list[RouteModel]:
    return [RouteModel(**asdict(route)) for route in storage.list_routes()]


@router.get("/{route_id}", response_model=RouteModel, status_code=status.HTTP_200_OK)
def get_route(route_id: int, storage: Storage = Depends(get_storage)) -> RouteModel:
    route = storage.get_route(route_id)
    if route is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Route {route_id} not found.")
    return RouteModel(**asdict(route))
