"""Truck endpoints."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_broadcaster, get_storage
from ...persistence.storage import Storage
from ...schemas.routing import TruckLocationUpdate, TruckModel
from ...services.events import Broadcaster

router = APIRouter(prefix="/trucks", tags=["trucks"])


@router.patch("/{truck_id}/location", response_model=TruckModel, status_code=status.HTTP_200_OK)
def update_location(
    truck_id: int,
    payload: TruckLocationUpdate,
    storage: Storage = Depends(get_storage),
    broadcaster: Broadcaster = Depends(get_broadcaster),
) -> TruckModel:
    """Record a truck's reported GPS position and notify live dashboards."""
    truck = storage.update_truck_location(truck_id, payload.latitude, payload.longitude)
    if truck is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Truck {truck_id} not found.")
    model = TruckModel(**asdict(truck))
    broadcaster.publish("truck_location_updated", model.model_dump(mode="json"))
    return model
