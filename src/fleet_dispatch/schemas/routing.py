"""Routing request/response schemas."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RouteOptimizeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    truck_id: int = Field(..., alias="truckId")
    stop_ids: List[int] = Field(..., alias="stopIds", description="Delivery ids to visit.")
    strategy: Optional[str] = Field(
        default=None,
        description="nearest-neighbor, 2-opt or hybrid. Defaults to the configured strategy.",
    )
    use_time_windows: Optional[bool] = Field(
        default=None,
        alias="useTimeWindows",
        description="Drop expired deliveries and pre-sort by deadline. Defaults to the configured value.",
    )


class TourLegModel(BaseModel):
    stop_id: int
    sequence: int
    distance_from_prev_km: float
    travel_min: int
    arrival_min: float


class RouteModel(BaseModel):
    id: int
    truck_id: int
    delivery_ids: List[str]
    total_distance: float
    estimated_time: int
    status: str
    created_at: datetime


class RouteOptimizeResponse(BaseModel):
    route: RouteModel
    strategy: str
    total_distance: float
    total_time: float
    efficiency: float
    travel_time_min: int
    dropped_stop_ids: List[int] = Field(default_factory=list)
    legs: List[TourLegModel]


class TruckLocationUpdate(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)


class TruckModel(BaseModel):
    id: int
    identifier: str
    driver: str
    current_latitude: Optional[float] = None
    current_longitude: Optional[float] = None
    status: str
    last_updated: datetime
