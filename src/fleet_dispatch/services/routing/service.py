"""Routing orchestration service."""

from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from ...config import settings
from ...models.domain import Coordinate, Truck
from ...persistence.storage import Storage, build_stops
from ...schemas.routing import (
    RouteModel,
    RouteOptimizeRequest,
    RouteOptimizeResponse,
    TourLegModel,
)
from ..events import Broadcaster
from .optimizer import build_legs, optimize
from .time_windows import filter_and_order

logger = logging.getLogger(__name__)


class TruckNotFound(LookupError):
    def __init__(self, truck_id: int):
        self.truck_id = truck_id
        super().__init__(f"Truck {truck_id} not found.")


def resolve_depot(truck: Truck) -> Coordinate:
    """Start from the truck's last reported position, else the configured warehouse."""
    if truck.current_latitude is not None and truck.current_longitude is not None:
        return Coordinate(truck.current_latitude, truck.current_longitude)
    return Coordinate(settings.depot_latitude, settings.depot_longitude)


def optimize_truck_route(
    payload: RouteOptimizeRequest,
    *,
    storage: Storage,
    broadcaster: Broadcaster | None = None,
    now: datetime | None = None,
) -> RouteOptimizeResponse:
    truck = storage.get_truck(payload.truck_id)
    if truck is None:
        raise TruckNotFound(payload.truck_id)

    records = storage.get_deliveries_with_clients(payload.stop_ids)
    if not records:
        raise ValueError("No valid deliveries found.")

    stops = build_stops(records)
    dropped: list[int] = []
    use_time_windows = settings.use_time_windows if payload.use_time_windows is None else payload.use_time_windows
    if use_time_windows:
        reachable = filter_and_order(stops, now or datetime.now(timezone.utc))
        kept = {stop.id for stop in reachable}
        dropped = [stop.id for stop in stops if stop.id not in kept]
        stops = reachable
        if not stops:
            raise ValueError("All requested deliveries are past their delivery window.")

    depot = resolve_depot(truck)
    strategy = settings.default_strategy if payload.strategy is None else payload.strategy
    tour = optimize(depot, stops, strategy)
    legs = build_legs(depot, tour, settings.average_speed_kmh)

    route = storage.create_route(
        truck_id=truck.id,
        delivery_ids=[str(stop_id) for stop_id in tour.stop_ids],
        total_distance=tour.total_distance,
        estimated_time=round(tour.total_time),
        status="planned",
    )
    logger.info(
        "Planned route %s for truck %s: %d stops, %.2f km, strategy=%s",
        route.id,
        truck.id,
        len(tour.stops),
        tour.total_distance,
        tour.strategy,
    )

    response = RouteOptimizeResponse(
        route=RouteModel(**asdict(route)),
        strategy=tour.strategy,
        total_distance=tour.total_distance,
        total_time=tour.total_time,
        efficiency=tour.efficiency,
        travel_time_min=sum(leg.travel_min for leg in legs),
        dropped_stop_ids=dropped,
        legs=[TourLegModel(**asdict(leg)) for leg in legs],
    )
    if broadcaster is not None:
        broadcaster.publish("route_optimized", response.route.model_dump(mode="json"))
    return response
