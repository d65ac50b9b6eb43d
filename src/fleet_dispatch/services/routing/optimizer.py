"""Route optimizer combining nearest-neighbor construction with 2-opt refinement."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from ...models.domain import Coordinate, Stop
from ..geospatial import distance, route_length
from .errors import InvalidStrategy
from .models import Tour, TourLeg
from .nearest_neighbor import construct
from .priority import weight
from .time_windows import filter_and_order
from .two_opt import refine

logger = logging.getLogger(__name__)

NEAREST_NEIGHBOR = "nearest-neighbor"
TWO_OPT = "2-opt"
HYBRID = "hybrid"
STRATEGIES = (NEAREST_NEIGHBOR, TWO_OPT, HYBRID)
DEFAULT_STRATEGY = HYBRID

# 2-opt alone never scores priorities, so it reports a flat value.
TWO_OPT_EFFICIENCY = 85.0
HYBRID_EFFICIENCY_BONUS = 10.0


def priority_efficiency(stops: Sequence[Stop]) -> float:
    """Score 0-100 rewarding orders that visit heavier priorities first."""
    count = len(stops)
    if count == 0:
        return 0.0
    achieved = sum(weight(stop.priority) * (count - index) / count for index, stop in enumerate(stops))
    attainable = sum(weight(stop.priority) for stop in stops)
    return achieved / attainable * 100 if attainable > 0 else 0.0


def _service_minutes(stops: Sequence[Stop]) -> float:
    return sum(stop.estimated_service_time for stop in stops)


def _resolve_strategy(strategy: str | None) -> str:
    if strategy is None:
        return DEFAULT_STRATEGY
    if strategy not in STRATEGIES:
        raise InvalidStrategy(strategy)
    return str(strategy)


def optimize(depot: Coordinate, stops: Sequence[Stop], strategy: str | None = None) -> Tour:
    """Order ``stops`` for a truck leaving ``depot``.

    ``strategy`` is one of ``nearest-neighbor``, ``2-opt`` or ``hybrid``; omitting
    it selects ``hybrid``. Any other value raises :class:`InvalidStrategy`.
    """
    strategy = _resolve_strategy(strategy)
    if not stops:
        return Tour(stops=[], total_distance=0.0, total_time=0.0, efficiency=0.0, strategy=strategy)

    for stop in stops:
        weight(stop.priority)

    if strategy == NEAREST_NEIGHBOR:
        ordered = construct(depot, stops)
        efficiency = priority_efficiency(ordered)
    elif strategy == TWO_OPT:
        ordered = refine(stops, depot)
        efficiency = TWO_OPT_EFFICIENCY
    else:
        constructed = construct(depot, stops)
        ordered = refine(constructed, depot)
        efficiency = min(priority_efficiency(constructed) + HYBRID_EFFICIENCY_BONUS, 100.0)

    tour = Tour(
        stops=ordered,
        total_distance=route_length(ordered, depot),
        total_time=_service_minutes(ordered),
        efficiency=efficiency,
        strategy=strategy,
    )
    logger.debug(
        "Optimized %d stops with %s: %.3f km, %.1f min, efficiency %.1f",
        len(ordered),
        strategy,
        tour.total_distance,
        tour.total_time,
        tour.efficiency,
    )
    return tour


def optimize_with_time_windows(
    depot: Coordinate,
    stops: Sequence[Stop],
    now: datetime | None = None,
) -> Tour:
    """Drop expired stops, pre-sort by deadline, then build a nearest-neighbor tour."""
    now = now or datetime.now(timezone.utc)
    return optimize(depot, filter_and_order(stops, now), NEAREST_NEIGHBOR)


def estimate_travel_time(distance_km: float, average_speed_kmh: float = 40.0) -> int:
    """Travel minutes for ``distance_km`` at ``average_speed_kmh``, rounded."""
    if average_speed_kmh <= 0:
        raise ValueError("average_speed_kmh must be > 0")
    return round(distance_km / average_speed_kmh * 60)


def build_legs(depot: Coordinate, tour: Tour, average_speed_kmh: float = 40.0) -> list[TourLeg]:
    """Per-stop breakdown of a tour: leg distance, travel minutes and arrival offset."""
    legs: list[TourLeg] = []
    previous = depot
    elapsed = 0.0
    for sequence, stop in enumerate(tour.stops, start=1):
        leg_km = distance(previous, stop.coordinate)
        travel = estimate_travel_time(leg_km, average_speed_kmh)
        elapsed += travel
        legs.append(
            TourLeg(
                stop_id=stop.id,
                sequence=sequence,
                distance_from_prev_km=leg_km,
                travel_min=travel,
                arrival_min=elapsed,
            )
        )
        elapsed += stop.estimated_service_time
        previous = stop.coordinate
    return legs
