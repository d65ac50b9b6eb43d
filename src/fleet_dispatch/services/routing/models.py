"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from ...models.domain import Stop


@dataclass(slots=True)
class TourLeg:
    stop_id: int
    sequence: int
    distance_from_prev_km: float
    travel_min: int
    arrival_min: float


@dataclass(slots=True)
class Tour:
    """Ordered visiting sequence plus aggregate metrics.

    ``total_time`` is service minutes only; travel time is reported per leg.
    """

    stops: List[Stop] = field(default_factory=list)
    total_distance: float = 0.0
    total_time: float = 0.0
    efficiency: float = 0.0
    strategy: str = "hybrid"

    @property
    def stop_ids(self) -> list[int]:
        return [stop.id for stop in self.stops]
