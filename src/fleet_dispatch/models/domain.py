"""Domain models for fleet records and optimizer inputs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from ..services.routing.errors import InvalidCoordinate


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.latitude <= 90.0) or not (-180.0 <= self.longitude <= 180.0):
            raise InvalidCoordinate(self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class Stop:
    """One delivery location to visit during a route.

    ``priority`` is kept as given; it is validated when the optimizer weighs it.
    """

    id: int
    coordinate: Coordinate
    priority: str = Priority.MEDIUM.value
    estimated_service_time: float = 0.0
    earliest_delivery: Optional[datetime] = None
    latest_delivery: Optional[datetime] = None

    @property
    def latitude(self) -> float:
        return self.coordinate.latitude

    @property
    def longitude(self) -> float:
        return self.coordinate.longitude


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class Client:
    """A customer site that receives deliveries."""

    id: int
    name: str
    address: str
    latitude: float
    longitude: float


@dataclass(slots=True)
class Truck:
    """A delivery vehicle and its last reported position."""

    id: int
    identifier: str
    driver: str
    current_latitude: Optional[float] = None
    current_longitude: Optional[float] = None
    status: str = "idle"
    last_updated: datetime = field(default_factory=_utcnow)


@dataclass(slots=True)
class Delivery:
    id: int
    client_id: int
    item_type: str
    item_count: int
    priority: str = Priority.MEDIUM.value
    status: str = "pending"
    truck_id: Optional[int] = None
    estimated_time: Optional[int] = None
    earliest_delivery: Optional[datetime] = None
    latest_delivery: Optional[datetime] = None
    special_instructions: Optional[str] = None


@dataclass(slots=True)
class Route:
    """A persisted optimized visiting order for one truck."""

    id: int
    truck_id: int
    delivery_ids: List[str]
    total_distance: float
    estimated_time: int
    status: str = "planned"
    created_at: datetime = field(default_factory=_utcnow)
