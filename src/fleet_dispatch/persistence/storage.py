"""Storage interface for fleet records with an in-memory backend."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from ..models.domain import Client, Coordinate, Delivery, Route, Stop, Truck

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class DeliveryWithClient:
    delivery: Delivery
    client: Client


class Storage(ABC):
    """Contract for fleet record backends."""

    @abstractmethod
    def get_client(self, client_id: int) -> Optional[Client]:
        raise NotImplementedError

    @abstractmethod
    def create_client(self, *, name: str, address: str, latitude: float, longitude: float) -> Client:
        raise NotImplementedError

    @abstractmethod
    def get_truck(self, truck_id: int) -> Optional[Truck]:
        raise NotImplementedError

    @abstractmethod
    def create_truck(self, *, identifier: str, driver: str, **fields) -> Truck:
        raise NotImplementedError

    @abstractmethod
    def update_truck_location(self, truck_id: int, latitude: float, longitude: float) -> Optional[Truck]:
        raise NotImplementedError

    @abstractmethod
    def get_delivery(self, delivery_id: int) -> Optional[Delivery]:
        raise NotImplementedError

    @abstractmethod
    def create_delivery(self, *, client_id: int, item_type: str, item_count: int, **fields) -> Delivery:
        raise NotImplementedError

    @abstractmethod
    def get_deliveries_with_clients(self, delivery_ids: Iterable[int]) -> list[DeliveryWithClient]:
        """Return the requested deliveries joined with their client, in request order.

        Unknown ids and deliveries whose client is missing are skipped.
        """
        raise NotImplementedError

    @abstractmethod
    def create_route(
        self,
        *,
        truck_id: int,
        delivery_ids: Sequence[str],
        total_distance: float,
        estimated_time: int,
        status: str = "planned",
    ) -> Route:
        raise NotImplementedError

    @abstractmethod
    def get_route(self, route_id: int) -> Optional[Route]:
        raise NotImplementedError

    @abstractmethod
    def list_routes(self) -> list[Route]:
        raise NotImplementedError


class InMemoryStorage(Storage):
    """Dict-backed storage for tests and local runs."""

    def __init__(self) -> None:
        self._clients: dict[int, Client] = {}
        self._trucks: dict[int, Truck] = {}
        self._deliveries: dict[int, Delivery] = {}
        self._routes: dict[int, Route] = {}
        self._next_id = {"clients": 1, "trucks": 1, "deliveries": 1, "routes": 1}

    def _allocate(self, table: str) -> int:
        value = self._next_id[table]
        self._next_id[table] = value + 1
        return value

    def get_client(self, client_id: int) -> Optional[Client]:
        return self._clients.get(client_id)

    def create_client(self, *, name: str, address: str, latitude: float, longitude: float) -> Client:
        client = Client(
            id=self._allocate("clients"),
            name=name,
            address=address,
            latitude=latitude,
            longitude=longitude,
        )
        self._clients[client.id] = client
        return client

    def get_truck(self, truck_id: int) -> Optional[Truck]:
        return self._trucks.get(truck_id)

    def create_truck(self, *, identifier: str, driver: str, **fields) -> Truck:
        truck = Truck(id=self._allocate("trucks"), identifier=identifier, driver=driver, **fields)
        self._trucks[truck.id] = truck
        return truck

    def update_truck_location(self, truck_id: int, latitude: float, longitude: float) -> Optional[Truck]:
        truck = self._trucks.get(truck_id)
        if truck is None:
            return None
        truck.current_latitude = latitude
        truck.current_longitude = longitude
        truck.last_updated = datetime.now(timezone.utc)
        return truck

    def get_delivery(self, delivery_id: int) -> Optional[Delivery]:
        return self._deliveries.get(delivery_id)

    def create_delivery(self, *, client_id: int, item_type: str, item_count: int, **fields) -> Delivery:
        delivery = Delivery(
            id=self._allocate("deliveries"),
            client_id=client_id,
            item_type=item_type,
            item_count=item_count,
            **fields,
        )
        self._deliveries[delivery.id] = delivery
        return delivery

    def get_deliveries_with_clients(self, delivery_ids: Iterable[int]) -> list[DeliveryWithClient]:
        joined: list[DeliveryWithClient] = []
        seen: set[int] = set()
        for delivery_id in delivery_ids:
            if delivery_id in seen:
                continue
            seen.add(delivery_id)
            delivery = self._deliveries.get(delivery_id)
            if delivery is None:
                logger.warning("Delivery %s not found, skipping", delivery_id)
                continue
            client = self._clients.get(delivery.client_id)
            if client is None:
                logger.warning("Client %s for delivery %s not found, skipping", delivery.client_id, delivery_id)
                continue
            joined.append(DeliveryWithClient(delivery=delivery, client=client))
        return joined

    def create_route(
        self,
        *,
        truck_id: int,
        delivery_ids: Sequence[str],
        total_distance: float,
        estimated_time: int,
        status: str = "planned",
    ) -> Route:
        route = Route(
            id=self._allocate("routes"),
            truck_id=truck_id,
            delivery_ids=list(delivery_ids),
            total_distance=total_distance,
            estimated_time=estimated_time,
            status=status,
        )
        self._routes[route.id] = route
        return route

    def get_route(self, route_id: int) -> Optional[Route]:
        return self._routes.get(route_id)

    def list_routes(self) -> list[Route]:
        return list(self._routes.values())


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive timestamps are stored as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def build_stops(records: Sequence[DeliveryWithClient]) -> list[Stop]:
    """Turn joined delivery records into optimizer stops keyed by delivery id.

    Delivery windows are returned timezone-aware so they compare against UTC clocks.
    """
    return [
        Stop(
            id=record.delivery.id,
            coordinate=Coordinate(record.client.latitude, record.client.longitude),
            priority=record.delivery.priority,
            estimated_service_time=record.delivery.estimated_time or 0,
            earliest_delivery=_as_utc(record.delivery.earliest_delivery),
            latest_delivery=_as_utc(record.delivery.latest_delivery),
        )
        for record in records
    ]


def seed_sample_data(storage: Storage) -> None:
    """Populate an empty store with a small Santo Domingo fleet for local runs."""
    clients = [
        storage.create_client(name="Colmado La Esquina", address="Av. Duarte 112", latitude=18.4735, longitude=-69.8849),
        storage.create_client(name="Farmacia Central", address="C/ El Conde 54", latitude=18.4648, longitude=-69.8932),
        storage.create_client(name="Supermercado Norte", address="Av. Máximo Gómez 8", latitude=18.4902, longitude=-69.9125),
    ]
    storage.create_truck(identifier="TRK-001", driver="Carlos Peña")
    storage.create_truck(identifier="TRK-002", driver="Ana Rodríguez")
    for client, priority, minutes in zip(clients, ("urgent", "low", "medium"), (15, 20, 10)):
        storage.create_delivery(
            client_id=client.id,
            item_type="boxes",
            item_count=10,
            priority=priority,
            estimated_time=minutes,
        )
    logger.info("Seeded sample fleet data: %d clients", len(clients))
