from datetime import datetime, timezone

from fleet_dispatch.models.domain import Coordinate
from fleet_dispatch.persistence.storage import InMemoryStorage, build_stops, seed_sample_data


def _storage_with_deliveries() -> InMemoryStorage:
    storage = InMemoryStorage()
    acme = storage.create_client(name="Acme", address="1 Main St", latitude=18.4735, longitude=-69.8849)
    globex = storage.create_client(name="Globex", address="2 Side St", latitude=18.4648, longitude=-69.8932)
    storage.create_delivery(client_id=acme.id, item_type="boxes", item_count=3, priority="urgent", estimated_time=15)
    storage.create_delivery(
        client_id=globex.id,
        item_type="tanks",
        item_count=1,
        priority="low",
        latest_delivery=datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc),
    )
    return storage


def test_in_memory_storage_allocates_ids_per_table():
    storage = _storage_with_deliveries()
    truck = storage.create_truck(identifier="TRK-9", driver="Driver")

    assert truck.id == 1
    assert storage.get_delivery(2).item_type == "tanks"
    assert storage.get_client(3) is None


def test_deliveries_join_clients_in_request_order():
    storage = _storage_with_deliveries()

    joined = storage.get_deliveries_with_clients([2, 42, 1, 2])

    assert [record.delivery.id for record in joined] == [2, 1]
    assert joined[0].client.name == "Globex"


def test_build_stops_uses_delivery_ids_and_client_coordinates():
    storage = _storage_with_deliveries()

    stops = build_stops(storage.get_deliveries_with_clients([1, 2]))

    assert [stop.id for stop in stops] == [1, 2]
    assert stops[0].coordinate == Coordinate(18.4735, -69.8849)
    assert stops[0].estimated_service_time == 15
    assert stops[1].estimated_service_time == 0
    assert stops[1].latest_delivery is not None


def test_routes_and_truck_locations_round_trip():
    storage = _storage_with_deliveries()
    truck = storage.create_truck(identifier="TRK-1", driver="Driver")

    route = storage.create_route(truck_id=truck.id, delivery_ids=["2", "1"], total_distance=4.2, estimated_time=35)
    moved = storage.update_truck_location(truck.id, 18.5, -69.9)

    assert storage.get_route(route.id) is route
    assert storage.list_routes() == [route]
    assert route.status == "planned"
    assert (moved.current_latitude, moved.current_longitude) == (18.5, -69.9)
    assert storage.update_truck_location(999, 0.0, 0.0) is None


def test_seed_sample_data_populates_store():
    storage = InMemoryStorage()

    seed_sample_data(storage)

    assert storage.get_truck(1) is not None
    assert len(storage.get_deliveries_with_clients([1, 2, 3])) == 3


def test_build_stops_treats_naive_deadlines_as_utc():
    storage = InMemoryStorage()
    site = storage.create_client(name="Acme", address="1 Main St", latitude=18.4735, longitude=-69.8849)
    storage.create_delivery(
        client_id=site.id,
        item_type="boxes",
        item_count=1,
        latest_delivery=datetime(2026, 3, 2, 18, 0),
    )

    stop = build_stops(storage.get_deliveries_with_clients([1]))[0]

    assert stop.latest_delivery == datetime(2026, 3, 2, 18, 0, tzinfo=timezone.utc)
    assert stop.earliest_delivery is None
