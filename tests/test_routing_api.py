from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from fleet_dispatch.main import create_app
from fleet_dispatch.persistence.storage import InMemoryStorage
from fleet_dispatch.services.events import Broadcaster


@pytest.fixture
def storage() -> InMemoryStorage:
    storage = InMemoryStorage()
    near = storage.create_client(name="Colmado", address="Av. Duarte", latitude=18.4735, longitude=-69.8849)
    far = storage.create_client(name="Farmacia", address="El Conde", latitude=18.4648, longitude=-69.8932)
    storage.create_truck(identifier="TRK-001", driver="Carlos")
    storage.create_delivery(client_id=near.id, item_type="boxes", item_count=4, priority="urgent", estimated_time=15)
    storage.create_delivery(client_id=far.id, item_type="boxes", item_count=2, priority="low", estimated_time=20)
    storage.create_delivery(
        client_id=far.id,
        item_type="tanks",
        item_count=1,
        priority="high",
        estimated_time=5,
        latest_delivery=datetime.now(timezone.utc) - timedelta(hours=1),
    )
    return storage


@pytest.fixture
def broadcaster() -> Broadcaster:
    return Broadcaster()


@pytest.fixture
def client(storage, broadcaster) -> TestClient:
    return TestClient(create_app(storage=storage, broadcaster=broadcaster))


def test_health(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_optimize_persists_route(client, storage):
    response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [2, 1]})

    assert response.status_code == 200
    body = response.json()
    assert body["route"]["delivery_ids"] == ["1", "2"]
    assert body["route"]["estimated_time"] == 35
    assert body["route"]["status"] == "planned"
    assert body["strategy"] == "hybrid"
    assert body["total_distance"] > 0
    assert 0 <= body["efficiency"] <= 100
    assert [leg["stop_id"] for leg in body["legs"]] == [1, 2]
    assert body["travel_time_min"] == sum(leg["travel_min"] for leg in body["legs"])
    assert len(storage.list_routes()) == 1


def test_optimize_accepts_snake_case_and_strategy(client):
    response = client.post(
        "/api/routes/optimize",
        json={"truck_id": 1, "stop_ids": [1, 2], "strategy": "nearest-neighbor"},
    )

    assert response.status_code == 200
    assert response.json()["strategy"] == "nearest-neighbor"
    assert response.json()["efficiency"] == pytest.approx(90.0)


def test_optimize_rejects_unknown_strategy(client, storage):
    response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [1, 2], "strategy": "hybird"})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InvalidStrategy"
    assert storage.list_routes() == []


def test_optimize_rejects_unknown_priority(client, storage):
    storage.create_delivery(client_id=1, item_type="boxes", item_count=1, priority="critical")

    response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [1, 4]})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InvalidPriority"


def test_optimize_unknown_truck_is_404(client):
    response = client.post("/api/routes/optimize", json={"truckId": 42, "stopIds": [1]})

    assert response.status_code == 404


def test_optimize_without_valid_deliveries_is_400(client):
    response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [100, 200]})

    assert response.status_code == 400
    assert response.json()["detail"] == "No valid deliveries found."


def test_optimize_with_time_windows_drops_expired_delivery(client):
    response = client.post(
        "/api/routes/optimize",
        json={"truckId": 1, "stopIds": [1, 2, 3], "useTimeWindows": True},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["dropped_stop_ids"] == [3]
    assert sorted(body["route"]["delivery_ids"]) == ["1", "2"]


def test_optimize_starts_from_truck_position(client, storage):
    storage.update_truck_location(1, 18.4648, -69.8932)

    response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [1, 2], "strategy": "2-opt"})

    assert response.status_code == 200
    assert response.json()["legs"][0]["distance_from_prev_km"] > 0


def test_list_and_get_routes(client):
    created = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [1]}).json()["route"]

    listed = client.get("/api/routes")
    fetched = client.get(f"/api/routes/{created['id']}")

    assert listed.status_code == 200
    assert [route["id"] for route in listed.json()] == [created["id"]]
    assert fetched.json()["delivery_ids"] == ["1"]
    assert client.get("/api/routes/999").status_code == 404


def test_truck_location_update_publishes_event(client, broadcaster):
    received: list[dict] = []

    class Recorder:
        def send(self, event: dict) -> None:
            received.append(event)

    broadcaster.subscribe(Recorder())

    response = client.patch("/api/trucks/1/location", json={"latitude": 18.49, "longitude": -69.92})

    assert response.status_code == 200
    assert response.json()["current_latitude"] == 18.49
    assert received[0]["type"] == "truck_location_updated"
    assert client.patch("/api/trucks/9/location", json={"latitude": 0, "longitude": 0}).status_code == 404
    assert client.patch("/api/trucks/1/location", json={"latitude": 95, "longitude": 0}).status_code == 422


def test_websocket_streams_route_events(client):
    with client.websocket_connect("/ws") as websocket:
        response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [1, 2]})
        event = websocket.receive_json()

    assert response.status_code == 200
    assert event["type"] == "route_optimized"
    assert event["data"]["delivery_ids"] == ["1", "2"]


def test_create_app_keeps_injected_collaborators(storage, broadcaster):
    app = create_app(storage=storage, broadcaster=broadcaster)

    assert app.state.storage is storage
    assert app.state.broadcaster is broadcaster


def test_optimize_rejects_empty_strategy(client, storage):
    response = client.post("/api/routes/optimize", json={"truckId": 1, "stopIds": [1], "strategy": ""})

    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InvalidStrategy"
    assert storage.list_routes() == []


def test_optimize_with_time_windows_accepts_naive_deadlines(client, storage):
    naive_deadline = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=2)
    storage.create_delivery(
        client_id=1,
        item_type="boxes",
        item_count=1,
        priority="medium",
        latest_delivery=naive_deadline,
    )

    response = client.post(
        "/api/routes/optimize",
        json={"truckId": 1, "stopIds": [1, 4], "useTimeWindows": True},
    )

    assert response.status_code == 200
    assert response.json()["dropped_stop_ids"] == []
    assert sorted(response.json()["route"]["delivery_ids"]) == ["1", "4"]


def test_websocket_disconnect_unsubscribes(client, broadcaster):
    with client.websocket_connect("/ws"):
        assert len(broadcaster) == 1

    assert len(broadcaster) == 0
