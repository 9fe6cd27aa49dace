from fastapi.testclient import TestClient

from elevator_dispatch.app.main import app


async def test_initialize_fleet(async_client, app_fleet):
    response = await async_client.post(
        "/api/fleet",
        json={"total_floors": 8, "number_of_elevators": 3, "positions": [2]},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["number_of_floors"] == 8
    assert [e["current_floor"] for e in data["elevators"]] == [2, 0, 0]


async def test_initialize_fleet_rejects_position_outside_building(async_client, app_fleet):
    response = await async_client.post(
        "/api/fleet",
        json={"total_floors": 4, "number_of_elevators": 1, "positions": [9]},
    )

    assert response.status_code == 422


async def test_create_external_request(async_client, app_fleet):
    response = await async_client.post("/api/requests/external", json={"floor": 7})

    assert response.status_code == 202
    data = response.json()
    assert data["status"] == "applied"
    assert data["elevator_id"] == 1
    assert data["elevator"]["up_queue"] == [7]


async def test_external_request_outside_building(async_client, app_fleet):
    response = await async_client.post("/api/requests/external", json={"floor": 11})

    assert response.status_code == 422
    assert "outside the building" in response.json()["detail"]


async def test_external_request_without_elevators(async_client, app_fleet):
    await async_client.post(
        "/api/fleet", json={"total_floors": 10, "number_of_elevators": 0}
    )

    response = await async_client.post("/api/requests/external", json={"floor": 3})

    assert response.status_code == 503


async def test_create_internal_request(async_client, app_fleet):
    request_data = {"elevator_id": 0, "destination_floor": 5}

    first = await async_client.post("/api/requests/internal", json=request_data)
    second = await async_client.post("/api/requests/internal", json=request_data)

    assert first.status_code == 202
    assert first.json()["status"] == "applied"
    assert second.json()["status"] == "no_op"
    assert second.json()["elevator"]["up_queue"] == [5]


async def test_internal_request_unknown_elevator(async_client, app_fleet):
    response = await async_client.post(
        "/api/requests/internal", json={"elevator_id": 4, "destination_floor": 5}
    )

    assert response.status_code == 404


async def test_get_elevators(async_client, app_fleet):
    response = await async_client.get("/api/elevators")

    assert response.status_code == 200
    data = response.json()
    assert data["number_of_floors"] == 10
    assert [e["id"] for e in data["elevators"]] == [0, 1]


async def test_tick_endpoint_returns_events(async_client, app_fleet):
    await async_client.post("/api/requests/external", json={"floor": 7})

    response = await async_client.post("/api/tick")

    assert response.status_code == 200
    assert response.json()["events"] == [
        {
            "event": "elevatorUpdate",
            "data": {"elevatorId": 1, "currentFloor": 6, "movingDirection": "up"},
        }
    ]


def test_websocket_session(app_fleet):
    client = TestClient(app)
    with client.websocket_connect("/ws") as websocket:
        assert websocket.receive_json()["event"] == "welcome"

        websocket.send_json(
            {
                "event": "initial-data",
                "data": {"totalFloors": 10, "numberOfElevators": 2, "positions": [0, 5]},
            }
        )
        message = websocket.receive_json()
        assert message["event"] == "elevatorUpdate"
        assert len(message["data"]["elevators"]) == 2

        websocket.send_json({"event": "call-elevator", "data": {"floor": 7}})
        message = websocket.receive_json()
        assert message["data"]["elevators"][1]["up_queue"] == [7]

        websocket.send_json({"event": "panel-call", "data": {"elevatorId": 0, "floor": 3}})
        assert websocket.receive_json() == {
            "event": "elevatorUpdate",
            "data": {"elevatorId": 0, "currentFloor": 0, "movingDirection": "up"},
        }


def test_websocket_reports_bad_messages(app_fleet):
    client = TestClient(app)
    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()

        websocket.send_json({"event": "panel-call", "data": {"elevatorId": 9, "floor": 3}})
        assert websocket.receive_json() == {
            "event": "error",
            "data": {"message": "elevator 9 not found"},
        }

        websocket.send_json({"event": "call-elevator", "data": {"floor": 42}})
        assert websocket.receive_json()["event"] == "error"

        websocket.send_text("not json")
        assert websocket.receive_json()["event"] == "error"

        websocket.send_json({"event": "dance"})
        assert websocket.receive_json()["data"]["message"] == "unknown event: 'dance'"


def test_websocket_rejects_positions_outside_building(app_fleet):
    client = TestClient(app)
    with client.websocket_connect("/ws") as websocket:
        websocket.receive_json()

        websocket.send_json(
            {
                "event": "initial-data",
                "data": {"totalFloors": 4, "numberOfElevators": 2, "positions": [9, -3]},
            }
        )
        message = websocket.receive_json()

    assert message["event"] == "error"
    assert "start position 9 is outside 0..4" in message["data"]["message"]
    assert [e.current_floor for e in app_fleet] == [0, 5]
