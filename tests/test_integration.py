import pytest
from fastapi.testclient import TestClient

from src.routecalc.main import create_app
from src.routecalc.services.calculator.store import SessionStore


@pytest.fixture
def api_client(monkeypatch: pytest.MonkeyPatch) -> TestClient:
    # fresh registry per test so sessions never leak between tests
    from src.routecalc.api.routes import sessions as sessions_routes

    store = SessionStore(max_sessions=10)
    monkeypatch.setattr(sessions_routes, "get_session_store", lambda: store)

    app = create_app()
    return TestClient(app)


def _new_session(client: TestClient) -> str:
    response = client.post("/api/sessions")
    assert response.status_code == 201
    return response.json()["session_id"]


def _build_route(client: TestClient, session_id: str, *stops: tuple[str, str]) -> None:
    for index, (stop_id, orders) in enumerate(stops):
        assert client.post(f"/api/sessions/{session_id}/stops", json={"stop_id": stop_id}).status_code == 200
        response = client.put(f"/api/sessions/{session_id}/stops/{index}/orders", json={"value": orders})
        assert response.status_code == 200


def test_root_and_health(api_client: TestClient):
    assert api_client.get("/").json()["status"] == "running"
    assert api_client.get("/api/health").json() == {"status": "ok"}

    positions_health = api_client.get("/api/health/positions").json()
    assert positions_health["healthy"] is True
    assert positions_health["count"] == 8


def test_positions_catalog(api_client: TestClient):
    response = api_client.get("/api/positions")

    assert response.status_code == 200
    payload = response.json()
    assert len(payload) == 8
    first_east = payload[1]
    assert first_east == {
        "stop_id": "K48.11",
        "line": "EAST",
        "one_way_minutes": 30,
        "round_trip_minutes": 60,
    }

    assert api_client.get("/api/positions/15.20A").json()["line"] == "SOUTH"
    missing = api_client.get("/api/positions/XX")
    assert missing.status_code == 404
    assert missing.json()["detail"]["code"] == "unknown_stop"


def test_session_calculation_flow(api_client: TestClient):
    session_id = _new_session(api_client)
    _build_route(api_client, session_id, ("K48.11", "2"), ("K48.12", "3"))

    state = api_client.get(f"/api/sessions/{session_id}").json()
    assert [stop["stop_id"] for stop in state["stops"]] == ["K48.11", "K48.12"]
    assert [stop["position"] for stop in state["stops"]] == [1, 2]
    assert state["stops"][0]["line"] == "EAST"
    assert state["total_orders_entered"] == 5
    assert state["summary"] is None

    response = api_client.post(f"/api/sessions/{session_id}/calculate")
    assert response.status_code == 200
    assert response.json() == {
        "total_time": 70,
        "total_orders": 5,
        "average": 14.0,
        "path": "CENTRO → K48.11 → K48.12 → CENTRO",
    }

    state = api_client.get(f"/api/sessions/{session_id}").json()
    assert state["summary"]["total_time"] == 70

    text = api_client.get(f"/api/sessions/{session_id}/summary/text")
    assert text.status_code == 200
    assert "Promedio: 14.0 min/ord" in text.text


def test_remove_stop_realigns_counts(api_client: TestClient):
    session_id = _new_session(api_client)
    _build_route(api_client, session_id, ("K48.11", "1"), ("15.20A", "9"), ("15.20.1", "1"))

    response = api_client.delete(f"/api/sessions/{session_id}/stops/1")

    assert response.status_code == 200
    stops = response.json()["stops"]
    assert [(stop["stop_id"], stop["order_count"]) for stop in stops] == [("K48.11", 1), ("15.20.1", 1)]

    summary = api_client.post(f"/api/sessions/{session_id}/calculate").json()
    assert summary["total_time"] == 120
    assert summary["average"] == 60.0


def test_validation_errors(api_client: TestClient):
    session_id = _new_session(api_client)

    empty = api_client.post(f"/api/sessions/{session_id}/calculate")
    assert empty.status_code == 400
    assert empty.json()["detail"] == {"code": "empty_route", "message": "Añade al menos una posición a la ruta."}

    _build_route(api_client, session_id, ("K48.11", "abc"))
    zero = api_client.post(f"/api/sessions/{session_id}/calculate")
    assert zero.status_code == 400
    assert zero.json()["detail"]["code"] == "zero_orders"

    unknown = api_client.post(f"/api/sessions/{session_id}/stops", json={"stop_id": "K99"})
    assert unknown.status_code == 400
    assert unknown.json()["detail"]["code"] == "unknown_stop"

    out_of_range = api_client.delete(f"/api/sessions/{session_id}/stops/5")
    assert out_of_range.status_code == 404
    assert out_of_range.json()["detail"]["code"] == "stop_index"

    no_summary = api_client.get(f"/api/sessions/{session_id}/summary/text")
    assert no_summary.status_code == 404


def test_reset_and_delete_session(api_client: TestClient):
    session_id = _new_session(api_client)
    _build_route(api_client, session_id, ("K48.11", "5"))
    api_client.post(f"/api/sessions/{session_id}/calculate")

    reset = api_client.post(f"/api/sessions/{session_id}/reset")
    assert reset.status_code == 200
    assert reset.json()["stops"] == []
    assert reset.json()["summary"] is None
    assert api_client.post(f"/api/sessions/{session_id}/calculate").json()["detail"]["code"] == "empty_route"

    assert api_client.delete(f"/api/sessions/{session_id}").status_code == 204
    assert api_client.get(f"/api/sessions/{session_id}").status_code == 404


def test_stateless_trip_calculation(api_client: TestClient):
    response = api_client.post(
        "/api/trips/calculate",
        json={"stops": [{"stop_id": "K48.11", "orders": 5}]},
    )

    assert response.status_code == 200
    assert response.json()["total_time"] == 60
    assert response.json()["average"] == 12.0

    rejected = api_client.post("/api/trips/calculate", json={"stops": []})
    assert rejected.status_code == 400
    assert rejected.json()["detail"]["code"] == "empty_route"


@pytest.mark.parametrize("raw, expected", [(3.7, 3), (True, 0), ([], 0), ({"n": 1}, 0), ("-5", 0), (None, 0)])
def test_order_count_accepts_any_raw_input(api_client: TestClient, raw, expected):
    session_id = _new_session(api_client)
    api_client.post(f"/api/sessions/{session_id}/stops", json={"stop_id": "K48.11"})

    response = api_client.put(f"/api/sessions/{session_id}/stops/0/orders", json={"value": raw})

    assert response.status_code == 200
    assert response.json()["stops"][0]["order_count"] == expected


def test_stateless_trip_parses_raw_counts(api_client: TestClient):
    response = api_client.post(
        "/api/trips/calculate",
        json={"stops": [{"stop_id": "K48.11", "orders": 2.9}, {"stop_id": "K48.12", "orders": True}]},
    )

    assert response.status_code == 200
    assert response.json()["total_orders"] == 2
