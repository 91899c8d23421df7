from fastapi import FastAPI, Query
from fastapi.testclient import TestClient

from heritage_map.core.error_handlers import ErrorHandler, setup_error_handlers
from heritage_map.core.exceptions import PlaceNotFoundError, TourSessionLimitError
from heritage_map.middleware import RequestContextMiddleware


def _app():
    app = FastAPI()
    app.add_middleware(RequestContextMiddleware)
    setup_error_handlers(app)

    @app.get("/missing")
    async def missing():
        raise PlaceNotFoundError("nowhere")

    @app.get("/full")
    async def full():
        raise TourSessionLimitError(2)

    @app.get("/typed")
    async def typed(radius_km: float = Query(...)):
        return {"radius_km": radius_km}

    @app.get("/boom")
    async def boom():
        raise RuntimeError("unexpected")

    return app


client = TestClient(_app(), raise_server_exceptions=False)


def test_domain_error_envelope():
    r = client.get("/missing", headers={"X-Request-ID": "req-1"})
    assert r.status_code == 404
    body = r.json()
    assert body["status"] == "error"
    assert body["data"] is None
    assert body["error"] == "Place 'nowhere' not found"
    assert body["error_code"] == "PLACE_NOT_FOUND"
    assert body["details"] == {"place_id": "nowhere"}
    assert body["request_id"] == "req-1"
    assert r.headers["X-Request-ID"] == "req-1"


def test_service_limit_is_503():
    r = client.get("/full")
    assert r.status_code == 503
    assert r.json()["error_code"] == "TOUR_SESSION_LIMIT_EXCEEDED"


def test_validation_error_envelope():
    r = client.get("/typed?radius_km=far")
    assert r.status_code == 422
    body = r.json()
    assert body["error_code"] == "VALIDATION_ERROR"
    assert body["details"]["validation_errors"][0]["field"] == "query.radius_km"


def test_unknown_route_envelope():
    r = client.get("/nope")
    assert r.status_code == 404
    assert r.json()["error_code"] == "NOT_FOUND"


def test_unexpected_error_is_500():
    r = client.get("/boom")
    assert r.status_code == 500
    body = r.json()
    assert body["error_code"] == "INTERNAL_SERVER_ERROR"
    assert "unexpected" not in body["error"]


def test_error_statistics():
    handler = ErrorHandler()
    for _ in range(3):
        handler._track_error("PLACE_NOT_FOUND")
    stats = handler.get_error_statistics()
    assert stats["error_counts"] == {"PLACE_NOT_FOUND": 3}
    assert stats["total_errors"] == 3
