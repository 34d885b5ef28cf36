# tests/test_request_context.py
import structlog
from fastapi.testclient import TestClient

from ocwiki.api.main import create_application


def make_client():
    app = create_application()

    @app.get("/_context")
    async def bound_context():
        return structlog.contextvars.get_contextvars()

    return TestClient(app)


def test_request_id_is_generated_and_returned():
    response = make_client().get("/live")

    request_id = response.headers["x-request-id"]
    assert len(request_id) == 32
    int(request_id, 16)


def test_incoming_request_id_is_kept():
    response = make_client().get("/live", headers={"X-Request-ID": "edge-42"})
    assert response.headers["x-request-id"] == "edge-42"


def test_request_and_client_ids_are_bound_for_logging():
    response = make_client().get(
        "/_context",
        headers={"X-Request-ID": "edge-42", "X-Forwarded-For": "198.51.100.1"},
    )

    assert response.json() == {"request_id": "edge-42", "client_id": "198.51.100.1"}
