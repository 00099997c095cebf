from fastapi.testclient import TestClient

from reconnect.core.config import get_settings
from reconnect.main import app

client = TestClient(app)


def test_health_reports_version_without_owner_header() -> None:
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"data": {"status": "ok", "version": get_settings().version}}


def test_unknown_route_uses_error_envelope() -> None:
    response = client.get("/api/v1/contacts/1/unknown", headers={"X-User-Id": "1"})

    assert response.status_code == 404
    assert response.json() == {"error": {"code": "RESOURCE_NOT_FOUND", "message": "Not Found"}}
