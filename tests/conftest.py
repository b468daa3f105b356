"""Pytest configuration and fixtures."""

import json
from datetime import datetime, timezone

import pytest
import requests
from fastapi.testclient import TestClient

from railway_defects.client.gateway import GatewayClient
from railway_defects.config.settings import Settings
from railway_defects.main import create_app


# ---------------------------------------------------------------------------
# API Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="http://testserver:4000", request_timeout=5.0, seed_sample_data=True)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def empty_client() -> TestClient:
    return TestClient(create_app(Settings(seed_sample_data=False)))


@pytest.fixture
def now() -> datetime:
    return datetime(2025, 3, 25, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Gateway Fixtures
# ---------------------------------------------------------------------------

def _make_response(status_code: int, payload=None, raw: bytes = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.reason = {200: "OK", 201: "Created", 204: "No Content", 404: "Not Found", 500: "Internal Server Error", 503: "Service Unavailable"}.get(status_code, "")
    if raw is not None:
        response._content = raw
    elif payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = b""
    return response


class FakeSession:
    """Stands in for requests.Session; unknown routes behave like a dead server."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def add(self, method: str, path: str, status: int = 200, payload=None, raw: bytes = None, error: Exception = None):
        if error is not None:
            self.routes[(method, path)] = error
        else:
            self.routes[(method, path)] = _make_response(status, payload, raw)

    def add_handler(self, method: str, path: str, handler):
        self.routes[(method, path)] = handler

    def request(self, method, url, headers=None, timeout=None, json=None, **kwargs):
        self.calls.append({"method": method, "url": url, "timeout": timeout, "json": json})
        path = url.split("/api", 1)[1]
        route = self.routes.get((method, path))
        if route is None:
            raise requests.ConnectionError(f"Connection refused: {url}")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            status, payload = route()
            return _make_response(status, payload)
        return route


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def gateway(settings, fake_session) -> GatewayClient:
    return GatewayClient(settings, session=fake_session)


@pytest.fixture
def raw_reports():
    return [
        {"_id": "r1", "defectType": "Broken Rail", "riskLevel": "High", "status": "Pending", "location": "Colombo", "reportDate": "2025-03-24T08:30:00Z", "assignedTo": "Team A"},
        {"_id": "r2", "defectType": "Corrosion", "riskLevel": "Medium", "status": "In Progress", "location": "Galle", "reportDate": "2025-03-10T09:00:00Z", "assignedTo": "Team B"},
        {"_id": "r3", "defectType": "Broken Rail", "riskLevel": "High", "status": "Resolved", "location": "Matara", "reportDate": "2025-03-05T10:00:00Z", "assignedTo": "Team A"},
        {"_id": "r4", "defectType": "Loose Bolt", "riskLevel": "Low", "status": "Completed", "location": "Kalutara", "reportDate": "2025-02-20T11:00:00Z", "assignedTo": "Unassigned"},
        {"_id": "r5", "defectType": "Weld Failure", "riskLevel": "Critical", "status": "Active", "location": "Panadura", "reportDate": "2025-03-22T16:45:00Z"},
    ]
