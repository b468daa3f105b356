from typing import Any, List, Optional

import requests
from cachetools import TTLCache

from railway_defects.client.errors import MalformedResponse, NetworkUnreachable, ServerError
from railway_defects.config.settings import Settings
from railway_defects.models.report import DefectReport
from railway_defects.models.user import User
from railway_defects.schemas.dashboard import StatusCounts
from railway_defects.services.normalize import (
    extract_users,
    normalize_report,
    normalize_reports,
    normalize_status_counts,
    normalize_user,
)

REPORTS_KEY = "reports"
USERS_KEY = "users"


class GatewayClient:
    """HTTP client for the defect API.

    Every payload is normalized before it is returned, and the last good
    reports/users payloads are kept in a TTL cache so views can fall back to
    them when the API is down.
    """

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None):
        self.settings = settings
        self.session = session or requests.Session()
        self.cache = TTLCache(maxsize=settings.cache_size, ttl=settings.cache_ttl)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.settings.api_url}{path}"
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        try:
            response = self.session.request(method, url, headers=headers, timeout=self.settings.request_timeout, **kwargs)
        except requests.RequestException as e:
            print(f"No response from {url}: {str(e)}")
            raise NetworkUnreachable(f"No response from server at {url}") from e

        if not response.ok:
            detail = None
            try:
                body = response.json()
                if isinstance(body, dict):
                    detail = body.get("message") or body.get("detail")
            except ValueError:
                pass
            print(f"{method} {url} failed with status {response.status_code}")
            raise ServerError(response.status_code, response.reason or "", str(detail) if detail else None)

        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"Invalid JSON from {url}") from e

    def cached(self, key: str) -> Optional[list]:
        return self.cache.get(key)

    def health(self) -> dict:
        payload = self._request("GET", "/health")
        if not isinstance(payload, dict):
            raise MalformedResponse("Health payload is not an object")
        return payload

    def get_reports(self) -> List[DefectReport]:
        payload = self._request("GET", "/reports")
        if not isinstance(payload, list):
            raise MalformedResponse("Reports payload is not an array")
        reports = normalize_reports(payload)
        self.cache[REPORTS_KEY] = reports
        return reports

    def get_report(self, report_id: str) -> DefectReport:
        payload = self._request("GET", f"/reports/{report_id}")
        if not isinstance(payload, dict):
            raise MalformedResponse("Report payload is not an object")
        return normalize_report(payload)

    def get_status_counts(self) -> StatusCounts:
        payload = self._request("GET", "/reports/stats/pie")
        if not isinstance(payload, dict):
            raise MalformedResponse("Status counts payload is not an object")
        return normalize_status_counts(payload)

    def get_users(self) -> List[User]:
        users = extract_users(self._request("GET", "/users"))
        if users is None:
            raise MalformedResponse("Users payload is neither an array nor a {users: [...]} object")
        self.cache[USERS_KEY] = users
        return users

    def create_user(self, data: dict) -> User:
        payload = self._request("POST", "/users", json=data)
        if not isinstance(payload, dict):
            raise MalformedResponse("Created user payload is not an object")
        return normalize_user(payload)

    def set_user_status(self, user_id: str, is_active: bool) -> None:
        self._request("PUT", f"/users/{user_id}/status", json={"isActive": is_active})

    def delete_user(self, user_id: str) -> None:
        self._request("DELETE", f"/users/{user_id}")
