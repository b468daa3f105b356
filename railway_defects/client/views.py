"""View models for the admin dashboard screens.

Each view owns its transient state (rows, filters, page, error banner) and
talks to the API only through ``GatewayClient``. Failures never escape a
view: they are turned into an ``error`` banner and the view falls back to
cached, empty or sample data. ``retry()`` re-runs the last fetch.
"""

from datetime import datetime
from typing import Callable, List, Optional

from railway_defects.client.errors import GatewayError, NetworkUnreachable, ServerError
from railway_defects.client.gateway import REPORTS_KEY, GatewayClient
from railway_defects.client.sequencing import FetchSequencer
from railway_defects.models.report import DefectReport, ReportStatus, RiskLevel
from railway_defects.models.user import User
from railway_defects.sample_data import SAMPLE_DEFECTS, SAMPLE_USERS
from railway_defects.schemas.dashboard import DashboardSummary
from railway_defects.services.aggregation import recent_activity, status_counts, summarize
from railway_defects.services.filtering import DEFECTS_PER_PAGE, Page, filter_reports, paginate
from railway_defects.services.formatting import format_timestamp, status_slug
from railway_defects.services.normalize import classify_risk_level, classify_status, normalize_user

DASHBOARD_ERROR = "Failed to load data. Please try again later."


def describe_error(prefix: str, error: GatewayError) -> str:
    """Short banner text, e.g. ``Failed to fetch defects data (500)``."""
    if isinstance(error, ServerError):
        return f"{prefix} ({error.status_code})"
    if isinstance(error, NetworkUnreachable):
        return f"{prefix} - Network error"
    return f"{prefix} - {error}"


class DashboardView:
    def __init__(self, gateway: GatewayClient, clock: Optional[Callable[[], datetime]] = None):
        self.gateway = gateway
        self.clock = clock
        self.sequencer = FetchSequencer()
        self.summary = DashboardSummary()
        self.error: Optional[str] = None

    @property
    def loading(self) -> bool:
        return self.sequencer.in_flight

    def refresh(self) -> bool:
        """Run one fetch cycle; returns False when a newer cycle already won."""
        ticket = self.sequencer.issue()
        summary, error = self._fetch_cycle()
        if not self.sequencer.accept(ticket):
            print(f"Discarding stale dashboard response #{ticket}")
            return False
        self.summary, self.error = summary, error
        return True

    retry = refresh

    def _fetch_cycle(self):
        error = None
        try:
            reports = self.gateway.get_reports()
        except GatewayError as e:
            print(f"Error fetching reports: {str(e)}")
            error = DASHBOARD_ERROR
            reports = self.gateway.cached(REPORTS_KEY) or []

        try:
            counts = self.gateway.get_status_counts()
        except GatewayError as e:
            print(f"Status counts unavailable, computing locally: {str(e)}")
            counts = status_counts(reports)

        try:
            users = self.gateway.get_users()
        except GatewayError as e:
            print(f"Users unavailable, counting assignees instead: {str(e)}")
            users = None

        now = self.clock() if self.clock else None
        summary = summarize(reports, users=users, counts=counts, now=now)
        if error and not reports:
            summary.recent_activity = recent_activity(SAMPLE_DEFECTS)
        return summary, error

    def recent_rows(self) -> List[dict]:
        rows = []
        for index, report in enumerate(self.summary.recent_activity, start=1):
            rows.append({
                "id": f"#{index}",
                "section": report.location or "N/A",
                "type": report.type,
                "severity": report.risk_level.value,
                "status": report.status.value,
                "statusClass": f"status-{status_slug(report.status)}",
                "date": format_timestamp(report.report_date or report.created_at),
                "team": report.assigned_to,
            })
        return rows


class DefectListView:
    def __init__(self, gateway: GatewayClient, page_size: int = DEFECTS_PER_PAGE):
        self.gateway = gateway
        self.page_size = page_size
        self.sequencer = FetchSequencer()
        self.defects: List[DefectReport] = []
        self.error: Optional[str] = None
        self.status: Optional[ReportStatus] = None
        self.risk_level: Optional[RiskLevel] = None
        self.query = ""
        self.current_page = 1
        self.selected: Optional[DefectReport] = None
        self.detail_error: Optional[str] = None

    def load(self) -> bool:
        ticket = self.sequencer.issue()
        try:
            defects, error = self.gateway.get_reports(), None
        except GatewayError as e:
            print(f"Error fetching defects: {str(e)}")
            defects = self.gateway.cached(REPORTS_KEY) or []
            error = describe_error("Failed to fetch defects data", e)
        if not self.sequencer.accept(ticket):
            print(f"Discarding stale defect list response #{ticket}")
            return False
        self.defects, self.error = defects, error
        self.current_page = min(self.current_page, max(self.page().total_pages, 1))
        return True

    retry = load

    def set_filters(self, status=None, risk_level=None, query: str = "") -> None:
        self.status = classify_status(status) if status else None
        self.risk_level = classify_risk_level(risk_level) if risk_level else None
        self.query = query or ""
        self.current_page = 1

    def filtered(self) -> List[DefectReport]:
        return filter_reports(self.defects, self.status, self.risk_level, self.query)

    def page(self) -> Page:
        return paginate(self.filtered(), self.current_page, self.page_size)

    def go_to(self, number: int) -> Page:
        page = paginate(self.filtered(), number, self.page_size)
        self.current_page = page.number
        return page

    def next_page(self) -> Page:
        return self.go_to(self.current_page + 1)

    def previous_page(self) -> Page:
        return self.go_to(self.current_page - 1)

    def caption(self) -> str:
        page = self.page()
        return f"Showing {page.first_index}-{page.last_index} of {page.total} defects"

    def open_detail(self, report_id: str) -> Optional[DefectReport]:
        try:
            self.selected, self.detail_error = self.gateway.get_report(report_id), None
        except GatewayError as e:
            print(f"Error fetching defect details: {str(e)}")
            self.selected = None
            self.detail_error = describe_error("Failed to fetch defect details", e)
        return self.selected

    def close_detail(self) -> None:
        self.selected = None
        self.detail_error = None


class UserManagementView:
    REQUIRED_FIELDS = (("name", "Name"), ("email", "Email"), ("password", "Password"), ("department", "Department/Section"))

    def __init__(self, gateway: GatewayClient):
        self.gateway = gateway
        self.users: List[User] = []
        self.error: Optional[str] = None
        self.notice: Optional[str] = None

    def load(self) -> None:
        self.error = None
        try:
            status = self.gateway.health().get("status")
            print(f"API health check for users: {status}")
        except GatewayError as e:
            print(f"Health check failed, proceeding anyway: {str(e)}")

        try:
            self.users = self.gateway.get_users()
        except GatewayError as e:
            print(f"Error fetching users: {str(e)}")
            if isinstance(e, NetworkUnreachable):
                reason = "No response from server. Check if the API server is running and accessible."
            else:
                reason = str(e)
            self.error = f"Failed to load users. {reason}"
            print("Using sample data due to API error")
            self.users = [normalize_user(user) for user in SAMPLE_USERS]

    retry = load

    def add_user(self, form: dict) -> bool:
        for field, label in self.REQUIRED_FIELDS:
            if not str(form.get(field) or "").strip():
                self.notice = f"Failed to add user: {label} is required"
                return False
        try:
            self.gateway.create_user(form)
        except GatewayError as e:
            print(f"Error adding user: {str(e)}")
            self.notice = f"Failed to add user: {self._reason(e)}"
            return False
        self.load()
        self.notice = "User added successfully!"
        return True

    def toggle_status(self, user: User) -> bool:
        try:
            self.gateway.set_user_status(user.id, not user.is_active)
        except GatewayError as e:
            print(f"Error updating user status: {str(e)}")
            self.notice = f"Failed to update user status: {self._reason(e)}"
            return False
        self.load()
        self.notice = f"User {user.name} {'deactivated' if user.is_active else 'activated'}"
        return True

    def delete_user(self, user: User) -> bool:
        try:
            self.gateway.delete_user(user.id)
        except GatewayError as e:
            print(f"Error deleting user: {str(e)}")
            self.notice = f"Failed to delete user: {self._reason(e)}"
            return False
        self.load()
        self.notice = "User deleted successfully!"
        return True

    @staticmethod
    def _reason(error: GatewayError) -> str:
        if isinstance(error, ServerError):
            return error.detail or error.reason or f"HTTP {error.status_code}"
        return str(error)
