"""Fold the field-name variants seen in report/user payloads into one shape.

Older API builds and the sample data disagree on names (``severity`` vs
``riskLevel``, ``section`` vs ``location``, ``inprogress`` vs ``inProgress``
and so on). Every payload goes through this module once, at the boundary, so
the rest of the code only ever sees the canonical models.

None of these functions raise on bad input: unknown values fall back to the
model defaults.
"""

from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Mapping, Optional

from railway_defects.models.report import Comment, DefectReport, ReportStatus, RiskLevel
from railway_defects.models.user import User
from railway_defects.schemas.dashboard import StatusCounts

_STATUS_SYNONYMS = {
    "pending": ReportStatus.PENDING,
    "in progress": ReportStatus.IN_PROGRESS,
    "in-progress": ReportStatus.IN_PROGRESS,
    "in_progress": ReportStatus.IN_PROGRESS,
    "inprogress": ReportStatus.IN_PROGRESS,
    "active": ReportStatus.IN_PROGRESS,
    "resolved": ReportStatus.RESOLVED,
    "completed": ReportStatus.RESOLVED,
}

_RISK_LEVELS = {level.value.lower(): level for level in RiskLevel}

# Epoch numbers above this are milliseconds (JavaScript Date.getTime()).
_MILLISECONDS_THRESHOLD = 1e11


def _first(raw: Mapping, *keys: str) -> Any:
    for key in keys:
        value = raw.get(key)
        if value is not None and value != "":
            return value
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp into an aware UTC datetime, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)):
        seconds = value / 1000 if abs(value) > _MILLISECONDS_THRESHOLD else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        # offset pushes the instant past datetime.min/max
        return None


def classify_status(value: Any) -> ReportStatus:
    if isinstance(value, ReportStatus):
        return value
    key = str(value).strip().lower() if value is not None else ""
    return _STATUS_SYNONYMS.get(key, ReportStatus.PENDING)


def classify_risk_level(value: Any) -> RiskLevel:
    if isinstance(value, RiskLevel):
        return value
    key = str(value).strip().lower() if value is not None else ""
    return _RISK_LEVELS.get(key, RiskLevel.MEDIUM)


def _normalize_comment(raw: Any) -> Comment:
    if isinstance(raw, Comment):
        return raw
    if not isinstance(raw, Mapping):
        return Comment(text=_text(raw) or "")
    return Comment(
        author=_text(_first(raw, "author", "user", "name")) or "Anonymous",
        text=_text(_first(raw, "text", "comment", "message")) or "",
        timestamp=parse_timestamp(_first(raw, "timestamp", "createdAt", "date")),
    )


def normalize_report(raw: Any) -> DefectReport:
    if isinstance(raw, DefectReport):
        return raw
    if not isinstance(raw, Mapping):
        return DefectReport()

    comments = raw.get("comments")
    if not isinstance(comments, (list, tuple)):
        comments = []

    return DefectReport(
        id=_text(_first(raw, "id", "_id")),
        type=_text(_first(raw, "defectType", "type")) or "Unknown",
        risk_level=classify_risk_level(_first(raw, "riskLevel", "risk_level", "severity")),
        status=classify_status(raw.get("status")),
        location=_text(_first(raw, "location", "section")),
        report_date=parse_timestamp(_first(raw, "reportDate", "report_date", "date")),
        created_at=parse_timestamp(_first(raw, "createdAt", "created_at")),
        updated_at=parse_timestamp(_first(raw, "updatedAt", "updated_at")),
        due_date=parse_timestamp(_first(raw, "dueDate", "due_date")),
        assigned_to=_text(_first(raw, "assignedTo", "assigned_to", "assigned")) or "Unassigned",
        reported_by=_text(_first(raw, "reportedBy", "reported_by")),
        image_url=_text(_first(raw, "imageUrl", "image_url", "image")),
        description=_text(raw.get("description")),
        comments=[_normalize_comment(comment) for comment in comments],
    )


def normalize_reports(items: Iterable[Any]) -> List[DefectReport]:
    return [normalize_report(item) for item in items]


def _count(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        count = int(value)
    except (TypeError, ValueError):
        return 0
    return max(count, 0)


def normalize_status_counts(raw: Any) -> StatusCounts:
    if isinstance(raw, StatusCounts):
        return raw
    if not isinstance(raw, Mapping):
        return StatusCounts()
    return StatusCounts(
        pending=_count(raw.get("pending")),
        in_progress=_count(_first(raw, "inProgress", "inprogress", "in_progress")),
        resolved=_count(raw.get("resolved")),
    )


def _is_active(raw: Mapping) -> bool:
    flag = raw.get("isActive", raw.get("is_active"))
    if isinstance(flag, bool):
        return flag
    if isinstance(flag, str) and flag.strip().lower() in ("true", "active"):
        return True
    status = raw.get("status")
    return isinstance(status, str) and status.strip().lower() == "active"


def normalize_user(raw: Any) -> User:
    if isinstance(raw, User):
        return raw
    if not isinstance(raw, Mapping):
        return User()

    expertise = raw.get("expertise")
    if isinstance(expertise, str):
        expertise = [part.strip() for part in expertise.split(",") if part.strip()]
    elif not isinstance(expertise, (list, tuple)):
        expertise = []

    return User(
        id=_text(_first(raw, "id", "_id")),
        name=_text(raw.get("name")) or "",
        email=_text(raw.get("email")) or "",
        role=(_text(raw.get("role")) or "inspector").lower(),
        department=_text(_first(raw, "department", "section", "team", "station")),
        expertise=[str(item) for item in expertise],
        phone_number=_text(_first(raw, "phoneNumber", "phone_number", "phone")),
        is_active=_is_active(raw),
    )


def extract_users(payload: Any) -> Optional[List[User]]:
    """Accept either a bare array or a ``{"users": [...]}`` wrapper.

    Returns None when the payload has neither shape.
    """
    if isinstance(payload, Mapping):
        payload = payload.get("users")
    if not isinstance(payload, list):
        return None
    return [normalize_user(item) for item in payload]
