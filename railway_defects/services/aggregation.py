"""Dashboard statistics derived from a list of defect reports.

All functions are pure: they take reports (canonical ``DefectReport`` objects
or raw mappings, which are normalized first) and return new values. They
never raise on malformed records.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from railway_defects.models.report import DefectReport, ReportStatus, RiskLevel
from railway_defects.schemas.dashboard import (
    DashboardSummary,
    DefectTypeShare,
    SeverityDistribution,
    StatusCounts,
)
from railway_defects.services.normalize import normalize_report, normalize_status_counts, normalize_user

TOP_DEFECT_TYPES = 5
RECENT_ACTIVITY_LIMIT = 4
OTHER_TYPE = "Other"


def _coerce(reports: Optional[Iterable[Any]]) -> List[DefectReport]:
    if reports is None:
        return []
    return [normalize_report(report) for report in reports]


def percentage(count: int, total: int) -> str:
    if total <= 0:
        return "0.0"
    return f"{count / total * 100:.1f}"


def status_counts(reports: Iterable[Any]) -> StatusCounts:
    counts = StatusCounts()
    for report in _coerce(reports):
        if report.status == ReportStatus.RESOLVED:
            counts.resolved += 1
        elif report.status == ReportStatus.IN_PROGRESS:
            counts.in_progress += 1
        else:
            counts.pending += 1
    return counts


def severity_distribution(reports: Iterable[Any]) -> SeverityDistribution:
    """Count reports per risk level.

    ``critical`` is derived: a report counts as critical when its risk level
    is Critical, or when it is High and not yet resolved. Critical reports are
    also counted under ``high`` so that ``critical <= high`` always holds.
    """
    reports = _coerce(reports)
    distribution = SeverityDistribution(total=len(reports))
    for report in reports:
        level = report.risk_level
        if level == RiskLevel.LOW:
            distribution.low += 1
        elif level == RiskLevel.MEDIUM:
            distribution.medium += 1
        else:
            distribution.high += 1
            if level == RiskLevel.CRITICAL or report.status != ReportStatus.RESOLVED:
                distribution.critical += 1
    return distribution


def defect_type_distribution(reports: Iterable[Any], limit: int = TOP_DEFECT_TYPES) -> List[DefectTypeShare]:
    reports = _coerce(reports)
    total = len(reports)

    # dicts keep insertion order, and sorted() is stable, so ties stay in
    # first-encountered order
    counts: Dict[str, int] = {}
    for report in reports:
        counts[report.type] = counts.get(report.type, 0) + 1
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)

    shares = [
        DefectTypeShare(type=defect_type, count=count, percentage=percentage(count, total))
        for defect_type, count in ranked[:limit]
    ]
    if len(ranked) > limit:
        other = sum(count for _, count in ranked[limit:])
        if other > 0:
            shares.append(DefectTypeShare(type=OTHER_TYPE, count=other, percentage=percentage(other, total)))
    return shares


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def resolved_this_month(reports: Iterable[Any], now: Optional[datetime] = None) -> int:
    now = _now(now)
    resolved = 0
    for report in _coerce(reports):
        if report.status != ReportStatus.RESOLVED:
            continue
        effective = report.report_date or report.updated_at or report.created_at
        if effective is not None and effective.year == now.year and effective.month == now.month:
            resolved += 1
    return resolved


def recent_activity(reports: Iterable[Any], limit: int = RECENT_ACTIVITY_LIMIT) -> List[DefectReport]:
    def sort_key(report: DefectReport):
        effective = report.report_date or report.created_at
        # undated reports sort after every dated one
        return (effective is not None, effective or datetime.min.replace(tzinfo=timezone.utc))

    return sorted(_coerce(reports), key=sort_key, reverse=True)[:limit]


def active_team_count(users: Optional[Iterable[Any]], reports: Iterable[Any] = ()) -> int:
    """Distinct active users, or distinct assignees when users are unavailable."""
    if users is None:
        assignees = set()
        for report in _coerce(reports):
            assignee = report.assigned_to.strip()
            if assignee and assignee.lower() != "unassigned":
                assignees.add(assignee)
        return len(assignees)

    active = set()
    for index, user in enumerate(users):
        user = normalize_user(user)
        if not user.is_active:
            continue
        active.add(user.id or user.email or user.name or f"#{index}")
    return len(active)


def summarize(
    reports: Iterable[Any],
    users: Optional[Iterable[Any]] = None,
    counts: Optional[Any] = None,
    now: Optional[datetime] = None,
) -> DashboardSummary:
    reports = _coerce(reports)
    return DashboardSummary(
        status_counts=normalize_status_counts(counts) if counts is not None else status_counts(reports),
        severity=severity_distribution(reports),
        defect_types=defect_type_distribution(reports),
        resolved_this_month=resolved_this_month(reports, now),
        recent_activity=recent_activity(reports),
        active_team_count=active_team_count(users, reports),
    )
