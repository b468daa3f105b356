"""Tests for defect list filtering, pagination and display formatting."""

from railway_defects.models.report import ReportStatus, RiskLevel
from railway_defects.sample_data import SAMPLE_DEFECTS
from railway_defects.services.filtering import filter_reports, paginate
from railway_defects.services.formatting import format_short_date, format_timestamp, status_slug
from railway_defects.services.normalize import normalize_reports


def test_filter_by_status_and_risk_level():
    reports = normalize_reports(SAMPLE_DEFECTS)

    assert [r.id for r in filter_reports(reports, status=ReportStatus.IN_PROGRESS)] == ["1", "5"]
    assert [r.id for r in filter_reports(reports, status=ReportStatus.PENDING, risk_level=RiskLevel.HIGH)] == ["2"]


def test_search_matches_type_or_location():
    reports = normalize_reports(SAMPLE_DEFECTS)

    assert [r.id for r in filter_reports(reports, query="crack")] == ["1", "2", "4", "5"]
    assert [r.id for r in filter_reports(reports, query="GALLE")] == ["4", "5"]
    assert filter_reports(reports, query="   ") == reports


def test_paginate_last_page_and_clamping():
    reports = normalize_reports([{"id": str(n)} for n in range(14)])

    page = paginate(reports, 3)
    assert [r.id for r in page.items] == ["12", "13"]
    assert (page.number, page.total_pages, page.first_index, page.last_index) == (3, 3, 13, 14)

    assert paginate(reports, 99).number == 3
    assert paginate(reports, 0).number == 1


def test_paginate_empty():
    page = paginate([], 1)

    assert page.items == []
    assert (page.number, page.total_pages, page.first_index, page.last_index, page.total) == (1, 0, 0, 0, 0)


def test_format_timestamp():
    assert format_timestamp("2025-03-20T14:05:00Z") == "2025-03-20 2:05 PM"
    assert format_timestamp("2025-03-20T00:30:00Z") == "2025-03-20 12:30 AM"
    assert format_timestamp(None) == "N/A"
    assert format_timestamp("yesterday") == "Invalid Date"


def test_format_short_date():
    assert format_short_date("2025-03-20") == "Mar 20, 2025"
    assert format_short_date("") == "N/A"


def test_status_slug():
    assert status_slug(ReportStatus.IN_PROGRESS) == "in-progress"
    assert status_slug(None) == "pending"
