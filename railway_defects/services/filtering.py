import math
from typing import List, NamedTuple, Optional, Sequence

from railway_defects.models.report import DefectReport, ReportStatus, RiskLevel

DEFECTS_PER_PAGE = 6


class Page(NamedTuple):
    items: List[DefectReport]
    number: int
    total_pages: int
    total: int
    first_index: int  # 1-based position of the first item, 0 when empty
    last_index: int


def filter_reports(
    reports: Sequence[DefectReport],
    status: Optional[ReportStatus] = None,
    risk_level: Optional[RiskLevel] = None,
    query: Optional[str] = None,
) -> List[DefectReport]:
    """Keep reports matching every filter that is set.

    ``query`` is matched case-insensitively against the defect type and the
    location.
    """
    needle = query.strip().lower() if query else ""
    matches = []
    for report in reports:
        if status is not None and report.status != status:
            continue
        if risk_level is not None and report.risk_level != risk_level:
            continue
        if needle and needle not in report.type.lower() and needle not in (report.location or "").lower():
            continue
        matches.append(report)
    return matches


def total_pages(count: int, page_size: int = DEFECTS_PER_PAGE) -> int:
    return math.ceil(count / page_size)


def paginate(reports: Sequence[DefectReport], number: int, page_size: int = DEFECTS_PER_PAGE) -> Page:
    pages = total_pages(len(reports), page_size)
    number = min(max(number, 1), max(pages, 1))
    start = (number - 1) * page_size
    items = list(reports[start:start + page_size])
    return Page(
        items=items,
        number=number,
        total_pages=pages,
        total=len(reports),
        first_index=start + 1 if items else 0,
        last_index=start + len(items),
    )
