from typing import Any

from railway_defects.services.normalize import parse_timestamp


def format_timestamp(value: Any) -> str:
    """Render as ``YYYY-MM-DD h:mm AM``; used by the recent activity table."""
    if value is None or value == "":
        return "N/A"
    moment = parse_timestamp(value)
    if moment is None:
        return "Invalid Date"
    hours = moment.hour % 12 or 12
    suffix = "PM" if moment.hour >= 12 else "AM"
    return f"{moment:%Y-%m-%d} {hours}:{moment.minute:02d} {suffix}"


def format_short_date(value: Any) -> str:
    """Render as ``Mar 20, 2025``; used by the defect list."""
    if value is None or value == "":
        return "N/A"
    moment = parse_timestamp(value)
    if moment is None:
        return "Invalid Date"
    return f"{moment:%b} {moment.day}, {moment.year}"


def status_slug(status: Any) -> str:
    # "In Progress" -> "in-progress", matching the badge class names
    text = getattr(status, "value", status) or "pending"
    return str(text).strip().lower().replace(" ", "-")
