"""Lenient date parsing and formatting helpers."""

import re
from datetime import date, datetime, time, timezone
from typing import Any, Optional

NO_DUE_DATE_LABEL = "No due date"

# Extended ISO 8601 only: YYYY-MM-DD, optionally with a time, 3 or 6 digit
# fraction and a +HH:MM offset. Basic and week forms are rejected.
_ISO_PATTERN = re.compile(
    r"\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{3}|\.\d{6})?)?(?:[+-]\d{2}:\d{2})?)?"
)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse a date-ish value into an aware UTC datetime.

    Accepts ``datetime``, ``date`` and extended ISO strings such as
    ``2025-11-20``, ``2025-11-20T10:00:00`` or ``2025-11-20T10:00:00Z``.
    Naive values are taken as UTC.

    Args:
        value: Value to parse

    Returns:
        Parsed datetime, or None if the value is empty or not a valid date
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        if not _ISO_PATTERN.fullmatch(text):
            return None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_timestamp(value: Any) -> Optional[float]:
    """POSIX timestamp of a date-ish value, or None when it does not parse."""
    parsed = parse_date(value)
    if parsed is None:
        return None
    try:
        return parsed.timestamp()
    except (OverflowError, OSError, ValueError):
        return None


def is_valid_date(value: Any) -> bool:
    return parse_date(value) is not None


def format_due_date(value: Any) -> str:
    """Human-readable due date, e.g. ``Nov 20, 2025``.

    Empty or unparseable values render as "No due date".
    """
    parsed = parse_date(value)
    if parsed is None:
        return NO_DUE_DATE_LABEL
    return f"{parsed.strftime('%b')} {parsed.day}, {parsed.year}"
