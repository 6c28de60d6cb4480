"""Timestamp parsing and formatting for feed output."""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Optional
from dateutil import parser as date_parser

# Two fallbacks that differ in year, month and day: a string that leaves any of
# them out parses differently against each and is rejected.
_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a date string leniently.

    Returns a timezone-aware datetime, or None when the value is empty or
    not a complete date. Year-only or month-only values are rejected
    rather than completed from the current date. Naive values are taken
    as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            parsed, check = (date_parser.parse(text, default=d) for d in _DEFAULTS)
        except (ValueError, OverflowError, TypeError):
            return None
        if parsed != check:
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_rfc822(dt: datetime) -> str:
    """RFC 822 date as used by RSS pubDate/lastBuildDate, e.g. 'Tue, 06 Oct 2026 12:00:00 GMT'."""
    return format_datetime(dt.astimezone(timezone.utc), usegmt=True)


def format_w3c(dt: datetime) -> str:
    """W3C datetime (ISO 8601 with offset) as used by sitemaps."""
    return dt.astimezone(timezone.utc).isoformat(timespec='seconds')
