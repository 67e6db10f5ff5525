"""Date string normalizer.

Turns whatever string a page or server hands us into an absolute instant,
or ``None`` when it can't. Strict ISO-8601 first, then the permissive
dateutil parser.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from dateutil import parser as dateutil_parser

# Two defaults that disagree on year, month and day. A string that fully
# specifies its date parses the same under both.
_DEFAULT_A = datetime(1, 1, 1)
_DEFAULT_B = datetime(2, 2, 2)


def _as_utc(dt: datetime) -> datetime:
    # Naive values have no offset in the source string; read them as UTC
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def _parse_full_date(date_str: str) -> Optional[datetime]:
    """dateutil parse that rejects strings missing a year, month or day."""
    first = dateutil_parser.parse(date_str, default=_DEFAULT_A)
    second = dateutil_parser.parse(date_str, default=_DEFAULT_B)

    # "10:30", "March", "2023", "Friday" borrow date parts from the default
    if first.date() != second.date():
        return None
    return first


def normalize_date(raw: Any) -> Optional[datetime]:
    """Parse a raw date string into a timezone-aware datetime.

    Returns None for empty, non-string, unparseable or partial input
    (anything without a full calendar date). Never raises.
    """
    if not isinstance(raw, str):
        return None

    date_str = raw.strip()
    if not date_str:
        return None

    # ISO 8601 (2023-01-15, 2023-01-15T10:30:00Z, ...)
    try:
        return _as_utc(datetime.fromisoformat(date_str))
    except ValueError:
        pass

    # Everything else: RFC 1123 headers, "January 15, 2023", "1/15/2023", ...
    try:
        parsed = _parse_full_date(date_str)
    except (ValueError, OverflowError, TypeError):
        return None

    return _as_utc(parsed) if parsed else None
