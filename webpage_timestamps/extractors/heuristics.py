"""Heuristic timestamp extraction.

When a page carries no machine-readable dates, fall back to pattern
matching inside elements that usually hold one (bylines, .date, <time>).
"""

import re

from bs4 import BeautifulSoup

from webpage_timestamps.models import Confidence, Mechanism, TimestampSource
from webpage_timestamps.normalizers import normalize_date

# Elements whose text commonly carries a date
DATE_CONTAINER_SELECTOR = "time, .date, .published, .timestamp, .created, .modified"

MONTHS = (
    r"(?:January|February|March|April|May|June|July|August|September|October|November|December"
    r"|Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sep|Sept|Oct|Nov|Dec)"
)

# Date patterns
DATE_PATTERNS = [
    # Numeric: 1/15/2023 or 01-15-2023
    re.compile(r"(?<!\d)(\d{1,2}[/-]\d{1,2}[/-]\d{4})(?!\d)"),
    # Year first: 2023/01/15, 2023-1-15, or the date part of 2023-05-01T08:00:00Z
    re.compile(r"(?<!\d)(\d{4}[/-]\d{1,2}[/-]\d{1,2})(?!\d)"),
    # US: January 15, 2023 or Jan 15, 2023
    re.compile(rf"\b({MONTHS}\.? \d{{1,2}}, \d{{4}})\b", re.I),
    # European: 15 January 2023 or 15 Jan 2023
    re.compile(rf"\b(\d{{1,2}} {MONTHS}\.? \d{{4}})\b", re.I),
]


def extract_text_patterns(soup: BeautifulSoup) -> list[TimestampSource]:
    """Scan date-like containers for date patterns."""
    text = " ".join(el.get_text() for el in soup.select(DATE_CONTAINER_SELECTOR))
    sources = []

    for pattern in DATE_PATTERNS:
        for match in pattern.findall(text):
            if normalize_date(match) is not None:
                sources.append(
                    TimestampSource(
                        mechanism=Mechanism.HEURISTIC,
                        field="text-pattern",
                        value=match,
                        confidence=Confidence.LOW,
                    )
                )

    return sources


def extract_time_elements(soup: BeautifulSoup) -> list[TimestampSource]:
    """Read <time> elements: datetime attribute if present, text otherwise."""
    sources = []

    for element in soup.find_all("time"):
        datetime_attr = element.get("datetime")

        if datetime_attr:
            if normalize_date(datetime_attr) is not None:
                sources.append(
                    TimestampSource(
                        mechanism=Mechanism.HEURISTIC,
                        field="time-datetime",
                        value=datetime_attr,
                        confidence=Confidence.MEDIUM,
                    )
                )
            continue

        text = element.get_text().strip()
        if text and normalize_date(text) is not None:
            sources.append(
                TimestampSource(
                    mechanism=Mechanism.HEURISTIC,
                    field="time-text",
                    value=text,
                    confidence=Confidence.LOW,
                )
            )

    return sources


def extract_heuristics(soup: BeautifulSoup) -> list[TimestampSource]:
    """Extract low-confidence timestamps from free text and <time> elements."""
    return extract_text_patterns(soup) + extract_time_elements(soup)
