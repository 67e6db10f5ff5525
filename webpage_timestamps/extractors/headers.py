"""Extract timestamps from HTTP response headers."""

from typing import Mapping

from webpage_timestamps.models import Confidence, Mechanism, TimestampSource
from webpage_timestamps.normalizers import normalize_date

# Header name -> confidence. Date is when the response was generated, not the content.
HEADER_CONFIDENCE = {
    "last-modified": Confidence.MEDIUM,
    "date": Confidence.LOW,
}


def extract_http_headers(headers: Mapping[str, str]) -> list[TimestampSource]:
    """Extract Last-Modified and Date response headers."""
    lowered = {name.lower(): value for name, value in headers.items()}
    sources = []

    for name, confidence in HEADER_CONFIDENCE.items():
        value = lowered.get(name)
        if value and normalize_date(value) is not None:
            sources.append(
                TimestampSource(
                    mechanism=Mechanism.HTTP_HEADER,
                    field=name,
                    value=value,
                    confidence=confidence,
                )
            )

    return sources
