"""Extract timestamps from structured markup.

Covers the sources page authors put there on purpose:
- Standard HTML meta tags (article:*, Dublin Core, pubdate, ...)
- Schema.org JSON-LD blocks
- Schema.org microdata (itemprop)
- OpenGraph meta properties
- Twitter card labels
"""

import json
from typing import Any, Optional

from bs4 import BeautifulSoup, Tag

from webpage_timestamps.models import Confidence, Mechanism, TimestampSource
from webpage_timestamps.normalizers import normalize_date

# Matched against both name= and property=
META_TAG_NAMES = [
    "article:published_time",
    "article:modified_time",
    "date",
    "pubdate",
    "publishdate",
    "last-modified",
    "dc.date.created",
    "dc.date.modified",
    "dcterms.created",
    "dcterms.modified",
]

JSON_LD_DATE_FIELDS = ["datePublished", "dateModified", "dateCreated"]

MICRODATA_DATE_PROPS = ["datePublished", "dateModified"]

OPENGRAPH_PROPERTIES = [
    "og:article:published_time",
    "og:article:modified_time",
    "og:updated_time",
]


def _attr(element: Optional[Tag], name: str) -> Optional[str]:
    """Read a single-valued attribute, or None if missing/empty."""
    if element is None:
        return None
    value = element.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return value or None


def _source(
    mechanism: Mechanism,
    field: str,
    value: Any,
    confidence: Confidence,
) -> Optional[TimestampSource]:
    """Build a candidate only if the value parses as a date."""
    if normalize_date(value) is None:
        return None
    return TimestampSource(
        mechanism=mechanism,
        field=field,
        value=value,
        confidence=confidence,
    )


def extract_meta_tags(soup: BeautifulSoup) -> list[TimestampSource]:
    """Extract dates from <meta name=...> / <meta property=...> tags."""
    sources = []

    for name in META_TAG_NAMES:
        meta = soup.select_one(f'meta[name="{name}"], meta[property="{name}"]')
        source = _source(Mechanism.META_TAG, name, _attr(meta, "content"), Confidence.HIGH)
        if source:
            sources.append(source)

    return sources


def extract_json_ld(soup: BeautifulSoup) -> list[dict]:
    """Extract all JSON-LD items from page, flattening top-level arrays."""
    items = []

    for script in soup.find_all("script", type="application/ld+json"):
        try:
            data = json.loads(script.string or "")
        except (json.JSONDecodeError, TypeError):
            continue  # Malformed block, skip

        for item in data if isinstance(data, list) else [data]:
            if isinstance(item, dict):
                items.append(item)

    return items


def extract_from_schema_org(soup: BeautifulSoup) -> list[TimestampSource]:
    """Extract datePublished/dateModified/dateCreated from JSON-LD."""
    sources = []

    for item in extract_json_ld(soup):
        for field in JSON_LD_DATE_FIELDS:
            source = _source(Mechanism.STRUCTURED_DATA, field, item.get(field), Confidence.HIGH)
            if source:
                sources.append(source)

    return sources


def extract_microdata(soup: BeautifulSoup) -> list[TimestampSource]:
    """Extract dates from itemprop elements (content attribute, then text)."""
    sources = []

    for prop in MICRODATA_DATE_PROPS:
        for element in soup.select(f'[itemprop="{prop}"]'):
            value = _attr(element, "content") or element.get_text().strip()
            source = _source(Mechanism.MICRODATA, prop, value, Confidence.HIGH)
            if source:
                sources.append(source)

    return sources


def extract_opengraph(soup: BeautifulSoup) -> list[TimestampSource]:
    """Extract dates from OpenGraph meta properties."""
    sources = []

    for prop in OPENGRAPH_PROPERTIES:
        meta = soup.select_one(f'meta[property="{prop}"]')
        source = _source(Mechanism.OPEN_GRAPH, prop, _attr(meta, "content"), Confidence.HIGH)
        if source:
            sources.append(source)

    return sources


def extract_twitter_card(soup: BeautifulSoup) -> list[TimestampSource]:
    """Extract a date from Twitter card data/label fields.

    Only considered when the text mentions "date" at all.
    """
    content = (
        _attr(soup.select_one('meta[name="twitter:data1"]'), "content")
        or _attr(soup.select_one('meta[name="twitter:label1"]'), "content")
    )

    if not content or "date" not in content.lower():
        return []

    source = _source(Mechanism.SOCIAL_CARD, "twitter:data1", content, Confidence.MEDIUM)
    return [source] if source else []
