"""Webpage → timestamps extraction engine.

This module provides a unified extraction pipeline that:
1. Fetches HTML and response headers for a URL
2. Extracts timestamp candidates using multiple strategies:
   - HTML meta tags and HTTP headers
   - Schema.org JSON-LD / microdata
   - OpenGraph and Twitter card tags
   - HTML heuristics (date patterns, <time> elements)
3. Consolidates them into created/modified/published plus a confidence
"""

from webpage_timestamps.extractors.fetch import fetch_page, FetchError, FetchResult
from webpage_timestamps.extractors.structured import (
    extract_meta_tags,
    extract_from_schema_org,
    extract_microdata,
    extract_opengraph,
    extract_twitter_card,
)
from webpage_timestamps.extractors.headers import extract_http_headers
from webpage_timestamps.extractors.heuristics import extract_heuristics
from webpage_timestamps.extractors.consolidate import classify_field, consolidate_timestamps
from webpage_timestamps.extractors.pipeline import (
    EXTRACTORS,
    run_extractors,
    extract_from_document,
    extract_from_html,
    extract_timestamps,
    batch_extract_timestamps,
)

__all__ = [
    "fetch_page",
    "FetchError",
    "FetchResult",
    "extract_meta_tags",
    "extract_from_schema_org",
    "extract_microdata",
    "extract_opengraph",
    "extract_twitter_card",
    "extract_http_headers",
    "extract_heuristics",
    "classify_field",
    "consolidate_timestamps",
    "EXTRACTORS",
    "run_extractors",
    "extract_from_document",
    "extract_from_html",
    "extract_timestamps",
    "batch_extract_timestamps",
]
