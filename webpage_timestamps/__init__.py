"""Extract creation, modification and publication timestamps from webpages."""

from webpage_timestamps.config import DEFAULT_CONFIG, ExtractorConfig, load_config
from webpage_timestamps.extractors import (
    batch_extract_timestamps,
    extract_from_document,
    extract_from_html,
    extract_timestamps,
)
from webpage_timestamps.models import Confidence, Mechanism, TimestampResult, TimestampSource

__version__ = "1.0.1"

__all__ = [
    "DEFAULT_CONFIG",
    "ExtractorConfig",
    "load_config",
    "batch_extract_timestamps",
    "extract_from_document",
    "extract_from_html",
    "extract_timestamps",
    "Confidence",
    "Mechanism",
    "TimestampResult",
    "TimestampSource",
]
