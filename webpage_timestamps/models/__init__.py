"""Data models for webpage timestamp extraction."""

from webpage_timestamps.models.timestamps import (
    Confidence,
    Mechanism,
    Role,
    TimestampResult,
    TimestampSource,
)

__all__ = [
    "Confidence",
    "Mechanism",
    "Role",
    "TimestampResult",
    "TimestampSource",
]
