"""Data models for timestamp candidates and extraction results."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class Confidence(str, Enum):
    """Three-level ordinal confidence."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return CONFIDENCE_RANK[self]


CONFIDENCE_RANK = {
    Confidence.HIGH: 3,
    Confidence.MEDIUM: 2,
    Confidence.LOW: 1,
}


class Mechanism(str, Enum):
    """Extraction technique that produced a candidate."""

    META_TAG = "meta-tag"
    HTTP_HEADER = "http-header"
    STRUCTURED_DATA = "structured-data"
    MICRODATA = "microdata"
    OPEN_GRAPH = "open-graph"
    SOCIAL_CARD = "social-card"
    HEURISTIC = "heuristic"


class Role(str, Enum):
    """Semantic slot a candidate is grouped into before consolidation."""

    CREATED = "created"
    MODIFIED = "modified"
    PUBLISHED = "published"


class TimestampSource(BaseModel):
    """One candidate timestamp reading, with provenance.

    ``value`` is the raw string as found; it is only emitted when it parses.
    """

    model_config = ConfigDict(frozen=True)

    mechanism: Mechanism
    field: str  # meta name, JSON-LD key, header name or heuristic pattern tag
    value: str
    confidence: Confidence


class TimestampResult(BaseModel):
    """Consolidated timestamps for one URL."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    modified_at: Optional[datetime] = Field(default=None, alias="modifiedAt")
    published_at: Optional[datetime] = Field(default=None, alias="publishedAt")
    sources: tuple[TimestampSource, ...] = ()
    confidence: Confidence = Confidence.LOW
    errors: Optional[tuple[str, ...]] = None

    @classmethod
    def failed(cls, url: str, error: str) -> "TimestampResult":
        """Fallback result for a URL that could not be fetched or processed."""
        return cls(url=url, sources=(), confidence=Confidence.LOW, errors=(error,))

    def to_json_dict(self) -> dict[str, Any]:
        """JSON-ready dict: camelCase keys, absent fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
