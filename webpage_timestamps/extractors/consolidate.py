"""Consolidate timestamp candidates into a single result.

Candidates are grouped by role (created / modified / published) using
keyword rules on their field name, then one winner per role is picked:
highest confidence first, then mechanism priority, then extraction order.
"""

from typing import Optional, Sequence

from webpage_timestamps.models import (
    Confidence,
    Mechanism,
    Role,
    TimestampResult,
    TimestampSource,
)
from webpage_timestamps.normalizers import normalize_date

# Tie-break between equally confident candidates
MECHANISM_PRIORITY = [
    Mechanism.STRUCTURED_DATA,
    Mechanism.MICRODATA,
    Mechanism.META_TAG,
    Mechanism.OPEN_GRAPH,
    Mechanism.SOCIAL_CARD,
    Mechanism.HTTP_HEADER,
    Mechanism.HEURISTIC,
]

MODIFIED_KEYWORDS = ("modified", "updated", "Modified")
CREATED_KEYWORDS = ("created", "Created")
PUBLISHED_KEYWORDS = ("published", "pubdate")


def classify_field(field: str) -> Optional[Role]:
    """Map a candidate's field name to a role, or None.

    Checks are case-sensitive and ordered: modified, then created, then
    published (including the bare "date" fallback).
    """
    if any(kw in field for kw in MODIFIED_KEYWORDS):
        return Role.MODIFIED

    if any(kw in field for kw in CREATED_KEYWORDS):
        return Role.CREATED

    if any(kw in field for kw in PUBLISHED_KEYWORDS):
        return Role.PUBLISHED

    if "date" in field and not any(kw in field for kw in ("modified", "created", "Modified")):
        return Role.PUBLISHED

    return None


def group_by_role(sources: Sequence[TimestampSource]) -> dict[Role, list[TimestampSource]]:
    """Group candidates by role, preserving extraction order within each group."""
    groups: dict[Role, list[TimestampSource]] = {}

    for source in sources:
        role = classify_field(source.field)
        if role is not None:
            groups.setdefault(role, []).append(source)

    return groups


def mechanism_rank(mechanism: Mechanism) -> int:
    """Position in MECHANISM_PRIORITY; unknown mechanisms sort last."""
    try:
        return MECHANISM_PRIORITY.index(mechanism)
    except ValueError:
        return len(MECHANISM_PRIORITY)


def select_best_source(sources: Sequence[TimestampSource]) -> TimestampSource:
    """Pick the winning candidate from a non-empty group.

    min() returns the first of equal keys, so remaining ties go to the
    earliest candidate.
    """
    if not sources:
        raise ValueError("No sources provided to select_best_source")

    return min(
        sources,
        key=lambda s: (-s.confidence.rank, mechanism_rank(s.mechanism)),
    )


def overall_confidence(sources: Sequence[TimestampSource]) -> Confidence:
    """Best confidence present among all candidates; low when there are none."""
    if any(s.confidence == Confidence.HIGH for s in sources):
        return Confidence.HIGH
    if any(s.confidence == Confidence.MEDIUM for s in sources):
        return Confidence.MEDIUM
    return Confidence.LOW


def consolidate_timestamps(url: str, sources: Sequence[TimestampSource]) -> TimestampResult:
    """Reconcile all candidates into a TimestampResult."""
    resolved = {}

    for role, group in group_by_role(sources).items():
        best = select_best_source(group)
        # Values were validated at extraction; a None here just leaves the field unset
        resolved[role] = normalize_date(best.value)

    return TimestampResult(
        url=url,
        created_at=resolved.get(Role.CREATED),
        modified_at=resolved.get(Role.MODIFIED),
        published_at=resolved.get(Role.PUBLISHED),
        sources=tuple(sources),
        confidence=overall_confidence(sources),
    )
