"""Normalizers for raw values found in documents and headers."""

from webpage_timestamps.normalizers.dates import normalize_date

__all__ = ["normalize_date"]
