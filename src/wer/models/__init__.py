"""Data models for wer."""

from .attribution import (
    AttributionMode,
    AttributionRequest,
    ContributorReport,
    ContributorSearchStatus,
    LineAttribution,
)
from .commit import CommitRecord

__all__ = [
    "AttributionMode",
    "AttributionRequest",
    "CommitRecord",
    "ContributorReport",
    "ContributorSearchStatus",
    "LineAttribution",
]
