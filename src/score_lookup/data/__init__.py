"""Data models for Score Lookup."""

from score_lookup.data.models import (
    APICallUsage,
    ArchiveResult,
    ComposerDates,
    CopyrightCheck,
    CopyrightFacts,
    CopyrightVerdict,
    SearchQuery,
    Usage,
    Verdict,
)

__all__ = [
    "APICallUsage",
    "ArchiveResult",
    "ComposerDates",
    "CopyrightCheck",
    "CopyrightFacts",
    "CopyrightVerdict",
    "SearchQuery",
    "Usage",
    "Verdict",
]
