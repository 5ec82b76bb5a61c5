"""Pipeline module for archive lookups."""

from score_lookup.pipeline.lookup import LookupPipeline

__all__ = [
    "LookupPipeline",
]
