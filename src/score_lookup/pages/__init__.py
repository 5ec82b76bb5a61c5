from score_lookup.pages.base import PageFetcher
from score_lookup.pages.imslp import IMSLPPageFetcher

__all__ = [
    "IMSLPPageFetcher",
    "PageFetcher",
]
