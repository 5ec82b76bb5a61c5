from score_lookup.search.aggregator import SearchAggregator
from score_lookup.search.base import ArchiveIndex
from score_lookup.search.imslp import IMSLP_API_URL, IMSLP_WIKI_URL, IMSLPIndex, page_url

__all__ = [
    "ArchiveIndex",
    "IMSLPIndex",
    "IMSLP_API_URL",
    "IMSLP_WIKI_URL",
    "SearchAggregator",
    "page_url",
]
