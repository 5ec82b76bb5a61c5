"""Score Lookup: find works on a public score archive and estimate their public-domain status."""

from score_lookup.config import ScoreLookupConfig, create_from_config, load_config
from score_lookup.copyright import decide_verdict, extract_copyright_facts
from score_lookup.data import (
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
from score_lookup.errors import OracleUnavailableError, ScoreLookupError
from score_lookup.oracle import ClaudeOracle, TextOracle
from score_lookup.pages import IMSLPPageFetcher, PageFetcher
from score_lookup.pipeline import LookupPipeline
from score_lookup.query import (
    OracleQueryGenerator,
    QueryGenerator,
    RuleBasedQueryGenerator,
    expand_query,
)
from score_lookup.run_logger import RunLogger
from score_lookup.search import ArchiveIndex, IMSLPIndex, SearchAggregator

__all__ = [
    # Models
    "APICallUsage",
    "ArchiveResult",
    "ComposerDates",
    "CopyrightCheck",
    "CopyrightFacts",
    "CopyrightVerdict",
    "SearchQuery",
    "Usage",
    "Verdict",
    # Errors
    "OracleUnavailableError",
    "ScoreLookupError",
    # Protocols
    "ArchiveIndex",
    "PageFetcher",
    "QueryGenerator",
    "TextOracle",
    # Query Generators
    "OracleQueryGenerator",
    "RuleBasedQueryGenerator",
    "expand_query",
    # Archive
    "ClaudeOracle",
    "IMSLPIndex",
    "IMSLPPageFetcher",
    "SearchAggregator",
    # Copyright
    "decide_verdict",
    "extract_copyright_facts",
    # Pipeline
    "LookupPipeline",
    # Logging
    "RunLogger",
    # Config
    "ScoreLookupConfig",
    "create_from_config",
    "load_config",
]
