"""Factory functions to create components from configuration."""

from pathlib import Path

from score_lookup.config.models import (
    ArchiveConfig,
    ClaudeOracleConfig,
    NoOracleConfig,
    OracleConfig,
    ScoreLookupConfig,
)
from score_lookup.oracle.claude import ClaudeOracle
from score_lookup.pages.imslp import IMSLPPageFetcher
from score_lookup.pipeline.lookup import LookupPipeline
from score_lookup.query.base import QueryGenerator
from score_lookup.query.oracle import OracleQueryGenerator
from score_lookup.query.rules import RuleBasedQueryGenerator
from score_lookup.run_logger import RunLogger
from score_lookup.search.aggregator import SearchAggregator
from score_lookup.search.imslp import IMSLPIndex


def create_oracle(config: ClaudeOracleConfig) -> ClaudeOracle:
    """Create the Claude oracle client."""
    return ClaudeOracle(
        model=config.model,
        timeout=config.timeout_seconds,
        max_tokens=config.max_tokens,
    )


def create_generators(config: OracleConfig) -> list[QueryGenerator]:
    """Create query generators, oracle first.

    Oracle suggestions are searched before rule-based variants because they
    tend to match archive titles exactly.
    """
    rule_based = RuleBasedQueryGenerator()
    if isinstance(config, ClaudeOracleConfig):
        oracle = create_oracle(config)
        return [OracleQueryGenerator(oracle, instructions=config.instructions), rule_based]
    if isinstance(config, NoOracleConfig):
        return [rule_based]
    msg = f"Unknown oracle config type: {type(config)}"
    raise ValueError(msg)


def create_index(config: ArchiveConfig) -> IMSLPIndex:
    """Create the archive search index client."""
    return IMSLPIndex(
        api_url=config.api_url,
        wiki_url=config.wiki_url,
        timeout=config.timeout_seconds,
    )


def create_fetcher(config: ArchiveConfig) -> IMSLPPageFetcher:
    """Create the archive page fetcher."""
    return IMSLPPageFetcher(api_url=config.api_url, timeout=config.timeout_seconds)


def create_pipeline(
    config: ScoreLookupConfig,
    run_logger: RunLogger | None = None,
) -> LookupPipeline:
    """Create a lookup pipeline from config."""
    aggregator = SearchAggregator(
        create_index(config.archive),
        per_variant_limit=config.search.per_variant_limit,
        max_concurrency=config.search.max_concurrency,
    )
    return LookupPipeline(
        generators=create_generators(config.oracle),
        aggregator=aggregator,
        fetcher=create_fetcher(config.archive),
        search_quota=config.search.search_quota,
        check_quota=config.search.check_quota,
        max_concurrency=config.search.max_concurrency,
        run_logger=run_logger,
    )


def create_from_config(
    config: ScoreLookupConfig,
    *,
    log_override: bool | None = None,
    log_dir_override: str | None = None,
) -> tuple[LookupPipeline, RunLogger | None]:
    """Create a complete pipeline from root config.

    Args:
        config: Root configuration.
        log_override: Override the config's logging.enabled setting.
        log_dir_override: Override the config's logging.log_dir setting.

    Returns:
        Tuple of (pipeline, run_logger).
        run_logger is None if logging is disabled.
    """
    log_enabled = log_override if log_override is not None else config.logging.enabled
    log_dir = Path(log_dir_override if log_dir_override is not None else config.logging.log_dir)

    run_logger: RunLogger | None = None
    if log_enabled:
        run_logger = RunLogger(log_dir=log_dir)

    pipeline = create_pipeline(config, run_logger=run_logger)
    return (pipeline, run_logger)
