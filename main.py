#!/usr/bin/env python
"""CLI for Score Lookup: archive search and public-domain checks."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from score_lookup.config import (
    ClaudeOracleConfig,
    ScoreLookupConfig,
    create_from_config,
    create_oracle,
    get_default_config_path,
    load_config,
)
from score_lookup.data import Usage

logger = logging.getLogger(__name__)

MODES = ("search", "check", "status")


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    mode: str
    query: str = ""
    config: Path
    log: bool = False
    log_dir: str = "logs"

    @field_validator("mode")
    @classmethod
    def mode_must_be_known(cls, v: str) -> str:
        if v not in MODES:
            raise ValueError(f"Unknown mode {v!r}. Choose one of: {', '.join(MODES)}")
        return v

    @field_validator("query")
    @classmethod
    def strip_query(cls, v: str) -> str:
        return v.strip()

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v

    @model_validator(mode="after")
    def query_required_for_lookups(self) -> "CLIArgs":
        if self.mode != "status" and not self.query:
            raise ValueError("Please enter a composer, work title, or other query.")
        return self


def _format_errors(error: ValidationError) -> str:
    return "; ".join(e["msg"].removeprefix("Value error, ") for e in error.errors())


def _log_usage(usage: Usage) -> None:
    logger.info("\n--- Usage Summary ---")
    logger.info(f"Oracle calls: {len(usage.api_calls)}")
    if usage.api_calls:
        logger.info(f"Input tokens: {usage.input_tokens:,}")
        logger.info(f"Output tokens: {usage.output_tokens:,}")
    logger.info(f"Archive searches: {usage.archive_searches}")
    if usage.page_fetches:
        logger.info(f"Page fetches: {usage.page_fetches}")


def report_status(config: ScoreLookupConfig) -> None:
    """Print whether the oracle is configured and which archive is used."""
    print(f"Archive API: {config.archive.api_url}")
    print(f"Oracle: {config.oracle.type}")
    if isinstance(config.oracle, ClaudeOracleConfig):
        oracle = create_oracle(config.oracle)
        print(f"Oracle API key configured: {oracle.configured}")


async def run(args: CLIArgs) -> None:
    """Execute the requested lookup with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    if args.mode == "status":
        report_status(config)
        return

    pipeline, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    logger.info(f"Running {args.mode} for: {args.query}")
    logger.info(f"Config: {args.config}")

    if args.mode == "search":
        results, usage = await pipeline.search(args.query)
        if not results:
            print("\nNo matching pages found. Try rephrasing your query.")
        else:
            print(f"\nFound {len(results)} pages:\n")
        for i, result in enumerate(results, 1):
            print(f"{i}. {result.title}")
            print(f"   {result.link}")
            if result.snippet:
                print(f"   {result.snippet}")
    else:
        checks, usage = await pipeline.check(args.query)
        if not checks:
            print("\nNo matching pages found. Try rephrasing your query.")
        for i, check in enumerate(checks, 1):
            print(f"\n{i}. {check.title}")
            print(f"   {check.link}")
            print(f"   {check.summary}")

    _log_usage(usage)

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Find scores on IMSLP and estimate their public-domain status."
    )
    parser.add_argument(
        "mode",
        help="search: find archive pages; check: public-domain status; status: show setup",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default="",
        help="Composer, work title, or other free-text query",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Write a JSON run log of intermediate results",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            mode=ns.mode,
            query=ns.query,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
        )
    except ValidationError as e:
        logger.error(_format_errors(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
