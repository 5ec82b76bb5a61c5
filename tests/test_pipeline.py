"""Tests for LookupPipeline."""

import json
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from score_lookup.data import APICallUsage, ArchiveResult, SearchQuery, Usage, Verdict
from score_lookup.pipeline.lookup import LookupPipeline
from score_lookup.query.oracle import OracleQueryGenerator
from score_lookup.query.rules import RuleBasedQueryGenerator
from score_lookup.run_logger import RunLogger
from score_lookup.search.aggregator import SearchAggregator

PAGES = {
    "Gymnopédies (Satie, Erik)": "|Copyright=Public Domain\nSatie, Erik (1866–1925)",
    "Violin Sonata (Unknown, 1990)": "|Copyright=Non-PD\n",
    "Modern Piece (Someone)": "Someone (1930-2000)",
}


class FakeIndex:
    """Index returning every page whose title shares a word with the query."""

    def __init__(self, pages: dict[str, str]) -> None:
        self._titles = list(pages)
        self.queries: list[str] = []

    async def lookup(self, query: str, limit: int) -> list[ArchiveResult]:
        self.queries.append(query)
        words = {w.lower() for w in query.split()}
        hits = [t for t in self._titles if words & {w.lower().strip("(),") for w in t.split()}]
        return [ArchiveResult(title=t, link=f"https://imslp.org/wiki/{t}") for t in hits[:limit]]


class FakeFetcher:
    def __init__(self, pages: dict[str, str]) -> None:
        self._pages = pages
        self.titles: list[str] = []

    async def fetch(self, title: str) -> str | None:
        self.titles.append(title)
        return self._pages.get(title)


class FakeOracle:
    def __init__(self, text: str) -> None:
        self._text = text

    async def complete(self, instructions: str, query: str) -> tuple[str, Usage]:
        return (self._text, Usage(api_calls=[APICallUsage(model="fake", input_tokens=5)]))


def _pipeline(
    *,
    generators: list | None = None,
    pages: dict[str, str] = PAGES,
    run_logger: RunLogger | None = None,
    per_variant_limit: int = 4,
) -> tuple[LookupPipeline, FakeIndex, FakeFetcher]:
    index = FakeIndex(pages)
    fetcher = FakeFetcher(pages)
    pipeline = LookupPipeline(
        generators=generators if generators is not None else [RuleBasedQueryGenerator()],
        aggregator=SearchAggregator(index, per_variant_limit=per_variant_limit),
        fetcher=fetcher,
        run_logger=run_logger,
        clock=lambda: date(2026, 1, 1),
    )
    return (pipeline, index, fetcher)


async def test_search_returns_results() -> None:
    pipeline, _, _ = _pipeline()
    results, usage = await pipeline.search("satie gymnopédies")

    assert [r.title for r in results] == ["Gymnopédies (Satie, Erik)"]
    assert usage.archive_searches >= 1


async def test_blank_query_makes_no_calls() -> None:
    pipeline, index, fetcher = _pipeline()

    assert await pipeline.search("   ") == ([], Usage())
    checks, _ = await pipeline.check("")
    assert checks == []
    assert index.queries == []
    assert fetcher.titles == []


async def test_oracle_variants_are_searched_first() -> None:
    oracle_gen = OracleQueryGenerator(FakeOracle('["Modern Piece"]'))
    pipeline, index, _ = _pipeline(generators=[oracle_gen, RuleBasedQueryGenerator()])

    results, usage = await pipeline.search("someone 3")

    assert index.queries[0] == "Modern Piece"
    assert results[0].title == "Modern Piece (Someone)"
    assert usage.input_tokens == 5


async def test_expand_merges_and_dedupes_in_generator_order() -> None:
    gen_a = MagicMock()
    gen_a.generate = AsyncMock(
        return_value=([SearchQuery(text="x", intent="a"), SearchQuery(text="y", intent="a")], Usage())
    )
    gen_b = MagicMock()
    gen_b.generate = AsyncMock(
        return_value=([SearchQuery(text="y", intent="b"), SearchQuery(text="z", intent="b")], Usage())
    )
    pipeline, _, _ = _pipeline(generators=[gen_a, gen_b])

    variants, _ = await pipeline.expand("q")

    assert [(v.text, v.intent) for v in variants] == [("x", "a"), ("y", "a"), ("z", "b")]


async def test_failing_generator_is_skipped() -> None:
    failing = MagicMock()
    failing.generate = AsyncMock(side_effect=Exception("API error"))
    pipeline, _, _ = _pipeline(generators=[failing, RuleBasedQueryGenerator()])

    results, _ = await pipeline.search("satie")

    assert [r.title for r in results] == ["Gymnopédies (Satie, Erik)"]


async def test_no_variants_returns_empty() -> None:
    failing = MagicMock()
    failing.generate = AsyncMock(side_effect=Exception("API error"))
    pipeline, index, _ = _pipeline(generators=[failing])

    results, _ = await pipeline.search("satie")

    assert results == []
    assert index.queries == []


async def test_search_respects_quota() -> None:
    pages = {f"Sonata No.{i} (Composer)": "" for i in range(1, 20)}
    pipeline, _, _ = _pipeline(pages=pages)

    results, _ = await pipeline.search("composer sonata", quota=3)

    assert len(results) == 3
    assert len({r.title for r in results}) == 3


async def test_zero_quota_returns_nothing() -> None:
    pipeline, index, fetcher = _pipeline()

    results, usage = await pipeline.search("satie gymnopédies", quota=0)
    checks, _ = await pipeline.check("satie gymnopédies", quota=0)

    assert results == []
    assert checks == []
    assert index.queries == []
    assert fetcher.titles == []
    assert usage.archive_searches == 0


async def test_check_returns_verdicts_in_result_order() -> None:
    pipeline, _, fetcher = _pipeline()

    checks, usage = await pipeline.check("satie gymnopédies")

    assert len(checks) == 1
    check = checks[0]
    assert check.title == "Gymnopédies (Satie, Erik)"
    assert check.verdict is Verdict.YES
    assert check.facts.statuses == ("Public Domain",)
    assert check.rationale
    assert fetcher.titles == ["Gymnopédies (Satie, Erik)"]
    assert usage.page_fetches == 1


async def test_check_uses_injected_clock() -> None:
    pipeline, _, _ = _pipeline()

    checks, _ = await pipeline.check("someone piece")

    # Died 2000, checked in 2026
    assert checks[0].verdict is Verdict.LIKELY_NO


async def test_check_missing_page_is_unknown() -> None:
    pages = dict(PAGES)
    pipeline, _, _ = _pipeline(pages=pages)
    pipeline._fetcher = FakeFetcher({})  # type: ignore[assignment]

    checks, _ = await pipeline.check("satie")

    assert checks[0].verdict is Verdict.UNKNOWN
    assert checks[0].rationale


async def test_check_survives_fetcher_exception() -> None:
    pipeline, _, _ = _pipeline()
    broken = MagicMock()
    broken.fetch = AsyncMock(side_effect=RuntimeError("boom"))
    pipeline._fetcher = broken

    checks, _ = await pipeline.check("satie")

    assert checks[0].verdict is Verdict.UNKNOWN


async def test_check_default_quota_is_smaller() -> None:
    pages = {f"Sonata No.{i} (Composer)": "" for i in range(1, 20)}
    pipeline, _, _ = _pipeline(pages=pages, per_variant_limit=10)

    checks, _ = await pipeline.check("composer sonata")
    results, _ = await pipeline.search("composer sonata")

    assert len(checks) == 5
    assert len(results) == 8


async def test_run_log_written_per_request(tmp_path: Path) -> None:
    run_logger = RunLogger(log_dir=tmp_path)
    pipeline, _, _ = _pipeline(run_logger=run_logger)

    await pipeline.check("satie gymnopédies")

    assert run_logger.last_log_path is not None
    data = json.loads(run_logger.last_log_path.read_text())
    assert data["operation"] == "check"
    assert data["query"] == "satie gymnopédies"
    stages = [s["stage"] for s in data["stages"]]
    assert stages == ["query_generation", "variant_merge", "search", "page_fetch", "verdict"]
    assert data["final_result_count"] == 1


@pytest.mark.parametrize("query", ["ysaye 6 sonata", "Beethoven Op 90"])
async def test_original_query_is_always_searched(query: str) -> None:
    pipeline, index, _ = _pipeline(pages={"Unrelated": ""})

    await pipeline.search(query)

    assert index.queries[0] == query
