"""Search-and-verdict pipeline over a score archive."""

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import date

from score_lookup.copyright.extractor import extract_copyright_facts
from score_lookup.copyright.verdict import decide_verdict
from score_lookup.data import ArchiveResult, CopyrightCheck, SearchQuery, Usage
from score_lookup.pages.base import PageFetcher
from score_lookup.query.base import QueryGenerator
from score_lookup.run_logger import RunLogger
from score_lookup.search.aggregator import SearchAggregator

logger = logging.getLogger(__name__)


class LookupPipeline:
    """Answer "is it on the archive?" and "is it public domain?" for a query.

    Flow:
    1. All generators expand the query in parallel
    2. Variants are merged in generator order and de-duplicated by text
    3. The aggregator searches the archive variant by variant up to a quota
    4. For copyright checks, each result's page is fetched, its facts
       extracted and reduced to a verdict

    Args:
        generators: Query generators, most precise first.
        aggregator: Search aggregator over the archive index.
        fetcher: Page fetcher for the same archive.
        search_quota: Default result quota for ``search``.
        check_quota: Default result quota for ``check``.
        max_concurrency: Page fetches in flight at once.
        run_logger: Optional RunLogger for intermediate result logging.
        clock: Returns today's date; read once per ``check`` call.
    """

    def __init__(
        self,
        generators: list[QueryGenerator],
        aggregator: SearchAggregator,
        fetcher: PageFetcher,
        *,
        search_quota: int = 8,
        check_quota: int = 5,
        max_concurrency: int = 4,
        run_logger: RunLogger | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._generators = generators
        self._aggregator = aggregator
        self._fetcher = fetcher
        self._search_quota = search_quota
        self._check_quota = check_quota
        self._max_concurrency = max(1, max_concurrency)
        self._run_logger = run_logger
        self._clock = clock

    async def search(
        self, query: str, *, quota: int | None = None
    ) -> tuple[list[ArchiveResult], Usage]:
        """Find archive pages matching a free-text query.

        Args:
            query: Raw user query. Blank queries return no results.
            quota: Maximum results (defaults to ``search_quota``).

        Returns:
            Tuple of (results in rank order, usage).
        """
        query = query.strip()
        if not query:
            return ([], Usage())

        if self._run_logger:
            self._run_logger.start_run("search", query)

        results, usage = await self._find(
            query, self._search_quota if quota is None else quota
        )

        if self._run_logger:
            self._run_logger.finish_run(results, usage)
        return (results, usage)

    async def check(
        self, query: str, *, quota: int | None = None
    ) -> tuple[list[CopyrightCheck], Usage]:
        """Estimate the public-domain status of archive pages matching a query.

        Args:
            query: Raw user query. Blank queries return no results.
            quota: Maximum pages to check (defaults to ``check_quota``).

        Returns:
            Tuple of (one check per result in rank order, usage).
        """
        query = query.strip()
        if not query:
            return ([], Usage())

        if self._run_logger:
            self._run_logger.start_run("check", query)

        results, usage = await self._find(
            query, self._check_quota if quota is None else quota
        )

        t0 = time.monotonic()
        pages = await self._fetch_pages(results)
        usage.page_fetches += len(results)
        fetch_duration = time.monotonic() - t0

        if self._run_logger:
            self._run_logger.log_stage(
                stage="page_fetch",
                component=type(self._fetcher).__name__,
                input_data=[r.title for r in results],
                output_data=[page is not None for page in pages],
                usage=None,
                duration_seconds=fetch_duration,
            )

        t0 = time.monotonic()
        current_year = self._clock().year
        checks: list[CopyrightCheck] = []
        for result, page in zip(results, pages):
            facts = extract_copyright_facts(page)
            outcome = decide_verdict(facts, current_year=current_year)
            checks.append(
                CopyrightCheck(
                    title=result.title,
                    link=result.link,
                    verdict=outcome.verdict,
                    rationale=outcome.rationale,
                    facts=facts,
                )
            )

        if self._run_logger:
            self._run_logger.log_stage(
                stage="verdict",
                component="decide_verdict",
                input_data={"current_year": current_year},
                output_data=checks,
                usage=None,
                duration_seconds=time.monotonic() - t0,
            )
            self._run_logger.finish_run(checks, usage)

        return (checks, usage)

    async def expand(self, query: str) -> tuple[list[SearchQuery], Usage]:
        """Run all generators and merge their variants.

        Variants keep generator order and the first occurrence of each text.
        A failing generator contributes nothing.
        """
        total_usage = Usage()

        t0 = time.monotonic()
        generation_results = await asyncio.gather(
            *(gen.generate(query) for gen in self._generators), return_exceptions=True
        )
        gen_duration = time.monotonic() - t0

        seen: set[str] = set()
        variants: list[SearchQuery] = []
        for i, result in enumerate(generation_results):
            if isinstance(result, BaseException):
                logger.warning("Error in query generation: %s", result)
                continue
            queries, gen_usage = result
            total_usage += gen_usage

            if self._run_logger:
                self._run_logger.log_stage(
                    stage="query_generation",
                    component=type(self._generators[i]).__name__,
                    input_data=query,
                    output_data=queries,
                    usage=gen_usage,
                    duration_seconds=gen_duration,
                )

            for q in queries:
                if q.text not in seen:
                    seen.add(q.text)
                    variants.append(q)

        return (variants, total_usage)

    async def _find(self, query: str, quota: int) -> tuple[list[ArchiveResult], Usage]:
        variants, total_usage = await self.expand(query)
        logger.info("Searching with %d variants for %r", len(variants), query)

        if self._run_logger:
            self._run_logger.log_stage(
                stage="variant_merge",
                component="LookupPipeline",
                input_data=query,
                output_data=variants,
                usage=None,
                duration_seconds=0.0,
            )

        if not variants:
            return ([], total_usage)

        t0 = time.monotonic()
        results, search_usage = await self._aggregator.search(variants, quota=quota)
        total_usage += search_usage

        if self._run_logger:
            self._run_logger.log_stage(
                stage="search",
                component=type(self._aggregator).__name__,
                input_data={"variant_count": len(variants), "quota": quota},
                output_data=results,
                usage=search_usage,
                duration_seconds=time.monotonic() - t0,
            )

        return (results, total_usage)

    async def _fetch_pages(self, results: list[ArchiveResult]) -> list[str | None]:
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def fetch_one(title: str) -> str | None:
            async with semaphore:
                return await self._fetcher.fetch(title)

        fetched = await asyncio.gather(
            *(fetch_one(r.title) for r in results), return_exceptions=True
        )

        pages: list[str | None] = []
        for result, page in zip(results, fetched):
            if isinstance(page, BaseException):
                logger.warning("Error fetching page %r: %s", result.title, page)
                pages.append(None)
            else:
                pages.append(page)
        return pages
