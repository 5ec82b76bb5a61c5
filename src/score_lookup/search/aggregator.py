"""Fan search variants out to an archive index and merge the hits."""

import asyncio
import logging

from score_lookup.data import ArchiveResult, SearchQuery, Usage
from score_lookup.search.base import ArchiveIndex

logger = logging.getLogger(__name__)


class SearchAggregator:
    """Query an archive index once per variant until a result quota is filled.

    Variants are looked up concurrently in batches of ``max_concurrency``.
    Each batch is merged in variant order, not completion order, so the
    output is the same however the requests interleave. No further batch is
    issued once the quota is reached. A failed lookup is logged and skipped.

    Args:
        index: Archive search index.
        per_variant_limit: Hits requested from the index per variant.
        max_concurrency: Lookups in flight at once.
    """

    def __init__(
        self,
        index: ArchiveIndex,
        *,
        per_variant_limit: int = 4,
        max_concurrency: int = 4,
    ) -> None:
        self._index = index
        self._per_variant_limit = per_variant_limit
        self._max_concurrency = max(1, max_concurrency)

    async def search(
        self, variants: list[SearchQuery], *, quota: int = 8
    ) -> tuple[list[ArchiveResult], Usage]:
        """Search for archive pages matching any of *variants*.

        Args:
            variants: Search variants, most preferred first.
            quota: Maximum number of results to return.

        Returns:
            Tuple of (results unique by title in discovery order, usage).
        """
        seen_titles: set[str] = set()
        results: list[ArchiveResult] = []
        usage = Usage()

        for start in range(0, len(variants), self._max_concurrency):
            if len(results) >= quota:
                break
            batch = variants[start : start + self._max_concurrency]
            batch_results = await asyncio.gather(
                *(self._index.lookup(v.text, self._per_variant_limit) for v in batch),
                return_exceptions=True,
            )

            for variant, hits in zip(batch, batch_results):
                if isinstance(hits, BaseException):
                    logger.warning("Search failed for variant %r. Error: %s", variant.text, hits)
                    continue
                usage.archive_searches += 1
                for hit in hits:
                    if len(results) >= quota:
                        break
                    if hit.title not in seen_titles:
                        seen_titles.add(hit.title)
                        results.append(hit)

        return (results, usage)
