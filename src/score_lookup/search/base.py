from typing import Protocol

from score_lookup.data import ArchiveResult


class ArchiveIndex(Protocol):
    """Interface for an archive's full-text search index."""

    async def lookup(self, query: str, limit: int) -> list[ArchiveResult]:
        """Search the index for pages matching *query*.

        Args:
            query: Search text.
            limit: Maximum number of hits to return.

        Returns:
            Hits in index rank order, with plain-text snippets.

        Raises:
            httpx.HTTPError: On transport or status failure.
        """
        ...
