from typing import Protocol

from score_lookup.data import SearchQuery, Usage


class QueryGenerator(Protocol):
    """Interface for turning a raw user query into archive title variants."""

    async def generate(self, query: str) -> tuple[list[SearchQuery], Usage]: ...
