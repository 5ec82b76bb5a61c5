from typing import Protocol


class PageFetcher(Protocol):
    """Interface for retrieving raw page markup by canonical title."""

    async def fetch(self, title: str) -> str | None:
        """Return the page's markup, or None if it is unavailable.

        Implementations must not raise: an unavailable page means
        "no facts known", not an error.
        """
        ...
