"""IMSLP search through the MediaWiki API."""

import html
import re
from urllib.parse import quote

import httpx

from score_lookup.data import ArchiveResult

IMSLP_API_URL = "https://imslp.org/api.php"
IMSLP_WIKI_URL = "https://imslp.org/wiki"

_TAG = re.compile(r"<[^>]+>")


def clean_snippet(snippet: str) -> str:
    """Strip HTML tags and decode entities in a search snippet."""
    text = html.unescape(_TAG.sub("", snippet))
    return " ".join(text.split())


def page_url(title: str, wiki_url: str = IMSLP_WIKI_URL) -> str:
    """Build the wiki link for a page title."""
    return f"{wiki_url.rstrip('/')}/{quote(title.replace(' ', '_'))}"


class IMSLPIndex:
    """Search IMSLP pages using the MediaWiki ``list=search`` endpoint.

    Args:
        api_url: MediaWiki ``api.php`` endpoint.
        wiki_url: Base URL used to build page links.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        *,
        api_url: str = IMSLP_API_URL,
        wiki_url: str = IMSLP_WIKI_URL,
        timeout: float = 10.0,
    ) -> None:
        self._api_url = api_url
        self._wiki_url = wiki_url
        self._timeout = timeout

    async def lookup(self, query: str, limit: int) -> list[ArchiveResult]:
        params: dict[str, str | int] = {
            "action": "query",
            "list": "search",
            "srsearch": query,
            "srlimit": limit,
            "format": "json",
            "formatversion": 2,
        }
        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.get(self._api_url, params=params)
        response.raise_for_status()
        data = response.json()

        results: list[ArchiveResult] = []
        for item in data.get("query", {}).get("search", []):
            title = item.get("title")
            if not title:
                continue
            results.append(
                ArchiveResult(
                    title=title,
                    snippet=clean_snippet(item.get("snippet", "")),
                    link=page_url(title, self._wiki_url),
                )
            )
        return results[:limit]
