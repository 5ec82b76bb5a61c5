"""IMSLP page markup retrieval through the MediaWiki API."""

import logging

import httpx

from score_lookup.search.imslp import IMSLP_API_URL

logger = logging.getLogger(__name__)


class IMSLPPageFetcher:
    """Fetch a page's wikitext using the MediaWiki ``action=parse`` endpoint.

    Titles found by search do not always resolve in the page store, so every
    failure is reported as ``None`` and logged rather than raised.

    Args:
        api_url: MediaWiki ``api.php`` endpoint.
        timeout: Request timeout in seconds.
    """

    def __init__(self, *, api_url: str = IMSLP_API_URL, timeout: float = 10.0) -> None:
        self._api_url = api_url
        self._timeout = timeout

    async def fetch(self, title: str) -> str | None:
        params: dict[str, str | int] = {
            "action": "parse",
            "page": title,
            "prop": "wikitext",
            "format": "json",
            "formatversion": 2,
        }
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(self._api_url, params=params)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Could not fetch page %r. Error: %s", title, e)
            return None

        if not isinstance(data, dict):
            return None
        if "error" in data:
            logger.warning("Page %r unavailable: %s", title, data["error"])
            return None
        wikitext = data.get("parse", {}).get("wikitext")
        if not isinstance(wikitext, str):
            return None
        return wikitext
