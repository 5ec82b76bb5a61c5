"""Tests for IMSLPIndex."""

from unittest.mock import MagicMock

import httpx
import pytest

from score_lookup.data import ArchiveResult
from score_lookup.search.imslp import IMSLPIndex, clean_snippet, page_url


class TestIMSLPIndex:
    """Tests for IMSLPIndex."""

    @pytest.fixture
    def mock_response_data(self) -> dict:
        """Sample MediaWiki search response."""
        return {
            "batchcomplete": True,
            "query": {
                "searchinfo": {"totalhits": 2},
                "search": [
                    {
                        "ns": 0,
                        "title": "6 Sonatas for Solo Violin, Op.27 (Ysaÿe, Eugène)",
                        "snippet": '<span class="searchmatch">Sonata</span> No.6 in E major &amp; more',
                    },
                    {
                        "ns": 0,
                        "title": "Category:Ysaÿe, Eugène",
                        "snippet": "Belgian violinist &quot;King of the violin&quot;",
                    },
                ],
            },
        }

    @pytest.fixture
    def index(self) -> IMSLPIndex:
        return IMSLPIndex()

    async def test_lookup_returns_results(
        self,
        index: IMSLPIndex,
        mock_response_data: dict,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Should return ArchiveResult objects with cleaned snippets and links."""
        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        results = await index.lookup("ysaye sonata", 4)

        assert len(results) == 2
        assert all(isinstance(r, ArchiveResult) for r in results)
        assert results[0].title == "6 Sonatas for Solo Violin, Op.27 (Ysaÿe, Eugène)"
        assert results[0].snippet == "Sonata No.6 in E major & more"
        assert results[0].link.startswith("https://imslp.org/wiki/6_Sonatas_for_Solo_Violin")
        assert results[1].snippet == 'Belgian violinist "King of the violin"'

    async def test_lookup_passes_search_params(
        self,
        index: IMSLPIndex,
        mock_response_data: dict,
        monkeypatch: pytest.MonkeyPatch,
    ):
        """Should call the search endpoint with query and limit."""
        captured: dict = {}

        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()

        async def mock_get(self, url, params=None):
            captured["url"] = url
            captured.update(params or {})
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        await index.lookup("Beethoven Op. 90", 3)

        assert captured["url"] == "https://imslp.org/api.php"
        assert captured["action"] == "query"
        assert captured["list"] == "search"
        assert captured["srsearch"] == "Beethoven Op. 90"
        assert captured["srlimit"] == 3

    async def test_lookup_truncates_to_limit(
        self,
        index: IMSLPIndex,
        mock_response_data: dict,
        monkeypatch: pytest.MonkeyPatch,
    ):
        mock_response = MagicMock()
        mock_response.json.return_value = mock_response_data
        mock_response.raise_for_status = MagicMock()

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        results = await index.lookup("ysaye", 1)
        assert len(results) == 1

    async def test_lookup_handles_missing_query_section(
        self, index: IMSLPIndex, monkeypatch: pytest.MonkeyPatch
    ):
        mock_response = MagicMock()
        mock_response.json.return_value = {"batchcomplete": True}
        mock_response.raise_for_status = MagicMock()

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        assert await index.lookup("nothing", 4) == []

    async def test_lookup_raises_on_status_error(
        self, index: IMSLPIndex, monkeypatch: pytest.MonkeyPatch
    ):
        """Status failures propagate so the aggregator can skip the variant."""
        request = httpx.Request("GET", "https://imslp.org/api.php")
        mock_response = MagicMock()
        mock_response.raise_for_status = MagicMock(
            side_effect=httpx.HTTPStatusError(
                "503", request=request, response=httpx.Response(503, request=request)
            )
        )

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        with pytest.raises(httpx.HTTPStatusError):
            await index.lookup("ysaye", 4)

    async def test_custom_wiki_url(self, monkeypatch: pytest.MonkeyPatch):
        mock_response = MagicMock()
        mock_response.json.return_value = {"query": {"search": [{"title": "A B"}]}}
        mock_response.raise_for_status = MagicMock()

        async def mock_get(*args, **kwargs):
            return mock_response

        monkeypatch.setattr(httpx.AsyncClient, "get", mock_get)

        index = IMSLPIndex(api_url="https://mirror.test/api.php", wiki_url="https://mirror.test/wiki/")
        results = await index.lookup("a", 4)
        assert results[0].link == "https://mirror.test/wiki/A_B"
        assert results[0].snippet == ""


def test_clean_snippet_strips_tags_and_entities() -> None:
    assert clean_snippet("<b>Op.</b>&nbsp;27  &lt;solo&gt;") == "Op. 27 <solo>"


def test_page_url_quotes_title() -> None:
    assert page_url("Gymnopédies (Satie, Erik)") == (
        "https://imslp.org/wiki/Gymnop%C3%A9dies_%28Satie%2C_Erik%29"
    )
