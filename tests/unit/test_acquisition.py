"""Unit tests for document locators and the HTTP content fetcher."""

import asyncio
import json

import httpx
import pytest

from conftest import DOCUMENT_ID, DOCUMENT_URL, INVOICE_TEXT, make_transport
from docfill.interfaces.acquisition import LocatorInvalidError, RetrievalStrategy
from docfill.interfaces.extractor import NoContentAvailableError
from docfill.strategies.acquisition import (
    DEFAULT_STRATEGIES,
    HttpContentFetcher,
    build_strategy_table,
    extract_document_id,
    proxy_strategy,
)
from docfill.strategies.acquisition.catalog import CRAWLER_USER_AGENT, MOBILE_USER_AGENT
from docfill.strategies.extraction import PlaceholderExtractor


# =============================================================================
# Locator Tests
# =============================================================================


class TestExtractDocumentId:
    """Test suite for extract_document_id."""

    @pytest.mark.parametrize(
        "locator, expected",
        [
            (DOCUMENT_URL, DOCUMENT_ID),
            (f"https://docs.google.com/document/d/{DOCUMENT_ID}/pub", DOCUMENT_ID),
            (f"https://docs.google.com/document/d/{DOCUMENT_ID}", DOCUMENT_ID),
            ("https://drive.google.com/open?id=XYZ_789", "XYZ_789"),
            ("https://drive.google.com/uc?export=view&id=abc-1", "abc-1"),
        ],
    )
    def test_extracts_id(self, locator, expected):
        """Test that the id segment is found in the supported URL shapes."""
        assert extract_document_id(locator) == expected

    def test_is_deterministic(self):
        """Test that repeated extraction gives the same id."""
        first = extract_document_id(DOCUMENT_URL)
        assert extract_document_id(DOCUMENT_URL) == first
        assert extract_document_id(f"https://docs.google.com/document/d/{first}/edit") == first

    @pytest.mark.parametrize("locator", ["", "   ", "https://example.com/file.pdf", "not a url"])
    def test_invalid_locator_raises(self, locator):
        """Test that unrecognized locators fail with LocatorInvalidError."""
        with pytest.raises(LocatorInvalidError, match="Could not extract document ID"):
            extract_document_id(locator)

    def test_invalid_locator_is_value_error(self):
        """Test that LocatorInvalidError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            extract_document_id("https://example.com")


# =============================================================================
# Strategy Table Tests
# =============================================================================


class TestStrategyTable:
    """Test suite for the default strategy catalog."""

    def test_default_table_has_eight_distinct_strategies(self):
        """Test the size and uniqueness of the default table."""
        assert len(DEFAULT_STRATEGIES) == 8
        assert len({s.name for s in DEFAULT_STRATEGIES}) == 8
        assert len({s.url_template for s in DEFAULT_STRATEGIES}) == 8

    def test_urls_embed_document_id(self):
        """Test that every strategy URL carries the document id."""
        for strategy in DEFAULT_STRATEGIES:
            assert DOCUMENT_ID in strategy.url_for(DOCUMENT_ID)

    def test_client_contexts(self):
        """Test that crawler and mobile contexts are simulated."""
        by_name = {s.name: s for s in DEFAULT_STRATEGIES}
        assert by_name["Published HTML"].headers["User-Agent"] == CRAWLER_USER_AGENT
        assert by_name["Mobile View"].headers["User-Agent"] == MOBILE_USER_AGENT

    def test_strategy_headers_are_read_only(self):
        """Test that the shared table cannot be altered through a strategy."""
        mobile = next(s for s in DEFAULT_STRATEGIES if s.name == "Mobile View")

        with pytest.raises(TypeError):
            mobile.headers["User-Agent"] = "changed"

        assert mobile.headers["User-Agent"] == MOBILE_USER_AGENT

    def test_strategy_copies_caller_headers(self):
        """Test that later changes to the source dict do not leak in."""
        headers = {"Accept": "text/html"}
        strategy = RetrievalStrategy("Custom", "https://docs.test/{document_id}", headers)

        headers["Accept"] = "*/*"

        assert strategy.headers["Accept"] == "text/html"

    def test_proxy_strategy_is_optional(self):
        """Test that the proxy strategy is appended only on request."""
        assert build_strategy_table() == DEFAULT_STRATEGIES

        table = build_strategy_table(include_proxy=True, proxy_base_url="https://proxy.test/get")
        assert len(table) == 9
        assert table[-1].name == "CORS Proxy"
        assert table[-1].unwrap_json_key == "contents"

    def test_proxy_url_encodes_target(self):
        """Test that the proxied URL is escaped and still carries the id."""
        url = proxy_strategy("https://proxy.test/get").url_for(DOCUMENT_ID)
        assert url.startswith("https://proxy.test/get?url=https%3A%2F%2Fdocs.google.com")
        assert f"%2Fd%2F{DOCUMENT_ID}%2Fpub" in url


# =============================================================================
# HTTP Fetcher Tests
# =============================================================================


class TestHttpContentFetcher:
    """Test suite for HttpContentFetcher."""

    def test_all_strategies_fail(self):
        """Test that eight failing strategies give eight failed attempts."""
        fetcher = HttpContentFetcher(transport=make_transport({}, default_status=500))

        attempts = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID, timeout_ms=1000))

        assert len(attempts) == 8
        assert all(not a.success for a in attempts)
        assert all(a.error_kind == "http_status" for a in attempts)
        assert attempts[0].error == "HTTP 500: Internal Server Error"
        assert attempts[0].status_code == 500

        with pytest.raises(NoContentAvailableError):
            PlaceholderExtractor().extract(attempts)

    def test_one_success_among_failures(self):
        """Test that a single working strategy is enough for extraction."""
        transport = make_transport(
            {"/export?format=txt": httpx.Response(200, text=INVOICE_TEXT)}
        )
        fetcher = HttpContentFetcher(transport=transport)

        attempts = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        succeeded = [a for a in attempts if a.success]
        assert [a.strategy_name for a in succeeded] == ["Text Export"]
        assert succeeded[0].content == INVOICE_TEXT
        assert succeeded[0].content_length == len(INVOICE_TEXT)

        result = PlaceholderExtractor().extract(attempts)
        assert result.placeholders == ["customer_name", "invoice_date"]

    def test_results_follow_strategy_order(self):
        """Test that attempts come back in table order, one per strategy."""
        fetcher = HttpContentFetcher(transport=make_transport({}))

        attempts = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        assert [a.strategy_name for a in attempts] == [s.name for s in DEFAULT_STRATEGIES]

    def test_transport_error_does_not_abort_others(self):
        """Test that a connection error is recorded and siblings still run."""

        def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/pub"):
                raise httpx.ConnectError("connection refused", request=request)
            if request.url.path.endswith("/mobilebasic"):
                return httpx.Response(200, text="Hello {{first_name}}")
            return httpx.Response(403)

        fetcher = HttpContentFetcher(transport=httpx.MockTransport(handler))

        attempts = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))
        by_name = {a.strategy_name: a for a in attempts}

        assert by_name["Published HTML"].error_kind == "transport"
        assert "connection refused" in by_name["Published HTML"].error
        assert by_name["Mobile View"].success
        assert by_name["HTML Export"].error == "HTTP 403: Forbidden"

    def test_timeout_is_recorded(self):
        """Test that a slow strategy times out without affecting the others."""

        async def handler(request: httpx.Request) -> httpx.Response:
            if request.url.path.endswith("/mobilebasic"):
                await asyncio.sleep(5)
            return httpx.Response(200, text="{{quick_field}}")

        fetcher = HttpContentFetcher(transport=httpx.MockTransport(handler))

        attempts = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID, timeout_ms=100))
        by_name = {a.strategy_name: a for a in attempts}

        assert by_name["Mobile View"].success is False
        assert by_name["Mobile View"].error_kind == "timeout"
        assert by_name["Mobile View"].error == "Timed out after 100 ms"
        assert sum(1 for a in attempts if a.success) == 7

    def test_headers_merge_common_and_strategy(self):
        """Test that strategy headers override the shared defaults."""
        seen: dict[str, httpx.Headers] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen[request.url.path] = request.headers
            return httpx.Response(200, text="body")

        fetcher = HttpContentFetcher(transport=httpx.MockTransport(handler))
        asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        mobile = seen[f"/document/d/{DOCUMENT_ID}/mobilebasic"]
        assert mobile["User-Agent"] == MOBILE_USER_AGENT
        assert mobile["Cache-Control"] == "no-cache"

    def test_min_content_length(self):
        """Test that short bodies are recorded as insufficient content."""
        strategy = RetrievalStrategy("Only", "https://docs.test/{document_id}")
        transport = make_transport({f"/{DOCUMENT_ID}": httpx.Response(200, text="tiny")})
        fetcher = HttpContentFetcher([strategy], min_content_length=100, transport=transport)

        (attempt,) = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        assert attempt.success is False
        assert attempt.error_kind == "insufficient_content"
        assert attempt.error == "No content or insufficient content (4 chars)"

    def test_empty_body_is_a_failure(self):
        """Test that a 2xx response without a body yields no content."""
        strategy = RetrievalStrategy("Only", "https://docs.test/{document_id}")
        transport = make_transport({f"/{DOCUMENT_ID}": httpx.Response(204)})
        fetcher = HttpContentFetcher([strategy], transport=transport)

        (attempt,) = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        assert attempt.success is False
        assert attempt.error_kind == "insufficient_content"

    def test_proxy_response_is_unwrapped(self):
        """Test that JSON-wrapping proxies yield the inner content."""
        payload = json.dumps({"contents": "<p>{{policy_number}}</p>", "status": {}})
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=payload))
        fetcher = HttpContentFetcher(
            [proxy_strategy("https://proxy.test/get")], transport=transport
        )

        (attempt,) = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        assert attempt.success
        assert attempt.content == "<p>{{policy_number}}</p>"

    def test_proxy_invalid_json(self):
        """Test that an undecodable proxy answer is a decode failure."""
        transport = httpx.MockTransport(
            lambda request: httpx.Response(200, text="<html>oops</html>")
        )
        fetcher = HttpContentFetcher(
            [proxy_strategy("https://proxy.test/get")], transport=transport
        )

        (attempt,) = asyncio.run(fetcher.fetch_all_content(DOCUMENT_ID))

        assert attempt.success is False
        assert attempt.error_kind == "decode"

    def test_rejects_non_positive_timeout(self):
        """Test constructor validation of the default timeout."""
        with pytest.raises(ValueError, match="timeout_ms must be positive"):
            HttpContentFetcher(timeout_ms=0)
