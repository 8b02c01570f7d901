"""HTTP content fetcher.

Runs every retrieval strategy concurrently over one shared httpx client and
records each outcome, success or failure, as a RetrievalAttempt.
"""

import asyncio
import json
import time

import httpx

from docfill.interfaces.acquisition import (
    BaseContentFetcher,
    RetrievalAttempt,
    RetrievalStrategy,
)
from docfill.interfaces.log_sink import LogSink, emit
from docfill.strategies.acquisition.catalog import COMMON_HEADERS, DEFAULT_STRATEGIES

CATEGORY = "acquisition"


class HttpContentFetcher(BaseContentFetcher):
    """Fetches a document through every configured strategy.

    Attempts are independent: each runs under its own timeout and any error
    it hits is recorded on its own RetrievalAttempt. All attempts finish
    before the list is returned.

    Attributes:
        strategies: The strategy table, tried in order.
    """

    def __init__(
        self,
        strategies: tuple[RetrievalStrategy, ...] | list[RetrievalStrategy] | None = None,
        timeout_ms: int = 30000,
        min_content_length: int = 0,
        transport: httpx.AsyncBaseTransport | None = None,
        log_sink: LogSink | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            strategies: Strategy table. Defaults to DEFAULT_STRATEGIES.
            timeout_ms: Default per-attempt timeout in milliseconds.
            min_content_length: Shorter bodies are recorded as failures.
            transport: Optional httpx transport (tests use MockTransport).
            log_sink: Receiver for structured progress events.
        """
        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

        self._strategies = tuple(strategies) if strategies is not None else DEFAULT_STRATEGIES
        self._timeout_ms = timeout_ms
        self._min_content_length = max(0, min_content_length)
        self._transport = transport
        self._log_sink = log_sink

    @property
    def strategies(self) -> tuple[RetrievalStrategy, ...]:
        """Return the strategy table this fetcher runs."""
        return self._strategies

    async def fetch_all_content(
        self, document_id: str, timeout_ms: int | None = None
    ) -> list[RetrievalAttempt]:
        """Try every strategy against a document concurrently.

        Args:
            document_id: The document id extracted from the locator.
            timeout_ms: Per-attempt timeout; defaults to the configured one.

        Returns:
            One RetrievalAttempt per strategy, in strategy order.
        """
        timeout_ms = timeout_ms or self._timeout_ms
        timeout_s = timeout_ms / 1000

        emit(
            self._log_sink,
            "info",
            CATEGORY,
            "Fetching document through all strategies",
            {
                "document_id": document_id,
                "strategies": len(self._strategies),
                "timeout_ms": timeout_ms,
            },
        )

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=httpx.Timeout(timeout_s),
            follow_redirects=True,
        ) as client:
            attempts = await asyncio.gather(
                *(
                    self._attempt(client, strategy, document_id, timeout_ms)
                    for strategy in self._strategies
                )
            )

        succeeded = sum(1 for a in attempts if a.success)
        emit(
            self._log_sink,
            "info",
            CATEGORY,
            "Content retrieval finished",
            {
                "document_id": document_id,
                "attempted": len(attempts),
                "succeeded": succeeded,
            },
        )
        return list(attempts)

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        strategy: RetrievalStrategy,
        document_id: str,
        timeout_ms: int,
    ) -> RetrievalAttempt:
        """Run one strategy. Never raises; every outcome becomes an attempt."""
        url = strategy.url_for(document_id)
        headers = {**COMMON_HEADERS, **strategy.headers}
        started = time.monotonic()

        emit(self._log_sink, "debug", CATEGORY, f"Trying {strategy.name}", {"url": url})

        try:
            async with asyncio.timeout(timeout_ms / 1000):
                response = await client.get(url, headers=headers)
                body = response.text
        except (TimeoutError, httpx.TimeoutException):
            return self._record_failure(
                strategy, url, f"Timed out after {timeout_ms} ms", "timeout"
            )
        except httpx.HTTPError as e:
            return self._record_failure(
                strategy, url, f"{type(e).__name__}: {e}", "transport"
            )
        except Exception as e:
            # Isolate the sibling attempts from anything unexpected.
            return self._record_failure(
                strategy, url, f"{type(e).__name__}: {e}", "transport"
            )

        if not response.is_success:
            return self._record_failure(
                strategy,
                url,
                f"HTTP {response.status_code}: {response.reason_phrase}",
                "http_status",
                status_code=response.status_code,
            )

        if strategy.unwrap_json_key:
            try:
                payload = json.loads(body)
                body = str(payload.get(strategy.unwrap_json_key) or "")
            except (json.JSONDecodeError, AttributeError) as e:
                return self._record_failure(
                    strategy,
                    url,
                    f"Invalid JSON from proxy: {e}",
                    "decode",
                    status_code=response.status_code,
                )

        if not body or len(body) < self._min_content_length:
            return self._record_failure(
                strategy,
                url,
                f"No content or insufficient content ({len(body)} chars)",
                "insufficient_content",
                status_code=response.status_code,
            )

        emit(
            self._log_sink,
            "info",
            CATEGORY,
            f"{strategy.name} succeeded",
            {
                "content_length": len(body),
                "elapsed_ms": int((time.monotonic() - started) * 1000),
            },
        )
        return RetrievalAttempt.succeeded(
            strategy.name, body, url=url, status_code=response.status_code
        )

    def _record_failure(
        self,
        strategy: RetrievalStrategy,
        url: str,
        error: str,
        error_kind: str,
        status_code: int | None = None,
    ) -> RetrievalAttempt:
        emit(
            self._log_sink,
            "warn",
            CATEGORY,
            f"{strategy.name} failed",
            {"error": error, "error_kind": error_kind, "status_code": status_code},
        )
        return RetrievalAttempt.failed(
            strategy.name, error, error_kind, url=url, status_code=status_code
        )
