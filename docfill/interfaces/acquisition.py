"""Abstract base class for content acquisition.

The Strategy Pattern lets each transport format (HTML export, published
view, mobile view, ...) be a row in a table rather than a branch in code.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


class DocfillError(Exception):
    """Base class for errors raised by this package."""


class LocatorInvalidError(DocfillError, ValueError):
    """Raised when no document id can be derived from a locator."""


@dataclass(frozen=True)
class RetrievalStrategy:
    """One way of fetching a document's content.

    Attributes:
        name: Human readable strategy name, used as the source id.
        url_template: URL with a ``{document_id}`` slot.
        headers: Request headers simulating a client context. Stored as a
            read-only mapping so shared strategy tables cannot be altered.
        unwrap_json_key: If set, the response is JSON and the content is
            read from this key (used by JSON-wrapping proxies).
    """

    name: str
    url_template: str
    headers: Mapping[str, str] = field(default_factory=dict)
    unwrap_json_key: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def url_for(self, document_id: str) -> str:
        """Render the strategy URL for a document id."""
        return self.url_template.format(document_id=document_id)


@dataclass(frozen=True)
class RetrievalAttempt:
    """Outcome of one strategy against one document.

    Attributes:
        strategy_name: Name of the strategy that produced this attempt.
        success: Whether usable content was retrieved.
        content: Raw response body when successful.
        content_length: Length of the content in characters.
        error: Failure description when unsuccessful.
        error_kind: Failure class: timeout, http_status, transport, decode
            or insufficient_content.
        status_code: HTTP status when a response was received.
        url: The URL that was requested.
    """

    strategy_name: str
    success: bool
    content: str | None = None
    content_length: int | None = None
    error: str | None = None
    error_kind: str | None = None
    status_code: int | None = None
    url: str = ""

    @classmethod
    def succeeded(
        cls, strategy_name: str, content: str, url: str = "", status_code: int | None = None
    ) -> "RetrievalAttempt":
        return cls(
            strategy_name=strategy_name,
            success=True,
            content=content,
            content_length=len(content),
            status_code=status_code,
            url=url,
        )

    @classmethod
    def failed(
        cls,
        strategy_name: str,
        error: str,
        error_kind: str,
        url: str = "",
        status_code: int | None = None,
    ) -> "RetrievalAttempt":
        return cls(
            strategy_name=strategy_name,
            success=False,
            error=error,
            error_kind=error_kind,
            status_code=status_code,
            url=url,
        )


class BaseContentFetcher(ABC):
    """Abstract base class for content acquisition strategies.

    Implementations run every configured strategy against a document and
    report each outcome. They never raise for a single failing strategy.

    Example:
        ```python
        fetcher = HttpContentFetcher()
        attempts = await fetcher.fetch_all_content("1AbC...", timeout_ms=10000)
        ```
    """

    @abstractmethod
    async def fetch_all_content(
        self, document_id: str, timeout_ms: int | None = None
    ) -> list[RetrievalAttempt]:
        """Try every strategy against a document.

        Args:
            document_id: The document id extracted from the locator.
            timeout_ms: Per-attempt timeout. Implementations fall back to
                their configured default when None.

        Returns:
            One RetrievalAttempt per strategy, in strategy order.
        """
        ...

    @property
    @abstractmethod
    def strategies(self) -> tuple[RetrievalStrategy, ...]:
        """Return the strategy table this fetcher runs."""
        ...
