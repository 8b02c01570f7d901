"""Template parsing service.

Composes locator parsing, content acquisition and placeholder extraction
into one call returning a ParsedTemplate.
"""

from docfill.interfaces.acquisition import BaseContentFetcher, RetrievalAttempt
from docfill.interfaces.extractor import BasePlaceholderExtractor, ExtractionResult
from docfill.interfaces.log_sink import LogSink, emit
from docfill.services.models import ExtractionDiagnostics, ParsedTemplate, RetrievalFailure
from docfill.strategies.acquisition.locator import extract_document_id

CATEGORY = "pipeline"


class TemplateParsingService:
    """Discovers the placeholders of a remote template document.

    Example:
        ```python
        service = ComponentFactory().get_parsing_service()
        parsed = await service.parse("https://docs.google.com/document/d/1AbC/edit")
        parsed.placeholders  # ["customer_name", "invoice_date"]
        ```
    """

    def __init__(
        self,
        fetcher: BaseContentFetcher,
        extractor: BasePlaceholderExtractor,
        log_sink: LogSink | None = None,
    ) -> None:
        self._fetcher = fetcher
        self._extractor = extractor
        self._log_sink = log_sink

    async def parse(self, locator: str, timeout_ms: int | None = None) -> ParsedTemplate:
        """Fetch a document through every strategy and extract its placeholders.

        Args:
            locator: Shareable document URL.
            timeout_ms: Per-attempt timeout; the fetcher default if None.

        Returns:
            ParsedTemplate. Its placeholder list may be empty; that is the
            "no placeholders found" outcome, not an error.

        Raises:
            LocatorInvalidError: If the locator has no document id. No
                request is made in that case.
            NoContentAvailableError: If every strategy failed.
        """
        emit(self._log_sink, "info", CATEGORY, "Starting template parsing", {"url": locator})

        try:
            document_id = extract_document_id(locator)
            attempts = await self._fetcher.fetch_all_content(document_id, timeout_ms)
            result = self._extractor.extract(attempts)
        except Exception as e:
            emit(
                self._log_sink,
                "error",
                CATEGORY,
                "Template parsing failed",
                {"url": locator, "error": str(e), "error_type": type(e).__name__},
            )
            raise

        parsed = ParsedTemplate(
            document_id=document_id,
            url=locator,
            placeholders=result.placeholders,
            best_content=_content_of(attempts, result.best_source),
            diagnostics=build_diagnostics(attempts, result),
        )

        emit(
            self._log_sink,
            "info",
            CATEGORY,
            "Template parsing completed",
            {
                "document_id": document_id,
                "placeholders": parsed.placeholders,
                "best_source": result.best_source,
                "sources_succeeded": parsed.diagnostics.sources_succeeded,
            },
        )
        return parsed


def build_diagnostics(
    attempts: list[RetrievalAttempt], result: ExtractionResult
) -> ExtractionDiagnostics:
    """Summarize acquisition and extraction for reporting."""
    return ExtractionDiagnostics(
        sources_attempted=len(attempts),
        sources_succeeded=sum(1 for a in attempts if a.success),
        best_source=result.best_source,
        per_source_placeholder_counts={
            name: len(found) for name, found in result.per_source.items()
        },
        marker_counts=result.marker_counts,
        failures=[
            RetrievalFailure(
                strategy_name=a.strategy_name,
                error=a.error or "unknown error",
                error_kind=a.error_kind,
                status_code=a.status_code,
            )
            for a in attempts
            if not a.success
        ],
    )


def _content_of(attempts: list[RetrievalAttempt], strategy_name: str) -> str:
    for attempt in attempts:
        if attempt.success and attempt.strategy_name == strategy_name:
            return attempt.content or ""
    return ""
