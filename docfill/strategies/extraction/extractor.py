"""Placeholder extractor strategy.

Runs the bracket matchers and the heuristic extractors over every
successfully retrieved source, validates every raw match and unions the
results. Sources are also scored so the most useful rendering can be
reported, but scoring never filters the placeholders returned.
"""

from docfill.interfaces.acquisition import RetrievalAttempt
from docfill.interfaces.extractor import (
    BasePlaceholderExtractor,
    ExtractionResult,
    NoContentAvailableError,
    SourceScore,
)
from docfill.interfaces.log_sink import LogSink, emit
from docfill.strategies.extraction.heuristics import run_heuristics
from docfill.strategies.extraction.matchers import (
    BRACKET_MATCHERS,
    DEFAULT_MAX_MATCHES,
    PlaceholderMatcher,
    count_markers,
    has_placeholder_markers,
    run_matchers,
)
from docfill.strategies.extraction.validation import normalize_and_validate

CATEGORY = "extraction"

# Score weight of one validated placeholder relative to one content character.
PLACEHOLDER_SCORE_WEIGHT = 100


def score_source(strategy_name: str, placeholder_count: int, content_length: int) -> SourceScore:
    """Score one source: placeholders dominate, content length breaks ties."""
    return SourceScore(
        strategy_name=strategy_name,
        placeholder_count=placeholder_count,
        content_length=content_length,
        score=placeholder_count * PLACEHOLDER_SCORE_WEIGHT + content_length,
    )


class PlaceholderExtractor(BasePlaceholderExtractor):
    """Extracts placeholders from the union of all retrieved sources.

    Pure and synchronous: the same attempts always give the same result.
    """

    def __init__(
        self,
        max_matches_per_pattern: int = DEFAULT_MAX_MATCHES,
        matchers: tuple[PlaceholderMatcher, ...] = BRACKET_MATCHERS,
        use_heuristics: bool = True,
        log_sink: LogSink | None = None,
    ) -> None:
        """Initialize the extractor.

        Args:
            max_matches_per_pattern: Cap on matches per pattern per source.
            matchers: Ordered bracket matcher battery.
            use_heuristics: Whether to run the heuristic second pass.
            log_sink: Receiver for structured progress events.
        """
        if max_matches_per_pattern <= 0:
            raise ValueError("max_matches_per_pattern must be positive")

        self._limit = max_matches_per_pattern
        self._matchers = matchers
        self._use_heuristics = use_heuristics
        self._log_sink = log_sink

    def extract(self, attempts: list[RetrievalAttempt]) -> ExtractionResult:
        """Extract placeholders from every successful attempt.

        Args:
            attempts: Retrieval attempts as produced by a content fetcher.

        Returns:
            ExtractionResult with the sorted union of placeholders. An empty
            placeholder list is a valid result, not an error.

        Raises:
            NoContentAvailableError: If no attempt succeeded.
        """
        sources = [a for a in attempts if a.success and a.content]
        if not sources:
            emit(
                self._log_sink,
                "error",
                CATEGORY,
                "No content could be retrieved from any source",
                {"attempted": len(attempts)},
            )
            raise NoContentAvailableError(attempts)

        union: set[str] = set()
        per_source: dict[str, list[str]] = {}
        marker_counts: dict[str, dict[str, int]] = {}
        scores: list[SourceScore] = []

        for attempt in sources:
            content = attempt.content or ""
            found = self.extract_from_content(content)

            per_source[attempt.strategy_name] = found
            marker_counts[attempt.strategy_name] = count_markers(content)
            scores.append(score_source(attempt.strategy_name, len(found), len(content)))
            union.update(found)

            emit(
                self._log_sink,
                "debug",
                CATEGORY,
                f"{attempt.strategy_name} found {len(found)} placeholders",
                {
                    "placeholders": found,
                    "content_length": len(content),
                    "has_markers": has_placeholder_markers(content),
                },
            )

        # sorted() is stable, so equal scores keep strategy order.
        ranked = sorted(scores, key=lambda s: s.score, reverse=True)
        placeholders = sorted(union)

        emit(
            self._log_sink,
            "info",
            CATEGORY,
            "Placeholders extracted" if placeholders else "No placeholders found",
            {
                "total_unique": len(placeholders),
                "best_source": ranked[0].strategy_name,
                "scores": [
                    {"source": s.strategy_name, "placeholders": s.placeholder_count, "score": s.score}
                    for s in ranked
                ],
            },
        )

        return ExtractionResult(
            placeholders=placeholders,
            per_source=per_source,
            best_source=ranked[0].strategy_name,
            scores=ranked,
            marker_counts=marker_counts,
        )

    def extract_from_content(self, content: str) -> list[str]:
        """Extract validated placeholders from a single content blob.

        Args:
            content: Raw content of one source.

        Returns:
            Sorted unique placeholders that passed validation.
        """
        if not content:
            return []

        raw: list[str] = []
        for captures in run_matchers(content, self._matchers, self._limit).values():
            raw.extend(captures)
        if self._use_heuristics:
            for captures in run_heuristics(content, self._limit).values():
                raw.extend(captures)

        found = {p for p in map(normalize_and_validate, raw) if p is not None}
        return sorted(found)
