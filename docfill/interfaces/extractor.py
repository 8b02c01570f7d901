"""Placeholder extraction interfaces.

Defines the result types and abstract base class for turning retrieved
document content into a set of validated placeholder names.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from docfill.interfaces.acquisition import DocfillError, RetrievalAttempt


@dataclass(frozen=True)
class SourceScore:
    """Diagnostic score of one successful source.

    Attributes:
        strategy_name: The strategy that produced the content.
        placeholder_count: Validated placeholders found in this source.
        content_length: Length of the source content.
        score: placeholder_count * 100 + content_length.
    """

    strategy_name: str
    placeholder_count: int
    content_length: int
    score: int


@dataclass(frozen=True)
class ExtractionResult:
    """Placeholders found across all sources of one document.

    Attributes:
        placeholders: Sorted union of placeholders over every source.
        per_source: Placeholders found in each successful source.
        best_source: Name of the highest scoring source.
        scores: Score of every successful source, highest first.
        marker_counts: Raw placeholder-marker census per source.
    """

    placeholders: list[str]
    per_source: dict[str, list[str]]
    best_source: str
    scores: list[SourceScore] = field(default_factory=list)
    marker_counts: dict[str, dict[str, int]] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        """True when content was retrieved but held no valid placeholders."""
        return not self.placeholders


class BasePlaceholderExtractor(ABC):
    """Abstract base class for placeholder extraction strategies."""

    @abstractmethod
    def extract(self, attempts: list[RetrievalAttempt]) -> ExtractionResult:
        """Extract placeholders from every successful attempt.

        Args:
            attempts: Retrieval attempts as produced by a content fetcher.

        Returns:
            The union of placeholders plus per-source diagnostics.

        Raises:
            NoContentAvailableError: If no attempt succeeded.
        """
        ...

    @abstractmethod
    def extract_from_content(self, content: str) -> list[str]:
        """Extract validated placeholders from a single content blob."""
        ...


class NoContentAvailableError(DocfillError):
    """Exception raised when no retrieval strategy produced content."""

    def __init__(self, attempts: list[RetrievalAttempt] | None = None) -> None:
        self.attempts = list(attempts or [])
        super().__init__(
            f"No content could be retrieved from any source "
            f"({len(self.attempts)} attempted)"
        )
