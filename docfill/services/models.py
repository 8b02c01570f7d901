"""Service-level result models.

Pydantic models returned to callers of the parsing pipeline.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field


class RetrievalFailure(BaseModel):
    """Why one retrieval strategy produced no content."""

    strategy_name: str
    error: str
    error_kind: str | None = None
    status_code: int | None = None


class ExtractionDiagnostics(BaseModel):
    """How the placeholders of a document were obtained."""

    sources_attempted: int = Field(ge=0)
    sources_succeeded: int = Field(ge=0)
    best_source: str
    per_source_placeholder_counts: dict[str, int] = Field(default_factory=dict)
    marker_counts: dict[str, dict[str, int]] = Field(default_factory=dict)
    failures: list[RetrievalFailure] = Field(default_factory=list)


class ParsedTemplate(BaseModel):
    """Placeholders of a template document plus diagnostics."""

    document_id: str
    url: str
    placeholders: list[str] = Field(description="Sorted union of placeholders over all sources")
    best_content: str = Field(default="", description="Content of the best scoring source")
    diagnostics: ExtractionDiagnostics
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def has_placeholders(self) -> bool:
        return bool(self.placeholders)
