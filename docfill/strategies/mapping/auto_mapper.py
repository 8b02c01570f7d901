"""Field auto-mapper strategy.

Proposes, for every unmapped placeholder, the source field whose name is
most similar, and applies accepted suggestions to a mapping.
"""

from collections.abc import Iterable, Mapping

from docfill.interfaces.data_source import FieldDescriptor
from docfill.interfaces.log_sink import LogSink, emit
from docfill.interfaces.mapper import BaseFieldMapper, MappingSuggestion
from docfill.strategies.mapping.similarity import comparison_key, match_confidence

CATEGORY = "mapping"

# Bulk apply accepts only suggestions at or above this confidence: the
# semantic-cluster tier and up. Not user-configurable.
BULK_APPLY_THRESHOLD = 0.6


def unmapped_placeholders(placeholders: Iterable[str], mappings: Mapping[str, str]) -> list[str]:
    """Return placeholders without a (non-empty) mapped field, order kept."""
    return [p for p in placeholders if not mappings.get(p)]


def apply_suggestion(suggestion: MappingSuggestion, mappings: Mapping[str, str]) -> dict[str, str]:
    """Return a copy of ``mappings`` with one suggestion applied."""
    return {**mappings, suggestion.template_field: suggestion.candidate_field}


def apply_all(
    suggestions: Iterable[MappingSuggestion], mappings: Mapping[str, str]
) -> dict[str, str]:
    """Apply every suggestion at or above BULK_APPLY_THRESHOLD.

    The new mapping is built in full before it is returned, so callers can
    swap it in as one update.

    Returns:
        A new mapping; ``mappings`` itself is not modified.
    """
    accepted = {
        s.template_field: s.candidate_field
        for s in suggestions
        if s.confidence >= BULK_APPLY_THRESHOLD
    }
    return {**mappings, **accepted}


class FieldAutoMapper(BaseFieldMapper):
    """Ranks source fields for template placeholders by name similarity.

    No configuration: scoring uses the fixed tiers in
    ``docfill.strategies.mapping.similarity``.
    """

    def __init__(self, log_sink: LogSink | None = None) -> None:
        self._log_sink = log_sink

    def suggest(
        self,
        placeholders: list[str],
        candidate_fields: list[FieldDescriptor],
        existing_mappings: Mapping[str, str] | None = None,
    ) -> list[MappingSuggestion]:
        """Suggest the best field for every placeholder not yet mapped.

        Args:
            placeholders: Placeholders extracted from the template.
            candidate_fields: Fields available in the data source.
            existing_mappings: Placeholder to field name mappings already set.

        Returns:
            One suggestion per unmapped placeholder that has any similar
            field, sorted by confidence, highest first.
        """
        existing_mappings = existing_mappings or {}
        suggestions: list[MappingSuggestion] = []

        for placeholder in unmapped_placeholders(placeholders, existing_mappings):
            ranked = self.rank_candidates(placeholder, candidate_fields)
            if ranked and ranked[0].confidence > 0:
                suggestions.append(ranked[0])

        suggestions.sort(key=lambda s: s.confidence, reverse=True)

        emit(
            self._log_sink,
            "info",
            CATEGORY,
            "Auto-mapping suggestions generated",
            {
                "template_fields": len(placeholders),
                "available_fields": len(candidate_fields),
                "suggestions": len(suggestions),
                "high_confidence": sum(
                    1 for s in suggestions if s.confidence >= BULK_APPLY_THRESHOLD
                ),
            },
        )
        return suggestions

    def rank_candidates(
        self, placeholder: str, candidate_fields: list[FieldDescriptor]
    ) -> list[MappingSuggestion]:
        """Score every candidate field for one placeholder.

        Descriptors without a name are skipped. Equal scores keep the
        order of ``candidate_fields``.

        Returns:
            All candidates as suggestions, highest confidence first.
        """
        template_key = comparison_key(placeholder)
        ranked: list[MappingSuggestion] = []

        for descriptor in candidate_fields:
            name = getattr(descriptor, "name", None)
            if not name:
                continue
            ranked.append(
                MappingSuggestion(
                    template_field=placeholder,
                    candidate_field=name,
                    confidence=match_confidence(template_key, name.lower()),
                    field_type=descriptor.type,
                    is_linked_record=descriptor.is_linked_record,
                )
            )

        ranked.sort(key=lambda s: s.confidence, reverse=True)
        return ranked
