"""Field auto-mapping strategies."""

from docfill.strategies.mapping.auto_mapper import (
    BULK_APPLY_THRESHOLD,
    FieldAutoMapper,
    apply_all,
    apply_suggestion,
    unmapped_placeholders,
)
from docfill.strategies.mapping.similarity import (
    edit_similarity,
    levenshtein_distance,
    match_confidence,
)

__all__ = [
    "BULK_APPLY_THRESHOLD",
    "FieldAutoMapper",
    "apply_all",
    "apply_suggestion",
    "edit_similarity",
    "levenshtein_distance",
    "match_confidence",
    "unmapped_placeholders",
]
