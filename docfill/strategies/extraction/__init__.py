"""Placeholder extraction strategies."""

from docfill.strategies.extraction.extractor import PlaceholderExtractor, score_source
from docfill.strategies.extraction.matchers import (
    BRACKET_MATCHERS,
    PlaceholderMatcher,
    count_markers,
    has_placeholder_markers,
)
from docfill.strategies.extraction.validation import (
    clean_placeholder,
    is_valid_placeholder,
    normalize_and_validate,
)

__all__ = [
    "BRACKET_MATCHERS",
    "PlaceholderExtractor",
    "PlaceholderMatcher",
    "clean_placeholder",
    "count_markers",
    "has_placeholder_markers",
    "is_valid_placeholder",
    "normalize_and_validate",
    "score_source",
]
