"""Placeholder discovery and field auto-mapping for document templates."""

from docfill.interfaces import (
    DocfillError,
    FieldDescriptor,
    FieldType,
    LocatorInvalidError,
    MappingSuggestion,
    NoContentAvailableError,
    RetrievalAttempt,
    RetrievalStrategy,
)
from docfill.strategies.acquisition import extract_document_id

__version__ = "0.1.0"

__all__ = [
    "DocfillError",
    "FieldDescriptor",
    "FieldType",
    "LocatorInvalidError",
    "MappingSuggestion",
    "NoContentAvailableError",
    "RetrievalAttempt",
    "RetrievalStrategy",
    "extract_document_id",
]
