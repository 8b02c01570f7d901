"""Abstract base classes and value types for the template pipeline."""

from docfill.interfaces.acquisition import (
    BaseContentFetcher,
    DocfillError,
    LocatorInvalidError,
    RetrievalAttempt,
    RetrievalStrategy,
)
from docfill.interfaces.data_source import (
    BaseDataSource,
    FieldDescriptor,
    FieldType,
    Record,
    linked_record_fields,
)
from docfill.interfaces.extractor import (
    BasePlaceholderExtractor,
    ExtractionResult,
    NoContentAvailableError,
    SourceScore,
)
from docfill.interfaces.log_sink import LogSink, emit
from docfill.interfaces.mapper import BaseFieldMapper, MappingSuggestion

__all__ = [
    "BaseContentFetcher",
    "BaseDataSource",
    "BaseFieldMapper",
    "BasePlaceholderExtractor",
    "DocfillError",
    "ExtractionResult",
    "FieldDescriptor",
    "FieldType",
    "LocatorInvalidError",
    "LogSink",
    "MappingSuggestion",
    "NoContentAvailableError",
    "Record",
    "RetrievalAttempt",
    "RetrievalStrategy",
    "SourceScore",
    "emit",
    "linked_record_fields",
]
