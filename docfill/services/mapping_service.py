"""Mapping service.

Connects the field auto-mapper to a data-source client and resolves
accepted mappings against records for preview.
"""

from collections.abc import Mapping
from typing import Any

from docfill.interfaces.data_source import BaseDataSource, Record
from docfill.interfaces.log_sink import LogSink, emit
from docfill.interfaces.mapper import BaseFieldMapper, MappingSuggestion

CATEGORY = "mapping"


class MappingService:
    """Suggests field mappings using metadata from a data source."""

    def __init__(
        self,
        mapper: BaseFieldMapper,
        log_sink: LogSink | None = None,
    ) -> None:
        self._mapper = mapper
        self._log_sink = log_sink

    async def suggest_from_source(
        self,
        data_source: BaseDataSource,
        placeholders: list[str],
        existing_mappings: Mapping[str, str] | None = None,
    ) -> list[MappingSuggestion]:
        """Load field descriptors from ``data_source`` and suggest mappings.

        Errors raised by the data source propagate to the caller.
        """
        fields = await data_source.list_field_descriptors()

        emit(
            self._log_sink,
            "debug",
            CATEGORY,
            "Field descriptors loaded",
            {
                "field_count": len(fields),
                "linked_fields": [f.name for f in fields if f.is_linked_record],
            },
        )
        return self._mapper.suggest(placeholders, fields, existing_mappings)


def preview_record(record: Record, mappings: Mapping[str, str]) -> dict[str, Any]:
    """Resolve placeholder values from one record.

    Placeholders whose field is missing from the record resolve to an empty
    string. List values (multi-selects, lookups) are joined with ", ".
    """
    values: dict[str, Any] = {}
    for placeholder, field_name in mappings.items():
        if not field_name:
            continue
        value = record.fields.get(field_name, "")
        if isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        values[placeholder] = "" if value is None else value
    return values
