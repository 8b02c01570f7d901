"""Data-source collaborator interface.

The tabular data source (records plus field metadata) lives outside this
package. Callers adapt their client to this contract.
"""

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any


class FieldType(str, enum.Enum):
    """Kinds of source fields, primitive and structured."""

    SINGLE_LINE_TEXT = "singleLineText"
    MULTILINE_TEXT = "multilineText"
    RICH_TEXT = "richText"
    EMAIL = "email"
    URL = "url"
    PHONE_NUMBER = "phoneNumber"
    NUMBER = "number"
    CURRENCY = "currency"
    PERCENT = "percent"
    DATE = "date"
    DATE_TIME = "dateTime"
    CHECKBOX = "checkbox"
    SINGLE_SELECT = "singleSelect"
    MULTIPLE_SELECTS = "multipleSelects"
    LINKED_RECORDS = "multipleRecordLinks"
    ATTACHMENT = "multipleAttachments"
    FORMULA = "formula"
    ROLLUP = "rollup"
    LOOKUP = "multipleLookupValues"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Any) -> "FieldType":
        """Map a raw type string to a FieldType, UNKNOWN if unrecognized."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class FieldDescriptor:
    """Metadata for one field of the source table.

    Attributes:
        name: Field name as shown to users.
        type: Field kind.
        is_linked_record: Whether the field links to another table.
        linked_table_id: Id of the linked table, for link fields.
        linked_table_name: Name of the linked table, for link fields.
        field_id: Source-side field id, if known.
        description: Free-text field description, if any.
    """

    name: str
    type: FieldType = FieldType.UNKNOWN
    is_linked_record: bool = False
    linked_table_id: str | None = None
    linked_table_name: str | None = None
    field_id: str | None = None
    description: str | None = None

    @classmethod
    def from_api(cls, payload: dict[str, Any]) -> "FieldDescriptor":
        """Build a descriptor from raw field metadata.

        Link fields carry their target table under ``options``; a missing
        ``name`` yields an empty name, which the mapper skips.
        """
        field_type = FieldType.parse(payload.get("type"))
        options = payload.get("options") or {}
        is_linked = bool(payload.get("isLinkedRecord")) or field_type is FieldType.LINKED_RECORDS
        return cls(
            name=str(payload.get("name") or ""),
            type=field_type,
            is_linked_record=is_linked,
            linked_table_id=payload.get("linkedTableId") or options.get("linkedTableId"),
            linked_table_name=payload.get("linkedTableName") or options.get("linkedTableName"),
            field_id=payload.get("id"),
            description=payload.get("description"),
        )


@dataclass(frozen=True)
class Record:
    """One row of the source table."""

    id: str
    fields: dict[str, Any] = field(default_factory=dict)


class BaseDataSource(ABC):
    """Abstract base class for tabular data-source clients."""

    @abstractmethod
    async def list_field_descriptors(self) -> list[FieldDescriptor]:
        """Return metadata for every field of the configured table."""
        ...

    @abstractmethod
    async def list_records(self, max_records: int | None = None) -> list[Record]:
        """Return records of the configured table.

        Args:
            max_records: Optional upper bound on the number of records.
        """
        ...

    @abstractmethod
    async def fetch_linked_records(
        self, parent_id: str, linked_field: FieldDescriptor
    ) -> list[Record]:
        """Return the records a parent record links to through a link field."""
        ...


def linked_record_fields(fields: list[FieldDescriptor]) -> list[FieldDescriptor]:
    """Return the link fields, the candidates for line-item tables."""
    return [f for f in fields if f.is_linked_record]
