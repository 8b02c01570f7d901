"""Field mapping interfaces.

Defines the suggestion type and abstract base class for proposing which
source field should fill each template placeholder.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass

from docfill.interfaces.data_source import FieldDescriptor, FieldType


@dataclass(frozen=True)
class MappingSuggestion:
    """A proposed placeholder-to-field assignment.

    Attributes:
        template_field: The placeholder as extracted from the template.
        candidate_field: Name of the proposed source field.
        confidence: Score from 0.0 to 1.0.
        field_type: Type of the proposed field.
        is_linked_record: Whether the proposed field links to another table.
    """

    template_field: str
    candidate_field: str
    confidence: float
    field_type: FieldType = FieldType.UNKNOWN
    is_linked_record: bool = False


class BaseFieldMapper(ABC):
    """Abstract base class for field auto-mapping strategies."""

    @abstractmethod
    def suggest(
        self,
        placeholders: list[str],
        candidate_fields: list[FieldDescriptor],
        existing_mappings: Mapping[str, str] | None = None,
    ) -> list[MappingSuggestion]:
        """Suggest a field for every placeholder not yet mapped.

        Args:
            placeholders: Placeholders extracted from the template.
            candidate_fields: Fields available in the data source.
            existing_mappings: Placeholder to field name mappings already set.

        Returns:
            Suggestions sorted by confidence, highest first.
        """
        ...
