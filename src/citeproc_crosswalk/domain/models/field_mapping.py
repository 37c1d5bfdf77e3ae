from dataclasses import dataclass

from ..types import FieldId


@dataclass(frozen=True)
class FieldMapping:
    """
    How one CSL output field is populated.

    Fields:
        output_field: CSL field name (e.g., 'title', 'issued', 'author')
        source_field_ids: Alternatives tried in order; the first with a non-blank value wins
        converter_name: Converter configured for this mapping (optional)
    """

    output_field: str
    source_field_ids: tuple[FieldId, ...]
    converter_name: str | None = None

    def __post_init__(self) -> None:
        if not self.source_field_ids:
            raise ValueError("source_field_ids must be a non-empty tuple")

    @property
    def primary_field_id(self) -> FieldId:
        """First listed alternative; converters are associated with this field."""
        return self.source_field_ids[0]
