from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from ..types import FieldId


@dataclass(frozen=True)
class MetadataRecord:
    """
    Read-only view of a repository item's metadata.

    Fields:
        fields: Mapping from field identifier to the ordered values of that field
        item_id: Repository identifier of the item (optional, used in messages only)

    Values keep their source order; the first value is authoritative unless a
    converter processes the whole sequence. None entries are dropped on construction.
    """

    fields: Mapping[FieldId, tuple[str, ...]] = field(default_factory=dict)
    item_id: str | None = None

    def __post_init__(self) -> None:
        normalized: dict[FieldId, tuple[str, ...]] = {}
        for key, values in self.fields.items():
            field_id = key if isinstance(key, FieldId) else FieldId.parse(str(key))
            kept = tuple(str(v) for v in values if v is not None)
            normalized[field_id] = normalized.get(field_id, ()) + kept
        object.__setattr__(self, "fields", MappingProxyType(normalized))

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Iterable[str | None] | str | None],
        item_id: str | None = None,
    ) -> MetadataRecord:
        """Build a record from {'dc.title': ['...'], ...}; scalar values become one-element sequences."""
        fields: dict[FieldId, tuple[str, ...]] = {}
        for key, raw in data.items():
            if raw is None:
                values: tuple = ()
            elif isinstance(raw, (str, int, float)):
                values = (str(raw),)
            else:
                values = tuple(raw)
            field_id = FieldId.parse(key)
            fields[field_id] = fields.get(field_id, ()) + tuple(str(v) for v in values if v is not None)
        return cls(fields=fields, item_id=item_id)

    def values(self, field_id: str | FieldId) -> tuple[str, ...]:
        """
        Get the ordered values of a field.

        A '*' qualifier matches every qualifier of the schema/element, including none.
        Unknown fields yield an empty tuple, never None.
        """
        if not isinstance(field_id, FieldId):
            field_id = FieldId.parse(field_id)
        if not field_id.is_wildcard:
            return self.fields.get(field_id, ())
        collected: list[str] = []
        for key, values in self.fields.items():
            if field_id.matches(key):
                collected.extend(values)
        return tuple(collected)

    def first(self, field_id: str | FieldId) -> str | None:
        """First non-blank value of a field, or None."""
        for value in self.values(field_id):
            if value.strip():
                return value
        return None

    def has_value(self, field_id: str | FieldId) -> bool:
        return self.first(field_id) is not None
