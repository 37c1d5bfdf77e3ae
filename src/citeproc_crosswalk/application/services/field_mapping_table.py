from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Iterator, Mapping

from ...domain.errors import InvalidTargetField, MalformedFieldMapping
from ...domain.models.diagnostics import Diagnostic, DiagnosticsObserver, LoggingDiagnostics
from ...domain.models.field_mapping import FieldMapping
from ...domain.types import FieldId

logger = logging.getLogger(__name__)

FIELD_KEY_PATTERN = re.compile(r"^field\.([a-zA-Z\-]+)$")
FIELD_VALUE_PATTERN = re.compile(r"^([A-Za-z0-9.,]+)(?:\((\w+)\))?$")


def parse_field_mapping(output_field: str, value: str) -> FieldMapping | None:
    """
    Parse 'schema.element[.qualifier][,alternative...][(converter)]'.

    Returns:
        FieldMapping, or None if the value does not match the grammar
    """
    match = FIELD_VALUE_PATTERN.match(value.strip())
    if not match:
        return None
    ids_part, converter_name = match.group(1), match.group(2)
    try:
        source_ids = tuple(FieldId.parse(part) for part in ids_part.split(","))
    except InvalidTargetField:
        return None
    return FieldMapping(output_field=output_field, source_field_ids=source_ids, converter_name=converter_name)


class FieldMappingTable:
    """
    Ordered, read-only set of field mappings.

    Converter names are associated with the first source field of a mapping, not
    with the output field: every mapping whose first alternative is that source
    field resolves to the same converter, and the association configured last wins.
    """

    def __init__(self, mappings: tuple[FieldMapping, ...] = ()) -> None:
        self._mappings = tuple(mappings)
        converters: dict[FieldId, str] = {}
        for mapping in self._mappings:
            if mapping.converter_name is not None:
                converters[mapping.primary_field_id] = mapping.converter_name
        self._converter_by_field: Mapping[FieldId, str] = MappingProxyType(converters)

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> FieldMappingTable:
        """
        Build the table from 'field.<outputField>' entries; other keys are ignored.

        Malformed values are skipped with a 'malformed-field-mapping' diagnostic.
        """
        observer = diagnostics if diagnostics is not None else LoggingDiagnostics(logger)
        mappings: list[FieldMapping] = []
        for key, value in properties.items():
            key_match = FIELD_KEY_PATTERN.match(str(key))
            if not key_match:
                continue
            if key_match.group(1) == "id":
                observer.emit(Diagnostic(
                    code="reserved-field",
                    message=f"Field mapping '{key}' ignored: 'id' is fixed by the crosswalk",
                    field=str(key),
                ))
                continue
            mapping = parse_field_mapping(key_match.group(1), str(value))
            if mapping is None:
                error = MalformedFieldMapping(key=str(key), value=str(value))
                observer.emit(Diagnostic(
                    code="malformed-field-mapping",
                    message=str(error),
                    field=str(key),
                    details={"value": str(value)},
                ))
                continue
            mappings.append(mapping)
        return cls(tuple(mappings))

    @property
    def mappings(self) -> tuple[FieldMapping, ...]:
        return self._mappings

    def converter_name_for(self, mapping: FieldMapping) -> str | None:
        """Converter name resolved by the mapping's first source field."""
        return self._converter_by_field.get(mapping.primary_field_id)

    def __iter__(self) -> Iterator[FieldMapping]:
        return iter(self._mappings)

    def __len__(self) -> int:
        return len(self._mappings)
