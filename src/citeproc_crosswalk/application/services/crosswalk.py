from __future__ import annotations

import logging
from typing import Any, BinaryIO, Mapping

from ...domain.converters.registry import ConverterRegistry
from ...domain.errors import CrosswalkError
from ...domain.models.csl_document import MIME_TYPE, CslDocument
from ...domain.models.diagnostics import Diagnostic, DiagnosticsObserver, LoggingDiagnostics
from ...domain.models.field_mapping import FieldMapping
from ...domain.models.metadata_record import MetadataRecord
from .field_mapping_table import FieldMappingTable

logger = logging.getLogger(__name__)


class CiteprocCrosswalk:
    """
    Crosswalk from repository metadata to CSL-JSON.

    Built once from configuration; the registry and mapping table are read-only
    afterwards, so transform() can be called concurrently on independent records.
    """

    mime_type = MIME_TYPE

    def __init__(
        self,
        registry: ConverterRegistry,
        mapping_table: FieldMappingTable,
        diagnostics: DiagnosticsObserver | None = None,
    ) -> None:
        self.registry = registry
        self.mapping_table = mapping_table
        self.diagnostics: DiagnosticsObserver = (
            diagnostics if diagnostics is not None else LoggingDiagnostics(logger)
        )

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> CiteprocCrosswalk:
        """
        Build a crosswalk from flat 'converter.*' / 'field.*' configuration.

        Configuration problems are reported to `diagnostics` and never abort construction.
        """
        observer = diagnostics if diagnostics is not None else LoggingDiagnostics(logger)
        registry = ConverterRegistry.from_properties(properties, observer)
        mapping_table = FieldMappingTable.from_properties(properties, observer)
        logger.info(
            f"Crosswalk configured with {len(registry)} converters and {len(mapping_table)} field mappings",
            extra={"converter_count": len(registry), "mapping_count": len(mapping_table)},
        )
        return cls(registry, mapping_table, observer)

    def can_disseminate(self, obj: Any) -> bool:
        return isinstance(obj, MetadataRecord)

    def transform(self, record: MetadataRecord) -> CslDocument:
        """
        Build the CSL-JSON document for one record.

        For each mapping the first source alternative with a non-blank value wins.
        With a converter, all values of that field are handed to it; without one,
        the first non-blank value is copied verbatim. Fields with no usable source
        value are left out of the document.
        """
        document = CslDocument()
        for mapping in self.mapping_table:
            self._apply_mapping(document, mapping, record)
        return document

    def _apply_mapping(self, document: CslDocument, mapping: FieldMapping, record: MetadataRecord) -> None:
        converter = None
        converter_name = self.mapping_table.converter_name_for(mapping)
        if converter_name is not None:
            converter = self.registry.get(converter_name)
            if converter is None:
                self.diagnostics.emit(Diagnostic(
                    code="missing-converter",
                    message=(
                        f"No converter set up for field type {converter_name} but field "
                        f"{mapping.output_field} uses this converter -- copying raw value"
                    ),
                    field=mapping.output_field,
                    details={"converter": converter_name},
                ))

        for source_id in mapping.source_field_ids:
            first = record.first(source_id)
            if first is None:
                continue
            if converter is not None:
                converter.insert_value(
                    document, mapping.output_field, record, record.values(source_id), self.diagnostics
                )
            else:
                document.put(mapping.output_field, first)
            break  # first alternative with a value wins

    def to_json(self, record: MetadataRecord, indent: int | None = None) -> str:
        return self.transform(record).to_json(indent=indent)

    def disseminate(self, record: Any, stream: BinaryIO) -> None:
        """
        Write the record's CSL-JSON to a binary stream as UTF-8.

        Raises:
            CrosswalkError: If record is not a MetadataRecord
        """
        if not self.can_disseminate(record):
            raise CrosswalkError("null or non-item object type")
        stream.write(self.to_json(record).encode("utf-8"))
        stream.flush()
