"""Unit tests for field mapping parsing."""

import pytest

from citeproc_crosswalk.application.services.field_mapping_table import FieldMappingTable, parse_field_mapping
from citeproc_crosswalk.domain.models.diagnostics import DiagnosticsCollector
from citeproc_crosswalk.domain.types import FieldId


def test_parse_single_field():
    mapping = parse_field_mapping("title", "dc.title")
    assert mapping.output_field == "title"
    assert mapping.source_field_ids == (FieldId.parse("dc.title"),)
    assert mapping.converter_name is None


def test_parse_alternatives_and_converter():
    mapping = parse_field_mapping("issued", "dc.date.issued,dc.date.accessioned(date)")
    assert [str(f) for f in mapping.source_field_ids] == ["dc.date.issued", "dc.date.accessioned"]
    assert mapping.converter_name == "date"
    assert mapping.primary_field_id == FieldId.parse("dc.date.issued")


@pytest.mark.parametrize(
    "value",
    [
        "dc.title (name)",
        "dc.title(name",
        "dc",
        "dc.title,",
        "dc.title,,dc.date",
        "dc.contributor.author.extra",
        "dc.title(na-me)",
        "dc.contributor.*",
        "",
    ],
)
def test_parse_malformed(value):
    assert parse_field_mapping("title", value) is None


def test_from_properties_keeps_order_and_ignores_other_keys():
    table = FieldMappingTable.from_properties({
        "converter.date": "date",
        "field.title": "dc.title",
        "field.issued": "dc.date.issued(date)",
        "field.container-title": "dc.relation.ispartof",
        "unrelated.key": "x",
    })
    assert [m.output_field for m in table] == ["title", "issued", "container-title"]


def test_malformed_mapping_skipped_with_diagnostic():
    diagnostics = DiagnosticsCollector()
    table = FieldMappingTable.from_properties(
        {"field.title": "dc.title", "field.author": "dc.contributor.author (name)"},
        diagnostics,
    )
    assert [m.output_field for m in table] == ["title"]
    assert diagnostics.codes() == ["malformed-field-mapping"]
    assert diagnostics.diagnostics[0].field == "field.author"


def test_invalid_output_field_name_ignored():
    table = FieldMappingTable.from_properties({"field.title2": "dc.title", "field.": "dc.title"})
    assert len(table) == 0


def test_id_mapping_rejected():
    diagnostics = DiagnosticsCollector()
    table = FieldMappingTable.from_properties({"field.id": "dc.identifier.uri"}, diagnostics)
    assert len(table) == 0
    assert diagnostics.codes() == ["reserved-field"]


def test_converter_resolved_by_first_source_field():
    table = FieldMappingTable.from_properties({
        "field.issued": "dc.date.issued(date)",
        "field.original-date": "dc.date.issued,dc.date.created",
    })
    issued, original = table.mappings
    assert original.converter_name is None
    assert table.converter_name_for(issued) == "date"
    assert table.converter_name_for(original) == "date"


def test_converter_resolution_last_configured_wins():
    table = FieldMappingTable.from_properties({
        "field.author": "dc.contributor.author(name)",
        "field.editor": "dc.contributor.author(otherName)",
    })
    author, editor = table.mappings
    assert table.converter_name_for(author) == "otherName"
    assert table.converter_name_for(editor) == "otherName"


def test_converter_not_shared_with_later_alternatives():
    table = FieldMappingTable.from_properties({
        "field.issued": "dc.date.issued(date)",
        "field.other": "dc.date.created,dc.date.issued",
    })
    assert table.converter_name_for(table.mappings[1]) is None
