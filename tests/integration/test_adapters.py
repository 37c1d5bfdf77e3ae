"""Integration tests for the record source, CSL resource loader and script renderer."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from citeproc_crosswalk.domain.errors import CitationGenerationError
from citeproc_crosswalk.domain.types import FieldId
from citeproc_crosswalk.infrastructure.adapters.csl_resources import CslResourceLoader
from citeproc_crosswalk.infrastructure.adapters.json_record_source import JsonRecordSource
from citeproc_crosswalk.infrastructure.adapters.script_renderer import ScriptCitationRenderer


@pytest.fixture
def resources(tmp_path: Path) -> CslResourceLoader:
    csl_dir = tmp_path / "csl"
    locale_dir = tmp_path / "locale"
    csl_dir.mkdir()
    locale_dir.mkdir()
    (csl_dir / "apa6.xml").write_text("<style>apa</style>")
    (csl_dir / "harvard.xml").write_text("<style>harvard</style>")
    (locale_dir / "locale-en-GB.xml").write_text("<locale>gb</locale>")
    (locale_dir / "locale-de-AT.xml").write_text("<locale>at</locale>")
    return CslResourceLoader(csl_dir, locale_dir)


class TestJsonRecordSource:
    """Tests for loading records from JSON files."""

    def test_load_field_mapping_layout(self, tmp_path: Path):
        path = tmp_path / "item-7.json"
        path.write_text(json.dumps({"dc.title": "T", "dc.contributor.author": ["Smith, Jane", "Lee, Kim"]}))

        record = JsonRecordSource().load(path)

        assert record.item_id == "item-7"
        assert record.values("dc.title") == ("T",)
        assert record.values("dc.contributor.author") == ("Smith, Jane", "Lee, Kim")

    def test_load_rest_metadata_layout(self, tmp_path: Path):
        path = tmp_path / "item.json"
        path.write_text(json.dumps({
            "uuid": "abc-123",
            "metadata": [
                {"key": "dc.contributor.author", "value": "Smith, Jane"},
                {"key": "dc.title", "value": "T"},
                {"key": "dc.contributor.author", "value": "Lee, Kim"},
                {"key": "dc.subject", "value": None},
            ],
        }))

        record = JsonRecordSource().load(path)

        assert record.item_id == "abc-123"
        assert record.values("dc.contributor.author") == ("Smith, Jane", "Lee, Kim")
        assert record.values("dc.subject") == ()

    def test_flat_layout_ignores_non_field_keys(self, tmp_path: Path):
        path = tmp_path / "item.json"
        path.write_text(json.dumps({"id": "123", "handle": "10289/1", "dc.title": ["T"]}))

        record = JsonRecordSource().load(path)

        assert list(record.fields) == [FieldId.parse("dc.title")]
        assert record.values("dc.title") == ("T",)

    def test_rest_layout_ignores_non_field_keys(self):
        record = JsonRecordSource().parse([{"key": "title", "value": "x"}, {"key": "dc.title", "value": "T"}])
        assert list(record.fields) == [FieldId.parse("dc.title")]

    def test_unsupported_layout(self):
        with pytest.raises(ValueError):
            JsonRecordSource().parse("just a string")
        with pytest.raises(ValueError):
            JsonRecordSource().parse([{"value": "no key"}])


class TestCslResourceLoader:
    """Tests for style and locale resolution."""

    def test_requested_style_and_locale(self, resources: CslResourceLoader):
        assert resources.style_path("harvard").read_text() == "<style>harvard</style>"
        assert resources.locale_path("de_AT").read_text() == "<locale>at</locale>"

    def test_fallback_to_defaults(self, resources: CslResourceLoader):
        assert resources.style_path("nonexistent").name == "apa6.xml"
        assert resources.locale_path("fr-FR").name == "locale-en-GB.xml"

    def test_missing_default_raises(self, tmp_path: Path):
        loader = CslResourceLoader(tmp_path / "none", tmp_path / "none")
        with pytest.raises(CitationGenerationError):
            loader.style_path("apa6")
        with pytest.raises(CitationGenerationError):
            loader.locale_path("en-GB")


class TestScriptCitationRenderer:
    """Tests for the subprocess-based renderer."""

    def _script(self, tmp_path: Path, body: str) -> list[str]:
        script = tmp_path / "render.py"
        script.write_text(body)
        return [sys.executable, str(script)]

    def test_render_passes_json_and_resource_paths(self, tmp_path: Path, resources: CslResourceLoader):
        command = self._script(
            tmp_path,
            "import json, sys, pathlib\n"
            "item = json.load(sys.stdin)\n"
            "style = pathlib.Path(sys.argv[1]).name\n"
            "locale = pathlib.Path(sys.argv[2]).name\n"
            "print(item['title'] + '|' + style + '|' + locale)\n",
        )
        renderer = ScriptCitationRenderer(command, resources)

        citation = renderer.render('{"id": "ITEM-1", "title": "T"}', "harvard", "en-GB")

        assert citation == "T|harvard.xml|locale-en-GB.xml"

    def test_non_zero_exit_raises(self, tmp_path: Path, resources: CslResourceLoader):
        command = self._script(tmp_path, "import sys\nsys.stderr.write('style broken')\nsys.exit(3)\n")
        renderer = ScriptCitationRenderer(command, resources)

        with pytest.raises(CitationGenerationError) as exc_info:
            renderer.render("{}", "apa6", "en-GB")
        assert "style broken" in str(exc_info.value)

    def test_missing_command_raises(self, tmp_path: Path, resources: CslResourceLoader):
        renderer = ScriptCitationRenderer([str(tmp_path / "no-such-renderer")], resources)
        with pytest.raises(CitationGenerationError):
            renderer.render("{}", "apa6", "en-GB")

    def test_timeout_raises(self, tmp_path: Path, resources: CslResourceLoader):
        command = self._script(tmp_path, "import time\ntime.sleep(5)\n")
        renderer = ScriptCitationRenderer(command, resources, timeout_s=0.5)
        with pytest.raises(CitationGenerationError):
            renderer.render("{}", "apa6", "en-GB")

    def test_empty_command_rejected(self, resources: CslResourceLoader):
        with pytest.raises(ValueError):
            ScriptCitationRenderer([], resources)
