"""CLI tests for the crosswalk and cite commands."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from citeproc_crosswalk.infrastructure.cli.main import app

CONFIG = """
[converter]
date = "date"
name = "name"
pages = "otago-pages"
type = "otago-type"
broken = "com.example.Broken"

[field]
type = "dc.type(type)"
title = "dc.title"
author = "dc.contributor.author(name)"
issued = "dc.date.issued(date)"
page = "dc.format.pages(pages)"
"""

RECORD = {
    "dc.type": ["Journal Article"],
    "dc.title": ["On Crosswalks"],
    "dc.contributor.author": ["Smith, Jane"],
    "dc.date.issued": ["2002-05-17"],
    "dc.format.pages": ["45-50"],
}

RENDER_SCRIPT = """
import json, sys
item = json.load(sys.stdin)
print(item["author"][0]["family"] + " (" + str(item["issued"]["date-parts"][0][0]) + "). " + item["title"] + ".")
"""


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.delenv("CITEPROC_RENDERER", raising=False)
    monkeypatch.delenv("CITEPROC_FORCE", raising=False)
    monkeypatch.delenv("CITEPROC_CONFIG", raising=False)
    (tmp_path / "citeproc.toml").write_text(CONFIG)
    (tmp_path / "item.json").write_text(json.dumps(RECORD))
    return tmp_path


def _last_line(output: str) -> str:
    return output.strip().splitlines()[-1]


def test_crosswalk_run_prints_json(workspace: Path):
    runner = CliRunner()
    result = runner.invoke(app, [
        "crosswalk", "run", str(workspace / "item.json"), "--config", str(workspace / "citeproc.toml"),
    ])
    assert result.exit_code == 0, result.output
    assert json.loads(_last_line(result.stdout)) == {
        "id": "ITEM-1",
        "type": "article-journal",
        "title": "On Crosswalks",
        "author": [{"family": "Smith", "given": "Jane"}],
        "issued": {"date-parts": [[2002, 5, 17]]},
        "page": "45-50",
    }


def test_crosswalk_run_missing_record(workspace: Path):
    runner = CliRunner()
    result = runner.invoke(app, [
        "crosswalk", "run", str(workspace / "nope.json"), "--config", str(workspace / "citeproc.toml"),
    ])
    assert result.exit_code == 1


def test_crosswalk_inspect_lists_mappings(workspace: Path):
    runner = CliRunner()
    result = runner.invoke(app, ["crosswalk", "inspect", "--config", str(workspace / "citeproc.toml")])
    assert result.exit_code == 0, result.output
    assert "dc.contributor.author" in result.output
    assert "unknown-converter" in result.output


def test_cite_run_with_script_renderer(workspace: Path):
    csl_dir = workspace / "csl"
    locale_dir = workspace / "locale"
    csl_dir.mkdir()
    locale_dir.mkdir()
    (csl_dir / "apa6.xml").write_text("<style/>")
    (locale_dir / "locale-en-GB.xml").write_text("<locale/>")
    script = workspace / "render.py"
    script.write_text(RENDER_SCRIPT)
    config = workspace / "cite.toml"
    config.write_text(
        CONFIG
        + "\n[citation]\n"
        + f"styles_dir = {json.dumps(str(csl_dir))}\n"
        + f"locales_dir = {json.dumps(str(locale_dir))}\n"
        + f"renderer_command = {json.dumps([sys.executable, str(script)])}\n"
    )

    runner = CliRunner()
    result = runner.invoke(app, ["cite", "run", str(workspace / "item.json"), "--config", str(config), "--locale", "en_GB"])

    assert result.exit_code == 0, result.output
    assert _last_line(result.stdout) == "Smith (2002). On Crosswalks."


def test_cite_run_without_renderer(workspace: Path):
    runner = CliRunner()
    result = runner.invoke(app, ["cite", "run", str(workspace / "item.json"), "--config", str(workspace / "citeproc.toml")])
    assert result.exit_code == 1


def test_crosswalk_run_record_with_id_key(workspace: Path):
    (workspace / "item.json").write_text(json.dumps({"id": "123", **RECORD}))
    runner = CliRunner()
    result = runner.invoke(app, [
        "crosswalk", "run", str(workspace / "item.json"), "--config", str(workspace / "citeproc.toml"),
    ])
    assert result.exit_code == 0, result.output
    assert json.loads(_last_line(result.stdout))["id"] == "ITEM-1"


def test_diagnostics_printed_once(workspace: Path):
    runner = CliRunner()
    result = runner.invoke(app, ["crosswalk", "inspect", "--config", str(workspace / "citeproc.toml")])
    assert result.exit_code == 0, result.output
    assert result.output.count("Can't find converter") == 1
