"""Run and inspect the CSL-JSON crosswalk."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ....application.services.crosswalk import CiteprocCrosswalk
from ....domain.models.diagnostics import DiagnosticsCollector
from ...adapters.json_record_source import JsonRecordSource
from ...config.settings import Settings

app = typer.Typer(help="Convert item metadata to CSL-JSON")
console = Console()
err_console = Console(stderr=True)


def build_crosswalk(config_path: str | None) -> tuple[Settings, CiteprocCrosswalk, DiagnosticsCollector]:
    try:
        settings = Settings.from_toml(config_path)
    except Exception as e:
        err_console.print(f"[red]Error loading configuration: {e}[/red]")
        raise typer.Exit(1)
    diagnostics = DiagnosticsCollector(log=False)
    crosswalk = CiteprocCrosswalk.from_properties(settings.to_properties(), diagnostics)
    if not crosswalk.mapping_table.mappings:
        err_console.print("[yellow]Warning: no field mappings configured[/yellow]")
    return settings, crosswalk, diagnostics


def print_diagnostics(diagnostics: DiagnosticsCollector) -> None:
    for diagnostic in diagnostics.diagnostics:
        err_console.print(f"[yellow]{diagnostic.code}[/yellow] {diagnostic.message}")


@app.command()
def run(
    record: Path = typer.Argument(..., help="Item metadata JSON file"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to citeproc.toml (defaults to CITEPROC_CONFIG or citeproc.toml)"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON output"),
) -> None:
    """
    Print the CSL-JSON document for an item.

    Examples:
        citeproc-crosswalk crosswalk run item.json
        citeproc-crosswalk crosswalk run item.json --config uow.toml --pretty
    """
    _, crosswalk, diagnostics = build_crosswalk(config_path)

    try:
        metadata = JsonRecordSource().load(record)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error reading record {record}: {e}[/red]")
        raise typer.Exit(1)

    output = crosswalk.to_json(metadata, indent=2 if pretty else None)
    print_diagnostics(diagnostics)
    typer.echo(output)


@app.command()
def inspect(
    config_path: str = typer.Option(None, "--config", "-c", help="Path to citeproc.toml"),
) -> None:
    """
    Show configured converters and field mappings.

    Displays each output field with its source alternatives and the converter
    resolved for its first source field.
    """
    _, crosswalk, diagnostics = build_crosswalk(config_path)

    converters_table = Table(title="Converters", show_header=True, header_style="bold magenta")
    converters_table.add_column("Name", style="cyan")
    converters_table.add_column("Kind", style="white")
    converters_table.add_column("Reads", style="white")
    for name, converter in crosswalk.registry.items():
        reads = ", ".join(str(f) for f in converter.auxiliary_fields) or "-"
        converters_table.add_row(name, converter.kind.value, reads)
    console.print(converters_table)

    mappings_table = Table(title="Field Mappings", show_header=True, header_style="bold magenta")
    mappings_table.add_column("Output Field", style="cyan")
    mappings_table.add_column("Sources", style="white")
    mappings_table.add_column("Converter", style="green")
    for mapping in crosswalk.mapping_table:
        name = crosswalk.mapping_table.converter_name_for(mapping)
        if name is None:
            converter_label = "[dim]raw copy[/dim]"
        elif name in crosswalk.registry:
            converter_label = name
        else:
            converter_label = f"[red]{name} (missing)[/red]"
        mappings_table.add_row(
            mapping.output_field,
            ", ".join(str(f) for f in mapping.source_field_ids),
            converter_label,
        )
    console.print(mappings_table)
    print_diagnostics(diagnostics)
