"""Generate citations through the external renderer."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from ....application.dto.citation import CitationStatus, GenerateCitationRequest
from ....application.use_cases.generate_citation import generate_citation
from ...adapters.csl_resources import CslResourceLoader
from ...adapters.json_record_source import JsonRecordSource
from ...adapters.script_renderer import ScriptCitationRenderer
from .crosswalk import build_crosswalk, print_diagnostics

app = typer.Typer(help="Generate citations for items")
console = Console()
err_console = Console(stderr=True)


@app.command()
def run(
    record: Path = typer.Argument(..., help="Item metadata JSON file"),
    config_path: str = typer.Option(None, "--config", "-c", help="Path to citeproc.toml"),
    style: str = typer.Option(None, "--style", "-s", help="Citation style (defaults to [citation].style)"),
    locale: str = typer.Option(None, "--locale", "-l", help="Locale, e.g. en_GB or en-GB"),
    force: bool = typer.Option(False, "--force", help="Regenerate even if the item already has a citation"),
) -> None:
    """
    Generate a citation for an item with the configured renderer script.

    Examples:
        citeproc-crosswalk cite run item.json --style apa6 --locale en_GB
    """
    settings, crosswalk, diagnostics = build_crosswalk(config_path)
    citation_settings = settings.citation

    if not citation_settings.renderer_command:
        err_console.print("[red]Error: no renderer command configured[/red]")
        err_console.print("\n[yellow]Tip:[/yellow] Set [citation].renderer_command or CITEPROC_RENDERER")
        raise typer.Exit(1)

    try:
        metadata = JsonRecordSource().load(record)
    except (OSError, ValueError) as e:
        err_console.print(f"[red]Error reading record {record}: {e}[/red]")
        raise typer.Exit(1)

    renderer = ScriptCitationRenderer(
        command=citation_settings.renderer_command,
        resources=CslResourceLoader(citation_settings.styles_dir, citation_settings.locales_dir),
        timeout_s=citation_settings.renderer_timeout_s,
    )
    request = GenerateCitationRequest(
        target_field=citation_settings.target_field,
        style=style or citation_settings.style,
        locale=locale or citation_settings.locale,
        force=force or citation_settings.force,
    )

    result = generate_citation(request, metadata, crosswalk, renderer)
    print_diagnostics(diagnostics)

    if result.status == CitationStatus.SUCCESS:
        typer.echo(result.citation)
        return
    if result.status == CitationStatus.SKIP:
        err_console.print(f"[yellow]{result.message}[/yellow]")
        return
    err_console.print(f"[red]{result.message}[/red]")
    raise typer.Exit(1)
