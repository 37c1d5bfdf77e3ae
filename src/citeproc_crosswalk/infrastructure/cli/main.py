import logging

import typer

from ..logging import configure_logging
from .commands import (
    cite as cite_cmd,
    crosswalk as crosswalk_cmd,
)

app = typer.Typer(help="Citeproc crosswalk CLI")

app.add_typer(crosswalk_cmd.app, name="crosswalk")
app.add_typer(cite_cmd.app, name="cite")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log converter decisions at DEBUG level"),
) -> None:
    """Convert repository item metadata to CSL-JSON and generate citations."""
    configure_logging(level=logging.WARNING, verbose=verbose)


if __name__ == "__main__":
    app()
