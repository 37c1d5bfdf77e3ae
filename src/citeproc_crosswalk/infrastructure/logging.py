"""Structured logging setup with run ID support."""

import logging
import sys
import uuid
from contextvars import ContextVar

# Context variable for the current crosswalk run
run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)


def get_run_id() -> str:
    """
    Get current run ID or generate a new one.

    Returns:
        Run ID string (UUID)
    """
    run_id = run_id_var.get()
    if run_id is None:
        run_id = str(uuid.uuid4())
        run_id_var.set(run_id)
    return run_id


def set_run_id(run_id: str) -> None:
    run_id_var.set(run_id)


class RunContextFilter(logging.Filter):
    """Adds run_id, and a placeholder diagnostic_code, to every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.run_id = get_run_id()  # type: ignore[attr-defined]
        if not hasattr(record, "diagnostic_code"):
            record.diagnostic_code = "-"  # type: ignore[attr-defined]
        return True


def configure_logging(level: int = logging.INFO, verbose: bool = False) -> None:
    """
    Configure structured logging on stderr, keeping stdout free for JSON output.

    Args:
        level: Logging level (default: INFO)
        verbose: If True, log at DEBUG regardless of level (converter decisions, registrations)
    """
    handler = logging.StreamHandler(sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s %(levelname)s %(name)s run_id=%(run_id)s code=%(diagnostic_code)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
    handler.setFormatter(formatter)
    handler.addFilter(RunContextFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else level)
