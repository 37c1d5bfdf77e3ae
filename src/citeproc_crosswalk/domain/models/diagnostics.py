"""Diagnostics emitted while building converters, mappings and documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field as dataclass_field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class Diagnostic:
    """
    One warning raised by the crosswalk.

    Fields:
        code: Stable machine-readable code (e.g., 'unsplit-name', 'missing-converter')
        message: Human-readable message
        field: Output field or configuration key concerned (optional)
        details: Extra context (source field, offending value, ...)
    """

    code: str
    message: str
    field: str | None = None
    details: dict[str, Any] = dataclass_field(default_factory=dict)


@runtime_checkable
class DiagnosticsObserver(Protocol):
    """Receives diagnostics as they are emitted."""

    def emit(self, diagnostic: Diagnostic) -> None:
        ...


class LoggingDiagnostics:
    """
    Observer that only logs diagnostics.

    Default for long-lived objects built without an injected observer; it keeps
    no history, so repeated transforms do not accumulate state.
    """

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self._logger = logger or logging.getLogger(__name__)
        self._level = level

    def emit(self, diagnostic: Diagnostic) -> None:
        self._logger.log(
            self._level,
            diagnostic.message,
            extra={"diagnostic_code": diagnostic.code, "field": diagnostic.field, **diagnostic.details},
        )


class DiagnosticsCollector(LoggingDiagnostics):
    """
    Observer that keeps every diagnostic and, unless log=False, mirrors it to a logger.

    Tests and the CLI inject their own collector and read `diagnostics` instead of
    capturing process-wide log state.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.WARNING,
        log: bool = True,
    ) -> None:
        super().__init__(logger, level)
        self._log = log
        self.diagnostics: list[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if self._log:
            super().emit(diagnostic)

    def warn(self, code: str, message: str, field: str | None = None, **details: Any) -> None:
        self.emit(Diagnostic(code=code, message=message, field=field, details=details))

    def codes(self) -> list[str]:
        return [d.code for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()
