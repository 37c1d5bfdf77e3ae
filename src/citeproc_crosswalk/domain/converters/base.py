"""Converter abstraction: per-field transformation of metadata values into CSL-JSON."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Sequence

from ..models.csl_document import CslDocument
from ..models.diagnostics import Diagnostic, DiagnosticsObserver, LoggingDiagnostics
from ..models.metadata_record import MetadataRecord
from ..types import FieldId


class ConverterKind(str, Enum):
    """Closed set of converter implementations that configuration can name."""

    DATE = "date"
    NAME = "name"
    UOW_PAGES = "uow-pages"
    OTAGO_PAGES = "otago-pages"
    UOW_TYPE = "uow-type"
    OTAGO_TYPE = "otago-type"


class Converter(ABC):
    """
    Transforms the values of one source field into one or more CSL fields.

    A converter may read any field of the record besides `values`; the fields it
    reads are listed in `auxiliary_fields`. Converters never raise for unusable
    data: they write nothing and report a diagnostic instead.
    """

    kind: ConverterKind
    auxiliary_fields: tuple[FieldId, ...] = ()

    @abstractmethod
    def insert_value(
        self,
        document: CslDocument,
        field: str,
        record: MetadataRecord,
        values: Sequence[str | None],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> None:
        """
        Write the converted value(s) for `field` into `document`.

        Args:
            document: Output document (mutated)
            field: Output field name from the mapping
            record: Full metadata record, for auxiliary lookups
            values: Every value of the resolved source field, in source order
            diagnostics: Observer receiving warnings (defaults to a logging collector)
        """

    def _warn(
        self,
        diagnostics: DiagnosticsObserver | None,
        code: str,
        message: str,
        field: str,
        **details: Any,
    ) -> None:
        observer = diagnostics if diagnostics is not None else LoggingDiagnostics()
        details.setdefault("converter", self.kind.value)
        observer.emit(Diagnostic(code=code, message=message, field=field, details=details))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def first_non_blank(values: Sequence[str | None]) -> str | None:
    for value in values:
        if value is not None and value.strip():
            return value
    return None
