from __future__ import annotations

from typing import Sequence

from ..models.csl_document import CslDocument
from ..models.diagnostics import DiagnosticsObserver
from ..models.metadata_record import MetadataRecord
from ..types import FieldId
from .base import Converter, ConverterKind

UOW_END_PAGE_FIELD = FieldId.parse("pubs.end-page")
OTAGO_END_PAGE_FIELD = FieldId.parse("otago.bitstream.endpage")


class PagesConverter(Converter):
    """
    Reconciles a start page with an institution-specific end page field.

    A start value that already contains '-' is used verbatim as the range;
    otherwise the end page, when present, is appended as 'start-end'.
    """

    end_page_field: FieldId

    def __init__(self) -> None:
        self.auxiliary_fields = (self.end_page_field,)

    def insert_value(
        self,
        document: CslDocument,
        field: str,
        record: MetadataRecord,
        values: Sequence[str | None],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> None:
        if not values or values[0] is None or not values[0].strip():
            return
        start = values[0]
        if "-" in start:
            document.put(field, start)
            return

        end = record.first(self.end_page_field)
        if end is None:
            self._warn(
                diagnostics,
                "missing-end-page",
                f"No end page in {self.end_page_field} for start page {start}, writing start page only",
                field,
                value=start,
                source_field=str(self.end_page_field),
            )
            document.put(field, start)
            return
        document.put(field, f"{start}-{end}")


class UoWPagesConverter(PagesConverter):
    """University of Waikato: end page recorded in pubs.end-page."""

    kind = ConverterKind.UOW_PAGES
    end_page_field = UOW_END_PAGE_FIELD


class OtagoPagesConverter(PagesConverter):
    """University of Otago: end page recorded in otago.bitstream.endpage."""

    kind = ConverterKind.OTAGO_PAGES
    end_page_field = OTAGO_END_PAGE_FIELD
