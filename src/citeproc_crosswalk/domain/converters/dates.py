from __future__ import annotations

import re
from typing import Sequence

from ..models.csl_document import CslDocument
from ..models.diagnostics import DiagnosticsObserver
from ..models.metadata_record import MetadataRecord
from .base import Converter, ConverterKind, first_non_blank

_DATE_PATTERN = re.compile(r"^\s*(\d{1,4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?(?:[T ].*)?\s*$")


def parse_date_parts(value: str) -> list[int] | None:
    """
    Decompose a partial ISO date into CSL date parts.

    '2002' -> [2002], '2002-05' -> [2002, 5], '2002-05-17' -> [2002, 5, 17].
    A month of 0 drops month and day; a day of 0 drops the day. No calendar
    validation beyond that. Returns None when no year can be read.
    """
    match = _DATE_PATTERN.match(value)
    if match:
        year_str, month_str, day_str = match.groups()
    else:
        # Keep whatever leading components are numeric ('2002-xx' -> [2002])
        pieces = value.strip().split("T", 1)[0].split("-")
        year_str = pieces[0] if pieces and pieces[0].isdecimal() else None
        month_str = pieces[1] if len(pieces) > 1 and pieces[1].isdecimal() else None
        day_str = pieces[2] if month_str and len(pieces) > 2 and pieces[2].isdecimal() else None
        if year_str is None:
            return None

    parts = [int(year_str)]
    month = int(month_str) if month_str else 0
    if 0 < month:
        parts.append(month)
        day = int(day_str) if day_str else 0
        if day > 0:
            parts.append(day)
    return parts


class DateConverter(Converter):
    """Converts a (partial) date into {'date-parts': [[year, month?, day?]]}."""

    kind = ConverterKind.DATE

    def insert_value(
        self,
        document: CslDocument,
        field: str,
        record: MetadataRecord,
        values: Sequence[str | None],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> None:
        raw = first_non_blank(values)
        if raw is None:
            return
        parts = parse_date_parts(raw)
        if parts is None:
            self._warn(
                diagnostics,
                "unparseable-date",
                f"Date '{raw}' for field {field} has no readable year, not writing a date",
                field,
                value=raw,
            )
            return
        document.put(field, {"date-parts": [parts]})
