from __future__ import annotations

from typing import Sequence

from ..models.csl_document import CslDocument, CslName
from ..models.diagnostics import DiagnosticsObserver
from ..models.metadata_record import MetadataRecord
from .base import Converter, ConverterKind

NAME_SEPARATOR = ", "


class NameConverter(Converter):
    """
    Converts 'Family, Given' personal names into CSL name objects.

    Values without the separator are kept whole as the family name; single-token
    names are not split any further.
    """

    kind = ConverterKind.NAME

    def insert_value(
        self,
        document: CslDocument,
        field: str,
        record: MetadataRecord,
        values: Sequence[str | None],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> None:
        names: list[CslName] = []
        for value in values:
            if value is None or not value.strip():
                continue
            family, separator, given = value.partition(NAME_SEPARATOR)
            if not separator:
                self._warn(
                    diagnostics,
                    "unsplit-name",
                    f'Name {value} not in format "lastname, firstname", '
                    f"falling back to using whole name as lastname",
                    field,
                    value=value,
                )
            name: CslName = {"family": family}
            if given:
                name["given"] = given
            names.append(name)

        if names:
            document.put(field, names)
