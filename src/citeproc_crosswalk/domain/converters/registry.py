"""Converter registry built from 'converter.<name> = <implementation>' configuration."""

from __future__ import annotations

import logging
import re
from types import MappingProxyType
from typing import Iterator, Mapping

from ..errors import UnknownConverter
from ..models.diagnostics import Diagnostic, DiagnosticsObserver, LoggingDiagnostics
from .base import Converter, ConverterKind
from .dates import DateConverter
from .names import NameConverter
from .pages import OtagoPagesConverter, UoWPagesConverter
from .publication_types import OtagoTypeConverter, UoWTypeConverter

logger = logging.getLogger(__name__)

CONVERTER_KEY_PATTERN = re.compile(r"^converter\.(\w+)$")

CONVERTER_CLASSES: Mapping[ConverterKind, type[Converter]] = MappingProxyType({
    ConverterKind.DATE: DateConverter,
    ConverterKind.NAME: NameConverter,
    ConverterKind.UOW_PAGES: UoWPagesConverter,
    ConverterKind.OTAGO_PAGES: OtagoPagesConverter,
    ConverterKind.UOW_TYPE: UoWTypeConverter,
    ConverterKind.OTAGO_TYPE: OtagoTypeConverter,
})

# Fully qualified class names used by existing DSpace citeproc.cfg files
_LEGACY_PACKAGE = "nz.ac.lconz.irr.crosswalk.citeproc."
LEGACY_IMPLEMENTATIONS: Mapping[str, ConverterKind] = MappingProxyType({
    _LEGACY_PACKAGE + "DateConverter": ConverterKind.DATE,
    _LEGACY_PACKAGE + "NameConverter": ConverterKind.NAME,
    _LEGACY_PACKAGE + "UoWPagesConverter": ConverterKind.UOW_PAGES,
    _LEGACY_PACKAGE + "OtagoPagesConverter": ConverterKind.OTAGO_PAGES,
    _LEGACY_PACKAGE + "UoWTypesConverter": ConverterKind.UOW_TYPE,
    _LEGACY_PACKAGE + "OtagoTypeConverter": ConverterKind.OTAGO_TYPE,
})


def resolve_kind(implementation: str) -> ConverterKind | None:
    """Map an implementation identifier (kind value or legacy class name) to a ConverterKind."""
    identifier = implementation.strip()
    try:
        return ConverterKind(identifier.lower())
    except ValueError:
        return LEGACY_IMPLEMENTATIONS.get(identifier)


class ConverterRegistry:
    """
    Immutable mapping from converter name to converter instance.

    Names whose implementation cannot be resolved or constructed are logged and
    left out; mappings referring to them fall back to copying raw values.
    """

    def __init__(self, converters: Mapping[str, Converter] | None = None) -> None:
        self._converters: Mapping[str, Converter] = MappingProxyType(dict(converters or {}))

    @classmethod
    def from_properties(
        cls,
        properties: Mapping[str, str],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> ConverterRegistry:
        """
        Build the registry from 'converter.<name>' entries; other keys are ignored.

        Args:
            properties: Flat configuration mapping
            diagnostics: Observer receiving configuration warnings
        """
        observer = diagnostics if diagnostics is not None else LoggingDiagnostics(logger, logging.ERROR)
        converters: dict[str, Converter] = {}
        for key, implementation in properties.items():
            match = CONVERTER_KEY_PATTERN.match(str(key))
            if not match:
                continue
            name = match.group(1)
            kind = resolve_kind(str(implementation))
            if kind is None:
                error = UnknownConverter(name=name, implementation=str(implementation))
                observer.emit(Diagnostic(
                    code="unknown-converter",
                    message=str(error),
                    field=str(key),
                    details={"converter": name, "implementation": str(implementation)},
                ))
                continue
            try:
                converters[name] = CONVERTER_CLASSES[kind]()
            except Exception as e:
                observer.emit(Diagnostic(
                    code="converter-construction-failed",
                    message=f"Can't instantiate converter '{name}' ({kind.value}): {e}",
                    field=str(key),
                    details={"converter": name, "implementation": kind.value, "error": str(e)},
                ))
                continue
            logger.debug(
                f"Registered converter '{name}' as {kind.value}",
                extra={"converter": name, "implementation": kind.value},
            )
        return cls(converters)

    def get(self, name: str) -> Converter | None:
        return self._converters.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._converters

    def __iter__(self) -> Iterator[str]:
        return iter(self._converters)

    def __len__(self) -> int:
        return len(self._converters)

    def items(self):
        return self._converters.items()
