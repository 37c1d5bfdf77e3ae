"""Converters from repository metadata values to CSL-JSON fields."""

from .base import Converter, ConverterKind
from .dates import DateConverter
from .names import NameConverter
from .pages import OtagoPagesConverter, PagesConverter, UoWPagesConverter
from .publication_types import OtagoTypeConverter, TypeConverter, UoWTypeConverter
from .registry import ConverterRegistry, resolve_kind

__all__ = [
    "Converter",
    "ConverterKind",
    "ConverterRegistry",
    "DateConverter",
    "NameConverter",
    "OtagoPagesConverter",
    "OtagoTypeConverter",
    "PagesConverter",
    "TypeConverter",
    "UoWPagesConverter",
    "UoWTypeConverter",
    "resolve_kind",
]
