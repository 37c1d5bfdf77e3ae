"""
Publication type classification.

Maps a free-text repository type ('Journal Article', 'Working Paper', 'Thesis', ...)
onto the CSL type vocabulary through an ordered decision table, and derives
auxiliary fields (genre, URL) from other metadata on the same record.

Every value of a repeated type field is classified in turn, so later values
overwrite the type and whichever auxiliary fields they set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence, Union

from ..models.csl_document import CslDocument
from ..models.diagnostics import DiagnosticsObserver
from ..models.metadata_record import MetadataRecord
from ..types import FieldId
from .base import Converter, ConverterKind

logger = logging.getLogger(__name__)

SERIES_FIELD = FieldId.parse("dc.relation.ispartofseries")
URI_FIELD = FieldId.parse("dc.identifier.uri")
DEGREE_NAME_FIELD = FieldId.parse("thesis.degree.name")
PART_OF_FIELD = FieldId.parse("dc.relation.isPartOf")

# (raw value, lower-cased value, record) -> auxiliary CSL fields
Derivation = Callable[[str, str, MetadataRecord], dict[str, str]]
CslTypeResolver = Union[str, Callable[[MetadataRecord], str]]


def genre_from_series(raw: str, lowered: str, record: MetadataRecord) -> dict[str, str]:
    series = record.first(SERIES_FIELD)
    return {"genre": series if series is not None else raw}


def url_from_uri(raw: str, lowered: str, record: MetadataRecord) -> dict[str, str]:
    uri = record.first(URI_FIELD)
    return {"URL": uri} if uri is not None else {}


def genre_with_degree(raw: str, lowered: str, record: MetadataRecord) -> dict[str, str]:
    degree = record.first(DEGREE_NAME_FIELD)
    return {"genre": f"{raw}, {degree}" if degree is not None else raw}


def genre_from_type(raw: str, lowered: str, record: MetadataRecord) -> dict[str, str]:
    return {"genre": lowered}


def chapter_if_part_of(record: MetadataRecord) -> str:
    """Conference items published in proceedings are cited as chapters."""
    return "chapter" if record.has_value(PART_OF_FIELD) else "paper-conference"


@dataclass(frozen=True)
class TypeRule:
    """
    One row of the decision table.

    Fields:
        label: Short description of the pattern (used in logs)
        matches: Predicate over the lower-cased type value
        csl_type: CSL type, or a function of the record choosing it
        derivations: Auxiliary field derivations applied when the rule matches
    """

    label: str
    matches: Callable[[str], bool]
    csl_type: CslTypeResolver
    derivations: tuple[Derivation, ...] = ()

    def resolve_type(self, record: MetadataRecord) -> str:
        if callable(self.csl_type):
            return self.csl_type(record)
        return self.csl_type


def _is_report(value: str) -> bool:
    return "report" in value or value == "working paper" or value == "discussion paper"


def _is_thesis(value: str) -> bool:
    return value == "thesis" or value == "dissertation"


REPORT_RULE = TypeRule("report", _is_report, "report", (genre_from_series, url_from_uri))
JOURNAL_ARTICLE_RULE = TypeRule("journal article", lambda v: v == "journal article", "article-journal")
CHAPTER_RULE = TypeRule("chapter", lambda v: "chapter" in v, "chapter")
MUSICAL_SCORE_RULE = TypeRule("musical score", lambda v: "musical score" in v, "musical_score")
WEBSITE_RULE = TypeRule("website", lambda v: v == "website", "webpage")


class TypeConverter(Converter):
    """Classifies every value of the type field with the variant's decision table."""

    rules: tuple[TypeRule, ...] = ()
    fallback: TypeRule

    def insert_value(
        self,
        document: CslDocument,
        field: str,
        record: MetadataRecord,
        values: Sequence[str | None],
        diagnostics: DiagnosticsObserver | None = None,
    ) -> None:
        for raw in values:
            if raw is None or not raw.strip():
                continue
            lowered = raw.lower()
            rule = self.match(lowered)
            document.put(field, rule.resolve_type(record))
            for derive in rule.derivations:
                for aux_field, aux_value in derive(raw, lowered, record).items():
                    document.put(aux_field, aux_value)
            logger.debug(
                f"Type '{raw}' classified as {rule.label}",
                extra={"converter": self.kind.value, "rule": rule.label},
            )

    def match(self, lowered: str) -> TypeRule:
        for rule in self.rules:
            if rule.matches(lowered):
                return rule
        return self.fallback


class UoWTypeConverter(TypeConverter):
    """University of Waikato publication types."""

    kind = ConverterKind.UOW_TYPE
    auxiliary_fields = (SERIES_FIELD, URI_FIELD, DEGREE_NAME_FIELD, PART_OF_FIELD)
    rules = (
        REPORT_RULE,
        TypeRule("thesis", _is_thesis, "thesis", (genre_with_degree, url_from_uri)),
        JOURNAL_ARTICLE_RULE,
        TypeRule(
            "conference",
            lambda v: "conference" in v or v == "oral presentation",
            chapter_if_part_of,
        ),
        CHAPTER_RULE,
        TypeRule(
            "book",
            lambda v: "book" in v or v == "scholarly edition" or v == "monograph",
            "book",
        ),
        MUSICAL_SCORE_RULE,
        WEBSITE_RULE,
    )
    fallback = TypeRule("other", lambda v: True, "article", (genre_from_type,))


class OtagoTypeConverter(TypeConverter):
    """University of Otago publication types."""

    kind = ConverterKind.OTAGO_TYPE
    auxiliary_fields = (SERIES_FIELD, URI_FIELD, DEGREE_NAME_FIELD)
    rules = (
        REPORT_RULE,
        TypeRule("thesis", _is_thesis, "thesis", (genre_with_degree,)),
        JOURNAL_ARTICLE_RULE,
        TypeRule(
            "conference paper",
            lambda v: "conference" in v and "paper" in v,
            "paper-conference",
        ),
        TypeRule("book", lambda v: v == "book", "book", (url_from_uri,)),
        CHAPTER_RULE,
        MUSICAL_SCORE_RULE,
        WEBSITE_RULE,
    )
    fallback = TypeRule("other", lambda v: True, "article")
