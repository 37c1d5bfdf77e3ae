from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import InvalidTargetField

ANY_QUALIFIER = "*"

_FIELD_ID_PATTERN = re.compile(r"^([A-Za-z0-9]+)\.([A-Za-z0-9\-]+)(?:\.([A-Za-z0-9\-]+|\*))?$")


@dataclass(frozen=True)
class FieldId:
    """A metadata field identifier: schema.element[.qualifier]."""

    schema: str
    element: str
    qualifier: str | None = None

    @classmethod
    def parse(cls, value: str) -> FieldId:
        """
        Parse 'schema.element[.qualifier]'.

        Raises:
            InvalidTargetField: If value does not have two or three dot-separated parts
        """
        match = _FIELD_ID_PATTERN.match(value.strip())
        if not match:
            raise InvalidTargetField(value)
        return cls(schema=match.group(1), element=match.group(2), qualifier=match.group(3))

    @property
    def is_wildcard(self) -> bool:
        return self.qualifier == ANY_QUALIFIER

    def matches(self, other: FieldId) -> bool:
        """True if other is this field, or one of its qualifiers when this is a wildcard."""
        if self.schema != other.schema or self.element != other.element:
            return False
        return self.is_wildcard or self.qualifier == other.qualifier

    def __str__(self) -> str:
        if self.qualifier is None:
            return f"{self.schema}.{self.element}"
        return f"{self.schema}.{self.element}.{self.qualifier}"
