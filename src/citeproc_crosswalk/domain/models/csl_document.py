"""CSL-JSON output document built for one item."""

from __future__ import annotations

import json
from typing import Any, Iterator, Mapping, Union

PLACEHOLDER_ID = "ITEM-1"
MIME_TYPE = "application/json"

CslName = dict[str, str]
CslDate = dict[str, list[list[int]]]
CslValue = Union[str, CslDate, list[CslName]]


class CslDocument(Mapping[str, CslValue]):
    """
    Ordered CSL-JSON document.

    The renderer expects a fixed item identifier, so 'id' is always present and
    always first. Converters write fields with put(); a later put() to the same
    field replaces the earlier value but keeps its position.
    """

    def __init__(self) -> None:
        self._fields: dict[str, CslValue] = {"id": PLACEHOLDER_ID}

    def put(self, field: str, value: CslValue) -> None:
        if field == "id":
            raise ValueError("'id' is fixed to the placeholder expected by the renderer")
        self._fields[field] = value

    def __getitem__(self, key: str) -> CslValue:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def to_dict(self) -> dict[str, Any]:
        return json.loads(self.to_json())

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self._fields, ensure_ascii=False, indent=indent)

    def __repr__(self) -> str:
        return f"CslDocument({self._fields!r})"
