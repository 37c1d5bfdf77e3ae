from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ...domain.errors import InvalidTargetField
from ...domain.models.metadata_record import MetadataRecord
from ...domain.types import FieldId

logger = logging.getLogger(__name__)


class JsonRecordSource:
    """
    Loads item metadata exported as JSON.

    Two layouts are accepted:
    - an object mapping field identifiers to a value or list of values:
      {"dc.title": ["..."], "dc.contributor.author": ["Smith, Jane", ...]}
    - a DSpace REST style list of {"key": ..., "value": ...} entries, optionally
      wrapped as {"id"/"uuid": ..., "metadata": [...]}
    """

    def load(self, path: Path | str) -> MetadataRecord:
        """
        Load a record from a JSON file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the JSON does not have a supported layout
        """
        path = Path(path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        record = self.parse(data, default_item_id=path.stem)
        logger.debug(
            f"Loaded record with {len(record.fields)} fields from {path}",
            extra={"path": str(path), "item_id": record.item_id},
        )
        return record

    def parse(self, data: Any, default_item_id: str | None = None) -> MetadataRecord:
        item_id = default_item_id
        if isinstance(data, dict) and "metadata" in data:
            item_id = str(data.get("uuid") or data.get("id") or default_item_id)
            data = data["metadata"]

        if isinstance(data, list):
            fields: dict[str, list[str]] = {}
            for entry in data:
                if not isinstance(entry, dict) or "key" not in entry:
                    raise ValueError(f"Unsupported metadata entry: {entry!r}")
                key = str(entry["key"])
                if not self._is_field_key(key):
                    continue
                value = entry.get("value")
                values = fields.setdefault(key, [])
                if value is not None:
                    values.append(str(value))
            return MetadataRecord.from_mapping(fields, item_id=item_id)

        if isinstance(data, dict):
            # Item exports carry bookkeeping keys ('id', 'handle', ...) beside the fields
            fields_only = {key: value for key, value in data.items() if self._is_field_key(str(key))}
            return MetadataRecord.from_mapping(fields_only, item_id=item_id)

        raise ValueError(f"Unsupported record layout: expected object or list, got {type(data).__name__}")

    def _is_field_key(self, key: str) -> bool:
        try:
            FieldId.parse(key)
        except InvalidTargetField:
            logger.debug(f"Ignoring non-field key '{key}'", extra={"key": key})
            return False
        return True
