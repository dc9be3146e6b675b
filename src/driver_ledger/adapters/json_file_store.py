"""JSON file implementation of the key-value store."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from driver_ledger.services.records import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Keeps every key in one JSON document on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value for a key."""
        value = self._read().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise RuntimeError(f"Stored value for {key} is not a string")
        return value

    def set(self, key: str, value: str) -> None:
        """Write a value and flush the whole document."""
        document = self._read()
        document[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
        _logger.debug("Wrote %s to %s", key, self.path)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        document = json.loads(self.path.read_text(encoding="utf-8"))
        if not isinstance(document, dict):
            raise RuntimeError(f"Storage file {self.path} is not a JSON object")
        return document
