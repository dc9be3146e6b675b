"""In-memory key-value store for ephemeral sessions and tests."""

from dataclasses import dataclass, field

from driver_ledger.services.records import KeyValueStore


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """Key-value store that lives only as long as the process."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
