"""Ordered record storage with write-through persistence."""

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID, uuid4

from driver_ledger.domain.records import DailyRecord, FuelType, RecordFields

RECORDS_KEY = "driver-records"

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Persistence interface for serialized blobs."""

    def get(self, key: str) -> str | None:
        """Return the stored value for a key, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value, replacing anything under the same key."""


@dataclass
class RecordStore:
    """Records kept newest first and saved on every change."""

    store: KeyValueStore
    key: str = RECORDS_KEY
    _records: list[DailyRecord] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.load()

    def load(self) -> list[DailyRecord]:
        """Replace the in-memory sequence with the persisted one."""
        raw = self.store.get(self.key)
        if raw is None:
            self._records = []
        else:
            payload = json.loads(raw)
            if not isinstance(payload, list):
                raise RuntimeError(f"Stored value for {self.key} is not a list")
            self._records = [parse_record(row) for row in payload]
        _logger.debug("Loaded %s records", len(self._records))
        return self.list_records()

    def save(self) -> None:
        """Persist the whole sequence."""
        self._replace(self._records)

    def list_records(self) -> list[DailyRecord]:
        """Return records, newest first."""
        return list(self._records)

    def get(self, record_id: UUID) -> DailyRecord | None:
        """Return a record by id."""
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def add(self, fields: RecordFields) -> DailyRecord:
        """Store a new record at the front of the sequence."""
        record = DailyRecord.from_fields(uuid4(), fields)
        self._replace([record, *self._records])
        _logger.info("Added record %s", record.id)
        return record

    def update(self, record_id: UUID, fields: RecordFields) -> DailyRecord | None:
        """Replace a record's fields, keeping its id and position."""
        for index, record in enumerate(self._records):
            if record.id == record_id:
                updated = DailyRecord.from_fields(record_id, fields)
                records = list(self._records)
                records[index] = updated
                self._replace(records)
                _logger.info("Updated record %s", record_id)
                return updated
        _logger.debug("Update skipped, record %s not found", record_id)
        return None

    def delete(self, record_id: UUID) -> bool:
        """Remove a record. Unknown ids are ignored."""
        remaining = [record for record in self._records if record.id != record_id]
        if len(remaining) == len(self._records):
            _logger.debug("Delete skipped, record %s not found", record_id)
            return False
        self._replace(remaining)
        _logger.info("Deleted record %s", record_id)
        return True

    def _replace(self, records: list[DailyRecord]) -> None:
        # Non-finite amounts are refused before the live sequence changes.
        payload = [record_to_payload(record) for record in records]
        self.store.set(self.key, json.dumps(payload, allow_nan=False))
        self._records = records


def record_to_payload(record: DailyRecord) -> dict[str, object]:
    """Serialize a record using the stored camelCase layout."""
    return {
        "id": str(record.id),
        "date": record.date.isoformat(),
        "revenue": record.revenue,
        "fuel": record.fuel,
        "fuelType": record.fuel_type.value if record.fuel_type else None,
        "kilometers": record.kilometers,
        "fuelEfficiency": record.fuel_efficiency,
        "variableCosts": record.variable_costs,
        "netProfit": record.net_profit,
    }


def parse_record(row: dict[str, object]) -> DailyRecord:
    """Rebuild a record from its stored layout."""
    date = datetime.fromisoformat(str(row["date"]))
    if date.tzinfo is None:
        date = date.replace(tzinfo=UTC)
    fuel_type_raw = row.get("fuelType")
    return DailyRecord(
        id=UUID(str(row["id"])),
        date=date,
        revenue=float(row.get("revenue", 0.0)),
        fuel=float(row.get("fuel", 0.0)),
        variable_costs=float(row.get("variableCosts", 0.0)),
        net_profit=float(row.get("netProfit", 0.0)),
        fuel_type=FuelType(fuel_type_raw) if fuel_type_raw else None,
        kilometers=_optional_float(row.get("kilometers")),
        fuel_efficiency=_efficiency(row.get("fuelEfficiency")),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)


def _efficiency(value: object) -> float | None:
    # Older blobs stored 0 for "no efficiency".
    efficiency = _optional_float(value)
    if efficiency is None or not math.isfinite(efficiency) or efficiency <= 0:
        return None
    return efficiency
