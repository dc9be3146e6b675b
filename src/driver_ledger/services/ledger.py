"""Add and edit flows for earnings records."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from driver_ledger.domain.records import DailyRecord, RecordForm, RecordInput
from driver_ledger.services.derivation import derive_fields, parse_record_form
from driver_ledger.services.records import RecordStore


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class LedgerService:
    """Service that derives record fields before storing them.

    The entry form is permissive: unusable amounts count as zero. The edit
    form is strict for revenue, fuel and variable costs and raises
    ``InvalidRecordInput`` before anything is changed.
    """

    record_store: RecordStore
    clock: Callable[[], datetime] = field(default=utc_now)

    def add_entry(self, values: RecordInput) -> DailyRecord:
        """Derive and store a new record stamped with the current time."""
        fields = derive_fields(values, self.clock())
        return self.record_store.add(fields)

    def add_from_form(self, form: RecordForm) -> DailyRecord:
        """Parse entry form text leniently and store the record."""
        return self.add_entry(parse_record_form(form, strict=False))

    def edit_entry(self, record_id: UUID, values: RecordInput) -> DailyRecord | None:
        """Re-derive a record from new inputs, keeping its original date."""
        current = self.record_store.get(record_id)
        if current is None:
            return None
        fields = derive_fields(values, current.date)
        return self.record_store.update(record_id, fields)

    def edit_from_form(self, record_id: UUID, form: RecordForm) -> DailyRecord | None:
        """Parse edit form text strictly and update the record."""
        return self.edit_entry(record_id, parse_record_form(form, strict=True))

    def delete_entry(self, record_id: UUID) -> bool:
        """Remove a record, returning False when it was already gone."""
        return self.record_store.delete(record_id)
