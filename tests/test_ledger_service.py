"""Tests for the add and edit flows."""

from datetime import timedelta
from uuid import uuid4

import pytest

from driver_ledger.domain.errors import InvalidRecordInput
from driver_ledger.domain.records import FuelType, RecordForm
from driver_ledger.services.ledger import LedgerService
from driver_ledger.services.records import RecordStore
from tests.conftest import NOW, FixedClock, RecordingKeyValueStore


def test_add_from_form_derives_and_stamps_date(
    record_store: RecordStore, clock: FixedClock
) -> None:
    service = LedgerService(record_store, clock=clock)

    record = service.add_from_form(
        RecordForm(
            revenue="300",
            fuel="58.9",
            variable_costs="15",
            kilometers="120",
            fuel_type="gasoline",
        )
    )

    assert record.date == NOW
    assert record.net_profit == pytest.approx(226.1)
    assert record.fuel_efficiency == pytest.approx(12.0)
    assert record_store.list_records()[0] == record


def test_add_from_form_is_permissive(
    record_store: RecordStore, clock: FixedClock
) -> None:
    service = LedgerService(record_store, clock=clock)

    record = service.add_from_form(
        RecordForm(revenue="lots", fuel="", variable_costs=None, kilometers="12")
    )

    assert record.revenue == 0.0
    assert record.fuel == 0.0
    assert record.net_profit == 0.0
    assert record.kilometers == 12.0
    assert record.fuel_efficiency is None


def test_edit_keeps_original_date_and_recomputes(
    record_store: RecordStore, clock: FixedClock
) -> None:
    service = LedgerService(record_store, clock=clock)
    original = service.add_from_form(
        RecordForm(revenue="100", fuel="20", variable_costs="0")
    )
    clock.moment = NOW + timedelta(days=2)

    edited = service.edit_from_form(
        original.id,
        RecordForm(
            revenue="150",
            fuel="39.9",
            variable_costs="10",
            kilometers="100",
            fuel_type="ethanol",
        ),
    )

    assert edited is not None
    assert edited.id == original.id
    assert edited.date == NOW
    assert edited.net_profit == pytest.approx(100.1)
    assert edited.fuel_type is FuelType.ETHANOL
    assert edited.fuel_efficiency == pytest.approx(10.0)


def test_edit_rejects_invalid_amount_without_writing(
    record_store: RecordStore,
    key_value_store: RecordingKeyValueStore,
    clock: FixedClock,
) -> None:
    service = LedgerService(record_store, clock=clock)
    original = service.add_from_form(
        RecordForm(revenue="100", fuel="20", variable_costs="5")
    )
    writes_before = len(key_value_store.writes)

    with pytest.raises(InvalidRecordInput):
        service.edit_from_form(
            original.id, RecordForm(revenue="abc", fuel="20", variable_costs="5")
        )

    assert len(key_value_store.writes) == writes_before
    assert record_store.get(original.id) == original


def test_edit_rejects_missing_amounts(
    record_store: RecordStore, clock: FixedClock
) -> None:
    service = LedgerService(record_store, clock=clock)
    original = service.add_from_form(
        RecordForm(revenue="300", fuel="50", variable_costs="0")
    )

    with pytest.raises(InvalidRecordInput) as exc_info:
        service.edit_from_form(original.id, RecordForm(fuel="50", variable_costs=""))

    assert exc_info.value.field_name == "revenue"
    assert record_store.get(original.id) == original


def test_add_rejects_amounts_that_overflow(
    record_store: RecordStore,
    key_value_store: RecordingKeyValueStore,
    clock: FixedClock,
) -> None:
    service = LedgerService(record_store, clock=clock)

    with pytest.raises(InvalidRecordInput):
        service.add_from_form(RecordForm(fuel="1e308", variable_costs="1e308"))

    assert record_store.list_records() == []
    assert key_value_store.writes == []


def test_edit_unknown_record_returns_none(
    record_store: RecordStore, clock: FixedClock
) -> None:
    service = LedgerService(record_store, clock=clock)

    result = service.edit_from_form(
        uuid4(), RecordForm(revenue="1", fuel="1", variable_costs="1")
    )

    assert result is None
    assert record_store.list_records() == []


def test_delete_entry_twice(record_store: RecordStore, clock: FixedClock) -> None:
    service = LedgerService(record_store, clock=clock)
    record = service.add_from_form(RecordForm(revenue="50"))

    assert service.delete_entry(record.id) is True
    assert service.delete_entry(record.id) is False
