"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from driver_ledger.adapters.memory_store import InMemoryKeyValueStore
from driver_ledger.config import Settings
from driver_ledger.containers import AppContainer
from driver_ledger.domain.records import DailyRecord, FuelType, RecordInput
from driver_ledger.services.aggregation import SummaryService
from driver_ledger.services.derivation import derive_fields
from driver_ledger.services.ledger import LedgerService
from driver_ledger.services.records import RecordStore
from driver_ledger.services.user_settings import UserSettingsService

# A Wednesday. The week containing it starts on Sunday 2024-05-12.
NOW = datetime(2024, 5, 15, 14, 30, tzinfo=UTC)


@dataclass
class FixedClock:
    """Clock that always returns the same moment."""

    moment: datetime = NOW

    def __call__(self) -> datetime:
        return self.moment


@dataclass
class RecordingKeyValueStore(InMemoryKeyValueStore):
    """In-memory store that remembers which keys were written."""

    writes: list[str] = field(default_factory=list)

    def set(self, key: str, value: str) -> None:
        super().set(key, value)
        self.writes.append(key)


def make_record(  # noqa: PLR0913
    date: datetime,
    revenue: float = 200.0,
    fuel: float = 40.0,
    variable_costs: float = 10.0,
    kilometers: float | None = None,
    fuel_type: FuelType | None = FuelType.GASOLINE,
) -> DailyRecord:
    """Build a derived record without going through a store."""
    fields = derive_fields(
        RecordInput(
            revenue=revenue,
            fuel=fuel,
            variable_costs=variable_costs,
            kilometers=kilometers,
            fuel_type=fuel_type,
        ),
        date,
    )
    return DailyRecord.from_fields(uuid4(), fields)


@pytest.fixture
def settings() -> Settings:
    return Settings(storage_path=None, timezone="UTC")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def key_value_store() -> RecordingKeyValueStore:
    return RecordingKeyValueStore()


@pytest.fixture
def record_store(key_value_store: RecordingKeyValueStore) -> RecordStore:
    return RecordStore(key_value_store)


@pytest.fixture
def container(
    settings: Settings,
    key_value_store: RecordingKeyValueStore,
    record_store: RecordStore,
    clock: FixedClock,
) -> AppContainer:
    user_settings_service = UserSettingsService(key_value_store)
    return AppContainer(
        settings=settings,
        key_value_store=key_value_store,
        record_store=record_store,
        ledger_service=LedgerService(record_store, clock=clock),
        user_settings_service=user_settings_service,
        summary_service=SummaryService(
            record_store=record_store,
            settings_service=user_settings_service,
            timezone_name=settings.timezone,
            clock=clock,
        ),
    )
