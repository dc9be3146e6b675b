"""Dependency container wiring for the application."""

from dataclasses import dataclass

from driver_ledger.adapters.json_file_store import JsonFileKeyValueStore
from driver_ledger.adapters.memory_store import InMemoryKeyValueStore
from driver_ledger.config import Settings
from driver_ledger.services.aggregation import SummaryService
from driver_ledger.services.ledger import LedgerService
from driver_ledger.services.records import KeyValueStore, RecordStore
from driver_ledger.services.user_settings import UserSettingsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    key_value_store: KeyValueStore
    record_store: RecordStore
    ledger_service: LedgerService
    user_settings_service: UserSettingsService
    summary_service: SummaryService


def build_container(
    settings: Settings | None = None, key_value_store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = key_value_store or _default_store(resolved_settings)
    record_store = RecordStore(store)
    user_settings_service = UserSettingsService(store)
    return AppContainer(
        settings=resolved_settings,
        key_value_store=store,
        record_store=record_store,
        ledger_service=LedgerService(record_store),
        user_settings_service=user_settings_service,
        summary_service=SummaryService(
            record_store=record_store,
            settings_service=user_settings_service,
            timezone_name=resolved_settings.timezone,
        ),
    )


def _default_store(settings: Settings) -> KeyValueStore:
    if settings.storage_path is None:
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.storage_path)
