"""ASGI entrypoint for the driver ledger API."""

from driver_ledger.api.app import create_app
from driver_ledger.containers import build_container

app = create_app(build_container())
