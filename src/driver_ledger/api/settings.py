"""Settings endpoints."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, status

from driver_ledger.api.models import SettingsPayload
from driver_ledger.domain.errors import InvalidSettings
from driver_ledger.domain.settings import UserSettings

if TYPE_CHECKING:
    from driver_ledger.containers import AppContainer

router = APIRouter(prefix="/settings", tags=["settings"])

logger = logging.getLogger(__name__)


@router.get("")
async def get_settings(request: Request) -> dict[str, object]:
    """Return the weekly goal and day off."""
    container: AppContainer = request.app.state.container
    return settings_to_payload(container.user_settings_service.get())


@router.put("")
async def save_settings(
    payload: SettingsPayload, request: Request
) -> dict[str, object]:
    """Validate and save settings."""
    container: AppContainer = request.app.state.container
    try:
        saved = container.user_settings_service.set_from_form(
            payload.weekly_goal, payload.day_off
        )
    except InvalidSettings as exc:
        logger.warning("Rejected settings: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        ) from exc
    return settings_to_payload(saved)


def settings_to_payload(settings: UserSettings) -> dict[str, object]:
    return {
        "weeklyGoal": settings.weekly_goal,
        "dayOff": settings.day_off,
        "dayOffName": settings.day_off_name,
    }
