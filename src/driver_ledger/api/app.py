"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import FastAPI, HTTPException, Request, status

from driver_ledger.api.models import RecordPayload
from driver_ledger.api.settings import router as settings_router
from driver_ledger.app_logging import configure_logging
from driver_ledger.containers import AppContainer
from driver_ledger.domain.errors import InvalidRecordInput
from driver_ledger.domain.stats import (
    ChartPoint,
    GoalReport,
    Period,
    PeriodTotals,
    TodaySummary,
)
from driver_ledger.services.records import record_to_payload


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Driver Ledger")
    app.state.container = container

    app.include_router(settings_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/records")
    async def list_records(
        request: Request, period: Period = Period.DAY
    ) -> dict[str, object]:
        """Return records in a history window with their totals."""
        state_container: AppContainer = request.app.state.container
        totals = state_container.summary_service.period(period)
        return {"period": period.value, **_format_totals(totals)}

    @app.post("/records", status_code=status.HTTP_201_CREATED)
    async def add_record(payload: RecordPayload, request: Request) -> dict[str, object]:
        """Store a new record from the entry form."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.ledger_service.add_from_form(payload.to_form())
        except InvalidRecordInput as exc:
            logger.warning("Rejected new record: %s", exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return record_to_payload(record)

    @app.put("/records/{record_id}")
    async def edit_record(
        record_id: UUID, payload: RecordPayload, request: Request
    ) -> dict[str, object]:
        """Update a record from the edit form."""
        state_container: AppContainer = request.app.state.container
        try:
            record = state_container.ledger_service.edit_from_form(
                record_id, payload.to_form()
            )
        except InvalidRecordInput as exc:
            logger.warning("Rejected edit for record %s: %s", record_id, exc)
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
            ) from exc
        return {"record": record_to_payload(record) if record else None}

    @app.delete("/records/{record_id}")
    async def delete_record(record_id: UUID, request: Request) -> dict[str, bool]:
        """Delete a record. Unknown ids are reported, not rejected."""
        state_container: AppContainer = request.app.state.container
        return {"deleted": state_container.ledger_service.delete_entry(record_id)}

    @app.get("/dashboard")
    async def dashboard(request: Request) -> dict[str, object]:
        """Return today's totals and the latest records."""
        state_container: AppContainer = request.app.state.container
        summary_service = state_container.summary_service
        return {
            "today": _format_today(summary_service.today()),
            "recent": [record_to_payload(r) for r in summary_service.recent()],
        }

    @app.get("/goals/weekly")
    async def weekly_goal(request: Request) -> dict[str, object]:
        """Return progress toward the weekly goal."""
        state_container: AppContainer = request.app.state.container
        return _format_goal(state_container.summary_service.weekly_goal())

    @app.get("/charts/daily")
    async def daily_chart(request: Request) -> dict[str, object]:
        """Return per-day totals for the latest days with records."""
        state_container: AppContainer = request.app.state.container
        points = state_container.summary_service.daily_chart()
        return {"points": [_format_point(point) for point in points]}

    @app.get("/charts/weekly")
    async def weekly_chart(request: Request) -> dict[str, object]:
        """Return per-week totals for the latest weeks with records."""
        state_container: AppContainer = request.app.state.container
        points = state_container.summary_service.weekly_chart()
        return {"points": [_format_point(point) for point in points]}

    return app


def _format_totals(totals: PeriodTotals) -> dict[str, object]:
    return {
        "records": [record_to_payload(record) for record in totals.records],
        "totals": {
            "revenue": totals.revenue,
            "costs": totals.costs,
            "netProfit": totals.net_profit,
        },
    }


def _format_today(summary: TodaySummary) -> dict[str, object]:
    return {
        "revenue": summary.revenue,
        "costs": summary.costs,
        "netProfit": summary.net_profit,
        "kilometers": summary.kilometers,
        "averageEfficiency": summary.average_efficiency,
        "recordCount": summary.record_count,
    }


def _format_goal(report: GoalReport) -> dict[str, object]:
    return {
        "weeklyGoal": report.weekly_goal,
        "weeklyTotal": report.weekly_total,
        "progress": report.progress,
        "remaining": report.remaining,
        "workingDaysLeft": report.working_days_left,
        "dailyTarget": report.daily_target,
        "status": report.status.value,
    }


def _format_point(point: ChartPoint) -> dict[str, object]:
    return {
        "periodStart": point.period_start.isoformat(),
        "label": point.label,
        "revenue": point.revenue,
        "costs": point.costs,
        "netProfit": point.net_profit,
    }
