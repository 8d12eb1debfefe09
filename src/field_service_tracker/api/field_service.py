"""Publisher field service endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from field_service_tracker.api.models import DailyReportPayload  # noqa: TC001
from field_service_tracker.services.field_service import (
    serialize_daily_report,
    serialize_monthly_report,
)

if TYPE_CHECKING:
    from field_service_tracker.containers import AppContainer

router = APIRouter(prefix="/publishers/{publisher_id}", tags=["field-service"])


def _get_api_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> None:
    """Ensure requests include a valid API token."""
    if not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.post("/daily-reports", dependencies=[Depends(require_api_token)])
async def add_daily_report(
    publisher_id: UUID, payload: DailyReportPayload, request: Request
) -> dict[str, object]:
    """Create or replace the publisher's report for a day."""
    container: AppContainer = request.app.state.container
    saved = container.field_service_service.add_daily_report(
        publisher_id, payload.to_input()
    )
    return {"success": True, "data": serialize_daily_report(saved)}


@router.get("/daily-reports", dependencies=[Depends(require_api_token)])
async def list_daily_reports(
    publisher_id: UUID, request: Request, month: str = Query(...)
) -> dict[str, object]:
    """Return the publisher's daily reports for a month."""
    container: AppContainer = request.app.state.container
    reports = container.field_service_service.list_daily_reports(publisher_id, month)
    return {
        "success": True,
        "data": [serialize_daily_report(report) for report in reports],
    }


@router.delete("/daily-reports/{report_id}", dependencies=[Depends(require_api_token)])
async def delete_daily_report(
    publisher_id: UUID, report_id: UUID, request: Request
) -> dict[str, object]:
    """Delete one of the publisher's daily reports."""
    container: AppContainer = request.app.state.container
    container.field_service_service.delete_daily_report(publisher_id, report_id)
    return {"success": True}


@router.get("/monthly-summary", dependencies=[Depends(require_api_token)])
async def monthly_summary(
    publisher_id: UUID, request: Request, month: str = Query(...)
) -> dict[str, object]:
    """Return daily reports, the monthly report and fresh totals."""
    container: AppContainer = request.app.state.container
    summary = container.field_service_service.get_monthly_summary(publisher_id, month)
    return {
        "success": True,
        "data": {
            "daily_reports": [
                serialize_daily_report(report) for report in summary.daily_reports
            ],
            "monthly_report": serialize_monthly_report(summary.monthly_report),
            "totals": {
                "hours": summary.totals.hours,
                "placements": summary.totals.placements,
                "videos": summary.totals.videos,
                "bible_studies": summary.totals.bible_studies,
            },
        },
    }


@router.post(
    "/monthly-reports/{month}/recalculate", dependencies=[Depends(require_api_token)]
)
async def recalculate_monthly_report(
    publisher_id: UUID, month: str, request: Request
) -> dict[str, object]:
    """Rebuild a monthly report from its daily reports."""
    container: AppContainer = request.app.state.container
    monthly = container.field_service_service.recalculate_month(publisher_id, month)
    return {"success": True, "data": serialize_monthly_report(monthly)}
