"""Congregation report endpoints with simple token auth."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

if TYPE_CHECKING:
    from field_service_tracker.containers import AppContainer

router = APIRouter(prefix="/reports", tags=["reports"])

STATUSES = ("excellent", "active", "low_activity", "irregular", "inactive")


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/summary", dependencies=[Depends(require_admin)])
async def field_service_summary(
    request: Request,
    start: str = Query(...),
    end: str = Query(...),
    group_id: UUID | None = None,
) -> dict[str, object]:
    """Return publisher activity and trends for a month range."""
    container: AppContainer = request.app.state.container
    summary = container.report_service.summarize_range(start, end, group_id)
    counts = {f"{name}_count": len(summary.by_status(name)) for name in STATUSES}
    return {
        "summary": {
            "total_members": len(summary.members),
            **counts,
            "needs_shepherding_count": len(summary.needs_shepherding),
            "total_hours": summary.total_hours,
            "total_placements": summary.total_placements,
            "total_bible_studies": summary.total_bible_studies,
            "avg_hours_per_member": summary.avg_hours_per_member,
        },
        "members": [asdict(member) for member in summary.members],
        "trends": [asdict(trend) for trend in summary.trends],
    }


@router.get("/help-needed", dependencies=[Depends(require_admin)])
async def help_needed(request: Request, month: str = Query(...)) -> dict[str, object]:
    """Return publishers without a report or a Bible study for a month."""
    container: AppContainer = request.app.state.container
    members = container.report_service.members_needing_help(month)
    return {"members": [asdict(member) for member in members]}
