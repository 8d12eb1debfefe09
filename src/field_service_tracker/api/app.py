"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from field_service_tracker.api.field_service import router as field_service_router
from field_service_tracker.api.reports import router as reports_router
from field_service_tracker.app_logging import configure_logging
from field_service_tracker.containers import AppContainer
from field_service_tracker.domain.errors import (
    AggregationError,
    DailyReportNotFoundError,
    InvalidReportError,
    PublisherNotFoundError,
)
from field_service_tracker.services.field_service import serialize_daily_report


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(field_service_router)
    app.include_router(reports_router)

    @app.exception_handler(PublisherNotFoundError)
    @app.exception_handler(DailyReportNotFoundError)
    async def not_found(_request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": str(exc)},
        )

    @app.exception_handler(InvalidReportError)
    async def invalid_report(_request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"success": False, "error": str(exc)},
        )

    @app.exception_handler(AggregationError)
    async def aggregation_failed(
        _request: Request, exc: AggregationError
    ) -> JSONResponse:
        logger.warning(
            "Daily report %s without monthly update",
            exc.operation,
            extra={"report_id": str(exc.daily_report.id)},
        )
        content: dict[str, object] = {
            "success": False,
            "error": str(exc),
            "operation": exc.operation,
        }
        if exc.deleted:
            content["deleted_report_id"] = str(exc.daily_report.id)
        else:
            content["data"] = serialize_daily_report(exc.daily_report)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
