"""Daily field service reports and the monthly reports derived from them."""

import logging
import math
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import UUID

from field_service_tracker.domain.errors import (
    AggregationError,
    DailyReportNotFoundError,
    InvalidReportError,
)
from field_service_tracker.domain.field_service import (
    DailyFieldServiceRecord,
    DailyReportInput,
    MonthlyFieldServiceRecord,
    MonthlySummary,
    NumericPolicy,
)
from field_service_tracker.services.aggregation import (
    aggregate_month,
    parse_month,
    sum_daily_totals,
)
from field_service_tracker.services.audit import AuditService
from field_service_tracker.services.publishers import PublisherService

logger = logging.getLogger(__name__)

DAILY_REPORT_ENTITY = "daily_report"


class FieldServiceRepository(Protocol):
    """Persistence interface for daily and monthly field service reports."""

    def upsert_daily_report(
        self, publisher_id: UUID, report: DailyReportInput
    ) -> DailyFieldServiceRecord:
        """Insert or replace the report for the publisher and date."""

    def get_daily_report(
        self, publisher_id: UUID, report_id: UUID
    ) -> DailyFieldServiceRecord | None:
        """Return a daily report owned by the publisher, if present."""

    def list_daily_reports(
        self, publisher_id: UUID, month: str
    ) -> list[DailyFieldServiceRecord]:
        """Return a publisher's daily reports for a month, oldest first."""

    def delete_daily_report(self, publisher_id: UUID, report_id: UUID) -> None:
        """Delete a daily report owned by the publisher."""

    def get_monthly_report(
        self, publisher_id: UUID, month: str
    ) -> MonthlyFieldServiceRecord | None:
        """Return the stored monthly report, if present."""

    def upsert_monthly_report(self, report: MonthlyFieldServiceRecord) -> None:
        """Insert or replace the monthly report for its publisher and month."""

    def delete_monthly_report(self, publisher_id: UUID, month: str) -> None:
        """Delete the monthly report for a publisher and month."""


@dataclass
class FieldServiceService:
    """Writes daily reports and keeps monthly reports in step with them."""

    repository: FieldServiceRepository
    publisher_service: PublisherService
    audit_service: AuditService
    numeric_policy: NumericPolicy = NumericPolicy.REJECT

    def add_daily_report(
        self, publisher_id: UUID, report: DailyReportInput
    ) -> DailyFieldServiceRecord:
        """Create or replace a day's report and refresh its monthly report.

        The daily write is not rolled back when the monthly refresh fails;
        AggregationError carries the saved report in that case.
        """
        self.publisher_service.require_publisher(publisher_id)
        normalized = normalize_daily_report(report, self.numeric_policy)
        saved = self.repository.upsert_daily_report(publisher_id, normalized)
        self.audit_service.record_event(
            publisher_id=publisher_id,
            entity_type=DAILY_REPORT_ENTITY,
            entity_id=saved.id,
            event_type="upserted",
            before=None,
            after=serialize_daily_report(saved),
        )
        self._refresh_after_write(saved, AggregationError.SAVED)
        return saved

    def list_daily_reports(
        self, publisher_id: UUID, month: str
    ) -> list[DailyFieldServiceRecord]:
        """Return a publisher's daily reports for a month by date."""
        resolved_month = parse_month(month)
        self.publisher_service.require_publisher(publisher_id)
        reports = self.repository.list_daily_reports(publisher_id, resolved_month)
        return sorted(reports, key=lambda report: report.report_date)

    def delete_daily_report(self, publisher_id: UUID, report_id: UUID) -> None:
        """Delete one of the publisher's daily reports and refresh its month."""
        self.publisher_service.require_publisher(publisher_id)
        report = self.repository.get_daily_report(publisher_id, report_id)
        if report is None:
            raise DailyReportNotFoundError(report_id)
        self.repository.delete_daily_report(publisher_id, report_id)
        self.audit_service.record_event(
            publisher_id=publisher_id,
            entity_type=DAILY_REPORT_ENTITY,
            entity_id=report.id,
            event_type="deleted",
            before=serialize_daily_report(report),
            after=None,
        )
        self._refresh_after_write(report, AggregationError.DELETED)

    def recalculate_month(
        self, publisher_id: UUID, month: str
    ) -> MonthlyFieldServiceRecord | None:
        """Rebuild a monthly report from its daily reports."""
        resolved_month = parse_month(month)
        self.publisher_service.require_publisher(publisher_id)
        return self._reconcile_month(publisher_id, resolved_month)

    def get_monthly_summary(self, publisher_id: UUID, month: str) -> MonthlySummary:
        """Return daily reports, the stored monthly report and fresh totals."""
        daily_reports = self.list_daily_reports(publisher_id, month)
        monthly_report = self.repository.get_monthly_report(
            publisher_id, parse_month(month)
        )
        return MonthlySummary(
            daily_reports=daily_reports,
            monthly_report=monthly_report,
            totals=sum_daily_totals(daily_reports),
        )

    def _refresh_after_write(
        self, report: DailyFieldServiceRecord, operation: str
    ) -> None:
        try:
            self._reconcile_month(report.publisher_id, report.month)
        except Exception as exc:
            logger.exception(
                "Failed to update monthly report",
                extra={
                    "publisher_id": str(report.publisher_id),
                    "month": report.month,
                    "operation": operation,
                },
            )
            raise AggregationError(report, operation) from exc

    def _reconcile_month(
        self, publisher_id: UUID, month: str
    ) -> MonthlyFieldServiceRecord | None:
        reports = self.repository.list_daily_reports(publisher_id, month)
        monthly = aggregate_month(publisher_id, month, reports)
        if monthly is None:
            self.repository.delete_monthly_report(publisher_id, month)
            logger.info(
                "Removed monthly report without daily reports",
                extra={"publisher_id": str(publisher_id), "month": month},
            )
            return None
        self.repository.upsert_monthly_report(monthly)
        logger.info(
            "Updated monthly report",
            extra={
                "publisher_id": str(publisher_id),
                "month": month,
                "daily_reports": len(reports),
            },
        )
        return monthly


def normalize_daily_report(
    report: DailyReportInput, policy: NumericPolicy
) -> DailyReportInput:
    """Apply numeric defaults and the negative-value policy to a payload."""
    hours = float(report.hours or 0.0)
    if not math.isfinite(hours):
        raise InvalidReportError("hours must be a finite number")
    values: dict[str, float | int] = {
        "hours": hours,
        "placements": _as_count("placements", report.placements),
        "videos": _as_count("videos", report.videos),
    }
    negative = [name for name, value in values.items() if value < 0]
    if negative and policy == NumericPolicy.REJECT:
        raise InvalidReportError(
            "Negative values are not allowed: " + ", ".join(negative)
        )
    if policy == NumericPolicy.CLAMP:
        values = {name: max(value, 0) for name, value in values.items()}
    comments = report.comments.strip() if report.comments else None
    return replace(
        report,
        shared_in_ministry=bool(report.shared_in_ministry),
        hours=float(values["hours"]),
        placements=int(values["placements"]),
        videos=int(values["videos"]),
        bible_study_ids=_dedupe_ids(report.bible_study_ids or []),
        comments=comments or None,
    )


def serialize_daily_report(report: DailyFieldServiceRecord) -> dict[str, object]:
    """Return a JSON-friendly view of a daily report."""
    return {
        "id": str(report.id),
        "publisher_id": str(report.publisher_id),
        "date": report.report_date.isoformat(),
        "month": report.month,
        "shared_in_ministry": report.shared_in_ministry,
        "hours": report.hours,
        "placements": report.placements,
        "videos": report.videos,
        "bible_study_ids": list(report.bible_study_ids),
        "comments": report.comments,
    }


def serialize_monthly_report(
    report: MonthlyFieldServiceRecord | None,
) -> dict[str, object] | None:
    """Return a JSON-friendly view of a monthly report."""
    if report is None:
        return None
    return {
        "publisher_id": str(report.publisher_id),
        "month": report.month,
        "hours": report.hours,
        "placements": report.placements,
        "videos": report.videos,
        "bible_students": report.bible_students,
        "comments": report.comments,
    }


def _as_count(name: str, value: object) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise InvalidReportError(f"{name} must be a whole number")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidReportError(f"{name} must be a whole number")
    return int(value)


def _dedupe_ids(values: list[str]) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        cleaned = str(value).strip()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)
