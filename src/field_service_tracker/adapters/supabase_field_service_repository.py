"""Supabase repository for daily and monthly field service reports."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from field_service_tracker.domain.field_service import (
    DailyFieldServiceRecord,
    DailyReportInput,
    MonthlyFieldServiceRecord,
    month_of,
)
from field_service_tracker.services.field_service import FieldServiceRepository
from field_service_tracker.services.reports import ReportRepository

DAILY_TABLE = "daily_field_service_reports"
MONTHLY_TABLE = "field_service_reports"
_DAILY_COLUMNS = (
    "id, publisher_id, report_date, month, shared_in_ministry, hours, "
    "placements, videos, bible_study_ids, comments"
)
_MONTHLY_COLUMNS = (
    "publisher_id, month, hours, placements, videos, bible_students, comments"
)


@dataclass
class SupabaseFieldServiceRepository(FieldServiceRepository, ReportRepository):
    """Supabase implementation for field service reports."""

    client: Client

    def upsert_daily_report(
        self, publisher_id: UUID, report: DailyReportInput
    ) -> DailyFieldServiceRecord:
        """Insert or replace the daily report for the publisher and date."""
        response = (
            self.client.table(DAILY_TABLE)
            .upsert(
                {
                    "publisher_id": str(publisher_id),
                    "report_date": report.report_date.isoformat(),
                    "month": month_of(report.report_date),
                    "shared_in_ministry": report.shared_in_ministry,
                    "hours": report.hours,
                    "placements": report.placements,
                    "videos": report.videos,
                    "bible_study_ids": list(report.bible_study_ids),
                    "bible_studies": len(report.bible_study_ids),
                    "comments": report.comments,
                },
                on_conflict="publisher_id,report_date",
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save daily field service report")
        return _parse_daily(response.data[0])

    def get_daily_report(
        self, publisher_id: UUID, report_id: UUID
    ) -> DailyFieldServiceRecord | None:
        """Return a daily report owned by the publisher."""
        response = (
            self.client.table(DAILY_TABLE)
            .select(_DAILY_COLUMNS)
            .eq("id", str(report_id))
            .eq("publisher_id", str(publisher_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_daily(response.data[0])

    def list_daily_reports(
        self, publisher_id: UUID, month: str
    ) -> list[DailyFieldServiceRecord]:
        """Return a publisher's daily reports for a month."""
        response = (
            self.client.table(DAILY_TABLE)
            .select(_DAILY_COLUMNS)
            .eq("publisher_id", str(publisher_id))
            .eq("month", month)
            .order("report_date", desc=False)
            .execute()
        )
        return [_parse_daily(row) for row in response.data or []]

    def delete_daily_report(self, publisher_id: UUID, report_id: UUID) -> None:
        """Delete a daily report owned by the publisher."""
        self.client.table(DAILY_TABLE).delete().eq("id", str(report_id)).eq(
            "publisher_id", str(publisher_id)
        ).execute()

    def get_monthly_report(
        self, publisher_id: UUID, month: str
    ) -> MonthlyFieldServiceRecord | None:
        """Return the monthly report for a publisher and month."""
        response = (
            self.client.table(MONTHLY_TABLE)
            .select(_MONTHLY_COLUMNS)
            .eq("publisher_id", str(publisher_id))
            .eq("month", month)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_monthly(response.data[0])

    def upsert_monthly_report(self, report: MonthlyFieldServiceRecord) -> None:
        """Insert or replace the monthly report."""
        self.client.table(MONTHLY_TABLE).upsert(
            {
                "publisher_id": str(report.publisher_id),
                "month": report.month,
                "hours": report.hours,
                "placements": report.placements,
                "videos": report.videos,
                "bible_students": report.bible_students,
                "comments": report.comments,
            },
            on_conflict="publisher_id,month",
        ).execute()

    def delete_monthly_report(self, publisher_id: UUID, month: str) -> None:
        """Delete the monthly report for a publisher and month."""
        self.client.table(MONTHLY_TABLE).delete().eq(
            "publisher_id", str(publisher_id)
        ).eq("month", month).execute()

    def list_monthly_reports(
        self, start_month: str, end_month: str
    ) -> list[MonthlyFieldServiceRecord]:
        """Return monthly reports for all publishers in a month range."""
        response = (
            self.client.table(MONTHLY_TABLE)
            .select(_MONTHLY_COLUMNS)
            .gte("month", start_month)
            .lte("month", end_month)
            .order("month", desc=False)
            .execute()
        )
        return [_parse_monthly(row) for row in response.data or []]


def _parse_daily(row: dict[str, object]) -> DailyFieldServiceRecord:
    return DailyFieldServiceRecord(
        id=UUID(str(row["id"])),
        publisher_id=UUID(str(row["publisher_id"])),
        report_date=date.fromisoformat(str(row["report_date"])[:10]),
        shared_in_ministry=bool(row.get("shared_in_ministry")),
        hours=float(row.get("hours") or 0.0),
        placements=int(row.get("placements") or 0),
        videos=int(row.get("videos") or 0),
        bible_study_ids=[str(value) for value in row.get("bible_study_ids") or []],
        comments=row.get("comments"),
    )


def _parse_monthly(row: dict[str, object]) -> MonthlyFieldServiceRecord:
    return MonthlyFieldServiceRecord(
        publisher_id=UUID(str(row["publisher_id"])),
        month=str(row["month"]),
        hours=float(row.get("hours") or 0.0),
        placements=int(row.get("placements") or 0),
        videos=int(row.get("videos") or 0),
        bible_students=int(row.get("bible_students") or 0),
        comments=str(row.get("comments") or ""),
    )
