"""Domain models for daily and monthly field service reports."""

from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from uuid import UUID


class NumericPolicy(StrEnum):
    """How negative hours, placements and videos are treated on write."""

    REJECT = "reject"
    CLAMP = "clamp"
    ALLOW = "allow"


@dataclass(frozen=True)
class DailyReportInput:
    """A publisher's activity payload for one calendar day."""

    report_date: date
    shared_in_ministry: bool = False
    hours: float = 0.0
    placements: int = 0
    videos: int = 0
    bible_study_ids: list[str] = field(default_factory=list)
    comments: str | None = None


@dataclass(frozen=True)
class DailyFieldServiceRecord:
    """Stored daily report, unique per publisher and date."""

    id: UUID
    publisher_id: UUID
    report_date: date
    shared_in_ministry: bool
    hours: float
    placements: int
    videos: int
    bible_study_ids: list[str]
    comments: str | None = None

    @property
    def month(self) -> str:
        """Year-month bucket derived from the report date."""
        return month_of(self.report_date)

    @property
    def bible_studies(self) -> int:
        """Number of Bible studies visited that day."""
        return len(self.bible_study_ids or [])


@dataclass(frozen=True)
class MonthlyFieldServiceRecord:
    """Monthly report derived from a publisher's daily reports."""

    publisher_id: UUID
    month: str
    hours: float
    placements: int
    videos: int
    bible_students: int
    comments: str


@dataclass(frozen=True)
class MonthlyTotals:
    """Totals recomputed from daily reports."""

    hours: float
    placements: int
    videos: int
    bible_studies: int


@dataclass(frozen=True)
class MonthlySummary:
    """Daily breakdown, stored monthly report and fresh totals for a month."""

    daily_reports: list[DailyFieldServiceRecord]
    monthly_report: MonthlyFieldServiceRecord | None
    totals: MonthlyTotals


def month_of(day: date) -> str:
    """Return the YYYY-MM bucket for a date."""
    return f"{day.year:04d}-{day.month:02d}"
