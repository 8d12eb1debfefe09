"""Congregation reports built from monthly field service reports."""

from collections import defaultdict
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from field_service_tracker.domain.field_service import MonthlyFieldServiceRecord
from field_service_tracker.domain.models import PublisherRecord
from field_service_tracker.domain.reports import (
    CongregationSummary,
    HelpNeeded,
    MonthlyTrend,
    PublisherActivity,
)
from field_service_tracker.services.aggregation import iter_months, parse_month
from field_service_tracker.services.publishers import PublisherService

IRREGULAR_RATE = 50
LOW_ACTIVITY_HOURS = 1
EXCELLENT_HOURS = 10
NO_GROUP = "No Group"


class ReportRepository(Protocol):
    """Persistence interface for monthly report queries."""

    def list_monthly_reports(
        self, start_month: str, end_month: str
    ) -> list[MonthlyFieldServiceRecord]:
        """Return all monthly reports between two months inclusive."""


@dataclass
class ReportService:
    """Service for congregation-wide field service reports."""

    publisher_service: PublisherService
    repository: ReportRepository

    def summarize_range(
        self, start_month: str, end_month: str, group_id: UUID | None = None
    ) -> CongregationSummary:
        """Return per-publisher activity and monthly trends for a range."""
        months = list(iter_months(start_month, end_month))
        publishers = [
            publisher
            for publisher in self.publisher_service.list_publishers(group_id)
            if not publisher.excluded_from_activities
        ]
        reports = self.repository.list_monthly_reports(months[0], months[-1])
        by_publisher: dict[UUID, list[MonthlyFieldServiceRecord]] = defaultdict(list)
        for report in reports:
            by_publisher[report.publisher_id].append(report)

        members = [
            _publisher_activity(publisher, by_publisher[publisher.id], len(months))
            for publisher in publishers
        ]
        trends = [_monthly_trend(month, reports) for month in months]
        total_hours = sum(member.total_hours for member in members)
        return CongregationSummary(
            members=members,
            trends=trends,
            total_hours=total_hours,
            total_placements=sum(member.total_placements for member in members),
            total_bible_studies=sum(member.total_bible_studies for member in members),
            avg_hours_per_member=round(total_hours / len(members), 1)
            if members
            else 0.0,
        )

    def members_needing_help(self, month: str) -> list[HelpNeeded]:
        """Return publishers with no report or no Bible study for a month."""
        resolved_month = parse_month(month)
        reports = self.repository.list_monthly_reports(resolved_month, resolved_month)
        reported = {report.publisher_id for report in reports}
        with_studies = {
            report.publisher_id for report in reports if report.bible_students > 0
        }
        results = []
        for publisher in self.publisher_service.list_publishers():
            no_report = publisher.id not in reported
            no_study = publisher.id not in with_studies
            if not (no_report or no_study):
                continue
            results.append(
                HelpNeeded(
                    publisher_id=publisher.id,
                    full_name=publisher.full_name,
                    group_name=publisher.group_name or NO_GROUP,
                    no_report=no_report,
                    no_study=no_study,
                )
            )
        return results


def _publisher_activity(
    publisher: PublisherRecord,
    reports: list[MonthlyFieldServiceRecord],
    expected_months: int,
) -> PublisherActivity:
    total_hours = sum(report.hours for report in reports)
    months_reported = len(reports)
    avg_hours = total_hours / months_reported if months_reported else 0.0
    reporting_rate = months_reported / expected_months * 100
    status, needs_shepherding = _classify(months_reported, reporting_rate, avg_hours)
    return PublisherActivity(
        publisher_id=publisher.id,
        name=publisher.full_name,
        total_hours=total_hours,
        total_placements=sum(report.placements for report in reports),
        total_videos=sum(report.videos for report in reports),
        total_bible_studies=sum(report.bible_students for report in reports),
        months_reported=months_reported,
        expected_months=expected_months,
        avg_hours=round(avg_hours, 1),
        reporting_rate=round(reporting_rate),
        status=status,
        needs_shepherding=needs_shepherding,
    )


def _classify(
    months_reported: int, reporting_rate: float, avg_hours: float
) -> tuple[str, bool]:
    if months_reported == 0:
        return "inactive", True
    if reporting_rate < IRREGULAR_RATE:
        return "irregular", True
    if avg_hours < LOW_ACTIVITY_HOURS:
        return "low_activity", True
    if avg_hours >= EXCELLENT_HOURS:
        return "excellent", False
    return "active", False


def _monthly_trend(
    month: str, reports: list[MonthlyFieldServiceRecord]
) -> MonthlyTrend:
    month_reports = [report for report in reports if report.month == month]
    total_hours = sum(report.hours for report in month_reports)
    return MonthlyTrend(
        month=month,
        total_hours=total_hours,
        total_reports=len(month_reports),
        avg_hours=round(total_hours / len(month_reports), 1) if month_reports else 0.0,
        bible_studies=sum(report.bible_students for report in month_reports),
    )
