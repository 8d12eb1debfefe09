"""Pure aggregation of daily field service reports into monthly reports."""

import math
import re
from collections.abc import Iterable, Iterator
from uuid import UUID

from field_service_tracker.domain.errors import InvalidReportError
from field_service_tracker.domain.field_service import (
    DailyFieldServiceRecord,
    MonthlyFieldServiceRecord,
    MonthlyTotals,
)

_MONTH_PATTERN = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
DECEMBER = 12


def aggregate_month(
    publisher_id: UUID, month: str, records: Iterable[DailyFieldServiceRecord]
) -> MonthlyFieldServiceRecord | None:
    """Reduce a month's daily reports to its monthly report.

    Returns None when there are no daily reports, meaning the monthly report
    must not exist. The result only depends on the set of records, not on
    their order.
    """
    reports = list(records)
    if not reports:
        return None
    totals = compute_totals(reports)
    days_shared = sum(1 for report in reports if report.shared_in_ministry)
    return MonthlyFieldServiceRecord(
        publisher_id=publisher_id,
        month=month,
        hours=totals.hours,
        placements=totals.placements,
        videos=totals.videos,
        bible_students=totals.bible_studies,
        comments=(
            f"Auto-generated from {len(reports)} daily reports "
            f"({days_shared} days shared, "
            f"{totals.bible_studies} unique Bible students)"
        ),
    )


def compute_totals(records: Iterable[DailyFieldServiceRecord]) -> MonthlyTotals:
    """Sum activity and count distinct Bible studies across daily reports."""
    reports = list(records)
    return MonthlyTotals(
        hours=math.fsum(report.hours or 0.0 for report in reports),
        placements=sum(report.placements or 0 for report in reports),
        videos=sum(report.videos or 0 for report in reports),
        bible_studies=len(unique_bible_study_ids(reports)),
    )


def sum_daily_totals(records: Iterable[DailyFieldServiceRecord]) -> MonthlyTotals:
    """Sum activity with each day's own Bible study count.

    A student visited on several days counts once per day here, unlike the
    distinct count stored on the monthly report.
    """
    reports = list(records)
    return MonthlyTotals(
        hours=math.fsum(report.hours or 0.0 for report in reports),
        placements=sum(report.placements or 0 for report in reports),
        videos=sum(report.videos or 0 for report in reports),
        bible_studies=sum(report.bible_studies for report in reports),
    )


def unique_bible_study_ids(records: Iterable[DailyFieldServiceRecord]) -> set[str]:
    """Return the distinct Bible study ids referenced by the reports."""
    return {
        study_id
        for report in records
        for study_id in report.bible_study_ids or []
        if study_id
    }


def parse_month(raw: str) -> str:
    """Validate a YYYY-MM month string."""
    value = raw.strip() if isinstance(raw, str) else ""
    if not _MONTH_PATTERN.match(value):
        raise InvalidReportError(f"Invalid month {raw!r}, expected YYYY-MM")
    return value


def iter_months(start: str, end: str) -> Iterator[str]:
    """Yield YYYY-MM buckets from start to end inclusive."""
    start_value = parse_month(start)
    end_value = parse_month(end)
    if start_value > end_value:
        raise InvalidReportError(f"Month range {start}..{end} is reversed")
    year, month = (int(part) for part in start_value.split("-"))
    current = start_value
    while current <= end_value:
        yield current
        if month == DECEMBER:
            year, month = year + 1, 1
        else:
            month += 1
        current = f"{year:04d}-{month:02d}"
