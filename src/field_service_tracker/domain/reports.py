"""Domain models for congregation reports."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PublisherActivity:
    """Field service totals for a publisher across a month range."""

    publisher_id: UUID
    name: str
    total_hours: float
    total_placements: int
    total_videos: int
    total_bible_studies: int
    months_reported: int
    expected_months: int
    avg_hours: float
    reporting_rate: int
    status: str
    needs_shepherding: bool


@dataclass(frozen=True)
class MonthlyTrend:
    """Congregation totals for one month."""

    month: str
    total_hours: float
    total_reports: int
    avg_hours: float
    bible_studies: int


@dataclass(frozen=True)
class CongregationSummary:
    """Range summary across publishers."""

    members: list[PublisherActivity]
    trends: list[MonthlyTrend]
    total_hours: float
    total_placements: int
    total_bible_studies: int
    avg_hours_per_member: float

    def by_status(self, status: str) -> list[PublisherActivity]:
        """Return members with the given activity status."""
        return [member for member in self.members if member.status == status]

    @property
    def needs_shepherding(self) -> list[PublisherActivity]:
        """Members flagged for follow-up."""
        return [member for member in self.members if member.needs_shepherding]


@dataclass(frozen=True)
class HelpNeeded:
    """A publisher missing a report or a Bible study for a month."""

    publisher_id: UUID
    full_name: str
    group_name: str
    no_report: bool
    no_study: bool
