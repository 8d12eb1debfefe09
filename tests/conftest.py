"""Shared test fixtures."""

from dataclasses import dataclass, field
from uuid import UUID, uuid4

import pytest

from field_service_tracker.config import Settings
from field_service_tracker.containers import AppContainer
from field_service_tracker.domain.field_service import (
    DailyFieldServiceRecord,
    DailyReportInput,
    MonthlyFieldServiceRecord,
    month_of,
)
from field_service_tracker.domain.models import PublisherRecord
from field_service_tracker.services.audit import AuditRepository, AuditService
from field_service_tracker.services.field_service import (
    FieldServiceRepository,
    FieldServiceService,
)
from field_service_tracker.services.publishers import (
    PublisherRepository,
    PublisherService,
)
from field_service_tracker.services.reports import ReportRepository, ReportService


@dataclass
class InMemoryPublisherRepository(PublisherRepository):
    """In-memory publisher repository for tests."""

    publishers: dict[UUID, PublisherRecord] = field(default_factory=dict)

    def add(
        self,
        full_name: str = "Test Publisher",
        group_id: UUID | None = None,
        group_name: str | None = None,
        excluded_from_activities: bool = False,
    ) -> PublisherRecord:
        publisher = PublisherRecord(
            id=uuid4(),
            full_name=full_name,
            group_id=group_id,
            group_name=group_name,
            excluded_from_activities=excluded_from_activities,
        )
        self.publishers[publisher.id] = publisher
        return publisher

    def get_publisher(self, publisher_id: UUID) -> PublisherRecord | None:
        return self.publishers.get(publisher_id)

    def list_publishers(self, group_id: UUID | None = None) -> list[PublisherRecord]:
        return [
            publisher
            for publisher in self.publishers.values()
            if group_id is None or publisher.group_id == group_id
        ]


@dataclass
class InMemoryFieldServiceRepository(FieldServiceRepository, ReportRepository):
    """In-memory field service repository for tests."""

    daily: dict[UUID, DailyFieldServiceRecord] = field(default_factory=dict)
    monthly: dict[tuple[UUID, str], MonthlyFieldServiceRecord] = field(
        default_factory=dict
    )
    monthly_writes: int = 0
    fail_monthly_writes: bool = False

    def upsert_daily_report(
        self, publisher_id: UUID, report: DailyReportInput
    ) -> DailyFieldServiceRecord:
        existing = next(
            (
                record
                for record in self.daily.values()
                if record.publisher_id == publisher_id
                and record.report_date == report.report_date
            ),
            None,
        )
        record = DailyFieldServiceRecord(
            id=existing.id if existing else uuid4(),
            publisher_id=publisher_id,
            report_date=report.report_date,
            shared_in_ministry=report.shared_in_ministry,
            hours=report.hours,
            placements=report.placements,
            videos=report.videos,
            bible_study_ids=list(report.bible_study_ids),
            comments=report.comments,
        )
        self.daily[record.id] = record
        return record

    def get_daily_report(
        self, publisher_id: UUID, report_id: UUID
    ) -> DailyFieldServiceRecord | None:
        record = self.daily.get(report_id)
        if record is None or record.publisher_id != publisher_id:
            return None
        return record

    def list_daily_reports(
        self, publisher_id: UUID, month: str
    ) -> list[DailyFieldServiceRecord]:
        records = [
            record
            for record in self.daily.values()
            if record.publisher_id == publisher_id
            and month_of(record.report_date) == month
        ]
        return sorted(records, key=lambda record: record.report_date)

    def delete_daily_report(self, publisher_id: UUID, report_id: UUID) -> None:
        record = self.daily.get(report_id)
        if record is not None and record.publisher_id == publisher_id:
            del self.daily[report_id]

    def get_monthly_report(
        self, publisher_id: UUID, month: str
    ) -> MonthlyFieldServiceRecord | None:
        return self.monthly.get((publisher_id, month))

    def upsert_monthly_report(self, report: MonthlyFieldServiceRecord) -> None:
        if self.fail_monthly_writes:
            raise RuntimeError("monthly store unavailable")
        self.monthly_writes += 1
        self.monthly[(report.publisher_id, report.month)] = report

    def delete_monthly_report(self, publisher_id: UUID, month: str) -> None:
        if self.fail_monthly_writes:
            raise RuntimeError("monthly store unavailable")
        self.monthly.pop((publisher_id, month), None)

    def list_monthly_reports(
        self, start_month: str, end_month: str
    ) -> list[MonthlyFieldServiceRecord]:
        return [
            report
            for report in self.monthly.values()
            if start_month <= report.month <= end_month
        ]


@dataclass
class InMemoryAuditRepository(AuditRepository):
    """In-memory audit repository for tests."""

    events: list[dict[str, object]] = field(default_factory=list)

    def create_event(  # noqa: PLR0913
        self,
        publisher_id: UUID,
        entity_type: str,
        entity_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        self.events.append(
            {
                "publisher_id": publisher_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "event_type": event_type,
                "before": before,
                "after": after,
            }
        )


@dataclass
class FailingAuditRepository(AuditRepository):
    """Audit repository whose writes always fail."""

    def create_event(  # noqa: PLR0913
        self,
        publisher_id: UUID,
        entity_type: str,
        entity_id: UUID,
        event_type: str,
        before: dict[str, object] | None,
        after: dict[str, object] | None,
    ) -> None:
        raise RuntimeError("audit store unavailable")


def build_field_service(
    publisher_repository: InMemoryPublisherRepository,
    repository: InMemoryFieldServiceRepository,
    audit_repository: InMemoryAuditRepository | None = None,
    **kwargs,
) -> FieldServiceService:
    return FieldServiceService(
        repository=repository,
        publisher_service=PublisherService(publisher_repository),
        audit_service=AuditService(audit_repository or InMemoryAuditRepository()),
        **kwargs,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        admin_token="admin-token",
    )


@pytest.fixture
def publisher_repository() -> InMemoryPublisherRepository:
    return InMemoryPublisherRepository()


@pytest.fixture
def field_service_repository() -> InMemoryFieldServiceRepository:
    return InMemoryFieldServiceRepository()


@pytest.fixture
def audit_repository() -> InMemoryAuditRepository:
    return InMemoryAuditRepository()


@pytest.fixture
def container(
    settings: Settings,
    publisher_repository: InMemoryPublisherRepository,
    field_service_repository: InMemoryFieldServiceRepository,
    audit_repository: InMemoryAuditRepository,
) -> AppContainer:
    publisher_service = PublisherService(publisher_repository)
    audit_service = AuditService(audit_repository)
    field_service_service = FieldServiceService(
        repository=field_service_repository,
        publisher_service=publisher_service,
        audit_service=audit_service,
        numeric_policy=settings.numeric_policy,
    )
    report_service = ReportService(
        publisher_service=publisher_service,
        repository=field_service_repository,
    )

    return AppContainer(
        settings=settings,
        publisher_service=publisher_service,
        field_service_service=field_service_service,
        report_service=report_service,
        audit_service=audit_service,
    )
