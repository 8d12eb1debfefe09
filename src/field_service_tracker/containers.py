"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from field_service_tracker.adapters.supabase_audit_repository import (
    SupabaseAuditRepository,
)
from field_service_tracker.adapters.supabase_field_service_repository import (
    SupabaseFieldServiceRepository,
)
from field_service_tracker.adapters.supabase_publisher_repository import (
    SupabasePublisherRepository,
)
from field_service_tracker.config import Settings
from field_service_tracker.services.audit import AuditService
from field_service_tracker.services.field_service import FieldServiceService
from field_service_tracker.services.publishers import PublisherService
from field_service_tracker.services.reports import ReportService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    publisher_service: PublisherService
    field_service_service: FieldServiceService
    report_service: ReportService
    audit_service: AuditService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    field_service_repository = SupabaseFieldServiceRepository(supabase_client)
    publisher_service = PublisherService(SupabasePublisherRepository(supabase_client))
    audit_service = AuditService(SupabaseAuditRepository(supabase_client))
    field_service_service = FieldServiceService(
        repository=field_service_repository,
        publisher_service=publisher_service,
        audit_service=audit_service,
        numeric_policy=resolved_settings.numeric_policy,
    )
    report_service = ReportService(
        publisher_service=publisher_service,
        repository=field_service_repository,
    )

    return AppContainer(
        settings=resolved_settings,
        publisher_service=publisher_service,
        field_service_service=field_service_service,
        report_service=report_service,
        audit_service=audit_service,
    )
