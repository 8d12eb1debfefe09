"""Supabase-backed publisher repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from field_service_tracker.domain.models import PublisherRecord
from field_service_tracker.services.publishers import PublisherRepository

_COLUMNS = "id, full_name, group_id, excluded_from_activities, groups(name)"


@dataclass
class SupabasePublisherRepository(PublisherRepository):
    """Supabase implementation for congregation members."""

    client: Client

    def get_publisher(self, publisher_id: UUID) -> PublisherRecord | None:
        """Return the member row for a publisher id, if present."""
        response = (
            self.client.table("members")
            .select(_COLUMNS)
            .eq("id", str(publisher_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_publisher(response.data[0])

    def list_publishers(self, group_id: UUID | None = None) -> list[PublisherRecord]:
        """Return member rows, optionally for one service group."""
        query = self.client.table("members").select(_COLUMNS)
        if group_id is not None:
            query = query.eq("group_id", str(group_id))
        response = query.order("full_name", desc=False).execute()
        return [_parse_publisher(row) for row in response.data or []]


def _parse_publisher(row: dict[str, object]) -> PublisherRecord:
    group = row.get("groups")
    return PublisherRecord(
        id=UUID(str(row["id"])),
        full_name=str(row.get("full_name") or ""),
        group_id=UUID(str(row["group_id"])) if row.get("group_id") else None,
        group_name=str(group["name"]) if isinstance(group, dict) else None,
        excluded_from_activities=bool(row.get("excluded_from_activities")),
    )
