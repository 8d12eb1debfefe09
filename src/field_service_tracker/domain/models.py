"""Domain models for congregation members."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class PublisherRecord:
    """Represents a congregation member who reports field service."""

    id: UUID
    full_name: str
    group_id: UUID | None = None
    group_name: str | None = None
    excluded_from_activities: bool = False
