"""Publisher lookup used to resolve caller identities."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from field_service_tracker.domain.errors import PublisherNotFoundError
from field_service_tracker.domain.models import PublisherRecord


class PublisherRepository(Protocol):
    """Persistence interface for congregation members."""

    def get_publisher(self, publisher_id: UUID) -> PublisherRecord | None:
        """Return the publisher for an id, if present."""

    def list_publishers(self, group_id: UUID | None = None) -> list[PublisherRecord]:
        """Return publishers, optionally limited to a service group."""


@dataclass
class PublisherService:
    """Application service for publisher identity checks."""

    repository: PublisherRepository

    def require_publisher(self, publisher_id: UUID) -> PublisherRecord:
        """Return the publisher or raise when the id is unknown."""
        publisher = self.repository.get_publisher(publisher_id)
        if publisher is None:
            raise PublisherNotFoundError(publisher_id)
        return publisher

    def list_publishers(self, group_id: UUID | None = None) -> list[PublisherRecord]:
        """Return publishers sorted by name."""
        publishers = self.repository.list_publishers(group_id)
        return sorted(publishers, key=lambda publisher: publisher.full_name.lower())
