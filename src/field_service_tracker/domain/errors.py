"""Domain errors for field service reporting."""

from uuid import UUID

from field_service_tracker.domain.field_service import DailyFieldServiceRecord


class FieldServiceError(Exception):
    """Base class for field service errors."""


class PublisherNotFoundError(FieldServiceError):
    """Raised when a publisher id does not resolve to a member."""

    def __init__(self, publisher_id: UUID) -> None:
        super().__init__(f"Publisher {publisher_id} not found")
        self.publisher_id = publisher_id


class DailyReportNotFoundError(FieldServiceError):
    """Raised when a daily report is missing or owned by another publisher."""

    def __init__(self, report_id: UUID) -> None:
        super().__init__(f"Daily report {report_id} not found")
        self.report_id = report_id


class InvalidReportError(FieldServiceError):
    """Raised for malformed report input."""


class AggregationError(FieldServiceError):
    """Raised when the monthly recompute fails after a committed daily change.

    `operation` tells whether the daily report was saved or deleted before
    the failure.
    """

    SAVED = "saved"
    DELETED = "deleted"

    def __init__(
        self, daily_report: DailyFieldServiceRecord, operation: str = SAVED
    ) -> None:
        super().__init__(
            f"Daily report {operation} but monthly report {daily_report.month} "
            f"for publisher {daily_report.publisher_id} was not updated"
        )
        self.daily_report = daily_report
        self.operation = operation

    @property
    def deleted(self) -> bool:
        """True when the failure followed a delete."""
        return self.operation == self.DELETED
