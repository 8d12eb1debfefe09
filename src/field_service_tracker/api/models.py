"""Pydantic models for field service request payloads."""

from datetime import date

from pydantic import BaseModel, ConfigDict, Field

from field_service_tracker.domain.field_service import DailyReportInput


class DailyReportPayload(BaseModel):
    """Daily field service report submitted by a publisher."""

    model_config = ConfigDict(populate_by_name=True)

    report_date: date = Field(alias="date")
    shared_in_ministry: bool = False
    hours: float | None = None
    placements: int | None = None
    videos: int | None = None
    bible_study_ids: list[str] = Field(default_factory=list)
    comments: str | None = None

    def to_input(self) -> DailyReportInput:
        """Convert the payload to the domain input, defaulting numbers to 0."""
        return DailyReportInput(
            report_date=self.report_date,
            shared_in_ministry=self.shared_in_ministry,
            hours=self.hours or 0.0,
            placements=self.placements or 0,
            videos=self.videos or 0,
            bible_study_ids=list(self.bible_study_ids),
            comments=self.comments,
        )
