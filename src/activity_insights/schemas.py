"""Pydantic wire models for raw activity samples and day payloads."""

from __future__ import annotations

import datetime as dt
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .models import (
    ActivityEvent,
    Application,
    Category,
    DayBaseline,
    FocusSession,
    InsightContext,
)
from .normalization import normalize_identifier, normalize_url, normalize_window_title


class _WireModel(BaseModel):
    # Accept both the collaborators' camelCase keys and snake_case.
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ApplicationPayload(_WireModel):
    name: str = ""
    identifier: str = ""


class ActivityEventPayload(_WireModel):
    id: str
    user_id: str = ""
    start_time: datetime
    captured_at: Optional[datetime] = None
    duration_seconds: int
    application: ApplicationPayload = Field(default_factory=ApplicationPayload)
    window_title: Optional[str] = None
    url: Optional[str] = None
    category: Optional[Category] = None
    tags: list[str] = Field(default_factory=list)
    project_id: Optional[str] = None
    task_id: Optional[str] = None

    @field_validator("start_time", "captured_at")
    @classmethod
    def _assume_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_labels(cls, value: object) -> object:
        # Tags may arrive as {"id", "label"} objects.
        if isinstance(value, list):
            return [item.get("label", "") if isinstance(item, dict) else item for item in value]
        return value

    def to_domain(self) -> ActivityEvent:
        identifier = normalize_identifier(self.application.identifier) or normalize_identifier(
            self.application.name
        )
        return ActivityEvent(
            id=self.id,
            user_id=self.user_id,
            start_time=self.start_time,
            captured_at=self.captured_at or self.start_time,
            duration_seconds=self.duration_seconds,
            application=Application(
                name=self.application.name.strip(),
                identifier=identifier,
            ),
            window_title=normalize_window_title(identifier, self.window_title),
            url=normalize_url(self.url),
            category=self.category,
            tags=tuple(tag for tag in self.tags if tag),
            project_id=self.project_id or None,
            task_id=self.task_id or None,
        )


class BaselinePayload(_WireModel):
    date: dt.date
    total_tracked_seconds: int = Field(default=0, ge=0)
    active_seconds: int = Field(default=0, ge=0)
    idle_seconds: int = Field(default=0, ge=0)
    break_seconds: int = Field(default=0, ge=0)

    def to_domain(self) -> DayBaseline:
        return DayBaseline(
            date=self.date,
            total_tracked_seconds=self.total_tracked_seconds,
            active_seconds=self.active_seconds,
            idle_seconds=self.idle_seconds,
            break_seconds=self.break_seconds,
        )


class FocusSessionPayload(_WireModel):
    id: Optional[str] = None
    actual_duration_minutes: Optional[float] = Field(default=None, ge=0)

    def to_domain(self) -> FocusSession:
        return FocusSession(actual_duration_minutes=self.actual_duration_minutes, id=self.id)


class DayPayload(_WireModel):
    """One unit of work: a user's events for one day plus its context."""

    events: list[ActivityEventPayload] = Field(default_factory=list)
    baseline: Optional[BaselinePayload] = None
    focus_sessions: list[FocusSessionPayload] = Field(default_factory=list)

    def domain_events(self) -> list[ActivityEvent]:
        return [event.to_domain() for event in self.events]

    def domain_baseline(self) -> DayBaseline:
        """Return the supplied baseline, or zero totals for the events' day."""
        if self.baseline is not None:
            return self.baseline.to_domain()
        if self.events:
            # Same local-offset convention as the hourly buckets.
            first = min(event.start_time for event in self.events)
            return DayBaseline(date=first.date())
        return DayBaseline(date=datetime.now(timezone.utc).date())

    def domain_focus_sessions(self) -> list[FocusSession]:
        return [session.to_domain() for session in self.focus_sessions]

    def insight_context(self) -> InsightContext:
        return InsightContext(
            activities=tuple(self.domain_events()),
            focus_sessions=tuple(self.domain_focus_sessions()),
        )


def load_day_payload(path: Path) -> DayPayload:
    """Read a DayPayload from a JSON file.

    A bare JSON list is accepted as the event list.
    """
    text = Path(path).read_text(encoding="utf-8")
    if text.lstrip().startswith("["):
        return DayPayload.model_validate_json('{"events": ' + text + "}")
    return DayPayload.model_validate_json(text)
