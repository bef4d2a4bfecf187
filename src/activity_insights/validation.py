"""Checks that reject malformed activity events before they are reduced."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from .models import ActivityEvent, Category


class InvalidEventError(ValueError):
    """Raised when an activity event cannot be segmented or aggregated."""

    def __init__(self, event_id: object, reason: str) -> None:
        super().__init__(f"Invalid activity event {event_id!r}: {reason}")
        self.event_id = event_id
        self.reason = reason


def validate_event(event: ActivityEvent) -> None:
    event_id = getattr(event, "id", None)
    start_time = getattr(event, "start_time", None)
    if start_time is None:
        raise InvalidEventError(event_id, "start_time is missing")
    if not isinstance(start_time, datetime):
        raise InvalidEventError(
            event_id, f"start_time must be a datetime, got {type(start_time).__name__}"
        )
    if start_time.tzinfo is None or start_time.utcoffset() is None:
        raise InvalidEventError(event_id, "start_time must be timezone-aware")

    _check_duration(event)

    category = getattr(event, "category", None)
    if category is None:
        raise InvalidEventError(event_id, "category is missing; classify the event first")
    if not isinstance(category, Category):
        raise InvalidEventError(event_id, f"unknown category {category!r}")


def validate_events(events: Iterable[ActivityEvent]) -> list[ActivityEvent]:
    """Validate every event and return them as a list."""
    checked = list(events)
    for event in checked:
        validate_event(event)
    return checked


def validate_durations(events: Iterable[ActivityEvent]) -> list[ActivityEvent]:
    """Check only durations, for callers that never look at categories."""
    checked = list(events)
    for event in checked:
        _check_duration(event)
    return checked


def _check_duration(event: ActivityEvent) -> None:
    event_id = getattr(event, "id", None)
    duration = getattr(event, "duration_seconds", None)
    if isinstance(duration, bool) or not isinstance(duration, int):
        raise InvalidEventError(event_id, "duration_seconds must be an integer")
    if duration < 0:
        raise InvalidEventError(
            event_id, f"duration_seconds must be non-negative, got {duration}"
        )
