"""Domain models for classified activity, workblocks, summaries and insights."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Optional


class Category(str, Enum):
    """Productivity taxonomy.

    Member order is significant: the classifier walks categories in this
    order and the first match wins.
    """

    FOCUS = "focus"
    MEETING = "meeting"
    COMMUNICATION = "communication"
    DOCUMENTATION = "documentation"
    DESIGN = "design"
    DEVELOPMENT = "development"
    RESEARCH = "research"
    BREAK = "break"
    ADMINISTRATIVE = "administrative"
    MISC = "misc"


class WorkblockSource(str, Enum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"
    INTEGRATION = "integration"


class InsightPriority(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class Application:
    name: str
    identifier: str

    def as_dict(self) -> dict[str, Any]:
        return {"name": self.name, "identifier": self.identifier}


@dataclass(frozen=True, slots=True)
class ActivityEvent:
    """One observed interval of foreground activity."""

    id: str
    user_id: str
    start_time: datetime
    captured_at: datetime
    duration_seconds: int
    application: Application
    window_title: Optional[str] = None
    url: Optional[str] = None
    category: Optional[Category] = None
    tags: tuple[str, ...] = ()
    project_id: Optional[str] = None
    task_id: Optional[str] = None

    @property
    def end_time(self) -> datetime:
        return self.start_time + timedelta(seconds=self.duration_seconds)

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "start_time": self.start_time.isoformat(),
            "captured_at": self.captured_at.isoformat(),
            "duration_seconds": self.duration_seconds,
            "application": self.application.as_dict(),
            "window_title": self.window_title,
            "url": self.url,
            "category": self.category.value if self.category else None,
            "tags": list(self.tags),
            "project_id": self.project_id,
            "task_id": self.task_id,
        }


@dataclass(frozen=True, slots=True)
class Workblock:
    """A contiguous run of activity sharing one dominant category."""

    id: str
    user_id: str
    start_time: datetime
    end_time: datetime
    duration_seconds: int
    category: Category
    activity_ids: tuple[str, ...]
    source: WorkblockSource = WorkblockSource.AUTOMATIC
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    dominant_tag: Optional[str] = None
    score: Optional[float] = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "project_id": self.project_id,
            "task_id": self.task_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration_seconds,
            "category": self.category.value,
            "source": self.source.value,
            "activity_ids": list(self.activity_ids),
            "dominant_tag": self.dominant_tag,
            "score": self.score,
        }


@dataclass(frozen=True, slots=True)
class WorkblockSeries:
    date: date
    blocks: tuple[Workblock, ...]
    total_duration_seconds: int
    focus_duration_seconds: int
    meeting_duration_seconds: int
    break_duration_seconds: int

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "blocks": [block.as_dict() for block in self.blocks],
            "total_duration_seconds": self.total_duration_seconds,
            "focus_duration_seconds": self.focus_duration_seconds,
            "meeting_duration_seconds": self.meeting_duration_seconds,
            "break_duration_seconds": self.break_duration_seconds,
        }


@dataclass(frozen=True, slots=True)
class TimelineBucket:
    """Blocks starting within one hour of the day."""

    hour: int
    total_minutes: float
    blocks: tuple[Workblock, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "hour": self.hour,
            "total_minutes": self.total_minutes,
            "block_ids": [block.id for block in self.blocks],
        }


@dataclass(frozen=True, slots=True)
class DayBaseline:
    """Day-level totals reported by the tracking subsystem."""

    date: date
    total_tracked_seconds: int = 0
    active_seconds: int = 0
    idle_seconds: int = 0
    break_seconds: int = 0


@dataclass(frozen=True, slots=True)
class ApplicationUsage:
    application: Application
    seconds: int

    def as_dict(self) -> dict[str, Any]:
        return {"application": self.application.as_dict(), "seconds": self.seconds}


@dataclass(frozen=True, slots=True)
class ActivityDaySummary:
    date: date
    total_tracked_seconds: int
    active_seconds: int
    idle_seconds: int
    break_seconds: int
    category_breakdown: dict[Category, int] = field(default_factory=dict)
    project_breakdown: dict[str, int] = field(default_factory=dict)
    top_applications: tuple[ApplicationUsage, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "total_tracked_seconds": self.total_tracked_seconds,
            "active_seconds": self.active_seconds,
            "idle_seconds": self.idle_seconds,
            "break_seconds": self.break_seconds,
            "category_breakdown": {
                category.value: seconds
                for category, seconds in self.category_breakdown.items()
            },
            "project_breakdown": dict(self.project_breakdown),
            "top_applications": [usage.as_dict() for usage in self.top_applications],
        }


@dataclass(frozen=True, slots=True)
class FocusSession:
    actual_duration_minutes: Optional[float] = None
    id: Optional[str] = None


@dataclass(frozen=True, slots=True)
class InsightContext:
    """Point-in-time snapshot handed to the insight engine."""

    activities: tuple[Any, ...] = ()
    focus_sessions: tuple[FocusSession, ...] = ()


@dataclass(frozen=True, slots=True)
class AIInsight:
    id: str
    session_id: str
    type: str
    title: str
    summary: str
    created_at: datetime
    priority: InsightPriority
    recommended_actions: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "session_id": self.session_id,
            "type": self.type,
            "title": self.title,
            "summary": self.summary,
            "created_at": self.created_at.isoformat(),
            "priority": self.priority.value,
            "recommended_actions": list(self.recommended_actions),
        }


@dataclass(frozen=True, slots=True)
class ActivityFilter:
    """Optional criteria for narrowing an event sequence.

    ``start`` is inclusive and ``end`` exclusive. Unset criteria match
    everything.
    """

    start: Optional[datetime] = None
    end: Optional[datetime] = None
    categories: Optional[frozenset[Category]] = None
    project_ids: Optional[frozenset[str]] = None
    tags: Optional[frozenset[str]] = None
