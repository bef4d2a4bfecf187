"""Classify activity events and derive workblocks, day summaries and coaching insights."""

from .aggregator import filter_events, summarize
from .classifier import classify, classify_events
from .insights import coach
from .models import (
    ActivityDaySummary,
    ActivityEvent,
    ActivityFilter,
    AIInsight,
    Application,
    ApplicationUsage,
    Category,
    DayBaseline,
    FocusSession,
    InsightContext,
    InsightPriority,
    Workblock,
    WorkblockSource,
)
from .segmenter import segment
from .validation import InvalidEventError

__version__ = "0.1.0"

__all__ = [
    "ActivityDaySummary",
    "ActivityEvent",
    "ActivityFilter",
    "AIInsight",
    "Application",
    "ApplicationUsage",
    "Category",
    "DayBaseline",
    "FocusSession",
    "InsightContext",
    "InsightPriority",
    "InvalidEventError",
    "Workblock",
    "WorkblockSource",
    "classify",
    "classify_events",
    "coach",
    "filter_events",
    "segment",
    "summarize",
    "__version__",
]
