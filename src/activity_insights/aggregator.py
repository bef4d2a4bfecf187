"""Reduce a day's activity events into an ActivityDaySummary."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Optional

from .models import (
    ActivityDaySummary,
    ActivityEvent,
    ActivityFilter,
    Application,
    ApplicationUsage,
    Category,
    DayBaseline,
)
from .validation import validate_events

logger = logging.getLogger(__name__)


def summarize(
    events: Iterable[ActivityEvent],
    baseline: DayBaseline,
    top_n: Optional[int] = None,
) -> ActivityDaySummary:
    """Aggregate events into category, project and application totals.

    The baseline totals are copied into the summary as-is. ``top_n`` limits
    the number of applications returned; ``None`` keeps all of them.
    """
    if top_n is not None and top_n < 0:
        raise ValueError("top_n must be non-negative")

    ordered = sorted(validate_events(events), key=lambda event: (event.start_time, event.id))
    _log_inconsistent_baseline(baseline)

    return ActivityDaySummary(
        date=baseline.date,
        total_tracked_seconds=baseline.total_tracked_seconds,
        active_seconds=baseline.active_seconds,
        idle_seconds=baseline.idle_seconds,
        break_seconds=baseline.break_seconds,
        category_breakdown=aggregate_by_category(ordered),
        project_breakdown=aggregate_by_project(ordered),
        top_applications=tuple(aggregate_top_applications(ordered, top_n)),
    )


def aggregate_by_category(events: Iterable[ActivityEvent]) -> dict[Category, int]:
    totals: defaultdict[Category, int] = defaultdict(int)
    for event in events:
        totals[event.category] += event.duration_seconds
    return {category: totals[category] for category in Category if category in totals}


def aggregate_by_project(events: Iterable[ActivityEvent]) -> dict[str, int]:
    totals: defaultdict[str, int] = defaultdict(int)
    for event in events:
        if not event.project_id:
            continue
        totals[event.project_id] += event.duration_seconds
    return dict(sorted(totals.items()))


def aggregate_top_applications(
    events: Iterable[ActivityEvent], top_n: Optional[int] = None
) -> list[ApplicationUsage]:
    """Total seconds per application identifier, largest first.

    Ties are ordered by application name, then identifier. When an identifier
    is reported with several names, the earliest event's name is used, so
    callers should pass events in chronological order.
    """
    applications: dict[str, Application] = {}
    totals: defaultdict[str, int] = defaultdict(int)
    for event in events:
        identifier = event.application.identifier
        applications.setdefault(identifier, event.application)
        totals[identifier] += event.duration_seconds

    usages = [
        ApplicationUsage(application=applications[identifier], seconds=seconds)
        for identifier, seconds in totals.items()
    ]
    usages.sort(
        key=lambda usage: (
            -usage.seconds,
            usage.application.name,
            usage.application.identifier,
        )
    )
    if top_n is not None:
        usages = usages[:top_n]
    return usages


def filter_events(
    events: Iterable[ActivityEvent], activity_filter: ActivityFilter
) -> list[ActivityEvent]:
    """Return the events matching every criterion set on the filter."""
    matched: list[ActivityEvent] = []
    for event in events:
        if activity_filter.start is not None and event.start_time < activity_filter.start:
            continue
        if activity_filter.end is not None and event.start_time >= activity_filter.end:
            continue
        if (
            activity_filter.categories is not None
            and event.category not in activity_filter.categories
        ):
            continue
        if (
            activity_filter.project_ids is not None
            and event.project_id not in activity_filter.project_ids
        ):
            continue
        if activity_filter.tags is not None and not activity_filter.tags.intersection(
            event.tags
        ):
            continue
        matched.append(event)
    return matched


def _log_inconsistent_baseline(baseline: DayBaseline) -> None:
    accounted = baseline.active_seconds + baseline.idle_seconds + baseline.break_seconds
    if accounted > baseline.total_tracked_seconds:
        logger.debug(
            "Baseline for %s accounts for %d seconds but tracks only %d; passing through.",
            baseline.date,
            accounted,
            baseline.total_tracked_seconds,
        )
