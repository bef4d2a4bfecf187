"""Group classified activity events into workblocks."""

from __future__ import annotations

import logging
import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from .models import (
    ActivityEvent,
    Category,
    TimelineBucket,
    Workblock,
    WorkblockSeries,
    WorkblockSource,
)
from .validation import validate_events

logger = logging.getLogger(__name__)

WORKBLOCK_NAMESPACE = uuid.UUID("6f1c2b0e-93a4-4f55-9d8e-0c7a4b8f2d11")


@dataclass(slots=True)
class _BlockAccumulator:
    """Running state for the block currently being built."""

    events: list[ActivityEvent] = field(default_factory=list)
    category_seconds: dict[Category, int] = field(default_factory=dict)
    dominant: Optional[Category] = None
    end: Optional[datetime] = None

    def add(self, event: ActivityEvent) -> None:
        self.events.append(event)
        if self.end is None or event.end_time > self.end:
            self.end = event.end_time
        # dict preserves first-appearance order, which settles ties below.
        self.category_seconds[event.category] = (
            self.category_seconds.get(event.category, 0) + event.duration_seconds
        )
        best = max(self.category_seconds.values())
        self.dominant = next(
            category
            for category, seconds in self.category_seconds.items()
            if seconds == best
        )

    def accepts(self, event: ActivityEvent, gap_tolerance_seconds: float) -> bool:
        if self.end is None or event.category != self.dominant:
            return False
        # Measured from the latest end so far; nested events never reopen a gap.
        gap = (event.start_time - self.end).total_seconds()
        return gap <= gap_tolerance_seconds

    def close(self, score_smoothing: float) -> Workblock:
        events = self.events
        activity_ids = tuple(event.id for event in events)
        count = len(events)
        return Workblock(
            id=str(uuid.uuid5(WORKBLOCK_NAMESPACE, "|".join(activity_ids))),
            user_id=events[0].user_id,
            start_time=events[0].start_time,
            end_time=self.end,
            duration_seconds=sum(event.duration_seconds for event in events),
            category=self.dominant or Category.MISC,
            activity_ids=activity_ids,
            source=WorkblockSource.AUTOMATIC,
            project_id=_shared_value(event.project_id for event in events),
            task_id=_shared_value(event.task_id for event in events),
            dominant_tag=_dominant_tag(events),
            score=count / (count + score_smoothing),
        )


def segment(
    events: Iterable[ActivityEvent],
    gap_tolerance_seconds: float,
    *,
    score_smoothing: float = 1.0,
) -> list[Workblock]:
    """Build workblocks from events in chronological order.

    Events are sorted by start time (then id) before scanning, so the input
    order does not matter. A block is extended while the next event shares
    the block's dominant category and starts no more than
    ``gap_tolerance_seconds`` after the latest end time in the block.

    Raises ``InvalidEventError`` for malformed events and ``ValueError`` for
    a negative tolerance or a non-positive ``score_smoothing``.
    """
    if gap_tolerance_seconds < 0:
        raise ValueError("gap_tolerance_seconds must be non-negative")
    if score_smoothing <= 0:
        raise ValueError("score_smoothing must be positive")

    ordered = sorted(validate_events(events), key=lambda event: (event.start_time, event.id))
    blocks: list[Workblock] = []
    current = _BlockAccumulator()
    for event in ordered:
        if current.events and not current.accepts(event, gap_tolerance_seconds):
            blocks.append(current.close(score_smoothing))
            current = _BlockAccumulator()
        current.add(event)
    if current.events:
        blocks.append(current.close(score_smoothing))

    logger.debug("Segmented %d events into %d workblocks.", len(ordered), len(blocks))
    return blocks


def build_series(day: date, blocks: Sequence[Workblock]) -> WorkblockSeries:
    """Roll one day's workblocks up into per-category totals."""

    def seconds_for(category: Category) -> int:
        return sum(block.duration_seconds for block in blocks if block.category is category)

    return WorkblockSeries(
        date=day,
        blocks=tuple(blocks),
        total_duration_seconds=sum(block.duration_seconds for block in blocks),
        focus_duration_seconds=seconds_for(Category.FOCUS),
        meeting_duration_seconds=seconds_for(Category.MEETING),
        break_duration_seconds=seconds_for(Category.BREAK),
    )


def bucket_by_hour(blocks: Sequence[Workblock]) -> list[TimelineBucket]:
    """Return 24 hourly buckets keyed by each block's start hour."""
    grouped: dict[int, list[Workblock]] = {hour: [] for hour in range(24)}
    for block in blocks:
        grouped[block.start_time.hour].append(block)
    return [
        TimelineBucket(
            hour=hour,
            total_minutes=sum(block.duration_seconds for block in members) / 60,
            blocks=tuple(members),
        )
        for hour, members in grouped.items()
    ]


def _dominant_tag(events: Sequence[ActivityEvent]) -> Optional[str]:
    counts = Counter(tag for event in events for tag in event.tags)
    if not counts:
        return None
    # Counter keeps insertion order, so ties go to the first occurrence.
    best = max(counts.values())
    return next(tag for tag, count in counts.items() if count == best)


def _shared_value(values: Iterable[Optional[str]]) -> Optional[str]:
    distinct = set(values)
    if len(distinct) == 1:
        return distinct.pop()
    return None
