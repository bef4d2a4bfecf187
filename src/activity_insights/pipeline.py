"""End-to-end day processing: classify, segment, summarize, coach."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping, Optional, Sequence

from .aggregator import summarize
from .classifier import classify_events
from .config import PipelineSettings
from .insights import coach
from .models import (
    ActivityDaySummary,
    ActivityEvent,
    AIInsight,
    DayBaseline,
    FocusSession,
    InsightContext,
    Workblock,
    WorkblockSeries,
)
from .segmenter import build_series, segment

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DayReport:
    events: tuple[ActivityEvent, ...]
    workblocks: tuple[Workblock, ...]
    series: WorkblockSeries
    summary: ActivityDaySummary
    insights: tuple[AIInsight, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "events": [event.as_dict() for event in self.events],
            "workblocks": [block.as_dict() for block in self.workblocks],
            "series": {
                key: value for key, value in self.series.as_dict().items() if key != "blocks"
            },
            "summary": self.summary.as_dict(),
            "insights": [insight.as_dict() for insight in self.insights],
        }


@dataclass(frozen=True, slots=True)
class DayUnit:
    """One user's one day of input."""

    events: tuple[ActivityEvent, ...]
    baseline: DayBaseline
    focus_sessions: tuple[FocusSession, ...] = ()


@dataclass(frozen=True, slots=True)
class UnitResult:
    report: Optional[DayReport] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def build_day_report(
    events: Iterable[ActivityEvent],
    baseline: DayBaseline,
    focus_sessions: Sequence[FocusSession] = (),
    settings: Optional[PipelineSettings] = None,
) -> DayReport:
    """Run the full pipeline over one day of events.

    Events that already carry a category keep it; the rest are classified.
    Validation errors from segmentation or aggregation propagate unchanged.
    """
    settings = settings or PipelineSettings()
    classified = classify_events(events, keep_existing=True)
    workblocks = segment(
        classified,
        settings.gap_tolerance_seconds,
        score_smoothing=settings.score_smoothing,
    )
    summary = summarize(classified, baseline, top_n=settings.top_applications)
    insights = coach(
        InsightContext(activities=tuple(classified), focus_sessions=tuple(focus_sessions)),
        threshold=settings.focus_ratio_threshold,
    )
    logger.debug(
        "Built report for %s: %d events, %d workblocks, %d insights.",
        baseline.date,
        len(classified),
        len(workblocks),
        len(insights),
    )
    return DayReport(
        events=tuple(classified),
        workblocks=tuple(workblocks),
        series=build_series(baseline.date, workblocks),
        summary=summary,
        insights=tuple(insights),
    )


def process_units(
    units: Mapping[Hashable, DayUnit],
    settings: Optional[PipelineSettings] = None,
    max_workers: Optional[int] = None,
) -> dict[Hashable, UnitResult]:
    """Build reports for independent units concurrently.

    A unit that fails keeps its exception in its own ``UnitResult``; the other
    units are unaffected.
    """
    settings = settings or PipelineSettings()
    if not units:
        return {}

    def run(key: Hashable, unit: DayUnit) -> UnitResult:
        try:
            report = build_day_report(
                unit.events, unit.baseline, unit.focus_sessions, settings
            )
        except Exception as exc:
            logger.exception("Failed to build report for unit %r", key)
            return UnitResult(error=exc)
        return UnitResult(report=report)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {key: executor.submit(run, key, unit) for key, unit in units.items()}
        results = {key: future.result() for key, future in futures.items()}

    failed = sum(1 for result in results.values() if not result.ok)
    logger.info("Processed %d units (%d failed).", len(results), failed)
    return results
