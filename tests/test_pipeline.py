from __future__ import annotations

import dataclasses
import unittest
from datetime import date, datetime, timedelta, timezone

from activity_insights.config import PipelineSettings
from activity_insights.models import (
    ActivityEvent,
    Application,
    Category,
    DayBaseline,
    FocusSession,
)
from activity_insights.pipeline import DayUnit, build_day_report, process_units
from activity_insights.validation import InvalidEventError

BASE = datetime(2026, 1, 3, 10, 0, 0, tzinfo=timezone.utc)
BASELINE = DayBaseline(
    date=date(2026, 1, 3),
    total_tracked_seconds=7200,
    active_seconds=6600,
    idle_seconds=600,
)


def _event(
    event_id: str,
    minutes_from_base: int,
    duration_minutes: int,
    app: str,
    window_title: str | None = None,
) -> ActivityEvent:
    start = BASE + timedelta(minutes=minutes_from_base)
    return ActivityEvent(
        id=event_id,
        user_id="user-1",
        start_time=start,
        captured_at=start,
        duration_seconds=duration_minutes * 60,
        application=Application(name=app, identifier=app.lower().replace(" ", "-")),
        window_title=window_title,
    )


def _day_events() -> list[ActivityEvent]:
    return [
        _event("e1", 0, 25, "VS Code", "pipeline.py"),
        _event("e2", 25, 25, "VS Code", "segmenter.py"),
        _event("e3", 90, 30, "Zoom", "Weekly sync"),
    ]


class DayReportTests(unittest.TestCase):
    def test_end_to_end_scenario(self) -> None:
        report = build_day_report(_day_events(), BASELINE)

        self.assertEqual([event.category for event in report.events], [
            Category.FOCUS,
            Category.FOCUS,
            Category.MEETING,
        ])
        self.assertEqual(len(report.workblocks), 2)
        focus, meeting = report.workblocks
        self.assertEqual((focus.start_time, focus.end_time), (BASE, BASE + timedelta(minutes=50)))
        self.assertEqual(focus.category, Category.FOCUS)
        self.assertEqual(len(focus.activity_ids), 2)
        self.assertEqual(
            (meeting.start_time, meeting.end_time),
            (BASE + timedelta(minutes=90), BASE + timedelta(minutes=120)),
        )
        self.assertEqual(meeting.category, Category.MEETING)
        self.assertEqual(len(meeting.activity_ids), 1)

        self.assertEqual(
            report.summary.category_breakdown,
            {Category.FOCUS: 3000, Category.MEETING: 1800},
        )
        self.assertEqual(report.series.focus_duration_seconds, 3000)
        self.assertEqual(report.series.meeting_duration_seconds, 1800)

        # 0 focus-session minutes against 80 tracked minutes.
        self.assertEqual(len(report.insights), 1)
        self.assertEqual(report.insights[0].type, "focus-trend")

    def test_focus_sessions_silence_the_coach(self) -> None:
        report = build_day_report(
            _day_events(), BASELINE, [FocusSession(actual_duration_minutes=50)]
        )
        self.assertEqual(report.insights, ())

    def test_existing_categories_are_kept(self) -> None:
        events = [dataclasses.replace(_day_events()[2], category=Category.RESEARCH)]
        report = build_day_report(events, BASELINE)
        self.assertEqual(report.workblocks[0].category, Category.RESEARCH)

    def test_settings_drive_segmentation(self) -> None:
        settings = PipelineSettings.from_values(gap_minutes=60)
        events = [_event("e1", 0, 10, "VS Code"), _event("e2", 50, 10, "VS Code")]
        self.assertEqual(len(build_day_report(events, BASELINE).workblocks), 2)
        self.assertEqual(len(build_day_report(events, BASELINE, settings=settings).workblocks), 1)

    def test_invalid_event_propagates(self) -> None:
        bad = dataclasses.replace(_day_events()[0], duration_seconds=-60)
        with self.assertRaises(InvalidEventError):
            build_day_report([bad], BASELINE)

    def test_empty_day(self) -> None:
        report = build_day_report([], BASELINE)
        self.assertEqual(report.workblocks, ())
        self.assertEqual(report.summary.category_breakdown, {})
        self.assertEqual(report.insights, ())

    def test_as_dict_omits_duplicate_blocks_in_series(self) -> None:
        payload = build_day_report(_day_events(), BASELINE).as_dict()
        self.assertNotIn("blocks", payload["series"])
        self.assertEqual(len(payload["workblocks"]), 2)
        self.assertEqual(payload["summary"]["date"], "2026-01-03")


class ProcessUnitsTests(unittest.TestCase):
    def test_failure_is_isolated_to_its_unit(self) -> None:
        bad = dataclasses.replace(_day_events()[0], duration_seconds=-1)
        units = {
            ("user-1", "2026-01-03"): DayUnit(events=tuple(_day_events()), baseline=BASELINE),
            ("user-2", "2026-01-03"): DayUnit(events=(bad,), baseline=BASELINE),
            ("user-3", "2026-01-03"): DayUnit(events=(), baseline=BASELINE),
        }
        with self.assertLogs("activity_insights.pipeline", level="ERROR"):
            results = process_units(units, max_workers=2)

        self.assertEqual(set(results), set(units))
        self.assertTrue(results[("user-1", "2026-01-03")].ok)
        self.assertEqual(len(results[("user-1", "2026-01-03")].report.workblocks), 2)
        failed = results[("user-2", "2026-01-03")]
        self.assertFalse(failed.ok)
        self.assertIsInstance(failed.error, InvalidEventError)
        self.assertIsNone(failed.report)
        self.assertTrue(results[("user-3", "2026-01-03")].ok)

    def test_no_units(self) -> None:
        self.assertEqual(process_units({}), {})


if __name__ == "__main__":
    unittest.main()
