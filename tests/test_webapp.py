from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from activity_insights.config import PipelineSettings
from activity_insights.webapp import create_app


def _raw(event_id: str, start: str, seconds: int, app: str, title: str | None = None) -> dict:
    return {
        "id": event_id,
        "userId": "user-1",
        "startTime": start,
        "durationSeconds": seconds,
        "application": {"name": app, "identifier": app.lower()},
        "windowTitle": title,
    }


DAY = {
    "events": [
        _raw("e1", "2026-01-05T10:00:00Z", 1500, "Code"),
        _raw("e2", "2026-01-05T10:25:00Z", 1500, "Code"),
        _raw("e3", "2026-01-05T11:30:00Z", 1800, "Zoom", "Standup"),
    ],
    "baseline": {
        "date": "2026-01-05",
        "totalTrackedSeconds": 4800,
        "activeSeconds": 4800,
    },
    "focusSessions": [{"actualDurationMinutes": 10}],
}


class WebAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self.client = TestClient(create_app(settings=PipelineSettings()))

    def test_status(self) -> None:
        response = self.client.get("/api/status")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["settings"]["gap_minutes"], 5.0)

    def test_classify(self) -> None:
        response = self.client.post("/api/classify", json=DAY)
        self.assertEqual(response.status_code, 200)
        categories = [event["category"] for event in response.json()["events"]]
        self.assertEqual(categories, ["focus", "focus", "meeting"])

    def test_workblocks(self) -> None:
        response = self.client.post("/api/workblocks", json=DAY)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(
            [(block["category"], len(block["activity_ids"])) for block in body["workblocks"]],
            [("focus", 2), ("meeting", 1)],
        )
        self.assertEqual(body["totals"]["focus_duration_seconds"], 3000)
        self.assertEqual([bucket["hour"] for bucket in body["hours"]], [10, 11])

    def test_workblocks_gap_override(self) -> None:
        response = self.client.post("/api/workblocks", params={"gap_minutes": 60}, json={
            "events": [
                _raw("e1", "2026-01-05T10:00:00Z", 600, "Code"),
                _raw("e2", "2026-01-05T10:40:00Z", 600, "Code"),
            ]
        })
        self.assertEqual(len(response.json()["workblocks"]), 1)

    def test_summary(self) -> None:
        response = self.client.post("/api/summary", params={"top": 1}, json=DAY)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["category_breakdown"], {"focus": 3000, "meeting": 1800})
        self.assertEqual(body["total_tracked_seconds"], 4800)
        self.assertEqual(len(body["top_applications"]), 1)
        self.assertEqual(body["top_applications"][0]["application"]["identifier"], "code")

    def test_insights(self) -> None:
        response = self.client.post("/api/insights", json=DAY)
        self.assertEqual(response.status_code, 200)
        (insight,) = response.json()["insights"]
        self.assertEqual(insight["type"], "focus-trend")
        self.assertEqual(insight["priority"], "warning")

    def test_report(self) -> None:
        response = self.client.post("/api/report", json=DAY)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(len(body["workblocks"]), 2)
        self.assertEqual(len(body["insights"]), 1)

    def test_negative_duration_is_a_bad_request(self) -> None:
        payload = {"events": [_raw("bad", "2026-01-05T10:00:00Z", -10, "Code")]}
        for path in ("/api/workblocks", "/api/summary", "/api/insights", "/api/report"):
            response = self.client.post(path, json=payload)
            self.assertEqual(response.status_code, 400, path)
            self.assertIn("bad", response.json()["detail"])

    def test_unparseable_start_time_is_unprocessable(self) -> None:
        payload = {"events": [_raw("bad", "not a time", 10, "Code")]}
        response = self.client.post("/api/summary", json=payload)
        self.assertEqual(response.status_code, 422)


if __name__ == "__main__":
    unittest.main()
