"""FastAPI application exposing the activity pipeline over HTTP."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware

from .aggregator import summarize
from .classifier import classify_events
from .config import PipelineSettings
from .insights import coach
from .pipeline import build_day_report
from .schemas import DayPayload
from .segmenter import bucket_by_hour, build_series, segment
from .validation import InvalidEventError

logger = logging.getLogger(__name__)


def create_app(*, settings: Optional[PipelineSettings] = None) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or PipelineSettings()

    app = FastAPI(title="Activity Insights", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.settings = resolved_settings

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        return {"status": "ok", "settings": request.app.state.settings.as_dict()}

    @app.post("/api/classify")
    def classify(payload: DayPayload) -> Dict[str, Any]:
        events = classify_events(payload.domain_events())
        return {"events": [event.as_dict() for event in events]}

    @app.post("/api/workblocks")
    def workblocks(
        payload: DayPayload,
        request: Request,
        gap_minutes: Optional[float] = Query(
            default=None,
            ge=0,
            description="Override the gap tolerance in minutes.",
        ),
    ) -> Dict[str, Any]:
        current: PipelineSettings = request.app.state.settings
        gap_seconds = (
            gap_minutes * 60.0 if gap_minutes is not None else current.gap_tolerance_seconds
        )
        events = classify_events(payload.domain_events(), keep_existing=True)
        try:
            blocks = segment(events, gap_seconds, score_smoothing=current.score_smoothing)
        except InvalidEventError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        series = build_series(payload.domain_baseline().date, blocks)
        return {
            "workblocks": [block.as_dict() for block in blocks],
            "totals": {
                key: value for key, value in series.as_dict().items() if key != "blocks"
            },
            "hours": [
                bucket.as_dict() for bucket in bucket_by_hour(blocks) if bucket.blocks
            ],
        }

    @app.post("/api/summary")
    def summary(
        payload: DayPayload,
        request: Request,
        top: Optional[int] = Query(
            default=None,
            ge=0,
            description="Number of applications to return (default: all).",
        ),
    ) -> Dict[str, Any]:
        current: PipelineSettings = request.app.state.settings
        top_n = top if top is not None else current.top_applications
        events = classify_events(payload.domain_events(), keep_existing=True)
        try:
            result = summarize(events, payload.domain_baseline(), top_n=top_n)
        except InvalidEventError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return result.as_dict()

    @app.post("/api/insights")
    def insights(payload: DayPayload, request: Request) -> Dict[str, Any]:
        current: PipelineSettings = request.app.state.settings
        try:
            generated = coach(
                payload.insight_context(), threshold=current.focus_ratio_threshold
            )
        except InvalidEventError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return {"insights": [insight.as_dict() for insight in generated]}

    @app.post("/api/report")
    def report(payload: DayPayload, request: Request) -> Dict[str, Any]:
        try:
            day = build_day_report(
                payload.domain_events(),
                payload.domain_baseline(),
                payload.domain_focus_sessions(),
                request.app.state.settings,
            )
        except InvalidEventError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        logger.info(
            "Built report for %s with %d workblocks.", day.summary.date, len(day.workblocks)
        )
        return day.as_dict()

    return app
