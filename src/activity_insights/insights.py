"""Rule-based coaching insights."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from .models import AIInsight, InsightContext, InsightPriority
from .validation import validate_durations

logger = logging.getLogger(__name__)

FOCUS_RATIO_THRESHOLD = 0.4
FOCUS_TREND_ACTIONS = (
    "Start a 50 minute focus block",
    "Mute notifications temporarily",
)


def coach(
    context: InsightContext,
    *,
    threshold: float = FOCUS_RATIO_THRESHOLD,
    now: Optional[datetime] = None,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[AIInsight]:
    """Emit a focus-trend warning when focus time is a small share of activity.

    Returns at most one insight. Nothing is remembered between calls, so
    repeated calls on the same snapshot produce repeated insights. Raises
    ``InvalidEventError`` when an activity has a negative or non-integer
    duration.
    """
    activities = validate_durations(context.activities)
    total_minutes = sum(activity.duration_seconds for activity in activities) / 60
    focus_minutes = sum(
        session.actual_duration_minutes or 0 for session in context.focus_sessions
    )
    if total_minutes == 0:
        return []

    focus_ratio = focus_minutes / total_minutes
    logger.debug(
        "Focus ratio %.2f (%.1f of %.1f minutes).", focus_ratio, focus_minutes, total_minutes
    )
    if focus_ratio >= threshold:
        return []

    make_id = id_factory or (lambda: str(uuid.uuid4()))
    return [
        AIInsight(
            id=make_id(),
            session_id="coach",
            type="focus-trend",
            title="Low focus time detected",
            summary=(
                f"Focus time is below {threshold:.0%} of today's work. "
                "Schedule a focus block now."
            ),
            created_at=now or datetime.now(timezone.utc),
            priority=InsightPriority.WARNING,
            recommended_actions=FOCUS_TREND_ACTIONS,
        )
    ]
