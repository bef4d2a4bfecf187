"""Keyword-based activity classification."""

from __future__ import annotations

import dataclasses
from typing import Iterable

from .models import ActivityEvent, Category

# Checked in order; the first category with a matching keyword wins.
CATEGORY_KEYWORDS: tuple[tuple[Category, tuple[str, ...]], ...] = (
    (Category.FOCUS, ("code", "editor", "ide")),
    (Category.MEETING, ("zoom", "meet", "teams")),
    (Category.COMMUNICATION, ("slack", "email", "inbox")),
    (Category.DOCUMENTATION, ("docs", "notion", "confluence")),
    (Category.DESIGN, ("figma", "sketch")),
    (Category.DEVELOPMENT, ("github", "gitlab")),
    (Category.RESEARCH, ("wiki", "research")),
    (Category.BREAK, ("spotify", "youtube")),
    (Category.ADMINISTRATIVE, ("jira", "asana")),
    (Category.MISC, ()),
)


def build_haystack(event: ActivityEvent) -> str:
    application = getattr(event, "application", None)
    parts = (
        getattr(event, "window_title", None),
        getattr(application, "name", None),
        getattr(event, "url", None),
    )
    return " ".join(part or "" for part in parts).lower()


def classify(event: ActivityEvent) -> Category:
    """Return the first category whose keywords occur in the event text."""
    haystack = build_haystack(event)
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in haystack for keyword in keywords):
            return category
    return Category.MISC


def classify_events(
    events: Iterable[ActivityEvent], *, keep_existing: bool = False
) -> list[ActivityEvent]:
    """Return copies of the events with their category assigned.

    With ``keep_existing`` only events that have no category yet are
    classified.
    """
    return [
        event
        if keep_existing and event.category is not None
        else dataclasses.replace(event, category=classify(event))
        for event in events
    ]
