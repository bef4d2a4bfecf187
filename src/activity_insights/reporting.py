"""Console rendering for summaries, workblocks and insights."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import ActivityDaySummary, ActivityEvent, AIInsight, Workblock


def print_summary(summary: ActivityDaySummary, limit: int = 5) -> None:
    print(f"Summary for {summary.date.isoformat()}")
    print("-" * 40)
    print(f"Tracked time: {format_duration(summary.total_tracked_seconds)}")
    print(f"Active time:  {format_duration(summary.active_seconds)}")
    print(f"Idle time:    {format_duration(summary.idle_seconds)}")
    print(f"Break time:   {format_duration(summary.break_seconds)}")

    if summary.category_breakdown:
        print()
        print("By category:")
        for category, seconds in summary.category_breakdown.items():
            print(f"  {category.value:<30} {format_duration(seconds)}")

    if summary.project_breakdown:
        print()
        print("By project:")
        for project_id, seconds in summary.project_breakdown.items():
            print(f"  {project_id:<30} {format_duration(seconds)}")

    if summary.top_applications:
        print()
        print("Top applications:")
        for usage in summary.top_applications[:limit]:
            label = usage.application.name or usage.application.identifier
            print(f"  {label[:30]:<30} {format_duration(usage.seconds)}")


def print_workblocks(blocks: Sequence[Workblock]) -> None:
    if not blocks:
        print("No workblocks for the selected events.")
        return
    for block in blocks:
        span = f"{block.start_time:%H:%M}-{block.end_time:%H:%M}"
        tag = f" #{block.dominant_tag}" if block.dominant_tag else ""
        print(
            f"  {span}  {block.category.value:<15} {format_duration(block.duration_seconds)}"
            f"  ({len(block.activity_ids)} events){tag}"
        )


def print_classifications(events: Iterable[ActivityEvent]) -> None:
    for event in events:
        label = (
            event.window_title
            or event.application.name
            or event.application.identifier
            or "(untitled)"
        )
        category = event.category.value if event.category else "-"
        print(f"  {event.id:<20} {category:<15} {label[:45]}")


def print_insights(insights: Sequence[AIInsight]) -> None:
    if not insights:
        print("No insights for this snapshot.")
        return
    for insight in insights:
        print(f"[{insight.priority.value}] {insight.title}")
        print(f"  {insight.summary}")
        for action in insight.recommended_actions:
            print(f"  - {action}")


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    hours, remainder = divmod(total_seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
