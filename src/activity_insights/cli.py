"""Command-line interface for the activity insights pipeline."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError

from .config import PipelineSettings, load_settings
from .schemas import DayPayload, load_day_payload

app = typer.Typer(help="Turn raw activity samples into workblocks, summaries and insights.")


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


EVENTS_ARGUMENT = typer.Argument(
    ...,
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
    help="JSON file with a day payload or a list of activity events.",
)
SETTINGS_OPTION = typer.Option(
    None,
    "--settings",
    path_type=Path,
    help="Settings JSON file (defaults to the user config directory).",
)
JSON_OPTION = typer.Option(False, "--json", help="Print machine-readable JSON.")


@app.command()
def classify(
    events_path: Path = EVENTS_ARGUMENT,
    as_json: bool = JSON_OPTION,
) -> None:
    """Print the category assigned to each event."""
    from .classifier import classify_events
    from .reporting import print_classifications

    payload = _load_payload(events_path)
    events = classify_events(payload.domain_events())
    if as_json:
        _echo_json([event.as_dict() for event in events])
        return
    print_classifications(events)


@app.command()
def workblocks(
    events_path: Path = EVENTS_ARGUMENT,
    gap_minutes: Optional[float] = typer.Option(
        None, "--gap", min=0.0, help="Largest gap in minutes that keeps a block open."
    ),
    settings_path: Optional[Path] = SETTINGS_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Group events into workblocks."""
    from .classifier import classify_events
    from .reporting import print_workblocks
    from .segmenter import segment

    settings = _resolve_settings(settings_path, gap_minutes=gap_minutes)
    payload = _load_payload(events_path)
    events = classify_events(payload.domain_events(), keep_existing=True)
    blocks = _guard(
        lambda: segment(
            events,
            settings.gap_tolerance_seconds,
            score_smoothing=settings.score_smoothing,
        )
    )
    if as_json:
        _echo_json([block.as_dict() for block in blocks])
        return
    print_workblocks(blocks)


@app.command()
def summary(
    events_path: Path = EVENTS_ARGUMENT,
    top: Optional[int] = typer.Option(
        None, "--top", min=0, help="Number of applications to list (default: all)."
    ),
    settings_path: Optional[Path] = SETTINGS_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Print the day summary for the events."""
    from .aggregator import summarize
    from .classifier import classify_events
    from .reporting import print_summary

    settings = _resolve_settings(settings_path, top_applications=top)
    payload = _load_payload(events_path)
    events = classify_events(payload.domain_events(), keep_existing=True)
    result = _guard(
        lambda: summarize(events, payload.domain_baseline(), top_n=settings.top_applications)
    )
    if as_json:
        _echo_json(result.as_dict())
        return
    print_summary(result, limit=len(result.top_applications))


@app.command()
def coach(
    events_path: Path = EVENTS_ARGUMENT,
    settings_path: Optional[Path] = SETTINGS_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Evaluate the focus ratio and print coaching insights."""
    from .insights import coach as generate_insights
    from .reporting import print_insights

    settings = _resolve_settings(settings_path)
    payload = _load_payload(events_path)
    insights = _guard(
        lambda: generate_insights(
            payload.insight_context(), threshold=settings.focus_ratio_threshold
        )
    )
    if as_json:
        _echo_json([insight.as_dict() for insight in insights])
        return
    print_insights(insights)


@app.command()
def report(
    events_path: Path = EVENTS_ARGUMENT,
    gap_minutes: Optional[float] = typer.Option(
        None, "--gap", min=0.0, help="Largest gap in minutes that keeps a block open."
    ),
    top: Optional[int] = typer.Option(
        None, "--top", min=0, help="Number of applications to list (default: all)."
    ),
    settings_path: Optional[Path] = SETTINGS_OPTION,
    as_json: bool = JSON_OPTION,
) -> None:
    """Run the whole pipeline and print every result."""
    from .pipeline import build_day_report
    from .reporting import print_insights, print_summary, print_workblocks

    settings = _resolve_settings(settings_path, gap_minutes=gap_minutes, top_applications=top)
    payload = _load_payload(events_path)
    day = _guard(
        lambda: build_day_report(
            payload.domain_events(),
            payload.domain_baseline(),
            payload.domain_focus_sessions(),
            settings,
        )
    )
    if as_json:
        _echo_json(day.as_dict())
        return
    print_summary(day.summary, limit=len(day.summary.top_applications))
    print()
    print("Workblocks:")
    print_workblocks(day.workblocks)
    print()
    print_insights(day.insights)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the API."),
    port: int = typer.Option(8765, "--port", min=1, max=65535, help="TCP port for the API."),
    settings_path: Optional[Path] = SETTINGS_OPTION,
) -> None:
    """Start the HTTP API."""
    from .server_runner import run_server

    run_server(host=host, port=port, settings=_resolve_settings(settings_path))


def _resolve_settings(
    settings_path: Optional[Path],
    *,
    gap_minutes: Optional[float] = None,
    top_applications: Optional[int] = None,
) -> PipelineSettings:
    settings = _guard(lambda: load_settings(settings_path))
    overrides: dict[str, Any] = {}
    if gap_minutes is not None:
        overrides["gap_minutes"] = gap_minutes
    if top_applications is not None:
        overrides["top_applications"] = top_applications
    if not overrides:
        return settings
    merged = {**settings.as_dict(), **overrides}
    return _guard(lambda: PipelineSettings.from_values(**merged))


def _load_payload(path: Path) -> DayPayload:
    try:
        return load_day_payload(path)
    except ValidationError as exc:
        typer.echo(f"Invalid input in {path}:\n{exc}", err=True)
        raise typer.Exit(code=1) from exc


def _guard(action):
    try:
        return action()
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


if __name__ == "__main__":
    app()
