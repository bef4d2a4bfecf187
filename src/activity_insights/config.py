"""Configuration models and helpers for the activity pipeline."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Any, Optional

from .paths import get_config_path

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineSettings:
    """Tunable parameters for segmentation, aggregation and coaching."""

    gap_tolerance: timedelta = timedelta(minutes=5)
    score_smoothing: float = 1.0
    top_applications: Optional[int] = None
    focus_ratio_threshold: float = 0.4

    @classmethod
    def from_values(
        cls,
        gap_minutes: float = 5.0,
        score_smoothing: float = 1.0,
        top_applications: int | None = None,
        focus_ratio_threshold: float = 0.4,
    ) -> "PipelineSettings":
        if gap_minutes < 0:
            raise ValueError("gap_minutes must be non-negative")
        if score_smoothing <= 0:
            raise ValueError("score_smoothing must be positive")
        if top_applications is not None and top_applications < 0:
            raise ValueError("top_applications must be non-negative")
        if not 0 <= focus_ratio_threshold <= 1:
            raise ValueError("focus_ratio_threshold must be between 0 and 1")
        return cls(
            gap_tolerance=timedelta(minutes=gap_minutes),
            score_smoothing=score_smoothing,
            top_applications=top_applications,
            focus_ratio_threshold=focus_ratio_threshold,
        )

    @property
    def gap_tolerance_seconds(self) -> float:
        return self.gap_tolerance.total_seconds()

    def as_dict(self) -> dict[str, Any]:
        return {
            "gap_minutes": self.gap_tolerance_seconds / 60.0,
            "score_smoothing": self.score_smoothing,
            "top_applications": self.top_applications,
            "focus_ratio_threshold": self.focus_ratio_threshold,
        }


_SETTING_KEYS = ("gap_minutes", "score_smoothing", "top_applications", "focus_ratio_threshold")


def load_settings(path: Optional[Path] = None) -> PipelineSettings:
    """Read settings overrides from a JSON file.

    A missing file yields the defaults. Unknown keys or invalid values raise
    ``ValueError``.
    """
    settings_path = Path(path) if path is not None else get_config_path()
    if not settings_path.exists():
        logger.debug("No settings file at %s; using defaults.", settings_path)
        return PipelineSettings()

    try:
        raw = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Settings file {settings_path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"Settings file {settings_path} must contain a JSON object")

    unknown = sorted(set(raw) - set(_SETTING_KEYS))
    if unknown:
        raise ValueError(f"Unknown settings in {settings_path}: {', '.join(unknown)}")

    logger.info("Loaded pipeline settings from %s", settings_path)
    return PipelineSettings.from_values(**raw)
