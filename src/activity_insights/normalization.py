"""Cleanup applied to raw samples before they become activity events."""

from __future__ import annotations

import re
from typing import Optional

_BROWSER_SUFFIXES: dict[str, tuple[str, ...]] = {
    "msedge.exe": (" - Microsoft Edge", " — Microsoft Edge"),
    "com.microsoft.edgemac": (" - Microsoft Edge", " — Microsoft Edge"),
    "chrome.exe": (" - Google Chrome",),
    "com.google.chrome": (" - Google Chrome",),
    "firefox.exe": (" - Mozilla Firefox", " — Mozilla Firefox"),
    "org.mozilla.firefox": (" - Mozilla Firefox", " — Mozilla Firefox"),
    "brave.exe": (" - Brave",),
    "com.brave.browser": (" - Brave",),
}

_EXTRA_TAB_COUNT_PATTERN = re.compile(r"\s+and\s+\d+\s+more\s+pages?", re.IGNORECASE)
_WHITESPACE_PATTERN = re.compile(r"\s{2,}")


def normalize_identifier(value: Optional[str]) -> str:
    """Lowercase and trim an application identifier; empty when missing."""
    if value is None:
        return ""
    return value.strip().lower()


def normalize_window_title(
    application_identifier: Optional[str], window_title: Optional[str]
) -> Optional[str]:
    """Strip browser suffixes and tab counters so the page title remains."""
    if not window_title:
        return None
    normalized = window_title.strip()

    suffixes = _BROWSER_SUFFIXES.get(normalize_identifier(application_identifier), ())
    for suffix in suffixes:
        if normalized.endswith(suffix):
            normalized = normalized[: -len(suffix)].rstrip(" -")
            break

    normalized = _EXTRA_TAB_COUNT_PATTERN.sub("", normalized).strip(" -|")
    normalized = _WHITESPACE_PATTERN.sub(" ", normalized).strip()
    return normalized or None


def normalize_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    return url.strip() or None
