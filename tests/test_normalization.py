from __future__ import annotations

import unittest

from activity_insights.normalization import (
    normalize_identifier,
    normalize_url,
    normalize_window_title,
)


class NormalizationTests(unittest.TestCase):
    def test_strips_browser_suffix(self) -> None:
        self.assertEqual(
            normalize_window_title("chrome.exe", "Inbox (3) - Google Chrome"), "Inbox (3)"
        )
        self.assertEqual(
            normalize_window_title("com.google.Chrome", "Docs - Google Chrome"), "Docs"
        )

    def test_keeps_suffix_for_other_applications(self) -> None:
        self.assertEqual(
            normalize_window_title("code", "notes - Google Chrome"), "notes - Google Chrome"
        )

    def test_strips_extra_tab_counter(self) -> None:
        self.assertEqual(
            normalize_window_title("msedge.exe", "Jira board and 4 more pages - Microsoft Edge"),
            "Jira board",
        )

    def test_collapses_whitespace_and_empty_titles(self) -> None:
        self.assertEqual(normalize_window_title(None, "  a   b  "), "a b")
        self.assertIsNone(normalize_window_title(None, "   "))
        self.assertIsNone(normalize_window_title(None, None))

    def test_identifier_and_url(self) -> None:
        self.assertEqual(normalize_identifier("  Code.EXE "), "code.exe")
        self.assertEqual(normalize_identifier(None), "")
        self.assertIsNone(normalize_url("  "))
        self.assertEqual(normalize_url(" https://x.test "), "https://x.test")


if __name__ == "__main__":
    unittest.main()
