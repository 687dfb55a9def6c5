"""Tests for persisted configuration helpers.

Each test points ``CONFIG_PATH`` at a temporary file.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazymail import config


class ConfigTests(unittest.TestCase):
    def _with_config(self, payload):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "lazymail" / "config.json"
        if payload is not None:
            path.parent.mkdir(parents=True)
            text = payload if isinstance(payload, str) else json.dumps(payload)
            path.write_text(text, encoding="utf-8")
        patcher = mock.patch("lazymail.config.CONFIG_PATH", path)
        patcher.start()
        self.addCleanup(patcher.stop)
        return path

    def test_missing_or_malformed_config_is_empty(self) -> None:
        self._with_config(None)
        self.assertEqual(config.load_config(), {})
        self._with_config("{not json")
        self.assertEqual(config.load_config(), {})
        self._with_config([1, 2])
        self.assertEqual(config.load_config(), {})

    def test_defaults(self) -> None:
        self._with_config({})
        self.assertIsNone(config.load_theme_name())
        self.assertFalse(config.load_ascii_graphics())
        self.assertEqual(config.load_notmuch_command(), "notmuch")
        self.assertEqual(config.load_open_command(), "xdg-open")
        self.assertEqual(config.load_part_filters(), {})

    def test_values_are_type_checked(self) -> None:
        self._with_config(
            {
                "theme": 3,
                "ascii_graphics": "yes",
                "notmuch_command": "  ",
                "open_command": " mimeopen -n ",
            }
        )
        self.assertIsNone(config.load_theme_name())
        self.assertFalse(config.load_ascii_graphics())
        self.assertEqual(config.load_notmuch_command(), "notmuch")
        self.assertEqual(config.load_open_command(), "mimeopen -n")

    def test_ascii_graphics_flag(self) -> None:
        self._with_config({"ascii_graphics": True})
        self.assertTrue(config.load_ascii_graphics())

    def test_part_filters_are_normalised(self) -> None:
        self._with_config(
            {
                "part_filters": {
                    "Text/HTML": " w3m -dump -T text/html ",
                    "text/enriched": "",
                    "application/pdf": 4,
                }
            }
        )
        self.assertEqual(config.load_part_filters(), {"text/html": "w3m -dump -T text/html"})


if __name__ == "__main__":
    unittest.main()
