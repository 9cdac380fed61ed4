"""Tests for config persistence and input sanitization."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyls import config
from lazyls.fs import File, executable_by_mode


class ConfigBehaviorTests(unittest.TestCase):
    def test_show_hidden_round_trip(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "native" / "config.json"
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                self.assertFalse(config.load_show_hidden())
                config.save_show_hidden(True)
                self.assertTrue(config.load_show_hidden())
                self.assertTrue(config_path.exists())

    def test_show_hidden_ignores_non_boolean_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                config.save_config({"show_hidden": "yes"})
                self.assertFalse(config.load_show_hidden())

    def test_load_config_tolerates_malformed_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

            config_path.write_text("[1, 2]\n", encoding="utf-8")
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_executable_extensions_are_sanitized(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                self.assertIsNone(config.load_executable_extensions())

                config.save_config({"executable_extensions": [".EXE", "bat", 3, "", " .Cmd ", "exe"]})
                self.assertEqual(config.load_executable_extensions(), ("exe", "bat", "cmd"))

                config.save_config({"executable_extensions": "exe"})
                self.assertIsNone(config.load_executable_extensions())

    def test_save_executable_extensions_keeps_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                config.save_show_hidden(True)
                config.save_executable_extensions([".COM", "com", "ps1"])

                saved = config.load_config()

            self.assertEqual(saved, {"show_hidden": True, "executable_extensions": ["com", "ps1"]})

    def test_load_executable_policy_uses_configured_extensions(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            tool = root / "deploy.ps1"
            tool.write_text("Write-Host hi\n", encoding="utf-8")
            config_path = root / "config.json"
            with mock.patch("lazyls.config.CONFIG_PATH", config_path):
                config.save_executable_extensions(["ps1"])
                policy = config.load_executable_policy()

            self.assertTrue(File.new(tool, executable_policy=policy).is_executable_file())

    @unittest.skipUnless(os.name == "posix", "execute bits need POSIX")
    def test_load_executable_policy_defaults_to_platform_policy(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazyls.config.CONFIG_PATH", Path(tmp) / "config.json"):
                self.assertIs(config.load_executable_policy(), executable_by_mode)


if __name__ == "__main__":
    unittest.main()
