"""Unit tests for metadata value types and platform policies."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest import mock

import lazyls.fs.platform as platform
from lazyls.fs import (
    DeviceIDs,
    File,
    Permissions,
    Time,
    Type,
    default_executable_policy,
    device_ids,
    executable_by_mode,
    nt_to_unix_epoch,
)


class TimeTests(unittest.TestCase):
    def test_nt_epoch_maps_to_unix_epoch(self) -> None:
        self.assertEqual(nt_to_unix_epoch(116_444_736_000_000_000), (0, 0))

    def test_nt_ticks_are_hundred_nanoseconds(self) -> None:
        self.assertEqual(nt_to_unix_epoch(116_444_736_000_000_001), (0, 100))
        self.assertEqual(
            Time.from_nt_ticks(116_444_736_000_000_000 + 15 * 10_000_000 + 7),
            Time(seconds=15, nanoseconds=700),
        )

    def test_from_ns_splits_seconds(self) -> None:
        self.assertEqual(Time.from_ns(1_500_000_000_123_456_789), Time(1_500_000_000, 123_456_789))

    def test_times_order_chronologically(self) -> None:
        self.assertLess(Time(1, 999_999_999), Time(2, 0))


class PermissionsTests(unittest.TestCase):
    def test_special_bits(self) -> None:
        permissions = Permissions.from_mode(0o7000)

        self.assertTrue(permissions.setuid)
        self.assertTrue(permissions.setgid)
        self.assertTrue(permissions.sticky)
        self.assertFalse(permissions.has_any_execute())

    def test_any_execute(self) -> None:
        self.assertTrue(Permissions.from_mode(0o001).has_any_execute())
        self.assertFalse(Permissions.from_mode(0o666).has_any_execute())


class TypeTests(unittest.TestCase):
    def test_type_characters(self) -> None:
        self.assertEqual(
            "".join(kind.char for kind in Type),
            ".d|lcbs?",
        )
        self.assertTrue(Type.FILE.is_regular_file())
        self.assertFalse(Type.SPECIAL.is_regular_file())


class PlatformPolicyTests(unittest.TestCase):
    @unittest.skipUnless(hasattr(os, "makedev"), "device numbers need POSIX")
    def test_device_ids_use_os_split(self) -> None:
        self.assertEqual(device_ids(os.makedev(8, 1)), DeviceIDs(major=8, minor=1))

    def test_device_ids_fallback_split(self) -> None:
        with mock.patch.object(platform, "os", SimpleNamespace(name="nt")):
            self.assertEqual(device_ids(0x0801), DeviceIDs(major=8, minor=1))

    def test_default_policy_on_windows_matches_exe(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            tool = Path(tmp) / "setup.exe"
            tool.write_bytes(b"MZ")
            with mock.patch.object(platform, "os", SimpleNamespace(name="nt")):
                policy = default_executable_policy()

            self.assertTrue(File.new(tool, executable_policy=policy).is_executable_file())

    @unittest.skipUnless(os.name == "posix", "execute bits need POSIX")
    def test_default_policy_elsewhere_uses_mode_bits(self) -> None:
        self.assertIs(default_executable_policy(), executable_by_mode)


if __name__ == "__main__":
    unittest.main()
