"""Pluggable platform policies for metadata the stat call cannot answer alone."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from .fields import DeviceIDs

if TYPE_CHECKING:
    from .file import File

ExecutablePolicy = Callable[["File"], bool]

WINDOWS_EXECUTABLE_EXTENSIONS = frozenset({"exe"})


def executable_by_extension(extensions: Iterable[str]) -> ExecutablePolicy:
    """Return a policy treating files with one of ``extensions`` as executable.

    This stands in for execute-bit checks on platforms that have none, such
    as Windows. It says nothing about whether the current user may run the
    file. Extensions are compared lowercased and without a leading dot.
    """
    allowed = frozenset(extension.lower().lstrip(".") for extension in extensions)

    def policy(file: "File") -> bool:
        return file.extension is not None and file.extension in allowed

    return policy


def executable_by_mode(file: "File") -> bool:
    """Return whether any execute bit is set on the file's cached mode."""
    return file.permissions().has_any_execute()


def default_executable_policy() -> ExecutablePolicy:
    """Pick the executable policy for the running platform."""
    if os.name == "nt":
        return executable_by_extension(WINDOWS_EXECUTABLE_EXTENSIONS)
    return executable_by_mode


def device_ids(rdev: int) -> DeviceIDs:
    """Split a device number into its major/minor pair."""
    if hasattr(os, "major") and hasattr(os, "minor"):
        return DeviceIDs(major=os.major(rdev), minor=os.minor(rdev))
    major, minor = divmod(int(rdev), 256)
    return DeviceIDs(major=major % 256, minor=minor)


__all__ = [
    "ExecutablePolicy",
    "WINDOWS_EXECUTABLE_EXTENSIONS",
    "executable_by_extension",
    "executable_by_mode",
    "default_executable_policy",
    "device_ids",
]
