"""Filesystem domain model for directory listings.

This package contains non-UI primitives:
- ``File``: a path plus its cached metadata and derived queries
- ``FileTarget`` variants returned when following a symlink
- ``Dir``: the owned listing that files refer back to
- metadata value types and pluggable platform policies
"""

from __future__ import annotations

from .fields import (
    Blocks,
    DeviceIDs,
    Group,
    Links,
    Permissions,
    Size,
    Time,
    Type,
    User,
    nt_to_unix_epoch,
)
from .file import BrokenTarget, ErrorTarget, File, FileTarget, ResolvedTarget, ext, filename
from .dir import Dir
from .platform import (
    ExecutablePolicy,
    default_executable_policy,
    device_ids,
    executable_by_extension,
    executable_by_mode,
)

__all__ = [
    "File",
    "FileTarget",
    "ResolvedTarget",
    "BrokenTarget",
    "ErrorTarget",
    "filename",
    "ext",
    "Dir",
    "Type",
    "Permissions",
    "Links",
    "User",
    "Group",
    "DeviceIDs",
    "Size",
    "Blocks",
    "Time",
    "nt_to_unix_epoch",
    "ExecutablePolicy",
    "default_executable_policy",
    "device_ids",
    "executable_by_extension",
    "executable_by_mode",
]
