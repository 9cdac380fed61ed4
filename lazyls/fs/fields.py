"""Value types projected from cached file metadata.

These are what a rendering layer consumes: each one is a small immutable
value computed from an ``os.stat_result`` snapshot, never from a live stat.
"""

from __future__ import annotations

import stat
from dataclasses import dataclass
from enum import Enum

NT_EPOCH_OFFSET_SECONDS = 11_644_473_600
NT_TICKS_PER_SECOND = 10_000_000
NT_NANOSECONDS_PER_TICK = 100
NANOSECONDS_PER_SECOND = 1_000_000_000


class Type(str, Enum):
    """File type, valued by the character ``ls`` shows in the mode column."""

    FILE = "."
    DIRECTORY = "d"
    PIPE = "|"
    LINK = "l"
    CHAR_DEVICE = "c"
    BLOCK_DEVICE = "b"
    SOCKET = "s"
    SPECIAL = "?"

    @property
    def char(self) -> str:
        return self.value

    def is_regular_file(self) -> bool:
        return self is Type.FILE


@dataclass(frozen=True)
class Permissions:
    """Permission flags, one per mode bit."""

    user_read: bool
    user_write: bool
    user_execute: bool

    group_read: bool
    group_write: bool
    group_execute: bool

    other_read: bool
    other_write: bool
    other_execute: bool

    sticky: bool
    setgid: bool
    setuid: bool

    @classmethod
    def from_mode(cls, mode: int) -> "Permissions":
        """Build flags from the permission bits of ``st_mode``."""
        return cls(
            user_read=bool(mode & stat.S_IRUSR),
            user_write=bool(mode & stat.S_IWUSR),
            user_execute=bool(mode & stat.S_IXUSR),
            group_read=bool(mode & stat.S_IRGRP),
            group_write=bool(mode & stat.S_IWGRP),
            group_execute=bool(mode & stat.S_IXGRP),
            other_read=bool(mode & stat.S_IROTH),
            other_write=bool(mode & stat.S_IWOTH),
            other_execute=bool(mode & stat.S_IXOTH),
            sticky=bool(mode & stat.S_ISVTX),
            setgid=bool(mode & stat.S_ISGID),
            setuid=bool(mode & stat.S_ISUID),
        )

    def has_any_execute(self) -> bool:
        return self.user_execute or self.group_execute or self.other_execute


@dataclass(frozen=True)
class Links:
    """Hard-link count.

    ``multiple`` is only set for regular files: a directory with several
    links is normal, a regular file with several is worth highlighting.
    """

    count: int
    multiple: bool


@dataclass(frozen=True)
class User:
    """Numeric ID of the owning user. Name lookup is left to the caller."""

    id: int


@dataclass(frozen=True)
class Group:
    """Numeric ID of the owning group."""

    id: int


@dataclass(frozen=True)
class DeviceIDs:
    """Major/minor pair reported in place of a size for device files."""

    major: int
    minor: int


# No size for directories, device IDs for char/block devices, bytes otherwise.
Size = int | DeviceIDs | None

# Block count for files and links; ``None`` for everything else.
Blocks = int | None


@dataclass(frozen=True, order=True)
class Time:
    """Timestamp as ``(seconds, nanoseconds)`` since the Unix epoch."""

    seconds: int
    nanoseconds: int

    @classmethod
    def from_ns(cls, total_ns: int) -> "Time":
        seconds, nanoseconds = divmod(int(total_ns), NANOSECONDS_PER_SECOND)
        return cls(seconds=seconds, nanoseconds=nanoseconds)

    @classmethod
    def from_nt_ticks(cls, ticks: int) -> "Time":
        seconds, nanoseconds = nt_to_unix_epoch(ticks)
        return cls(seconds=seconds, nanoseconds=nanoseconds)


def nt_to_unix_epoch(ticks: int) -> tuple[int, int]:
    """Convert Windows FILETIME ticks to ``(seconds, nanoseconds)``.

    FILETIME counts 100ns ticks since 1601-01-01 UTC.
    """
    seconds, remainder = divmod(int(ticks), NT_TICKS_PER_SECOND)
    return seconds - NT_EPOCH_OFFSET_SECONDS, remainder * NT_NANOSECONDS_PER_TICK


__all__ = [
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
]
