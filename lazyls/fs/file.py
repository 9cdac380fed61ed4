"""Files, and the queries that read their cached metadata.

A ``File`` wraps a path together with one ``lstat`` snapshot taken when it is
built. Every file in a listing gets its name shown, its extension matched and
its metadata queried at least once, so all of that is computed up front and
kept. The snapshot is never refreshed: a listing pass is short-lived, and two
queries on the same ``File`` must agree with each other.

Following a symlink is the only operation that touches the filesystem again
after construction. Its failures are values (``BrokenTarget`` /
``ErrorTarget``), not exceptions, because one dead link should not abort the
listing of the rest of a directory.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import TYPE_CHECKING

from .fields import (
    NANOSECONDS_PER_SECOND,
    Blocks,
    Group,
    Links,
    Permissions,
    Size,
    Time,
    Type,
    User,
)
from .platform import ExecutablePolicy, default_executable_policy, device_ids

if TYPE_CHECKING:
    from .dir import Dir

logger = logging.getLogger(__name__)


def filename(path: str | os.PathLike[str]) -> str:
    """Return the last component of ``path``, extension included.

    Paths such as ``/``, ``.`` or ``..`` have no file name of their own, so
    the raw last component is used instead.
    """
    parts = PurePath(path).parts
    if parts:
        return parts[-1]
    # PurePath(".") has no parts at all.
    logger.debug("Path %r has no last component", os.fspath(path))
    return os.fspath(path) or "."


def _extension_of(name: str) -> str | None:
    if name in {".", ".."}:
        return None
    dot = name.rfind(".")
    if dot < 0:
        return None
    return name[dot + 1 :].lower()


def ext(path: str | os.PathLike[str]) -> str | None:
    """Return the lowercased text after the last ``.`` of the file name.

    Dotfiles count: ``.vimrc`` has the extension ``vimrc``. Names without a
    dot have no extension.
    """
    return _extension_of(filename(path))


@dataclass(frozen=True)
class File:
    """A path plus the metadata snapshot taken when it was listed.

    ``parent_dir`` is set for entries produced by ``Dir.files`` and is
    ``None`` for paths handed in directly. It is only read, never mutated,
    and the listing that created it keeps it alive for the whole pass.

    ``given_path`` is the path exactly as the caller spelled it. ``Path``
    drops a trailing separator, which changes what a stat of a link to a
    directory reports, so the metadata is taken from this spelling.
    """

    name: str
    extension: str | None
    path: Path
    metadata: os.stat_result = field(repr=False)
    parent_dir: Dir | None = field(default=None, repr=False, compare=False)
    executable_policy: ExecutablePolicy = field(
        default_factory=default_executable_policy, repr=False, compare=False
    )
    given_path: str | None = field(default=None, repr=False, compare=False)

    @classmethod
    def new(
        cls,
        path: str | os.PathLike[str],
        parent_dir: Dir | None = None,
        name: str | None = None,
        *,
        executable_policy: ExecutablePolicy | None = None,
    ) -> "File":
        """Build a ``File`` from one non-following stat of ``path``.

        ``name`` skips recomputing the file name when the caller already knows
        it, as directory enumeration does. Raises ``OSError`` if the stat
        fails; a ``File`` cannot exist without metadata.
        """
        given_path = os.fspath(path)
        file_name = name if name is not None else filename(given_path)
        extension = _extension_of(file_name)

        # Stat the caller's spelling: "link/" follows the link, "link" does not.
        logger.debug("Statting file %s", given_path)
        metadata = os.lstat(given_path)

        return cls(
            name=file_name,
            extension=extension,
            path=Path(given_path),
            given_path=given_path,
            metadata=metadata,
            parent_dir=parent_dir,
            executable_policy=executable_policy or default_executable_policy(),
        )

    def is_directory(self) -> bool:
        return stat.S_ISDIR(self.metadata.st_mode)

    def is_file(self) -> bool:
        """Whether this is a regular file: not a directory, link or device."""
        return stat.S_ISREG(self.metadata.st_mode)

    def is_link(self) -> bool:
        return stat.S_ISLNK(self.metadata.st_mode)

    def is_pipe(self) -> bool:
        return stat.S_ISFIFO(self.metadata.st_mode)

    def is_char_device(self) -> bool:
        return stat.S_ISCHR(self.metadata.st_mode)

    def is_block_device(self) -> bool:
        return stat.S_ISBLK(self.metadata.st_mode)

    def is_socket(self) -> bool:
        return stat.S_ISSOCK(self.metadata.st_mode)

    def points_to_directory(self) -> bool:
        """Whether this is a directory, or a working link to one."""
        if self.is_directory():
            return True

        if self.is_link():
            target = self.link_target()
            if isinstance(target, ResolvedTarget):
                return target.file.points_to_directory()

        return False

    def is_executable_file(self) -> bool:
        """Whether this is a regular file the executable policy accepts.

        Executable files and executable directories mean different things,
        so only regular files qualify. The policy is pluggable: on platforms
        without execute bits it matches known executable extensions instead.
        """
        return self.is_file() and self.executable_policy(self)

    def to_dir(self) -> "Dir":
        """Read this file's path as a directory listing.

        Raises ``OSError`` on failure. Use ``is_directory`` to test the type.
        """
        from .dir import Dir

        return Dir.read_dir(self.path)

    def _reorient_target_path(self, path: Path) -> Path:
        """Make a link destination usable from the current working directory."""
        if path.is_absolute():
            return path
        if self.parent_dir is not None:
            return self.parent_dir.join(path)
        parent = self.path.parent
        if parent != self.path:
            return parent / path
        return self.path / path

    def link_target(self) -> "FileTarget":
        """Follow this file as a symlink.

        The raw destination (possibly relative) is kept for display and for
        the target's name; the reoriented absolute path is what gets stat'd.
        """
        logger.debug("Reading link %s", self.path)
        try:
            raw_path = self.path.readlink()
        except OSError as exc:
            return ErrorTarget(error=exc)

        absolute_path = self._reorient_target_path(raw_path)

        # Following stat: a link to a link resolves to the final target.
        try:
            metadata = absolute_path.stat()
        except OSError as exc:
            logger.debug("Error following link %s: %s", raw_path, exc)
            return BrokenTarget(path=raw_path)

        target_name = filename(raw_path)
        return ResolvedTarget(
            file=File(
                name=target_name,
                extension=_extension_of(target_name),
                path=raw_path,
                given_path=os.fspath(raw_path),
                metadata=metadata,
                parent_dir=None,
                executable_policy=self.executable_policy,
            )
        )

    def links(self) -> Links:
        count = int(self.metadata.st_nlink)
        return Links(count=count, multiple=self.is_file() and count > 1)

    def inode(self) -> int:
        return int(self.metadata.st_ino)

    def blocks(self) -> Blocks:
        """Number of filesystem blocks, for files and links only.

        Platforms without ``st_blocks`` report ``0``.
        """
        if self.is_file() or self.is_link():
            return int(getattr(self.metadata, "st_blocks", 0))
        return None

    def user(self) -> User:
        return User(id=int(self.metadata.st_uid))

    def group(self) -> Group:
        return Group(id=int(self.metadata.st_gid))

    def size(self) -> Size:
        """Byte size, device IDs, or ``None``.

        Directories get no size: the number some filesystems report for them
        tells the reader nothing. Char and block devices report their device
        IDs instead, since their byte size is usually zero.
        """
        if self.is_directory():
            return None
        if self.is_char_device() or self.is_block_device():
            return device_ids(int(getattr(self.metadata, "st_rdev", 0)))
        return int(self.metadata.st_size)

    def modified_time(self) -> Time:
        return Time.from_ns(self.metadata.st_mtime_ns)

    def accessed_time(self) -> Time:
        return Time.from_ns(self.metadata.st_atime_ns)

    def created_time(self) -> Time | None:
        """Birth time, or ``None`` where the platform does not record one."""
        birth_ns = getattr(self.metadata, "st_birthtime_ns", None)
        if birth_ns is None:
            birth = getattr(self.metadata, "st_birthtime", None)
            if birth is None:
                return None
            birth_ns = int(birth * NANOSECONDS_PER_SECOND)
        return Time.from_ns(birth_ns)

    def type_char(self) -> Type:
        """This file's type, as shown leftmost in the permissions column."""
        if self.is_file():
            return Type.FILE
        elif self.is_directory():
            return Type.DIRECTORY
        elif self.is_pipe():
            return Type.PIPE
        elif self.is_link():
            return Type.LINK
        elif self.is_char_device():
            return Type.CHAR_DEVICE
        elif self.is_block_device():
            return Type.BLOCK_DEVICE
        elif self.is_socket():
            return Type.SOCKET
        return Type.SPECIAL

    def permissions(self) -> Permissions:
        return Permissions.from_mode(self.metadata.st_mode)

    def extension_is_one_of(self, choices: Iterable[str]) -> bool:
        """Whether the extension is in ``choices``. False with no extension."""
        if self.extension is None:
            return False
        return self.extension in set(choices)

    def name_is_one_of(self, choices: Iterable[str]) -> bool:
        """Whether the full name, extension included, is in ``choices``."""
        return self.name in set(choices)


@dataclass(frozen=True)
class ResolvedTarget:
    """The link points at a file that exists."""

    file: File

    def is_broken(self) -> bool:
        return False


@dataclass(frozen=True)
class BrokenTarget:
    """The link points at nothing; ``path`` is where the file would be."""

    path: Path

    def is_broken(self) -> bool:
        return True


@dataclass(frozen=True)
class ErrorTarget:
    """Reading the link failed: not a link at all, or access was denied."""

    error: OSError

    def is_broken(self) -> bool:
        return True


FileTarget = ResolvedTarget | BrokenTarget | ErrorTarget


__all__ = [
    "File",
    "FileTarget",
    "ResolvedTarget",
    "BrokenTarget",
    "ErrorTarget",
    "filename",
    "ext",
]
