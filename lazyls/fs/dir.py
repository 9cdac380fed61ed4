"""Directory listings that ``File`` entries refer back to."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .file import File
from .platform import ExecutablePolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dir:
    """The paths inside one directory, read once.

    A ``Dir`` is owned by whoever lists it and must outlive every ``File``
    produced by ``files``: those hold it as their ``parent_dir`` so relative
    symlinks resolve against this directory, not the working directory.
    """

    path: Path
    contents: tuple[Path, ...]

    @classmethod
    def read_dir(cls, path: str | os.PathLike[str]) -> "Dir":
        """Read the entries of ``path``, sorted by name.

        Raises ``OSError`` when the directory cannot be scanned.
        """
        path = Path(path)
        logger.debug("Reading directory %s", path)
        with os.scandir(path) as entries:
            contents = tuple(sorted((path / entry.name for entry in entries), key=lambda item: item.name))
        return cls(path=path, contents=contents)

    def contains(self, path: str | os.PathLike[str]) -> bool:
        return Path(path) in self.contents

    def join(self, child: str | os.PathLike[str]) -> Path:
        """Interpret ``child`` relative to this directory."""
        return self.path / child

    def files(
        self,
        *,
        show_hidden: bool | None = None,
        include_dots: bool = False,
        executable_policy: ExecutablePolicy | None = None,
    ) -> tuple[list[File], list[tuple[Path, OSError]]]:
        """Build a ``File`` for each visible entry.

        Returns ``(files, failures)``. An entry whose stat fails is left out of
        ``files`` and reported in ``failures`` so the rest of the listing can
        carry on. ``include_dots`` adds ``.`` and ``..`` in front and implies
        ``show_hidden``. Unset ``show_hidden`` and ``executable_policy`` come
        from the persisted config.
        """
        from .. import config

        if show_hidden is None:
            show_hidden = config.load_show_hidden()
        policy = executable_policy or config.load_executable_policy()
        files: list[File] = []
        failures: list[tuple[Path, OSError]] = []

        candidates: list[tuple[Path, str]] = []
        if include_dots:
            candidates.append((self.path, "."))
            candidates.append((self.path / "..", ".."))
        for child_path in self.contents:
            name = child_path.name
            if not (show_hidden or include_dots) and name.startswith("."):
                continue
            candidates.append((child_path, name))

        for child_path, name in candidates:
            try:
                files.append(File.new(child_path, self, name, executable_policy=policy))
            except OSError as exc:
                logger.debug("Skipping %s: %s", child_path, exc)
                failures.append((child_path, exc))

        return files, failures


__all__ = ["Dir"]
