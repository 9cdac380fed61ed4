"""Public package surface for lazyls.

Exports the filesystem model a directory lister builds its rows from.
Most implementation lives in ``lazyls.fs``.
"""

from __future__ import annotations

import logging

from .fs import BrokenTarget, Dir, ErrorTarget, File, FileTarget, ResolvedTarget

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "File",
    "FileTarget",
    "ResolvedTarget",
    "BrokenTarget",
    "ErrorTarget",
    "Dir",
]
