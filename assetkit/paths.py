"""Mapping between asset ids and filesystem paths."""

from __future__ import annotations

import os
from pathlib import Path

from .entry import DirEntry


def path_of_entry(root: str | os.PathLike[str], entry: DirEntry) -> Path:
    """Return the path a directory entry has under ``root``."""
    path = Path(root).joinpath(*(part for part in entry.id.split(".") if part))
    if entry.ext is not None and path.name:
        path = path.with_suffix(f".{entry.ext}" if entry.ext else "")
    return path


def extension_of(path: str | os.PathLike[str]) -> str | None:
    """Return the extension of ``path`` without the dot.

    Returns an empty string when there is none, and None when it is not valid text.
    """
    suffix = Path(path).suffix
    try:
        suffix.encode("utf-8")
    except UnicodeEncodeError:
        return None
    return suffix[1:]