"""Directory entries and the abstract byte sources assets are read from."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class DirEntry:
    """An entry in a source: a file (id and extension) or a directory (id only)."""

    id: str
    ext: str | None = None

    @classmethod
    def file(cls, id: str, ext: str) -> DirEntry:
        """Create an entry for a file with the given id and extension."""
        return cls(id, ext)

    @classmethod
    def directory(cls, id: str) -> DirEntry:
        """Create an entry for a directory with the given id."""
        return cls(id, None)

    def is_file(self) -> bool:
        """Return True if this entry is a file."""
        return self.ext is not None

    def is_dir(self) -> bool:
        """Return True if this entry is a directory."""
        return self.ext is None

    def parent_id(self) -> str | None:
        """Return the id of the parent directory, or None for the root."""
        if not self.id:
            return None
        parent, sep, _ = self.id.rpartition(".")
        return parent if sep else ""


class Source(ABC):
    """A store of raw bytes addressed by dotted ids and extensions."""

    @abstractmethod
    def read(self, id: str, ext: str) -> bytes:
        """Return the content of a file; raise OSError if it cannot be read."""

    @abstractmethod
    def read_dir(self, id: str) -> Iterable[DirEntry]:
        """Return the entries of a directory; raise OSError if it cannot be read."""

    @abstractmethod
    def exists(self, entry: DirEntry) -> bool:
        """Return True if the entry points at an existing entity."""

    def make_source(self) -> Source | None:
        """Return a source usable by hot-reloading, or None if unsupported."""
        return None

    def configure_hot_reloading(self, events: Any) -> Any:
        """Set up hot-reloading and return an update sender.

        The default implementation does not support hot-reloading.
        """
        raise RuntimeError("this source does not support hot-reloading")


class Empty(Source):
    """A source that contains nothing."""

    def read(self, id: str, ext: str) -> bytes:
        raise FileNotFoundError(f"no file {id!r} with extension {ext!r}")

    def read_dir(self, id: str) -> Iterable[DirEntry]:
        raise FileNotFoundError(f"no directory {id!r}")

    def exists(self, entry: DirEntry) -> bool:
        return False

    def __repr__(self) -> str:
        return "Empty()"