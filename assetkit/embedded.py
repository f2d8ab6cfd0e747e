"""A source serving assets held in memory."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass

from .entry import DirEntry, Source


@dataclass(frozen=True)
class RawEmbedded:
    """The raw form of embedded files: ``((id, ext), content)`` pairs and
    ``(id, entries)`` pairs for directories."""

    files: Sequence[tuple[tuple[str, str], bytes]] = ()
    dirs: Sequence[tuple[str, Sequence[DirEntry]]] = ()


class Embedded(Source):
    """A source whose files and directories are held in memory."""

    def __init__(
        self,
        files: Mapping[tuple[str, str], bytes] | None = None,
        dirs: Mapping[str, Iterable[DirEntry]] | None = None,
    ) -> None:
        self._files: dict[tuple[str, str], bytes] = dict(files or {})
        self._dirs: dict[str, tuple[DirEntry, ...]] = {
            id: tuple(entries) for id, entries in (dirs or {}).items()
        }

    @classmethod
    def from_raw(cls, raw: RawEmbedded) -> Embedded:
        """Create a source from its raw representation."""
        return cls(dict(raw.files), dict(raw.dirs))

    def read(self, id: str, ext: str) -> bytes:
        try:
            return self._files[(id, ext)]
        except KeyError:
            raise FileNotFoundError(f"no embedded file {id!r} with extension {ext!r}") from None

    def read_dir(self, id: str) -> tuple[DirEntry, ...]:
        try:
            return self._dirs[id]
        except KeyError:
            raise FileNotFoundError(f"no embedded directory {id!r}") from None

    def exists(self, entry: DirEntry) -> bool:
        if entry.is_file():
            return (entry.id, entry.ext) in self._files
        return entry.id in self._dirs

    def __repr__(self) -> str:
        return f"Embedded(files={len(self._files)}, dirs={len(self._dirs)})"