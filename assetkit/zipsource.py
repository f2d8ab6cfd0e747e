"""A source reading assets from a zip archive."""

from __future__ import annotations

import io
import logging
import os
import threading
import zipfile
from pathlib import PurePosixPath
from typing import BinaryIO

from .entry import DirEntry, Source
from .paths import extension_of

log = logging.getLogger(__name__)


def _split_name(name: str) -> tuple[str, str] | None:
    """Return the ids of an archive member's parent and of the member itself."""
    path = PurePosixPath(name)
    if path.name in ("", ".."):
        return None
    segments: list[str] = []
    for part in path.parent.parts:
        if part == "..":
            if not segments:
                return None
            segments.pop()
        elif "." in part:
            return None
        else:
            segments.append(part)
    parent_id = ".".join(segments)
    return parent_id, ".".join([*segments, path.stem])


class Zip(Source):
    """Loads assets from a zip archive backed by a seekable binary reader."""

    def __init__(self, archive: zipfile.ZipFile, owned: BinaryIO | None = None) -> None:
        self._archive = archive
        self._owned = owned
        self._lock = threading.Lock()
        self._files: dict[tuple[str, str], zipfile.ZipInfo] = {}
        self._dirs: dict[str, list[DirEntry]] = {}
        for info in archive.infolist():
            self._register(info)

    def _register(self, info: zipfile.ZipInfo) -> None:
        name = info.filename
        if "\0" in name or name.startswith("/"):
            log.warning("Suspicious path in zip archive: %r", name)
            return
        parsed = _split_name(name)
        ext = None if info.is_dir() else extension_of(PurePosixPath(name).name)
        if parsed is None or (not info.is_dir() and ext is None):
            log.warning("Unsupported path in zip archive: %r", name)
            return
        parent_id, id = parsed
        if info.is_dir():
            self._dirs.setdefault(id, [])
            entry = DirEntry.directory(id)
        else:
            self._files[(id, ext)] = info
            entry = DirEntry.file(id, ext)
        self._dirs.setdefault(parent_id, []).append(entry)

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> Zip:
        """Open the archive stored in the file at ``path``."""
        file = open(path, "rb")
        try:
            return cls._from(file, owned=file)
        except BaseException:
            file.close()
            raise

    @classmethod
    def from_bytes(cls, data: bytes) -> Zip:
        """Read an archive held in memory."""
        return cls.from_reader(io.BytesIO(data))

    @classmethod
    def from_reader(cls, reader: BinaryIO) -> Zip:
        """Read an archive from a seekable binary reader."""
        return cls._from(reader, owned=None)

    @classmethod
    def _from(cls, reader: BinaryIO, owned: BinaryIO | None) -> Zip:
        try:
            archive = zipfile.ZipFile(reader)
        except zipfile.BadZipFile as err:
            raise OSError(f"invalid zip archive: {err}") from err
        return cls(archive, owned)

    def read(self, id: str, ext: str) -> bytes:
        info = self._files.get((id, ext))
        if info is None:
            raise FileNotFoundError(f"no file {id!r} with extension {ext!r} in archive")
        with self._lock:
            try:
                return self._archive.read(info)
            except zipfile.BadZipFile as err:
                raise OSError(f"cannot read {info.filename!r}: {err}") from err

    def read_dir(self, id: str) -> tuple[DirEntry, ...]:
        entries = self._dirs.get(id)
        if entries is None:
            raise FileNotFoundError(f"no directory {id!r} in archive")
        return tuple(entries)

    def exists(self, entry: DirEntry) -> bool:
        if entry.is_file():
            return (entry.id, entry.ext) in self._files
        return entry.id in self._dirs

    def close(self) -> None:
        """Close the archive and the file it was opened from, if any."""
        self._archive.close()
        if self._owned is not None:
            self._owned.close()

    def __enter__(self) -> Zip:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"Zip(dirs={sorted(self._dirs)!r})"