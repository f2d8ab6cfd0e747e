"""A source reading assets from a directory of the filesystem."""

from __future__ import annotations

import copy
import os
from pathlib import Path

from .entry import DirEntry, Source
from .hotreload import EventSender
from .paths import extension_of, path_of_entry
from .watcher import FsWatcherBuilder, QueueUpdateSender


class FileSystem(Source):
    """Loads assets from a directory; supports hot-reloading."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        root = Path(path).resolve(strict=True)
        os.listdir(root)
        self._root = root

    @property
    def root(self) -> Path:
        """The absolute path of the source's root directory."""
        return self._root

    def path_of(self, entry: DirEntry) -> Path:
        """Return the path the entry would have if it existed."""
        return path_of_entry(self._root, entry)

    def read(self, id: str, ext: str) -> bytes:
        return self.path_of(DirEntry.file(id, ext)).read_bytes()

    def read_dir(self, id: str) -> list[DirEntry]:
        entries = []
        with os.scandir(self.path_of(DirEntry.directory(id))) as it:
            for item in it:
                path = Path(item.path)
                name = path.stem
                if not name:
                    continue
                entry_id = f"{id}.{name}" if id else name
                try:
                    if item.is_file():
                        ext = extension_of(path)
                        if ext is not None:
                            entries.append(DirEntry.file(entry_id, ext))
                    elif item.is_dir():
                        entries.append(DirEntry.directory(entry_id))
                except OSError:
                    continue
        return entries

    def exists(self, entry: DirEntry) -> bool:
        return self.path_of(entry).exists()

    def make_source(self) -> FileSystem:
        return copy.copy(self)

    def configure_hot_reloading(self, events: EventSender) -> QueueUpdateSender:
        watcher = FsWatcherBuilder()
        watcher.watch(self._root)
        return watcher.build(events)

    def __repr__(self) -> str:
        return f"FileSystem(root={str(self._root)!r})"