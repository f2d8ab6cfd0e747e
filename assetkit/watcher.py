"""Hot-reloading driven by filesystem events."""

from __future__ import annotations

import errno
import logging
import os
import queue
import threading
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .entry import DirEntry
from .hotreload import Disconnected, EventSender, UpdateKind, UpdateMessage, UpdateSender
from .key import AssetKey
from .paths import path_of_entry

log = logging.getLogger(__name__)

_RELOAD_EVENTS = frozenset({"modified", "created", "moved"})


class WatchedPaths:
    """Maps filesystem paths to the keys of the assets loaded from them."""

    def __init__(self, roots: Iterable[str | os.PathLike[str]] = ()) -> None:
        self.roots: tuple[Path, ...] = tuple(Path(root) for root in roots)
        self._paths: dict[Path, list[AssetKey]] = {}

    def _paths_of(self, asset: AssetKey) -> Iterator[Path]:
        for root in self.roots:
            for ext in asset.typ.extensions:
                yield path_of_entry(root, DirEntry.file(asset.id, ext))

    def add_asset(self, asset: AssetKey) -> None:
        """Watch every path the asset may be loaded from."""
        for path in self._paths_of(asset):
            keys = self._paths.setdefault(path, [])
            if asset not in keys:
                keys.append(asset)

    def remove_asset(self, asset: AssetKey) -> None:
        """Stop watching the paths the asset may be loaded from."""
        for path in self._paths_of(asset):
            self._paths.pop(path, None)

    def clear(self) -> None:
        """Stop watching every path."""
        self._paths.clear()

    def assets(self, path: str | os.PathLike[str]) -> list[AssetKey]:
        """Return the keys of the assets loaded from ``path``."""
        return list(self._paths.get(Path(path), ()))

    def apply(self, message: UpdateMessage) -> None:
        """Update the watched paths from a cache update."""
        if message.kind is UpdateKind.ADD_ASSET:
            self.add_asset(message.key)
        elif message.kind is UpdateKind.REMOVE_ASSET:
            self.remove_asset(message.key)
        else:
            self.clear()

    def __len__(self) -> int:
        return len(self._paths)


class QueueUpdateSender(UpdateSender):
    """An update sender that puts cache updates on a queue.

    Closing it puts ``None`` on the queue; later updates are dropped.
    """

    def __init__(
        self,
        updates: queue.Queue[UpdateMessage | None] | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.updates: queue.Queue[UpdateMessage | None] = (
            updates if updates is not None else queue.Queue()
        )
        self._on_close = on_close
        self._closed = False

    def send_update(self, message: UpdateMessage) -> None:
        if not self._closed:
            self.updates.put(message)

    def close(self) -> None:
        """Stop forwarding updates and stop whatever consumes them."""
        if self._closed:
            return
        self._closed = True
        self.updates.put(None)
        if self._on_close is not None:
            self._on_close()

    @property
    def closed(self) -> bool:
        """Whether the sender has been closed."""
        return self._closed


class _Handler(FileSystemEventHandler):
    def __init__(self, sink: queue.Queue[Path | None]) -> None:
        super().__init__()
        self._sink = sink

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in _RELOAD_EVENTS:
            return
        raw = event.dest_path if event.event_type == "moved" else event.src_path
        if raw:
            self._sink.put(Path(os.fsdecode(raw)))


def _translate(
    observer: Observer,
    roots: list[Path],
    fs_events: queue.Queue[Path | None],
    updates: queue.Queue[UpdateMessage | None],
    events: EventSender,
) -> None:
    log.debug("Starting hot-reloading translation thread")
    watched = WatchedPaths(roots)
    try:
        while True:
            path = fs_events.get()
            if path is None:
                return
            while True:
                try:
                    message = updates.get_nowait()
                except queue.Empty:
                    break
                if message is None:
                    return
                watched.apply(message)

            log.debug("Received filesystem event for %s", path)
            for asset in watched.assets(path):
                try:
                    events.send(asset)
                except Disconnected:
                    return
    finally:
        observer.stop()


class FsWatcherBuilder:
    """Sets up hot-reloading from filesystem events for a set of directories."""

    def __init__(self) -> None:
        self.roots: list[Path] = []
        self._observer = Observer()
        self._fs_events: queue.Queue[Path | None] = queue.Queue()
        self._handler = _Handler(self._fs_events)
        self._built = False

    def _check_not_built(self) -> None:
        if self._built:
            raise RuntimeError("the watcher has already been started")

    def watch(self, path: str | os.PathLike[str]) -> None:
        """Add a directory to watch recursively."""
        self._check_not_built()
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(errno.ENOENT, "cannot watch a missing path", str(path))
        self._observer.schedule(self._handler, str(path), recursive=True)
        self.roots.append(path)

    def build(self, events: EventSender) -> QueueUpdateSender:
        """Start watching and return the sender the cache reports updates to."""
        self._check_not_built()
        self._built = True
        updates: queue.Queue[UpdateMessage | None] = queue.Queue()
        self._observer.start()
        thread = threading.Thread(
            target=_translate,
            args=(self._observer, list(self.roots), self._fs_events, updates, events),
            name="assets_translate",
            daemon=True,
        )
        thread.start()
        return QueueUpdateSender(updates, on_close=lambda: self._fs_events.put(None))

    def __repr__(self) -> str:
        return f"FsWatcherBuilder(roots={self.roots!r})"