"""Messages and channels between an asset cache and its hot-reloading system."""

from __future__ import annotations

import enum
import queue
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass

from .key import AssetKey


class UpdateKind(enum.Enum):
    """The kind of change made to the state of a cache."""

    ADD_ASSET = "add_asset"
    REMOVE_ASSET = "remove_asset"
    CLEAR = "clear"


@dataclass(frozen=True)
class UpdateMessage:
    """An update of the state of an asset cache."""

    kind: UpdateKind
    key: AssetKey | None = None

    def __post_init__(self) -> None:
        if self.kind is UpdateKind.CLEAR:
            if self.key is not None:
                raise ValueError("a clear message carries no key")
        elif self.key is None:
            raise ValueError(f"a {self.kind.value} message needs a key")

    @classmethod
    def add_asset(cls, key: AssetKey) -> UpdateMessage:
        """An asset was added to the cache."""
        return cls(UpdateKind.ADD_ASSET, key)

    @classmethod
    def remove_asset(cls, key: AssetKey) -> UpdateMessage:
        """An asset was removed from the cache."""
        return cls(UpdateKind.REMOVE_ASSET, key)

    @classmethod
    def clear(cls) -> UpdateMessage:
        """The cache was cleared."""
        return cls(UpdateKind.CLEAR)


class Disconnected(Exception):
    """Raised when the other end of a channel is gone."""


class UpdateSender(ABC):
    """Receives cache updates on behalf of the hot-reloading system."""

    @abstractmethod
    def send_update(self, message: UpdateMessage) -> None:
        """Handle an update; this should be quick and must not block."""


class EventSender:
    """Sends the keys of assets that must be reloaded.

    Each send puts one batch (a tuple of keys) on the receiving queue.
    Once closed, a ``None`` is put on the queue and further sends raise
    :class:`Disconnected`.
    """

    def __init__(self, receiver: queue.Queue[tuple[AssetKey, ...] | None]) -> None:
        self._receiver = receiver
        self._closed = False
        self._lock = threading.Lock()

    def _put(self, batch: tuple[AssetKey, ...]) -> None:
        with self._lock:
            if self._closed:
                raise Disconnected("the event receiver is disconnected")
            self._receiver.put(batch)

    def send(self, event: AssetKey) -> None:
        """Send one event: the matching asset and its dependents get reloaded."""
        self._put((event,))

    def send_multiple(self, events: Iterable[AssetKey]) -> int:
        """Send several events at once and return how many were sent."""
        batch = tuple(events)
        if not batch:
            return 0
        self._put(batch)
        return len(batch)

    def close(self) -> None:
        """Disconnect the channel; the receiver then gets ``None``."""
        with self._lock:
            if not self._closed:
                self._closed = True
                self._receiver.put(None)

    @property
    def closed(self) -> bool:
        """Whether the channel has been disconnected."""
        return self._closed

    def __repr__(self) -> str:
        return f"EventSender(closed={self._closed})"


def event_channel() -> tuple[EventSender, queue.Queue[tuple[AssetKey, ...] | None]]:
    """Create a connected event sender and the queue it feeds."""
    receiver: queue.Queue[tuple[AssetKey, ...] | None] = queue.Queue()
    return EventSender(receiver), receiver