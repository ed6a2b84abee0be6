"""
Pending-result store.

Maps a sender identity to the single completed answer waiting to be
collected. The dispatcher is the only writer; the reply policy is the
only reader, and every read removes the entry.

Invariants:
- At most one entry per sender (last write wins)
- load_and_clear is atomic: a value is handed out at most once
- Callers never lock; synchronization is internal
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional


@dataclass(frozen=True)
class PendingEntry:
    """A completed answer and the monotonic time it was stored."""
    value: str
    stored_at: float


class EvictionPolicy(ABC):
    """Decides whether a pending entry is too old to hand out."""

    @abstractmethod
    def is_expired(self, entry: PendingEntry, now: float) -> bool:
        raise NotImplementedError


class NoEviction(EvictionPolicy):
    """Entries live until collected. Senders who never follow up leak one entry."""

    def is_expired(self, entry: PendingEntry, now: float) -> bool:
        return False


class TTLEviction(EvictionPolicy):
    """Entries older than ttl_seconds are treated as absent."""

    def __init__(self, ttl_seconds: float):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds

    def is_expired(self, entry: PendingEntry, now: float) -> bool:
        return now - entry.stored_at >= self.ttl_seconds


class PendingResultStore(ABC):
    """
    Abstract pending-result boundary.
    The dispatcher and reply policy depend ONLY on this interface.
    """

    @abstractmethod
    def store(self, key: str, value: str) -> None:
        """Insert or overwrite the entry for key."""
        raise NotImplementedError

    @abstractmethod
    def load_and_clear(self, key: str) -> Optional[str]:
        """Atomically read and remove the entry for key. None if absent."""
        raise NotImplementedError

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def __contains__(self, key: object) -> bool:
        raise NotImplementedError


class InMemoryPendingResultStore(PendingResultStore):
    """
    Process-local store backed by a dict and a single lock.

    Safe to share between the event loop and worker threads. Nothing is
    persisted; a restart drops every pending answer.
    """

    def __init__(
        self,
        eviction: Optional[EvictionPolicy] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: Dict[str, PendingEntry] = {}
        self._lock = threading.Lock()
        self._eviction = eviction or NoEviction()
        self._clock = clock

    def store(self, key: str, value: str) -> None:
        entry = PendingEntry(value=value, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry

    def load_and_clear(self, key: str) -> Optional[str]:
        with self._lock:
            entry = self._entries.pop(key, None)
        if entry is None:
            return None
        if self._eviction.is_expired(entry, self._clock()):
            return None
        return entry.value

    def purge_expired(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [
                key for key, entry in self._entries.items()
                if self._eviction.is_expired(entry, now)
            ]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)  # type: ignore[arg-type]
        return entry is not None and not self._eviction.is_expired(entry, now)
