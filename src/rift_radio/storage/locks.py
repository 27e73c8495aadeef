"""Per-key mutual exclusion for catalog mutations."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager


class KeyedLocks:
    """A registry of locks created on demand, one per key.

    Thread-Safety:
        The registry itself is guarded by a single lock. Each key's lock is
        reference counted and dropped once no thread holds or waits on it,
        so the registry does not grow with the number of keys ever seen.

    Ordering:
        Callers that take several keys must always take them in the same
        order (track, then name, then path) to avoid deadlocks. Several
        path keys are taken together with ``hold_all``.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, tuple[threading.Lock, int]] = {}

    def _acquire_entry(self, key: str) -> threading.Lock:
        with self._guard:
            lock, refs = self._locks.get(key, (None, 0))
            if lock is None:
                lock = threading.Lock()
            self._locks[key] = (lock, refs + 1)
            return lock

    def _release_entry(self, key: str) -> None:
        with self._guard:
            lock, refs = self._locks[key]
            if refs <= 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, refs - 1)

    @contextmanager
    def hold_all(self, *keys: str) -> Iterator[None]:
        """Hold several keys at once, acquired in sorted order."""
        with ExitStack() as stack:
            for key in sorted(set(keys)):
                stack.enter_context(self.hold(key))
            yield

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        """Hold the lock for ``key`` for the duration of the block."""
        lock = self._acquire_entry(key)
        try:
            with lock:
                yield
        finally:
            self._release_entry(key)

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


def track_key(track_id: int) -> str:
    return f"track:{track_id}"


def name_key(name: str) -> str:
    return f"name:{name}"


def path_key(path: object) -> str:
    return f"path:{path}"
