"""Named locks — per-key mutex table shared by adapters of one process.

Several resources can edit the same remote workflow (the workflow itself,
its actions, triggers and parameters). They serialize on a lock keyed by
the workflow name.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import Lock
from typing import Iterator

logger = logging.getLogger(__name__)


class NamedLocks:
    """Table of ``threading.Lock`` objects created on first use."""

    def __init__(self) -> None:
        self._locks: dict[str, Lock] = {}
        self._guard = Lock()

    @staticmethod
    def key(name: str, resource_type: str) -> str:
        return f"{resource_type}.{name}"

    def _get(self, key: str) -> Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def lock(self, name: str, resource_type: str) -> Iterator[None]:
        """Hold the lock for *name* within *resource_type* for the block's duration."""
        key = self.key(name, resource_type)
        mutex = self._get(key)
        logger.debug("Locking %s", key)
        mutex.acquire()
        try:
            yield
        finally:
            mutex.release()
            logger.debug("Unlocked %s", key)

    def held(self) -> list[str]:
        """Return the keys of all currently held locks."""
        with self._guard:
            items = list(self._locks.items())
        return sorted(k for k, lock in items if lock.locked())
