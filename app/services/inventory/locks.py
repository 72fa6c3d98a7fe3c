"""
Per-hotel serialization points for inventory mutations.

Every unit of work that mutates a hotel's inventory (create, cancel,
modify, administrative updates) holds that hotel's lock from the
availability check until its transaction commits.
"""

import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator


class HotelLockRegistry:
    """Process-wide registry of re-entrant locks keyed by hotel id."""

    def __init__(self):
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, hotel_id: Any) -> threading.RLock:
        key = str(hotel_id)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, *hotel_ids: Any) -> Iterator[None]:
        """
        Hold the locks of one or more hotels.

        Locks are acquired in a fixed order so that two callers holding
        overlapping hotel sets cannot deadlock.
        """
        keys = sorted({str(hotel_id) for hotel_id in hotel_ids})
        locks = [self.lock_for(key) for key in keys]
        acquired = []
        try:
            for lock in locks:
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


# Global registry shared by every service in the process
hotel_locks = HotelLockRegistry()
