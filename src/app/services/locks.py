"""
Keyed Locks

Per-key mutual exclusion for check-then-act sequences (one delegation, one
pass). Keys that nobody holds or waits on are dropped, so the table only
grows with contention, not with traffic.

Ordering: a ("delegation", id) lock is always taken before a ("pass", id)
lock, and both before the unit of work they guard is entered.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Hashable


class KeyedLock:
    def __init__(self):
        self._locks: Dict[Hashable, asyncio.Lock] = {}
        self._holders: Dict[Hashable, int] = {}

    @asynccontextmanager
    async def hold(self, key: Hashable) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._holders[key] = self._holders.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[key] -= 1
            if self._holders[key] == 0:
                del self._holders[key]
                del self._locks[key]
