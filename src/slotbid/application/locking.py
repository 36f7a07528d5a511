"""Per-product mutual exclusion.

Every handler that loads, mutates and saves a product does so while
holding that product's lock, so two bids on the last unit of a slot
cannot both load the same state. Different products use different
locks and never wait on each other.
"""

from __future__ import annotations

from contextlib import contextmanager
from threading import Lock, RLock
from typing import Iterator


class ProductLocks:

    def __init__(self) -> None:
        self._guard = Lock()
        self._locks: dict[str, RLock] = {}

    def lock_for(self, product_id: str) -> RLock:
        with self._guard:
            lock = self._locks.get(product_id)
            if lock is None:
                lock = RLock()
                self._locks[product_id] = lock
            return lock

    def discard(self, product_id: str) -> None:
        """Forget the lock of a product that no longer exists."""
        with self._guard:
            self._locks.pop(product_id, None)

    @contextmanager
    def hold(self, product_id: str) -> Iterator[None]:
        with self.lock_for(product_id):
            yield


# Shared by handlers that are not given their own registry.
default_product_locks = ProductLocks()
