"""A blocking FIFO queue whose waiters can be released all at once."""

from __future__ import annotations

import queue
import threading
from collections import deque
from typing import Generic, TypeVar

T = TypeVar("T")


class QueueStopped(Exception):
    """Raised by :meth:`ThreadQueue.wait_pop` once waiting has been stopped."""


class ThreadQueue(Generic[T]):
    """Thread-safe FIFO queue with blocking and non-blocking pops."""

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self._cond = threading.Condition()
        self._stopped = False

    def push(self, value: T) -> None:
        """Append ``value`` and wake every waiter."""
        with self._cond:
            self._items.append(value)
            self._cond.notify_all()

    def wait_pop(self) -> T:
        """Block until an item is available and return it.

        Raises :class:`QueueStopped` once :meth:`stop_wait` has been called,
        even if items remain.
        """
        with self._cond:
            self._cond.wait_for(lambda: self._items or self._stopped)
            if self._stopped:
                raise QueueStopped("queue no longer waits")
            return self._items.popleft()

    def try_pop(self) -> T:
        """Return the first item, or raise :class:`queue.Empty` if there is none."""
        with self._cond:
            if not self._items:
                raise queue.Empty
            return self._items.popleft()

    def empty(self) -> bool:
        """Return True if the queue holds no items."""
        with self._cond:
            return not self._items

    def stop_wait(self) -> None:
        """Release all current and future waiters."""
        with self._cond:
            if self._stopped:
                return
            self._stopped = True
            self._cond.notify_all()