"""A fixed-size pool of worker threads fed from a shared task queue."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from functools import partial
from typing import Any, Callable

from .thread_queue import QueueStopped, ThreadQueue

_log = logging.getLogger(__name__)


class ThreadPool:
    """Runs submitted callables on ``thread_count`` worker threads."""

    def __init__(self, thread_count: int) -> None:
        self._thread_count = thread_count
        self._queue: ThreadQueue[Callable[[], None]] = ThreadQueue()
        self._workers: list[threading.Thread] = []
        self._available = False
        self._shutdown = False
        self._lock = threading.Lock()

    def start(self) -> bool:
        """Start the workers; return False if the pool was already running."""
        with self._lock:
            if self._available:
                return False
            self._available = True
            for _ in range(self._thread_count):
                self._add_thread()
            return True

    def _add_thread(self) -> None:
        worker = threading.Thread(target=self._work, daemon=True)
        self._workers.append(worker)
        worker.start()

    def _work(self) -> None:
        while not self._shutdown:
            try:
                task = self._queue.wait_pop()
            except QueueStopped:
                return
            try:
                task()
            except Exception:
                _log.exception("task raised an exception")

    def stop(self) -> None:
        """Stop accepting tasks, release the workers and wait for them."""
        with self._lock:
            if self._available:
                self._shutdown = True
                self._queue.stop_wait()
                self._available = False
            workers, self._workers = self._workers, []
        current = threading.current_thread()
        for worker in workers:
            if worker is not current:
                worker.join()

    def _accepting(self) -> bool:
        return self._available and not self._shutdown

    def run_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> None:
        """Queue ``func(*args, **kwargs)``; dropped if the pool is not running."""
        if not self._accepting():
            return
        self._queue.push(partial(func, *args, **kwargs))

    def run_ret_task(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``func(*args, **kwargs)`` and return a future for its result."""
        if not self._accepting():
            raise RuntimeError("thread pool is not running")
        future: Future = Future()

        def task() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                future.set_result(func(*args, **kwargs))
            except BaseException as exc:
                future.set_exception(exc)

        self._queue.push(task)
        return future

    def __enter__(self) -> ThreadPool:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def __del__(self) -> None:
        try:
            self.stop()
        except Exception:
            pass