"""Task runners keyed by tag, plus delayed and repeated scheduling."""

from __future__ import annotations

import heapq
import itertools
import logging
import threading
import time
from concurrent.futures import Future
from datetime import timedelta
from functools import partial
from typing import Any, Callable

from .thread_pool import ThreadPool

_log = logging.getLogger(__name__)

Task = Callable[[], Any]

_runner_tags = itertools.count(1)
_runner_tags_lock = threading.Lock()


def _next_runner_tag() -> int:
    with _runner_tags_lock:
        return next(_runner_tags)


def _seconds(delay: float | timedelta) -> float:
    if isinstance(delay, timedelta):
        return delay.total_seconds()
    return float(delay)


class _Timer:
    """Runs tasks on its own thread once their due time has come."""

    def __init__(self) -> None:
        self._heap: list[tuple[float, int, Task]] = []
        self._order = itertools.count()
        self._cond = threading.Condition()
        self._running = False
        self._pool: ThreadPool | None = None
        self._repeat_ids = itertools.count()
        self._live_repeats: set[int] = set()
        self._repeat_lock = threading.Lock()

    def start(self) -> bool:
        with self._cond:
            if self._running:
                return True
            self._running = True
            self._pool = ThreadPool(1)
        started = self._pool.start()
        self._pool.run_task(self._run)
        return started

    def stop(self) -> None:
        with self._cond:
            self._running = False
            self._cond.notify_all()
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.stop()

    def _run(self) -> None:
        while True:
            with self._cond:
                self._cond.wait_for(lambda: self._heap or not self._running)
                if not self._running:
                    return
                due, _, task = self._heap[0]
                remaining = due - time.monotonic()
                if remaining > 0:
                    self._cond.wait(remaining)
                    continue
                heapq.heappop(self._heap)
            try:
                task()
            except Exception:
                _log.exception("scheduled task raised an exception")

    def _schedule(self, task: Task, delay: float) -> None:
        with self._cond:
            heapq.heappush(self._heap, (time.monotonic() + delay, next(self._order), task))
            self._cond.notify_all()

    def post_delayed_task(self, task: Task, delay: float) -> None:
        self._schedule(task, delay)

    def post_repeated_task(self, task: Task, delay: float, repeat_num: int) -> int:
        task_id = next(self._repeat_ids)
        with self._repeat_lock:
            self._live_repeats.add(task_id)
        self._post_repeated(task, delay, task_id, repeat_num)
        return task_id

    def cancel_repeated_task(self, task_id: int) -> None:
        with self._repeat_lock:
            self._live_repeats.discard(task_id)

    def _post_repeated(self, task: Task, delay: float, task_id: int, remaining: int) -> None:
        with self._repeat_lock:
            live = task_id in self._live_repeats
        if not live or remaining == 0:
            return
        task()
        self._schedule(partial(self._post_repeated, task, delay, task_id, remaining - 1), delay)


class Executor:
    """Owns single-threaded task runners and a timer for deferred work."""

    def __init__(self) -> None:
        self._runners: dict[int, ThreadPool] = {}
        self._lock = threading.Lock()
        self._timer = _Timer()

    def add_task_runner(self, tag: int) -> int:
        """Create a runner under ``tag``, or under a fresh tag if it is taken."""
        with self._lock:
            latest = tag
            while latest in self._runners:
                latest = _next_runner_tag()
            runner = ThreadPool(1)
            runner.start()
            self._runners[latest] = runner
            return latest

    def _runner(self, tag: int) -> ThreadPool:
        with self._lock:
            try:
                return self._runners[tag]
            except KeyError:
                raise KeyError(f"no task runner with tag {tag}") from None

    def post_task(self, runner_tag: int, task: Task) -> None:
        """Run ``task`` on the runner named by ``runner_tag``."""
        self._runner(runner_tag).run_task(task)

    def post_delayed_task(self, runner_tag: int, task: Task, delay: float | timedelta) -> None:
        """Run ``task`` on the runner after ``delay`` seconds."""
        self._runner(runner_tag)
        self._timer.start()
        self._timer.post_delayed_task(partial(self.post_task, runner_tag, task), _seconds(delay))

    def post_repeated_task(
        self, runner_tag: int, task: Task, delay: float | timedelta, repeat_num: int
    ) -> int:
        """Run ``task`` now and then every ``delay``, ``repeat_num`` times in all."""
        self._runner(runner_tag)
        self._timer.start()
        return self._timer.post_repeated_task(
            partial(self.post_task, runner_tag, task), _seconds(delay), repeat_num
        )

    def cancel_repeated_task(self, task_id: int) -> None:
        """Stop further runs of a repeated task."""
        self._timer.cancel_repeated_task(task_id)

    def post_task_and_get_result(
        self, runner_tag: int, func: Callable[..., Any], *args: Any, **kwargs: Any
    ) -> Future:
        """Run ``func`` on the runner and return a future for its result."""
        return self._runner(runner_tag).run_ret_task(func, *args, **kwargs)

    def shutdown(self) -> None:
        """Stop the timer and every runner."""
        self._timer.stop()
        with self._lock:
            runners = list(self._runners.values())
            self._runners.clear()
        for runner in runners:
            runner.stop()

    def __enter__(self) -> Executor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()


class Context:
    """Process-wide holder of the shared executor."""

    _instance: Context | None = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._executor = Executor()

    @classmethod
    def get_instance(cls) -> Context:
        """Return the shared context, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def get_executor(self) -> Executor:
        """Return the executor this context owns."""
        return self._executor

    def new_task_runner(self, tag: int) -> int:
        """Create a task runner on the executor and return its tag."""
        return self._executor.add_task_runner(tag)