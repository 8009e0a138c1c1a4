import threading
import time
from datetime import timedelta

import pytest

from effilog.executor import Context, Executor


@pytest.fixture
def executor():
    ex = Executor()
    yield ex
    ex.shutdown()


def _drain(executor, tag):
    executor.post_task_and_get_result(tag, lambda: None).result(timeout=2)


def test_add_task_runner_uses_requested_tag(executor):
    assert executor.add_task_runner(7) == 7


def test_taken_tag_gets_a_fresh_one(executor):
    first = executor.add_task_runner(5)
    second = executor.add_task_runner(5)
    assert first == 5
    assert second != first
    assert executor.post_task_and_get_result(second, lambda: "ok").result(timeout=2) == "ok"


def test_post_task_runs_on_runner(executor):
    tag = executor.add_task_runner(1)
    seen = []
    executor.post_task(tag, lambda: seen.append(threading.current_thread().name))
    _drain(executor, tag)
    assert len(seen) == 1
    assert seen[0] != threading.current_thread().name


def test_unknown_runner_raises(executor):
    with pytest.raises(KeyError):
        executor.post_task(999, lambda: None)
    with pytest.raises(KeyError):
        executor.post_task_and_get_result(999, lambda: None)


def test_post_task_and_get_result_with_args(executor):
    tag = executor.add_task_runner(1)
    future = executor.post_task_and_get_result(tag, lambda a, b=0: a * b, 6, b=7)
    assert future.result(timeout=2) == 42


def test_delayed_task_waits(executor):
    tag = executor.add_task_runner(1)
    done = threading.Event()
    start = time.monotonic()
    executor.post_delayed_task(tag, done.set, 0.1)
    assert done.wait(2) is True
    assert time.monotonic() - start >= 0.09


def test_delayed_tasks_run_in_due_order(executor):
    tag = executor.add_task_runner(1)
    seen = []
    finished = threading.Event()

    def last():
        seen.append("late")
        finished.set()

    executor.post_delayed_task(tag, last, timedelta(milliseconds=150))
    executor.post_delayed_task(tag, lambda: seen.append("early"), 0.02)
    assert finished.wait(2) is True
    assert seen == ["early", "late"]


def test_repeated_task_runs_given_number_of_times(executor):
    tag = executor.add_task_runner(1)
    count = []
    executor.post_repeated_task(tag, lambda: count.append(1), 0.01, 3)
    deadline = time.monotonic() + 2
    while len(count) < 3 and time.monotonic() < deadline:
        time.sleep(0.01)
    time.sleep(0.1)
    _drain(executor, tag)
    assert len(count) == 3


def test_repeated_task_with_zero_runs_nothing(executor):
    tag = executor.add_task_runner(1)
    count = []
    executor.post_repeated_task(tag, lambda: count.append(1), 0.01, 0)
    time.sleep(0.05)
    _drain(executor, tag)
    assert count == []


def test_cancel_repeated_task_stops_repeats(executor):
    tag = executor.add_task_runner(1)
    count = []
    task_id = executor.post_repeated_task(tag, lambda: count.append(1), 0.05, 100)
    executor.cancel_repeated_task(task_id)
    time.sleep(0.2)
    _drain(executor, tag)
    assert len(count) == 1


def test_repeated_task_ids_are_distinct(executor):
    tag = executor.add_task_runner(1)
    first = executor.post_repeated_task(tag, lambda: None, 1.0, 1)
    second = executor.post_repeated_task(tag, lambda: None, 1.0, 1)
    assert first != second


def test_shutdown_removes_runners():
    ex = Executor()
    tag = ex.add_task_runner(3)
    ex.shutdown()
    with pytest.raises(KeyError):
        ex.post_task(tag, lambda: None)


def test_context_is_a_singleton():
    tag = Context.get_instance().new_task_runner(777)
    future = Context.get_instance().get_executor().post_task_and_get_result(tag, lambda: 5)
    assert future.result(timeout=2) == 5
    assert Context.get_instance() is Context.get_instance()


def test_context_new_task_runner_is_usable():
    context = Context.get_instance()
    tag = context.new_task_runner(12345)
    result = context.get_executor().post_task_and_get_result(tag, lambda: "done")
    assert result.result(timeout=2) == "done"