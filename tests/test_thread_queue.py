import queue
import threading

import pytest

from effilog.thread_queue import QueueStopped, ThreadQueue


def test_try_pop_is_fifo():
    q = ThreadQueue()
    for item in ("a", "b", "c"):
        q.push(item)
    assert [q.try_pop(), q.try_pop(), q.try_pop()] == ["a", "b", "c"]


def test_try_pop_on_empty_raises():
    q = ThreadQueue()
    with pytest.raises(queue.Empty):
        q.try_pop()


def test_empty_tracks_contents():
    q = ThreadQueue()
    assert q.empty() is True
    q.push(1)
    assert q.empty() is False
    q.try_pop()
    assert q.empty() is True


def test_wait_pop_returns_item_already_present():
    q = ThreadQueue()
    q.push(42)
    assert q.wait_pop() == 42


def test_wait_pop_blocks_until_push():
    q = ThreadQueue()
    pusher = threading.Timer(0.05, q.push, args=("item",))
    pusher.start()
    try:
        value = q.wait_pop()
    finally:
        pusher.join(2)
    assert value == "item"
    assert q.empty() is True


def test_stop_wait_releases_waiter():
    q = ThreadQueue()
    stopper = threading.Timer(0.05, q.stop_wait)
    stopper.start()
    try:
        with pytest.raises(QueueStopped):
            q.wait_pop()
    finally:
        stopper.join(2)
    assert q.empty() is True


def test_wait_pop_after_stop_raises_even_with_items():
    q = ThreadQueue()
    q.push(1)
    q.stop_wait()
    with pytest.raises(QueueStopped):
        q.wait_pop()
    assert q.try_pop() == 1


def test_stop_wait_twice_is_harmless():
    q = ThreadQueue()
    q.stop_wait()
    q.stop_wait()
    with pytest.raises(QueueStopped):
        q.wait_pop()