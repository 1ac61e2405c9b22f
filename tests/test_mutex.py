import pytest

from coroweave.mutex import Mutex, ScopedLock
from coroweave.sync_wait import sync_wait
from coroweave.task import Task
from coroweave.thread_pool import ThreadPool, ThreadPoolOptions
from coroweave.when_all import when_all


def test_try_lock_and_unlock():
    m = Mutex()
    assert m.try_lock() is True
    assert m.try_lock() is False
    m.unlock()
    assert m.try_lock() is True


def test_unlock_unlocked_raises():
    m = Mutex()
    with pytest.raises(RuntimeError):
        m.unlock()


def test_lock_returns_scoped_lock_released_on_exit():
    m = Mutex()
    scoped = sync_wait(m.lock())
    assert isinstance(scoped, ScopedLock)
    assert m.try_lock() is False
    with scoped:
        pass
    assert m.try_lock() is True


def test_scoped_unlock_is_idempotent():
    m = Mutex()
    scoped = sync_wait(m.lock())
    scoped.unlock()
    assert m.try_lock() is True
    scoped.unlock()
    assert m.try_lock() is False


def test_waiters_acquire_in_order():
    m = Mutex()
    order = []

    async def worker(name):
        with await m.lock():
            order.append(name)

    assert m.try_lock()
    first = Task(worker("first"))
    second = Task(worker("second"))
    first.resume()
    second.resume()
    assert order == []
    assert not first.is_ready()
    m.unlock()
    assert order == ["first", "second"]
    assert first.is_ready() and second.is_ready()
    assert m.try_lock() is True


def test_lock_protects_shared_counter_across_threads():
    m = Mutex()
    state = {"count": 0}

    with ThreadPool(ThreadPoolOptions(thread_count=4)) as pool:

        async def worker():
            await pool.schedule()
            for _ in range(50):
                with await m.lock():
                    value = state["count"]
                    state["count"] = value + 1

        sync_wait(when_all([worker() for _ in range(8)]))

    assert state["count"] == 8 * 50
    assert m.try_lock() is True