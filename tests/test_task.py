import threading

import pytest

from coroweave.task import Task


class Gate:
    """A test awaiter that suspends until opened."""

    def __init__(self):
        self._lock = threading.Lock()
        self._waiters = []
        self.opened = False

    def open(self):
        with self._lock:
            self.opened = True
            waiters, self._waiters = self._waiters, []
        for resume in waiters:
            resume()

    def _suspend(self, resume):
        with self._lock:
            if self.opened:
                return False
            self._waiters.append(resume)
            return True

    def __await__(self):
        if not self.opened:
            yield self._suspend


class Immediate:
    def __await__(self):
        yield lambda resume: False
        return "immediate"


class NotCallable:
    def __await__(self):
        yield 5


class FailingSuspend:
    def _suspend(self, resume):
        raise ValueError("suspend failed")

    def __await__(self):
        yield self._suspend


async def consumer(gate):
    await gate
    return 42


def test_single_awaiter_resumed_by_gate():
    gate = Gate()
    task = Task(consumer(gate))
    assert task.resume() is True
    assert not task.is_ready()
    gate.open()
    assert task.is_ready()
    assert task.result() == 42


def test_multiple_watchers():
    gate = Gate()
    tasks = [Task(consumer(gate)) for _ in range(3)]
    for task in tasks:
        task.resume()
    assert not any(task.is_ready() for task in tasks)
    gate.open()
    assert [task.result() for task in tasks] == [42, 42, 42]


def test_result_before_execution_raises():
    task = Task(consumer(Gate()))
    with pytest.raises(RuntimeError, match="never set"):
        task.result()
    task.destroy()


def test_task_without_coroutine_is_ready():
    task = Task()
    assert task.is_ready()
    assert task.resume() is False


def test_exception_is_rethrown_from_result():
    async def thrower():
        raise ValueError("I always throw.")

    task = Task(thrower())
    assert task.resume() is False
    with pytest.raises(ValueError, match="I always throw."):
        task.result()


def test_resume_on_finished_task_returns_false():
    async def quick():
        return "done"

    task = Task(quick())
    assert task.resume() is False
    assert task.resume() is False
    assert task.result() == "done"


def test_destroy_returns_true_once():
    task = Task(consumer(Gate()))
    assert task.destroy() is True
    assert task.destroy() is False
    assert task.is_ready()


def test_continuation_invoked_on_completion():
    gate = Gate()
    calls = []
    task = Task(consumer(gate))
    task.set_continuation(lambda: calls.append(task.result()))
    task.resume()
    assert calls == []
    gate.open()
    assert calls == [42]


def test_awaiting_another_task():
    gate = Gate()
    inner = Task(consumer(gate))

    async def outer_body():
        return await inner

    outer = Task(outer_body())
    assert outer.resume() is True
    assert not inner.is_ready()
    gate.open()
    assert inner.is_ready()
    assert outer.is_ready()
    assert outer.result() == 42


def test_awaiting_task_that_completes_synchronously():
    async def inner_body():
        return "inner"

    inner = Task(inner_body())

    async def outer_body():
        value = await inner
        return value.upper()

    outer = Task(outer_body())
    assert outer.resume() is False
    assert outer.result() == "INNER"


def test_awaiting_finished_task_returns_its_result():
    async def inner_body():
        return "inner"

    inner = Task(inner_body())
    inner.resume()

    async def outer_body():
        return await inner

    outer = Task(outer_body())
    outer.resume()
    assert outer.result() == "inner"


def test_suspend_returning_false_continues():
    async def body():
        return await Immediate()

    task = Task(body())
    assert task.resume() is False
    assert task.result() == "immediate"


def test_non_callable_yield_raises_type_error():
    async def body():
        await NotCallable()

    task = Task(body())
    task.resume()
    with pytest.raises(TypeError):
        task.result()


def test_suspend_exception_is_thrown_into_coroutine():
    async def body():
        try:
            await FailingSuspend()
        except ValueError as exc:
            return str(exc)
        return "no error"

    task = Task(body())
    task.resume()
    assert task.result() == "suspend failed"


def test_resume_from_other_thread():
    gate = Gate()
    task = Task(consumer(gate))
    task.resume()
    worker = threading.Thread(target=gate.open)
    worker.start()
    worker.join()
    assert task.is_ready()
    assert task.result() == 42


def test_multiple_suspensions_in_one_task():
    gates = [Gate(), Gate(), Gate()]
    progress = []

    async def body():
        for index, gate in enumerate(gates):
            await gate
            progress.append(index)
        return len(progress)

    task = Task(body())
    task.resume()
    for gate in gates:
        assert not task.is_ready()
        gate.open()
    assert progress == [0, 1, 2]
    assert task.result() == len(gates)