# coroweave

Building blocks for driving Python coroutines by hand or across worker
threads, without an event loop.

## Contents

- `coroweave.task`: `Task` wraps a coroutine. It starts suspended, runs when
  `resume()` is called or when another coroutine awaits it, and keeps its
  result or exception (`result()`, `is_ready()`, `destroy()`). `TaskState`
  tells what it holds.
- `coroweave.generator`: `Generator` and the `generator` decorator for lazy,
  single-pass sequences. Iterating again continues where the last pass stopped.
- `coroweave.sync_wait`: `sync_wait(awaitable)` blocks the calling thread until
  the awaitable finishes, then returns its result or raises its exception.
  `SyncWaitEvent` is the resettable flag it blocks on.
- `coroweave.when_all`: `when_all(a, b, ...)` awaits several awaitables and
  gives a tuple of `WhenAllTask`; `when_all(iterable)` gives a list. Each
  task's `return_value()` returns its result or raises its exception.
- `coroweave.thread_pool`: `ThreadPool` and `ThreadPoolOptions`
  (`thread_count`, `on_thread_start_functor`, `on_thread_stop_functor`).
  Awaiting `pool.schedule()` (or `pool.yield_()`) moves a coroutine onto a
  worker thread. `size()`/`empty()` report pending work; `shutdown()` lets the
  queue drain and joins the workers. The pool is a context manager.
- `coroweave.semaphore`: `Semaphore(least_max_value, starting_value)` with
  awaitable `acquire()` giving an `AcquireResult`, plus `release()`,
  `try_acquire()`, `notify_waiters()`, `max_value()` and `value()`. A release
  hands the resource straight to a suspended waiter; waiters are not served
  in arrival order.
- `coroweave.mutex`: `Mutex` with awaitable `lock()` giving a `ScopedLock`,
  which unlocks when its `with` block ends or on `unlock()`. Waiters get the
  lock in arrival order. `try_lock()` and `unlock()` are also available.
- `coroweave.ring_buffer`: `RingBuffer(capacity)`, a bounded FIFO with awaitable
  `produce(element)` (giving a `ProduceResult`) and `consume()` (giving the
  element, or raising `RingBufferStopped` once `notify_waiters()` has stopped
  the buffer).
- `coroweave.poll`: `PollOp`, `PollStatus`, `poll_op_readable()` and
  `poll_op_writeable()`.
- `coroweave.net.ip_address`: `IpAddress` (`from_string`, `to_string`, `data`,
  `domain`; comparable and hashable), `Domain` and `domain_to_string()`.
- `coroweave.net.hostname`: `Hostname`, a comparable host name.
- `coroweave.net.status`: `ConnectStatus`, `RecvStatus`,
  `connect_status_to_string()` and `recv_status_to_string()`.
- `coroweave.net.sockets`: `Socket`, an owned descriptor with `blocking()`,
  `shutdown()`, `close()` and `native_handle()`; `SocketOptions`, `SocketType`,
  `Blocking`, `type_to_os()`, `make_socket()` and `make_accept_socket()`
  (binds, and listens for TCP).

## Example

```python
from coroweave.sync_wait import sync_wait
from coroweave.thread_pool import ThreadPool, ThreadPoolOptions
from coroweave.when_all import when_all


def main():
    with ThreadPool(ThreadPoolOptions(thread_count=4)) as pool:

        async def square(n):
            await pool.schedule()
            return n * n

        async def gather():
            tasks = await when_all([square(n) for n in range(5)])
            return [t.return_value() for t in tasks]

        print(sync_wait(gather()))  # [0, 1, 4, 9, 16]


main()
```

Parsing and printing IP addresses:

```python
from coroweave.net.ip_address import Domain, IpAddress

addr = IpAddress.from_string("127.0.0.1")
assert addr.to_string() == "127.0.0.1"
assert IpAddress.from_string("::1", Domain.IPV6).domain() is Domain.IPV6
```

## Writing your own awaitables

A `Task` only understands awaitables from this package and awaitables built
the same way: the generator returned by `__await__` yields a callable, which
the task calls with a zero-argument `resume` function. Returning `True` keeps
the coroutine suspended until `resume` is called, from any thread; returning
`False` lets it continue at once. Awaiting anything else inside a `Task`
(an asyncio future, for instance) raises `TypeError` in the coroutine.

## What it does not do

There is no I/O scheduler: nothing here waits on file descriptors, runs
timers or sleeps a coroutine. `PollOp` and `PollStatus` are plain values.
There is no TCP or UDP client or server and no DNS lookup; `ConnectStatus`
and `RecvStatus` are enumerations only, `Hostname` is just a name, and the
socket helpers create, bind, configure and close descriptors without sending
or receiving anything. There is no TLS support.

## Running the tests

```
pip install -e ".[test]"
pytest
```