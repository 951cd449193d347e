"""
Parallel map: dispatch every task first, collect results lazily.

Both functions here work in two phases:

1. Dispatch (eager): reduce walks the input and submits one task per
   element, in input order. No result is awaited during this phase, so
   task i+1 never waits on task i.
2. Collection (lazy): the caller observes results position by position;
   observing position i waits for task i only.
"""

from __future__ import annotations
from typing import TypeVar, Callable, Awaitable, AsyncIterator, Iterable, Any
from concurrent.futures import Executor, Future, ThreadPoolExecutor
import asyncio
import logging

from .primitives import reduce, count, map, reorder
from .seq import Seq, Cons, EMPTY

T = TypeVar("T")
U = TypeVar("U")

logger = logging.getLogger(__name__)

THREAD_NAME_PREFIX = "lazyfold-pmap"


def _reverse(s: Iterable[T]) -> Seq[T]:
    return reduce(lambda acc, x: Cons(x, acc), EMPTY, s)


def _dispatch(submit: Callable[[Any], T], coll: Iterable[Any] | None) -> Seq[T]:
    """Submit every element of ``coll`` in order; return the handles in order."""
    pending = reduce(lambda acc, x: Cons(submit(x), acc), EMPTY, coll)
    return _reverse(pending)


def pmap(
    f: Callable[..., U],
    coll: Iterable[Any] | None,
    *colls: Iterable[Any] | None,
    executor: Executor | None = None,
    max_workers: int | None = None,
) -> Seq[U]:
    """
    Like ``map``, but ``f`` runs on worker threads.

    All tasks are submitted before this returns. The result is a lazy
    sequence in input order; observing an element blocks until its task
    is done and re-raises the task's exception if ``f`` failed. A failing
    task does not stop the others.

    Args:
        f: Function taking one argument per collection.
        executor: Pool to submit to. Left running when given; otherwise a
                  private ThreadPoolExecutor is created and shut down
                  (without waiting) once every task is submitted.
        max_workers: Size of the private pool. Ignored with ``executor``.

    Example:
        results = pmap(fetch, urls, max_workers=8)
        first = results.head    # waits for the first fetch only
    """
    if colls:
        return pmap(
            lambda args: f(*args),
            reorder((coll,) + colls),
            executor=executor,
            max_workers=max_workers,
        )

    owned = executor is None
    pool = executor
    if pool is None:
        pool = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix=THREAD_NAME_PREFIX
        )
    try:
        tasks: Seq[Future[U]] = _dispatch(lambda x: pool.submit(f, x), coll)
    finally:
        if owned:
            # Already-submitted tasks still run to completion.
            pool.shutdown(wait=False)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "pmap dispatched %d tasks (%s pool)",
            count(tasks),
            "private" if owned else "shared",
        )
    return map(Future.result, tasks)


async def _collect(tasks: Seq[asyncio.Task[U]]) -> AsyncIterator[U]:
    pending = tasks
    try:
        while not pending.is_empty():
            task = pending.head
            pending = pending.tail
            yield await task
    finally:
        # Tasks the consumer never reached: stop the running ones and
        # retrieve failures of finished ones.
        for task in pending:
            if not task.done():
                task.cancel()
            elif not task.cancelled():
                task.exception()


def apmap(
    f: Callable[..., Awaitable[U]],
    coll: Iterable[Any] | None,
    *colls: Iterable[Any] | None,
) -> AsyncIterator[U]:
    """
    Async counterpart of ``pmap`` for coroutine functions.

    Must be called while an event loop is running. Every coroutine is
    scheduled as a task before this returns; the returned async iterator
    awaits them in input order.

    Example:
        async for reply in apmap(ask_llm, prompts):
            print(reply)
    """
    if colls:
        return apmap(lambda args: f(*args), reorder((coll,) + colls))

    loop = asyncio.get_running_loop()
    tasks = _dispatch(lambda x: loop.create_task(f(x)), coll)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("apmap scheduled %d tasks", count(tasks))
    return _collect(tasks)
