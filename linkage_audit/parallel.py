"""Fail-fast parallel map over a thread pool."""

from __future__ import annotations

from concurrent.futures import FIRST_EXCEPTION, Executor, Future, wait
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def fail_fast_map(executor: Executor, fn: Callable[[T], R], items: Iterable[T]) -> list[R]:
    """Apply *fn* to every item on *executor* and return results in input order.

    The first exception raised by any call is re-raised as soon as it
    happens. Calls that have not started yet are cancelled; calls already
    running finish in the background and their results are discarded.
    """
    futures: list[Future[R]] = [executor.submit(fn, item) for item in items]
    if not futures:
        return []

    done, pending = wait(futures, return_when=FIRST_EXCEPTION)
    failed = next((f for f in futures if f in done and f.exception() is not None), None)
    if failed is not None:
        for f in pending:
            f.cancel()
        raise failed.exception()  # type: ignore[misc]
    return [f.result() for f in futures]
