"""Ordered, bounded concurrent mapping over an iterable."""

from __future__ import annotations

from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Iterable, Iterator, TypeVar

T = TypeVar("T")
V = TypeVar("V")


def parallel_map(
    iterable: Iterable[T], func: Callable[[T], V], chunksize: int = 1
) -> Iterator[V]:
    """Apply ``func`` to each item concurrently, yielding results in input order.

    At most ``chunksize`` calls are in flight at once; a value below one means one.
    Input is consumed lazily, and closing the iterator early cancels pending work.
    """
    workers = max(chunksize, 1)
    with ThreadPoolExecutor(max_workers=workers) as pool:
        pending: deque[Future[V]] = deque()
        try:
            for item in iterable:
                pending.append(pool.submit(func, item))
                if len(pending) >= workers:
                    yield pending.popleft().result()
            while pending:
                yield pending.popleft().result()
        finally:
            for future in pending:
                future.cancel()