import threading
import time

import pytest

from raytrace.parallel import parallel_map


def _counting_source(consumed, n):
    for i in range(n):
        consumed.append(i)
        yield i


def test_full_consumption():
    assert list(parallel_map(range(5), lambda v: v * 2, 2)) == [0, 2, 4, 6, 8]


def test_early_stop():
    consumed = []
    results = []
    gen = parallel_map(_counting_source(consumed, 1000), lambda v: v * 2, 8)
    for v in gen:
        results.append(v)
        if len(results) == 3:
            break
    gen.close()
    assert results == [0, 2, 4]
    assert len(consumed) < 1000


def test_non_positive_chunksize():
    assert list(parallel_map([1, 2, 3], lambda v: v + 1, 0)) == [2, 3, 4]
    assert list(parallel_map([1, 2, 3], lambda v: v + 1, -5)) == [2, 3, 4]


def test_empty_input():
    assert list(parallel_map([], lambda v: v, 4)) == []


def test_order_preserved_with_uneven_work():
    def slow(v):
        time.sleep(0.01 * (5 - v))
        return v

    assert list(parallel_map(range(6), slow, 4)) == [0, 1, 2, 3, 4, 5]


def test_runs_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    def wait(v):
        barrier.wait()
        return v

    assert list(parallel_map([10, 20], wait, 2)) == [10, 20]


def test_exception_propagates():
    def boom(v):
        if v == 2:
            raise ValueError("bad item")
        return v

    with pytest.raises(ValueError, match="bad item"):
        list(parallel_map(range(5), boom, 2))