import threading

import pytest

from loudbars.config import WINDOW_SIZE
from loudbars.levels import LevelBuffer


def test_default_capacity_is_window_size():
    levels = LevelBuffer()

    assert levels.capacity == WINDOW_SIZE
    assert len(levels) == 0
    assert levels.snapshot() == []


def test_oldest_values_are_evicted_first():
    levels = LevelBuffer(capacity=3)
    for value in (0.1, 0.2, 0.3, 0.4, 0.5):
        levels.append(value)

    assert levels.snapshot() == [0.3, 0.4, 0.5]
    assert len(levels) == 3


def test_more_than_window_keeps_most_recent_in_order():
    levels = LevelBuffer()
    values = [i / 250 for i in range(250)]
    for value in values:
        levels.append(value)

    assert levels.snapshot() == values[-WINDOW_SIZE:]


def test_out_of_range_values_are_clamped():
    levels = LevelBuffer(capacity=4)
    levels.append(-0.5)
    levels.append(1.5)
    levels.append(float("nan"))
    levels.append(float("inf"))

    assert levels.snapshot() == [0.0, 1.0, 0.0, 0.0]


def test_snapshot_is_a_copy():
    levels = LevelBuffer(capacity=2)
    levels.append(0.5)

    snap = levels.snapshot()
    snap.append(0.9)

    assert levels.snapshot() == [0.5]


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        LevelBuffer(capacity=0)


def test_concurrent_snapshots_never_see_partial_appends():
    total = 20000
    capacity = 50
    levels = LevelBuffer(capacity=capacity)
    done = threading.Event()

    def writer():
        for i in range(1, total + 1):
            levels.append(i / total)
        done.set()

    thread = threading.Thread(target=writer)
    thread.start()
    snapshots = []
    while not done.is_set():
        snapshots.append(levels.snapshot())
    thread.join()
    snapshots.append(levels.snapshot())

    for snap in snapshots:
        assert len(snap) <= capacity
        if not snap:
            continue
        indices = [round(v * total) for v in snap]
        assert indices == list(range(indices[0], indices[0] + len(indices)))
        if indices[-1] >= capacity:
            assert len(indices) == capacity
    assert [round(v * total) for v in snapshots[-1]] == list(range(total - capacity + 1, total + 1))
