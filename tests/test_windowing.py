from __future__ import annotations

import io

import numpy as np
import pytest

from windowio import DisjointWindowError, Window, iter_windows, window_bounds, window_count


def test_iter_windows_tracks_offsets() -> None:
    data = bytes(range(11))
    windows = list(iter_windows(io.BytesIO(data), 4, 3))

    assert [(w.index, w.offset, w.end) for w in windows] == [(0, 0, 4), (1, 3, 7), (2, 6, 10), (3, 9, 11)]
    for w in windows:
        assert w.data == data[w.offset : w.end]


def test_window_as_array() -> None:
    window = Window(index=0, offset=0, data=b"\x01\xff")
    arr = window.as_array()
    assert arr.dtype == np.uint8
    assert arr.tolist() == [1, 255]
    assert len(window) == 2


@pytest.mark.parametrize(
    "length,window_size,step_size,expected",
    [
        (0, 3, 1, 0),
        (2, 3, 1, 1),
        (3, 3, 1, 1),
        (9, 3, 1, 7),
        (9, 7, 1, 3),
        (10, 4, 3, 3),
        (11, 4, 3, 4),
        (10, 5, 5, 2),
    ],
)
def test_window_count(length: int, window_size: int, step_size: int, expected: int) -> None:
    assert window_count(length, window_size, step_size) == expected


def test_window_bounds_clip_last_window() -> None:
    assert window_bounds(11, 4, 3) == [(0, 4), (3, 7), (6, 10), (9, 11)]
    assert window_bounds(2, 4, 2) == [(0, 2)]
    assert window_bounds(0, 4, 2) == []


def test_window_helpers_validate_input() -> None:
    with pytest.raises(DisjointWindowError):
        window_count(10, 2, 3)
    with pytest.raises(ValueError):
        window_count(-1, 2, 1)
