"""Consumer-side helpers built on top of :class:`WindowReader`."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

import numpy as np

from .diagnostics import DiagnosticSink
from .reader import WindowReader, validate_sizes
from .sources import ByteSource


@dataclass(frozen=True)
class Window:
    index: int
    offset: int
    data: bytes

    def __len__(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        return self.offset + len(self.data)

    def as_array(self) -> np.ndarray:
        return np.frombuffer(self.data, dtype=np.uint8)


def iter_windows(
    source: ByteSource | bytes | object,
    window_size: int,
    step_size: int = 1,
    *,
    diagnostics: DiagnosticSink | None = None,
) -> Iterator[Window]:
    """Yield every window of ``source`` together with its stream offset."""

    reader = WindowReader(source, window_size, step_size, diagnostics=diagnostics)
    for index, data in enumerate(reader):
        yield Window(index=index, offset=index * reader.step_size, data=data)


def window_count(length: int, window_size: int, step_size: int) -> int:
    """Number of windows a reader produces over ``length`` bytes."""

    window, step = validate_sizes(window_size, step_size)
    if length < 0:
        raise ValueError("length must be non-negative")
    if length == 0:
        return 0
    if length <= window:
        return 1
    return -(-(length - window) // step) + 1


def window_bounds(length: int, window_size: int, step_size: int) -> List[Tuple[int, int]]:
    """``(start, end)`` offsets of each window, the last one clipped to ``length``."""

    window, step = validate_sizes(window_size, step_size)
    return [
        (idx * step, min(idx * step + window, length))
        for idx in range(window_count(length, window_size, step_size))
    ]
