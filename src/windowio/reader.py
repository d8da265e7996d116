"""Windowed reader: turns a byte source into fixed-size, possibly overlapping windows."""

from __future__ import annotations

import operator
from enum import Enum
from typing import Iterator, Tuple

from .diagnostics import DiagnosticSink, RingSnapshot
from .errors import DisjointWindowError, ShortBufferError, ZeroStepSizeError, ZeroWindowSizeError
from .ring import RingBuffer
from .sources import ByteSource, as_byte_source


class ReaderState(str, Enum):
    EMPTY = "empty"
    SLIDING = "sliding"
    DRAINING = "draining"
    EXHAUSTED = "exhausted"


def validate_sizes(window_size: int, step_size: int) -> Tuple[int, int]:
    """Check ``1 <= step_size <= window_size`` and return both as ints."""

    window = operator.index(window_size)
    step = operator.index(step_size)
    if step < 1:
        raise ZeroStepSizeError(window, step)
    # step >= 1 here, so this also rejects a non-positive window
    if step > window:
        raise DisjointWindowError(window, step)
    return window, step


class WindowReader:
    """Reads a byte source one window at a time.

    The first read fills a window of ``window_size`` bytes; each later read
    slides it forward by ``step_size`` bytes. When the source ends part-way
    through a step, the final window is shorter: it keeps the bytes of the
    previous window that were not due to be discarded plus whatever new bytes
    arrived. Every read after that reports end of stream.

    The reader is a single sequential cursor and is not safe for concurrent
    use.
    """

    def __init__(
        self,
        source: ByteSource | bytes | object,
        window_size: int,
        step_size: int = 1,
        *,
        diagnostics: DiagnosticSink | None = None,
        close_source: bool = False,
    ) -> None:
        self._window_size, self._step_size = validate_sizes(window_size, step_size)
        self._source = as_byte_source(source)
        self._close_source = close_source
        self._closed = False
        self._ring = RingBuffer(self._window_size)
        self._state = ReaderState.EMPTY
        self._diagnostics = diagnostics
        self._windows = 0

    @property
    def window_size(self) -> int:
        return self._window_size

    @property
    def step_size(self) -> int:
        return self._step_size

    @property
    def state(self) -> ReaderState:
        return self._state

    @property
    def first_window_produced(self) -> bool:
        return self._windows > 0

    @property
    def exhausted(self) -> bool:
        return self._state is ReaderState.EXHAUSTED

    @property
    def ring(self) -> RingBuffer:
        return self._ring

    @property
    def closed(self) -> bool:
        return self._closed

    def readinto(self, dest: bytearray | memoryview) -> int:
        """Copy the next window into ``dest`` and return its length.

        Returns ``0`` at end of stream, and keeps returning ``0`` on every
        later call. Raises :class:`ShortBufferError` without consuming input
        when ``dest`` cannot hold ``window_size`` bytes. Errors raised by the
        source propagate unchanged and leave the ring untouched.
        """

        if self._closed:
            raise ValueError("I/O operation on closed reader")
        view = memoryview(dest)
        if view.readonly:
            raise TypeError("Destination buffer must be writable")
        view = view.cast("B")
        if len(view) < self._window_size:
            raise ShortBufferError(self._window_size, len(view))

        if self._state is ReaderState.DRAINING:
            self._finish()
        if self._state is ReaderState.EXHAUSTED:
            return 0

        want = self._window_size if self._state is ReaderState.EMPTY else self._step_size
        pulled = self._pull(want)
        if not pulled:
            self._finish()
            return 0

        if self._state is not ReaderState.EMPTY:
            self._ring.drop(self._step_size)
        self._ring.extend(pulled)
        # a short pull means the source hit end of stream
        self._state = ReaderState.SLIDING if len(pulled) == want else ReaderState.DRAINING
        self._windows += 1

        if self._diagnostics is not None:
            self._diagnostics.on_window(RingSnapshot.capture(self._ring, self._windows - 1))
        return self._ring.copy_into(view)

    def read(self) -> bytes:
        """Return the next window as bytes, ``b""`` at end of stream."""

        buf = bytearray(self._window_size)
        n = self.readinto(buf)
        return bytes(buf[:n])

    def __iter__(self) -> Iterator[bytes]:
        while True:
            window = self.read()
            if not window:
                return
            yield window

    def _pull(self, want: int) -> bytearray:
        staged = bytearray()
        while len(staged) < want:
            data = self._source.read(want - len(staged))
            if not data:
                break
            # drop anything past what was asked for
            staged.extend(data[: want - len(staged)])
        return staged

    def close(self) -> None:
        """Close the reader, and the source too when it was opened on the caller's behalf."""

        if self._closed:
            return
        self._closed = True
        self._ring.clear()
        if self._close_source:
            close = getattr(self._source, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> "WindowReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _finish(self) -> None:
        self._state = ReaderState.EXHAUSTED
        if self._diagnostics is not None:
            self._diagnostics.on_end_of_stream(self._windows)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(window_size={self._window_size}, "
            f"step_size={self._step_size}, state={self._state.value})"
        )


def stepping_window(
    source: ByteSource | bytes | object,
    window_size: int,
    step_size: int,
    *,
    diagnostics: DiagnosticSink | None = None,
    close_source: bool = False,
) -> WindowReader:
    """Windowed reader advancing by ``step_size`` bytes per read."""

    return WindowReader(source, window_size, step_size, diagnostics=diagnostics, close_source=close_source)


def rolling_window(
    source: ByteSource | bytes | object,
    window_size: int,
    *,
    diagnostics: DiagnosticSink | None = None,
    close_source: bool = False,
) -> WindowReader:
    """Windowed reader advancing one byte per read.

    Same as ``stepping_window(source, window_size, 1)``.
    """

    window = operator.index(window_size)
    if window < 1:
        raise ZeroWindowSizeError(window)
    return stepping_window(source, window, 1, diagnostics=diagnostics, close_source=close_source)
