"""Fixed-capacity circular byte buffer backing the windowed reader."""

from __future__ import annotations

from typing import List

import numpy as np


class RingBuffer:
    """Circular buffer of ``capacity`` bytes kept in stream order.

    ``start`` points at the oldest valid slot and ``count`` tracks how many
    slots are valid. New bytes are written at the cursor
    ``(start + count) % capacity``; once the buffer is full each write
    overwrites the oldest byte.
    """

    def __init__(self, capacity: int) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = int(capacity)
        self._data = np.zeros(self.capacity, dtype=np.uint8)
        self._start = 0
        self._count = 0

    def __len__(self) -> int:
        return self._count

    @property
    def start(self) -> int:
        return self._start

    @property
    def cursor(self) -> int:
        """Index of the next slot to be written."""
        return (self._start + self._count) % self.capacity

    def extend(self, data: bytes | bytearray | memoryview) -> None:
        """Append bytes, overwriting the oldest ones once capacity is reached."""

        incoming = np.frombuffer(data, dtype=np.uint8)
        if incoming.size >= self.capacity:
            self._data[:] = incoming[-self.capacity :]
            self._start = 0
            self._count = self.capacity
            return

        end = self.cursor
        first = min(incoming.size, self.capacity - end)
        self._data[end : end + first] = incoming[:first]
        second = incoming.size - first
        if second:
            self._data[:second] = incoming[first:]

        overflow = max(0, self._count + incoming.size - self.capacity)
        if overflow:
            self._start = (self._start + overflow) % self.capacity
        self._count = min(self._count + incoming.size, self.capacity)

    def drop(self, n: int) -> int:
        """Discard up to ``n`` of the oldest bytes and return how many were dropped."""

        dropped = min(max(int(n), 0), self._count)
        self._start = (self._start + dropped) % self.capacity
        self._count -= dropped
        if self._count == 0:
            self._start = 0
        return dropped

    def clear(self) -> None:
        self._start = 0
        self._count = 0

    def to_array(self) -> np.ndarray:
        """Return a copy of the valid bytes, oldest first."""

        first = min(self._count, self.capacity - self._start)
        head = self._data[self._start : self._start + first]
        tail = self._data[: self._count - first]
        return np.concatenate((head, tail))

    def to_bytes(self) -> bytes:
        return self.to_array().tobytes()

    def copy_into(self, dest: memoryview) -> int:
        """Copy the valid bytes into ``dest`` in stream order and return the count."""

        payload = self.to_bytes()
        dest[: len(payload)] = payload
        return len(payload)

    def values(self) -> List[int]:
        return [int(b) for b in self.to_array()]
