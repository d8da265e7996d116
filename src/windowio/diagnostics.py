"""Diagnostic sinks for inspecting ring state while reading.

Sinks are optional and injected into a reader; the read path itself never
logs. ``print_ring`` is the standalone debugging helper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from .logging_utils import log_event
from .ring import RingBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RingSnapshot:
    """Ring contents captured right after a window was produced."""

    index: int
    values: tuple[int, ...]
    start: int
    cursor: int
    capacity: int

    @classmethod
    def capture(cls, ring: RingBuffer, index: int) -> "RingSnapshot":
        return cls(
            index=index,
            values=tuple(ring.values()),
            start=ring.start,
            cursor=ring.cursor,
            capacity=ring.capacity,
        )

    @property
    def count(self) -> int:
        return len(self.values)


def format_ring(values: RingBuffer | Sequence[int], msg: str) -> str:
    items = values.values() if isinstance(values, RingBuffer) else list(values)
    return f"{msg} :: Ring: [{', '.join(str(v) for v in items)}]"


def print_ring(
    values: RingBuffer | Sequence[int],
    msg: str,
    *,
    log: logging.Logger | None = None,
    level: int = logging.INFO,
) -> None:
    """Log the ring contents, oldest first, prefixed with ``msg``."""

    (log or logger).log(level, format_ring(values, msg))


class DiagnosticSink:
    """Hook interface notified by a reader as windows are produced."""

    def on_window(self, snapshot: RingSnapshot) -> None:
        ...

    def on_end_of_stream(self, windows: int) -> None:
        ...


class NullDiagnosticSink(DiagnosticSink):
    """No-op sink for defaults."""


class LoggingDiagnosticSink(DiagnosticSink):
    """Log every ring snapshot to the configured logger."""

    def __init__(
        self,
        *,
        log: logging.Logger | None = None,
        level: int = logging.DEBUG,
        json_logs: bool | None = None,
    ) -> None:
        self.log = log or logger
        self.level = level
        self.json_logs = json_logs

    def on_window(self, snapshot: RingSnapshot) -> None:
        if not self.log.isEnabledFor(self.level):
            return
        log_event(
            self.log,
            "window",
            level=self.level,
            json_logs=self.json_logs,
            index=snapshot.index,
            ring=format_ring(snapshot.values, f"window {snapshot.index}"),
            start=snapshot.start,
            cursor=snapshot.cursor,
            count=snapshot.count,
        )

    def on_end_of_stream(self, windows: int) -> None:
        log_event(self.log, "end_of_stream", level=self.level, json_logs=self.json_logs, windows=windows)


class RecordingDiagnosticSink(DiagnosticSink):
    """Keep snapshots in memory for later inspection."""

    def __init__(self) -> None:
        self.snapshots: list[RingSnapshot] = []
        self.ended_after: int | None = None

    def on_window(self, snapshot: RingSnapshot) -> None:
        self.snapshots.append(snapshot)

    def on_end_of_stream(self, windows: int) -> None:
        self.ended_after = windows


class CompositeDiagnosticSink(DiagnosticSink):
    """Fan-out to multiple sinks."""

    def __init__(self, sinks: Iterable[DiagnosticSink]) -> None:
        self.sinks = list(sinks)

    def on_window(self, snapshot: RingSnapshot) -> None:
        for sink in self.sinks:
            sink.on_window(snapshot)

    def on_end_of_stream(self, windows: int) -> None:
        for sink in self.sinks:
            sink.on_end_of_stream(windows)
