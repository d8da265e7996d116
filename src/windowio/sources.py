"""Byte source adapters feeding windowed readers."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Iterable, Iterator, Mapping, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class ByteSource(Protocol):
    """Sequential, blocking byte producer.

    ``read`` returns up to ``size`` bytes, ``b""`` at end of stream, and raises
    on a lower-level failure. Returning fewer bytes than requested is not end
    of stream.
    """

    def read(self, size: int = -1) -> bytes:  # pragma: no cover - interface only
        ...


class IterableSource:
    """Adapts an iterable of byte chunks (e.g. a generator) into ``read``."""

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks: Iterator[bytes] = iter(chunks)
        self._pending = bytearray()
        self._done = False

    def read(self, size: int = -1) -> bytes:
        if size is None or size < 0:
            for chunk in self._chunks:
                self._pending.extend(chunk)
            self._done = True
            data = bytes(self._pending)
            self._pending.clear()
            return data

        while len(self._pending) < size and not self._done:
            try:
                chunk = next(self._chunks)
            except StopIteration:
                self._done = True
                break
            self._pending.extend(chunk)

        data = bytes(self._pending[:size])
        del self._pending[:size]
        return data


class FileSource:
    """Buffered binary file opened on first read."""

    def __init__(self, path: str | Path, buffer_size: int = io.DEFAULT_BUFFER_SIZE) -> None:
        if buffer_size <= 0:
            raise ValueError("buffer_size must be positive")
        self.path = Path(path)
        self.buffer_size = int(buffer_size)
        self._handle: BinaryIO | None = None

    def _open(self) -> BinaryIO:
        if self._handle is None:
            if not self.path.exists():
                raise FileNotFoundError(self.path)
            self._handle = self.path.open("rb", buffering=self.buffer_size)
            logger.debug("Opened %s (buffer_size=%d)", self.path, self.buffer_size)
        return self._handle

    def read(self, size: int = -1) -> bytes:
        return self._open().read(size)

    @property
    def closed(self) -> bool:
        return self._handle is None or self._handle.closed

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "FileSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def as_byte_source(obj: object) -> ByteSource:
    """Coerce ``obj`` into something with a ``read(size)`` method."""

    if isinstance(obj, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(obj))
    if isinstance(obj, io.RawIOBase):
        # unbuffered streams get the standard buffered adapter
        return io.BufferedReader(obj)
    if isinstance(obj, ByteSource):
        return obj
    if isinstance(obj, str):
        raise TypeError("str is not a byte source; encode it or wrap it in io.BytesIO")
    if isinstance(obj, Iterable):
        return IterableSource(obj)  # type: ignore[arg-type]
    raise TypeError(f"Unsupported byte source type '{type(obj).__name__}'")


def build_source(cfg: Mapping[str, object] | Callable[[], ByteSource] | None) -> Callable[[], ByteSource]:
    """Factory for byte sources based on a config mapping."""

    if cfg is None:
        raise ValueError("A source configuration is required")

    if callable(cfg):
        return cfg  # type: ignore[return-value]

    source_type = str(cfg.get("type", "bytes")).lower()
    logger.debug("Building %s byte source", source_type)
    if source_type in {"bytes", "memory"}:
        data = cfg.get("data", b"")
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not isinstance(data, (bytes, bytearray)):
            raise ValueError("Memory source 'data' must be str or bytes")
        payload = bytes(data)
        return lambda: io.BytesIO(payload)
    if source_type in {"file", "path"}:
        path = cfg.get("path")
        if not path:
            raise ValueError("File source requires 'path'")
        buffer_size = int(cfg.get("buffer_size", io.DEFAULT_BUFFER_SIZE))  # type: ignore[arg-type]
        return lambda: FileSource(str(path), buffer_size=buffer_size)

    raise ValueError(f"Unknown byte source type '{source_type}'")
