"""Fixed-size, possibly overlapping byte windows over sequential streams."""

from importlib import metadata

from .config import WindowConfig
from .diagnostics import (
    CompositeDiagnosticSink,
    DiagnosticSink,
    LoggingDiagnosticSink,
    NullDiagnosticSink,
    RecordingDiagnosticSink,
    RingSnapshot,
    format_ring,
    print_ring,
)
from .errors import (
    ConfigurationError,
    DisjointWindowError,
    ShortBufferError,
    WindowIOError,
    ZeroStepSizeError,
    ZeroWindowSizeError,
)
from .logging_utils import configure_logging, log_event
from .reader import ReaderState, WindowReader, rolling_window, stepping_window, validate_sizes
from .ring import RingBuffer
from .sources import ByteSource, FileSource, IterableSource, as_byte_source, build_source
from .windowing import Window, iter_windows, window_bounds, window_count

try:
    __version__ = metadata.version("windowio")
except metadata.PackageNotFoundError:  # pragma: no cover - fallback for editable installs
    __version__ = "0.1.0"

__all__ = [
    "WindowReader",
    "ReaderState",
    "rolling_window",
    "stepping_window",
    "validate_sizes",
    "RingBuffer",
    "Window",
    "iter_windows",
    "window_count",
    "window_bounds",
    "WindowConfig",
    "ByteSource",
    "FileSource",
    "IterableSource",
    "as_byte_source",
    "build_source",
    "DiagnosticSink",
    "NullDiagnosticSink",
    "LoggingDiagnosticSink",
    "RecordingDiagnosticSink",
    "CompositeDiagnosticSink",
    "RingSnapshot",
    "format_ring",
    "print_ring",
    "WindowIOError",
    "ConfigurationError",
    "ZeroWindowSizeError",
    "ZeroStepSizeError",
    "DisjointWindowError",
    "ShortBufferError",
    "configure_logging",
    "log_event",
    "__version__",
]
