"""Error taxonomy for windowed readers."""

from __future__ import annotations


class WindowIOError(Exception):
    """Base class for all windowio errors."""


class ConfigurationError(WindowIOError, ValueError):
    """Invalid window/step configuration, raised at construction time."""

    def __init__(self, message: str, *, window_size: int, step_size: int) -> None:
        super().__init__(message)
        self.window_size = window_size
        self.step_size = step_size


class ZeroWindowSizeError(ConfigurationError):
    def __init__(self, window_size: int, step_size: int = 1) -> None:
        super().__init__(
            f"Window size cannot be zero. Should be 1 or more (got {window_size})",
            window_size=window_size,
            step_size=step_size,
        )


class ZeroStepSizeError(ConfigurationError):
    def __init__(self, window_size: int, step_size: int) -> None:
        super().__init__(
            f"Step size cannot be zero. Should be 1 or more (got {step_size})",
            window_size=window_size,
            step_size=step_size,
        )


class DisjointWindowError(ConfigurationError):
    """Step larger than the window would skip bytes between windows."""

    def __init__(self, window_size: int, step_size: int) -> None:
        super().__init__(
            f"Step size cannot be larger than window size ({step_size} > {window_size})",
            window_size=window_size,
            step_size=step_size,
        )


class ShortBufferError(WindowIOError, ValueError):
    """Destination buffer cannot hold a full window."""

    def __init__(self, required: int, provided: int) -> None:
        super().__init__(f"Destination buffer too small: need {required} bytes, got {provided}")
        self.required = required
        self.provided = provided
