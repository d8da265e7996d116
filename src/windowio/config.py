"""Window reader configuration loaded from mappings or YAML/JSON files."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Optional

import yaml
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .diagnostics import LoggingDiagnosticSink
from .errors import ZeroWindowSizeError
from .reader import WindowReader, rolling_window, stepping_window, validate_sizes
from .sources import ByteSource, build_source

logger = logging.getLogger(__name__)


class WindowConfig(BaseModel):
    """Declarative description of a windowed reader.

    ``step_size`` defaults to ``window_size`` (disjoint chunks) in stepping
    mode and is always 1 in rolling mode.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    window_size: int
    step_size: Optional[int] = None
    mode: Literal["stepping", "rolling"] = "stepping"
    source: Optional[Dict[str, Any]] = None
    diagnostics: bool = False
    diagnostics_level: str = "DEBUG"

    @field_validator("mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_sizes(self) -> "WindowConfig":
        if self.mode == "rolling" and self.step_size not in (None, 1):
            raise ValueError("rolling windows always advance by 1 byte")
        # the default step follows the window, so a zero window is reported as such
        if self.window_size < 1:
            raise ZeroWindowSizeError(self.window_size, self.resolved_step_size)
        validate_sizes(self.window_size, self.resolved_step_size)
        return self

    @property
    def resolved_step_size(self) -> int:
        if self.mode == "rolling":
            return 1
        if self.step_size is None:
            return max(self.window_size, 1)
        return self.step_size

    @classmethod
    def from_mapping(cls, cfg: Mapping[str, Any]) -> "WindowConfig":
        section = cfg.get("window")
        data = dict(section) if isinstance(section, Mapping) else dict(cfg)
        if "source" in cfg and "source" not in data:
            data["source"] = cfg["source"]
        return cls.model_validate(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "WindowConfig":
        raw = Path(path)
        if not raw.exists():
            raise FileNotFoundError(raw)
        text = raw.read_text(encoding="utf-8")
        cfg = yaml.safe_load(text) if raw.suffix.lower() in {".yml", ".yaml"} else json.loads(text)
        if not isinstance(cfg, Mapping):
            raise ValueError("Window config file must contain a mapping/object at the top level")
        return cls.from_mapping(cfg)

    def build_reader(self, source: ByteSource | bytes | object | None = None) -> WindowReader:
        """Create a reader over ``source``, or over the configured source when omitted.

        A source built from the configuration belongs to the reader and is
        closed with it, so use the reader as a context manager.
        """

        owned = source is None
        if source is None:
            source = build_source(self.source)()
        sink = None
        if self.diagnostics:
            sink = LoggingDiagnosticSink(level=getattr(logging, self.diagnostics_level.upper(), logging.DEBUG))
        logger.debug(
            "Building %s reader (window_size=%d, step_size=%d)",
            self.mode,
            self.window_size,
            self.resolved_step_size,
        )
        if self.mode == "rolling":
            return rolling_window(source, self.window_size, diagnostics=sink, close_source=owned)
        return stepping_window(
            source, self.window_size, self.resolved_step_size, diagnostics=sink, close_source=owned
        )
