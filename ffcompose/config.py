"""Tool configuration.

Which ffmpeg/ffprobe binaries to call and how long to wait for them.
Defaults rely on the executable search path; a YAML file can override
them::

    ffmpeg: /opt/ffmpeg/bin/ffmpeg
    ffprobe: /opt/ffmpeg/bin/ffprobe
    timeout: 600
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidArgumentError

logger = logging.getLogger("ffcompose")


class ToolConfig(BaseModel):
    """Executable names/paths and the process timeout."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    ffmpeg: str = "ffmpeg"
    ffprobe: str = "ffprobe"
    timeout: Optional[float] = None

    @field_validator("ffmpeg", "ffprobe")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("executable must not be empty")
        return value.strip()

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value

    def executable(self, tool: str) -> str:
        """Map a logical tool name ("ffmpeg"/"ffprobe") to its configured binary."""
        if tool == "ffmpeg":
            return self.ffmpeg
        if tool == "ffprobe":
            return self.ffprobe
        return tool


def load_config(path: Optional[str | Path] = None, **overrides) -> ToolConfig:
    """Load a :class:`ToolConfig` from a YAML file, or return defaults.

    Keyword overrides that are not ``None`` win over values from the file.

    Raises:
        InvalidArgumentError: If the file is not a mapping or holds
            unknown/invalid keys.
    """
    data: dict = {}
    if path is not None and Path(path).is_file():
        with open(path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise InvalidArgumentError(f"Config file must contain a mapping: {path}")
        data.update(loaded or {})
        logger.debug("Loaded config from %s", path)
    elif path is not None:
        logger.debug("Config file %s not found, using defaults", path)

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return ToolConfig(**data)
    except ValidationError as e:
        raise InvalidArgumentError(f"Invalid configuration: {e}") from e
