"""
ffcompose

Thin wrappers around ffmpeg and ffprobe: stack, concatenate, overlay and
chromakey videos, and probe basic stream metadata.
"""

__version__ = "0.1.0"

from .compose import chromakey, concat, hstack, overlay, vstack
from .config import ToolConfig, load_config
from .errors import (
    FFComposeError,
    InputNotFoundError,
    InvalidArgumentError,
    ProbeParseError,
    ProcessTimeoutError,
    SubprocessFailure,
    ToolNotFoundError,
)
from .executor import CommandBuilder, ProcessManager, ProcessResult
from .video import MediaInfo, MediaProber, probe, probe_all, probe_field

__all__ = [
    "CommandBuilder",
    "FFComposeError",
    "InputNotFoundError",
    "InvalidArgumentError",
    "MediaInfo",
    "MediaProber",
    "ProbeParseError",
    "ProcessManager",
    "ProcessResult",
    "ProcessTimeoutError",
    "SubprocessFailure",
    "ToolConfig",
    "ToolNotFoundError",
    "chromakey",
    "concat",
    "hstack",
    "load_config",
    "overlay",
    "probe",
    "probe_all",
    "probe_field",
    "vstack",
]
