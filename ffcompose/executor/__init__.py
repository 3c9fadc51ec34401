"""FFMPEG command construction and execution."""

from .command_builder import CommandBuilder, Filter, FilterChain, FilterGraph, FFMPEGCommand
from .process_manager import ProcessManager, ProcessResult

__all__ = [
    "CommandBuilder",
    "Filter",
    "FilterChain",
    "FilterGraph",
    "FFMPEGCommand",
    "ProcessManager",
    "ProcessResult",
]
