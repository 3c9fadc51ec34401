"""FFMPEG command builder for constructing filter graphs and argument lists."""

from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path


@dataclass
class Filter:
    """Represents a single FFMPEG filter.

    ``args`` are positional values (``scale=1080:-2``); ``params`` are
    named options appended after them (``force_original_aspect_ratio=disable``).
    """
    name: str
    args: list[str | int | float] = field(default_factory=list)
    params: dict[str, str | int | float] = field(default_factory=dict)
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)

    def to_string(self) -> str:
        """Convert filter to FFMPEG filter string."""
        parts = []

        # Input labels
        for inp in self.inputs:
            parts.append(f"[{inp}]")

        # Filter name, positional values, then named options
        options = [str(a) for a in self.args]
        options.extend(f"{k}={v}" for k, v in self.params.items())
        if options:
            parts.append(f"{self.name}={':'.join(options)}")
        else:
            parts.append(self.name)

        # Output labels
        for out in self.outputs:
            parts.append(f"[{out}]")

        return "".join(parts)


@dataclass
class FilterChain:
    """A chain of filters connected in sequence."""
    filters: list[Filter] = field(default_factory=list)

    def to_string(self) -> str:
        """Convert filter chain to FFMPEG filter string."""
        if not self.filters:
            return ""
        return ",".join(f.to_string() for f in self.filters)


@dataclass
class FilterGraph:
    """Several filter chains joined with ``;`` for ``-filter_complex``."""
    chains: list[FilterChain] = field(default_factory=list)

    def add(self, *filters: Filter) -> "FilterGraph":
        """Append a new chain made of ``filters``."""
        self.chains.append(FilterChain(list(filters)))
        return self

    def to_string(self) -> str:
        return ";".join(c.to_string() for c in self.chains if c.filters)


@dataclass
class FFMPEGCommand:
    """Represents a complete FFMPEG command."""
    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    input_options: dict[str, list[str]] = field(default_factory=dict)
    output_options: list[str] = field(default_factory=list)
    complex_filter: Optional[str] = None
    overwrite: bool = True

    def to_args(self) -> list[str]:
        """Convert command to list of arguments for subprocess."""
        args = ["ffmpeg"]

        # -y replaces an existing output, -n makes ffmpeg refuse instead of prompting
        args.append("-y" if self.overwrite else "-n")

        # Inputs with their options
        for input_path in self.inputs:
            if input_path in self.input_options:
                args.extend(self.input_options[input_path])
            args.extend(["-i", input_path])

        if self.complex_filter:
            args.extend(["-filter_complex", self.complex_filter])

        args.extend(self.output_options)
        args.extend(self.outputs)

        return args


class CommandBuilder:
    """Builder for constructing FFMPEG commands."""

    def __init__(self):
        self._command = FFMPEGCommand()

    def input(
        self,
        path: str | Path,
        options: Optional[list[str]] = None,
    ) -> "CommandBuilder":
        """Add an input file."""
        path_str = str(path)
        self._command.inputs.append(path_str)
        if options:
            self._command.input_options[path_str] = list(options)
        return self

    def output(self, path: str | Path) -> "CommandBuilder":
        """Set output file."""
        self._command.outputs.append(str(path))
        return self

    def codec(self, codec: str) -> "CommandBuilder":
        """Set the codec for every stream (``-c``)."""
        self._command.output_options.extend(["-c", codec])
        return self

    def audio_codec(self, codec: str) -> "CommandBuilder":
        """Set audio codec."""
        self._command.output_options.extend(["-c:a", codec])
        return self

    def complex_filter(self, filter_graph: "str | FilterGraph") -> "CommandBuilder":
        """Set complex filtergraph."""
        if isinstance(filter_graph, FilterGraph):
            filter_graph = filter_graph.to_string()
        self._command.complex_filter = filter_graph
        return self

    def overwrite(self, value: bool = True) -> "CommandBuilder":
        """Set overwrite flag."""
        self._command.overwrite = value
        return self

    def build(self) -> FFMPEGCommand:
        """Build and return the command."""
        return self._command

    def build_args(self) -> list[str]:
        """Build and return command as argument list."""
        return self._command.to_args()
