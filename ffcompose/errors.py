"""Exception types raised by ffcompose.

Every error derives from :class:`FFComposeError` so callers can catch the
whole family at once. Nothing in the library catches or retries these
internally.
"""

from typing import Optional


class FFComposeError(Exception):
    """Base class for all ffcompose errors."""


class InputNotFoundError(FFComposeError, FileNotFoundError):
    """An input path does not exist at validation time."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Input file not found: {path}")

    def __str__(self) -> str:
        return f"Input file not found: {self.path}"


class InvalidArgumentError(FFComposeError, ValueError):
    """A caller-level contract violation (bad argument combination)."""


class ToolNotFoundError(FFComposeError):
    """The configured ffmpeg/ffprobe binary cannot be located."""

    def __init__(self, executable: str):
        self.executable = executable
        super().__init__(f"{executable} not found in PATH")


class SubprocessFailure(FFComposeError):
    """An external tool exited with a non-zero status.

    Attributes:
        return_code: Exit status of the process.
        stderr: Full, verbatim standard error of the process.
        command: Display form of the command that was run.
        tool: Executable the command ran, as configured.
    """

    def __init__(
        self,
        return_code: int,
        stderr: str,
        command: Optional[str] = None,
        tool: Optional[str] = None,
    ):
        self.return_code = return_code
        self.stderr = stderr
        self.command = command
        self.tool = tool
        super().__init__(f"{tool or 'process'} failed with status {return_code}:\n{stderr}")


class ProcessTimeoutError(SubprocessFailure):
    """An external tool did not finish within the configured timeout."""

    def __init__(
        self,
        timeout: float,
        stderr: str = "",
        command: Optional[str] = None,
        tool: Optional[str] = None,
    ):
        self.timeout = timeout
        super().__init__(
            -1, stderr or f"Process timed out after {timeout} seconds", command, tool,
        )


class ProbeParseError(FFComposeError, ValueError):
    """A numeric probe field could not be converted to a number."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"Cannot parse ffprobe field '{field}' as a number: {value!r}")
