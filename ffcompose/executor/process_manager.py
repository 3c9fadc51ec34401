"""Process management for ffmpeg/ffprobe execution."""

import logging
import os
import re
import shutil
import subprocess
from dataclasses import dataclass
from typing import Optional

from ..config import ToolConfig
from ..errors import ProcessTimeoutError, SubprocessFailure, ToolNotFoundError
from .command_builder import FFMPEGCommand

logger = logging.getLogger("ffcompose")


@dataclass
class ProcessResult:
    """Result of a successful process execution."""
    return_code: int
    stdout: str
    stderr: str
    command: str

    @property
    def success(self) -> bool:
        return self.return_code == 0


class ProcessManager:
    """Runs ffmpeg and ffprobe synchronously and surfaces their stderr on failure."""

    def __init__(self, config: Optional[ToolConfig] = None):
        """Initialize process manager.

        Args:
            config: Executable names/paths and timeout. Defaults search PATH
                for ``ffmpeg`` and ``ffprobe`` and wait indefinitely.
        """
        self.config = config or ToolConfig()

    def resolve_executable(self, tool: str) -> str:
        """Locate the binary configured for ``tool``.

        Raises:
            ToolNotFoundError: If the binary is neither an existing file nor on PATH.
        """
        executable = self.config.executable(tool)
        if os.sep in executable or (os.altsep and os.altsep in executable):
            if os.path.isfile(executable):
                return executable
            raise ToolNotFoundError(executable)
        found = shutil.which(executable)
        if not found:
            raise ToolNotFoundError(executable)
        return found

    def run(
        self,
        executable: str,
        args: list[str],
        dry_run: bool = False,
    ) -> ProcessResult | str:
        """Run ``executable`` with ``args`` and wait for it to exit.

        Args:
            executable: Logical tool name ("ffmpeg"/"ffprobe") or a binary name.
            args: Arguments passed as discrete tokens, never through a shell.
            dry_run: Return the command text instead of spawning a process.

        Returns:
            The command string when ``dry_run`` is set, otherwise the
            ProcessResult of a zero-status run.

        Raises:
            SubprocessFailure: If the process exits with a non-zero status.
            ProcessTimeoutError: If the configured timeout expires.
            ToolNotFoundError: If the executable cannot be located.
        """
        args = [str(a) for a in args]
        tool = self.config.executable(executable)
        cmd_string = " ".join([tool] + args)

        if dry_run:
            return cmd_string

        binary = self.resolve_executable(executable)
        logger.debug("Running: %s", cmd_string)

        try:
            result = subprocess.run(
                [binary] + args,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired as e:
            stderr = e.stderr or ""
            if isinstance(stderr, bytes):
                stderr = stderr.decode(errors="replace")
            logger.warning("Timed out after %ss: %s", self.config.timeout, cmd_string)
            raise ProcessTimeoutError(self.config.timeout, stderr, cmd_string, tool) from e

        if result.returncode != 0:
            logger.warning(
                "%s exited with status %d: %s",
                executable, result.returncode, self._parse_error(result.stderr),
            )
            raise SubprocessFailure(result.returncode, result.stderr, cmd_string, tool)

        return ProcessResult(
            return_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
            command=cmd_string,
        )

    def run_ffmpeg(self, args: list[str], dry_run: bool = False) -> ProcessResult | str:
        return self.run("ffmpeg", args, dry_run=dry_run)

    def run_ffprobe(self, args: list[str]) -> ProcessResult:
        return self.run("ffprobe", args)

    def execute(self, command: FFMPEGCommand, dry_run: bool = False) -> ProcessResult | str:
        """Run a built FFMPEGCommand."""
        args = command.to_args()
        return self.run(args[0], args[1:], dry_run=dry_run)

    def _parse_error(self, stderr: str) -> str:
        """Extract a one-line summary from ffmpeg stderr for logging."""
        lines = (stderr or "").strip().split("\n")

        error_patterns = [
            r"Error.*",
            r"Invalid.*",
            r"No such file.*",
            r".*not found.*",
            r"Permission denied.*",
            r".*already exists.*",
        ]

        for line in reversed(lines):
            for pattern in error_patterns:
                if re.search(pattern, line, re.IGNORECASE):
                    return line.strip()

        for line in reversed(lines):
            if line.strip():
                return line.strip()

        return "Unknown error"
