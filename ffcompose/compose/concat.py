"""Join videos end to end with ffmpeg's concat demuxer."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from ..errors import InvalidArgumentError
from ..executor.command_builder import CommandBuilder
from ..executor.process_manager import ProcessManager
from ..sanitize import resolve_inputs, resolve_output
from ._common import run_command

logger = logging.getLogger("ffcompose")


def _list_entry(path: str) -> str:
    # concat demuxer quoting: close the quote, escape ', reopen
    return "file '{}'".format(path.replace("'", "'\\''"))


def write_concat_list(paths: Sequence[str], list_path: str) -> None:
    """Write one ``file '<path>'`` line per input."""
    with open(list_path, "w", encoding="utf-8") as f:
        for path in paths:
            f.write(_list_entry(path) + "\n")


def concat(
    inputs: Sequence[str | Path],
    output: str | Path,
    overwrite: bool = True,
    dry_run: bool = False,
    manager: Optional[ProcessManager] = None,
) -> str:
    """Concatenate video files sequentially without re-encoding.

    All inputs should share codecs and dimensions; a mismatch only shows
    up as an ffmpeg failure. The temporary list file is removed whether
    the run succeeds or not.

    Args:
        inputs: Paths to at least two input videos, in playback order.
        output: Path for output video file.
        overwrite: Replace an existing output instead of failing.
        dry_run: Return the ffmpeg command without executing it.
        manager: Process manager to run ffmpeg with.

    Returns:
        The resolved output path, or the command string on dry run.

    Raises:
        InvalidArgumentError: If fewer than two inputs are given.
        InputNotFoundError: If any input is missing.
        SubprocessFailure: If ffmpeg fails.
    """
    if isinstance(inputs, (str, Path)):
        raise InvalidArgumentError("concat() takes a sequence of input paths")
    inputs = list(inputs)
    if len(inputs) < 2:
        raise InvalidArgumentError("concat() requires at least 2 inputs")

    inputs = resolve_inputs(inputs)
    output = resolve_output(output)

    fd, list_path = tempfile.mkstemp(prefix="ffcompose_concat_", suffix=".txt")
    os.close(fd)
    try:
        write_concat_list(inputs, list_path)

        builder = (
            CommandBuilder()
            .overwrite(overwrite)
            .input(list_path, options=["-f", "concat", "-safe", "0"])
            .codec("copy")
            .output(output)
        )
        return run_command(builder, output, dry_run=dry_run, manager=manager)
    finally:
        Path(list_path).unlink(missing_ok=True)
        logger.debug("Removed concat list %s", list_path)
