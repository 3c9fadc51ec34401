"""Path normalization for arguments embedded in ffmpeg/ffprobe commands.

Every path is resolved to an absolute, canonical form before it reaches a
command line. Inputs must exist; outputs only need an existing parent
directory.
"""

import os
from pathlib import Path

from .errors import InputNotFoundError, InvalidArgumentError


def _resolve(path: str | os.PathLike, what: str) -> Path:
    if path is None or not str(path).strip():
        raise InvalidArgumentError(f"{what} path cannot be empty")
    return Path(path).expanduser().resolve()


def resolve_input(path: str | os.PathLike) -> str:
    """Resolve an input media path and check that it exists.

    Args:
        path: The path string to validate.

    Returns:
        The resolved, absolute path string.

    Raises:
        InvalidArgumentError: If the path is empty or names a directory.
        InputNotFoundError: If nothing exists at the path.
    """
    resolved = _resolve(path, "Input")
    if not resolved.exists():
        raise InputNotFoundError(str(resolved))
    if not resolved.is_file():
        raise InvalidArgumentError(f"Input path is not a file: {resolved}")
    return str(resolved)


def resolve_inputs(paths) -> list[str]:
    """Resolve several input paths, failing on the first missing one."""
    return [resolve_input(p) for p in paths]


def resolve_output(path: str | os.PathLike) -> str:
    """Resolve an output file path.

    Does NOT require the file to exist, but its directory must.

    Raises:
        InvalidArgumentError: If the path is empty, names a directory, or
            its parent directory does not exist.
    """
    resolved = _resolve(path, "Output")
    if resolved.is_dir():
        raise InvalidArgumentError(f"Output path is a directory: {resolved}")
    if not resolved.parent.is_dir():
        raise InvalidArgumentError(f"Output directory not found: {resolved.parent}")
    return str(resolved)
