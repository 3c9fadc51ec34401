"""Media metadata extraction using ffprobe."""

import logging
import math
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from ..errors import InvalidArgumentError, ProbeParseError
from ..executor.process_manager import ProcessManager
from ..sanitize import resolve_input

logger = logging.getLogger("ffcompose")

NUMERIC_FIELDS = frozenset({"duration", "width", "height"})


class MediaInfo(BaseModel):
    """Duration, dimensions and codec of the first video stream."""
    duration: float
    width: int
    height: int
    codec: str

    @property
    def resolution(self) -> tuple[int, int]:
        """Get video resolution as (width, height)."""
        return (self.width, self.height)

    def to_dict(self) -> dict:
        return self.model_dump()


class MediaProber:
    """Queries single stream entries from media files via ffprobe."""

    def __init__(self, manager: Optional[ProcessManager] = None):
        """Initialize the prober.

        Args:
            manager: Process manager used to run ffprobe. A default one
                searching PATH is created if omitted.
        """
        self.manager = manager or ProcessManager()

    def probe_field(self, path: str | Path, field: str, stream: str = "v:0") -> str:
        """Query one stream entry as text.

        Args:
            path: Media file to inspect.
            field: The ffprobe stream entry (e.g. "duration", "codec_name").
            stream: Stream specifier: "v:0" for video, "a:0" for audio.

        Returns:
            The value with surrounding whitespace removed.

        Raises:
            InputNotFoundError: If the file doesn't exist.
            SubprocessFailure: If ffprobe exits with a non-zero status.
        """
        path = resolve_input(path)

        args = [
            "-v", "error",
            "-select_streams", stream,
            "-show_entries", f"stream={field}",
            "-of", "csv=p=0",
            path,
        ]

        result = self.manager.run_ffprobe(args)
        return result.stdout.strip()

    def probe(self, path: str | Path, field: str = "duration", stream: str = "v:0") -> float | str:
        """Query one stream entry, converting duration/width/height to float.

        Raises:
            InvalidArgumentError: If ``field`` is "all" (use :meth:`probe_all`).
            ProbeParseError: If a numeric field holds a non-numeric value.
        """
        if field == "all":
            raise InvalidArgumentError('field "all" is not a single entry; use probe_all()')

        value = self.probe_field(path, field, stream)
        if field not in NUMERIC_FIELDS:
            return value

        try:
            number = float(value)
        except ValueError:
            raise ProbeParseError(field, value) from None
        if not math.isfinite(number):
            raise ProbeParseError(field, value)
        return number

    def probe_all(self, path: str | Path) -> MediaInfo:
        """Probe duration, width, height and codec with four ffprobe calls."""
        info = MediaInfo(
            duration=self.probe(path, "duration"),
            width=int(self.probe(path, "width")),
            height=int(self.probe(path, "height")),
            codec=self.probe(path, "codec_name"),
        )
        logger.debug("Probed %s: %s", path, info)
        return info


def probe_field(path: str | Path, field: str, stream: str = "v:0",
                manager: Optional[ProcessManager] = None) -> str:
    """Query a single ffprobe stream entry as text."""
    return MediaProber(manager).probe_field(path, field, stream)


def probe(path: str | Path, field: str = "duration", stream: str = "v:0",
          manager: Optional[ProcessManager] = None) -> float | str:
    """Probe one field; duration, width and height come back as floats.

    Examples::

        probe("video.mp4")            # duration in seconds
        probe("video.mp4", "width")   # 1920.0
        probe("video.mp4", "codec_name")
    """
    return MediaProber(manager).probe(path, field, stream)


def probe_all(path: str | Path, manager: Optional[ProcessManager] = None) -> MediaInfo:
    """Probe duration, width, height and codec as a :class:`MediaInfo`."""
    return MediaProber(manager).probe_all(path)
