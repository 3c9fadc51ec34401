"""Stack two videos on top of each other or side by side."""

from pathlib import Path
from typing import Optional

from ..executor.command_builder import CommandBuilder, Filter, FilterGraph
from ..executor.process_manager import ProcessManager
from ..sanitize import resolve_input, resolve_output
from ._common import run_command


def _scale(index: int, label: str, width: int | str, height: int | str, exact: bool) -> Filter:
    """Scale input ``index`` into ``label``.

    ``exact`` stretches to the given size; otherwise one side is ``-2``
    so ffmpeg keeps the aspect ratio with an even dimension.
    """
    params = {"force_original_aspect_ratio": "disable"} if exact else {}
    return Filter(
        name="scale",
        args=[width, height],
        params=params,
        inputs=[f"{index}:v"],
        outputs=[label],
    )


def _stack(
    first: str,
    second: str,
    output: str,
    graph: FilterGraph,
    overwrite: bool,
    dry_run: bool,
    manager: Optional[ProcessManager],
) -> str:
    builder = (
        CommandBuilder()
        .overwrite(overwrite)
        .input(first)
        .input(second)
        .complex_filter(graph)
        .audio_codec("copy")
        .output(output)
    )
    return run_command(builder, output, dry_run=dry_run, manager=manager)


def vstack(
    top: str | Path,
    bottom: str | Path,
    output: str | Path,
    height_top: Optional[int] = None,
    height_bottom: Optional[int] = None,
    width: int = 1080,
    overwrite: bool = True,
    dry_run: bool = False,
    manager: Optional[ProcessManager] = None,
) -> str:
    """Vertically stack two videos (top over bottom).

    Both inputs are scaled to ``width``. A given height stretches that
    input to exactly ``width`` x height; otherwise its height follows the
    aspect ratio. Audio is stream-copied from whichever input ffmpeg
    selects by default (the one with the most channels).

    Args:
        top: Path to top video.
        bottom: Path to bottom video.
        output: Path for output video file.
        height_top: Height in pixels for top video (default: auto from width).
        height_bottom: Height in pixels for bottom video (default: auto from width).
        width: Output width in pixels.
        overwrite: Replace an existing output instead of failing.
        dry_run: Return the ffmpeg command without executing it.
        manager: Process manager to run ffmpeg with.

    Returns:
        The resolved output path, or the command string on dry run.

    Example::

        vstack("talking_head.mp4", "slideshow.mp4", "shorts.mp4")
    """
    top = resolve_input(top)
    bottom = resolve_input(bottom)
    output = resolve_output(output)
    width = int(width)

    graph = FilterGraph()
    graph.add(_scale(0, "top", width, int(height_top) if height_top is not None else -2,
                     exact=height_top is not None))
    graph.add(_scale(1, "bottom", width, int(height_bottom) if height_bottom is not None else -2,
                     exact=height_bottom is not None))
    graph.add(Filter("vstack", params={"inputs": 2}, inputs=["top", "bottom"]))

    return _stack(top, bottom, output, graph, overwrite, dry_run, manager)


def hstack(
    left: str | Path,
    right: str | Path,
    output: str | Path,
    width_left: Optional[int] = None,
    width_right: Optional[int] = None,
    height: int = 1080,
    overwrite: bool = True,
    dry_run: bool = False,
    manager: Optional[ProcessManager] = None,
) -> str:
    """Horizontally stack two videos (left beside right).

    Mirror image of :func:`vstack`: both inputs are scaled to ``height``
    and an explicit width stretches that input. Audio handling is the same.
    """
    left = resolve_input(left)
    right = resolve_input(right)
    output = resolve_output(output)
    height = int(height)

    graph = FilterGraph()
    graph.add(_scale(0, "left", int(width_left) if width_left is not None else -2, height,
                     exact=width_left is not None))
    graph.add(_scale(1, "right", int(width_right) if width_right is not None else -2, height,
                     exact=width_right is not None))
    graph.add(Filter("hstack", params={"inputs": 2}, inputs=["left", "right"]))

    return _stack(left, right, output, graph, overwrite, dry_run, manager)
