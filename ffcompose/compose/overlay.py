"""Composite a foreground over a background: plain overlay and chromakey."""

from pathlib import Path
from typing import Optional

from ..executor.command_builder import CommandBuilder, Filter, FilterGraph
from ..executor.process_manager import ProcessManager
from ..sanitize import resolve_input, resolve_output
from ._common import run_command


def _composite(
    background: str,
    foreground: str,
    output: str,
    graph: FilterGraph,
    overwrite: bool,
    dry_run: bool,
    manager: Optional[ProcessManager],
) -> str:
    # no -map: ffmpeg picks the audio stream with the most channels
    builder = (
        CommandBuilder()
        .overwrite(overwrite)
        .input(background)
        .input(foreground)
        .complex_filter(graph)
        .audio_codec("copy")
        .output(output)
    )
    return run_command(builder, output, dry_run=dry_run, manager=manager)


def overlay(
    background: str | Path,
    foreground: str | Path,
    output: str | Path,
    x: int | str = 0,
    y: int | str = 0,
    scale: Optional[str] = None,
    shortest: bool = True,
    overwrite: bool = True,
    dry_run: bool = False,
    manager: Optional[ProcessManager] = None,
) -> str:
    """Overlay a foreground video or image (alpha supported) onto a background.

    Args:
        background: Path to background video or image.
        foreground: Path to foreground video or PNG.
        output: Path for output video file.
        x: Horizontal offset of the foreground.
        y: Vertical offset of the foreground.
        scale: Optional scale expression for the foreground, e.g.
            "320:240" or "iw/2:ih/2".
        shortest: End the output with the shorter input; otherwise it
            runs as long as the longer one.
        overwrite: Replace an existing output instead of failing.
        dry_run: Return the ffmpeg command without executing it.
        manager: Process manager to run ffmpeg with.

    Returns:
        The resolved output path, or the command string on dry run.

    Example::

        overlay("bg.mp4", "logo.png", "out.mp4", x=10, y=10, scale="100:100")
    """
    background = resolve_input(background)
    foreground = resolve_input(foreground)
    output = resolve_output(output)

    placement = Filter("overlay", args=[x, y], params={"shortest": 1} if shortest else {})

    graph = FilterGraph()
    if scale is not None:
        graph.add(Filter("scale", args=[scale], inputs=["1:v"], outputs=["fg"]))
        placement.inputs = ["0:v", "fg"]
    else:
        placement.inputs = ["0:v", "1:v"]
    graph.add(placement)

    return _composite(background, foreground, output, graph, overwrite, dry_run, manager)


def chromakey(
    background: str | Path,
    foreground: str | Path,
    output: str | Path,
    color: str = "0x00ff00",
    similarity: float = 0.1,
    blend: float = 0.075,
    overwrite: bool = True,
    dry_run: bool = False,
    manager: Optional[ProcessManager] = None,
) -> str:
    """Key out a green/blue screen from the foreground and composite it.

    ``similarity`` and ``blend`` go to ffmpeg unchecked; ffmpeg decides
    what is out of range. The keyed foreground sits at 0:0 and the output
    ends with the shortest input, ffmpeg's default for overlay.

    Args:
        background: Path to background video or image.
        foreground: Path to foreground video shot against ``color``.
        output: Path for output video file.
        color: Color to key out, e.g. "0x00ff00" (green) or "0x0000ff" (blue).
        similarity: Higher values key out more of the color.
        blend: Higher values give softer edges.
        overwrite: Replace an existing output instead of failing.
        dry_run: Return the ffmpeg command without executing it.
        manager: Process manager to run ffmpeg with.
    """
    background = resolve_input(background)
    foreground = resolve_input(foreground)
    output = resolve_output(output)

    graph = FilterGraph()
    graph.add(Filter("chromakey", args=[color, similarity, blend], inputs=["1:v"], outputs=["fg"]))
    graph.add(Filter("overlay", inputs=["0:v", "fg"]))

    return _composite(background, foreground, output, graph, overwrite, dry_run, manager)
