"""ffcompose command line"""

import functools
import logging
import sys

import click

from . import __version__
from .compose import chromakey, concat, hstack, overlay, vstack
from .config import load_config
from .errors import FFComposeError, SubprocessFailure
from .executor.process_manager import ProcessManager
from .video.analyzer import MediaProber

logger = logging.getLogger("ffcompose")


def _report_errors(func):
    """Turn library errors into a message on stderr and a non-zero exit."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SubprocessFailure as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(2)
        except FFComposeError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
    return wrapper


def _common_options(func):
    func = click.option("--dry-run", is_flag=True, help="Print the ffmpeg command instead of running it")(func)
    func = click.option("--no-overwrite", "no_overwrite", is_flag=True,
                        help="Fail if the output file already exists")(func)
    return func


def _finish(result: str, dry_run: bool):
    if dry_run:
        click.echo(result)
    else:
        click.echo(f"Wrote {result}")


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="YAML config file")
@click.option("--ffmpeg", help="ffmpeg executable name or path")
@click.option("--ffprobe", help="ffprobe executable name or path")
@click.option("--timeout", type=float, help="Seconds to wait for each ffmpeg/ffprobe run")
@click.option("--verbose", "-v", is_flag=True, help="Log commands before running them")
@click.pass_context
@_report_errors
def main(ctx, config_path, ffmpeg, ffprobe, timeout, verbose):
    """ffcompose - stack, concatenate, overlay and chromakey videos with ffmpeg

    \b
    Examples:
      ffcompose probe clip.mp4 --field all
      ffcompose vstack top.mp4 bottom.mp4 shorts.mp4 --width 1080
      ffcompose concat part1.mp4 part2.mp4 -o full.mp4
      ffcompose chromakey bg.mp4 greenscreen.mp4 out.mp4 --dry-run
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    config = load_config(config_path, ffmpeg=ffmpeg, ffprobe=ffprobe, timeout=timeout)
    ctx.obj = ProcessManager(config)


@main.command("probe")
@click.argument("file", type=click.Path())
@click.option("--field", "-f", default="duration", show_default=True,
              help='ffprobe stream entry, or "all" for duration/width/height/codec')
@click.option("--stream", "-s", default="v:0", show_default=True, help="Stream specifier")
@click.pass_obj
@_report_errors
def probe_cmd(manager, file, field, stream):
    """Print stream metadata of FILE."""
    prober = MediaProber(manager)
    if field == "all":
        for key, value in prober.probe_all(file).to_dict().items():
            click.echo(f"{key}: {value}")
        return

    value = prober.probe(file, field, stream)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    click.echo(value)


@main.command("vstack")
@click.argument("top", type=click.Path())
@click.argument("bottom", type=click.Path())
@click.argument("output", type=click.Path())
@click.option("--height-top", type=int, help="Stretch the top video to this height")
@click.option("--height-bottom", type=int, help="Stretch the bottom video to this height")
@click.option("--width", type=int, default=1080, show_default=True, help="Output width")
@_common_options
@click.pass_obj
@_report_errors
def vstack_cmd(manager, top, bottom, output, height_top, height_bottom, width, dry_run, no_overwrite):
    """Stack TOP over BOTTOM."""
    result = vstack(top, bottom, output, height_top=height_top, height_bottom=height_bottom,
                    width=width, overwrite=not no_overwrite, dry_run=dry_run, manager=manager)
    _finish(result, dry_run)


@main.command("hstack")
@click.argument("left", type=click.Path())
@click.argument("right", type=click.Path())
@click.argument("output", type=click.Path())
@click.option("--width-left", type=int, help="Stretch the left video to this width")
@click.option("--width-right", type=int, help="Stretch the right video to this width")
@click.option("--height", type=int, default=1080, show_default=True, help="Output height")
@_common_options
@click.pass_obj
@_report_errors
def hstack_cmd(manager, left, right, output, width_left, width_right, height, dry_run, no_overwrite):
    """Place LEFT beside RIGHT."""
    result = hstack(left, right, output, width_left=width_left, width_right=width_right,
                    height=height, overwrite=not no_overwrite, dry_run=dry_run, manager=manager)
    _finish(result, dry_run)


@main.command("concat")
@click.argument("inputs", nargs=-1, type=click.Path())
@click.option("--output", "-o", required=True, type=click.Path(), help="Output file")
@_common_options
@click.pass_obj
@_report_errors
def concat_cmd(manager, inputs, output, dry_run, no_overwrite):
    """Join INPUTS end to end without re-encoding."""
    result = concat(list(inputs), output, overwrite=not no_overwrite, dry_run=dry_run, manager=manager)
    _finish(result, dry_run)


@main.command("overlay")
@click.argument("background", type=click.Path())
@click.argument("foreground", type=click.Path())
@click.argument("output", type=click.Path())
@click.option("-x", default="0", show_default=True, help="Horizontal offset")
@click.option("-y", default="0", show_default=True, help="Vertical offset")
@click.option("--scale", help='Scale expression for the foreground, e.g. "320:240"')
@click.option("--shortest/--longest", default=True, show_default=True,
              help="End with the shorter or the longer input")
@_common_options
@click.pass_obj
@_report_errors
def overlay_cmd(manager, background, foreground, output, x, y, scale, shortest, dry_run, no_overwrite):
    """Place FOREGROUND over BACKGROUND."""
    result = overlay(background, foreground, output, x=x, y=y, scale=scale, shortest=shortest,
                     overwrite=not no_overwrite, dry_run=dry_run, manager=manager)
    _finish(result, dry_run)


@main.command("chromakey")
@click.argument("background", type=click.Path())
@click.argument("foreground", type=click.Path())
@click.argument("output", type=click.Path())
@click.option("--color", default="0x00ff00", show_default=True, help="Color to key out")
@click.option("--similarity", type=float, default=0.1, show_default=True)
@click.option("--blend", type=float, default=0.075, show_default=True)
@_common_options
@click.pass_obj
@_report_errors
def chromakey_cmd(manager, background, foreground, output, color, similarity, blend, dry_run, no_overwrite):
    """Key COLOR out of FOREGROUND and composite it over BACKGROUND."""
    result = chromakey(background, foreground, output, color=color, similarity=similarity,
                       blend=blend, overwrite=not no_overwrite, dry_run=dry_run, manager=manager)
    _finish(result, dry_run)


if __name__ == "__main__":
    main()
