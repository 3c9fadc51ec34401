"""Pytest configuration for ffcompose tests.

Puts the project root on sys.path so the package imports without being
installed, and provides fake media files plus a recording stand-in for
ProcessManager so no test needs ffmpeg.
"""

import os
import sys

import pytest

project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ffcompose.executor.process_manager import ProcessManager, ProcessResult  # noqa: E402


class RecordingManager(ProcessManager):
    """ProcessManager that records invocations instead of spawning processes.

    ``probe_values`` maps an ffprobe entry name to the stdout it returns.
    ``error`` is raised from every non-dry-run call when set.
    ``on_run`` is called with (executable, args) before returning.
    """

    def __init__(self, probe_values=None, error=None, on_run=None, config=None):
        super().__init__(config)
        self.calls = []
        self.probe_values = probe_values or {}
        self.error = error
        self.on_run = on_run

    def run(self, executable, args, dry_run=False):
        if dry_run:
            return super().run(executable, args, dry_run=True)

        args = [str(a) for a in args]
        self.calls.append((executable, args))
        if self.on_run:
            self.on_run(executable, args)
        if self.error is not None:
            raise self.error

        stdout = ""
        if "-show_entries" in args:
            entry = args[args.index("-show_entries") + 1]
            stdout = self.probe_values.get(entry.split("=", 1)[1], "")
        return ProcessResult(
            return_code=0,
            stdout=stdout,
            stderr="",
            command=" ".join([executable] + args),
        )


@pytest.fixture
def manager():
    return RecordingManager()


@pytest.fixture
def media_dir(tmp_path):
    """Directory holding a few fake media files."""
    for name in ("top.mp4", "bottom.mp4", "left.mp4", "right.mp4",
                 "a.mp4", "b.mp4", "c.mp4", "bg.mp4", "fg.mp4", "logo.png"):
        (tmp_path / name).write_bytes(b"fake media data")
    return tmp_path


@pytest.fixture
def hd_manager():
    """Manager whose ffprobe answers like a 1920x1080 h264 clip of 12.5 s."""
    return RecordingManager(probe_values={
        "duration": "12.500000\n",
        "width": "1920\n",
        "height": "1080\n",
        "codec_name": "h264\n",
    })
