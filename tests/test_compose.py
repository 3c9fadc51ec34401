"""Tests for the composition operations (stack, concat, overlay, chromakey)."""

import os

import pytest

from conftest import RecordingManager
from ffcompose.compose import chromakey, concat, hstack, overlay, vstack
from ffcompose.errors import InputNotFoundError, InvalidArgumentError, SubprocessFailure


def _filter_of(args):
    return args[args.index("-filter_complex") + 1]


def _real(path):
    return str(path.resolve())


class TestVstack:

    def test_default_scaling(self, media_dir, manager):
        out = media_dir / "shorts.mp4"
        result = vstack(media_dir / "top.mp4", media_dir / "bottom.mp4", out, manager=manager)

        assert result == _real(out)
        executable, args = manager.calls[0]
        assert executable == "ffmpeg"
        assert args == [
            "-y",
            "-i", _real(media_dir / "top.mp4"),
            "-i", _real(media_dir / "bottom.mp4"),
            "-filter_complex",
            "[0:v]scale=1080:-2[top];[1:v]scale=1080:-2[bottom];[top][bottom]vstack=inputs=2",
            "-c:a", "copy",
            _real(out),
        ]

    def test_explicit_heights_stretch(self, media_dir, manager):
        vstack(media_dir / "top.mp4", media_dir / "bottom.mp4", media_dir / "out.mp4",
               height_top=960, width=720, manager=manager)

        assert _filter_of(manager.calls[0][1]) == (
            "[0:v]scale=720:960:force_original_aspect_ratio=disable[top];"
            "[1:v]scale=720:-2[bottom];"
            "[top][bottom]vstack=inputs=2"
        )

    def test_dry_run_has_no_side_effects(self, media_dir, manager):
        before = sorted(os.listdir(media_dir))
        out = media_dir / "shorts.mp4"

        cmd = vstack(media_dir / "top.mp4", media_dir / "bottom.mp4", out,
                     dry_run=True, manager=manager)

        assert cmd.startswith("ffmpeg -y ")
        assert _real(media_dir / "top.mp4") in cmd
        assert _real(media_dir / "bottom.mp4") in cmd
        assert cmd.endswith(_real(out))
        assert manager.calls == []
        assert sorted(os.listdir(media_dir)) == before

    def test_no_overwrite(self, media_dir, manager):
        cmd = vstack(media_dir / "top.mp4", media_dir / "bottom.mp4", media_dir / "out.mp4",
                     overwrite=False, dry_run=True, manager=manager)
        assert cmd.startswith("ffmpeg -n ")

    def test_missing_input(self, media_dir, manager):
        with pytest.raises(InputNotFoundError, match="nope.mp4"):
            vstack(media_dir / "top.mp4", media_dir / "nope.mp4", media_dir / "out.mp4",
                   manager=manager)
        assert manager.calls == []

    def test_failure_propagates_unchanged(self, media_dir):
        error = SubprocessFailure(1, "Input link parameters do not match\n")
        manager = RecordingManager(error=error)
        with pytest.raises(SubprocessFailure) as exc_info:
            vstack(media_dir / "top.mp4", media_dir / "bottom.mp4", media_dir / "out.mp4",
                   manager=manager)
        assert exc_info.value is error


class TestHstack:

    def test_default_scaling(self, media_dir, manager):
        hstack(media_dir / "left.mp4", media_dir / "right.mp4", media_dir / "wide.mp4",
               manager=manager)
        assert _filter_of(manager.calls[0][1]) == (
            "[0:v]scale=-2:1080[left];[1:v]scale=-2:1080[right];[left][right]hstack=inputs=2"
        )

    def test_explicit_widths(self, media_dir, manager):
        hstack(media_dir / "left.mp4", media_dir / "right.mp4", media_dir / "wide.mp4",
               width_left=640, width_right=1280, height=720, manager=manager)
        assert _filter_of(manager.calls[0][1]) == (
            "[0:v]scale=640:720:force_original_aspect_ratio=disable[left];"
            "[1:v]scale=1280:720:force_original_aspect_ratio=disable[right];"
            "[left][right]hstack=inputs=2"
        )

    def test_dry_run_mentions_all_paths(self, media_dir, manager):
        cmd = hstack(media_dir / "left.mp4", media_dir / "right.mp4", media_dir / "wide.mp4",
                     dry_run=True, manager=manager)
        for name in ("left.mp4", "right.mp4", "wide.mp4"):
            assert _real(media_dir / name) in cmd
        assert manager.calls == []
        assert not (media_dir / "wide.mp4").exists()

    def test_missing_input(self, media_dir, manager):
        with pytest.raises(InputNotFoundError):
            hstack(media_dir / "ghost.mp4", media_dir / "right.mp4", media_dir / "wide.mp4",
                   dry_run=True, manager=manager)


class TestConcat:

    def _capture_list(self, seen):
        def on_run(executable, args):
            list_path = args[args.index("-i") + 1]
            with open(list_path) as f:
                seen.append((list_path, f.read()))
        return on_run

    def test_single_invocation_with_list_file(self, media_dir):
        seen = []
        manager = RecordingManager(on_run=self._capture_list(seen))
        out = media_dir / "full.mp4"

        result = concat([media_dir / "a.mp4", media_dir / "b.mp4"], out, manager=manager)

        assert result == _real(out)
        assert len(manager.calls) == 1
        executable, args = manager.calls[0]
        assert executable == "ffmpeg"
        list_path, contents = seen[0]
        assert args == [
            "-y", "-f", "concat", "-safe", "0", "-i", list_path, "-c", "copy", _real(out),
        ]
        assert contents == (
            f"file '{_real(media_dir / 'a.mp4')}'\n"
            f"file '{_real(media_dir / 'b.mp4')}'\n"
        )
        assert not os.path.exists(list_path)

    def test_list_file_removed_on_failure(self, media_dir):
        seen = []
        manager = RecordingManager(
            error=SubprocessFailure(1, "Unsafe file name\n"),
            on_run=self._capture_list(seen),
        )
        with pytest.raises(SubprocessFailure):
            concat([media_dir / "a.mp4", media_dir / "b.mp4", media_dir / "c.mp4"],
                   media_dir / "full.mp4", manager=manager)

        list_path, contents = seen[0]
        assert contents.count("file '") == 3
        assert not os.path.exists(list_path)

    def test_failure_survives_list_file_already_gone(self, media_dir):
        error = SubprocessFailure(1, "Conversion failed!\n")

        def remove_list(executable, args):
            os.remove(args[args.index("-i") + 1])

        manager = RecordingManager(error=error, on_run=remove_list)
        with pytest.raises(SubprocessFailure) as exc_info:
            concat([media_dir / "a.mp4", media_dir / "b.mp4"], media_dir / "full.mp4",
                   manager=manager)
        assert exc_info.value is error

    def test_list_file_removed_after_dry_run(self, media_dir, manager):
        cmd = concat([media_dir / "a.mp4", media_dir / "b.mp4"], media_dir / "full.mp4",
                     dry_run=True, manager=manager)
        tokens = cmd.split(" ")
        list_path = tokens[tokens.index("-i") + 1]
        assert "-f concat -safe 0 -i" in cmd
        assert "-c copy" in cmd
        assert not os.path.exists(list_path)
        assert manager.calls == []

    def test_quotes_in_paths_are_escaped(self, tmp_path):
        a = tmp_path / "it's.mp4"
        b = tmp_path / "b.mp4"
        a.write_bytes(b"x")
        b.write_bytes(b"x")
        seen = []
        manager = RecordingManager(on_run=self._capture_list(seen))

        concat([a, b], tmp_path / "out.mp4", manager=manager)

        first_line = seen[0][1].splitlines()[0]
        assert first_line == "file '{}'".format(_real(a).replace("'", "'\\''"))

    @pytest.mark.parametrize("inputs", [[], ["a.mp4"]])
    def test_fewer_than_two_inputs(self, media_dir, manager, inputs):
        with pytest.raises(InvalidArgumentError, match="at least 2"):
            concat([media_dir / p for p in inputs], media_dir / "out.mp4", manager=manager)
        assert manager.calls == []

    def test_single_string_is_not_a_list(self, media_dir, manager):
        with pytest.raises(InvalidArgumentError):
            concat(str(media_dir / "a.mp4"), media_dir / "out.mp4", manager=manager)

    def test_missing_input(self, media_dir, manager):
        with pytest.raises(InputNotFoundError):
            concat([media_dir / "a.mp4", media_dir / "gone.mp4"], media_dir / "out.mp4",
                   manager=manager)
        assert manager.calls == []


class TestOverlay:

    def test_default_position_and_shortest(self, media_dir, manager):
        overlay(media_dir / "bg.mp4", media_dir / "logo.png", media_dir / "out.mp4",
                manager=manager)
        args = manager.calls[0][1]
        assert _filter_of(args) == "[0:v][1:v]overlay=0:0:shortest=1"
        assert args[-3:] == ["-c:a", "copy", _real(media_dir / "out.mp4")]
        assert "-map" not in args
        assert args.index(_real(media_dir / "bg.mp4")) < args.index(_real(media_dir / "logo.png"))

    def test_scaled_foreground(self, media_dir, manager):
        overlay(media_dir / "bg.mp4", media_dir / "logo.png", media_dir / "out.mp4",
                x=312, y=580, scale="iw/2:ih/2", manager=manager)
        assert _filter_of(manager.calls[0][1]) == (
            "[1:v]scale=iw/2:ih/2[fg];[0:v][fg]overlay=312:580:shortest=1"
        )

    def test_shortest_only_changes_duration_clause(self, media_dir, manager):
        common = dict(x=10, y=20, scale="100:100", dry_run=True, manager=manager)
        clamped = overlay(media_dir / "bg.mp4", media_dir / "fg.mp4", media_dir / "out.mp4",
                          shortest=True, **common)
        extended = overlay(media_dir / "bg.mp4", media_dir / "fg.mp4", media_dir / "out.mp4",
                           shortest=False, **common)

        assert clamped != extended
        assert ":shortest=1" in clamped
        assert clamped.replace(":shortest=1", "") == extended

    def test_missing_foreground(self, media_dir, manager):
        with pytest.raises(InputNotFoundError):
            overlay(media_dir / "bg.mp4", media_dir / "nothing.png", media_dir / "out.mp4",
                    manager=manager)
        assert manager.calls == []


class TestChromakey:

    def test_default_green_screen(self, media_dir, manager):
        chromakey(media_dir / "bg.mp4", media_dir / "fg.mp4", media_dir / "out.mp4",
                  manager=manager)
        args = manager.calls[0][1]
        assert _filter_of(args) == "[1:v]chromakey=0x00ff00:0.1:0.075[fg];[0:v][fg]overlay"
        assert "shortest" not in " ".join(args)
        assert args[-3:] == ["-c:a", "copy", _real(media_dir / "out.mp4")]

    def test_values_passed_through_unchecked(self, media_dir, manager):
        cmd = chromakey(media_dir / "bg.mp4", media_dir / "fg.mp4", media_dir / "out.mp4",
                        color="0x0000ff", similarity=1.5, blend=-0.2,
                        dry_run=True, manager=manager)
        assert "[1:v]chromakey=0x0000ff:1.5:-0.2[fg];[0:v][fg]overlay" in cmd

    def test_missing_background(self, media_dir, manager):
        with pytest.raises(InputNotFoundError):
            chromakey(media_dir / "void.mp4", media_dir / "fg.mp4", media_dir / "out.mp4",
                      manager=manager)
        assert manager.calls == []
