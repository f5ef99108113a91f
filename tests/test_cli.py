"""Tests for the command-line entry point.

These run complete (tiny) renders end to end, so they also cover scene
construction and the tiled renderer with real workers.
"""

import logging

import pytest
from PIL import Image as PILImage

from spheretrace.cli import main, parse_args

TINY = ["--width", "8", "--aspect-ratio", "2", "--samples", "1", "--max-depth", "2", "--seed", "1"]


class TestParseArgs:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = parse_args([])
        assert args.width == 400
        assert abs(args.aspect_ratio - 16.0 / 9.0) < 1e-12
        assert args.samples == 32
        assert args.max_depth == 16
        assert args.threads == 1
        assert args.seed is None
        assert args.scene == "three_spheres"
        assert args.output is None

    @pytest.mark.parametrize("text,expected", [("16/9", 16.0 / 9.0), ("1.5", 1.5), ("2", 2.0)])
    def test_aspect_ratio_forms(self, text, expected):
        assert abs(parse_args(["--aspect-ratio", text]).aspect_ratio - expected) < 1e-12

    @pytest.mark.parametrize("text", ["wide", "1/0"])
    def test_invalid_aspect_ratio_exits(self, text):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--aspect-ratio", text])
        assert exc_info.value.code == 2

    def test_unknown_scene_exits(self):
        with pytest.raises(SystemExit):
            parse_args(["--scene", "cornell"])

    def test_help_states_expected_render_time(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--help"])
        assert exc_info.value.code == 0

        out = capsys.readouterr().out
        assert "0.3 ms per sample" in out
        assert "15 minutes" in out

    def test_verbose_and_quiet_are_exclusive(self):
        with pytest.raises(SystemExit):
            parse_args(["--verbose", "--quiet"])


class TestMain:
    """End-to-end tests for main()."""

    def test_writes_ppm_file(self, tmp_path):
        output = tmp_path / "out.ppm"

        assert main([*TINY, "--threads", "2", "--output", str(output)]) == 0

        lines = output.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "8 4", "255"]
        assert len(lines) == 3 + 8 * 4

    def test_writes_png_file(self, tmp_path):
        output = tmp_path / "out.png"

        assert main([*TINY, "--threads", "4", "--output", str(output)]) == 0

        img = PILImage.open(output)
        assert img.size == (8, 4)
        assert img.mode == "RGB"

    def test_writes_ppm_to_stdout(self, capsys):
        assert main(TINY) == 0

        out = capsys.readouterr().out
        assert out.startswith("P3\n8 4\n255\n")
        assert len(out.splitlines()) == 3 + 8 * 4

    def test_random_scene(self, tmp_path):
        output = tmp_path / "random.ppm"
        assert main([*TINY, "--scene", "random", "--output", str(output)]) == 0
        assert output.exists()

    def test_non_divisible_threads_is_configuration_error(self, tmp_path, caplog):
        output = tmp_path / "out.ppm"

        with caplog.at_level(logging.ERROR):
            assert main([*TINY, "--threads", "3", "--output", str(output)]) == 2

        assert "not divisible" in caplog.text
        assert not output.exists()

    @pytest.mark.parametrize(
        "extra",
        [
            ["--width", "0"],
            ["--samples", "0"],
            ["--max-depth", "-1"],
            ["--threads", "0"],
        ],
    )
    def test_invalid_settings_return_2(self, extra, caplog):
        with caplog.at_level(logging.ERROR):
            assert main([*TINY, *extra]) == 2
        assert "Configuration error" in caplog.text

    def test_unwritable_output_returns_1(self, tmp_path, caplog):
        output = tmp_path / "missing" / "out.ppm"

        with caplog.at_level(logging.ERROR):
            assert main([*TINY, "--output", str(output)]) == 1

        assert "Could not write image" in caplog.text
