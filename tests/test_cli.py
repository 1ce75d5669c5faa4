"""
Unit tests for the command-line interface.
Dry runs with an explicit anchor don't require KiCad to be running.
"""
import json

import pytest
from callout.cli.main import create_parser, build_style, main
from callout.core.models import LeaderPosition, Platform

REFERENCE_ARGS = [
    "--viewport", "400", "300",
    "--min-size", "210", "100",
    "--max-size", "210", "100",
    "--dry-run",
]


class TestParser:
    """Tests for argument parsing and style building"""

    def test_defaults(self):
        args = create_parser().parse_args(["--anchor", "1", "2"])
        style = build_style(args)
        assert style.leader_position == LeaderPosition.AUTOMATIC
        assert style.default_leader_position == LeaderPosition.BOTTOM
        assert style.platform == Platform.DESKTOP
        assert args.viewport == [400.0, 300.0]

    def test_position_names(self):
        args = create_parser().parse_args([
            "--anchor", "1", "2", "--position", "upper-right", "--default-position", "lower-left",
        ])
        style = build_style(args)
        assert style.leader_position == LeaderPosition.UPPER_RIGHT
        assert style.default_leader_position == LeaderPosition.LOWER_LEFT

    def test_scale(self):
        args = create_parser().parse_args(["--anchor", "1", "2", "--scale", "0.1"])
        style = build_style(args)
        assert style.corner_radius == pytest.approx(1.0)
        assert style.leader_width == pytest.approx(3.0)

    def test_offset_and_platform(self):
        args = create_parser().parse_args([
            "--anchor", "1", "2", "--offset", "5", "-3", "--platform", "ios",
        ])
        style = build_style(args)
        assert (style.screen_offset_x, style.screen_offset_y) == (5.0, -3.0)
        assert style.platform == Platform.IOS

    def test_unknown_position_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--anchor", "1", "2", "--position", "sideways"])


class TestMain:
    """Tests for dry-run execution"""

    def test_anchor_required(self):
        with pytest.raises(SystemExit):
            main(["--dry-run"])

    def test_dry_run_output(self, capsys):
        main(["--anchor", "390", "150"] + REFERENCE_ARGS)
        out = capsys.readouterr().out
        assert "✓ Anchor: (390.0, 150.0)" in out
        assert "automatic → lower-left" in out
        assert "Dry run complete" in out

    def test_verbose_prints_diagnostic(self, capsys):
        main(["--anchor", "200", "150", "--verbose"] + REFERENCE_ARGS)
        out = capsys.readouterr().out
        assert "Placement Diagnostic" in out
        assert "blocked: ['RIGHT']" in out

    def test_export_json(self, tmp_path):
        output = tmp_path / "callout.json"
        main(["--anchor", "390", "150", "--export-json", str(output)] + REFERENCE_ARGS)

        data = json.loads(output.read_text())
        assert data["requested_position"] == "automatic"
        assert data["adjusted_position"] == "lower_left"
        assert data["frame"]["x"] == pytest.approx(375)
        assert data["path"]["committed"] is True
        assert data["path"]["closed"] is True
        assert data["path"]["segments"][0]["type"] == "move"
        assert len(data["path"]["segments"]) == 10

    def test_export_svg(self, tmp_path):
        output = tmp_path / "callout.svg"
        main([
            "--anchor", "200", "150", "--title", "U1", "--detail", "MCU",
            "--export-svg", str(output),
        ] + REFERENCE_ARGS)

        svg = output.read_text()
        assert 'data-leader="bottom"' in svg
        assert ">U1</text>" in svg

    def test_unexpected_error_exits(self, monkeypatch, capsys):
        """Errors outside the KiCad ones are reported and exit with status 1"""
        def fail(*args, **kwargs):
            raise KeyError("fill")

        monkeypatch.setattr("callout.cli.main.render_callout_to_svg", fail)
        with pytest.raises(SystemExit) as exc_info:
            main(["--anchor", "200", "150", "--export-svg", "unused.svg"] + REFERENCE_ARGS)

        assert exc_info.value.code == 1
        assert "UNEXPECTED ERROR" in capsys.readouterr().out


class TestPluginStyle:
    """Tests for the plugin's board style"""

    def test_board_style_in_millimeters(self):
        from callout_generator import board_style

        style = board_style()
        # 96 px per inch
        assert style.corner_radius == pytest.approx(10 * 25.4 / 96)
        assert style.min_width == pytest.approx(210 * 25.4 / 96)
        assert style.leader_height == pytest.approx(15 * 25.4 / 96)
