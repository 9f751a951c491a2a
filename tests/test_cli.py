"""
Tests for the command-line interface.
"""

import json
import subprocess
import sys
import zipfile

import pytest

from threadmesh.cli.generate import build_parser, main, resolve_params
from threadmesh.enums import Hand


class TestCLIEntryPoints:
    """Test that CLI entry points defined in pyproject.toml are importable."""

    def test_entry_point_importable(self):
        from threadmesh.cli.generate import main
        assert callable(main)

    def test_entry_point_via_subprocess(self):
        """Test entry point works when invoked as module."""
        result = subprocess.run(
            [sys.executable, "-m", "threadmesh.cli.generate", "--help"],
            capture_output=True,
            text=True
        )
        assert result.returncode == 0
        assert "usage" in result.stdout.lower()
        assert "--steps-per-turn" in result.stdout


class TestParser:
    """Flags mirror the host parameter panel."""

    def test_flags_default_to_none(self):
        args = build_parser().parse_args([])
        assert args.turns is None
        assert args.inner_radius is None
        assert args.hand is None

    def test_numeric_flags_typed(self):
        args = build_parser().parse_args(["--turns", "12", "--height-per-turn", "0.5"])
        assert args.turns == 12
        assert args.height_per_turn == 0.5

    @pytest.mark.parametrize("argv", [
        ["--steps-per-turn", "4"],
        ["--turns", "0"],
        ["--inner-radius", "200"],
        ["--turns", "many"],
    ])
    def test_out_of_range_rejected(self, argv, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(argv)
        assert exc_info.value.code == 2


class TestResolveParams:
    """Explicit flag > parameter file > host default."""

    def test_defaults(self):
        params = resolve_params(build_parser().parse_args([]))
        assert params.turns == 6
        assert params.hand == Hand.LEFT

    def test_file_then_flags(self, tmp_path):
        path = tmp_path / "thread.json"
        path.write_text(json.dumps({"thread": {"turns": 9, "steps_per_turn": 32}}))

        args = build_parser().parse_args([str(path), "--turns", "3", "--hand", "right", "--no-lead-out"])
        params = resolve_params(args)

        assert params.turns == 3
        assert params.steps_per_turn == 32
        assert params.hand == Hand.RIGHT
        assert params.lead_out is False
        assert params.lead_in is True


class TestMainNoGeometry:
    """Runs that never build B-rep geometry."""

    def test_analyze(self, capsys):
        code = main(["--turns", "2", "--steps-per-turn", "12", "--analyze", "--no-save"])
        out = capsys.readouterr().out

        assert code == 0
        assert "Vertices: 88" in out
        assert "Ends:     closed" in out
        assert "Topology: Closed, consistently oriented mesh" in out
        assert "Euler characteristic: 2" in out

    def test_open_end_reported(self, capsys):
        code = main(["--turns", "2", "--steps-per-turn", "12", "--no-lead-in", "--analyze", "--no-save"])
        out = capsys.readouterr().out

        assert code == 0
        assert "MESH_OPEN" in out
        assert "Ends:     open" in out
        assert "Open mesh" in out

    def test_missing_file(self, tmp_path, capsys):
        code = main([str(tmp_path / "nonexistent.json"), "--no-save"])
        assert code == 1
        assert "Error loading parameters" in capsys.readouterr().err

    def test_invalid_json(self, tmp_path, capsys):
        path = tmp_path / "invalid.json"
        path.write_text("not valid json {")
        assert main([str(path), "--no-save"]) == 1

    def test_invalid_parameters(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"thread": {"steps_per_turn": 2}}))

        code = main([str(path), "--no-save"])
        err = capsys.readouterr().err

        assert code == 1
        assert "STEPS_TOO_FEW" in err
        assert "Error: invalid thread parameters" in err

    def test_save_json(self, tmp_path, capsys):
        path = tmp_path / "saved.json"
        code = main(["--turns", "3", "--hand", "right", "--save-json", str(path), "--no-save"])

        assert code == 0
        data = json.loads(path.read_text())
        assert data["thread"]["turns"] == 3
        assert data["thread"]["hand"] == "right"

    def test_metadata_only_package(self, tmp_path, capsys):
        """With every geometry format disabled only params.json and summary.md are written."""
        code = main([
            "--turns", "2", "--steps-per-turn", "12",
            "--no-step", "--no-stl", "--no-3mf",
            "-o", str(tmp_path), "--name", "meta",
        ])

        assert code == 0
        assert sorted(p.name for p in tmp_path.iterdir()) == ["params.json", "summary.md"]
        data = json.loads((tmp_path / "params.json").read_text())
        assert data["derived"]["vertices"] == 88


@pytest.mark.slow
class TestMainGeometry:
    """Full runs that sew and export geometry."""

    def test_writes_step_and_stl(self, tmp_path):
        result = subprocess.run(
            [
                sys.executable, "-m", "threadmesh.cli.generate",
                "--turns", "2", "--steps-per-turn", "16",
                "--no-3mf", "-o", str(tmp_path), "--name", "thread",
            ],
            capture_output=True,
            text=True
        )

        assert result.returncode == 0, result.stderr
        for name in ("thread.step", "thread.stl", "params.json", "summary.md"):
            path = tmp_path / name
            assert path.exists(), name
            assert path.stat().st_size > 0

    def test_zip(self, tmp_path, capsys):
        code = main([
            "--turns", "1", "--steps-per-turn", "12",
            "--no-3mf", "--zip", "-o", str(tmp_path), "--name", "pkg",
        ])

        assert code == 0
        with zipfile.ZipFile(tmp_path / "pkg.zip") as zf:
            assert set(zf.namelist()) == {"pkg.step", "pkg.stl", "params.json", "summary.md"}
