"""Tests for the CLI entry point."""

import json

from typer.testing import CliRunner

from bitruvius import __version__
from bitruvius.cli import app
from bitruvius.models import Pose, PoseSequence, Vec2

runner = CliRunner()


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"bitruvius {__version__}"


def test_joints_default_pose():
    result = runner.invoke(app, ["joints"])
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert len(lines) == 18
    ankle = next(line for line in lines if line.startswith("lAnkle"))
    assert "467.500" in ankle


def test_joints_missing_file(tmp_path):
    result = runner.invoke(app, ["joints", str(tmp_path / "missing.json")])
    assert result.exit_code == 1
    assert "Error" in result.output


def test_ground_pushes_out_of_floor(tmp_path):
    path = Pose(root=Vec2(y=10)).save(tmp_path / "sunk.json")
    result = runner.invoke(app, ["ground", str(path), "--magnetism", "0"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert abs(data["root"]["y"]) < 1e-9


def test_ground_writes_output(tmp_path):
    path = Pose(root=Vec2(x=2000, y=-40)).save(tmp_path / "far.json")
    out = tmp_path / "out" / "grounded.json"
    result = runner.invoke(app, ["ground", str(path), "-m", "1", "-o", str(out)])
    assert result.exit_code == 0
    grounded = Pose.load(out)
    # Snapped to the floor, then clamped into the stage box.
    assert abs(grounded.root.y) < 1e-9
    assert grounded.root.x == 550


def test_validate_clean_pose(tmp_path):
    path = Pose().save(tmp_path / "ok.json")
    result = runner.invoke(app, ["validate", str(path)])
    assert result.exit_code == 0
    assert "valid" in result.output


def test_validate_corrupted_pose(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"root": {"x": NaN, "y": 0}, "lThigh": Infinity}')
    out = tmp_path / "fixed.json"
    result = runner.invoke(app, ["validate", str(path), "-o", str(out)])
    assert result.exit_code == 1
    assert "root.x" in result.output
    assert "l_thigh" in result.output
    assert Pose.load(out) == Pose()


def test_tween(tmp_path, sample_sequence):
    path = sample_sequence.save(tmp_path / "seq.json")
    out = tmp_path / "tweened.json"
    result = runner.invoke(app, ["tween", str(path), "--frames", "6", "-o", str(out)])
    assert result.exit_code == 0
    tweened = PoseSequence.load(out)
    assert len(tweened.frames) == 6
    assert tweened.fps == sample_sequence.fps


def test_tween_rejects_zero_frames(tmp_path, sample_sequence):
    path = sample_sequence.save(tmp_path / "seq.json")
    result = runner.invoke(app, ["tween", str(path), "-n", "0"])
    assert result.exit_code == 1


def test_poses_lists_bundled():
    result = runner.invoke(app, ["poses"])
    assert result.exit_code == 0
    assert "wave" in result.output
    assert "t_pose" in result.output


def test_ground_zero_tension_hangs_arms(tmp_path):
    path = Pose().save(tmp_path / "t.json")
    result = runner.invoke(app, ["ground", str(path), "--tension", "0"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    # Arms drop from horizontal to straight down under the 180 torso.
    assert data["rShoulder"] == -270
    assert data["lShoulder"] == 90
