"""CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer

if TYPE_CHECKING:
    from bitruvius.models.pose import Pose

app = typer.Typer(
    name="bitruvius",
    help="2D articulated-figure kinematics engine.",
    no_args_is_help=True,
)


def _read_pose(path: Path | None) -> Pose:
    from bitruvius.models.pose import DEFAULT_POSE, Pose, PoseLoadError

    if path is None:
        return DEFAULT_POSE
    try:
        return Pose.load(path)
    except PoseLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None


def _emit(text: str, output: Path | None) -> None:
    if output is None:
        typer.echo(text)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text)
        typer.echo(f"Wrote {output}")


@app.command()
def joints(
    pose_path: Annotated[
        Path | None,
        typer.Argument(help="Pose JSON file (default: T-pose)"),
    ] = None,
) -> None:
    """Print the world position of every joint landmark."""
    from bitruvius.config import load_config
    from bitruvius.kinematics.forward import joint_positions

    config = load_config()
    pose = _read_pose(pose_path)
    for landmark, point in joint_positions(pose, config.rig).items():
        typer.echo(f"{landmark.value:<10} {point.x:10.3f} {point.y:10.3f}")


@app.command()
def ground(
    pose_path: Annotated[Path, typer.Argument(help="Pose JSON file")],
    floor: Annotated[
        float | None,
        typer.Option("--floor", "-f", help="Floor height (default: rig floor)"),
    ] = None,
    magnetism: Annotated[
        float | None,
        typer.Option("--magnetism", "-m", help="Floor magnetism 0-1"),
    ] = None,
    sit: Annotated[bool, typer.Option("--sit", help="Resolve against the seat first")] = False,
    seat_height: Annotated[
        float | None,
        typer.Option("--seat", help="Seat height (sit mode)"),
    ] = None,
    tension: Annotated[
        float | None,
        typer.Option("--tension", "-t", help="Limb tension 0-100; lower values let the limbs hang"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here instead of stdout"),
    ] = None,
) -> None:
    """Place a pose on the floor (and seat), then clamp and sanitise it."""
    from bitruvius.config import load_config
    from bitruvius.kinematics.grounding import resolve_grounding
    from bitruvius.kinematics.limpness import apply_tension
    from bitruvius.kinematics.validation import clamp_to_box, validate

    config = load_config()
    stage = config.stage
    pose = apply_tension(
        _read_pose(pose_path), stage.tension if tension is None else tension
    )
    result = resolve_grounding(
        pose,
        config.rig.floor_height if floor is None else floor,
        stage.floor_magnetism if magnetism is None else magnetism,
        sit_mode=sit,
        seat_height=stage.seat_height if seat_height is None else seat_height,
        rig=config.rig,
        magnet_range=stage.magnet_range,
    )
    result = validate(clamp_to_box(result, stage.box_size, stage.box_margin))
    _emit(result.model_dump_json(indent=2, by_alias=True), output)


@app.command()
def validate(
    pose_path: Annotated[Path, typer.Argument(help="Pose JSON file")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the repaired pose here"),
    ] = None,
) -> None:
    """Report and repair non-finite fields; exits 1 when the pose was corrupted."""
    import math

    from bitruvius.kinematics.validation import validate as validate_pose
    from bitruvius.models.pose import NUMERIC_FIELDS

    pose = _read_pose(pose_path)
    repaired = validate_pose(pose)
    if repaired is pose:
        typer.echo("Pose is valid")
        return

    bad = [f"root.{axis}" for axis in ("x", "y") if not math.isfinite(getattr(pose.root, axis))]
    bad += [name for name in NUMERIC_FIELDS if not math.isfinite(getattr(pose, name))]
    bad += [
        f"offsets.{key.value}"
        for key, v in pose.offsets.items()
        if not (math.isfinite(v.x) and math.isfinite(v.y))
    ]
    for name in bad:
        typer.echo(f"  ✗ {name}")
    if output is not None:
        repaired.save(output)
        typer.echo(f"Repaired pose written to {output}")
    raise typer.Exit(1)


@app.command()
def tween(
    sequence_path: Annotated[Path, typer.Argument(help="Pose sequence JSON file")],
    frames: Annotated[int, typer.Option("--frames", "-n", help="Target frame count")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here instead of stdout"),
    ] = None,
) -> None:
    """Resample a pose sequence to a fixed number of frames."""
    from bitruvius.config import load_config
    from bitruvius.kinematics.blend import exceeds_delta_limit, resample
    from bitruvius.models.pose import PoseLoadError, PoseSequence

    try:
        sequence = PoseSequence.load(sequence_path)
    except PoseLoadError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    try:
        tweened = resample(sequence, frames)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from None
    limit = load_config().stage.delta_limit
    for index, (previous, current) in enumerate(zip(tweened, tweened[1:]), start=1):
        if exceeds_delta_limit(previous, current, limit):
            typer.echo(f"Warning: frame {index} jumps more than {limit:g}", err=True)
    result = sequence.model_copy(update={"frames": tweened})
    _emit(result.model_dump_json(indent=2, by_alias=True), output)


@app.command()
def poses() -> None:
    """List the bundled pose sequences."""
    from bitruvius.poses import available_poses, load

    for name in available_poses():
        seq = load(name)
        typer.echo(f"{name:<12} {len(seq.frames):3d} frames @ {seq.fps} fps")


@app.callback(invoke_without_command=True)
def main(
    version: Annotated[
        bool, typer.Option("--version", "-v", help="Show version")
    ] = False,
) -> None:
    """Bitruvius - 2D articulated-figure kinematics engine."""
    if version:
        from bitruvius import __version__

        typer.echo(f"bitruvius {__version__}")
        raise typer.Exit()
