"""Tests for floor/seat grounding and the pin-ground-repin protocol."""

import pytest

from bitruvius.config import FLOOR_HEIGHT
from bitruvius.kinematics.forward import joint_positions
from bitruvius.kinematics.grounding import resolve_grounding, seat, settle
from bitruvius.models import Effector, Joint, Landmark, Pose, Vec2


def _lowest_contact(pose: Pose) -> float:
    joints = joint_positions(pose)
    return max(
        joints[p].y
        for p in (Landmark.L_FOOT_TIP, Landmark.R_FOOT_TIP, Landmark.L_ANKLE, Landmark.R_ANKLE)
    )


def _without_root(pose: Pose) -> dict:
    return pose.model_dump(exclude={"root"})


def test_penetration_is_pushed_out_exactly():
    sunk = Pose(root=Vec2(x=12, y=10))
    grounded = resolve_grounding(sunk, FLOOR_HEIGHT, 0.0)
    assert sunk.root.y - grounded.root.y == pytest.approx(10, abs=1e-9)
    assert grounded.root.x == 12
    assert _without_root(grounded) == _without_root(sunk)


def test_grounding_is_idempotent():
    grounded = resolve_grounding(Pose(root=Vec2(y=10)), FLOOR_HEIGHT, 0.0)
    again = resolve_grounding(grounded, FLOOR_HEIGHT, 0.0)
    assert again.root.y == grounded.root.y


@pytest.mark.parametrize("magnetism", [0.0, 1.0])
@pytest.mark.parametrize("y", [400.0, 333.3, 123.456, 60.0, -20.0])
def test_bent_pose_grounding_is_idempotent(crouch_pose: Pose, magnetism: float, y: float) -> None:
    placed = crouch_pose.with_root(Vec2(x=3.3, y=y))
    grounded = resolve_grounding(placed, FLOOR_HEIGHT, magnetism)
    assert resolve_grounding(grounded, FLOOR_HEIGHT, magnetism) == grounded


def test_sit_mode_grounding_is_idempotent(crouch_pose: Pose):
    placed = crouch_pose.with_root(Vec2(x=3.3, y=200))
    seated = resolve_grounding(placed, FLOOR_HEIGHT, 0.0, sit_mode=True, seat_height=150)
    again = resolve_grounding(seated, FLOOR_HEIGHT, 0.0, sit_mode=True, seat_height=150)
    assert again == seated


def test_input_pose_is_not_mutated():
    sunk = Pose(root=Vec2(y=10))
    resolve_grounding(sunk, FLOOR_HEIGHT, 1.0)
    assert sunk.root.y == 10


def test_bent_pose_grounds_its_lowest_point(crouch_pose: Pose):
    grounded = resolve_grounding(crouch_pose.with_root(Vec2(y=400)), FLOOR_HEIGHT, 0.0)
    assert _lowest_contact(grounded) == pytest.approx(FLOOR_HEIGHT)


@pytest.mark.parametrize(("magnetism", "expected_y"), [(1.0, 0.0), (0.5, -20.0), (0.0, -40.0)])
def test_magnetism_pulls_hovering_figure(magnetism: float, expected_y: float) -> None:
    hovering = Pose(root=Vec2(y=-40))
    grounded = resolve_grounding(hovering, FLOOR_HEIGHT, magnetism)
    assert grounded.root.y == pytest.approx(expected_y)


def test_magnetism_ignores_distant_floor():
    high = Pose(root=Vec2(y=-150))
    assert resolve_grounding(high, FLOOR_HEIGHT, 1.0).root.y == -150


def test_wider_magnet_range_reaches_further():
    high = Pose(root=Vec2(y=-150))
    grounded = resolve_grounding(high, FLOOR_HEIGHT, 1.0, magnet_range=200)
    assert grounded.root.y == pytest.approx(0.0, abs=1e-9)


def test_sit_mode_pushes_hips_out_of_seat():
    # Hips sit at y=110 in the default pose.
    seated = resolve_grounding(Pose(), FLOOR_HEIGHT, 1.0, sit_mode=True, seat_height=100)
    assert seated.root.y == pytest.approx(-10)


def test_sit_mode_suspends_floor_magnetism():
    seated = resolve_grounding(
        Pose(root=Vec2(y=-30)), FLOOR_HEIGHT, 1.0, sit_mode=True, seat_height=1000
    )
    assert seated.root.y == -30


def test_seat_magnetism_is_half_strength():
    seated = resolve_grounding(Pose(), 10_000, 1.0, sit_mode=True, seat_height=150)
    assert seated.root.y == pytest.approx(20)


def test_floor_wins_over_seat_pull():
    seated = resolve_grounding(Pose(), FLOOR_HEIGHT, 1.0, sit_mode=True, seat_height=150)
    assert seated.root.y == pytest.approx(0)


def test_settle_keeps_pinned_feet_planted():
    start = Pose()
    joints = joint_positions(start)
    pins = {
        Effector.L_FOOT: joints[Landmark.L_ANKLE],
        Effector.R_FOOT: joints[Landmark.R_ANKLE],
    }
    # Dropping the body bends the knees; grounding may then lift it.
    result = settle(start.with_root(Vec2(y=30)), pins, FLOOR_HEIGHT)
    after = joint_positions(result)
    assert after[Landmark.L_ANKLE].distance_to(pins[Effector.L_FOOT]) < 1e-3
    assert after[Landmark.R_ANKLE].distance_to(pins[Effector.R_FOOT]) < 1e-3
    assert result.root.y <= 30


def test_settle_without_pins_is_plain_grounding():
    sunk = Pose(root=Vec2(y=10))
    assert settle(sunk, {}, FLOOR_HEIGHT) == resolve_grounding(sunk, FLOOR_HEIGHT, 0.0)


def test_seat_places_pelvis_and_feet(rig):
    seated = seat(Pose(root=Vec2(x=5, y=-80)), 300, FLOOR_HEIGHT)
    joints = joint_positions(seated)
    assert seated.root == Vec2(x=5, y=300 - rig.pelvis)
    assert joints[Landmark.L_HIP].y == pytest.approx(300)
    for hip, ankle in ((Landmark.L_HIP, Landmark.L_ANKLE), (Landmark.R_HIP, Landmark.R_ANKLE)):
        assert joints[ankle].distance_to(Vec2(x=joints[hip].x, y=FLOOR_HEIGHT)) < 1e-3
    assert seated.angle(Joint.L_ANKLE) == 0
    assert seated.angle(Joint.R_ANKLE) == 0
