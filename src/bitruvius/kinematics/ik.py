"""Analytic two-bone inverse kinematics with elastic overstretch."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Literal, NamedTuple

from bitruvius.config import DEFAULT_RIG, RigSettings
from bitruvius.kinematics.forward import joint_positions, solve_counter_rotation
from bitruvius.models.enums import Effector, Joint, Landmark
from bitruvius.models.pose import Pose, Vec2

# Extra reach allowed at tension 0, and the floor that applies even at 100.
MAX_ELASTICITY = 0.1
MIN_ELASTICITY = 0.05

BendDirection = Literal[-1, 1]


class TwoBoneSolution(NamedTuple):
    angle1: float
    angle2: float
    stretch: float


class _Limb(NamedTuple):
    upper: Joint
    lower: Joint
    origin: Landmark
    lengths: tuple[str, str]
    bend: BendDirection
    stretch_field: str


LIMBS: dict[Effector, _Limb] = {
    Effector.R_FOOT: _Limb(
        Joint.R_THIGH, Joint.R_CALF, Landmark.R_HIP, ("leg_upper", "leg_lower"), 1, "r_leg_stretch"
    ),
    Effector.L_FOOT: _Limb(
        Joint.L_THIGH, Joint.L_CALF, Landmark.L_HIP, ("leg_upper", "leg_lower"), 1, "l_leg_stretch"
    ),
    Effector.R_HAND: _Limb(
        Joint.R_SHOULDER, Joint.R_FOREARM, Landmark.R_SHOULDER,
        ("upper_arm", "lower_arm"), 1, "r_arm_stretch",
    ),
    Effector.L_HAND: _Limb(
        Joint.L_SHOULDER, Joint.L_FOREARM, Landmark.L_SHOULDER,
        ("upper_arm", "lower_arm"), -1, "l_arm_stretch",
    ),
}


def _cosine(numerator: float, denominator: float) -> float:
    # Degenerate triangles (zero reach or zero-length bone) read as straight.
    if denominator <= 1e-12:
        return 1.0
    return max(-1.0, min(1.0, numerator / denominator))


def solve_two_bone(
    parent_global: float,
    child_bias: float,
    origin: Vec2,
    target: Vec2,
    l1: float,
    l2: float,
    bend_direction: BendDirection,
    tension: float = 100.0,
) -> TwoBoneSolution:
    """Solve a two-segment chain so its tip reaches toward *target*.

    Parameters
    ----------
    parent_global:
        Global angle of the chain's parent frame, subtracted from the raw
        solve of the first bone.
    child_bias:
        Fixed offset of the first bone relative to its parent (e.g. the
        +/-90 arm base), also subtracted.
    origin, target:
        World positions of the chain root and the desired tip.
    l1, l2:
        Segment lengths.
    bend_direction:
        ``1`` or ``-1``; selects which mirror solution (knee/elbow side).
    tension:
        0-100.  At 100 the chain may overreach by 5%, at 0 by 10%.

    Returns
    -------
    TwoBoneSolution
        ``angle1`` local angle of the first bone, ``angle2`` angle of the
        second bone relative to the first, and ``stretch``, the reach in
        excess of ``l1 + l2`` that was granted.  Always finite.
    """
    delta = target - origin
    dist = delta.length()

    tension = max(0.0, min(100.0, tension))
    allowed = max((100.0 - tension) / 100.0 * MAX_ELASTICITY, MIN_ELASTICITY)
    natural = l1 + l2
    reach = min(dist, natural * (1 + allowed))
    stretch = max(0.0, reach - natural)
    bend = 1 if bend_direction >= 0 else -1

    alpha = math.acos(_cosine(l1 * l1 + reach * reach - l2 * l2, 2 * l1 * reach))
    pointing = math.atan2(delta.y, delta.x) - math.pi / 2
    first_global = math.degrees(pointing - alpha * bend)

    included = math.acos(_cosine(l1 * l1 + l2 * l2 - reach * reach, 2 * l1 * l2))
    second = math.degrees((math.pi - included) * bend)

    return TwoBoneSolution(first_global - parent_global - child_bias, second, stretch)


def solve_limb(
    pose: Pose,
    effector: Effector,
    target: Vec2,
    tension: float = 100.0,
    rig: RigSettings = DEFAULT_RIG,
) -> Pose:
    """Return *pose* with one limb re-solved so its end reaches *target*.

    The first bone's local angle comes from the chain inversion, so the
    mirrored left arm is handled like every other limb.  The limb's
    stretch readout is written back onto the result.
    """
    limb = LIMBS[Effector(effector)]
    origin = joint_positions(pose, rig)[limb.origin]
    l1, l2 = (getattr(rig, name) for name in limb.lengths)
    solution = solve_two_bone(0.0, 0.0, origin, target, l1, l2, limb.bend, tension)
    return pose.model_copy(
        update={
            limb.upper.field_name: solve_counter_rotation(pose, limb.upper, solution.angle1),
            limb.lower.field_name: solution.angle2,
            limb.stretch_field: solution.stretch,
        }
    )


def apply_pins(
    pose: Pose,
    pins: Mapping[Effector, Vec2],
    tension: float = 100.0,
    rig: RigSettings = DEFAULT_RIG,
) -> Pose:
    """Re-solve every pinned limb against its target."""
    for effector, target in pins.items():
        pose = solve_limb(pose, effector, target, tension, rig)
    return pose
