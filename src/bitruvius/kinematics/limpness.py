"""Gravity-hanging limb angles and the tension blend toward them."""

from __future__ import annotations

from collections.abc import Collection

from bitruvius.kinematics.chains import local_angle
from bitruvius.models.enums import Joint
from bitruvius.models.pose import Pose

# First segments are aimed straight down; everything below them hangs in line.
_HANGING = (Joint.R_THIGH, Joint.L_THIGH, Joint.R_SHOULDER, Joint.L_SHOULDER)
_STRAIGHT = (
    Joint.R_CALF,
    Joint.L_CALF,
    Joint.R_ANKLE,
    Joint.L_ANKLE,
    Joint.R_FOREARM,
    Joint.L_FOREARM,
    Joint.R_WRIST,
    Joint.L_WRIST,
)
_LEGS = (Joint.R_THIGH, Joint.L_THIGH)

# Joints blended by tension; ankles and wrists stay articulated.
TENSION_JOINTS = (
    Joint.L_SHOULDER,
    Joint.R_SHOULDER,
    Joint.L_THIGH,
    Joint.R_THIGH,
    Joint.L_FOREARM,
    Joint.R_FOREARM,
    Joint.L_CALF,
    Joint.R_CALF,
)


def _wrap(angle: float) -> float:
    """Normalise to [-180, 180] so thighs never swing the long way round."""
    a = angle % 360
    if a > 180:
        a -= 360
    return a


def relax(pose: Pose) -> Pose:
    """Return the fully limp version of *pose*.

    Every limb's first segment gets the local angle that makes its global
    angle 0 (straight down) under the current root, hips and torso; the
    remaining segments are zeroed so limbs hang straight.
    """
    angles = {joint: local_angle(pose, joint, 0.0) for joint in _HANGING}
    for joint in _LEGS:
        angles[joint] = _wrap(angles[joint])
    angles.update(dict.fromkeys(_STRAIGHT, 0.0))
    return pose.with_angles(angles)


def apply_tension(pose: Pose, tension: float, locked: Collection[Joint] = ()) -> Pose:
    """Blend the limbs between limp (tension 0) and *pose* (tension 100).

    Joints in *locked* (typically balance-locked ones) keep their values.
    """
    t = max(0.0, min(100.0, tension)) / 100.0
    if t == 1.0:
        return pose
    relaxed = relax(pose)
    return pose.with_angles(
        {
            joint: relaxed.angle(joint) * (1 - t) + pose.angle(joint) * t
            for joint in TENSION_JOINTS
            if joint not in locked
        }
    )
