"""Forward kinematics: world joint positions and global bone angles."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from bitruvius.config import DEFAULT_RIG, RigSettings
from bitruvius.kinematics.chains import all_global_angles, global_angle, local_angle
from bitruvius.models.enums import Joint, Landmark
from bitruvius.models.pose import Pose, Vec2

JointPositions = dict[Landmark, Vec2]

# side sign, chain joints, produced landmarks
_LEGS: tuple[tuple[int, tuple[Joint, Joint, Joint], tuple[Landmark, ...]], ...] = (
    (
        1,
        (Joint.R_THIGH, Joint.R_CALF, Joint.R_ANKLE),
        (Landmark.R_HIP, Landmark.R_KNEE, Landmark.R_ANKLE, Landmark.R_FOOT_TIP),
    ),
    (
        -1,
        (Joint.L_THIGH, Joint.L_CALF, Joint.L_ANKLE),
        (Landmark.L_HIP, Landmark.L_KNEE, Landmark.L_ANKLE, Landmark.L_FOOT_TIP),
    ),
)

_ARMS: tuple[tuple[int, tuple[Joint, Joint, Joint], tuple[Landmark, ...]], ...] = (
    (
        -1,
        (Joint.R_SHOULDER, Joint.R_FOREARM, Joint.R_WRIST),
        (Landmark.R_SHOULDER, Landmark.R_ELBOW, Landmark.R_WRIST, Landmark.R_HAND_TIP),
    ),
    (
        1,
        (Joint.L_SHOULDER, Joint.L_FOREARM, Joint.L_WRIST),
        (Landmark.L_SHOULDER, Landmark.L_ELBOW, Landmark.L_WRIST, Landmark.L_HAND_TIP),
    ),
)


def _bone(length: float, angle: float) -> Vec2:
    """Segment vector: the local "down" axis scaled to *length*, turned by *angle*."""
    return Vec2(y=length).rotated(angle)


def joint_positions(pose: Pose, rig: RigSettings = DEFAULT_RIG) -> JointPositions:
    """Compute the world position of every landmark of *pose*.

    Legs hang from the hip line at the bottom of the pelvis; arms hang from
    shoulder anchors on the torso's root end.  Shoulder offsets from
    ``pose.offsets`` move those anchors before the arm chains propagate.
    """
    angles = all_global_angles(pose)
    root = pose.root
    out: JointPositions = {}

    hips = angles[Joint.HIPS]
    pelvis_end = root + _bone(rig.pelvis, hips)
    leg_lengths = (rig.leg_upper, rig.leg_lower, rig.foot)
    for side, joints, landmarks in _LEGS:
        point = pelvis_end + Vec2(x=side * rig.hip_offset).rotated(hips)
        out[landmarks[0]] = point
        for joint, length, landmark in zip(joints, leg_lengths, landmarks[1:]):
            point = point + _bone(length, angles[joint])
            out[landmark] = point

    torso = angles[Joint.TORSO]
    neck_base = root + _bone(rig.torso, torso)
    out[Landmark.NECK_BASE] = neck_base
    out[Landmark.HEAD_TOP] = neck_base + _bone(rig.neck + rig.head, angles[Joint.NECK])

    arm_lengths = (rig.upper_arm, rig.lower_arm, rig.hand)
    for side, joints, landmarks in _ARMS:
        anchor = Vec2(x=side * rig.shoulder_half_span, y=rig.shoulder_lift)
        anchor = anchor + pose.offset(joints[0])
        point = root + anchor.rotated(torso)
        out[landmarks[0]] = point
        for joint, length, landmark in zip(joints, arm_lengths, landmarks[1:]):
            point = point + _bone(length, angles[joint])
            out[landmark] = point

    return out


def get_global_angle(pose: Pose, joint: Joint | str | None) -> float:
    """Global (world) angle of *joint*'s bone; ``None`` gives the root rotation."""
    if joint is None:
        return pose.root_rotation
    return global_angle(pose, Joint(joint))


def solve_counter_rotation(pose: Pose, joint: Joint | str, target_global: float) -> float:
    """Local angle for *joint* that yields *target_global* under its current ancestors."""
    return local_angle(pose, Joint(joint), target_global)


def capture_balance(pose: Pose, joints: Iterable[Joint]) -> dict[Joint, float]:
    """Record the current global angle of each joint to lock it in place."""
    return {Joint(j): get_global_angle(pose, j) for j in joints}


def apply_balance(pose: Pose, targets: Mapping[Joint, float]) -> Pose:
    """Counter-rotate each locked joint so it keeps its recorded global angle.

    Joints are solved in mapping order and each solve sees the previous
    ones, so locking a parent and a child together is stable.
    """
    balanced = pose
    for joint, target in targets.items():
        balanced = balanced.with_angles({joint: solve_counter_rotation(balanced, joint, target)})
    return balanced
