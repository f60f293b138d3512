"""Floor and seat contact: hard collision plus magnetic snap.

Grounding only ever moves ``root.y``.  When limbs are pinned, moving the
root drags the pins' limbs along with it, so callers must re-run IK after
grounding within the same update; :func:`settle` does both in order.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from bitruvius.config import DEFAULT_RIG, RigSettings
from bitruvius.kinematics.forward import joint_positions
from bitruvius.kinematics.ik import apply_pins, solve_limb
from bitruvius.models.enums import Effector, Joint, Landmark
from bitruvius.models.pose import Pose, Vec2

logger = logging.getLogger(__name__)

# Hover distance within which magnetism pulls the figure down.
MAGNET_RANGE = 100.0
# Seat magnetism is half as strong as floor magnetism.
SEAT_PULL = 0.5
# Gaps this small are float drift from the forward pass, treated as contact.
CONTACT_TOLERANCE = 1e-9

_CONTACTS = (Landmark.L_FOOT_TIP, Landmark.R_FOOT_TIP, Landmark.L_ANKLE, Landmark.R_ANKLE)


def resolve_grounding(
    pose: Pose,
    floor_height: float,
    magnetism: float,
    sit_mode: bool = False,
    seat_height: float = 0.0,
    rig: RigSettings = DEFAULT_RIG,
    magnet_range: float = MAGNET_RANGE,
) -> Pose:
    """Push the figure out of the floor (and seat) and snap it down when hovering.

    Parameters
    ----------
    pose:
        Pose to place; it is not modified.
    floor_height:
        Floor plane Y (Y grows downward).
    magnetism:
        0-1 strength of the downward pull toward a near plane.  0 disables it.
    sit_mode:
        Also resolve the lower hip against *seat_height* first.  Floor
        magnetism is suspended while sitting.
    seat_height:
        Seat plane Y, used only in sit mode.
    magnet_range:
        Largest hover gap the magnetism still acts across.

    Returns
    -------
    Pose
        Copy of *pose* with only ``root.y`` changed.
    """
    y = pose.root.y

    if sit_mode:
        joints = joint_positions(pose, rig)
        lowest_hip = max(joints[Landmark.L_HIP].y, joints[Landmark.R_HIP].y)
        penetration = lowest_hip - seat_height
        if penetration > CONTACT_TOLERANCE:
            y -= penetration
        elif magnetism > 0 and CONTACT_TOLERANCE < -penetration < magnet_range:
            y += -penetration * magnetism * SEAT_PULL

    joints = joint_positions(pose.with_root(Vec2(x=pose.root.x, y=y)), rig)
    lowest = max(joints[point].y for point in _CONTACTS)
    penetration = lowest - floor_height
    if penetration > CONTACT_TOLERANCE:
        y -= penetration
    elif not sit_mode and magnetism > 0 and CONTACT_TOLERANCE < -penetration < magnet_range:
        y += -penetration * magnetism

    if y != pose.root.y:
        logger.debug("Grounding moved root.y %.3f -> %.3f", pose.root.y, y)
    return pose.with_root(Vec2(x=pose.root.x, y=y))


def settle(
    pose: Pose,
    pins: Mapping[Effector, Vec2],
    floor_height: float,
    magnetism: float = 0.0,
    tension: float = 100.0,
    rig: RigSettings = DEFAULT_RIG,
) -> Pose:
    """Pin limbs, ground the figure, then re-pin if the root moved.

    This is the full grounding protocol in one step, so pinned feet never
    slide between two updates.
    """
    pinned = apply_pins(pose, pins, tension, rig)
    grounded = resolve_grounding(pinned, floor_height, magnetism, rig=rig)
    if grounded.root == pinned.root:
        return grounded
    return apply_pins(grounded, pins, tension, rig)


def seat(
    pose: Pose,
    seat_height: float,
    floor_height: float,
    rig: RigSettings = DEFAULT_RIG,
) -> Pose:
    """Sit the pelvis on the seat plane and drop both feet toward the floor.

    Each leg reaches straight down from its hip at full tension, so when the
    floor is out of reach the legs hang straight.
    """
    seated = pose.with_root(Vec2(x=pose.root.x, y=seat_height - rig.pelvis))
    joints = joint_positions(seated, rig)
    for effector, hip in ((Effector.R_FOOT, Landmark.R_HIP), (Effector.L_FOOT, Landmark.L_HIP)):
        below = Vec2(x=joints[hip].x, y=floor_height)
        seated = solve_limb(seated, effector, below, 100.0, rig)
    return seated.with_angles({Joint.R_ANKLE: 0.0, Joint.L_ANKLE: 0.0})
