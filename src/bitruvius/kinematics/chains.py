"""Declarative joint hierarchy shared by forward and inverse angle solves."""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from bitruvius.models.enums import Joint

if TYPE_CHECKING:
    from bitruvius.models.pose import Pose


class Link(NamedTuple):
    """How a joint's global angle derives from its parent.

    ``global = global(parent) + base_offset + sign * local``; a ``None``
    parent means the figure's root rotation.
    """

    parent: Joint | None
    sign: int = 1
    base_offset: float = 0.0


CHAIN: dict[Joint, Link] = {
    Joint.HIPS: Link(None),
    Joint.TORSO: Link(None),
    Joint.NECK: Link(Joint.TORSO),
    # Legs hang from the pelvis; feet rest sideways.
    Joint.R_THIGH: Link(Joint.HIPS),
    Joint.R_CALF: Link(Joint.R_THIGH),
    Joint.R_ANKLE: Link(Joint.R_CALF, 1, -90.0),
    Joint.L_THIGH: Link(Joint.HIPS),
    Joint.L_CALF: Link(Joint.L_THIGH),
    Joint.L_ANKLE: Link(Joint.L_CALF, 1, 90.0),
    # Arms are mirrored: the left shoulder turns the opposite way.
    Joint.R_SHOULDER: Link(Joint.TORSO, 1, 90.0),
    Joint.R_FOREARM: Link(Joint.R_SHOULDER),
    Joint.R_WRIST: Link(Joint.R_FOREARM),
    Joint.L_SHOULDER: Link(Joint.TORSO, -1, -90.0),
    Joint.L_FOREARM: Link(Joint.L_SHOULDER),
    Joint.L_WRIST: Link(Joint.L_FOREARM),
}


def parent_global(pose: Pose, joint: Joint) -> float:
    """Global angle of *joint*'s parent frame (root rotation for top-level joints)."""
    parent = CHAIN[joint].parent
    if parent is None:
        return pose.root_rotation
    return global_angle(pose, parent)


def global_angle(pose: Pose, joint: Joint) -> float:
    link = CHAIN[joint]
    return parent_global(pose, joint) + link.base_offset + link.sign * pose.angle(joint)


def local_angle(pose: Pose, joint: Joint, target_global: float) -> float:
    """Invert :func:`global_angle` against the pose's current ancestors."""
    link = CHAIN[joint]
    return link.sign * (target_global - parent_global(pose, joint) - link.base_offset)


def all_global_angles(pose: Pose) -> dict[Joint, float]:
    """Global angle of every joint in one pass over the hierarchy."""
    # CHAIN lists every parent before its children.
    angles: dict[Joint, float] = {}
    for joint, link in CHAIN.items():
        base = pose.root_rotation if link.parent is None else angles[link.parent]
        angles[joint] = base + link.base_offset + link.sign * pose.angle(joint)
    return angles
