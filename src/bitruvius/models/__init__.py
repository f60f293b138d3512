"""Bitruvius data models - pure Pydantic, no kinematics."""

from bitruvius.models.enums import Effector, Joint, Landmark
from bitruvius.models.pose import (
    DEFAULT_POSE,
    NUMERIC_FIELDS,
    Pose,
    PoseLoadError,
    PoseSequence,
    Vec2,
)

__all__ = [
    "DEFAULT_POSE",
    "NUMERIC_FIELDS",
    "Effector",
    "Joint",
    "Landmark",
    "Pose",
    "PoseLoadError",
    "PoseSequence",
    "Vec2",
]
