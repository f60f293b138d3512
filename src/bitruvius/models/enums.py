"""Enumerations used throughout Bitruvius."""

import re
from enum import StrEnum


class Joint(StrEnum):
    """Rotational joints of the figure, valued by their wire names."""

    HIPS = "hips"
    TORSO = "torso"
    NECK = "neck"
    L_SHOULDER = "lShoulder"
    L_FOREARM = "lForearm"
    L_WRIST = "lWrist"
    R_SHOULDER = "rShoulder"
    R_FOREARM = "rForearm"
    R_WRIST = "rWrist"
    L_THIGH = "lThigh"
    L_CALF = "lCalf"
    L_ANKLE = "lAnkle"
    R_THIGH = "rThigh"
    R_CALF = "rCalf"
    R_ANKLE = "rAnkle"

    @property
    def field_name(self) -> str:
        """Attribute name of this joint's angle on :class:`~bitruvius.models.Pose`."""
        return re.sub(r"([A-Z])", r"_\1", self.value).lower()


class Landmark(StrEnum):
    """World-space points produced by forward kinematics."""

    L_HIP = "lHip"
    R_HIP = "rHip"
    L_KNEE = "lKnee"
    R_KNEE = "rKnee"
    L_ANKLE = "lAnkle"
    R_ANKLE = "rAnkle"
    L_FOOT_TIP = "lFootTip"
    R_FOOT_TIP = "rFootTip"
    NECK_BASE = "neckBase"
    HEAD_TOP = "headTop"
    L_SHOULDER = "lShoulder"
    R_SHOULDER = "rShoulder"
    L_ELBOW = "lElbow"
    R_ELBOW = "rElbow"
    L_WRIST = "lWrist"
    R_WRIST = "rWrist"
    L_HAND_TIP = "lHandTip"
    R_HAND_TIP = "rHandTip"


class Effector(StrEnum):
    """Limb ends that can be pinned to a target."""

    L_FOOT = "lFoot"
    R_FOOT = "rFoot"
    L_HAND = "lHand"
    R_HAND = "rHand"
