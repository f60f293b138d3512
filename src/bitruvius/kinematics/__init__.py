"""Bitruvius kinematics core - pure functions over Pose values."""

from bitruvius.kinematics.blend import (
    exceeds_delta_limit,
    in_between,
    interpolate,
    max_deviation,
    resample,
)
from bitruvius.kinematics.forward import (
    apply_balance,
    capture_balance,
    get_global_angle,
    joint_positions,
    solve_counter_rotation,
)
from bitruvius.kinematics.grounding import resolve_grounding, seat, settle
from bitruvius.kinematics.ik import TwoBoneSolution, apply_pins, solve_limb, solve_two_bone
from bitruvius.kinematics.limpness import apply_tension, relax
from bitruvius.kinematics.validation import clamp_to_box, validate

__all__ = [
    "TwoBoneSolution",
    "apply_balance",
    "apply_pins",
    "apply_tension",
    "capture_balance",
    "clamp_to_box",
    "exceeds_delta_limit",
    "get_global_angle",
    "in_between",
    "interpolate",
    "joint_positions",
    "max_deviation",
    "relax",
    "resample",
    "resolve_grounding",
    "seat",
    "settle",
    "solve_counter_rotation",
    "solve_limb",
    "solve_two_bone",
    "validate",
]
