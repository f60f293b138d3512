"""Pose interpolation, deviation metric and sequence tweening."""

from __future__ import annotations

import logging

from bitruvius.models.pose import NUMERIC_FIELDS, Pose, PoseSequence, Vec2

logger = logging.getLogger(__name__)

# Largest single-field change between successive poses before we warn.
DELTA_LIMIT = 50.0


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def interpolate(pose_a: Pose, pose_b: Pose, t: float) -> Pose:
    """Linearly blend every numeric field of two poses.

    *t* is clamped to ``[0, 1]``.  Rotations are blended as plain numbers,
    with no shortest-path wrap-around.  Offsets are blended over the union
    of both poses' keys, a missing entry counting as a zero vector.
    """
    t = max(0.0, min(1.0, t))
    fields = {name: _lerp(getattr(pose_a, name), getattr(pose_b, name), t) for name in NUMERIC_FIELDS}
    offsets = {
        key: _lerp_vec(pose_a.offset(key), pose_b.offset(key), t)
        for key in pose_a.offsets.keys() | pose_b.offsets.keys()
    }
    return Pose(root=_lerp_vec(pose_a.root, pose_b.root, t), offsets=offsets, **fields)


def max_deviation(pose_a: Pose, pose_b: Pose) -> float:
    """Largest single change between two poses.

    Compares the root displacement, every numeric field and every offset
    vector, and returns the biggest of those differences.
    """
    deviation = pose_a.root.distance_to(pose_b.root)
    for name in NUMERIC_FIELDS:
        deviation = max(deviation, abs(getattr(pose_a, name) - getattr(pose_b, name)))
    for key in pose_a.offsets.keys() | pose_b.offsets.keys():
        deviation = max(deviation, pose_a.offset(key).distance_to(pose_b.offset(key)))
    return deviation


def exceeds_delta_limit(previous: Pose, candidate: Pose, limit: float = DELTA_LIMIT) -> bool:
    """Flag an implausibly large step.  Advisory only; nothing is rejected."""
    deviation = max_deviation(previous, candidate)
    if deviation > limit:
        logger.warning("Pose delta %.2f exceeds limit %.2f", deviation, limit)
        return True
    return False


def in_between(sequence: PoseSequence, index: int) -> PoseSequence:
    """Insert the midpoint of frame *index* and its successor after *index*.

    The last frame's successor wraps around to the first.  Negative
    indices count from the end, as with a list.
    """
    frames = list(sequence.frames)
    index %= len(frames)
    following = frames[(index + 1) % len(frames)]
    frames.insert(index + 1, interpolate(frames[index], following, 0.5))
    return sequence.model_copy(update={"frames": frames})


def resample(sequence: PoseSequence, target_frames: int) -> list[Pose]:
    """Linearly interpolate a sequence to exactly *target_frames* poses.

    If the sequence already has that many frames they are returned as-is.
    """
    src_frames = sequence.frames
    n_src = len(src_frames)

    if target_frames <= 0:
        msg = "target_frames must be positive"
        raise ValueError(msg)

    if n_src == target_frames:
        return list(src_frames)

    result: list[Pose] = []
    for i in range(target_frames):
        # Map output frame index to a floating-point source index.
        t = i / max(target_frames - 1, 1) * (n_src - 1)
        idx_lo = int(t)
        idx_hi = min(idx_lo + 1, n_src - 1)
        result.append(interpolate(src_frames[idx_lo], src_frames[idx_hi], t - idx_lo))

    logger.debug("Resampled '%s' from %d to %d frames", sequence.name, n_src, target_frames)
    return result


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _lerp(a: float, b: float, t: float) -> float:
    # Exact at both ends, unchanged when a == b, never outside [a, b].
    if t == 0:
        return a
    if t == 1:
        return b
    value = a + (b - a) * t
    return max(min(a, b), min(max(a, b), value))


def _lerp_vec(a: Vec2, b: Vec2, t: float) -> Vec2:
    return Vec2(x=_lerp(a.x, b.x, t), y=_lerp(a.y, b.y, t))
