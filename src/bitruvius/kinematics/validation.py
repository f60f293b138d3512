"""Self-healing numeric guard and stage clamping."""

from __future__ import annotations

import math

from bitruvius.models.pose import DEFAULT_POSE, NUMERIC_FIELDS, Pose, Vec2

BOX_MARGIN = 50.0


def validate(pose: Pose) -> Pose:
    """Replace any non-finite field with its value from the default pose.

    Offsets fall back to the default zero nudge.  A pose with nothing to
    repair is returned as the very same object.
    """
    update: dict[str, object] = {}

    root = pose.root
    if not (math.isfinite(root.x) and math.isfinite(root.y)):
        update["root"] = Vec2(
            x=root.x if math.isfinite(root.x) else DEFAULT_POSE.root.x,
            y=root.y if math.isfinite(root.y) else DEFAULT_POSE.root.y,
        )

    for name in NUMERIC_FIELDS:
        if not math.isfinite(getattr(pose, name)):
            update[name] = getattr(DEFAULT_POSE, name)

    if any(not (math.isfinite(v.x) and math.isfinite(v.y)) for v in pose.offsets.values()):
        repaired = {
            key: Vec2(
                x=v.x if math.isfinite(v.x) else 0.0,
                y=v.y if math.isfinite(v.y) else 0.0,
            )
            for key, v in pose.offsets.items()
        }
        update["offsets"] = {key: v for key, v in repaired.items() if v.x or v.y}

    if not update:
        return pose
    return pose.model_copy(update=update)


def clamp_to_box(pose: Pose, box_size: float, margin: float = BOX_MARGIN) -> Pose:
    """Keep the root inside a centred square of side *box_size*, less *margin*."""
    limit = box_size / 2 - margin
    return pose.with_root(
        Vec2(
            x=max(-limit, min(limit, pose.root.x)),
            y=max(-limit, min(limit, pose.root.y)),
        )
    )
