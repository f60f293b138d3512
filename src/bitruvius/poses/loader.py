"""Bundled pose sequences (camelCase JSON next to this module)."""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from bitruvius.models.pose import Pose, PoseSequence

logger = logging.getLogger(__name__)

_POSES_DIR = Path(__file__).resolve().parent


def available_poses() -> list[str]:
    """Names of the bundled sequences, sorted, without extension."""
    return sorted(p.stem for p in _POSES_DIR.glob("*.json"))


@lru_cache(maxsize=32)
def load(name: str) -> PoseSequence:
    """Load a bundled sequence by bare name (``"wave"``) or file name (``"wave.json"``).

    Raises
    ------
    FileNotFoundError
        If no bundled sequence has that name.
    """
    path = _POSES_DIR / (name if name.endswith(".json") else f"{name}.json")
    if not path.is_file():
        msg = f"Pose sequence not found: {name} (available: {', '.join(available_poses())})"
        raise FileNotFoundError(msg)

    seq = PoseSequence.load(path)
    logger.debug("Loaded pose sequence '%s' (%d frames @ %d fps)", seq.name, len(seq.frames), seq.fps)
    return seq


def load_pose(name: str, frame: int = 0) -> Pose:
    """Single frame of a bundled sequence."""
    return load(name).frames[frame]
