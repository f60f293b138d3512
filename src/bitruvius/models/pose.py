"""Pose value model and pose sequences."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from pathlib import Path
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from bitruvius.models.enums import Joint


class PoseLoadError(ValueError):
    """Raised when a pose or sequence file cannot be loaded."""


class Vec2(BaseModel):
    """2D point or displacement in world pixels (y grows downward)."""

    model_config = ConfigDict(frozen=True, ser_json_inf_nan="constants")

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        return Vec2(x=self.x + other.x, y=self.y + other.y)

    def __sub__(self, other: Vec2) -> Vec2:
        return Vec2(x=self.x - other.x, y=self.y - other.y)

    def __mul__(self, k: float) -> Vec2:
        return Vec2(x=self.x * k, y=self.y * k)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def distance_to(self, other: Vec2) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def rotated(self, degrees: float) -> Vec2:
        """Rotate about the origin by *degrees* (standard 2D rotation)."""
        r = math.radians(degrees)
        c = math.cos(r)
        s = math.sin(r)
        return Vec2(x=self.x * c - self.y * s, y=self.x * s + self.y * c)


ZERO = Vec2()

M = TypeVar("M", bound=BaseModel)


class Pose(BaseModel):
    """Full numeric state of the figure at one instant.

    Attribute names are snake_case; the JSON wire format uses camelCase
    aliases (``rootRotation``, ``lBicepCorrective``...).  Field defaults are
    the canonical T-pose.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        # Corrupted values survive a save so validate() can repair them on load.
        ser_json_inf_nan="constants",
    )

    root: Vec2 = Field(default_factory=Vec2)
    root_rotation: float = 0.0

    hips: float = 0.0
    torso: float = 180.0
    neck: float = 0.0

    l_shoulder: float = 0.0
    l_bicep_corrective: float = -12.0
    l_forearm: float = 0.0
    l_wrist: float = 0.0
    r_shoulder: float = 0.0
    r_bicep_corrective: float = 12.0
    r_forearm: float = 0.0
    r_wrist: float = 0.0

    l_thigh: float = 0.0
    l_thigh_corrective: float = 5.0
    l_calf: float = 0.0
    l_ankle: float = 0.0
    r_thigh: float = 0.0
    r_thigh_corrective: float = -5.0
    r_calf: float = 0.0
    r_ankle: float = 0.0

    # Elastic stretch readouts written by the IK solver.
    l_leg_stretch: float = 0.0
    r_leg_stretch: float = 0.0
    l_arm_stretch: float = 0.0
    r_arm_stretch: float = 0.0

    offsets: dict[Joint, Vec2] = Field(default_factory=dict)

    @field_validator("offsets")
    @classmethod
    def _drop_zero_offsets(cls, value: dict[Joint, Vec2]) -> dict[Joint, Vec2]:
        # An absent key already means a zero nudge.
        return {k: v for k, v in value.items() if v.x != 0 or v.y != 0}

    def __hash__(self) -> int:
        # Offsets live in a dict, so hash them as a frozenset.
        values = tuple(getattr(self, name) for name in NUMERIC_FIELDS)
        return hash((self.root, values, frozenset(self.offsets.items())))

    @classmethod
    def numeric_fields(cls) -> tuple[str, ...]:
        """Names of every scalar field (everything except root and offsets)."""
        return NUMERIC_FIELDS

    def angle(self, joint: Joint) -> float:
        return getattr(self, joint.field_name)

    def offset(self, joint: Joint) -> Vec2:
        """Positional nudge for *joint*, zero when none is set."""
        return self.offsets.get(joint, ZERO)

    def with_angles(self, angles: Mapping[Joint, float]) -> Pose:
        """Return a copy with the given local joint angles replaced."""
        return self.model_copy(update={j.field_name: float(v) for j, v in angles.items()})

    def with_root(self, root: Vec2) -> Pose:
        return self.model_copy(update={"root": root})

    def save(self, path: Path) -> Path:
        """Write the pose as camelCase JSON."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2, by_alias=True))
        return path

    @classmethod
    def load(cls, path: Path) -> Pose:
        """Load a single pose from a JSON file."""
        return _load_model(cls, path)


NUMERIC_FIELDS: tuple[str, ...] = tuple(
    name for name, info in Pose.model_fields.items() if info.annotation is float
)

DEFAULT_POSE = Pose()


class PoseSequence(BaseModel):
    """An ordered list of poses played back at a fixed frame rate."""

    name: str = "sequence"
    frames: list[Pose] = Field(min_length=1)
    fps: int = Field(default=12, gt=0)
    loop: bool = True

    def save(self, path: Path) -> Path:
        """Save sequence to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2, by_alias=True))
        return path

    @classmethod
    def load(cls, path: Path) -> PoseSequence:
        """Load sequence from a JSON file."""
        return _load_model(cls, path)


def _load_model(cls: type[M], path: Path) -> M:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        msg = f"pose file not found: {path}"
        raise PoseLoadError(msg) from None
    except PermissionError:
        msg = f"permission denied reading pose file: {path}"
        raise PoseLoadError(msg) from None
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"pose file contains invalid JSON: {exc}"
        raise PoseLoadError(msg) from None
    try:
        return cls.model_validate(data)
    except PydanticValidationError as exc:
        msg = f"pose file has invalid structure: {exc}"
        raise PoseLoadError(msg) from None
