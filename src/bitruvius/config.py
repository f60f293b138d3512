"""Rig constants and stage tuning with pydantic-settings + TOML."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict, TomlConfigSettingsSource

# 1 head unit in pixels; every bone length is a multiple of it.
HEAD_UNIT = 55.0


def _default_config_dir() -> Path:
    return Path.home() / ".bitruvius"


class RigSettings(BaseSettings):
    """Anatomical bone lengths and rigging offsets, in pixels.

    Read once at startup and never mutated afterwards.
    """

    model_config = SettingsConfigDict(env_prefix="BITRUVIUS_RIG_", frozen=True)

    head: float = 1.0 * HEAD_UNIT
    neck: float = 0.5 * HEAD_UNIT
    torso: float = 4.5 * HEAD_UNIT
    pelvis: float = 2.0 * HEAD_UNIT

    upper_arm: float = 2.5 * HEAD_UNIT
    lower_arm: float = 2.1 * HEAD_UNIT
    hand: float = 0.8 * HEAD_UNIT

    leg_upper: float = 3.25 * HEAD_UNIT
    leg_lower: float = 3.25 * HEAD_UNIT
    foot: float = 1.0 * HEAD_UNIT

    shoulder_width: float = 2.2 * HEAD_UNIT
    hip_width: float = 2.0 * HEAD_UNIT

    shoulder_inset: float = 5.0
    shoulder_lift: float = 0.0
    clavicle_extension: float = 0.5 * HEAD_UNIT
    neck_sink: float = 0.0

    @property
    def floor_height(self) -> float:
        """Floor Y at which the default T-pose (root at origin) stands."""
        return self.pelvis + self.leg_upper + self.leg_lower

    @property
    def shoulder_half_span(self) -> float:
        return self.shoulder_width / 2 - self.shoulder_inset + self.clavicle_extension

    @property
    def hip_offset(self) -> float:
        return self.hip_width / 4

    @property
    def leg_reach(self) -> float:
        return self.leg_upper + self.leg_lower

    @property
    def arm_reach(self) -> float:
        return self.upper_arm + self.lower_arm


class StageSettings(BaseSettings):
    """Tuning knobs callers feed into grounding, clamping and IK."""

    model_config = SettingsConfigDict(env_prefix="BITRUVIUS_STAGE_")

    floor_magnetism: float = Field(default=0.0, ge=0.0, le=1.0)
    seat_height: float = 0.0
    box_size: float = Field(default=1200.0, gt=0)
    box_margin: float = 50.0
    delta_limit: float = Field(default=50.0, gt=0)
    tension: float = Field(default=100.0, ge=0.0, le=100.0)
    magnet_range: float = Field(default=100.0, gt=0)


class AppConfig(BaseSettings):
    """Root application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BITRUVIUS_",
        env_nested_delimiter="__",
    )

    config_dir: Path = Field(default_factory=_default_config_dir)
    rig: RigSettings = Field(default_factory=RigSettings)
    stage: StageSettings = Field(default_factory=StageSettings)

    @classmethod
    def settings_customise_sources(cls, settings_cls, **kwargs):  # type: ignore[override]
        toml_path = _default_config_dir() / "config.toml"
        sources = (
            kwargs.get("init_settings"),
            kwargs.get("env_settings"),
        )
        if toml_path.exists():
            sources = (*sources, TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return (*sources, kwargs.get("dotenv_settings"), kwargs.get("file_secret_settings"))


def load_config() -> AppConfig:
    """Load application config from env and ``~/.bitruvius/config.toml``."""
    return AppConfig()


DEFAULT_RIG = RigSettings()
FLOOR_HEIGHT = DEFAULT_RIG.floor_height
