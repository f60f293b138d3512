"""Shared fixtures for Bitruvius tests."""

import pytest

from bitruvius.config import RigSettings
from bitruvius.models import Joint, Pose, PoseSequence, Vec2


@pytest.fixture
def rig() -> RigSettings:
    return RigSettings()


@pytest.fixture
def default_pose() -> Pose:
    return Pose()


@pytest.fixture
def crouch_pose() -> Pose:
    return Pose(
        root=Vec2(x=40, y=-20),
        root_rotation=8,
        hips=-12,
        torso=170,
        neck=10,
        l_shoulder=35,
        l_forearm=-40,
        r_shoulder=20,
        r_forearm=55,
        r_wrist=5,
        l_thigh=-60,
        l_calf=85,
        r_thigh=-45,
        r_calf=70,
        l_ankle=-10,
        offsets={Joint.L_SHOULDER: Vec2(x=4, y=-2)},
    )


@pytest.fixture
def sample_sequence(default_pose: Pose, crouch_pose: Pose) -> PoseSequence:
    return PoseSequence(name="crouch", frames=[default_pose, crouch_pose], fps=10)
