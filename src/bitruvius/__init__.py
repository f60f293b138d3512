"""Bitruvius - 2D articulated-figure kinematics engine."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bitruvius")
except PackageNotFoundError:
    __version__ = "unknown"
