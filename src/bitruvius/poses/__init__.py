"""Built-in pose sequences shipped with Bitruvius."""

from bitruvius.poses.loader import available_poses, load, load_pose

__all__ = ["available_poses", "load", "load_pose"]
