"""
Orientation utilities for the lander.

The lander's orientation is stored as xyz Euler angles in degrees (the
convention of the scenario tables). The engine fires along the body +Z
axis, so most callers only need to know where that axis points.

Examples
--------
>>> from landersim.utils.orientation import body_axis_in_world, euler_from_direction

# Where does the engine point at orientation (0, 90, 0)?
>>> body_axis_in_world([0.0, 90.0, 0.0])

# Orientation that points the body +Z axis along +Y global
>>> euler_from_direction(toward=[0, 1, 0])
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.spatial.transform import Rotation as R

EULER_ORDER = "xyz"

_AXES = {"x": 0, "y": 1, "z": 2}


def rotation_from_euler(orientation: ArrayLike) -> R:
    """Body-to-world rotation for xyz Euler angles [degrees]."""
    return R.from_euler(EULER_ORDER, np.asarray(orientation, dtype=np.float64), degrees=True)


def body_axis_in_world(orientation: ArrayLike, body_axis: str = "z") -> NDArray[np.float64]:
    """
    World-frame unit vector of a body axis.

    Parameters
    ----------
    orientation : array-like
        xyz Euler angles [degrees]
    body_axis : str
        'x', 'y' or 'z'
    """
    axis = body_axis.lower().strip()
    if axis not in _AXES:
        raise ValueError(f"body_axis must be 'x', 'y', or 'z', got '{body_axis}'")
    e = np.zeros(3)
    e[_AXES[axis]] = 1.0
    return rotation_from_euler(orientation).apply(e)


def euler_from_direction(
    toward: ArrayLike,
    up_hint: ArrayLike = (0, 0, 1),
) -> NDArray[np.float64]:
    """
    xyz Euler angles [degrees] that point the body +Z axis along ``toward``.

    The body X axis is chosen perpendicular to ``up_hint`` so the
    result is unique; any perpendicular axis is used when the two are
    parallel.

    Parameters
    ----------
    toward : array-like
        Target direction in world frame. Will be normalized.
    up_hint : array-like
        Resolves the roll ambiguity about the target.
    """
    target = np.asarray(toward, dtype=np.float64)
    norm = np.linalg.norm(target)
    if norm < 1e-12:
        raise ValueError("Target direction must be non-zero")
    z_new = target / norm

    up = np.asarray(up_hint, dtype=np.float64)
    up = up / np.linalg.norm(up)
    x_new = np.cross(up, z_new)

    if np.linalg.norm(x_new) < 1e-6:
        # up_hint parallel to target, pick arbitrary perpendicular
        x_new = np.array([1.0, 0.0, 0.0]) if abs(z_new[0]) < 0.9 else np.array([0.0, 1.0, 0.0])
        x_new = x_new - z_new * np.dot(x_new, z_new)

    x_new = x_new / np.linalg.norm(x_new)
    y_new = np.cross(z_new, x_new)

    rot = R.from_matrix(np.column_stack([x_new, y_new, z_new]))
    return rot.as_euler(EULER_ORDER, degrees=True)


def describe_orientation(orientation: ArrayLike) -> str:
    """
    Human-readable orientation.

    >>> describe_orientation([0, 0, 90])
    'Roll: 0.0°, Pitch: 0.0°, Yaw: 90.0°'
    """
    roll, pitch, yaw = (float(a) for a in np.asarray(orientation, dtype=np.float64))
    return f"Roll: {roll:.1f}°, Pitch: {pitch:.1f}°, Yaw: {yaw:.1f}°"
