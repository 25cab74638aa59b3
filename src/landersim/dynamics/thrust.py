"""
Engine thrust and attitude collaborators.

The force model treats thrust as an opaque world-frame vector. This
module supplies it: the engine fires along the body +Z axis, rotated to
world frame by the lander's current attitude.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from landersim.utils.orientation import body_axis_in_world, euler_from_direction
from landersim.utils.vector import unit, vec3

Array = NDArray[np.float64]


class Attitude:
    """
    Fixed orientation of the lander (no rotational dynamics).

    Parameters
    ----------
    orientation : array-like
        xyz Euler angles [degrees]
    stabilized : bool
        When True the engine is taken to point exactly radially outward,
        regardless of the stored Euler angles.
    """
    def __init__(self, orientation: ArrayLike = (0.0, 0.0, 0.0), stabilized: bool = False) -> None:
        self.orientation = vec3(orientation)
        self.stabilized = bool(stabilized)

    def thrust_direction(self, position: Array) -> Array:
        """World-frame unit vector of the body +Z axis."""
        if self.stabilized:
            return unit(position)
        return body_axis_in_world(self.orientation, "z")

    def __repr__(self) -> str:
        return f"Attitude(orientation={self.orientation.tolist()}, stabilized={self.stabilized})"


class EngineThrust:
    """
    Body-to-world thrust transform.

    T = throttle · max_thrust · ẑ_body(world)

    No thrust is produced with an empty tank.

    Parameters
    ----------
    max_thrust : float
        Thrust at full throttle [N]
    attitude : Attitude
        Shared attitude object; read on every call.
    """
    def __init__(self, max_thrust: float, attitude: Attitude) -> None:
        if max_thrust <= 0:
            raise ValueError(f"Max thrust must be positive, got {max_thrust}")
        self.max_thrust = float(max_thrust)
        self.attitude = attitude

    def __call__(self, throttle: float, fuel_fraction: float, position: Array) -> Array:
        if throttle <= 0.0 or fuel_fraction <= 0.0:
            return np.zeros(3, dtype=np.float64)
        return throttle * self.max_thrust * self.attitude.thrust_direction(position)


class AttitudeStabilizer:
    """
    Three-axis stabilization keeping the base pointing at the planet.

    Sets the attitude so the body +Z axis (engine direction) points
    radially outward from the planet centre.
    """
    def stabilize(self, attitude: Attitude, position: Array) -> Array:
        up = unit(position)
        if not up.any():
            return attitude.orientation
        attitude.orientation = euler_from_direction(up)
        attitude.stabilized = True
        return attitude.orientation


class FixedAttitude:
    """Stabilization disabled; the stored orientation is left alone."""
    def stabilize(self, attitude: Attitude, position: Array) -> Array:
        attitude.stabilized = False
        return attitude.orientation
