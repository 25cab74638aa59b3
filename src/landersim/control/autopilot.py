"""
Throttle controllers.

All controllers share one interface:

    compute_throttle(position, velocity, fuel_fraction) -> float | None

A return value of None means "no opinion" and leaves the current
(manual) throttle in place. Controllers are selected once at setup by
name via ``make_controller``.

Sign conventions: altitude is |r| − R; climb rate is v·r̂ (positive
away from the planet); descent rate is its negative.
"""
from __future__ import annotations

from typing import Protocol

import numpy as np
from numpy.typing import NDArray

from landersim import constants as C
from landersim.components.lander import LanderConfig
from landersim.dynamics.forces import InverseSquareGravity
from landersim.exceptions import ConfigurationError
from landersim.utils.vector import unit

Array = NDArray[np.float64]

# Gain schedule
SCHEDULE_ALTITUDE = 4000.0  # Authority ramps from 1 at the surface to 0 here [m]
LOW_ALTITUDE = 300.0  # Below this the descent-rate bands apply [m]
GENTLE_BRAKE_RATE = 0.6  # [m/s]
FULL_BRAKE_RATE = 3.0  # [m/s]


def altitude(position: Array, planet_radius: float = C.MARS_RADIUS) -> float:
    return float(np.linalg.norm(position)) - planet_radius


def climb_rate(position: Array, velocity: Array) -> float:
    """Radial velocity component [m/s]; positive when ascending."""
    return float(np.dot(velocity, unit(position)))


class Controller(Protocol):
    """Throttle control law."""
    def compute_throttle(self, position: Array, velocity: Array, fuel_fraction: float) -> float | None:
        ...


class NoAutopilot:
    """Autopilot disabled; the throttle stays under manual control."""
    def compute_throttle(self, position: Array, velocity: Array, fuel_fraction: float) -> float | None:
        return None


class GainScheduledAutopilot:
    """
    Gain-scheduled braking controller.

    Baseline throttle is the hover ratio (weight / max thrust) scaled by
    an altitude schedule: full authority at the surface, falling
    linearly to zero at 4000 m. Ascending cuts the engine. Below 300 m
    the descent rate picks one of three bands:

    ==================  ==================
    descent rate [m/s]  throttle
    ==================  ==================
    ≥ 3                 hover ratio
    [0.6, 3)            0.5 · hover ratio
    < 0.6               0
    ==================  ==================

    The bands take precedence over the ascent cut-off; since any ascent
    has descent rate < 0.6 the two agree. Output saturates at 1.

    The band edges are closed below: exactly 0.6 m/s gives half hover and
    exactly 3 m/s gives full hover. The classic lander law leaves both
    edges unmatched and keeps the scheduled baseline there.

    Parameters
    ----------
    config : LanderConfig
        Mass and thrust parameters
    gravity : InverseSquareGravity
        Field used for the hover force
    planet_radius : float
        Reference radius for altitude [m]
    """
    def __init__(
        self,
        config: LanderConfig,
        gravity: InverseSquareGravity | None = None,
        planet_radius: float = C.MARS_RADIUS,
    ) -> None:
        self.config = config
        self.gravity = gravity if gravity is not None else InverseSquareGravity()
        self.planet_radius = float(planet_radius)

    def hover_ratio(self, position: Array, fuel_fraction: float) -> float:
        """Throttle that balances local weight."""
        required_force = self.gravity.magnitude(position) * self.config.mass(fuel_fraction)
        return required_force / self.config.max_thrust

    def compute_throttle(self, position: Array, velocity: Array, fuel_fraction: float) -> float:
        hover = self.hover_ratio(position, fuel_fraction)
        alt = altitude(position, self.planet_radius)
        climb = climb_rate(position, velocity)

        scaling = max((SCHEDULE_ALTITUDE - alt) / SCHEDULE_ALTITUDE, 0.0)
        throttle = hover * scaling

        if climb > 0.0:
            throttle = 0.0

        if alt < LOW_ALTITUDE:
            descent = -climb
            if descent >= FULL_BRAKE_RATE:
                throttle = hover
            elif descent >= GENTLE_BRAKE_RATE:
                throttle = 0.5 * hover
            else:
                throttle = 0.0

        return min(max(throttle, 0.0), 1.0)


class ProportionalAutopilot:
    """
    Proportional descent-rate controller (alternate law).

    Target descent rate is ``0.5 + Kh·altitude``. With
    ``error = −(0.5 + Kh·h + climb_rate)`` and ``P = Kp·error``:

        P ≥ 1 − Δ     → 1
        P ≤ −Δ        → 0
        otherwise     → Δ + P

    Parameters
    ----------
    Kh : float
        Target descent rate per metre of altitude [1/s]
    Kp : float
        Proportional gain [s/m]
    delta : float
        Throttle offset Δ; roughly the hover throttle.
    planet_radius : float
        Reference radius for altitude [m]
    """
    def __init__(
        self,
        Kh: float = 0.001,
        Kp: float = 1.0,
        delta: float = 0.1,
        planet_radius: float = C.MARS_RADIUS,
    ) -> None:
        if not 0.0 <= delta < 1.0:
            raise ConfigurationError(f"delta must be in [0, 1), got {delta}")
        self.Kh = float(Kh)
        self.Kp = float(Kp)
        self.delta = float(delta)
        self.planet_radius = float(planet_radius)

    def compute_throttle(self, position: Array, velocity: Array, fuel_fraction: float) -> float:
        alt = altitude(position, self.planet_radius)
        error = -(0.5 + self.Kh * alt + climb_rate(position, velocity))
        p_out = self.Kp * error
        if p_out >= 1.0 - self.delta:
            return 1.0
        if p_out <= -self.delta:
            return 0.0
        return self.delta + p_out


CONTROLLERS = ("none", "gain_scheduled", "proportional")


def make_controller(
    name: str,
    config: LanderConfig,
    gravity: InverseSquareGravity | None = None,
    planet_radius: float = C.MARS_RADIUS,
    **kwargs,
) -> Controller:
    """
    Build a controller by name.

    Parameters
    ----------
    name : str
        One of ``CONTROLLERS``
    config : LanderConfig
        Lander parameters
    **kwargs
        Extra gains for the proportional law (Kh, Kp, delta)

    Raises
    ------
    ConfigurationError
        If the name is unknown
    """
    if name == "none":
        return NoAutopilot()
    if name == "gain_scheduled":
        return GainScheduledAutopilot(config, gravity=gravity, planet_radius=planet_radius)
    if name == "proportional":
        return ProportionalAutopilot(planet_radius=planet_radius, **kwargs)
    raise ConfigurationError(
        f"Unknown controller '{name}'. Valid options: {', '.join(CONTROLLERS)}"
    )
