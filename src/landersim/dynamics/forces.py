"""
Force model for the lander point mass.

Combines inverse-square gravity, engine thrust and quadratic drag (skin
plus optional parachute) into a net acceleration.

Physical units:
- Forces: Newtons [N]
- Accelerations: meters per second squared [m/s²]
- Velocities: meters per second [m/s]
- Areas: square meters [m²]
- Densities: kilograms per cubic meter [kg/m³]
"""
from __future__ import annotations

import warnings
from typing import Callable, Protocol

import numpy as np
from numpy.typing import NDArray

from landersim import constants as C
from landersim.components.lander import LanderConfig, ParachuteStatus
from landersim.dynamics.atmosphere import DensityModel, atmospheric_density
from landersim.exceptions import FuelDepletedWarning, InvariantViolation
from landersim.utils.validation import validate_nonzero_position, validate_positive

Array = NDArray[np.float64]


class ThrustSource(Protocol):
    """World-frame thrust vector for a throttle setting."""
    def __call__(self, throttle: float, fuel_fraction: float, position: Array) -> Array:
        ...


def no_thrust(throttle: float, fuel_fraction: float, position: Array) -> Array:
    """Engine-off thrust source."""
    return np.zeros(3, dtype=np.float64)


class InverseSquareGravity:
    """
    Point-mass gravitational field centred on the origin.

    Acceleration: a = -G·M / |r|² · r̂

    Parameters
    ----------
    gm : float
        Gravitational parameter G·M [m³/s²]
    """
    def __init__(self, gm: float = C.GRAVITY * C.MARS_MASS) -> None:
        validate_positive(gm, "gm")
        self.gm = float(gm)

    def acceleration(self, position: Array) -> Array:
        """
        Gravitational acceleration at ``position``.

        Raises
        ------
        InvalidStateError
            If ``position`` is at the origin.
        """
        r = validate_nonzero_position(position, C.EPSILON_POSITION)
        return -self.gm * position / (r ** 3)

    def magnitude(self, position: Array) -> float:
        """|g| at ``position`` [m/s²]."""
        r = validate_nonzero_position(position, C.EPSILON_POSITION)
        return self.gm / (r * r)


class QuadraticDrag:
    """
    Quadratic drag opposing velocity.

    F = -½ · ρ(r) · Cd · A · |v|² · v̂ · k

    Parameters
    ----------
    Cd : float
        Drag coefficient [-]
    area : float
        Reference area [m²]
    multiplier : float
        Extra scale factor k (e.g. number of canopies). Default 1.
    density : DensityModel
        ρ(position) [kg/m³]
    """
    def __init__(
        self,
        Cd: float,
        area: float,
        multiplier: float = 1.0,
        density: DensityModel = atmospheric_density,
    ) -> None:
        if Cd < 0:
            raise ValueError(f"Drag coefficient must be non-negative, got {Cd}")
        if area < 0:
            raise ValueError(f"Area must be non-negative, got {area}")
        self.Cd = float(Cd)
        self.area = float(area)
        self.multiplier = float(multiplier)
        self.density = density

    def force(self, position: Array, velocity: Array) -> Array:
        speed = float(np.linalg.norm(velocity))
        if speed < C.EPSILON_VELOCITY:
            return np.zeros(3, dtype=np.float64)
        rho = self.density(position)
        # |v|² · v̂ == |v| · v
        return -0.5 * rho * self.Cd * self.area * self.multiplier * speed * velocity


class ForceModel:
    """
    Net acceleration of the lander.

    a = g(r) + (T + D_skin + D_chute) / m(fuel)

    The chute term is added to skin drag only while the parachute is
    DEPLOYED. Mass is recomputed on every call since fuel depletes
    between ticks.

    Parameters
    ----------
    config : LanderConfig
        Lander parameters
    gravity : InverseSquareGravity
        Gravity field
    thrust : ThrustSource
        World-frame thrust collaborator; treated as an opaque vector.
    density : DensityModel
        Atmosphere ρ(position)

    Attributes
    ----------
    last_forces : dict[str, NDArray]
        Breakdown of the most recent call: ``gravity`` (as a force),
        ``thrust``, ``skin_drag``, ``chute_drag``. Diagnostic only.

    Examples
    --------
    >>> model = ForceModel(LanderConfig())
    >>> a = model.acceleration(position, velocity, 0.0,
    ...                        ParachuteStatus.NOT_DEPLOYED, 1.0)
    """
    def __init__(
        self,
        config: LanderConfig,
        gravity: InverseSquareGravity | None = None,
        thrust: ThrustSource | Callable[[float, float, Array], Array] = no_thrust,
        density: DensityModel = atmospheric_density,
    ) -> None:
        self.config = config
        self.gravity = gravity if gravity is not None else InverseSquareGravity()
        self.thrust = thrust
        self.skin_drag = QuadraticDrag(
            Cd=config.drag_coef_lander, area=config.lander_area, density=density
        )
        self.chute_drag = QuadraticDrag(
            Cd=config.drag_coef_chute,
            area=config.chute_area,
            multiplier=config.chute_area_multiplier,
            density=density,
        )
        self.last_forces: dict[str, Array] = {}

    def mass(self, fuel_fraction: float) -> float:
        """
        Current mass, floored at ``MIN_MASS``.

        Issues FuelDepletedWarning when the floor is applied.
        """
        m = self.config.mass(fuel_fraction)
        if m <= 0.0:
            warnings.warn(
                f"Lander mass {m:.3e} kg is not positive (fuel fraction "
                f"{fuel_fraction}); flooring at {C.MIN_MASS} kg.",
                FuelDepletedWarning,
                stacklevel=3,
            )
            return C.MIN_MASS
        return m

    def drag(self, position: Array, velocity: Array, parachute_status: ParachuteStatus) -> Array:
        """Total drag force [N]: skin, plus chute when deployed."""
        total = self.skin_drag.force(position, velocity)
        if parachute_status is ParachuteStatus.DEPLOYED:
            total = total + self.chute_drag.force(position, velocity)
        return total

    def acceleration(
        self,
        position: Array,
        velocity: Array,
        throttle: float,
        parachute_status: ParachuteStatus,
        fuel_fraction: float,
    ) -> Array:
        """
        Net acceleration [m/s²].

        Parameters
        ----------
        position : NDArray
            Planet-centred position [m]; must not be the origin.
        velocity : NDArray
            Velocity [m/s]
        throttle : float
            Commanded throttle. Values outside [0, 1] are clamped and
            reported as InvariantViolation. A non-finite throttle
            is treated as 0.
        parachute_status : ParachuteStatus
            Current chute state
        fuel_fraction : float
            Remaining fuel in [0, 1]
        """
        if not 0.0 <= throttle <= 1.0:
            warnings.warn(
                f"Throttle {throttle} outside [0, 1]; clamping.",
                InvariantViolation,
                stacklevel=2,
            )
            throttle = min(max(throttle, 0.0), 1.0) if np.isfinite(throttle) else 0.0

        a_gravity = self.gravity.acceleration(position)
        thrust = np.asarray(self.thrust(throttle, fuel_fraction, position), dtype=np.float64)
        skin = self.skin_drag.force(position, velocity)
        if parachute_status is ParachuteStatus.DEPLOYED:
            chute = self.chute_drag.force(position, velocity)
        else:
            chute = np.zeros(3, dtype=np.float64)
        mass = self.mass(fuel_fraction)

        self.last_forces = {
            "gravity": a_gravity * mass,
            "thrust": thrust,
            "skin_drag": skin,
            "chute_drag": chute,
        }
        return a_gravity + (thrust + skin + chute) / mass
