"""
Lander configuration and parachute state.

LanderConfig is read-only during a tick. The fuel fraction it is
evaluated against lives on the driver, because fuel is consumed by an
external collaborator between ticks.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, auto

from landersim import constants as C
from landersim.utils.validation import validate_non_negative, validate_positive


class ParachuteStatus(Enum):
    """
    Parachute states.

    Deployment triggering is external; the force model only reads the
    current value each call.
    """

    NOT_DEPLOYED = auto()
    DEPLOYED = auto()


@dataclass(frozen=True)
class LanderConfig:
    """
    Mass, aerodynamic and engine parameters of the lander.

    Parameters
    ----------
    unloaded_mass : float
        Dry mass [kg]
    fuel_capacity : float
        Tank volume [l]
    fuel_density : float
        Fuel density [kg/l]
    lander_size : float
        Base radius [m]. Skin reference area is π·size², each chute
        canopy is (2·size)².
    drag_coef_lander : float
        Skin drag coefficient [-]
    drag_coef_chute : float
        Chute drag coefficient [-]
    max_thrust : float
        Engine thrust at throttle 1 [N]
    chute_area_multiplier : float
        Empirical factor on chute drag (several canopies).
    """

    unloaded_mass: float = C.UNLOADED_LANDER_MASS
    fuel_capacity: float = C.FUEL_CAPACITY
    fuel_density: float = C.FUEL_DENSITY
    lander_size: float = C.LANDER_SIZE
    drag_coef_lander: float = C.DRAG_COEF_LANDER
    drag_coef_chute: float = C.DRAG_COEF_CHUTE
    max_thrust: float = C.MAX_THRUST
    chute_area_multiplier: float = C.CHUTE_AREA_MULTIPLIER

    def __post_init__(self) -> None:
        validate_non_negative(self.unloaded_mass, "unloaded_mass")
        validate_non_negative(self.fuel_capacity, "fuel_capacity")
        validate_non_negative(self.fuel_density, "fuel_density")
        validate_positive(self.lander_size, "lander_size")
        validate_non_negative(self.drag_coef_lander, "drag_coef_lander")
        validate_non_negative(self.drag_coef_chute, "drag_coef_chute")
        validate_positive(self.max_thrust, "max_thrust")
        validate_non_negative(self.chute_area_multiplier, "chute_area_multiplier")

    @property
    def lander_area(self) -> float:
        """Skin drag reference area [m²]."""
        return math.pi * self.lander_size ** 2

    @property
    def chute_area(self) -> float:
        """Single canopy reference area [m²]."""
        return (2.0 * self.lander_size) ** 2

    def mass(self, fuel_fraction: float) -> float:
        """Total mass [kg] for the given fuel fraction (not floored)."""
        return self.unloaded_mass + fuel_fraction * self.fuel_capacity * self.fuel_density
