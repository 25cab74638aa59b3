"""
Mars atmosphere.

Simple exponential model between the surface and the exosphere. Any
callable ``density(position) -> float`` can be injected in its place.
"""
from __future__ import annotations

from typing import Callable

import numpy as np
from numpy.typing import NDArray

from landersim import constants as C

DensityModel = Callable[[NDArray[np.float64]], float]


class ExponentialAtmosphere:
    """
    ρ(h) = ρ0 · exp(-h / H) for 0 ≤ h ≤ h_top, zero elsewhere.

    Parameters
    ----------
    surface_density : float
        ρ0 [kg/m³]
    scale_height : float
        H [m]
    planet_radius : float
        Used to turn |position| into altitude [m]
    top : float
        Altitude above which density is zero [m]
    """

    def __init__(
        self,
        surface_density: float = C.SURFACE_DENSITY,
        scale_height: float = C.SCALE_HEIGHT,
        planet_radius: float = C.MARS_RADIUS,
        top: float = C.EXOSPHERE,
    ) -> None:
        if surface_density < 0:
            raise ValueError(f"Surface density must be non-negative, got {surface_density}")
        if scale_height <= 0:
            raise ValueError(f"Scale height must be positive, got {scale_height}")
        self.surface_density = float(surface_density)
        self.scale_height = float(scale_height)
        self.planet_radius = float(planet_radius)
        self.top = float(top)

    def __call__(self, position: NDArray[np.float64]) -> float:
        alt = float(np.linalg.norm(position)) - self.planet_radius
        if alt > self.top or alt < 0.0:
            return 0.0
        return self.surface_density * float(np.exp(-alt / self.scale_height))


atmospheric_density: DensityModel = ExponentialAtmosphere()
"""Default Mars atmosphere."""


def vacuum(position: NDArray[np.float64]) -> float:
    """Zero density everywhere (drag-free runs)."""
    return 0.0
