"""Utility functions for landersim."""

from .io import load_telemetry, save_simulation_history
from .validation import (
    validate_fraction,
    validate_non_negative,
    validate_nonzero_position,
    validate_positive,
    validate_timestep,
)
from .vector import abs2, magnitude, unit, vec3

__all__ = [
    "save_simulation_history",
    "load_telemetry",
    "validate_positive",
    "validate_non_negative",
    "validate_fraction",
    "validate_nonzero_position",
    "validate_timestep",
    "abs2",
    "magnitude",
    "unit",
    "vec3",
]
