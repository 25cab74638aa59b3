"""
Validation utilities for physical parameters and state variables.

Provides functions to validate inputs for the lander model, ensuring
physical consistency and numerical stability.
"""
from __future__ import annotations
import numpy as np
from numpy.typing import NDArray
import warnings

from landersim.exceptions import InvalidStateError


def validate_positive(value: float, name: str, strict: bool = True) -> None:
    """
    Validate that a scalar value is positive.

    Parameters
    ----------
    value : float
        Value to validate
    name : str
        Parameter name for error messages
    strict : bool
        If True, raise ValueError. If False, issue warning.

    Raises
    ------
    ValueError
        If strict=True and value <= 0
    """
    if value <= 0:
        msg = f"{name} must be positive, got {value}"
        if strict:
            raise ValueError(msg)
        else:
            warnings.warn(msg, RuntimeWarning, stacklevel=2)


def validate_non_negative(value: float, name: str) -> None:
    """Validate that a value is non-negative."""
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_fraction(value: float, name: str) -> None:
    """Validate that a value lies in the closed interval [0, 1]."""
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def validate_nonzero_position(position: NDArray[np.float64], eps: float) -> float:
    """
    Return ``|position|``, raising if the point is at the planet centre.

    Raises
    ------
    InvalidStateError
        If ``|position| < eps``
    """
    r = float(np.linalg.norm(position))
    if r < eps:
        raise InvalidStateError(
            f"Position {position} is at the coordinate origin; "
            "gravity direction is undefined."
        )
    return r


def validate_timestep(dt: float, max_dt: float = 1.0) -> None:
    """
    Validate timestep is positive and reasonable.

    Parameters
    ----------
    dt : float
        Time step [s]
    max_dt : float
        Maximum reasonable timestep [s]

    Raises
    ------
    ValueError
        If timestep is invalid
    """
    if dt <= 0:
        raise ValueError(f"Timestep must be positive, got {dt}")
    if dt > max_dt:
        warnings.warn(
            f"Large timestep {dt}s may cause instability. "
            f"Consider using dt < {max_dt}s.",
            RuntimeWarning,
            stacklevel=2
        )
