"""
3D vector helpers.

Vectors are plain ``(3,)`` float64 numpy arrays; these functions add the
few operations the lander model needs on top of numpy.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

EPS = 1e-12

Vector3 = NDArray[np.float64]


def vec3(x: ArrayLike) -> Vector3:
    """Coerce to a fresh ``(3,)`` float64 array."""
    v = np.array(x, dtype=np.float64)
    if v.shape != (3,):
        raise ValueError(f"Vector must have shape (3,), got {v.shape}")
    return v


def abs2(v: Vector3) -> float:
    """Squared magnitude ``v·v``."""
    return float(np.dot(v, v))


def magnitude(v: Vector3) -> float:
    return float(np.sqrt(abs2(v)))


def unit(v: Vector3) -> Vector3:
    """
    Unit vector along ``v``.

    Returns the zero vector when ``|v| < EPS``; callers that need a
    direction must check the magnitude themselves.
    """
    n = magnitude(v)
    if n < EPS:
        return np.zeros(3, dtype=np.float64)
    return (v / n).astype(np.float64)
