import os
import sys

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for testing

import numpy as np
import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from landersim import constants as C
from landersim.components.lander import LanderConfig
from landersim.dynamics.forces import ForceModel


@pytest.fixture
def config():
    return LanderConfig()


@pytest.fixture
def force_model(config):
    """Force model with the default atmosphere and no engine."""
    return ForceModel(config)


@pytest.fixture
def surface_point():
    """Position 1 km above the surface on the -Y axis (scenario 1 geometry)."""
    return np.array([0.0, -(C.MARS_RADIUS + 1000.0), 0.0])


def at_altitude(h: float, axis: int = 1, sign: float = -1.0) -> np.ndarray:
    """Position at altitude h along a coordinate axis."""
    p = np.zeros(3)
    p[axis] = sign * (C.MARS_RADIUS + h)
    return p


def descending(position: np.ndarray, rate: float) -> np.ndarray:
    """Velocity with the given descent rate (positive = toward the planet)."""
    return -rate * position / np.linalg.norm(position)
