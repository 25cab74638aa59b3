"""
Physical constants for the Mars lander model.

Units: SI throughout, except fuel volumes which are in litres.
"""
from __future__ import annotations

# Planet
GRAVITY = 6.673e-11  # Gravitational constant [m³/(kg·s²)]
MARS_MASS = 6.42e23  # [kg]
MARS_RADIUS = 3386000.0  # [m]
MARS_DAY = 88642.65  # [s]
EXOSPHERE = 200000.0  # Top of the modelled atmosphere [m]

# Atmosphere (exponential fit)
SURFACE_DENSITY = 0.017  # [kg/m³]
SCALE_HEIGHT = 11000.0  # [m]

# Lander
UNLOADED_LANDER_MASS = 100.0  # [kg]
FUEL_CAPACITY = 100.0  # [l]
FUEL_DENSITY = 1.0  # [kg/l]
LANDER_SIZE = 1.0  # Base radius [m]
DRAG_COEF_LANDER = 1.0
DRAG_COEF_CHUTE = 2.0
CHUTE_AREA_MULTIPLIER = 5.0  # Several canopies of (2·size)² each

# Engine: 1.5 × fully fuelled weight at the surface
MAX_THRUST = 1.5 * (FUEL_DENSITY * FUEL_CAPACITY + UNLOADED_LANDER_MASS) * (
    GRAVITY * MARS_MASS / (MARS_RADIUS * MARS_RADIUS)
)  # [N]

# Touchdown limits
MAX_IMPACT_DESCENT_RATE = 1.0  # [m/s]
MAX_IMPACT_GROUND_SPEED = 1.0  # [m/s]

# Numerical floors
MIN_MASS = 1e-3  # [kg]
EPSILON_VELOCITY = 1e-12  # Below this speed drag is zero [m/s]
EPSILON_POSITION = 1e-9  # Below this radius gravity is undefined [m]
