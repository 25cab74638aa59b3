"""
landersim - Mars lander descent simulator.

Core Components
---------------
ForceModel : Gravity + thrust + skin/parachute drag
PositionVerlet : Fixed-step two-point integrator
GainScheduledAutopilot : Altitude-scheduled throttle controller
ProportionalAutopilot : Alternate descent-rate controller
Lander : Stepping driver (state, clock, throttle, logging)

Scenarios
---------
scenario_descriptor : Initial conditions for slots 0-9
Scenario : Fluent runner

Examples
--------
>>> from landersim import Lander
>>> lander = Lander()
>>> lander.load_scenario(1)
>>> lander.autopilot_enabled = True
>>> lander.run(duration=1000.0)
"""

__version__ = "0.1.0"

from landersim.components import LanderConfig, ParachuteStatus
from landersim.control import (
    GainScheduledAutopilot,
    NoAutopilot,
    ProportionalAutopilot,
    make_controller,
)
from landersim.core import Lander, PhysicsState, PositionVerlet, SimulationClock
from landersim.dynamics import (
    AttitudeStabilizer,
    EngineThrust,
    ExponentialAtmosphere,
    ForceModel,
    InverseSquareGravity,
    QuadraticDrag,
)
from landersim.exceptions import (
    ConfigurationError,
    FuelDepletedWarning,
    InvalidStateError,
    InvariantViolation,
    LanderError,
)
from landersim.logger import CSVLogger
from landersim.scenarios import ScenarioDescriptor, SimulationOptions, scenario_descriptor
from landersim.api.scenario import Scenario

__all__ = [
    # Version
    "__version__",
    # Core
    "Lander",
    "PhysicsState",
    "PositionVerlet",
    "SimulationClock",
    # Dynamics
    "ForceModel",
    "InverseSquareGravity",
    "QuadraticDrag",
    "ExponentialAtmosphere",
    "EngineThrust",
    "AttitudeStabilizer",
    # Control
    "GainScheduledAutopilot",
    "ProportionalAutopilot",
    "NoAutopilot",
    "make_controller",
    # Components
    "LanderConfig",
    "ParachuteStatus",
    # Scenarios
    "ScenarioDescriptor",
    "SimulationOptions",
    "scenario_descriptor",
    "Scenario",
    # Errors
    "LanderError",
    "ConfigurationError",
    "InvalidStateError",
    "FuelDepletedWarning",
    "InvariantViolation",
    # Logging
    "CSVLogger",
]
