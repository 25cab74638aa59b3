"""
Initial-condition table.

Ten scenario slots, 0-9. Slots 6-9 are empty: selecting one changes
nothing and the caller must set the state manually. Descriptors hold
tuples so they compare by value and cannot be mutated.
"""
from __future__ import annotations

from dataclasses import dataclass

from landersim import constants as C
from landersim.components.lander import ParachuteStatus
from landersim.exceptions import ConfigurationError

NUM_SCENARIOS = 10

Triple = tuple[float, float, float]


@dataclass(frozen=True)
class ScenarioDescriptor:
    """
    Initial conditions for one run.

    Attributes
    ----------
    description : str
        Short label
    position : tuple
        Planet-centred position [m]
    velocity : tuple
        Velocity [m/s]
    orientation : tuple
        xyz Euler angles [degrees]
    delta_t : float
        Fixed step [s]
    parachute_status : ParachuteStatus
        Initial chute state
    stabilized_attitude : bool
        Keep the base pointing at the planet
    autopilot_enabled : bool
        Run the throttle controller each step
    """

    description: str
    position: Triple
    velocity: Triple
    orientation: Triple
    delta_t: float
    parachute_status: ParachuteStatus = ParachuteStatus.NOT_DEPLOYED
    stabilized_attitude: bool = False
    autopilot_enabled: bool = False


def _build(index: int) -> ScenarioDescriptor | None:
    R = C.MARS_RADIUS
    if index == 0:
        return ScenarioDescriptor(
            "circular orbit",
            position=(1.2 * R, 0.0, 0.0),
            velocity=(0.0, -3247.087385863725, 0.0),
            orientation=(0.0, 90.0, 0.0),
            delta_t=0.1,
        )
    if index == 1:
        return ScenarioDescriptor(
            "descent from 10km",
            position=(0.0, -(R + 10000.0), 0.0),
            velocity=(0.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            delta_t=0.1,
            stabilized_attitude=True,
        )
    if index == 2:
        return ScenarioDescriptor(
            "elliptical orbit, thrust changes orbital plane",
            position=(0.0, 0.0, 1.2 * R),
            velocity=(3500.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            delta_t=0.1,
        )
    if index == 3:
        return ScenarioDescriptor(
            "polar launch at escape velocity (but drag prevents escape)",
            position=(0.0, 0.0, R + C.LANDER_SIZE / 2.0),
            velocity=(0.0, 0.0, 5027.0),
            orientation=(0.0, 0.0, 0.0),
            delta_t=0.1,
        )
    if index == 4:
        return ScenarioDescriptor(
            "elliptical orbit that clips the atmosphere and decays",
            position=(0.0, 0.0, R + 100000.0),
            velocity=(4000.0, 0.0, 0.0),
            orientation=(0.0, 90.0, 0.0),
            delta_t=0.1,
        )
    if index == 5:
        return ScenarioDescriptor(
            "descent from 200km",
            position=(0.0, -(R + C.EXOSPHERE), 0.0),
            velocity=(0.0, 0.0, 0.0),
            orientation=(0.0, 0.0, 90.0),
            delta_t=0.1,
            stabilized_attitude=True,
        )
    return None


def scenario_descriptor(index: int) -> ScenarioDescriptor | None:
    """
    Descriptor for a scenario index.

    Returns None for the empty slots 6-9.

    Raises
    ------
    ConfigurationError
        If ``index`` is not an integer in 0-9.
    """
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < NUM_SCENARIOS:
        raise ConfigurationError(
            f"Scenario index must be an integer in 0-{NUM_SCENARIOS - 1}, got {index!r}"
        )
    return _build(index)


def scenario_descriptions() -> list[str]:
    """Labels for all slots; empty slots give ''."""
    return [d.description if d is not None else "" for d in map(_build, range(NUM_SCENARIOS))]


@dataclass(frozen=True)
class SimulationOptions:
    """
    Named options for a run.

    ``None`` keeps the scenario's own value.

    Attributes
    ----------
    scenario_index : int
        Initial-condition slot, 0-9
    delta_t : float | None
        Fixed step override [s]
    autopilot_enabled : bool | None
        Autopilot override
    stabilized_attitude : bool | None
        Attitude stabilization override
    controller : str
        Control law used when the autopilot is enabled
    """

    scenario_index: int = 1
    delta_t: float | None = None
    autopilot_enabled: bool | None = None
    stabilized_attitude: bool | None = None
    controller: str = "gain_scheduled"
