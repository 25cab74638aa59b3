"""Simulation clock with a fixed step size."""
from __future__ import annotations

from dataclasses import dataclass

from landersim.utils.validation import validate_timestep


@dataclass
class SimulationClock:
    """
    Simulation time and the fixed step used for the whole run.

    Attributes
    ----------
    delta_t : float
        Step size [s]. Constant for a run; the two-point integrator
        assumes it.
    simulation_time : float
        Elapsed simulated time [s]
    """

    delta_t: float
    simulation_time: float = 0.0

    def __post_init__(self) -> None:
        validate_timestep(self.delta_t)
        self.delta_t = float(self.delta_t)
        self.simulation_time = float(self.simulation_time)

    @property
    def is_initial(self) -> bool:
        """True before the first step (selects the bootstrap branch)."""
        return self.simulation_time == 0.0

    def advance(self) -> float:
        self.simulation_time += self.delta_t
        return self.simulation_time

    def reset(self, delta_t: float | None = None) -> None:
        if delta_t is not None:
            validate_timestep(delta_t)
            self.delta_t = float(delta_t)
        self.simulation_time = 0.0
