"""
Fixed-step position-Verlet integrator.

The scheme is the explicit central-difference recurrence

    x[n+1] = 2·x[n] − x[n−1] + a[n]·Δt²
    v[n]   = (x[n+1] − x[n−1]) / (2·Δt)

which is time-symmetric and second-order accurate for smooth forces. It
needs one historical position, so the very first step is bootstrapped
with an explicit Taylor step:

    x[1] = x[0] + v[0]·Δt + ½·a[0]·Δt²
    v[1] = v[0] + a[0]·Δt
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
from numpy.typing import ArrayLike, NDArray

from landersim.core.clock import SimulationClock
from landersim.exceptions import InvalidStateError
from landersim.utils.vector import vec3

Array = NDArray[np.float64]
AccelerationFn = Callable[[Array, Array], Array]


@dataclass
class PhysicsState:
    """
    Translational state of the lander.

    ``previous_position`` is None until the first step completes; after
    that every step reads and overwrites it. It can be injected directly
    to exercise the steady-state branch in isolation.
    """

    position: Array
    velocity: Array
    previous_position: Array | None = None

    @classmethod
    def from_initial(cls, position: ArrayLike, velocity: ArrayLike) -> PhysicsState:
        return cls(position=vec3(position), velocity=vec3(velocity))

    def copy(self) -> PhysicsState:
        return PhysicsState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            previous_position=None if self.previous_position is None else self.previous_position.copy(),
        )


class PositionVerlet:
    """
    Two-point symmetric integrator owning the physics state.

    Parameters
    ----------
    acceleration : Callable[[position, velocity], NDArray]
        Net acceleration; evaluated exactly once per step.
    state : PhysicsState
        Integrated state (mutated in place)
    clock : SimulationClock
        Advanced by one ``delta_t`` per step

    Examples
    --------
    >>> clock = SimulationClock(delta_t=0.1)
    >>> state = PhysicsState.from_initial([0, 0, 100], [0, 0, 0])
    >>> verlet = PositionVerlet(lambda p, v: np.array([0, 0, -9.81]), state, clock)
    >>> verlet.step()
    """

    def __init__(self, acceleration: AccelerationFn, state: PhysicsState, clock: SimulationClock) -> None:
        self.acceleration = acceleration
        self.state = state
        self.clock = clock

    def step(self) -> Array:
        """
        Advance state and clock by one ``delta_t``.

        Returns
        -------
        NDArray
            Acceleration evaluated at the start of the step [m/s²]

        Raises
        ------
        InvalidStateError
            If a steady-state step is requested without a previous position.
        """
        s = self.state
        dt = self.clock.delta_t
        acc = np.asarray(self.acceleration(s.position, s.velocity), dtype=np.float64)

        if self.clock.is_initial:
            s.previous_position = s.position.copy()
            s.position = s.position + s.velocity * dt + 0.5 * dt * dt * acc
            s.velocity = s.velocity + dt * acc
        else:
            if s.previous_position is None:
                raise InvalidStateError(
                    f"No previous position at t={self.clock.simulation_time}; "
                    "the two-point scheme needs one step of history."
                )
            nxt = 2.0 * s.position - s.previous_position + acc * dt * dt
            s.velocity = (nxt - s.previous_position) / (2.0 * dt)
            s.previous_position = s.position
            s.position = nxt

        self.clock.advance()
        return acc
