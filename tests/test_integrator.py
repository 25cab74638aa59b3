import numpy as np
import pytest

from landersim.core.clock import SimulationClock
from landersim.core.integrator import PhysicsState, PositionVerlet
from landersim.exceptions import InvalidStateError

A_CONST = np.array([0.0, 0.0, -3.7])


class CountingAcceleration:
    def __init__(self, a=A_CONST):
        self.a = np.asarray(a, dtype=float)
        self.calls = []

    def __call__(self, p, v):
        self.calls.append((p.copy(), v.copy()))
        return self.a


def make(dt=0.1, p0=(0.0, 0.0, 100.0), v0=(1.0, 0.0, -5.0), acc=None):
    clock = SimulationClock(delta_t=dt)
    state = PhysicsState.from_initial(p0, v0)
    acc = acc if acc is not None else CountingAcceleration()
    return PositionVerlet(acc, state, clock), acc


def test_bootstrap_is_taylor_step():
    verlet, acc = make()
    p0 = verlet.state.position.copy()
    v0 = verlet.state.velocity.copy()
    dt = 0.1

    verlet.step()

    assert np.allclose(verlet.state.position, p0 + v0 * dt + 0.5 * A_CONST * dt * dt)
    assert np.allclose(verlet.state.velocity, v0 + A_CONST * dt)
    assert np.allclose(verlet.state.previous_position, p0)
    assert verlet.clock.simulation_time == pytest.approx(dt)


def test_acceleration_evaluated_once_per_step():
    verlet, acc = make()
    for _ in range(5):
        verlet.step()
    assert len(acc.calls) == 5


def test_steady_state_with_injected_history():
    """The central-difference branch runs without a bootstrap step."""
    dt = 0.2
    clock = SimulationClock(delta_t=dt, simulation_time=3.0)
    prev = np.array([0.0, 0.0, 10.0])
    pos = np.array([0.0, 1.0, 9.0])
    state = PhysicsState(position=pos.copy(), velocity=np.zeros(3), previous_position=prev.copy())
    verlet = PositionVerlet(lambda p, v: A_CONST, state, clock)

    verlet.step()

    nxt = 2 * pos - prev + A_CONST * dt * dt
    assert np.allclose(state.position, nxt)
    assert np.allclose(state.previous_position, pos)
    assert np.allclose(state.velocity, (nxt - prev) / (2 * dt))
    assert clock.simulation_time == pytest.approx(3.2)


def test_bootstrap_never_reentered():
    verlet, _ = make()
    verlet.step()
    for _ in range(3):
        pos = verlet.state.position.copy()
        prev = verlet.state.previous_position.copy()
        verlet.step()
        expected = 2 * pos - prev + A_CONST * 0.01
        assert np.allclose(verlet.state.position, expected)


def test_steady_state_without_history_raises():
    clock = SimulationClock(delta_t=0.1, simulation_time=1.0)
    state = PhysicsState.from_initial([0, 0, 1], [0, 0, 0])
    verlet = PositionVerlet(lambda p, v: A_CONST, state, clock)
    with pytest.raises(InvalidStateError, match="previous position"):
        verlet.step()


def test_constant_acceleration_positions_exact_velocity_lagged():
    """Positions are exact for constant a; velocity is one step behind."""
    dt = 0.1
    verlet, _ = make(dt=dt)
    p0 = np.array([0.0, 0.0, 100.0])
    v0 = np.array([1.0, 0.0, -5.0])
    n = 20
    for _ in range(n):
        verlet.step()
    t = n * dt
    assert np.allclose(verlet.state.position, p0 + v0 * t + 0.5 * A_CONST * t * t)
    assert np.allclose(verlet.state.velocity, v0 + A_CONST * (t - dt))


def test_clock_validates_step():
    with pytest.raises(ValueError):
        SimulationClock(delta_t=0.0)
    with pytest.warns(RuntimeWarning, match="Large timestep"):
        SimulationClock(delta_t=5.0)


def test_clock_reset():
    clock = SimulationClock(delta_t=0.1)
    clock.advance()
    assert not clock.is_initial
    clock.reset(0.05)
    assert clock.is_initial
    assert clock.delta_t == 0.05


def test_state_copy_is_independent():
    state = PhysicsState.from_initial([1, 2, 3], [0, 0, 0])
    clone = state.copy()
    clone.position[0] = 99.0
    assert state.position[0] == 1.0
