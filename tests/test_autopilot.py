import numpy as np
import pytest

from conftest import at_altitude, descending
from landersim import constants as C
from landersim.components.lander import LanderConfig
from landersim.control.autopilot import (
    GainScheduledAutopilot,
    NoAutopilot,
    ProportionalAutopilot,
    altitude,
    climb_rate,
    make_controller,
)
from landersim.exceptions import ConfigurationError


@pytest.fixture
def autopilot(config):
    return GainScheduledAutopilot(config)


def test_sign_conventions():
    p = at_altitude(500.0)
    assert altitude(p) == pytest.approx(500.0)
    assert climb_rate(p, descending(p, 7.0)) == pytest.approx(-7.0)
    assert climb_rate(p, descending(p, -2.0)) == pytest.approx(2.0)


def test_hover_ratio(autopilot, config):
    p = at_altitude(0.0)
    g = C.GRAVITY * C.MARS_MASS / C.MARS_RADIUS ** 2
    assert autopilot.hover_ratio(p, 1.0) == pytest.approx(g * config.mass(1.0) / config.max_thrust)
    # Default engine gives 1.5x full weight at the surface
    assert autopilot.hover_ratio(p, 1.0) == pytest.approx(1.0 / 1.5)


def test_no_throttle_above_schedule_altitude(autopilot):
    p = at_altitude(5000.0)
    assert autopilot.compute_throttle(p, descending(p, 100.0), 1.0) == 0.0


def test_gain_schedule_is_linear_in_altitude(autopilot):
    p = at_altitude(2000.0)
    hover = autopilot.hover_ratio(p, 1.0)
    assert autopilot.compute_throttle(p, descending(p, 50.0), 1.0) == pytest.approx(0.5 * hover)


@pytest.mark.parametrize("h", [300.0, 1000.0, 3999.0, 10000.0])
def test_ascent_cutoff(autopilot, h):
    p = at_altitude(h)
    assert autopilot.compute_throttle(p, descending(p, -1.0), 1.0) == 0.0


@pytest.mark.parametrize(
    "rate, factor",
    [
        (10.0, 1.0),
        (3.0, 1.0),  # band edge belongs to full braking
        (2.99, 0.5),
        (1.0, 0.5),
        (0.6, 0.5),  # band edge belongs to gentle braking
        (0.59, 0.0),
        (0.0, 0.0),
        (-4.0, 0.0),  # ascending below 300 m
    ],
)
def test_low_altitude_bands(autopilot, rate, factor):
    p = at_altitude(150.0)
    hover = autopilot.hover_ratio(p, 1.0)
    throttle = autopilot.compute_throttle(p, descending(p, rate), 1.0)
    assert throttle == pytest.approx(factor * hover)


def test_low_altitude_bands_override_schedule(autopilot):
    """Below 300 m the unscaled hover ratio is used, not the scheduled one."""
    p = at_altitude(200.0)
    hover = autopilot.hover_ratio(p, 1.0)
    assert autopilot.compute_throttle(p, descending(p, 5.0), 1.0) == pytest.approx(hover)


def test_controller_uses_radial_vertical_on_any_axis(autopilot):
    for axis, sign in [(0, 1.0), (1, -1.0), (2, 1.0), (2, -1.0)]:
        p = at_altitude(100.0, axis=axis, sign=sign)
        assert autopilot.compute_throttle(p, descending(p, 5.0), 1.0) > 0.0
        assert autopilot.compute_throttle(p, descending(p, -5.0), 1.0) == 0.0


def test_throttle_bound_over_reachable_states(autopilot):
    rng = np.random.default_rng(1234)
    for _ in range(2000):
        h = rng.uniform(0.0, 12000.0)
        direction = rng.normal(size=3)
        p = direction / np.linalg.norm(direction) * (C.MARS_RADIUS + h)
        v = rng.normal(scale=100.0, size=3)
        fuel = rng.uniform(0.0, 1.0)
        throttle = autopilot.compute_throttle(p, v, fuel)
        assert 0.0 <= throttle <= 1.0


def test_weak_engine_saturates_at_full_throttle():
    weak = GainScheduledAutopilot(LanderConfig(max_thrust=100.0))
    p = at_altitude(50.0)
    assert weak.hover_ratio(p, 1.0) > 1.0
    assert weak.compute_throttle(p, descending(p, 20.0), 1.0) == 1.0


class TestProportionalAutopilot:
    def test_saturates_high_when_falling_fast(self):
        ctl = ProportionalAutopilot()
        p = at_altitude(1000.0)
        assert ctl.compute_throttle(p, descending(p, 50.0), 1.0) == 1.0

    def test_cuts_engine_when_slower_than_target(self):
        ctl = ProportionalAutopilot()
        p = at_altitude(1000.0)
        # target descent 1.5 m/s, actually descending 0.5 m/s -> P = -1.0
        assert ctl.compute_throttle(p, descending(p, 0.5), 1.0) == 0.0

    def test_linear_band(self):
        ctl = ProportionalAutopilot(Kh=0.001, Kp=1.0, delta=0.1)
        p = at_altitude(1000.0)
        # target 1.5 m/s, descending 1.8 m/s -> error 0.3 -> throttle 0.4
        assert ctl.compute_throttle(p, descending(p, 1.8), 1.0) == pytest.approx(0.4)

    def test_invalid_delta(self):
        with pytest.raises(ConfigurationError):
            ProportionalAutopilot(delta=1.5)

    def test_output_bounded(self):
        ctl = ProportionalAutopilot()
        rng = np.random.default_rng(7)
        for _ in range(500):
            p = at_altitude(rng.uniform(0.0, 20000.0))
            throttle = ctl.compute_throttle(p, descending(p, rng.normal(scale=30.0)), 1.0)
            assert 0.0 <= throttle <= 1.0


def test_no_autopilot_has_no_opinion():
    p = at_altitude(100.0)
    assert NoAutopilot().compute_throttle(p, descending(p, 5.0), 1.0) is None


def test_make_controller(config):
    assert isinstance(make_controller("none", config), NoAutopilot)
    assert isinstance(make_controller("gain_scheduled", config), GainScheduledAutopilot)
    ctl = make_controller("proportional", config, Kp=2.0)
    assert isinstance(ctl, ProportionalAutopilot)
    assert ctl.Kp == 2.0
    with pytest.raises(ConfigurationError, match="Unknown controller"):
        make_controller("bang_bang", config)
