"""
Lander simulation driver.

Owns the physics state, clock, throttle, parachute status and fuel
fraction, and runs one tick at a time:

1. integrate one fixed step (force model evaluated once)
2. let the controller set the throttle for the *next* step
3. let the stabilizer reorient the lander
4. log telemetry and check for touchdown
"""
from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import numpy as np
from numpy.typing import ArrayLike, NDArray

from landersim import constants as C
from landersim.components.lander import LanderConfig, ParachuteStatus
from landersim.control.autopilot import (
    Controller,
    NoAutopilot,
    altitude,
    climb_rate,
    make_controller,
)
from landersim.dynamics.atmosphere import DensityModel, atmospheric_density
from landersim.dynamics.forces import ForceModel, InverseSquareGravity
from landersim.dynamics.thrust import Attitude, AttitudeStabilizer, EngineThrust, FixedAttitude
from landersim.logger import CSVLogger, telemetry_row
from landersim.scenarios import ScenarioDescriptor, SimulationOptions, scenario_descriptor
from landersim.utils.io import save_simulation_history
from landersim.utils.orientation import describe_orientation
from landersim.utils.validation import validate_fraction
from landersim.utils.vector import vec3

from .clock import SimulationClock
from .integrator import PhysicsState, PositionVerlet

DEFAULT_OUTPUT_DIR = Path("output")


class Lander:
    """
    Stepping driver for one powered descent.

    Parameters
    ----------
    config : LanderConfig | None
        Lander parameters. Default: ``LanderConfig()``.
    controller : str | Controller
        Control law used while the autopilot is enabled. A name is
        resolved with ``make_controller``.
    density : DensityModel
        Atmosphere ρ(position)
    gm : float
        Planet gravitational parameter [m³/s²]
    planet_radius : float
        Planet radius [m]
    delta_t : float
        Fixed step until a scenario sets its own [s]
    simulation_name : str | None
        Enables logging when given (see ``enable_logging``)
    output_dir : Path | str | None
        Base directory for outputs. Default "./output".
    auto_timestamp : bool
        Append a timestamp to the output folder name
    auto_save_plots : bool
        Generate plots when ``run`` finishes (requires logging)
    record_history : bool
        Keep a telemetry row per step in ``history`` (see ``save_history``)

    Attributes
    ----------
    state : PhysicsState
        Position, velocity and previous position
    clock : SimulationClock
        Simulation time and step
    throttle : float
        Throttle used by the next step, in [0, 1]
    applied_throttle : float
        Throttle used by the most recent step
    parachute_status : ParachuteStatus
        Current chute state (set externally)
    fuel : float
        Remaining fuel fraction (set externally)
    landed : bool
        True once touchdown has been detected
    t_touchdown : float | None
        Interpolated touchdown time [s]

    Examples
    --------
    >>> lander = Lander(controller="gain_scheduled")
    >>> lander.load_scenario(1)
    >>> lander.autopilot_enabled = True
    >>> lander.run(duration=1000.0)
    >>> lander.landed, lander.impact_descent_rate
    """

    def __init__(
        self,
        config: LanderConfig | None = None,
        controller: str | Controller = "gain_scheduled",
        density: DensityModel = atmospheric_density,
        gm: float = C.GRAVITY * C.MARS_MASS,
        planet_radius: float = C.MARS_RADIUS,
        delta_t: float = 0.1,
        simulation_name: str | None = None,
        output_dir: Path | str | None = None,
        auto_timestamp: bool = True,
        auto_save_plots: bool = False,
        record_history: bool = False,
    ) -> None:
        self.config = config if config is not None else LanderConfig()
        self.planet_radius = float(planet_radius)
        self.gravity = InverseSquareGravity(gm)
        self.attitude = Attitude()
        self.thrust = EngineThrust(self.config.max_thrust, self.attitude)
        self.force_model = ForceModel(
            self.config, gravity=self.gravity, thrust=self.thrust, density=density
        )

        if isinstance(controller, str):
            controller = make_controller(
                controller, self.config, gravity=self.gravity, planet_radius=self.planet_radius
            )
        self.controller: Controller = controller
        self._active_controller: Controller = NoAutopilot()
        self._active_stabilizer: AttitudeStabilizer | FixedAttitude = FixedAttitude()

        self.clock = SimulationClock(delta_t)
        self.state = PhysicsState.from_initial(
            (0.0, 0.0, self.planet_radius + C.EXOSPHERE), (0.0, 0.0, 0.0)
        )
        self.integrator = PositionVerlet(self._acceleration, self.state, self.clock)

        self.throttle = 0.0
        self.applied_throttle = 0.0
        self.parachute_status = ParachuteStatus.NOT_DEPLOYED
        self.fuel = 1.0
        self.scenario: ScenarioDescriptor | None = None
        self.termination_callback: Callable[[Lander], bool] | None = None
        self.record_history = record_history
        self.history: list[dict[str, float]] = []
        self._reset_touchdown()

        # Output configuration
        self._simulation_name = simulation_name
        self._output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self._auto_timestamp = auto_timestamp
        self._auto_save_plots = auto_save_plots
        self.output_path: Path | None = None
        self.logger: CSVLogger | None = None

        if simulation_name is not None:
            self.enable_logging(simulation_name)

    @classmethod
    def with_logging(
        cls,
        name: str,
        output_dir: Path | str | None = None,
        auto_save_plots: bool = True,
        **kwargs,
    ) -> Lander:
        """Create a Lander with logging pre-enabled."""
        return cls(
            simulation_name=name,
            output_dir=output_dir,
            auto_timestamp=True,
            auto_save_plots=auto_save_plots,
            **kwargs,
        )

    @classmethod
    def from_options(cls, options: SimulationOptions, **kwargs) -> Lander:
        """
        Build a Lander and load the scenario named by ``options``.

        Raises
        ------
        ConfigurationError
            For an out-of-range scenario index or unknown controller name
        """
        descriptor = scenario_descriptor(options.scenario_index)
        lander = cls(controller=options.controller, **kwargs)
        if descriptor is not None:
            lander.load_scenario(descriptor)
        if options.delta_t is not None:
            lander.clock.reset(options.delta_t)
        if options.autopilot_enabled is not None:
            lander.autopilot_enabled = options.autopilot_enabled
        if options.stabilized_attitude is not None:
            lander.stabilized_attitude = options.stabilized_attitude
        return lander

    # --- Scenario setup ---

    def load_scenario(self, scenario: int | ScenarioDescriptor) -> ScenarioDescriptor | None:
        """
        Reset the run to a scenario's initial conditions.

        Empty slots (6-9) leave every field untouched and return None.

        Raises
        ------
        ConfigurationError
            If an integer index is outside 0-9. Nothing is modified.
        """
        if isinstance(scenario, ScenarioDescriptor):
            descriptor: ScenarioDescriptor | None = scenario
        else:
            descriptor = scenario_descriptor(scenario)
        if descriptor is None:
            print(f"[Lander] Scenario {scenario} is empty; set the state manually.")
            return None

        self.clock.reset(descriptor.delta_t)
        self.set_state(descriptor.position, descriptor.velocity)
        self.attitude.orientation = vec3(descriptor.orientation)
        self.parachute_status = descriptor.parachute_status
        self.stabilized_attitude = descriptor.stabilized_attitude
        self.autopilot_enabled = descriptor.autopilot_enabled
        self.throttle = 0.0
        self.applied_throttle = 0.0
        self.fuel = 1.0
        self.scenario = descriptor
        return descriptor

    def set_state(self, position: ArrayLike, velocity: ArrayLike) -> None:
        """
        Replace position and velocity and restart the run.

        The previous position is cleared and the clock goes back to 0 with
        its current step, so the next step bootstraps.
        """
        self.state = PhysicsState.from_initial(position, velocity)
        self.integrator.state = self.state
        self.clock.reset()
        self.history.clear()
        self._reset_touchdown()

    def _reset_touchdown(self) -> None:
        self.landed = False
        self.t_touchdown: float | None = None
        self.impact_descent_rate: float | None = None
        self.impact_ground_speed: float | None = None

    @property
    def autopilot_enabled(self) -> bool:
        return not isinstance(self._active_controller, NoAutopilot)

    @autopilot_enabled.setter
    def autopilot_enabled(self, enabled: bool) -> None:
        self._active_controller = self.controller if enabled else NoAutopilot()

    @property
    def stabilized_attitude(self) -> bool:
        return isinstance(self._active_stabilizer, AttitudeStabilizer)

    @stabilized_attitude.setter
    def stabilized_attitude(self, enabled: bool) -> None:
        self._active_stabilizer = AttitudeStabilizer() if enabled else FixedAttitude()
        self.attitude.stabilized = bool(enabled)

    def set_fuel(self, fraction: float) -> None:
        validate_fraction(fraction, "fuel")
        self.fuel = float(fraction)

    # --- Observables ---

    @property
    def t(self) -> float:
        return self.clock.simulation_time

    @property
    def altitude(self) -> float:
        return altitude(self.state.position, self.planet_radius)

    @property
    def climb_rate(self) -> float:
        return climb_rate(self.state.position, self.state.velocity)

    @property
    def ground_speed(self) -> float:
        """Speed tangential to the surface [m/s]."""
        v = self.state.velocity
        return float(np.sqrt(max(float(np.dot(v, v)) - self.climb_rate ** 2, 0.0)))

    @property
    def parachute_deployed(self) -> bool:
        return self.parachute_status is ParachuteStatus.DEPLOYED

    @property
    def mass(self) -> float:
        return self.config.mass(self.fuel)

    @property
    def safe_landing(self) -> bool | None:
        """None until touchdown."""
        if not self.landed:
            return None
        return (
            self.impact_descent_rate <= C.MAX_IMPACT_DESCENT_RATE
            and self.impact_ground_speed <= C.MAX_IMPACT_GROUND_SPEED
        )

    def get_energy(self) -> dict[str, float]:
        """
        Mechanical energy of the lander [J].

        Returns
        -------
        dict[str, float]
            'kinetic', 'potential' (−GMm/r) and 'total'
        """
        m = self.mass
        KE = 0.5 * m * float(np.dot(self.state.velocity, self.state.velocity))
        PE = -self.gravity.gm * m / float(np.linalg.norm(self.state.position))
        return {"kinetic": KE, "potential": PE, "total": KE + PE}

    # --- Stepping ---

    def _acceleration(self, position: NDArray[np.float64], velocity: NDArray[np.float64]) -> NDArray[np.float64]:
        return self.force_model.acceleration(
            position, velocity, self.throttle, self.parachute_status, self.fuel
        )

    def set_termination_callback(self, fn: Callable[[Lander], bool]) -> None:
        """
        Extra stop condition, checked after every step.

        Touchdown always stops the run as well.
        """
        self.termination_callback = fn

    def step(self) -> bool:
        """
        Advance one fixed time step.

        Returns
        -------
        bool
            True if touchdown occurred (or the termination callback fired)
        """
        if self.landed:
            return True

        alt_pre = self.altitude
        self.applied_throttle = self.throttle
        self.integrator.step()

        command = self._active_controller.compute_throttle(
            self.state.position, self.state.velocity, self.fuel
        )
        if command is not None:
            self.throttle = command

        self._active_stabilizer.stabilize(self.attitude, self.state.position)

        if self.record_history:
            self.history.append(telemetry_row(self))
        if self.logger is not None:
            self.logger.log(self)

        ground = self.config.lander_size / 2.0
        alt_post = self.altitude
        if alt_post <= ground:
            dt = self.clock.delta_t
            if alt_pre > ground:
                frac = (alt_pre - ground) / max(alt_pre - alt_post, 1e-12)
                self.t_touchdown = float(self.t - dt + frac * dt)
            else:
                self.t_touchdown = self.t
            self.impact_descent_rate = -self.climb_rate
            self.impact_ground_speed = self.ground_speed
            self.landed = True
            return True

        if self.termination_callback is not None:
            return bool(self.termination_callback(self))
        return False

    def run(self, duration: float, log_interval: float = 10.0) -> None:
        """
        Step until ``duration`` has elapsed or touchdown.

        Parameters
        ----------
        duration : float
            Simulated time to run [s]
        log_interval : float
            Interval [s] for terminal progress lines. <= 0 disables.
        """
        t_end = self.t + float(duration)
        last_log_time = self.t

        if self.logger is not None:
            self.logger.log(self)

        print(f"[Lander] Starting run: {duration}s duration, dt={self.clock.delta_t}s")
        mode = "stabilized" if self.stabilized_attitude else "fixed"
        print(f"[Lander] Attitude ({mode}): {describe_orientation(self.attitude.orientation)}")

        try:
            while self.t < t_end - 1e-12:
                if self.step():
                    print(f"[Lander] Run terminated at t={self.t:.3f}s")
                    if self.landed:
                        verdict = "safe" if self.safe_landing else "crash"
                        print(
                            f"         Touchdown at t={self.t_touchdown:.3f}s, "
                            f"descent {self.impact_descent_rate:.2f}m/s, "
                            f"ground speed {self.impact_ground_speed:.2f}m/s ({verdict})"
                        )
                    break

                if log_interval > 0 and (self.t - last_log_time) >= log_interval:
                    print(
                        f"[Lander] t={self.t:8.1f}s | h={self.altitude:10.1f}m, "
                        f"climb={self.climb_rate:8.2f}m/s, throttle={self.throttle:.3f}"
                    )
                    last_log_time = self.t
        finally:
            if self.logger:
                self.logger.flush()

            if self._auto_save_plots and self.logger is not None:
                print("[Lander] Auto-generating plots...")
                self.save_plots()

    # --- Logging and plots ---

    def enable_logging(self, name: str | None = None) -> Path:
        """
        Create ``output_dir/<name>[_timestamp]/{logs,plots}`` and a CSVLogger.

        Raises
        ------
        ValueError
            If no simulation name is available
        """
        if name is not None:
            self._simulation_name = name

        if self._simulation_name is None:
            raise ValueError(
                "Simulation name required for logging. "
                "Either pass name to __init__ or to enable_logging()."
            )

        if self._auto_timestamp:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            folder_name = f"{self._simulation_name}_{timestamp}"
        else:
            folder_name = self._simulation_name

        self.output_path = self._output_dir / folder_name
        logs_dir = self.output_path / "logs"
        plots_dir = self.output_path / "plots"
        logs_dir.mkdir(parents=True, exist_ok=True)
        plots_dir.mkdir(parents=True, exist_ok=True)

        self.logger = CSVLogger(logs_dir / "simulation.csv")
        print(f"[Lander] Logging enabled: {self.output_path}")
        return self.output_path

    def disable_logging(self) -> None:
        if self.logger is not None:
            self.logger.close()
            self.logger = None
            print("[Lander] Logging disabled")

    def save_plots(self, show: bool = False) -> None:
        """
        Generate descent and trajectory plots from the logged CSV.

        Raises
        ------
        RuntimeError
            If logging is not enabled or nothing has been logged
        """
        if self.logger is None or self.output_path is None:
            raise RuntimeError(
                "Logging must be enabled to save plots. "
                "Call enable_logging() or use Lander.with_logging()."
            )

        from landersim.visualization.plotting import plot_descent, plot_trajectory_3d

        csv_path = self.output_path / "logs" / "simulation.csv"
        plots_dir = self.output_path / "plots"
        self.logger.flush()
        if not csv_path.exists():
            raise RuntimeError(
                f"No log file found at {csv_path}. Has the simulation been run yet?"
            )

        plot_descent(csv_path, save_path=plots_dir / "descent.png", show=show,
                     planet_radius=self.planet_radius)
        plot_trajectory_3d(csv_path, save_path=plots_dir / "trajectory_3d.png", show=show)
        print(f"[Lander] Plots saved to: {plots_dir}")

    def save_history(self, filepath: str | Path | None = None) -> Path:
        """
        Write the recorded per-step telemetry to CSV.

        Defaults to ``<output_path>/logs/history.csv`` when logging is
        enabled.

        Raises
        ------
        ValueError
            If no path is available or nothing was recorded
        """
        if filepath is None:
            if self.output_path is None:
                raise ValueError("No output folder; pass a filepath or enable logging.")
            filepath = self.output_path / "logs" / "history.csv"
        return save_simulation_history(self.history, filepath)
