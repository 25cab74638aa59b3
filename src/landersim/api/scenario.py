"""
Scenario API: Fluent interface for defining and running lander runs.
"""
from __future__ import annotations

from pathlib import Path

from landersim.components.lander import LanderConfig, ParachuteStatus
from landersim.core.simulation import Lander
from landersim.scenarios import SimulationOptions, scenario_descriptor

CONTROLLER_PRESETS = {
    "manual": {"controller": "none", "autopilot_enabled": False},
    "autopilot": {"controller": "gain_scheduled", "autopilot_enabled": True},
    "proportional": {"controller": "proportional", "autopilot_enabled": True},
}


class Scenario:
    """
    Fluent wrapper around ``Lander`` for one scenario slot.

    The scenario index is validated immediately; nothing is built until
    ``run`` so configuration calls can come in any order.

    Examples
    --------
    >>> Scenario(1, name="descent").use_preset("autopilot").run(duration=1000.0)
    """
    def __init__(self, index: int, name: str | None = None, output_dir: str = "output",
                 log: bool = True, config: LanderConfig | None = None):
        scenario_descriptor(index)  # raises ConfigurationError early
        self.index = index
        self.name = name if name is not None else f"scenario_{index}"
        self.output_dir = Path(output_dir)
        self.log = log
        self.config = config
        self._options: dict = {"scenario_index": index}
        self._parachute: ParachuteStatus | None = None
        self._fuel: float | None = None
        self._show_plots = False
        self._save_plots = False
        self.lander: Lander | None = None

    def use_preset(self, preset: str) -> 'Scenario':
        """Presets: 'manual', 'autopilot', 'proportional'."""
        if preset not in CONTROLLER_PRESETS:
            raise ValueError(
                f"Unknown preset '{preset}'. Valid options: {', '.join(CONTROLLER_PRESETS)}"
            )
        self._options.update(CONTROLLER_PRESETS[preset])
        return self

    def configure(self, **kwargs) -> 'Scenario':
        """
        Override options. Kwargs: delta_t, autopilot_enabled,
        stabilized_attitude, controller.
        """
        self._options.update(kwargs)
        return self

    def deploy_parachute(self) -> 'Scenario':
        self._parachute = ParachuteStatus.DEPLOYED
        return self

    def set_fuel(self, fraction: float) -> 'Scenario':
        self._fuel = fraction
        return self

    def enable_plotting(self, show: bool = False) -> 'Scenario':
        self._save_plots = True
        self._show_plots = show
        return self

    @property
    def options(self) -> SimulationOptions:
        return SimulationOptions(**self._options)

    def build(self) -> Lander:
        kwargs = {}
        if self.log:
            kwargs.update(simulation_name=self.name, output_dir=self.output_dir)
        lander = Lander.from_options(self.options, config=self.config, **kwargs)
        if self._parachute is not None:
            lander.parachute_status = self._parachute
        if self._fuel is not None:
            lander.set_fuel(self._fuel)
        self.lander = lander
        return lander

    def run(self, duration: float = 1000.0, log_interval: float = 10.0) -> 'Scenario':
        lander = self.build()
        opts = self.options
        print(f"Running Scenario {self.index}: {lander.scenario.description if lander.scenario else '(empty)'}")
        print(f"[Scenario] controller={opts.controller}, autopilot={lander.autopilot_enabled}, "
              f"dt={lander.clock.delta_t}")
        lander.run(duration, log_interval=log_interval)

        if self._save_plots and lander.logger is not None:
            print("[Scenario] Generating plots...")
            lander.save_plots(show=self._show_plots)
        if lander.logger is not None:
            lander.logger.close()
        return self
