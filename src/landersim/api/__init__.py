from .scenario import CONTROLLER_PRESETS, Scenario

__all__ = ["Scenario", "CONTROLLER_PRESETS"]
