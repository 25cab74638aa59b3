"""
Lander components.

LanderConfig : mass, aerodynamic and engine parameters
ParachuteStatus : externally driven chute state
"""

from .lander import LanderConfig, ParachuteStatus

__all__ = ["LanderConfig", "ParachuteStatus"]
