from .clock import SimulationClock
from .integrator import PhysicsState, PositionVerlet
from .simulation import Lander
