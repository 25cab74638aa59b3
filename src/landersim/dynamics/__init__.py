from .atmosphere import ExponentialAtmosphere, atmospheric_density, vacuum
from .forces import ForceModel, InverseSquareGravity, QuadraticDrag, no_thrust
from .thrust import Attitude, AttitudeStabilizer, EngineThrust, FixedAttitude
