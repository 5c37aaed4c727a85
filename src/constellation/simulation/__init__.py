"""Physics simulation: forces, engine and the settle/freeze driver."""

from constellation.simulation.driver import (
    FORCE_ATTRACT,
    FORCE_CENTER,
    FORCE_CHARGE,
    FORCE_LINK,
    SETTLE_FORCES,
    ForceSimulationDriver,
    settle_delay,
)
from constellation.simulation.engine import ForceEngine, NumpyForceEngine
from constellation.simulation.forces import (
    CenterForce,
    Force,
    LinkForce,
    ManyBodyForce,
    RadialForce,
)

__all__ = [
    # Forces
    "Force",
    "CenterForce",
    "RadialForce",
    "LinkForce",
    "ManyBodyForce",
    # Engine
    "ForceEngine",
    "NumpyForceEngine",
    # Driver
    "ForceSimulationDriver",
    "settle_delay",
    "FORCE_CENTER",
    "FORCE_ATTRACT",
    "FORCE_CHARGE",
    "FORCE_LINK",
    "SETTLE_FORCES",
]
