"""Force layout engine.

The driver only talks to the small ForceEngine interface, so the physics
backend can be swapped and the settle/freeze scheduling tested without a
real simulation. NumpyForceEngine is the default backend: a d3-force style
velocity Verlet integrator with alpha cooling.
"""

import logging
import math
import time
from collections.abc import Callable
from typing import Protocol

import numpy as np

from constellation.config import settings
from constellation.models import VisibleNode
from constellation.render.camera import Bounds, Camera
from constellation.simulation.forces import Force

logger = logging.getLogger(__name__)

# d3 phyllotaxis seed for nodes without a position
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


class ForceEngine(Protocol):
    """What the simulation driver needs from a physics engine."""

    alpha: float

    def set_nodes(self, nodes: list[VisibleNode]) -> None: ...

    def add_force(self, name: str, force: Force) -> None: ...

    def remove_force(self, name: str) -> None: ...

    def has_force(self, name: str) -> bool: ...

    def tick(self) -> bool: ...

    def fit_view(self, padding: float, duration_ms: float) -> None: ...

    def positions(self) -> dict[str, tuple[float, float]]: ...

    def release_pins(self) -> None: ...

    def pin_all(self) -> None: ...

    @property
    def cooled(self) -> bool: ...


class NumpyForceEngine:
    """Numpy-backed force simulation with a camera."""

    def __init__(
        self,
        camera: Camera | None = None,
        clock: Callable[[], float] | None = None,
        alpha_decay: float | None = None,
        velocity_decay: float | None = None,
        alpha_min: float | None = None,
        cooldown_ticks: int | None = None,
        cooldown_time: float | None = None,
    ) -> None:
        self.camera = camera or Camera()
        self.clock = clock or time.monotonic
        self.alpha_decay = alpha_decay or settings.alpha_decay
        self.velocity_decay = velocity_decay or settings.velocity_decay
        self.alpha_min = alpha_min or settings.alpha_min
        self.cooldown_ticks = cooldown_ticks or settings.cooldown_ticks
        self.cooldown_time = cooldown_time or settings.cooldown_time

        self.alpha = 1.0
        self.alpha_target = 0.0
        self.ticks = 0
        self._started_at = self.clock()

        self.ids: list[str] = []
        self.index: dict[str, int] = {}
        self.pos = np.zeros((0, 2))
        self.vel = np.zeros((0, 2))
        self.fixed = np.zeros(0, dtype=bool)
        self.fixed_pos = np.zeros((0, 2))

        self._forces: dict[str, Force] = {}

    def set_nodes(self, nodes: list[VisibleNode]) -> None:
        """Replace the simulated node set and restart the simulation.

        Nodes keep their x/y seed when present; fx/fy pin them.
        """
        self.ids = [n.id for n in nodes]
        self.index = {nid: i for i, nid in enumerate(self.ids)}

        count = len(nodes)
        self.pos = np.zeros((count, 2))
        self.vel = np.zeros((count, 2))
        self.fixed = np.zeros(count, dtype=bool)
        self.fixed_pos = np.zeros((count, 2))

        for i, node in enumerate(nodes):
            if node.x is not None and node.y is not None:
                self.pos[i] = (node.x, node.y)
            else:
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                self.pos[i] = (radius * math.cos(angle), radius * math.sin(angle))
            if node.is_pinned:
                self.fixed[i] = True
                self.fixed_pos[i] = (node.fx, node.fy)
                self.pos[i] = (node.fx, node.fy)

        for force in self._forces.values():
            force.initialize(self)
        self.reheat()
        logger.debug(f"Simulating {count} nodes ({int(self.fixed.sum())} pinned)")

    def reheat(self) -> None:
        self.alpha = 1.0
        self.ticks = 0
        self._started_at = self.clock()

    def add_force(self, name: str, force: Force) -> None:
        force.initialize(self)
        self._forces[name] = force

    def remove_force(self, name: str) -> None:
        self._forces.pop(name, None)

    def has_force(self, name: str) -> bool:
        return name in self._forces

    def force(self, name: str) -> Force | None:
        return self._forces.get(name)

    @property
    def cooled(self) -> bool:
        """True once the simulation should stop ticking."""
        return (
            self.alpha < self.alpha_min
            or self.ticks >= self.cooldown_ticks
            or self.clock() - self._started_at >= self.cooldown_time
        )

    def tick(self) -> bool:
        """Advance one step. Returns False when already cooled."""
        if self.cooled:
            return False

        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        for force in self._forces.values():
            force.apply(self.alpha)

        self.vel *= 1 - self.velocity_decay
        self.pos += self.vel
        if self.fixed.any():
            self.pos[self.fixed] = self.fixed_pos[self.fixed]
            self.vel[self.fixed] = 0.0

        self.ticks += 1
        return True

    def release_pins(self) -> None:
        """Let every node move under the forces."""
        self.fixed[:] = False

    def pin_all(self) -> None:
        """Freeze every node where it currently is."""
        self.fixed[:] = True
        self.fixed_pos = self.pos.copy()
        self.vel[:] = 0.0

    def positions(self) -> dict[str, tuple[float, float]]:
        return {nid: (float(self.pos[i, 0]), float(self.pos[i, 1])) for nid, i in self.index.items()}

    def fit_view(self, padding: float, duration_ms: float) -> None:
        """Animate the camera so every node is on screen."""
        bounds = Bounds.from_points(self.positions().values())
        self.camera.zoom_to_fit(bounds, padding, duration_ms, self.clock() * 1000)
