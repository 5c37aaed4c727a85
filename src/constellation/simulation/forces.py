"""Force definitions for the numpy force engine.

Semantics follow d3-force, which the original canvas used:
- CenterForce shifts positions so their mean sits on a point
- RadialForce pulls nodes toward a circle of given radius
- LinkForce is a spring per link
- ManyBodyForce is pairwise charge (negative strength repels)

Forces act on the engine's velocity/position arrays in place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from constellation.simulation.engine import NumpyForceEngine


class Force:
    """Base force. Subclasses implement apply()."""

    def __init__(self) -> None:
        self.engine: NumpyForceEngine | None = None

    def initialize(self, engine: NumpyForceEngine) -> None:
        """Bind to an engine; called on add and whenever nodes change."""
        self.engine = engine

    def apply(self, alpha: float) -> None:
        raise NotImplementedError


class CenterForce(Force):
    """Translate all nodes so their centroid is (x, y)."""

    def __init__(self, x: float = 0.0, y: float = 0.0, strength: float = 1.0) -> None:
        super().__init__()
        self.x = x
        self.y = y
        self.strength = strength

    def apply(self, alpha: float) -> None:
        pos = self.engine.pos
        if not len(pos):
            return
        shift = (pos.mean(axis=0) - np.array([self.x, self.y])) * self.strength
        pos -= shift


class RadialForce(Force):
    """Pull nodes toward a circle of `radius` around (x, y)."""

    def __init__(self, radius: float, x: float = 0.0, y: float = 0.0, strength: float = 0.1) -> None:
        super().__init__()
        self.radius = radius
        self.x = x
        self.y = y
        self.strength = strength

    def apply(self, alpha: float) -> None:
        engine = self.engine
        if not len(engine.pos):
            return
        delta = engine.pos + engine.vel - np.array([self.x, self.y])
        r = np.hypot(delta[:, 0], delta[:, 1])
        r = np.where(r == 0, 1e-6, r)
        k = (self.radius - r) * self.strength * alpha / r
        engine.vel += delta * k[:, None]


class LinkForce(Force):
    """Spring force along links, d3 default strength and bias."""

    def __init__(self, links: list[tuple[str, str]], distance: float = 30.0) -> None:
        super().__init__()
        self.links = links
        self.distance = distance
        self._source = np.zeros(0, dtype=int)
        self._target = np.zeros(0, dtype=int)
        self._strength = np.zeros(0)
        self._bias = np.zeros(0)

    def initialize(self, engine: NumpyForceEngine) -> None:
        super().initialize(engine)
        index = engine.index
        pairs = [
            (index[s], index[t])
            for s, t in self.links
            if s in index and t in index and s != t
        ]
        if not pairs:
            self._source = np.zeros(0, dtype=int)
            self._target = np.zeros(0, dtype=int)
            return

        self._source = np.array([p[0] for p in pairs], dtype=int)
        self._target = np.array([p[1] for p in pairs], dtype=int)

        count = np.bincount(
            np.concatenate([self._source, self._target]), minlength=len(index)
        ).astype(float)
        cs, ct = count[self._source], count[self._target]
        self._strength = 1.0 / np.minimum(cs, ct)
        self._bias = cs / (cs + ct)

    def apply(self, alpha: float) -> None:
        if not len(self._source):
            return
        engine = self.engine
        s, t = self._source, self._target

        delta = (engine.pos[t] + engine.vel[t]) - (engine.pos[s] + engine.vel[s])
        length = np.hypot(delta[:, 0], delta[:, 1])
        safe = np.where(length == 0, 1.0, length)
        scale = np.where(length == 0, 0.0, (length - self.distance) / safe * alpha * self._strength)
        delta *= scale[:, None]

        np.add.at(engine.vel, t, -delta * self._bias[:, None])
        np.add.at(engine.vel, s, delta * (1 - self._bias)[:, None])


class ManyBodyForce(Force):
    """Exact pairwise charge. Negative strength repels.

    Pairs are evaluated in row blocks of at most max_pairs entries, so a
    tick over n nodes allocates O(max_pairs) rather than O(n * n).
    """

    def __init__(
        self,
        strength: float = -30.0,
        distance_min: float = 1.0,
        distance_max: float = float("inf"),
        max_pairs: int = 1 << 18,
    ) -> None:
        super().__init__()
        self.strength = strength
        self.distance_min2 = distance_min * distance_min
        self.distance_max2 = distance_max * distance_max
        self.max_pairs = max_pairs

    def apply(self, alpha: float) -> None:
        pos = self.engine.pos
        n = len(pos)
        if n < 2:
            return

        vel = self.engine.vel
        step = max(1, self.max_pairs // n)
        for start in range(0, n, step):
            stop = min(start + step, n)

            # delta[i, j] points from node start + i to node j
            delta = pos[None, :, :] - pos[start:stop, None, :]
            l2 = (delta ** 2).sum(axis=2)
            l2 = np.where(l2 < self.distance_min2, np.sqrt(self.distance_min2 * l2), l2)

            active = (l2 > 0) & (l2 < self.distance_max2)
            weight = np.zeros_like(l2)
            weight[active] = self.strength * alpha / l2[active]

            vel[start:stop] += (delta * weight[:, :, None]).sum(axis=1)
