"""Force simulation driver: seed, settle, freeze, fit.

Lifecycle per visible node set (seed-then-freeze):
1. Seed the engine with the component layout and release the pins
2. Run charge/link/center/attract forces on the frame timer
3. After (node_count + edge_count) * settle_ms_per_element, remove the
   charge, link and center forces and pin every node where it stands
4. Once per graph load, fit the camera to the nodes after fit_view_delay

The engine may be attached after the graph is loaded (the canvas mounts
asynchronously). Until it is, the settle step and the camera fit poll on
a short interval.
"""

import logging

from constellation.config import settings
from constellation.models import VisibleLink, VisibleNode
from constellation.scheduling import Cancellable, Scheduler
from constellation.simulation.engine import ForceEngine
from constellation.simulation.forces import CenterForce, LinkForce, ManyBodyForce, RadialForce

logger = logging.getLogger(__name__)

FORCE_CENTER = "center"
FORCE_ATTRACT = "attract"
FORCE_CHARGE = "charge"
FORCE_LINK = "link"

# Removed at freeze; the weak radial attraction stays
SETTLE_FORCES = (FORCE_CHARGE, FORCE_LINK, FORCE_CENTER)


def settle_delay(node_count: int, edge_count: int, ms_per_element: float | None = None) -> float:
    """Seconds the forces run before the layout is frozen."""
    ms_per_element = ms_per_element if ms_per_element is not None else settings.settle_ms_per_element
    return (node_count + edge_count) * ms_per_element / 1000


class ForceSimulationDriver:
    """Owns the force engine handle and all simulation timers."""

    def __init__(
        self,
        scheduler: Scheduler,
        settle_ms_per_element: float | None = None,
        initial_delay: float | None = None,
        poll_interval: float | None = None,
        fit_delay: float | None = None,
        fit_padding: float | None = None,
        fit_duration_ms: float | None = None,
        frame_interval: float | None = None,
    ) -> None:
        self.scheduler = scheduler
        self.settle_ms_per_element = settle_ms_per_element or settings.settle_ms_per_element
        self.initial_delay = initial_delay or settings.settle_initial_delay
        self.poll_interval = poll_interval or settings.engine_poll_interval
        self.fit_delay = fit_delay or settings.fit_view_delay
        self.fit_padding = fit_padding or settings.fit_view_padding
        self.fit_duration_ms = fit_duration_ms or settings.fit_view_duration_ms
        self.frame_interval = frame_interval or settings.frame_interval

        self.engine: ForceEngine | None = None
        self.nodes: list[VisibleNode] = []
        self.links: list[VisibleLink] = []

        self.frozen = False
        self.armed_delay: float | None = None  # Freeze delay of the current arm

        self._fit_pending = True
        self._settle_handle: Cancellable | None = None
        self._fit_handle: Cancellable | None = None
        self._frame_handle: Cancellable | None = None

    # ------------------------------------------------------------------
    # Engine handle
    # ------------------------------------------------------------------

    def attach(self, engine: ForceEngine) -> None:
        """Engine became available (canvas mounted)."""
        self.engine = engine
        engine.add_force(FORCE_CENTER, CenterForce(0.0, 0.0))
        engine.add_force(FORCE_ATTRACT, RadialForce(settings.radial_radius, 0.0, 0.0, settings.radial_strength))
        logger.info("Force engine attached")

        if self.nodes:
            self._seed_engine()

    def detach(self) -> None:
        self._stop_frames()
        self.engine = None

    # ------------------------------------------------------------------
    # Graph load
    # ------------------------------------------------------------------

    def reset_fit(self) -> None:
        """Allow one more camera fit (called after each successful fetch)."""
        self._fit_pending = True

    def load(
        self,
        nodes: list[VisibleNode],
        links: list[VisibleLink],
        node_count: int,
        edge_count: int,
    ) -> None:
        """
        Start simulating a new visible node set.

        Args:
            nodes: Visible nodes carrying their seed layout
            links: Visible links
            node_count: Node count used for the settle delay
            edge_count: Edge count used for the settle delay
        """
        self.nodes = nodes
        self.links = links
        self.frozen = False

        if not nodes:
            self._cancel_settle()
            self._stop_frames()
            self.armed_delay = None
            return

        if self.engine is not None:
            self._seed_engine()
        self._arm_settle(settle_delay(node_count, edge_count, self.settle_ms_per_element))

        if self._fit_pending:
            self._fit_pending = False
            self._cancel_fit()
            self._fit_handle = self.scheduler.call_later(self.fit_delay, self._fit_view)

    def _seed_engine(self) -> None:
        engine = self.engine
        engine.set_nodes(self.nodes)
        if self.frozen:
            engine.pin_all()
            return

        engine.release_pins()
        engine.add_force(FORCE_CENTER, CenterForce(0.0, 0.0))
        engine.add_force(FORCE_CHARGE, ManyBodyForce(settings.charge_strength))
        engine.add_force(
            FORCE_LINK,
            LinkForce([(link.source, link.target) for link in self.links], settings.link_distance),
        )
        self._start_frames()

    # ------------------------------------------------------------------
    # Settle / freeze
    # ------------------------------------------------------------------

    def _arm_settle(self, delay: float) -> None:
        self._cancel_settle()
        self.armed_delay = delay
        self._settle_handle = self.scheduler.call_later(self.initial_delay, lambda: self._check_engine(delay))

    def _check_engine(self, delay: float) -> None:
        if self.engine is None:
            logger.debug("Force engine not mounted yet, polling")
            self._settle_handle = self.scheduler.call_later(self.poll_interval, lambda: self._check_engine(delay))
            return

        logger.info(f"Freezing forces in {delay:.1f}s")
        self._settle_handle = self.scheduler.call_later(delay, self._freeze)

    def _freeze(self) -> None:
        self._settle_handle = None
        engine = self.engine
        if engine is None:
            return

        for name in SETTLE_FORCES:
            engine.remove_force(name)
        engine.pin_all()
        self._stop_frames()
        self.frozen = True
        logger.info(f"Forces stopped, layout frozen ({len(self.nodes)} nodes)")

    def _cancel_settle(self) -> None:
        if self._settle_handle is not None:
            self._settle_handle.cancel()
            self._settle_handle = None

    # ------------------------------------------------------------------
    # Camera fit
    # ------------------------------------------------------------------

    def _fit_view(self) -> None:
        if self.engine is None:
            logger.debug("Force engine not mounted yet, deferring fit")
            self._fit_handle = self.scheduler.call_later(self.poll_interval, self._fit_view)
            return
        self._fit_handle = None
        self.engine.fit_view(self.fit_padding, self.fit_duration_ms)

    def _cancel_fit(self) -> None:
        if self._fit_handle is not None:
            self._fit_handle.cancel()
            self._fit_handle = None

    # ------------------------------------------------------------------
    # Frame loop
    # ------------------------------------------------------------------

    def _start_frames(self) -> None:
        self._stop_frames()
        self._frame_handle = self.scheduler.call_every(self.frame_interval, self._on_frame)

    def _stop_frames(self) -> None:
        if self._frame_handle is not None:
            self._frame_handle.cancel()
            self._frame_handle = None

    def _on_frame(self) -> None:
        if self.engine is None or not self.engine.tick():
            self._stop_frames()

    @property
    def running(self) -> bool:
        return self._frame_handle is not None

    def dispose(self) -> None:
        """Cancel every pending timer."""
        self._cancel_settle()
        self._stop_frames()
        self._cancel_fit()
