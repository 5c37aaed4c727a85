"""Constellation graph view.

Orchestrates one view session:
1. Fetch the full graph (loading -> ready | error)
2. Select a connected subset of nodes and derive the visible links
3. Seed the component layout and hand it to the simulation driver
4. Route clicks and hover to the highlight controller
5. Produce paint frames for the canvas, repainted by the sparkle pulse
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from constellation.client import GraphClient, GraphFetchError
from constellation.config import settings
from constellation.graph import AdjacencyIndex, assign_fixed_positions, build_adjacency, select_connected_nodes
from constellation.interaction import HighlightController, HighlightState, PulseTicker
from constellation.models import GraphEdge, GraphNode, VisibleLink, VisibleNode, make_edge_id
from constellation.render import Camera, DrawCommand, LinkStyle, Renderer, ViewTransform
from constellation.scheduling import Scheduler
from constellation.simulation import ForceEngine, ForceSimulationDriver, NumpyForceEngine

logger = logging.getLogger(__name__)

LOADING_MESSAGE = "Spooling the night sky..."
ERROR_MESSAGE = "We lost sight of the stars."


class ViewStatus(str, Enum):
    """What the view is showing."""

    LOADING = "loading"
    ERROR = "error"
    READY = "ready"


@dataclass
class Frame:
    """Everything needed to draw one frame."""

    now_millis: float
    transform: ViewTransform
    links: list[tuple[VisibleLink, LinkStyle]] = field(default_factory=list)
    nodes: dict[str, list[DrawCommand]] = field(default_factory=dict)


class GraphView:
    """Owns the graph state of one view session."""

    def __init__(
        self,
        client: GraphClient,
        scheduler: Scheduler,
        driver: ForceSimulationDriver | None = None,
        renderer: Renderer | None = None,
        camera: Camera | None = None,
        max_visible_nodes: int | None = None,
        batch_size: int | None = None,
        on_redraw: Callable[[], None] | None = None,
    ) -> None:
        self.client = client
        self.scheduler = scheduler
        self.driver = driver or ForceSimulationDriver(scheduler)
        self.renderer = renderer or Renderer()
        self.camera = camera or Camera()
        self.batch_size = batch_size or settings.batch_size
        self.on_redraw = on_redraw

        # None renders the whole graph
        self.visible_limit: int | None = max_visible_nodes or settings.max_visible_nodes

        self.status = ViewStatus.LOADING
        self.error: str | None = None

        self.all_nodes: list[GraphNode] = []
        self.all_edges: list[GraphEdge] = []
        self.adjacency: AdjacencyIndex = {}
        self.visible_nodes: list[VisibleNode] = []
        self.visible_links: list[VisibleLink] = []

        self.highlight = HighlightController(self.adjacency, self.visible_links, scheduler)
        self.pulse = PulseTicker(scheduler, self._on_pulse)
        self.redraws = 0

        self.engine: ForceEngine | None = None
        self._generation = 0
        self._disposed = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def status_message(self) -> str | None:
        if self.status == ViewStatus.LOADING:
            return LOADING_MESSAGE
        if self.status == ViewStatus.ERROR:
            return ERROR_MESSAGE
        return None

    @property
    def target_count(self) -> int:
        if self.visible_limit is None:
            return len(self.all_nodes)
        return min(self.visible_limit, len(self.all_nodes))

    async def load(self) -> None:
        """Fetch the graph and build the visible state.

        A fetch that finishes after dispose() or after a newer load() is
        dropped without touching state.
        """
        self._generation += 1
        generation = self._generation
        self.status = ViewStatus.LOADING
        self.error = None

        try:
            payload = await self.client.fetch_graph()
        except GraphFetchError as e:
            if self._is_stale(generation):
                return
            logger.warning(f"Graph view failed to load: {e.message}")
            self.error = e.message
            self.status = ViewStatus.ERROR
            return

        if self._is_stale(generation):
            logger.debug("Discarding stale graph fetch")
            return

        self.all_nodes = payload.nodes
        self.all_edges = payload.edges
        self.adjacency = build_adjacency(self.all_edges)
        self.driver.reset_fit()
        self._recompute()
        self.status = ViewStatus.READY
        logger.info(
            f"Graph view ready: {len(self.visible_nodes)}/{len(self.all_nodes)} nodes, "
            f"{len(self.visible_links)} links"
        )

    def _is_stale(self, generation: int) -> bool:
        return self._disposed or generation != self._generation

    def show_more(self) -> bool:
        """Reveal another batch of nodes. Returns False when all are visible."""
        if self.visible_limit is None or self.visible_limit >= len(self.all_nodes):
            return False
        self.visible_limit += self.batch_size
        self._recompute()
        return True

    def _recompute(self) -> None:
        selected = select_connected_nodes(self.all_nodes, self.all_edges, self.target_count)
        selected_ids = {n.id for n in selected}

        self.visible_links = [
            VisibleLink(id=make_edge_id(e.source, e.target), source=e.source, target=e.target)
            for e in self.all_edges
            if e.source in selected_ids and e.target in selected_ids
        ]

        positioned = {p.id: p for p in assign_fixed_positions(selected, self.all_edges)}
        self.visible_nodes = [positioned[n.id].to_visible() for n in selected]

        logger.debug(f"Visible: {len(self.visible_nodes)} nodes, {len(self.visible_links)} links")

        self.highlight.reset(self.adjacency, self.visible_links)
        self.driver.load(self.visible_nodes, self.visible_links, len(self.all_nodes), len(self.all_edges))

    # ------------------------------------------------------------------
    # Canvas
    # ------------------------------------------------------------------

    def mount(self, engine: ForceEngine | None = None) -> ForceEngine:
        """Canvas is ready: attach a force engine and start the pulse."""
        if engine is None:
            engine = NumpyForceEngine(camera=self.camera, clock=self.scheduler.now)
        self.engine = engine
        self.driver.attach(engine)
        self.pulse.start()
        return engine

    def _on_pulse(self) -> None:
        self.redraws += 1
        if self.on_redraw is not None:
            self.on_redraw()

    def positions(self) -> dict[str, tuple[float, float]]:
        """Current node positions, the seed layout until an engine runs."""
        seeds = {n.id: (n.x, n.y) for n in self.visible_nodes if n.x is not None and n.y is not None}
        if self.engine is None:
            return seeds
        seeds.update(self.engine.positions())
        return seeds

    def paint(self, now_millis: float | None = None) -> Frame:
        if now_millis is None:
            now_millis = self.scheduler.now() * 1000
        transform = self.camera.at(now_millis)
        state = self.highlight.state
        positions = self.positions()
        hovered = self.highlight.hovered_node_id

        frame = Frame(now_millis=now_millis, transform=transform)
        for link in self.visible_links:
            frame.links.append((link, self.renderer.paint_link(link, state, now_millis)))
        for node in self.visible_nodes:
            x, y = positions.get(node.id, (None, None))
            frame.nodes[node.id] = self.renderer.paint_node(
                node, x, y, state, now_millis, transform.k, hovered=node.id == hovered
            )
        return frame

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    @property
    def highlight_state(self) -> HighlightState:
        return self.highlight.state

    def node_at(self, x: float, y: float) -> VisibleNode | None:
        """Topmost node under a world-space point."""
        positions = self.positions()
        for node in reversed(self.visible_nodes):
            nx, ny = positions.get(node.id, (None, None))
            if self.renderer.hit_test(node, nx, ny, x, y):
                return node
        return None

    def handle_node_click(self, node_id: str | None) -> HighlightState:
        return self.highlight.click(node_id)

    def handle_node_hover(self, node_id: str | None) -> None:
        self.highlight.hover(node_id)

    def dispose(self) -> None:
        """Tear down: stale fetches are ignored and all timers cancelled."""
        self._disposed = True
        self._generation += 1
        self.pulse.stop()
        self.highlight.dispose()
        self.driver.dispose()
        self.driver.detach()
        self.engine = None
