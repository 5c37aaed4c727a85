"""Click-to-highlight state machine.

States: Idle, or Highlighted(active node). A click installs a new
highlight and (re)arms the expiry timer; expiry returns to Idle. The
state object is replaced as a whole so readers never see the node set of
one click with the link set of another.
"""

import logging
from dataclasses import dataclass

from constellation.config import settings
from constellation.graph.adjacency import AdjacencyIndex
from constellation.models import VisibleLink
from constellation.scheduling import Cancellable, Scheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightState:
    """Snapshot of what is highlighted."""

    active_node_id: str | None = None
    highlighted_node_ids: frozenset[str] = frozenset()
    highlighted_link_ids: frozenset[str] = frozenset()

    @property
    def is_idle(self) -> bool:
        return self.active_node_id is None

    def is_node_highlighted(self, node_id: str) -> bool:
        return node_id in self.highlighted_node_ids

    def is_link_highlighted(self, link_id: str) -> bool:
        return link_id in self.highlighted_link_ids


IDLE = HighlightState()


def compute_highlight(node_id: str, adjacency: AdjacencyIndex, links: list[VisibleLink]) -> HighlightState:
    """Highlight for a clicked node: itself, its neighbours, its links."""
    node_ids = frozenset({node_id} | adjacency.get(node_id, set()))
    link_ids = frozenset(link.id for link in links if link.touches(node_id))
    return HighlightState(node_id, node_ids, link_ids)


class HighlightController:
    """Owns highlight state, hover state and the expiry timer."""

    def __init__(
        self,
        adjacency: AdjacencyIndex,
        links: list[VisibleLink],
        scheduler: Scheduler,
        timeout: float | None = None,
    ) -> None:
        self.adjacency = adjacency
        self.links = links
        self.scheduler = scheduler
        self.timeout = timeout or settings.highlight_timeout

        self.state: HighlightState = IDLE
        self.hovered_node_id: str | None = None

        self._timer: Cancellable | None = None
        self._generation = 0

    def click(self, node_id: str | None) -> HighlightState:
        """Highlight a node and its neighbourhood, re-arming the expiry."""
        if not node_id:
            return self.state

        self._cancel_timer()
        self._generation += 1
        generation = self._generation

        self.state = compute_highlight(node_id, self.adjacency, self.links)
        self._timer = self.scheduler.call_later(self.timeout, lambda: self._expire(generation))

        logger.debug(
            f"Highlight {node_id}: {len(self.state.highlighted_node_ids)} nodes, "
            f"{len(self.state.highlighted_link_ids)} links"
        )
        return self.state

    def _expire(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._timer = None
        self.state = IDLE

    def reset(self, adjacency: AdjacencyIndex, links: list[VisibleLink]) -> None:
        """The visible graph changed: drop any highlight."""
        self._cancel_timer()
        self._generation += 1
        self.adjacency = adjacency
        self.links = links
        self.state = IDLE

    def hover(self, node_id: str | None) -> None:
        self.hovered_node_id = node_id or None

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def dispose(self) -> None:
        self._cancel_timer()
        self._generation += 1
