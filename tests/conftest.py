"""Pytest configuration and fixtures."""

import heapq
import itertools
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from constellation.client import GraphClient
from constellation.config import Settings, get_test_settings
from constellation.models import GraphEdge, GraphNode, GraphPayload
from constellation.simulation import NumpyForceEngine


class ManualHandle:
    """Timer handle of the manual scheduler."""

    def __init__(self, when: float, callback: Callable[[], None], interval: float | None = None) -> None:
        self.when = when
        self.callback = callback
        self.interval = interval
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Virtual-clock scheduler: time only moves on advance()."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = start
        self._queue: list[tuple[float, int, ManualHandle]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    def _push(self, handle: ManualHandle) -> None:
        heapq.heappush(self._queue, (handle.when, next(self._seq), handle))

    def call_later(self, delay: float, callback: Callable[[], None]) -> ManualHandle:
        handle = ManualHandle(self._now + max(0.0, delay), callback)
        self._push(handle)
        return handle

    def call_every(self, interval: float, callback: Callable[[], None]) -> ManualHandle:
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        handle = ManualHandle(self._now + interval, callback, interval)
        self._push(handle)
        return handle

    def advance(self, seconds: float) -> None:
        """Run every callback due within the next `seconds`, in time order."""
        target = self._now + seconds
        while self._queue and self._queue[0][0] <= target + 1e-9:
            when, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now = max(self._now, when)
            if handle.interval is not None:
                handle.when = when + handle.interval
                self._push(handle)
            handle.callback()
        self._now = target

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if not h.cancelled)


def word(node_id: str, label: str | None = None, review_count: int | None = None) -> GraphNode:
    return GraphNode(id=node_id, label=label or node_id, kind="word", review_count=review_count)


def sentence(node_id: str, label: str | None = None, review_count: int | None = None) -> GraphNode:
    return GraphNode(id=node_id, label=label or node_id, kind="sentence", review_count=review_count)


def edges_of(*pairs: tuple[str, str]) -> list[GraphEdge]:
    return [GraphEdge(source=s, target=t) for s, t in pairs]


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with short timings."""
    return get_test_settings()


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Virtual-clock scheduler."""
    return ManualScheduler()


@pytest.fixture
def sample_nodes() -> list[GraphNode]:
    """Two words sharing a sentence, a pair, and an isolated word."""
    return [
        word("w1", "apple"),
        word("w2", "banana"),
        sentence("s1", "I like apple and banana", review_count=2),
        word("w3", "cherry"),
        word("w4", "durian"),
        word("w5", "elderberry"),
    ]


@pytest.fixture
def sample_edges() -> list[GraphEdge]:
    return edges_of(("w1", "s1"), ("w2", "s1"), ("w3", "w4"))


@pytest.fixture
def sample_payload(sample_nodes: list[GraphNode], sample_edges: list[GraphEdge]) -> GraphPayload:
    return GraphPayload(nodes=sample_nodes, edges=sample_edges)


@pytest.fixture
def mock_client(sample_payload: GraphPayload) -> GraphClient:
    """Mock graph client returning the sample graph."""
    client = MagicMock(spec=GraphClient)
    client.fetch_graph = AsyncMock(return_value=sample_payload)
    return client


@pytest.fixture
def mock_engine() -> NumpyForceEngine:
    """Mock force engine recording driver calls."""
    engine = MagicMock(spec=NumpyForceEngine)
    engine.tick.return_value = True
    engine.positions.return_value = {}
    return engine
