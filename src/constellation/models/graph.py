"""Graph models - word/sentence nodes and their associations."""

import math
from dataclasses import dataclass, field
from typing import Any, Literal

NodeKind = Literal["word", "sentence"]

NODE_KINDS: tuple[str, ...] = ("word", "sentence")


def make_edge_id(source: str, target: str) -> str:
    """Stable render key for an edge (ordered pair)."""
    return f"{source}->{target}"


def _parse_review_count(value: Any, node_id: Any) -> int | None:
    """Accept an int, or a finite float/numeric string. Anything else is malformed."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid review_count {value!r} for node {node_id}")
    if isinstance(value, int):
        return value
    if isinstance(value, (float, str)):
        try:
            number = float(value)
        except ValueError:
            raise ValueError(f"Invalid review_count {value!r} for node {node_id}") from None
        if math.isfinite(number):
            return int(number)
    raise ValueError(f"Invalid review_count {value!r} for node {node_id}")


@dataclass(frozen=True)
class GraphNode:
    """
    A word or sentence entity in the vocabulary graph.

    Immutable once fetched; identity is the id.
    """

    id: str
    label: str
    kind: NodeKind  # word, sentence

    review_count: int | None = None
    meaning: str | None = None
    color: str | None = None  # Sent by the backend, not used for painting

    def to_dict(self) -> dict:
        """Convert to the backend wire format."""
        return {
            "id": self.id,
            "label": self.label,
            "type": self.kind,
            "review_count": self.review_count,
            "meaning": self.meaning,
            "color": self.color,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GraphNode":
        """Create from the backend wire format.

        Accepts ``type``/``kind`` and ``review_count``/``reviewCount``.

        Raises:
            ValueError: If the node is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Graph node must be an object, got {type(data).__name__}")
        if data.get("id") is None or data.get("label") is None:
            raise ValueError(f"Graph node is missing id or label: {data}")

        kind = data.get("type", data.get("kind"))
        if kind not in NODE_KINDS:
            raise ValueError(f"Unknown node kind {kind!r} for node {data['id']}")

        review_count = data.get("review_count", data.get("reviewCount"))
        return cls(
            id=str(data["id"]),
            label=str(data["label"]),
            kind=kind,
            review_count=_parse_review_count(review_count, data["id"]),
            meaning=data.get("meaning"),
            color=data.get("color"),
        )


@dataclass(frozen=True)
class GraphEdge:
    """An undirected association between two nodes (e.g. word in sentence)."""

    source: str  # Wire "from"
    target: str  # Wire "to"

    @property
    def edge_id(self) -> str:
        return make_edge_id(self.source, self.target)

    def to_dict(self) -> dict:
        return {"from": self.source, "to": self.target}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GraphEdge":
        """Create from the backend wire format.

        Raises:
            ValueError: If the edge is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Graph edge must be an object, got {type(data).__name__}")
        if data.get("from") is None or data.get("to") is None:
            raise ValueError(f"Graph edge is missing from or to: {data}")
        return cls(source=str(data["from"]), target=str(data["to"]))


@dataclass
class GraphPayload:
    """Full graph as returned by ``GET /graph/``."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "GraphPayload":
        """Parse a response body. Missing keys mean an empty list.

        Raises:
            ValueError: If the payload is malformed
        """
        if not isinstance(data, dict):
            raise ValueError(f"Graph payload must be an object, got {type(data).__name__}")

        raw_nodes = data.get("nodes")
        raw_edges = data.get("edges")
        if raw_nodes is None:
            raw_nodes = []
        if raw_edges is None:
            raw_edges = []
        if not isinstance(raw_nodes, list) or not isinstance(raw_edges, list):
            raise ValueError("Graph payload nodes and edges must be lists")

        return cls(
            nodes=[GraphNode.from_dict(n) for n in raw_nodes],
            edges=[GraphEdge.from_dict(e) for e in raw_edges],
        )


@dataclass
class VisibleNode:
    """A node selected for rendering, with its position once laid out."""

    node: GraphNode
    name: str  # Render name (the label)

    x: float | None = None
    y: float | None = None

    # Pinned position, the simulation must not move the node while set
    fx: float | None = None
    fy: float | None = None

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def kind(self) -> NodeKind:
        return self.node.kind

    @property
    def is_pinned(self) -> bool:
        return self.fx is not None and self.fy is not None

    @classmethod
    def from_node(cls, node: GraphNode) -> "VisibleNode":
        return cls(node=node, name=node.label)


@dataclass(frozen=True)
class VisibleLink:
    """An edge whose endpoints are both visible."""

    id: str
    source: str
    target: str

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


@dataclass(frozen=True)
class PositionedNode:
    """Layout engine output: a node with a fixed seed position."""

    node: GraphNode
    x: float
    y: float
    fixed: bool = True

    @property
    def id(self) -> str:
        return self.node.id

    def to_visible(self) -> VisibleNode:
        """Convert to a pinned visible node."""
        return VisibleNode(
            node=self.node,
            name=self.node.label,
            x=self.x,
            y=self.y,
            fx=self.x if self.fixed else None,
            fy=self.y if self.fixed else None,
        )
