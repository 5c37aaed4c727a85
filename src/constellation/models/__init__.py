"""Constellation data models."""

from constellation.models.graph import (
    NODE_KINDS,
    GraphEdge,
    GraphNode,
    GraphPayload,
    NodeKind,
    PositionedNode,
    VisibleLink,
    VisibleNode,
    make_edge_id,
)

__all__ = [
    "NODE_KINDS",
    "NodeKind",
    "GraphNode",
    "GraphEdge",
    "GraphPayload",
    "VisibleNode",
    "VisibleLink",
    "PositionedNode",
    "make_edge_id",
]
