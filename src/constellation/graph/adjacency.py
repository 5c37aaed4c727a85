"""Adjacency index shared by node selection, layout and highlighting."""

from collections.abc import Iterable

from constellation.models import GraphEdge, GraphNode

AdjacencyIndex = dict[str, set[str]]


def build_adjacency(edges: Iterable[GraphEdge]) -> AdjacencyIndex:
    """Build an undirected adjacency index from an edge list.

    Symmetric: if b is in index[a] then a is in index[b]. Endpoints that
    are not known nodes are still indexed.
    """
    adjacency: AdjacencyIndex = {}
    for edge in edges:
        adjacency.setdefault(edge.source, set()).add(edge.target)
        adjacency.setdefault(edge.target, set()).add(edge.source)
    return adjacency


def induced_adjacency(node_ids: Iterable[str], edges: Iterable[GraphEdge]) -> AdjacencyIndex:
    """Adjacency restricted to edges whose endpoints are both in node_ids.

    Every node id gets an entry, isolated nodes map to an empty set.
    """
    members = set(node_ids)
    adjacency: AdjacencyIndex = {nid: set() for nid in members}
    for edge in edges:
        if edge.source in members and edge.target in members:
            adjacency[edge.source].add(edge.target)
            adjacency[edge.target].add(edge.source)
    return adjacency


def neighbors(adjacency: AdjacencyIndex, node_id: str) -> list[str]:
    """Neighbours of a node in a stable (sorted) order for traversal."""
    return sorted(adjacency.get(node_id, ()))


def degree(adjacency: AdjacencyIndex, node_id: str) -> int:
    """Number of distinct neighbours of a node (0 if unknown)."""
    return len(adjacency.get(node_id, ()))


def rank_by_degree(nodes: list[GraphNode], adjacency: AdjacencyIndex) -> list[GraphNode]:
    """Sort nodes by descending degree. Ties keep their original order."""
    return sorted(nodes, key=lambda n: degree(adjacency, n.id), reverse=True)
