"""Connected-component partitioning of the visible graph."""

from collections import deque

from constellation.graph.adjacency import induced_adjacency, neighbors
from constellation.models import GraphEdge, GraphNode


def find_connected_components(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
) -> list[list[GraphNode]]:
    """Partition nodes into connected components.

    Only edges between two of the given nodes count. Isolated nodes form
    singleton components. Components are sorted largest first (stable), and
    nodes inside a component are in BFS order from its first node.
    """
    node_by_id: dict[str, GraphNode] = {}
    for node in nodes:
        node_by_id.setdefault(node.id, node)
    adjacency = induced_adjacency(node_by_id, edges)

    visited: set[str] = set()
    components: list[list[GraphNode]] = []

    for node in node_by_id.values():
        if node.id in visited:
            continue

        component: list[GraphNode] = []
        queue = deque([node.id])
        visited.add(node.id)
        while queue:
            current_id = queue.popleft()
            component.append(node_by_id[current_id])
            for neighbor_id in neighbors(adjacency, current_id):
                if neighbor_id not in visited:
                    visited.add(neighbor_id)
                    queue.append(neighbor_id)

        components.append(component)

    return sorted(components, key=len, reverse=True)
