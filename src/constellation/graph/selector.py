"""Connectivity-aware selection of the nodes to render.

Random sampling of a large graph yields disconnected fragments. Selection
instead grows breadth-first from the best connected nodes, so the bounded
subset stays explorable:

1. Rank nodes by degree (descending, ties in original order)
2. Seed a BFS from the best ranked node that is not yet selected
3. Expand through unselected neighbours until the queue empties or the
   target is reached, then seed again
4. Fill any remaining slots with unselected nodes in original order
"""

import logging
from collections import deque

from constellation.graph.adjacency import build_adjacency, neighbors, rank_by_degree
from constellation.models import GraphEdge, GraphNode

logger = logging.getLogger(__name__)


def select_connected_nodes(
    all_nodes: list[GraphNode],
    all_edges: list[GraphEdge],
    target_count: int,
) -> list[GraphNode]:
    """
    Select at most target_count nodes, preferring dense neighbourhoods.

    Args:
        all_nodes: Full node list as fetched
        all_edges: Full edge list as fetched
        target_count: Number of nodes to keep

    Returns:
        min(target_count, len(all_nodes)) distinct nodes from all_nodes
    """
    if not all_nodes or target_count <= 0:
        return []
    if target_count >= len(all_nodes):
        return list(all_nodes)

    adjacency = build_adjacency(all_edges)
    node_by_id: dict[str, GraphNode] = {}
    for node in all_nodes:
        node_by_id.setdefault(node.id, node)

    selected: set[str] = set()
    result: list[GraphNode] = []

    for seed in rank_by_degree(all_nodes, adjacency):
        if len(result) >= target_count:
            break
        if seed.id in selected:
            continue

        queue = deque([seed.id])
        while queue and len(result) < target_count:
            current_id = queue.popleft()
            if current_id in selected:
                continue
            selected.add(current_id)

            # Ids referenced only by edges are walked through but never emitted
            current = node_by_id.get(current_id)
            if current is not None:
                result.append(current)

            for neighbor_id in neighbors(adjacency, current_id):
                if neighbor_id not in selected:
                    queue.append(neighbor_id)

    if len(result) < target_count:
        for node in all_nodes:
            if len(result) >= target_count:
                break
            if node.id not in selected:
                selected.add(node.id)
                result.append(node)

    logger.debug(f"Selected {len(result)}/{len(all_nodes)} nodes (target {target_count})")
    return result


def initial_cluster(
    all_nodes: list[GraphNode],
    all_edges: list[GraphEdge],
    cluster_size: int = 50,
) -> list[GraphNode]:
    """BFS cluster around the single most connected node.

    Returns at most cluster_size nodes, in original node order.
    """
    if not all_nodes or cluster_size <= 0:
        return []

    adjacency = build_adjacency(all_edges)
    known = {n.id for n in all_nodes}
    center = rank_by_degree(all_nodes, adjacency)[0]

    cluster: set[str] = set()
    queue = deque([center.id])
    while queue and len(cluster) < cluster_size:
        current_id = queue.popleft()
        if current_id in cluster:
            continue
        cluster.add(current_id)

        for neighbor_id in neighbors(adjacency, current_id):
            if neighbor_id in known and neighbor_id not in cluster:
                queue.append(neighbor_id)

    return [n for n in all_nodes if n.id in cluster]
