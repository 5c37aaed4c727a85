"""Deterministic component-aware seed layout.

Force simulations on disconnected graphs let components drift apart or pile
on top of each other. Before any physics runs, each component gets a cell on
a square grid centred at the origin, and its nodes are placed radially:
the most connected node ("hub") at the cell centre, the rest on a circle
around it, most connected first.
"""

import logging
import math

from constellation.config import settings
from constellation.graph.adjacency import degree, induced_adjacency, rank_by_degree
from constellation.graph.components import find_connected_components
from constellation.models import GraphEdge, GraphNode, PositionedNode

logger = logging.getLogger(__name__)


def component_radius(
    node_count: int,
    min_radius: float | None = None,
    radius_per_node: float | None = None,
) -> float:
    """Ring radius for a component of node_count nodes."""
    min_radius = min_radius if min_radius is not None else settings.min_component_radius
    radius_per_node = radius_per_node if radius_per_node is not None else settings.radius_per_node
    return max(min_radius, node_count * radius_per_node)


def grid_centers(count: int, spacing: float | None = None) -> list[tuple[float, float]]:
    """Cell centres of a ceil(sqrt(count)) square grid centred at the origin.

    Cells are filled row by row.
    """
    if count <= 0:
        return []
    spacing = spacing if spacing is not None else settings.component_spacing

    side = math.ceil(math.sqrt(count))
    offset = (side - 1) * spacing / 2

    centers = []
    for index in range(count):
        row = index // side
        col = index % side
        centers.append((col * spacing - offset, row * spacing - offset))
    return centers


def layout_component(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    center_x: float,
    center_y: float,
    min_radius: float | None = None,
    radius_per_node: float | None = None,
) -> list[PositionedNode]:
    """
    Place one component around (center_x, center_y).

    Args:
        nodes: Nodes of a single component
        edges: Edges (only those inside the component are used for degree)
        center_x: Cell centre x
        center_y: Cell centre y

    Returns:
        Positioned nodes, hub first
    """
    if not nodes:
        return []
    if len(nodes) == 1:
        return [PositionedNode(node=nodes[0], x=center_x, y=center_y)]

    adjacency = induced_adjacency((n.id for n in nodes), edges)
    ranked = rank_by_degree(nodes, adjacency)
    radius = component_radius(len(nodes), min_radius, radius_per_node)

    hub = ranked[0]
    result = [PositionedNode(node=hub, x=center_x, y=center_y)]

    ring = ranked[1:]
    for i, node in enumerate(ring):
        angle = i / len(ring) * 2 * math.pi
        result.append(PositionedNode(
            node=node,
            x=center_x + radius * math.cos(angle),
            y=center_y + radius * math.sin(angle),
        ))

    logger.debug(
        f"Component of {len(nodes)} around ({center_x:.0f}, {center_y:.0f}), "
        f"hub={hub.id} degree={degree(adjacency, hub.id)}"
    )
    return result


def assign_fixed_positions(
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    spacing: float | None = None,
) -> list[PositionedNode]:
    """Lay out every component on the grid, all positions fixed."""
    if not nodes:
        return []

    components = find_connected_components(nodes, edges)
    centers = grid_centers(len(components), spacing)

    result: list[PositionedNode] = []
    for component, (cx, cy) in zip(components, centers):
        result.extend(layout_component(component, edges, cx, cy))

    logger.debug(f"Laid out {len(result)} nodes in {len(components)} components")
    return result
