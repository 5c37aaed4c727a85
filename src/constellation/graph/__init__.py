"""Graph algorithms for the constellation view.

Provides:
- Adjacency index (shared by selection and highlighting)
- Connectivity-aware node selection
- Connected-component partitioning
- Component grid / radial seed layout
"""

from constellation.graph.adjacency import (
    AdjacencyIndex,
    build_adjacency,
    degree,
    induced_adjacency,
    neighbors,
    rank_by_degree,
)
from constellation.graph.components import find_connected_components
from constellation.graph.layout import (
    assign_fixed_positions,
    component_radius,
    grid_centers,
    layout_component,
)
from constellation.graph.selector import initial_cluster, select_connected_nodes

__all__ = [
    # Adjacency
    "AdjacencyIndex",
    "build_adjacency",
    "induced_adjacency",
    "neighbors",
    "degree",
    "rank_by_degree",
    # Selection
    "select_connected_nodes",
    "initial_cluster",
    # Layout
    "find_connected_components",
    "assign_fixed_positions",
    "layout_component",
    "component_radius",
    "grid_centers",
]
