"""Compute the constellation layout offline and print or store it.

This script:
1. Fetches the graph from the backend (GET /graph/)
2. Selects the visible nodes and seeds the component grid layout
3. Runs the force simulation headless until it cools, then freezes it
4. Prints a summary, or writes node positions as JSON with --output

Useful for checking how a real user's graph will settle without a canvas.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load .env file from project root
project_root = Path(__file__).parent.parent
load_dotenv(project_root / ".env")

# Add src to path
sys.path.insert(0, str(project_root / "src"))

from constellation.client import GraphClient, GraphFetchError
from constellation.config import settings
from constellation.graph import (
    assign_fixed_positions,
    find_connected_components,
    initial_cluster,
    select_connected_nodes,
)
from constellation.simulation import (
    FORCE_ATTRACT,
    FORCE_CENTER,
    FORCE_CHARGE,
    FORCE_LINK,
    SETTLE_FORCES,
    CenterForce,
    LinkForce,
    ManyBodyForce,
    NumpyForceEngine,
    RadialForce,
)


def settle(visible_nodes, links):
    """Run the forces from the seed layout until cooled, then pin."""
    engine = NumpyForceEngine()
    engine.set_nodes(visible_nodes)
    engine.release_pins()

    engine.add_force(FORCE_CENTER, CenterForce(0.0, 0.0))
    engine.add_force(FORCE_ATTRACT, RadialForce(settings.radial_radius, 0.0, 0.0, settings.radial_strength))
    engine.add_force(FORCE_CHARGE, ManyBodyForce(settings.charge_strength))
    engine.add_force(FORCE_LINK, LinkForce(links, settings.link_distance))

    while engine.tick():
        pass

    for name in SETTLE_FORCES:
        engine.remove_force(name)
    engine.pin_all()

    print(f"Settled after {engine.ticks} ticks (alpha={engine.alpha:.4f})")
    return engine.positions()


async def compute_layout(
    limit: int | None,
    output: Path | None,
    skip_forces: bool,
    cluster_size: int | None = None,
) -> int:
    client = GraphClient()
    print(f"Fetching graph from {client.url}...")
    try:
        payload = await client.fetch_graph()
    except GraphFetchError as e:
        print(f"Fetch failed: {e.message}")
        return 1
    finally:
        client.close()

    print(f"Found {len(payload.nodes)} nodes, {len(payload.edges)} edges")

    if cluster_size is not None:
        # Only the neighbourhood of the most connected node
        selected = initial_cluster(payload.nodes, payload.edges, cluster_size)
    else:
        target = len(payload.nodes) if limit is None else limit
        selected = select_connected_nodes(payload.nodes, payload.edges, target)
    components = find_connected_components(selected, payload.edges)
    print(f"Selected {len(selected)} nodes in {len(components)} components")

    positioned = assign_fixed_positions(selected, payload.edges)
    visible = [p.to_visible() for p in positioned]

    if skip_forces:
        positions = {p.id: (p.x, p.y) for p in positioned}
    else:
        selected_ids = {n.id for n in selected}
        links = [
            (e.source, e.target)
            for e in payload.edges
            if e.source in selected_ids and e.target in selected_ids
        ]
        print("Running force simulation...")
        positions = settle(visible, links)

    # Compute bounding box
    if positions:
        xs = [p[0] for p in positions.values()]
        ys = [p[1] for p in positions.values()]
        print(f"Bounding box: x=[{min(xs):.1f}, {max(xs):.1f}], y=[{min(ys):.1f}, {max(ys):.1f}]")

    if output is not None:
        output.write_text(
            json.dumps({nid: {"x": x, "y": y} for nid, (x, y) in positions.items()}, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        print(f"Wrote {len(positions)} positions to {output}")

    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute the constellation layout for the backend graph")
    parser.add_argument("--limit", type=int, default=None, help="Maximum visible nodes (default: all)")
    parser.add_argument("--output", type=Path, default=None, help="Write positions to this JSON file")
    parser.add_argument("--seed-only", action="store_true", help="Skip the force simulation")
    parser.add_argument(
        "--cluster",
        type=int,
        default=None,
        metavar="SIZE",
        help="Lay out only the cluster around the most connected node (overrides --limit)",
    )
    args = parser.parse_args()

    sys.exit(asyncio.run(compute_layout(args.limit, args.output, args.seed_only, args.cluster)))


if __name__ == "__main__":
    main()
