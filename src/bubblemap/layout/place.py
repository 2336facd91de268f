"""Initial radial placement: one angular sector per top-level branch."""

import math

import networkx as nx

from ..config import LayoutConfig


def sector_width(top_level_count: int) -> float:
    """Angular width of each top-level sector (full circle for 0 or 1 branch)."""
    return 2 * math.pi / max(1, top_level_count)


def sector_angle(index: int, sector: float) -> float:
    """Base angle of sector ``index``, with sector 0 pointing up."""
    return index * sector - math.pi / 2


def place_radial(
    graph: nx.DiGraph,
    root_id: str,
    config: LayoutConfig,
) -> dict[str, tuple[float, float]]:
    """Assign an initial (x, y) to every node of the tree.

    - Root at the origin.
    - Depth-1 nodes evenly around the circle at ``ring_step``.
    - Deeper nodes at ``depth * ring_step``, spread across a sub-arc of their
      top-level sector centred on the sector's base angle, siblings evenly
      spaced inside it.

    Positions depend only on tree shape and sibling order.

    Args:
        graph: Tree with successors in sibling order.
        root_id: Id of the root node.
        config: Layout constants (ring step, spread ratio and cap).

    Returns:
        Dictionary mapping node id to (x, y).
    """
    positions: dict[str, tuple[float, float]] = {root_id: (0.0, 0.0)}

    top = list(graph.successors(root_id))
    sector = sector_width(len(top))
    spread = min(sector * config.sector_spread_ratio, config.max_sector_spread)

    for i, node_id in enumerate(top):
        angle = sector_angle(i, sector)
        positions[node_id] = (
            config.ring_step * math.cos(angle),
            config.ring_step * math.sin(angle),
        )

    # Walk each top-level subtree, placing children one ring further out
    for i, top_id in enumerate(top):
        start = sector_angle(i, sector) - spread / 2
        stack = [(top_id, 2)]
        while stack:
            parent_id, depth = stack.pop()
            kids = list(graph.successors(parent_id))
            radius = depth * config.ring_step
            for k, child_id in enumerate(kids):
                angle = start + spread * (k + 1) / (len(kids) + 1)
                positions[child_id] = (radius * math.cos(angle), radius * math.sin(angle))
                stack.append((child_id, depth + 1))

    return positions
