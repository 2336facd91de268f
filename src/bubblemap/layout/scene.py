"""Run the layout pipeline once and bundle its output for exporters."""

import copy
import math
from dataclasses import dataclass, field

from ..config import DEFAULT_CONFIG, LayoutConfig
from ..errors import MeasurementUnavailableError
from .links import Link, build_links
from .place import place_radial
from .relax import RelaxationResult, relax_bubbles
from .size import Bubble, size_bubbles
from .walk import ROOT_ID, Edge, FlatNode, build_tree_graph, walk_tree
from .wrap import TextMeasurer


@dataclass
class Scene:
    """A fully laid out mindmap. Every export format reads from this."""

    tree: dict
    nodes: list[FlatNode]
    edges: list[Edge]
    bubbles: list[Bubble]
    links: list[Link]
    relaxation: RelaxationResult
    view_x: float
    view_y: float
    width: int
    height: int
    config: LayoutConfig = DEFAULT_CONFIG
    initial_positions: dict[str, tuple[float, float]] = field(default_factory=dict)

    @property
    def view_box(self) -> str:
        return f"{self.view_x:.2f} {self.view_y:.2f} {self.width} {self.height}"


def compute_canvas(bubbles: list[Bubble], config: LayoutConfig) -> tuple[float, float, int, int]:
    """Size the drawing area around all bubbles.

    The bounding box of the circles is padded on every side and clamped to the
    minimum canvas size, then centred on the middle of the bubbles.

    Returns:
        (view_x, view_y, width, height) where (view_x, view_y) is the top-left
        corner in layout coordinates.
    """
    min_x = min(b.x - b.radius for b in bubbles)
    min_y = min(b.y - b.radius for b in bubbles)
    max_x = max(b.x + b.radius for b in bubbles)
    max_y = max(b.y + b.radius for b in bubbles)

    pad = config.canvas_padding
    width = max(config.min_canvas_width, math.ceil(max_x - min_x + pad * 2))
    height = max(config.min_canvas_height, math.ceil(max_y - min_y + pad * 2))

    center_x = (min_x + max_x) / 2
    center_y = (min_y + max_y) / 2
    return center_x - width / 2, center_y - height / 2, width, height


def build_scene(
    tree: dict,
    measure: TextMeasurer | None,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> Scene:
    """Lay out ``tree`` as a radial bubble diagram.

    Stages: flatten, place on rings, size bubbles, relax overlaps, build links,
    size the canvas.

    Args:
        tree: Root ``{"name": ..., "children": [...]}`` mapping.
        measure: Text width measurement for the configured font.
        config: Layout constants.

    Returns:
        Scene holding the relaxed layout.

    Raises:
        TreeStructureError: If the tree is malformed (nothing is laid out).
        MeasurementUnavailableError: If no measurer is supplied.
    """
    if measure is None:
        raise MeasurementUnavailableError("A text measurer is required to lay out labels")

    nodes, edges = walk_tree(tree, len(config.palette))
    graph = build_tree_graph(nodes, edges)

    positions = place_radial(graph, ROOT_ID, config)
    bubbles = size_bubbles(nodes, positions, measure, config)

    relaxation = relax_bubbles(bubbles, config.min_gap, config.max_iterations)
    links = build_links(edges, bubbles, config)

    view_x, view_y, width, height = compute_canvas(bubbles, config)

    return Scene(
        tree=copy.deepcopy(tree),
        nodes=nodes,
        edges=edges,
        bubbles=bubbles,
        links=links,
        relaxation=relaxation,
        view_x=view_x,
        view_y=view_y,
        width=width,
        height=height,
        config=config,
        initial_positions=positions,
    )
