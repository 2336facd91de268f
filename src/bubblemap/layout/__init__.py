"""Radial bubble layout for topic trees.

The root sits at the centre, each top-level branch owns an angular sector, and
deeper levels sit on concentric rings before overlapping bubbles are relaxed apart.
"""

from .links import Link, build_links
from .place import place_radial
from .relax import RelaxationResult, count_overlaps, relax_bubbles
from .render import render_html, render_svg
from .scene import Scene, build_scene, compute_canvas
from .size import Bubble, size_bubbles
from .walk import Edge, FlatNode, build_tree_graph, count_nodes, validate_tree, walk_tree
from .wrap import PillowMeasurer, TextMeasurer, wrap_label

__all__ = [
    "walk_tree",
    "validate_tree",
    "build_tree_graph",
    "count_nodes",
    "FlatNode",
    "Edge",
    "wrap_label",
    "TextMeasurer",
    "PillowMeasurer",
    "place_radial",
    "Bubble",
    "size_bubbles",
    "RelaxationResult",
    "relax_bubbles",
    "count_overlaps",
    "Link",
    "build_links",
    "Scene",
    "build_scene",
    "compute_canvas",
    "render_svg",
    "render_html",
]
