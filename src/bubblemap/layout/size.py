"""Bubble sizing from wrapped label extents."""

import math
from dataclasses import dataclass, field

from ..config import LayoutConfig
from .walk import FlatNode
from .wrap import TextMeasurer, wrap_label


@dataclass
class Bubble:
    """Circle drawn for one node. Position is refined in place by relaxation."""

    id: str
    label: str
    x: float
    y: float
    radius: float
    depth: int
    branch_index: int
    lines: list[str] = field(default_factory=list)


def wrap_width_for_depth(depth: int, config: LayoutConfig) -> int:
    """Target wrap width; wider near the root."""
    return config.wrap_widths[min(depth, len(config.wrap_widths) - 1)]


def min_radius_for_depth(depth: int, config: LayoutConfig) -> int:
    """Smallest radius allowed at ``depth``."""
    return config.level_radii[min(depth, len(config.level_radii) - 1)]


def label_box(lines: list[str], measure: TextMeasurer, config: LayoutConfig) -> tuple[float, float]:
    """Padded (width, height) of the wrapped label block."""
    font = config.font
    widest = max((measure(line, font) for line in lines), default=0.0)
    width = widest + config.pad_x * 2
    height = len(lines) * config.line_height + config.pad_y * 2
    return width, height


def size_bubble(
    node: FlatNode,
    position: tuple[float, float],
    measure: TextMeasurer,
    config: LayoutConfig,
) -> Bubble:
    """Wrap one node's label and fit a circle around it."""
    lines = wrap_label(
        node.label,
        wrap_width_for_depth(node.depth, config),
        measure,
        config.font,
        config.max_lines,
    )
    width, height = label_box(lines, measure, config)
    fitted = math.ceil(math.hypot(width, height) / 2)
    radius = max(min_radius_for_depth(node.depth, config), fitted)
    x, y = position
    return Bubble(
        id=node.id,
        label=node.label,
        x=x,
        y=y,
        radius=radius,
        depth=node.depth,
        branch_index=node.branch_index,
        lines=lines,
    )


def size_bubbles(
    nodes: list[FlatNode],
    positions: dict[str, tuple[float, float]],
    measure: TextMeasurer,
    config: LayoutConfig,
) -> list[Bubble]:
    """Create one Bubble per node, in node order."""
    return [size_bubble(node, positions[node.id], measure, config) for node in nodes]
