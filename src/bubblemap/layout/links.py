"""Curved connectors between parent and child bubbles."""

from dataclasses import dataclass

from ..config import LayoutConfig
from .size import Bubble
from .walk import Edge

Point = tuple[float, float]


@dataclass(frozen=True)
class Link:
    """Quadratic Bezier from a parent's centre to a child's centre."""

    id: str
    source: str
    target: str
    stroke: str
    stroke_width: float
    start: Point
    control: Point
    end: Point

    @property
    def path_d(self) -> str:
        """SVG path data for the curve."""
        (sx, sy), (cx, cy), (ex, ey) = self.start, self.control, self.end
        return f"M {sx:.2f} {sy:.2f} Q {cx:.2f} {cy:.2f} {ex:.2f} {ey:.2f}"


def link_width(depth: int, config: LayoutConfig) -> float:
    """Stroke width for a link ending at a node of ``depth``; thinner further out."""
    return max(config.link_width_min, config.link_width_base - config.link_width_step * depth)


def build_link(parent: Bubble, child: Bubble, config: LayoutConfig) -> Link:
    """Build the connector for one parent/child pair.

    The control point is the chord midpoint pulled toward the origin, which
    bows every link inward.
    """
    mid_x = (parent.x + child.x) / 2
    mid_y = (parent.y + child.y) / 2
    stroke, _ = config.palette[parent.branch_index % len(config.palette)]
    return Link(
        id=f"{parent.id}-{child.id}",
        source=parent.id,
        target=child.id,
        stroke=stroke,
        stroke_width=link_width(child.depth, config),
        start=(parent.x, parent.y),
        control=(mid_x * config.link_pull, mid_y * config.link_pull),
        end=(child.x, child.y),
    )


def build_links(edges: list[Edge], bubbles: list[Bubble], config: LayoutConfig) -> list[Link]:
    """Build one Link per edge from current bubble positions.

    Must be re-run after bubbles move; nothing is cached.
    """
    by_id = {bubble.id: bubble for bubble in bubbles}
    return [build_link(by_id[e.parent_id], by_id[e.child_id], config) for e in edges]
