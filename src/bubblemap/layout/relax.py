"""Pairwise repulsion that pushes overlapping bubbles apart."""

import math
from dataclasses import dataclass

from .size import Bubble

# Overlaps smaller than this are floating-point noise, not violations
EPSILON = 1e-9


@dataclass
class RelaxationResult:
    """Outcome of a relaxation pass."""

    iterations: int = 0
    converged: bool = False
    residual_overlaps: int = 0  # Pairs still closer than r_a + r_b + min_gap


def _min_distance(a: Bubble, b: Bubble, min_gap: float) -> float:
    return a.radius + b.radius + min_gap


def count_overlaps(bubbles: list[Bubble], min_gap: float, tolerance: float = 1e-6) -> int:
    """Count pairs whose centres are closer than their radii plus ``min_gap``."""
    count = 0
    for i in range(len(bubbles)):
        for j in range(i + 1, len(bubbles)):
            a, b = bubbles[i], bubbles[j]
            dist = math.hypot(b.x - a.x, b.y - a.y)
            if dist < _min_distance(a, b, min_gap) - tolerance:
                count += 1
    return count


def relax_bubbles(
    bubbles: list[Bubble],
    min_gap: float,
    max_iterations: int = 80,
) -> RelaxationResult:
    """Push overlapping bubbles apart until none overlap or the budget runs out.

    Each iteration visits every unordered pair once. A pair closer than
    ``r_a + r_b + min_gap`` is moved apart along the line joining the centres,
    each bubble by half the overlap. Distances are clamped to at least 1;
    exactly coincident centres are separated along the x axis.

    Bubbles are modified in place. Running out of iterations is not an error:
    the result reports how many pairs still overlap.

    Args:
        bubbles: Bubbles to move.
        min_gap: Minimum gap between bubble edges.
        max_iterations: Upper bound on full passes over all pairs.

    Returns:
        RelaxationResult with iteration count, convergence flag and residual overlaps.
    """
    result = RelaxationResult()

    for _ in range(max_iterations):
        moved = False
        for i in range(len(bubbles)):
            a = bubbles[i]
            for j in range(i + 1, len(bubbles)):
                b = bubbles[j]
                dx = b.x - a.x
                dy = b.y - a.y
                if dx == 0 and dy == 0:
                    dx = 1.0
                dist = max(1.0, math.hypot(dx, dy))
                min_dist = _min_distance(a, b, min_gap)
                if dist < min_dist - EPSILON:
                    overlap = (min_dist - dist) / 2
                    ux = dx / dist
                    uy = dy / dist
                    a.x -= ux * overlap
                    a.y -= uy * overlap
                    b.x += ux * overlap
                    b.y += uy * overlap
                    moved = True
        result.iterations += 1
        if not moved:
            result.converged = True
            break
    else:
        # Budget exhausted; the last pass may still have cleared every overlap
        result.converged = count_overlaps(bubbles, min_gap) == 0

    result.residual_overlaps = 0 if result.converged else count_overlaps(bubbles, min_gap)
    return result
