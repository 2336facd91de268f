"""Tests for relax.py module."""

import math

from bubblemap.layout.place import place_radial
from bubblemap.layout.relax import count_overlaps, relax_bubbles
from bubblemap.layout.size import Bubble, size_bubbles
from bubblemap.layout.walk import ROOT_ID, build_tree_graph, walk_tree


def _bubble(bid: str, x: float, y: float, radius: float) -> Bubble:
    return Bubble(id=bid, label=bid, x=x, y=y, radius=radius, depth=1, branch_index=0)


def _laid_out(tree, measure, config):
    nodes, edges = walk_tree(tree, len(config.palette))
    positions = place_radial(build_tree_graph(nodes, edges), ROOT_ID, config)
    return size_bubbles(nodes, positions, measure, config)


def _gap_violations(bubbles, min_gap, tolerance=1e-6):
    return [
        (a.id, b.id)
        for i, a in enumerate(bubbles)
        for b in bubbles[i + 1 :]
        if math.hypot(b.x - a.x, b.y - a.y) < a.radius + b.radius + min_gap - tolerance
    ]


class TestRelaxBubbles:
    """Tests for relax_bubbles function."""

    def test_pair_pushed_to_min_distance(self):
        """Overlap is split evenly; the midpoint does not move."""
        a = _bubble("a", 0.0, 0.0, 10)
        b = _bubble("b", 10.0, 0.0, 10)

        result = relax_bubbles([a, b], min_gap=4)

        assert result.converged
        assert result.residual_overlaps == 0
        assert math.isclose(b.x - a.x, 24.0)
        assert math.isclose((a.x + b.x) / 2, 5.0)
        assert a.y == b.y == 0.0

    def test_push_along_pair_direction(self):
        a = _bubble("a", 0.0, 0.0, 5)
        b = _bubble("b", 3.0, 4.0, 5)

        relax_bubbles([a, b], min_gap=0)

        assert math.isclose(math.hypot(b.x - a.x, b.y - a.y), 10.0)
        # Still on the original 3-4-5 line
        assert math.isclose((b.y - a.y) / (b.x - a.x), 4 / 3)

    def test_separated_bubbles_untouched(self):
        a = _bubble("a", 0.0, 0.0, 10)
        b = _bubble("b", 100.0, 0.0, 10)

        result = relax_bubbles([a, b], min_gap=4)

        assert result.converged
        assert result.iterations == 1
        assert (a.x, b.x) == (0.0, 100.0)

    def test_coincident_centres_separated(self):
        a = _bubble("a", 7.0, 7.0, 10)
        b = _bubble("b", 7.0, 7.0, 10)

        result = relax_bubbles([a, b], min_gap=2)

        assert result.converged
        assert math.isfinite(a.x) and math.isfinite(b.x)
        assert _gap_violations([a, b], 2) == []

    def test_zero_budget(self):
        a = _bubble("a", 0.0, 0.0, 10)
        b = _bubble("b", 5.0, 0.0, 10)

        result = relax_bubbles([a, b], min_gap=0, max_iterations=0)

        assert result.iterations == 0
        assert not result.converged
        assert result.residual_overlaps == 1
        assert (a.x, b.x) == (0.0, 5.0)

    def test_single_bubble(self):
        result = relax_bubbles([_bubble("a", 0.0, 0.0, 10)], min_gap=4)
        assert result.converged
        assert result.iterations == 1

    def test_identical_siblings_separate(self, identical_siblings_tree, measure, config):
        """Ten identically labelled siblings end up pairwise separated."""
        bubbles = _laid_out(identical_siblings_tree, measure, config)
        assert count_overlaps(bubbles, config.min_gap) > 0

        result = relax_bubbles(bubbles, config.min_gap, max_iterations=5000)

        assert result.converged
        assert result.residual_overlaps == 0
        assert _gap_violations(bubbles, config.min_gap) == []

    def test_ceiling_reports_residuals(self, identical_siblings_tree, measure, config):
        """A single iteration leaves overlaps that are reported, not raised."""
        bubbles = _laid_out(identical_siblings_tree, measure, config)

        result = relax_bubbles(bubbles, config.min_gap, max_iterations=1)

        assert result.iterations == 1
        assert result.residual_overlaps == count_overlaps(bubbles, config.min_gap)
        assert result.converged == (result.residual_overlaps == 0)

    def test_one_pass_leaves_overlaps(self):
        """Three coincident bubbles on a line cannot all separate in one pass."""
        bubbles = [_bubble(bid, 0.0, 0.0, 10) for bid in "abc"]

        result = relax_bubbles(bubbles, min_gap=0, max_iterations=1)

        assert result.iterations == 1
        assert not result.converged
        assert result.residual_overlaps == 1
        assert _gap_violations(bubbles, 0) == [("a", "c")]
        assert [b.x for b in bubbles] == [-14.75, 17.375, -2.625]

    def test_radius_unchanged(self, two_branch_tree, measure, config):
        bubbles = _laid_out(two_branch_tree, measure, config)
        before = [b.radius for b in bubbles]

        relax_bubbles(bubbles, config.min_gap, config.max_iterations)

        assert [b.radius for b in bubbles] == before


class TestCountOverlaps:
    """Tests for count_overlaps function."""

    def test_counts_pairs(self):
        bubbles = [
            _bubble("a", 0.0, 0.0, 10),
            _bubble("b", 15.0, 0.0, 10),
            _bubble("c", 30.0, 0.0, 10),
            _bubble("d", 500.0, 0.0, 10),
        ]
        # a-b and b-c overlap; a-c are 30 apart, within 20 + 12
        assert count_overlaps(bubbles, min_gap=12) == 3

    def test_touching_is_not_overlap(self):
        bubbles = [_bubble("a", 0.0, 0.0, 10), _bubble("b", 24.0, 0.0, 10)]
        assert count_overlaps(bubbles, min_gap=4) == 0
