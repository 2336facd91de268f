"""Pytest fixtures for bubblemap tests."""

import pytest

from bubblemap.config import DEFAULT_CONFIG, FontSpec, LayoutConfig

# Fixed advance per character, as a fraction of the font size
CHAR_ADVANCE = 0.6


def fixed_measure(text: str, font: FontSpec) -> float:
    """Deterministic stand-in for font metrics: every character has the same width."""
    return len(text) * font.size * CHAR_ADVANCE


@pytest.fixture
def measure():
    return fixed_measure


@pytest.fixture
def config() -> LayoutConfig:
    return DEFAULT_CONFIG


@pytest.fixture
def small_config() -> LayoutConfig:
    """Tiny spacing so hand-checked geometry stays readable."""
    return DEFAULT_CONFIG.replace(ring_step=10.0, min_gap=2.0, level_radii=(5, 4, 3))


@pytest.fixture
def two_branch_tree() -> dict:
    """Topic -> A (A1, A2), B (B1, B2)."""
    return {
        "name": "Topic",
        "children": [
            {"name": "A", "children": [{"name": "A1"}, {"name": "A2"}]},
            {"name": "B", "children": [{"name": "B1"}, {"name": "B2"}]},
        ],
    }


@pytest.fixture
def root_only_tree() -> dict:
    return {"name": "Lonely root"}


@pytest.fixture
def long_label_tree() -> dict:
    """Root label of 50 short words (249 characters)."""
    return {"name": " ".join(["word"] * 50)}


@pytest.fixture
def identical_siblings_tree() -> dict:
    """One top-level node with 10 identically labelled children."""
    return {
        "name": "Root",
        "children": [
            {"name": "Hub", "children": [{"name": "Same"} for _ in range(10)]},
        ],
    }


@pytest.fixture
def ragged_tree() -> dict:
    """Uneven branching and depth, including an explicit null children list."""
    return {
        "name": "Languages",
        "children": [
            {
                "name": "Compiled",
                "children": [
                    {"name": "C", "children": [{"name": "C89"}, {"name": "C99"}, {"name": "C11"}]},
                    {"name": "Rust"},
                ],
            },
            {"name": "Interpreted", "children": None},
            {
                "name": "Hybrid",
                "children": [
                    {
                        "name": "JVM",
                        "children": [
                            {"name": "Java", "children": [{"name": "Records and sealed types"}]},
                            {"name": "Kotlin"},
                        ],
                    }
                ],
            },
        ],
    }
