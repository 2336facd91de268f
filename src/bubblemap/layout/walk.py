"""Pre-order flattening of the input tree into identified nodes and edges."""

from collections.abc import Mapping
from dataclasses import dataclass

import networkx as nx

from ..errors import TreeStructureError

# Separator between child indices in node ids
ID_SEPARATOR = "-"
ROOT_ID = "0"


@dataclass(frozen=True)
class FlatNode:
    """One tree node with its position in the tree encoded in ``id``."""

    id: str
    label: str
    depth: int
    branch_index: int
    parent_id: str | None = None


@dataclass(frozen=True)
class Edge:
    """Parent -> child connection."""

    parent_id: str
    child_id: str


def _children_of(node: Mapping, location: str) -> list:
    """Return a node's children list, rejecting anything but a list or null."""
    children = node.get("children")
    if children is None:
        return []
    if not isinstance(children, list):
        raise TreeStructureError(
            f"'children' must be a list, got {type(children).__name__}", location
        )
    return children


def validate_tree(tree) -> None:
    """Check every node of ``tree`` is a mapping with a string ``name``.

    Raises:
        TreeStructureError: Naming the first malformed node found in pre-order.
    """
    stack = [(tree, "root")]
    while stack:
        node, location = stack.pop()
        if not isinstance(node, Mapping):
            raise TreeStructureError(
                f"node must be an object, got {type(node).__name__}", location
            )
        if "name" not in node:
            raise TreeStructureError("node is missing 'name'", location)
        if not isinstance(node["name"], str):
            raise TreeStructureError(
                f"'name' must be a string, got {type(node['name']).__name__}", location
            )
        children = _children_of(node, location)
        for i in reversed(range(len(children))):
            stack.append((children[i], f"{location}.children[{i}]"))


def walk_tree(tree, palette_size: int) -> tuple[list[FlatNode], list[Edge]]:
    """Flatten a tree depth-first, visiting children in their given order.

    The whole tree is validated before anything is produced, so a malformed
    node never yields partial output.

    Args:
        tree: Root ``{"name": ..., "children": [...]}`` mapping.
        palette_size: Number of branch colours; branch indices wrap around it.

    Returns:
        nodes: FlatNodes in pre-order (root first).
        edges: One Edge per non-root node, in the same order.
    """
    validate_tree(tree)

    nodes: list[FlatNode] = []
    edges: list[Edge] = []

    # (node, path of child indices, branch index, parent id)
    stack: list[tuple[Mapping, tuple[int, ...], int, str | None]] = [(tree, (0,), 0, None)]
    while stack:
        node, path, branch, parent_id = stack.pop()
        node_id = ID_SEPARATOR.join(str(i) for i in path)
        depth = len(path) - 1
        nodes.append(FlatNode(node_id, node["name"], depth, branch, parent_id))
        if parent_id is not None:
            edges.append(Edge(parent_id, node_id))

        children = node.get("children") or []
        # Push in reverse so the first child is visited first
        for i in reversed(range(len(children))):
            child_branch = i % palette_size if depth == 0 else branch
            stack.append((children[i], path + (i,), child_branch, node_id))

    return nodes, edges


def build_tree_graph(nodes: list[FlatNode], edges: list[Edge]) -> nx.DiGraph:
    """Build a DiGraph of the flattened tree.

    Node attributes carry the FlatNode; successor order follows sibling order.
    """
    G = nx.DiGraph()
    for node in nodes:
        G.add_node(node.id, node=node)
    for edge in edges:
        G.add_edge(edge.parent_id, edge.child_id)
    return G


def count_nodes(tree) -> int:
    """Count the root and all its descendants."""
    count = 0
    stack = [tree]
    while stack:
        node = stack.pop()
        count += 1
        stack.extend(node.get("children") or [])
    return count
