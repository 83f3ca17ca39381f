"""Read-only traversal helpers over a node tree.

All helpers walk the tree depth-first in pre-order: a node is visited before
its children, and children are visited in insertion order.
"""

from __future__ import annotations

from typing import Iterator

from jsonmaker.schemas import TreeNode


def fold_title(title: str) -> str:
    """Normalize a title for case-insensitive comparison."""
    return title.casefold()


def iter_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Yield every node of ``tree`` in pre-order."""
    yield tree
    for child in tree.children:
        yield from iter_nodes(child)


def find_by_id(tree: TreeNode, slug: str) -> TreeNode | None:
    """Return the first node whose slug equals ``slug``, or None."""
    for node in iter_nodes(tree):
        if node.slug == slug:
            return node
    return None


def exists_by_id(tree: TreeNode, slug: str, exclude_slug: str | None = None) -> bool:
    """Check whether a node other than ``exclude_slug`` uses ``slug``."""
    return any(
        node.slug == slug and node.slug != exclude_slug for node in iter_nodes(tree)
    )


def exists_by_title(tree: TreeNode, title: str, exclude_slug: str | None = None) -> bool:
    """Check whether a node other than ``exclude_slug`` has ``title``, ignoring case."""
    wanted = fold_title(title)
    for node in iter_nodes(tree):
        if exclude_slug is not None and node.slug == exclude_slug:
            continue
        if node.title and fold_title(node.title) == wanted:
            return True
    return False


def collect_titles(tree: TreeNode) -> set[str]:
    """Return the folded titles of every node in the tree."""
    return {fold_title(node.title) for node in iter_nodes(tree) if node.title}


def collect_slugs(tree: TreeNode) -> set[str]:
    return {node.slug for node in iter_nodes(tree)}


def count_nodes(tree: TreeNode) -> int:
    """Count nodes in the tree, root included."""
    return sum(1 for _ in iter_nodes(tree))
