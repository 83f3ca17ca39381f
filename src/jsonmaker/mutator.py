"""Structural, in-place tree mutations.

These are primitives: they locate a node by slug and change the tree, but
they do not check title or slug uniqueness. Callers validate first.
"""

from __future__ import annotations

import logging

from jsonmaker.schemas import TreeNode

logger = logging.getLogger(__name__)


def add_child(tree: TreeNode, parent_slug: str, child: TreeNode) -> bool:
    """Append ``child`` to the first node whose slug is ``parent_slug``.

    The parent's value is dropped, since a node with children carries none.

    Returns:
        True if the parent was found, False if the tree is unchanged.
    """
    if tree.slug == parent_slug:
        tree.value = None
        tree.children.append(child)
        logger.debug("Added %s under %s", child.slug, parent_slug)
        return True

    return any(add_child(existing, parent_slug, child) for existing in tree.children)


def remove_child(tree: TreeNode, target_slug: str) -> bool:
    """Remove the first descendant whose slug is ``target_slug``.

    Only ``children`` lists are searched, so the root itself never matches.
    """
    for index, child in enumerate(tree.children):
        if child.slug == target_slug:
            del tree.children[index]
            logger.debug("Removed %s from %s", target_slug, tree.slug)
            return True
        if remove_child(child, target_slug):
            return True
    return False


def rename_node(tree: TreeNode, target_slug: str, new_title: str, new_slug: str) -> bool:
    """Set title and slug of the first node whose slug is ``target_slug``."""
    if tree.slug == target_slug:
        tree.title = new_title
        tree.slug = new_slug
        logger.debug("Renamed %s to %s", target_slug, new_slug)
        return True

    return any(
        rename_node(child, target_slug, new_title, new_slug) for child in tree.children
    )
