"""Validate untrusted JSON and turn it into a consistent subtree."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from jsonmaker.config import JSONMAKER_MAX_IMPORT_DEPTH
from jsonmaker.exceptions import (
    DuplicateTitleError,
    ImportValidationError,
    InvalidJSONError,
    InvalidStructureError,
)
from jsonmaker.schemas import ResultCode, TreeNode
from jsonmaker.slugs import make_unique_slug_from_set
from jsonmaker.walker import collect_slugs, collect_titles, fold_title

logger = logging.getLogger(__name__)

ALLOWED_KEYS = frozenset({"title", "value", "children"})


@dataclass
class ImportOutcome:
    """Result of normalizing an import payload.

    Exactly one of ``node`` and ``error`` is set.
    """

    node: TreeNode | None = None
    error: ResultCode | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.node is not None


def parse_import_payload(payload: str) -> dict[str, Any]:
    """Parse a raw payload into a JSON object.

    Raises:
        InvalidJSONError: If the payload is not JSON or not a JSON object.
    """
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as exc:
        raise InvalidJSONError(f"Payload is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise InvalidJSONError("Payload is nested too deeply") from exc
    if not isinstance(data, dict):
        raise InvalidJSONError("Top-level JSON value must be an object")
    return data


def normalize_import_node(
    data: Any,
    used_titles: set[str],
    used_slugs: set[str],
    *,
    depth: int = 1,
    max_depth: int = JSONMAKER_MAX_IMPORT_DEPTH,
) -> TreeNode:
    """Validate one imported node and its descendants.

    ``used_titles`` (folded) and ``used_slugs`` are shared across the whole
    walk and updated in place, so uniqueness holds for everything imported so
    far plus whatever the sets were seeded with.

    Args:
        data: Decoded JSON value for this node.
        used_titles: Folded titles already taken.
        used_slugs: Slugs already taken.
        depth: Level of this node, 1 for the imported root.
        max_depth: Deepest level accepted.

    Returns:
        A new node with a fresh slug. ``value`` is set only when non-empty and
        the node has no children.

    Raises:
        InvalidStructureError: On an unknown key, wrong type, missing title or
            nesting deeper than ``max_depth``.
        DuplicateTitleError: If the title is already taken.
    """
    if depth > max_depth:
        raise InvalidStructureError(f"Nodes may be nested at most {max_depth} levels deep")
    if not isinstance(data, Mapping):
        raise InvalidStructureError("Node must be a JSON object")

    unknown = set(data) - ALLOWED_KEYS
    if unknown:
        raise InvalidStructureError(f"Unknown keys: {', '.join(sorted(map(str, unknown)))}")

    raw_title = data.get("title")
    if not isinstance(raw_title, str) or not raw_title.strip():
        raise InvalidStructureError("Node title must be a non-empty string")
    title = raw_title.strip()

    folded = fold_title(title)
    if folded in used_titles:
        raise DuplicateTitleError(f"Duplicate title: {title}")
    used_titles.add(folded)

    slug = make_unique_slug_from_set(title, used_slugs)
    used_slugs.add(slug)

    value: str | None = None
    raw_value = data.get("value")
    if raw_value is not None:
        if not isinstance(raw_value, str):
            raise InvalidStructureError(f"Value of {title!r} must be a string or null")
        value = raw_value.strip() or None

    raw_children = data.get("children")
    children: list[TreeNode] = []
    if raw_children is not None:
        if not isinstance(raw_children, list):
            raise InvalidStructureError(f"Children of {title!r} must be a list")
        for raw_child in raw_children:
            children.append(
                normalize_import_node(raw_child, used_titles, used_slugs, depth=depth + 1, max_depth=max_depth)
            )

    # A container carries no value, same as after add_child.
    if children:
        value = None

    return TreeNode(title=title, slug=slug, value=value, children=children)


def normalize_import_tree(data: Any, existing_tree: TreeNode | None = None) -> ImportOutcome:
    """Normalize a whole payload, optionally against an existing tree.

    With ``existing_tree`` (append mode) its titles and slugs are taken before
    the walk starts, so the imported subtree cannot collide with it. The
    existing tree itself is never modified.
    """
    used_titles = collect_titles(existing_tree) if existing_tree is not None else set()
    used_slugs = collect_slugs(existing_tree) if existing_tree is not None else set()

    try:
        node = normalize_import_node(data, used_titles, used_slugs)
    except ImportValidationError as exc:
        logger.debug("Import rejected (%s): %s", exc.code.value, exc)
        return ImportOutcome(error=exc.code, detail=str(exc))

    return ImportOutcome(node=node)
