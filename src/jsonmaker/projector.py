"""Project tree nodes into their public JSON shape."""

from __future__ import annotations

import json
from typing import Any

from jsonmaker.schemas import TreeNode


def to_public(node: TreeNode) -> dict[str, Any]:
    """Return ``{title, value?, children?}`` for ``node`` and its descendants.

    ``value`` is present only when non-empty and ``children`` only when the
    node has any. Slugs are never included.
    """
    output: dict[str, Any] = {"title": node.title}
    if node.value:
        output["value"] = node.value
    if node.children:
        output["children"] = [to_public(child) for child in node.children]
    return output


def render_public_json(node: TreeNode) -> str:
    """Render the public shape as indented JSON for display or download."""
    return json.dumps(to_public(node), indent=4, ensure_ascii=False)
