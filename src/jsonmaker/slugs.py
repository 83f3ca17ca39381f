"""Slug derivation and lookup normalization."""

from __future__ import annotations

import re
import unicodedata
from typing import Callable, Container
from urllib.parse import unquote

from jsonmaker.schemas import TreeNode
from jsonmaker.walker import exists_by_id

FALLBACK_SLUG = "node"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")
_VALID_SLUG_RE = re.compile(r"^[a-z0-9_-]+$")


def slugify(text: str) -> str:
    """Turn ``text`` into a lowercase ASCII slug.

    Accented characters are reduced to their base letter; any other run of
    non-alphanumeric characters becomes a single hyphen.
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    return _NON_ALNUM_RE.sub("-", ascii_text).strip("-")


def _probe(base: str, is_taken: Callable[[str], bool]) -> str:
    slug = base
    index = 2
    while is_taken(slug):
        slug = f"{base}-{index}"
        index += 1
    return slug


def make_unique_slug(title: str, tree: TreeNode, exclude_slug: str | None = None) -> str:
    """Derive a slug from ``title`` that no other node in ``tree`` uses.

    Args:
        title: Title to derive the slug from.
        tree: Root of the tree the slug must be unique in.
        exclude_slug: A node with this slug does not count as a collision,
            so a renamed node may keep its own slug.

    Returns:
        ``base``, or the first free ``base-N`` for N = 2, 3, ...
    """
    base = slugify(title) or FALLBACK_SLUG
    return _probe(base, lambda candidate: exists_by_id(tree, candidate, exclude_slug))


def make_unique_slug_from_set(title: str, used_slugs: Container[str]) -> str:
    """Like ``make_unique_slug`` but checked against a flat set of slugs."""
    base = slugify(title) or FALLBACK_SLUG
    return _probe(base, lambda candidate: candidate in used_slugs)


def is_valid_slug(value: str) -> bool:
    return bool(_VALID_SLUG_RE.match(value))


def resolve_slug(raw: str) -> str:
    """Normalize a slug taken from a request path.

    The value is percent-decoded; if that is not already a valid slug it is
    slugified.
    """
    decoded = unquote(raw).strip()
    if is_valid_slug(decoded):
        return decoded
    return slugify(decoded)
