"""Tests for slug derivation."""

from __future__ import annotations

import pytest

from jsonmaker.schemas import TreeNode
from jsonmaker.slugs import (
    is_valid_slug,
    make_unique_slug,
    make_unique_slug_from_set,
    resolve_slug,
    slugify,
)


class TestSlugify:
    """Tests for slugify function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Docs", "docs"),
            ("Hello, World!", "hello-world"),
            ("  spaced   out  ", "spaced-out"),
            ("Café Crème", "cafe-creme"),
            ("C++ / Rust", "c-rust"),
            ("2024 Plans", "2024-plans"),
        ],
    )
    def test_slugifies_titles(self, text: str, expected: str) -> None:
        assert slugify(text) == expected

    def test_returns_empty_for_symbols_only(self) -> None:
        """Titles without any ASCII letters or digits slugify to nothing."""
        assert slugify("!!!") == ""
        assert slugify("日本語") == ""


class TestMakeUniqueSlug:
    """Tests for make_unique_slug function."""

    def test_uses_base_when_free(self, empty_tree: TreeNode) -> None:
        assert make_unique_slug("Docs", empty_tree) == "docs"

    def test_probes_numbered_suffixes(self, empty_tree: TreeNode) -> None:
        """Existing docs and docs-2 push the next slug to docs-3."""
        empty_tree.children.append(TreeNode(title="Docs", slug="docs"))
        empty_tree.children.append(TreeNode(title="Docs again", slug="docs-2"))

        assert make_unique_slug("Docs", empty_tree) == "docs-3"

    def test_falls_back_to_node(self, empty_tree: TreeNode) -> None:
        assert make_unique_slug("???", empty_tree) == "node"
        empty_tree.children.append(TreeNode(title="???", slug="node"))
        assert make_unique_slug("***", empty_tree) == "node-2"

    def test_excluded_slug_is_not_a_collision(self, sample_tree: TreeNode) -> None:
        """A node being renamed may keep its own slug."""
        assert make_unique_slug("Docs", sample_tree, exclude_slug="docs") == "docs"
        assert make_unique_slug("Docs", sample_tree, exclude_slug="news") == "docs-2"

    def test_collides_with_root(self, empty_tree: TreeNode) -> None:
        assert make_unique_slug("Root", empty_tree) == "root-2"


class TestMakeUniqueSlugFromSet:
    """Tests for make_unique_slug_from_set function."""

    def test_checks_against_set(self) -> None:
        used = {"a", "a-2"}
        assert make_unique_slug_from_set("A", used) == "a-3"

    def test_does_not_modify_set(self) -> None:
        used: set[str] = set()
        make_unique_slug_from_set("A", used)
        assert used == set()


class TestResolveSlug:
    """Tests for resolve_slug function."""

    def test_keeps_valid_slug(self) -> None:
        assert resolve_slug("docs-2") == "docs-2"
        assert resolve_slug("my_node") == "my_node"

    def test_decodes_and_slugifies(self) -> None:
        assert resolve_slug("My%20Docs") == "my-docs"

    def test_slugifies_uppercase(self) -> None:
        assert resolve_slug("Docs") == "docs"

    def test_empty_input(self) -> None:
        assert resolve_slug("") == ""


def test_is_valid_slug() -> None:
    assert is_valid_slug("abc-1_2")
    assert not is_valid_slug("")
    assert not is_valid_slug("Has Space")
