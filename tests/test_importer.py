"""Tests for import normalization."""

from __future__ import annotations

from typing import Any

import pytest

from jsonmaker.exceptions import DuplicateTitleError, InvalidJSONError, InvalidStructureError
from jsonmaker.importer import normalize_import_node, normalize_import_tree, parse_import_payload
from jsonmaker.projector import to_public
from jsonmaker.schemas import ResultCode, TreeNode


class TestParseImportPayload:
    """Tests for parse_import_payload function."""

    def test_parses_object(self) -> None:
        assert parse_import_payload('{"title": "A"}') == {"title": "A"}

    @pytest.mark.parametrize("payload", ["{not json", "", "[1, 2"])
    def test_rejects_unparsable(self, payload: str) -> None:
        with pytest.raises(InvalidJSONError):
            parse_import_payload(payload)

    def test_rejects_runaway_nesting(self) -> None:
        with pytest.raises(InvalidJSONError, match="nested too deeply"):
            parse_import_payload("[" * 100_000 + "]" * 100_000)

    @pytest.mark.parametrize("payload", ["[]", '"title"', "42", "null"])
    def test_rejects_non_object(self, payload: str) -> None:
        with pytest.raises(InvalidJSONError, match="must be an object"):
            parse_import_payload(payload)


class TestNormalizeImportNode:
    """Tests for normalize_import_node function."""

    def test_builds_nested_nodes(self) -> None:
        data = {
            "title": " Links ",
            "children": [
                {"title": "Python", "value": " https://python.org "},
                {"title": "Empty", "value": "   "},
                {"title": "Nothing", "value": None},
            ],
        }

        node = normalize_import_node(data, set(), set())

        assert node.title == "Links"
        assert node.slug == "links"
        assert node.value is None
        assert [child.slug for child in node.children] == ["python", "empty", "nothing"]
        assert node.children[0].value == "https://python.org"
        assert node.children[1].value is None
        assert node.children[2].value is None
        assert all(child.children == [] for child in node.children)

    def test_updates_accumulators(self) -> None:
        titles: set[str] = set()
        slugs: set[str] = set()

        normalize_import_node({"title": "A", "children": [{"title": "B"}]}, titles, slugs)

        assert titles == {"a", "b"}
        assert slugs == {"a", "b"}

    def test_slugs_are_unique_across_subtree(self) -> None:
        """Different titles that slugify the same get numbered slugs."""
        data = {"title": "C++", "children": [{"title": "C#"}, {"title": "C"}]}

        node = normalize_import_node(data, set(), set())

        assert node.slug == "c"
        assert [child.slug for child in node.children] == ["c-2", "c-3"]

    def test_seeded_slugs_are_avoided(self) -> None:
        node = normalize_import_node({"title": "Docs"}, set(), {"docs"})
        assert node.slug == "docs-2"

    @pytest.mark.parametrize(
        "data",
        [
            {"title": "A", "url": "https://example.com"},
            {"title": "A", "slug": "a"},
            {"title": 5},
            {"title": "   "},
            {"value": "https://example.com"},
            {"title": "A", "value": 3},
            {"title": "A", "value": ["x"]},
            {"title": "A", "children": {"title": "B"}},
            {"title": "A", "children": ["B"]},
            {"title": "A", "children": [{"title": "B", "children": [{"title": "C", "extra": 1}]}]},
            ["A"],
            "A",
        ],
    )
    def test_rejects_invalid_structure(self, data: Any) -> None:
        with pytest.raises(InvalidStructureError):
            normalize_import_node(data, set(), set())

    def test_rejects_self_duplicate_case_insensitive(self) -> None:
        with pytest.raises(DuplicateTitleError):
            normalize_import_node({"title": "A", "children": [{"title": "a"}]}, set(), set())

    def test_rejects_seeded_title(self) -> None:
        with pytest.raises(DuplicateTitleError):
            normalize_import_node({"title": "DOCS"}, {"docs"}, set())

    def test_null_children_means_leaf(self) -> None:
        node = normalize_import_node({"title": "A", "children": None}, set(), set())
        assert node.children == []

    def test_container_drops_value(self) -> None:
        data = {"title": "A", "value": "https://a.example.com", "children": [{"title": "B", "value": "https://b.example.com"}]}

        node = normalize_import_node(data, set(), set())

        assert node.value is None
        assert node.children[0].value == "https://b.example.com"
        assert to_public(node) == {"title": "A", "children": [{"title": "B", "value": "https://b.example.com"}]}

    def test_empty_children_keeps_value(self) -> None:
        node = normalize_import_node({"title": "A", "value": "https://a.example.com", "children": []}, set(), set())
        assert node.value == "https://a.example.com"

    def test_depth_limit(self) -> None:
        data = {"title": "A", "children": [{"title": "B", "children": [{"title": "C"}]}]}

        assert normalize_import_node(data, set(), set(), max_depth=3).children[0].children[0].slug == "c"
        with pytest.raises(InvalidStructureError):
            normalize_import_node(data, set(), set(), max_depth=2)


class TestNormalizeImportTree:
    """Tests for normalize_import_tree function."""

    def test_replace_mode(self) -> None:
        outcome = normalize_import_tree({"title": "Root", "children": [{"title": "Docs"}]})

        assert outcome.ok
        assert outcome.error is None
        assert outcome.node is not None
        assert outcome.node.slug == "root"
        assert outcome.node.children[0].slug == "docs"

    def test_duplicate_title_in_payload(self) -> None:
        outcome = normalize_import_tree({"title": "A", "children": [{"title": "A"}]})

        assert not outcome.ok
        assert outcome.node is None
        assert outcome.error is ResultCode.IMPORT_DUPLICATE_TITLE

    def test_invalid_structure(self) -> None:
        outcome = normalize_import_tree({"title": "A", "children": [{"name": "B"}]})
        assert outcome.error is ResultCode.IMPORT_INVALID_STRUCTURE
        assert "name" in (outcome.detail or "")

    def test_append_mode_collides_with_existing_titles(self, sample_tree: TreeNode) -> None:
        outcome = normalize_import_tree({"title": "Extra", "children": [{"title": "news"}]}, sample_tree)
        assert outcome.error is ResultCode.IMPORT_DUPLICATE_TITLE

    def test_append_mode_avoids_existing_slugs(self, sample_tree: TreeNode) -> None:
        """Titles differ from existing ones but slugify onto taken slugs."""
        outcome = normalize_import_tree({"title": "Docs!", "children": [{"title": "Python?"}]}, sample_tree)

        assert outcome.node is not None
        assert outcome.node.slug == "docs-2"
        assert outcome.node.children[0].slug == "python-2"

    def test_existing_tree_is_untouched(self, sample_tree: TreeNode) -> None:
        before = sample_tree.model_dump()

        normalize_import_tree({"title": "New", "children": [{"title": "Docs"}]}, sample_tree)
        normalize_import_tree({"title": "Fresh"}, sample_tree)

        assert sample_tree.model_dump() == before

    def test_unicode_titles_get_fallback_slugs(self) -> None:
        outcome = normalize_import_tree({"title": "日本", "children": [{"title": "中国"}]})

        assert outcome.node is not None
        assert outcome.node.slug == "node"
        assert outcome.node.children[0].slug == "node-2"

    def test_result_is_a_tree_node(self) -> None:
        outcome = normalize_import_tree({"title": "A"})
        assert isinstance(outcome.node, TreeNode)
