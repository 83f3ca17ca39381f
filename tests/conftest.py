"""Test setup for jsonmaker."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from jsonmaker.schemas import TreeNode  # noqa: E402
from jsonmaker.service import TreeService  # noqa: E402
from jsonmaker.storage import InMemoryTreeStore  # noqa: E402


@pytest.fixture
def empty_tree() -> TreeNode:
    """A root with no children."""
    return TreeNode(title="Root", slug="root")


@pytest.fixture
def sample_tree() -> TreeNode:
    """A small three-level tree.

    Root
        Docs
            Python  (value)
        News    (value)
    """
    return TreeNode.model_validate(
        {
            "title": "Root",
            "slug": "root",
            "children": [
                {
                    "title": "Docs",
                    "slug": "docs",
                    "children": [
                        {"title": "Python", "slug": "python", "value": "https://docs.python.org/3/"},
                    ],
                },
                {"title": "News", "slug": "news", "value": "https://news.ycombinator.com"},
            ],
        }
    )


@pytest.fixture
def store(empty_tree: TreeNode) -> InMemoryTreeStore:
    """In-memory store seeded with the empty Root tree."""
    return InMemoryTreeStore(seed=empty_tree)


@pytest.fixture
def service(store: InMemoryTreeStore) -> TreeService:
    return TreeService(store)
