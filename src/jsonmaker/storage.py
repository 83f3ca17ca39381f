"""Per-account tree persistence."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol
from urllib.parse import quote

from pydantic import ValidationError

from jsonmaker.config import JSONMAKER_DATA_PATH, JSONMAKER_SEED_TITLE, JSONMAKER_SEED_VALUE
from jsonmaker.exceptions import StorageError
from jsonmaker.schemas import TreeNode
from jsonmaker.slugs import slugify

logger = logging.getLogger(__name__)

def default_seed_tree(title: str = JSONMAKER_SEED_TITLE, value: str | None = JSONMAKER_SEED_VALUE) -> TreeNode:
    """Build the tree an account starts with."""
    return TreeNode(title=title, slug=slugify(title) or "root", value=value or None)


class TreeStore(Protocol):
    """Whole-tree load/save keyed by account id."""

    def load_tree(self, account_id: str) -> TreeNode:
        """Return the stored tree, seeding a default one on first access."""
        ...

    def save_tree(self, account_id: str, tree: TreeNode) -> None:
        """Overwrite the stored tree."""
        ...


class InMemoryTreeStore:
    """Keep trees in a dict; each load returns an independent copy."""

    def __init__(self, seed: TreeNode | None = None) -> None:
        self._seed = seed or default_seed_tree()
        self._trees: dict[str, TreeNode] = {}

    def load_tree(self, account_id: str) -> TreeNode:
        if account_id not in self._trees:
            self._trees[account_id] = self._seed.model_copy(deep=True)
        return self._trees[account_id].model_copy(deep=True)

    def save_tree(self, account_id: str, tree: TreeNode) -> None:
        self._trees[account_id] = tree.model_copy(deep=True)


class JsonFileTreeStore:
    """Store one JSON file per account under ``base_path``."""

    def __init__(self, base_path: Path = JSONMAKER_DATA_PATH, seed: TreeNode | None = None) -> None:
        self.base_path = base_path
        self._seed = seed or default_seed_tree()

    def path_for(self, account_id: str) -> Path:
        """Map an account id onto its file under ``base_path``.

        Percent-encoding keeps distinct ids on distinct files and leaves no
        separator in the name. The prefix rules out empty and dot-led names.
        """
        return self.base_path / f"account-{quote(account_id, safe='')}.json"

    def load_tree(self, account_id: str) -> TreeNode:
        path = self.path_for(account_id)
        if not path.exists():
            logger.debug("Seeding tree for %s at %s", account_id, path)
            tree = self._seed.model_copy(deep=True)
            self.save_tree(account_id, tree)
            return tree

        try:
            return TreeNode.model_validate_json(path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as exc:
            raise StorageError(f"Cannot read tree for {account_id!r} from {path}: {exc}") from exc

    def save_tree(self, account_id: str, tree: TreeNode) -> None:
        path = self.path_for(account_id)
        content = json.dumps(tree.to_storage(), indent=2, ensure_ascii=False)
        tmp_name: str | None = None
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
            # Write next to the target and rename so readers never see a partial file.
            fd, tmp_name = tempfile.mkstemp(dir=self.base_path, prefix=f".{path.stem}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_name, path)
        except OSError as exc:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Cannot write tree for {account_id!r} to {path}: {exc}") from exc
