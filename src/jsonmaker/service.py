"""Tree operations for one account: validate, mutate, persist."""

from __future__ import annotations

from enum import Enum
from typing import Any

from jsonmaker.config import JSONMAKER_MAX_IMPORT_BYTES
from jsonmaker.exceptions import InvalidJSONError
from jsonmaker.importer import ALLOWED_KEYS, normalize_import_tree, parse_import_payload
from jsonmaker.mutator import add_child, remove_child, rename_node
from jsonmaker.projector import render_public_json, to_public
from jsonmaker.schemas import OperationResult, ResultCode, TreeNode
from jsonmaker.slugs import make_unique_slug
from jsonmaker.storage import TreeStore
from jsonmaker.utils.logging_config import get_logger
from jsonmaker.walker import count_nodes, exists_by_title, find_by_id

logger = get_logger(__name__)


class ImportMode(str, Enum):
    """How an import is applied to the existing tree."""

    REPLACE = "replace"
    APPEND = "append"


def unwrap_account_envelope(data: dict[str, Any]) -> dict[str, Any]:
    """Unwrap ``{"<account>": {...}}`` exports so they can be appended.

    A single-key object whose key is not a node field and whose value is an
    object is treated as a wrapper around the real node.
    """
    if len(data) != 1:
        return data
    (key, inner), = data.items()
    if key not in ALLOWED_KEYS and isinstance(inner, dict):
        return inner
    return data


class TreeService:
    """Entry points used by the HTTP layer.

    Every method loads the account's tree, runs one operation and saves the
    tree only when the operation succeeds. Expected failures come back as
    result codes; nothing here raises for bad input.
    """

    def __init__(self, store: TreeStore, *, max_import_bytes: int = JSONMAKER_MAX_IMPORT_BYTES) -> None:
        self.store = store
        self.max_import_bytes = max_import_bytes

    def get_tree(self, account_id: str) -> TreeNode:
        return self.store.load_tree(account_id)

    def get_public(self, account_id: str, slug: str) -> dict[str, Any] | None:
        """Return the public shape of the node at ``slug``, or None."""
        node = find_by_id(self.store.load_tree(account_id), slug)
        if node is None:
            return None
        return to_public(node)

    def preview(self, account_id: str) -> str:
        """Pretty-printed public JSON of the whole tree."""
        return render_public_json(self.store.load_tree(account_id))

    def add(self, account_id: str, parent_slug: str, title: str, value: str | None = None) -> OperationResult:
        """Add a node titled ``title`` under ``parent_slug``."""
        parent_slug = (parent_slug or "").strip()
        title = (title or "").strip()
        value = (value or "").strip() or None
        if not title or not parent_slug:
            return self._reject(account_id, "add", ResultCode.MISSING_FIELDS)

        tree = self.store.load_tree(account_id)
        if exists_by_title(tree, title):
            return self._reject(account_id, "add", ResultCode.TITLE_EXISTS, title=title)

        slug = make_unique_slug(title, tree)
        node = TreeNode(title=title, slug=slug, value=value)
        if not add_child(tree, parent_slug, node):
            return self._reject(account_id, "add", ResultCode.PARENT_NOT_FOUND, parent=parent_slug)

        return self._commit(account_id, tree, ResultCode.NODE_ADDED, slug)

    def delete(self, account_id: str, target_slug: str) -> OperationResult:
        """Delete the childless, non-root node at ``target_slug``."""
        target_slug = (target_slug or "").strip()
        if not target_slug:
            return self._reject(account_id, "delete", ResultCode.MISSING_FIELDS)

        tree = self.store.load_tree(account_id)
        if tree.slug == target_slug:
            return self._reject(account_id, "delete", ResultCode.CANNOT_DELETE_ROOT, target=target_slug)

        target = find_by_id(tree, target_slug)
        if target is None:
            return self._reject(account_id, "delete", ResultCode.NODE_NOT_FOUND, target=target_slug)
        if target.children:
            return self._reject(account_id, "delete", ResultCode.HAS_CHILDREN, target=target_slug)

        if not remove_child(tree, target_slug):
            return self._reject(account_id, "delete", ResultCode.NODE_NOT_FOUND, target=target_slug)

        return self._commit(account_id, tree, ResultCode.NODE_DELETED, target_slug)

    def rename(self, account_id: str, target_slug: str, new_title: str) -> OperationResult:
        """Give the node at ``target_slug`` a new title and a slug derived from it."""
        target_slug = (target_slug or "").strip()
        new_title = (new_title or "").strip()
        if not target_slug or not new_title:
            return self._reject(account_id, "rename", ResultCode.MISSING_FIELDS)

        tree = self.store.load_tree(account_id)
        if exists_by_title(tree, new_title, exclude_slug=target_slug):
            return self._reject(account_id, "rename", ResultCode.TITLE_EXISTS, title=new_title)

        new_slug = make_unique_slug(new_title, tree, exclude_slug=target_slug)
        if not rename_node(tree, target_slug, new_title, new_slug):
            return self._reject(account_id, "rename", ResultCode.NODE_NOT_FOUND, target=target_slug)

        return self._commit(account_id, tree, ResultCode.TITLE_UPDATED, new_slug)

    def import_json(
        self,
        account_id: str,
        payload: str,
        mode: ImportMode | str,
        target_slug: str | None = None,
    ) -> OperationResult:
        """Replace the tree with, or append to it, the nodes in ``payload``.

        Args:
            account_id: Owner of the tree.
            payload: Raw JSON text.
            mode: ``replace`` or ``append``.
            target_slug: Node to append under; required in append mode.
        """
        try:
            import_mode = ImportMode(mode)
        except ValueError:
            return self._reject(account_id, "import", ResultCode.IMPORT_INVALID_MODE, mode=str(mode))

        payload = (payload or "").strip()
        target_slug = (target_slug or "").strip()
        if not payload:
            return self._reject(account_id, "import", ResultCode.MISSING_FIELDS)
        if import_mode is ImportMode.APPEND and not target_slug:
            return self._reject(account_id, "import", ResultCode.IMPORT_TARGET_MISSING)
        if len(payload.encode("utf-8")) > self.max_import_bytes:
            return self._reject(account_id, "import", ResultCode.IMPORT_INVALID_JSON, reason="payload too large")

        try:
            data = parse_import_payload(payload)
        except InvalidJSONError as exc:
            return self._reject(account_id, "import", exc.code, reason=str(exc))

        if import_mode is ImportMode.REPLACE:
            outcome = normalize_import_tree(data)
            if not outcome.ok:
                return self._reject(account_id, "import", outcome.error, reason=outcome.detail)
            return self._commit(account_id, outcome.node, ResultCode.IMPORT_REPLACED, outcome.node.slug)

        tree = self.store.load_tree(account_id)
        outcome = normalize_import_tree(unwrap_account_envelope(data), existing_tree=tree)
        if not outcome.ok:
            return self._reject(account_id, "import", outcome.error, reason=outcome.detail)
        if not add_child(tree, target_slug, outcome.node):
            return self._reject(account_id, "import", ResultCode.IMPORT_TARGET_NOT_FOUND, target=target_slug)

        return self._commit(account_id, tree, ResultCode.IMPORT_APPENDED, outcome.node.slug)

    def _commit(self, account_id: str, tree: TreeNode, code: ResultCode, slug: str | None) -> OperationResult:
        self.store.save_tree(account_id, tree)
        logger.info(
            "Tree updated",
            extra={"account_id": account_id, "code": code.value, "slug": slug, "nodes": count_nodes(tree)},
        )
        return OperationResult(code=code, slug=slug)

    def _reject(self, account_id: str, operation: str, code: ResultCode, **details: Any) -> OperationResult:
        logger.warning(
            "Tree operation rejected",
            extra={"account_id": account_id, "operation": operation, "code": code.value, **details},
        )
        return OperationResult(code=code)
