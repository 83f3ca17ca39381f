"""Result codes and operation outcomes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ResultCode(str, Enum):
    """Outcome codes reported by tree operations."""

    NODE_ADDED = "node_added"
    NODE_DELETED = "node_deleted"
    TITLE_UPDATED = "title_updated"
    IMPORT_REPLACED = "import_replaced"
    IMPORT_APPENDED = "import_appended"

    MISSING_FIELDS = "missing_fields"
    TITLE_EXISTS = "title_exists"
    PARENT_NOT_FOUND = "parent_not_found"
    NODE_NOT_FOUND = "node_not_found"
    CANNOT_DELETE_ROOT = "cannot_delete_root"
    HAS_CHILDREN = "has_children"
    IMPORT_INVALID_JSON = "import_invalid_json"
    IMPORT_INVALID_STRUCTURE = "import_invalid_structure"
    IMPORT_DUPLICATE_TITLE = "import_duplicate_title"
    IMPORT_INVALID_MODE = "import_invalid_mode"
    IMPORT_TARGET_MISSING = "import_target_missing"
    IMPORT_TARGET_NOT_FOUND = "import_target_not_found"


SUCCESS_CODES = frozenset(
    {
        ResultCode.NODE_ADDED,
        ResultCode.NODE_DELETED,
        ResultCode.TITLE_UPDATED,
        ResultCode.IMPORT_REPLACED,
        ResultCode.IMPORT_APPENDED,
    }
)

_NOTICE_TEXT: dict[ResultCode, str] = {
    ResultCode.NODE_ADDED: "Node added.",
    ResultCode.NODE_DELETED: "Node deleted.",
    ResultCode.TITLE_UPDATED: "Title updated.",
    ResultCode.IMPORT_REPLACED: "Tree replaced from import.",
    ResultCode.IMPORT_APPENDED: "Imported nodes appended.",
    ResultCode.MISSING_FIELDS: "Please provide all required fields.",
    ResultCode.TITLE_EXISTS: "A node with that title already exists. Choose a different title.",
    ResultCode.PARENT_NOT_FOUND: "Unable to find the parent node.",
    ResultCode.NODE_NOT_FOUND: "The requested node could not be found.",
    ResultCode.CANNOT_DELETE_ROOT: "Cannot delete the root node.",
    ResultCode.HAS_CHILDREN: "Remove child nodes before deleting this node.",
    ResultCode.IMPORT_INVALID_JSON: "The import payload is not a valid JSON object.",
    ResultCode.IMPORT_INVALID_STRUCTURE: (
        "Each imported node must be an object with a title and optional value and children."
    ),
    ResultCode.IMPORT_DUPLICATE_TITLE: "The import contains a title that already exists.",
    ResultCode.IMPORT_INVALID_MODE: "Choose either replace or append as the import mode.",
    ResultCode.IMPORT_TARGET_MISSING: "Choose the node to append the import under.",
    ResultCode.IMPORT_TARGET_NOT_FOUND: "Unable to find the node to append the import under.",
}


def notice_text(code: ResultCode | str) -> str:
    """Return the human-readable notice for a result code, or an empty string."""
    try:
        return _NOTICE_TEXT[ResultCode(code)]
    except ValueError:
        return ""


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a single tree operation.

    Attributes:
        code: The result code.
        slug: Slug of the node the operation created or changed, if any.
    """

    code: ResultCode
    slug: str | None = None

    @property
    def success(self) -> bool:
        return self.code in SUCCESS_CODES

    @property
    def message(self) -> str:
        return notice_text(self.code)
