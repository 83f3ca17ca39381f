"""jsonmaker: per-account bookmark trees served as JSON."""

from jsonmaker.exceptions import (
    DuplicateTitleError,
    ImportValidationError,
    InvalidJSONError,
    InvalidStructureError,
    JsonmakerError,
    StorageError,
)
from jsonmaker.importer import ImportOutcome, normalize_import_node, normalize_import_tree
from jsonmaker.projector import render_public_json, to_public
from jsonmaker.schemas import OperationResult, PublicNode, ResultCode, TreeNode
from jsonmaker.service import ImportMode, TreeService
from jsonmaker.storage import InMemoryTreeStore, JsonFileTreeStore

__all__ = [
    "DuplicateTitleError",
    "ImportMode",
    "ImportOutcome",
    "ImportValidationError",
    "InMemoryTreeStore",
    "InvalidJSONError",
    "InvalidStructureError",
    "JsonFileTreeStore",
    "JsonmakerError",
    "OperationResult",
    "PublicNode",
    "ResultCode",
    "StorageError",
    "TreeNode",
    "TreeService",
    "normalize_import_node",
    "normalize_import_tree",
    "render_public_json",
    "to_public",
]
