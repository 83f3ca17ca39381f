"""Shared schemas for jsonmaker."""

from jsonmaker.schemas.nodes import PublicNode, TreeNode
from jsonmaker.schemas.results import OperationResult, ResultCode, notice_text

__all__ = ["OperationResult", "PublicNode", "ResultCode", "TreeNode", "notice_text"]
