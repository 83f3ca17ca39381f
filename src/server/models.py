"""Pydantic models for the tree API."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from jsonmaker.schemas import OperationResult


class OperationStatus(str, Enum):
    """Overall status reported for a mutation."""

    SUCCESS = "success"
    ERROR = "error"


class OperationResponse(BaseModel):
    """Response model for the mutation endpoints.

    Attributes
    ----------
    status : OperationStatus
        ``success`` or ``error``.
    code : str
        Result code of the operation, e.g. ``node_added`` or ``title_exists``.
    message : str
        Human-readable notice for ``code``.
    slug : str | None
        Slug of the node that was created or changed, when there is one.

    """

    status: OperationStatus = Field(..., description="Operation status")
    code: str = Field(..., description="Result code")
    message: str = Field(..., description="Human-readable notice")
    slug: str | None = Field(default=None, description="Slug of the affected node")

    @classmethod
    def from_result(cls, result: OperationResult) -> OperationResponse:
        """Build the response for an operation result."""
        return cls(
            status=OperationStatus.SUCCESS if result.success else OperationStatus.ERROR,
            code=result.code.value,
            message=result.message,
            slug=result.slug,
        )


class ErrorResponse(BaseModel):
    """Body returned when a requested node does not exist."""

    error: str = Field(..., description="Error message")
