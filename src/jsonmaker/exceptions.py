"""Custom exceptions for jsonmaker."""

from __future__ import annotations

from jsonmaker.schemas.results import ResultCode


class JsonmakerError(Exception):
    """Base exception for jsonmaker operations."""


class StorageError(JsonmakerError):
    """A stored tree record could not be read or written."""


class ImportValidationError(JsonmakerError):
    """An import payload was rejected.

    Each subclass carries the result code reported to callers.
    """

    code: ResultCode = ResultCode.IMPORT_INVALID_STRUCTURE


class InvalidJSONError(ImportValidationError):
    """Payload is not parsable JSON or its top-level value is not an object."""

    code = ResultCode.IMPORT_INVALID_JSON


class InvalidStructureError(ImportValidationError):
    """Payload violates the node schema somewhere in the tree."""

    code = ResultCode.IMPORT_INVALID_STRUCTURE


class DuplicateTitleError(ImportValidationError):
    """Payload repeats a title, or reuses one already present in the tree."""

    code = ResultCode.IMPORT_DUPLICATE_TITLE
