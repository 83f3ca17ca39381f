"""Reusable form type aliases for FastAPI form parameters."""

from __future__ import annotations

from typing import Annotated, Optional, TypeAlias

from fastapi import Form

# Fields stay optional at the HTTP level so a blank or missing field is
# reported as ``missing_fields`` by the service instead of a 422.
OptStrForm: TypeAlias = Annotated[Optional[str], Form()]
