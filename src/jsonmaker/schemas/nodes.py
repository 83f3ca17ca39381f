"""Tree node models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class TreeNode(BaseModel):
    """A node in an account's tree.

    A node either carries a ``value`` (usually a URL) or has children; adding
    the first child discards the value.
    """

    title: str
    slug: str
    value: str | None = None
    children: list["TreeNode"] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_url(cls, data: Any) -> Any:
        """Accept records that stored the value under ``url``."""
        if isinstance(data, dict) and "url" in data:
            data = dict(data)
            url = data.pop("url")
            if not data.get("value"):
                data["value"] = url
        return data

    def to_storage(self) -> dict[str, Any]:
        """Serialize for persistence, omitting an absent value."""
        return self.model_dump(exclude_none=True)


class PublicNode(BaseModel):
    """Externally visible shape of a node; slugs are never exposed."""

    title: str
    value: str | None = None
    children: list["PublicNode"] | None = None
