"""Tree read and mutation endpoints."""

from __future__ import annotations

import json
from typing import Any, Union
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse

from jsonmaker.schemas import OperationResult, PublicNode, ResultCode
from jsonmaker.service import TreeService
from jsonmaker.slugs import resolve_slug
from jsonmaker.utils.logging_config import get_logger
from server.form_types import OptStrForm
from server.models import ErrorResponse, OperationResponse

logger = get_logger(__name__)

router = APIRouter()

_HTTP_STATUS: dict[ResultCode, int] = {
    ResultCode.MISSING_FIELDS: status.HTTP_400_BAD_REQUEST,
    ResultCode.IMPORT_INVALID_JSON: status.HTTP_400_BAD_REQUEST,
    ResultCode.IMPORT_INVALID_STRUCTURE: status.HTTP_400_BAD_REQUEST,
    ResultCode.IMPORT_INVALID_MODE: status.HTTP_400_BAD_REQUEST,
    ResultCode.IMPORT_TARGET_MISSING: status.HTTP_400_BAD_REQUEST,
    ResultCode.PARENT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultCode.NODE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultCode.IMPORT_TARGET_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ResultCode.TITLE_EXISTS: status.HTTP_409_CONFLICT,
    ResultCode.IMPORT_DUPLICATE_TITLE: status.HTTP_409_CONFLICT,
    ResultCode.CANNOT_DELETE_ROOT: status.HTTP_409_CONFLICT,
    ResultCode.HAS_CHILDREN: status.HTTP_409_CONFLICT,
}

MUTATION_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_200_OK: {"model": OperationResponse, "description": "Operation applied"},
    status.HTTP_303_SEE_OTHER: {"description": "Redirect back to the editor with a notice"},
    status.HTTP_400_BAD_REQUEST: {"model": OperationResponse, "description": "Invalid input"},
    status.HTTP_404_NOT_FOUND: {"model": OperationResponse, "description": "Target node not found"},
    status.HTTP_409_CONFLICT: {"model": OperationResponse, "description": "Operation conflicts with the tree"},
}

MutationResponse = Union[JSONResponse, RedirectResponse]


class PrettyJSONResponse(JSONResponse):
    """Indented JSON with non-ASCII characters and slashes left as-is."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, indent=4, ensure_ascii=False).encode("utf-8")


def get_service(request: Request) -> TreeService:
    """Return the service attached to the running application."""
    return request.app.state.service


def safe_redirect_target(redirect: str | None) -> str | None:
    """Accept only same-site relative paths as redirect targets."""
    if not redirect:
        return None
    candidate = redirect.strip()
    if not candidate.startswith("/") or candidate.startswith("//") or "\\" in candidate:
        return None
    parts = urlsplit(candidate)
    if parts.scheme or parts.netloc:
        return None
    return candidate


def _with_notice(target: str, result: OperationResult) -> str:
    parts = urlsplit(target)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in {"jsonmaker_msg", "jsonmaker_status"}
    ]
    query.append(("jsonmaker_msg", result.code.value))
    query.append(("jsonmaker_status", "success" if result.success else "error"))
    return urlunsplit(parts._replace(query=urlencode(query)))


def _respond(result: OperationResult, redirect: str | None) -> MutationResponse:
    target = safe_redirect_target(redirect)
    if target is not None:
        return RedirectResponse(_with_notice(target, result), status_code=status.HTTP_303_SEE_OTHER)

    status_code = status.HTTP_200_OK if result.success else _HTTP_STATUS.get(result.code, status.HTTP_400_BAD_REQUEST)
    return JSONResponse(OperationResponse.from_result(result).model_dump(mode="json"), status_code=status_code)


@router.get(
    "/json/{account}/{slug}.json",
    response_model=None,
    responses={
        status.HTTP_200_OK: {"model": PublicNode, "description": "Public shape of the node"},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Node not found"},
    },
)
def read_node(account: str, slug: str, service: TreeService = Depends(get_service)) -> PrettyJSONResponse:
    """Serve the public JSON of one node.

    **Path Parameters**
    - **account** (`str`): Owner of the tree
    - **slug** (`str`): Node slug; percent-encoded titles are slugified

    **Returns**
    - **PrettyJSONResponse**: The node as ``{title, value?, children?}``, or
      ``{"error": "Node not found"}`` with status 404
    """
    node = service.get_public(account, resolve_slug(slug))
    if node is None:
        logger.info("Node not found", extra={"account_id": account, "slug": slug})
        return PrettyJSONResponse({"error": "Node not found"}, status_code=status.HTTP_404_NOT_FOUND)
    return PrettyJSONResponse(node)


@router.get("/api/{account}/preview", response_class=PlainTextResponse)
def preview_tree(account: str, service: TreeService = Depends(get_service)) -> PlainTextResponse:
    """Return the whole tree's public JSON as readable text."""
    return PlainTextResponse(service.preview(account), media_type="text/plain; charset=utf-8")


@router.post("/api/{account}/nodes", response_model=None, responses=MUTATION_RESPONSES)
def add_node(
    account: str,
    parent: OptStrForm = None,
    title: OptStrForm = None,
    value: OptStrForm = None,
    redirect: OptStrForm = None,
    service: TreeService = Depends(get_service),
) -> MutationResponse:
    """Add a node titled ``title`` under ``parent``."""
    result = service.add(account, resolve_slug(parent or ""), title or "", value)
    return _respond(result, redirect)


@router.post("/api/{account}/nodes/{slug}/rename", response_model=None, responses=MUTATION_RESPONSES)
def rename_node(
    account: str,
    slug: str,
    title: OptStrForm = None,
    redirect: OptStrForm = None,
    service: TreeService = Depends(get_service),
) -> MutationResponse:
    """Change a node's title; its slug is re-derived from the new title."""
    result = service.rename(account, resolve_slug(slug), title or "")
    return _respond(result, redirect)


@router.post("/api/{account}/nodes/{slug}/delete", response_model=None, responses=MUTATION_RESPONSES)
def delete_node(
    account: str,
    slug: str,
    redirect: OptStrForm = None,
    service: TreeService = Depends(get_service),
) -> MutationResponse:
    """Delete a childless node other than the root."""
    result = service.delete(account, resolve_slug(slug))
    return _respond(result, redirect)


@router.post("/api/{account}/import", response_model=None, responses=MUTATION_RESPONSES)
def import_tree(
    account: str,
    payload: OptStrForm = None,
    mode: OptStrForm = None,
    target: OptStrForm = None,
    redirect: OptStrForm = None,
    service: TreeService = Depends(get_service),
) -> MutationResponse:
    """Import JSON, replacing the tree or appending under ``target``.

    **Form Fields**
    - **payload** (`str`): JSON object in the public node shape
    - **mode** (`str`, optional): ``replace`` (default) or ``append``
    - **target** (`str`, optional): Slug to append under; required for ``append``
    - **redirect** (`str`, optional): Local path to redirect back to
    """
    target_slug = resolve_slug(target) if target else None
    result = service.import_json(account, payload or "", mode or "replace", target_slug)
    return _respond(result, redirect)
