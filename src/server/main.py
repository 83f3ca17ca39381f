"""FastAPI application for jsonmaker."""

from __future__ import annotations

from fastapi import FastAPI

from jsonmaker.config import JSONMAKER_DATA_PATH
from jsonmaker.service import TreeService
from jsonmaker.storage import JsonFileTreeStore
from jsonmaker.utils.logging_config import configure_logging
from server.routers.tree import router as tree_router


def create_app(service: TreeService | None = None) -> FastAPI:
    """Build the application around ``service``.

    Without a service, trees are stored as JSON files under
    ``JSONMAKER_DATA_PATH``.
    """
    configure_logging()
    app = FastAPI(title="jsonmaker", description="Per-account bookmark trees served as JSON.")
    app.state.service = service or TreeService(JsonFileTreeStore(JSONMAKER_DATA_PATH))
    app.include_router(tree_router)
    return app


app = create_app()
