"""Run the jsonmaker HTTP server: ``python -m server``."""

import os

import uvicorn

from jsonmaker.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "8000"))
    reload = os.getenv("RELOAD", "false").lower() == "true"

    # Handlers must be in place before uvicorn creates its loggers.
    configure_logging()
    logger.info("Serving trees", extra={"host": host, "port": port, "reload": reload})

    # uvicorn's own dictConfig would replace our handlers.
    uvicorn.run("server.main:app", host=host, port=port, reload=reload, log_config=None)


if __name__ == "__main__":
    main()
