"""Logging setup shared by the service layer and the HTTP server."""

from __future__ import annotations

import logging
import sys

from jsonmaker.config import JSONMAKER_LOG_LEVEL

# uvicorn covers uvicorn.error and uvicorn.access.
_ROOT_LOGGER_NAMES = ("jsonmaker", "server", "uvicorn")

# Attributes present on every LogRecord; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """Format records as text followed by their ``extra`` fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        pairs = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        return f"{base} | {pairs}"


def configure_logging(level: str | int = JSONMAKER_LOG_LEVEL) -> None:
    """Attach a single stream handler to the package loggers.

    Safe to call more than once; the handler is only installed the first time.
    """
    for name in _ROOT_LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        if any(getattr(handler, "_jsonmaker", False) for handler in logger.handlers):
            continue
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(KeyValueFormatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        handler._jsonmaker = True  # type: ignore[attr-defined]
        logger.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``.

    Handlers come from ``configure_logging``, which the entry points call once.
    """
    return logging.getLogger(name)
