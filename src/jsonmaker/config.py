"""Local configuration for jsonmaker."""

from __future__ import annotations

import os
from pathlib import Path


DEFAULT_DATA_DIR = ".jsonmaker_data"
DEFAULT_SEED_TITLE = "Fishdan"
DEFAULT_SEED_VALUE = "https://www.fishdan.com"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_IMPORT_BYTES = 1024 * 1024
DEFAULT_MAX_IMPORT_DEPTH = 64

# One JSON record per account is stored under this directory.
JSONMAKER_DATA_PATH = Path(os.getenv("JSONMAKER_DATA_PATH", DEFAULT_DATA_DIR)).expanduser().resolve()
JSONMAKER_SEED_TITLE = os.getenv("JSONMAKER_SEED_TITLE", DEFAULT_SEED_TITLE)
JSONMAKER_SEED_VALUE = os.getenv("JSONMAKER_SEED_VALUE", DEFAULT_SEED_VALUE)
JSONMAKER_LOG_LEVEL = os.getenv("JSONMAKER_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
JSONMAKER_MAX_IMPORT_BYTES = int(os.getenv("JSONMAKER_MAX_IMPORT_BYTES", str(DEFAULT_MAX_IMPORT_BYTES)))
JSONMAKER_MAX_IMPORT_DEPTH = int(os.getenv("JSONMAKER_MAX_IMPORT_DEPTH", str(DEFAULT_MAX_IMPORT_DEPTH)))
