"""Configuration constants for the Moonwell tag fetcher."""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType

# Subgraph endpoints (The Graph decentralized network gateway)
API_KEY_PLACEHOLDER = "[api-key]"
SUBGRAPH_URLS = MappingProxyType(
    {
        # Moonbeam
        "1284": "https://gateway.thegraph.com/api/[api-key]/subgraphs/id/DQhrdUHwspQf3hSjDtyfS6uqq9YiKoLF3Ut3U9os2HK",
        # Moonriver
        "1285": "https://gateway.thegraph.com/api/[api-key]/subgraphs/id/7bPuKwgzC5XGvQ7kmSXhNkyo3F7RMrJpDtRSs7gJPNdU",
        # Base
        "8453": "https://gateway.thegraph.com/api/[api-key]/subgraphs/id/33ex1ExmYQtwGVwri1AP3oMFPGSc1R5kNKWwXNDoVgT9",
    }
)

# Pagination
PAGE_SIZE = 1000  # Maximum "first" accepted by the subgraph

# Tag formatting
MAX_SYMBOL_LENGTH = 44
ELLIPSIS = "..."
PROJECT_NAME = "Moonwell"
PROJECT_URL = "https://moonwell.fi"

# HTTP
REQUEST_TIMEOUT = float(os.getenv("MOONWELL_TAGS_TIMEOUT", "30.0"))

# Logging
LOGS_DIR = Path(os.getenv("MOONWELL_TAGS_LOG_DIR", Path.cwd() / "logs"))
LOG_FILE = LOGS_DIR / "moonwell_tags.log"
