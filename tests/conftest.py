"""Shared pytest configuration."""

from __future__ import annotations

import os
import tempfile

# Keep test runs from writing into the working directory's logs/
os.environ.setdefault("MOONWELL_TAGS_LOG_DIR", tempfile.mkdtemp(prefix="moonwell_tags_logs_"))
