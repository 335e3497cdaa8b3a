"""Public address tags for Moonwell market token contracts."""

from __future__ import annotations

from moonwell_tags.extractors.tag_extractor import return_tags

__all__ = ["return_tags"]
