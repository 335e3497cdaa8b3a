"""Endpoint resolution and tag models for Moonwell subgraphs."""

from __future__ import annotations

from moonwell_tags.extractors.endpoint_resolver import resolve_endpoint, supported_chain_ids
from moonwell_tags.extractors.models import MarketRecord, OutputToken, Tag

__all__ = ["MarketRecord", "OutputToken", "Tag", "resolve_endpoint", "supported_chain_ids"]
