"""Subgraph endpoint resolution for supported chains."""

from __future__ import annotations

from beartype import beartype

from moonwell_tags.utils.config import API_KEY_PLACEHOLDER, SUBGRAPH_URLS
from moonwell_tags.utils.errors import ConfigurationError


@beartype
def supported_chain_ids() -> list[str]:
    """Return the chain identifiers with a known subgraph, sorted numerically."""
    return sorted(SUBGRAPH_URLS, key=int)


@beartype
def resolve_endpoint(chain_id: str, api_key: str) -> str:
    """
    Build the subgraph URL for a chain.

    Args:
        chain_id: Numeric chain identifier (e.g., "1284")
        api_key: The Graph gateway API key

    Returns:
        Subgraph URL with the API key filled in

    Raises:
        ConfigurationError: If the chain is unsupported or not numeric, or the key is empty
    """
    supported = ", ".join(supported_chain_ids())

    if not chain_id.isdigit():
        raise ConfigurationError(
            f"Invalid chain ID '{chain_id}': must be a numeric string. Supported chain IDs: {supported}",
            details={"chain_id": chain_id},
        )

    template = SUBGRAPH_URLS.get(chain_id)
    if template is None:
        raise ConfigurationError(
            f"Unsupported chain ID '{chain_id}'. Supported chain IDs: {supported}",
            details={"chain_id": chain_id},
        )

    if not api_key.strip():
        raise ConfigurationError("API key must be a non-empty string", details={"chain_id": chain_id})

    return template.replace(API_KEY_PLACEHOLDER, api_key, 1)
