"""Moonwell subgraph client for GraphQL requests."""

from __future__ import annotations

from beartype import beartype
from httpx import Client, HTTPError, HTTPStatusError

from moonwell_tags.utils.config import PAGE_SIZE, REQUEST_TIMEOUT
from moonwell_tags.utils.errors import RemoteError
from moonwell_tags.utils.logger import get_logger

logger = get_logger(__name__)

MARKETS_QUERY = f"""
query GetMarkets($lastTimestamp: BigInt) {{
    markets(
        first: {PAGE_SIZE}
        orderBy: createdTimestamp
        orderDirection: asc
        where: {{ createdTimestamp_gt: $lastTimestamp }}
    ) {{
        outputToken {{
            id
            name
            symbol
        }}
        createdTimestamp
    }}
}}
"""

UNKNOWN_ERROR_MESSAGE = "Unknown error"


def _error_messages(errors: list[object]) -> list[str]:
    """Collect GraphQL error messages, normalising entries without one."""
    messages = []
    for error in errors:
        message = error.get("message") if isinstance(error, dict) else None
        messages.append(message if isinstance(message, str) and message else UNKNOWN_ERROR_MESSAGE)
    return messages


class SubgraphClient:
    """Client for querying a Moonwell markets subgraph."""

    def __init__(self, timeout: float = REQUEST_TIMEOUT, client: Client | None = None) -> None:
        """
        Initialize the subgraph client.

        Args:
            timeout: Request timeout in seconds
            client: Optional preconfigured httpx client (e.g. with a mock transport)
        """
        self.client = client if client is not None else Client(timeout=timeout)

    @beartype
    def query_markets(self, url: str, last_timestamp: int = 0) -> list[dict[str, object]]:
        """
        Fetch one page of markets created after a timestamp.

        Args:
            url: Resolved subgraph URL
            last_timestamp: Pagination cursor; only markets created strictly later are returned

        Returns:
            List of raw market dictionaries, oldest first

        Raises:
            RemoteError: If the request fails, the server reports errors or the data is missing
        """
        payload = {
            "query": MARKETS_QUERY,
            "variables": {"lastTimestamp": last_timestamp},
        }
        headers = {"Content-Type": "application/json", "Accept": "application/json"}

        try:
            response = self.client.post(url, json=payload, headers=headers)
            response.raise_for_status()
        except HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(f"Subgraph returned HTTP {status_code} (lastTimestamp={last_timestamp})")
            raise RemoteError(
                f"HTTP error! status: {status_code}",
                messages=[str(e)],
                status_code=status_code,
                details={"last_timestamp": last_timestamp},
            ) from e
        except HTTPError as e:
            logger.error(f"Subgraph request failed (lastTimestamp={last_timestamp}): {e}")
            raise RemoteError(
                f"Request to subgraph failed: {e}",
                messages=[str(e)],
                details={"last_timestamp": last_timestamp},
            ) from e

        try:
            result = response.json()
        except ValueError as e:
            raise RemoteError("Subgraph response is not valid JSON", status_code=response.status_code) from e

        if not isinstance(result, dict):
            raise RemoteError("Subgraph response is not a JSON object", status_code=response.status_code)

        errors = result.get("errors")
        if errors:
            messages = _error_messages(errors if isinstance(errors, list) else [errors])
            for message in messages:
                logger.error(f"GraphQL error: {message}")
            raise RemoteError(
                f"GraphQL errors: {'; '.join(messages)}",
                messages=messages,
                status_code=response.status_code,
                details={"last_timestamp": last_timestamp},
            )

        # The Graph returns data in {"data": {"markets": [...]}} format
        data = result.get("data")
        markets = data.get("markets") if isinstance(data, dict) else None
        if not isinstance(markets, list):
            logger.debug(f"Unexpected response format. Full response: {result}")
            raise RemoteError(
                "Missing markets data in subgraph response",
                status_code=response.status_code,
                details={"last_timestamp": last_timestamp},
            )
        if not all(isinstance(market, dict) for market in markets):
            raise RemoteError(
                "Malformed market entry in subgraph response",
                status_code=response.status_code,
                details={"last_timestamp": last_timestamp},
            )

        return markets

    def close(self) -> None:
        """Close the HTTP client."""
        self.client.close()

    def __enter__(self) -> SubgraphClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
