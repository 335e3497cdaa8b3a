"""Tag extraction from Moonwell market subgraphs."""

from __future__ import annotations

from beartype import beartype

from moonwell_tags.extractors.endpoint_resolver import resolve_endpoint
from moonwell_tags.extractors.models import Tag
from moonwell_tags.parser.subgraph_client import SubgraphClient
from moonwell_tags.parser.tag_parser import parse_market, transform_market
from moonwell_tags.utils.config import PAGE_SIZE
from moonwell_tags.utils.errors import ConfigurationError, RemoteError
from moonwell_tags.utils.logger import get_logger

logger = get_logger(__name__)


@beartype
def fetch_all_tags(chain_id: str, url: str, api_client: SubgraphClient) -> list[Tag]:
    """
    Page through every market on a subgraph and build its tags.

    Pages are requested with a createdTimestamp cursor until one comes back
    with fewer than PAGE_SIZE markets.

    Args:
        chain_id: Chain the subgraph indexes
        url: Resolved subgraph URL
        api_client: Client used for the requests

    Returns:
        Tags for all valid markets, in subgraph order

    Raises:
        RemoteError: If any page request fails or a full page does not advance the cursor
        ValueError: If a market has a missing or non-integer createdTimestamp
    """
    logger.reset_metrics()

    tags: list[Tag] = []
    last_timestamp = 0
    pages = 0
    markets_seen = 0
    rejected = 0

    while True:
        markets_data = api_client.query_markets(url, last_timestamp)
        pages += 1
        markets_seen += len(markets_data)
        logger.debug(f"Page {pages}: {len(markets_data)} markets after timestamp {last_timestamp}")

        if not markets_data:
            break

        markets = [parse_market(market) for market in markets_data]
        for market in markets:
            tag = transform_market(market, chain_id)
            if tag is None:
                rejected += 1
                continue
            tags.append(tag)

        # Last page
        if len(markets_data) < PAGE_SIZE:
            break

        next_timestamp = max(market.created_timestamp for market in markets)
        if next_timestamp <= last_timestamp:
            raise RemoteError(
                f"Pagination cursor did not advance past {last_timestamp} on a full page",
                details={"last_timestamp": last_timestamp, "page": pages},
            )
        last_timestamp = next_timestamp

    logger.record_metric("pages_fetched", pages)
    logger.record_metric("markets_seen", markets_seen)
    logger.record_metric("markets_rejected", rejected)
    logger.record_metric("tags_produced", len(tags))
    return tags


@beartype
def return_tags(
    chain_id: str,
    api_key: str,
    api_client: SubgraphClient | None = None,
) -> list[Tag]:
    """
    Fetch the public address tags for every Moonwell market on a chain.

    Args:
        chain_id: Numeric chain identifier ("1284", "1285" or "8453")
        api_key: The Graph gateway API key
        api_client: Optional subgraph client (creates new if None)

    Returns:
        List of Tag objects, one per market with a usable symbol

    Raises:
        ConfigurationError: If the chain is not supported
        RemoteError: If the subgraph cannot be queried or returns an unexpected response
    """
    should_close = api_client is None
    if api_client is None:
        api_client = SubgraphClient()

    try:
        url = resolve_endpoint(chain_id, api_key)
        tags = fetch_all_tags(chain_id, url, api_client)
    except ConfigurationError as e:
        logger.error(f"Configuration error for chain {chain_id}: {e.message}")
        raise ConfigurationError(
            f"Failed to fetch tags for chain {chain_id}: {e.message}",
            details={**e.details, "chain_id": chain_id},
        ) from e
    except RemoteError as e:
        logger.error(f"Remote error for chain {chain_id}: {e.message}")
        raise RemoteError(
            f"Failed to fetch tags for chain {chain_id}: {e.message}",
            messages=e.messages,
            status_code=e.status_code,
            details={**e.details, "chain_id": chain_id},
        ) from e
    except Exception as e:
        logger.error(f"Unexpected error for chain {chain_id}: {e!r}")
        raise RemoteError(
            f"Failed to fetch tags for chain {chain_id}: An unknown error occurred.",
            messages=[str(e)],
            details={"chain_id": chain_id},
        ) from e
    finally:
        if should_close:
            api_client.close()

    logger.info(f"Fetched {len(tags)} tags for chain {chain_id}")
    logger.log_summary()
    return tags
