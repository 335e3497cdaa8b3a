"""Market validation and transformation into address tags."""

from __future__ import annotations

import re

from beartype import beartype

from moonwell_tags.extractors.models import MarketRecord, OutputToken, Tag
from moonwell_tags.utils.config import ELLIPSIS, MAX_SYMBOL_LENGTH, PROJECT_NAME, PROJECT_URL
from moonwell_tags.utils.logger import get_logger

logger = get_logger(__name__)

MARKUP_PATTERN = re.compile(r"<[^>]*>")


@beartype
def parse_market(market: dict[str, object]) -> MarketRecord:
    """
    Decode a raw subgraph market.

    Args:
        market: Market dictionary from the subgraph response

    Returns:
        MarketRecord with missing token fields decoded as empty strings

    Raises:
        ValueError: If createdTimestamp is missing or not an integer
    """
    token = market.get("outputToken")
    if not isinstance(token, dict):
        token = {}

    # Subgraph BigInt fields are serialised as strings
    raw_timestamp = market.get("createdTimestamp")
    if isinstance(raw_timestamp, bool) or not isinstance(raw_timestamp, (int, str)):
        raise ValueError(f"Invalid createdTimestamp: {raw_timestamp!r}")
    created_timestamp = int(raw_timestamp)

    return MarketRecord(
        output_token=OutputToken(
            id=str(token.get("id") or ""),
            name=str(token.get("name") or ""),
            symbol=str(token.get("symbol") or ""),
        ),
        created_timestamp=created_timestamp,
    )


@beartype
def is_valid_symbol(symbol: str) -> bool:
    """Reject blank symbols and symbols carrying markup such as <script>."""
    if not symbol.strip():
        return False
    return MARKUP_PATTERN.search(symbol) is None


@beartype
def truncate_symbol(symbol: str, max_length: int = MAX_SYMBOL_LENGTH) -> str:
    """
    Shorten a symbol to fit the public name tag.

    Args:
        symbol: Token symbol
        max_length: Maximum length of the result, ellipsis included

    Returns:
        The symbol unchanged if short enough, otherwise its head followed by "..."
    """
    if len(symbol) <= max_length:
        return symbol
    if max_length < len(ELLIPSIS):
        return symbol[: max(max_length, 0)]
    return symbol[: max_length - len(ELLIPSIS)] + ELLIPSIS


@beartype
def transform_market(market: MarketRecord, chain_id: str) -> Tag | None:
    """
    Build the address tag for one market.

    Args:
        market: Decoded market
        chain_id: Chain the market lives on

    Returns:
        Tag for the market's output token, or None if the symbol is rejected
    """
    token = market.output_token
    if not is_valid_symbol(token.symbol):
        logger.warning(f"Skipping market token {token.id or '<no id>'}: invalid symbol {token.symbol!r}")
        return None

    return Tag(
        contract_address=f"eip155:{chain_id}:{token.id}",
        public_name_tag=f"{truncate_symbol(token.symbol)} Token",
        project_name=PROJECT_NAME,
        ui_website_link=PROJECT_URL,
        public_note=f"The Moonwell market token contract for {token.symbol} ({token.name}).",
    )
