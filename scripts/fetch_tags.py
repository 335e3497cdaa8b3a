"""Fetch Moonwell address tags for a chain and print them as JSON."""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

from beartype import beartype
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from moonwell_tags.extractors.endpoint_resolver import supported_chain_ids
from moonwell_tags.extractors.tag_extractor import return_tags
from moonwell_tags.utils.errors import TagFetchError


@beartype
def main(chain_id: str, api_key: str) -> None:
    """
    Fetch tags for one chain and write them to stdout.

    Args:
        chain_id: Numeric chain identifier
        api_key: The Graph gateway API key
    """
    try:
        tags = return_tags(chain_id, api_key)
    except TagFetchError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps([tag.to_dict() for tag in tags], indent=2))


if __name__ == "__main__":
    load_dotenv()

    if len(sys.argv) < 2:
        print("Usage: python scripts/fetch_tags.py <chain_id> [api_key]")
        print(f"Supported chain IDs: {', '.join(supported_chain_ids())}")
        print("The API key defaults to the THEGRAPH_API_KEY environment variable.")
        sys.exit(1)

    chain_id = sys.argv[1]
    api_key = sys.argv[2] if len(sys.argv) > 2 else os.getenv("THEGRAPH_API_KEY", "")
    main(chain_id, api_key)
