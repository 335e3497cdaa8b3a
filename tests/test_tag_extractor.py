"""Tests for tag extractor module."""

from __future__ import annotations

from unittest.mock import MagicMock, call, patch

import httpx
import pytest

from moonwell_tags.extractors import tag_extractor
from moonwell_tags.extractors.endpoint_resolver import resolve_endpoint
from moonwell_tags.extractors.models import Tag
from moonwell_tags.extractors.tag_extractor import fetch_all_tags, return_tags
from moonwell_tags.parser.subgraph_client import SubgraphClient
from moonwell_tags.utils.errors import ConfigurationError, RemoteError


def _page(size: int, start_timestamp: int, prefix: str) -> list[dict[str, object]]:
    return [
        {
            "outputToken": {"id": f"0x{prefix}{i}", "name": f"Token {prefix}{i}", "symbol": f"{prefix}{i}"},
            "createdTimestamp": str(start_timestamp + i),
        }
        for i in range(size)
    ]


def test_return_tags_end_to_end() -> None:
    """Test one short page with a valid and an empty-symbol market."""
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.return_value = [
        {"outputToken": {"id": "0xAAA", "name": "Moonwell ABC", "symbol": "ABC"}, "createdTimestamp": "100"},
        {"outputToken": {"id": "0xBBB", "name": "Nameless", "symbol": ""}, "createdTimestamp": "101"},
    ]

    tags = return_tags("1284", "key", api_client=mock_client)

    assert len(tags) == 1
    assert tags[0].contract_address == "eip155:1284:0xAAA"
    assert tags[0].public_name_tag == "ABC Token"
    mock_client.query_markets.assert_called_once_with(resolve_endpoint("1284", "key"), 0)
    # Should not close the provided client
    mock_client.close.assert_not_called()


def test_fetch_all_tags_pagination() -> None:
    """Test pages of 1000, 1000 and 400 markets take three queries."""
    page1 = _page(1000, 1_000, "a")
    page2 = _page(1000, 5_000, "b")
    # Max timestamp not in last position
    page2[500]["createdTimestamp"] = "9999"
    page3 = _page(400, 10_000, "c")

    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.side_effect = [page1, page2, page3]

    tags = fetch_all_tags("8453", "https://example.test/graphql", mock_client)

    assert mock_client.query_markets.call_count == 3
    assert mock_client.query_markets.call_args_list == [
        call("https://example.test/graphql", 0),
        call("https://example.test/graphql", 1_999),
        call("https://example.test/graphql", 9_999),
    ]
    assert len(tags) == 2400
    expected_ids = [m["outputToken"]["id"] for m in page1 + page2 + page3]
    assert [tag.contract_address for tag in tags] == [f"eip155:8453:{token_id}" for token_id in expected_ids]


def test_fetch_all_tags_empty_last_page() -> None:
    """Test a full page followed by an empty page stops the loop."""
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.side_effect = [_page(1000, 1, "a"), []]

    tags = fetch_all_tags("1285", "https://example.test/graphql", mock_client)

    assert len(tags) == 1000
    assert mock_client.query_markets.call_count == 2
    assert mock_client.query_markets.call_args_list[1] == call("https://example.test/graphql", 1000)


def test_fetch_all_tags_no_markets() -> None:
    """Test an empty subgraph yields no tags after one query."""
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.return_value = []

    assert fetch_all_tags("1284", "https://example.test/graphql", mock_client) == []
    mock_client.query_markets.assert_called_once()


def test_fetch_all_tags_filters_invalid_symbols() -> None:
    """Test rejected markets are dropped while order is preserved."""
    page = [
        {"outputToken": {"id": "0x1", "name": "One", "symbol": "ONE"}, "createdTimestamp": "1"},
        {"outputToken": {"id": "0x2", "name": "Two", "symbol": "   "}, "createdTimestamp": "2"},
        {"outputToken": {"id": "0x3", "name": "Three", "symbol": "<b>3</b>"}, "createdTimestamp": "3"},
        {"outputToken": {"id": "0x4", "name": "Four", "symbol": "FOUR"}, "createdTimestamp": "4"},
    ]
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.return_value = page

    tags = fetch_all_tags("1284", "https://example.test/graphql", mock_client)

    assert [tag.public_name_tag for tag in tags] == ["ONE Token", "FOUR Token"]
    assert all(isinstance(tag, Tag) for tag in tags)


def test_return_tags_creates_and_closes_client() -> None:
    """Test a client is created and closed when none is provided."""
    with patch("moonwell_tags.extractors.tag_extractor.SubgraphClient") as mock_client_class:
        mock_client = MagicMock(spec=SubgraphClient)
        mock_client.query_markets.return_value = []
        mock_client_class.return_value = mock_client

        tags = return_tags("8453", "key")

        assert tags == []
        mock_client.close.assert_called_once()


def test_return_tags_unsupported_chain() -> None:
    """Test an unsupported chain raises ConfigurationError without querying."""
    mock_client = MagicMock(spec=SubgraphClient)

    with pytest.raises(ConfigurationError, match="Failed to fetch tags for chain 137") as exc_info:
        return_tags("137", "key", api_client=mock_client)

    assert "1284, 1285, 8453" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, ConfigurationError)
    assert exc_info.value.details["chain_id"] == "137"
    mock_client.query_markets.assert_not_called()


def test_return_tags_http_500() -> None:
    """Test an HTTP 500 fails the whole operation with RemoteError."""
    http_client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(500)))
    client = SubgraphClient(client=http_client)

    with pytest.raises(RemoteError, match="Failed to fetch tags for chain 1284: HTTP error! status: 500") as exc_info:
        return_tags("1284", "key", api_client=client)

    assert exc_info.value.status_code == 500
    assert isinstance(exc_info.value.__cause__, RemoteError)
    client.close()


def test_return_tags_error_on_later_page() -> None:
    """Test a failure after successful pages returns no partial result."""
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.side_effect = [
        _page(1000, 1, "a"),
        RemoteError("GraphQL errors: boom", messages=["boom"]),
    ]

    with pytest.raises(RemoteError, match="boom") as exc_info:
        return_tags("1285", "key", api_client=mock_client)

    assert exc_info.value.messages == ["boom"]
    assert mock_client.query_markets.call_count == 2


def test_return_tags_unexpected_error() -> None:
    """Test unrecognised failures are normalised to RemoteError."""
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.return_value = [
        {"outputToken": {"id": "0x1", "name": "One", "symbol": "ONE"}, "createdTimestamp": "not-a-number"},
    ]

    with pytest.raises(RemoteError, match="An unknown error occurred") as exc_info:
        return_tags("1284", "key", api_client=mock_client)

    assert isinstance(exc_info.value.__cause__, ValueError)


def test_fetch_all_tags_records_metrics() -> None:
    """Test the run summary counts pages, markets and rejections."""
    page = _page(3, 1, "a")
    page[1]["outputToken"] = {"id": "0x2", "name": "Blank", "symbol": ""}
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.return_value = page

    fetch_all_tags("1284", "https://example.test/graphql", mock_client)

    assert tag_extractor.logger.metrics == {
        "pages_fetched": 1,
        "markets_seen": 3,
        "markets_rejected": 1,
        "tags_produced": 2,
    }


def test_fetch_all_tags_stalled_cursor() -> None:
    """Test a full page that does not move the cursor stops the loop."""
    page = _page(1000, 0, "a")
    for market in page:
        market["createdTimestamp"] = "0"
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.side_effect = [page, page, RuntimeError("queried again")]

    with pytest.raises(RemoteError, match="did not advance past 0"):
        fetch_all_tags("1284", "https://example.test/graphql", mock_client)

    mock_client.query_markets.assert_called_once()


def test_fetch_all_tags_cursor_moving_backwards() -> None:
    """Test a full page older than the cursor raises instead of repeating."""
    older_page = _page(1000, 1, "b")
    for market in older_page:
        market["createdTimestamp"] = "5"
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.side_effect = [
        _page(1000, 1, "a"),
        older_page,
        RuntimeError("queried again"),
    ]

    with pytest.raises(RemoteError, match="did not advance past 1000"):
        fetch_all_tags("1284", "https://example.test/graphql", mock_client)

    assert mock_client.query_markets.call_count == 2


def test_return_tags_missing_timestamps() -> None:
    """Test a full page without createdTimestamp fails after a single query."""
    page = _page(1000, 1, "a")
    for market in page:
        del market["createdTimestamp"]
    mock_client = MagicMock(spec=SubgraphClient)
    mock_client.query_markets.side_effect = [page] * 5 + [RuntimeError("queried again")]

    with pytest.raises(RemoteError, match="An unknown error occurred") as exc_info:
        return_tags("1284", "key", api_client=mock_client)

    assert isinstance(exc_info.value.__cause__, ValueError)
    mock_client.query_markets.assert_called_once()
