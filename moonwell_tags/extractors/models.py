"""Data models for Moonwell markets and the tags built from them."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class OutputToken:
    """The market token a Moonwell market issues to suppliers."""

    id: str
    name: str
    symbol: str


@dataclass
class MarketRecord:
    """A market as returned by the subgraph."""

    output_token: OutputToken
    created_timestamp: int


@dataclass(frozen=True)
class Tag:
    """A public address tag for one market token contract."""

    contract_address: str
    public_name_tag: str
    project_name: str
    ui_website_link: str
    public_note: str

    def to_dict(self) -> dict[str, str]:
        """Return the tag keyed by the registry column names."""
        return {
            "Contract Address": self.contract_address,
            "Public Name Tag": self.public_name_tag,
            "Project Name": self.project_name,
            "UI/Website Link": self.ui_website_link,
            "Public Note": self.public_note,
        }
