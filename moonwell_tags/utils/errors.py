"""Exceptions raised while fetching Moonwell tags."""

from __future__ import annotations


class TagFetchError(Exception):
    """
    Base exception for the tag fetcher.
    Every error raised by this package inherits from it.
    """

    def __init__(self, message: str, details: dict[str, object] | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human readable description
            details: Extra context (chain id, cursor, ...)
        """
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(TagFetchError):
    """Unsupported or malformed chain identifier, or missing API key."""


class RemoteError(TagFetchError):
    """Transport failure, GraphQL-level errors or an unexpected response body."""

    def __init__(
        self,
        message: str,
        messages: list[str] | None = None,
        status_code: int | None = None,
        details: dict[str, object] | None = None,
    ) -> None:
        """
        Initialize the exception.

        Args:
            message: Summary of the failure
            messages: Individual error messages reported by the server
            status_code: HTTP status code, when the server answered
            details: Extra context
        """
        self.messages = list(messages or [])
        self.status_code = status_code
        super().__init__(message, details)
