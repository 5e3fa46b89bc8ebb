"""Typed exceptions for content requests and view state (no logic beyond the reason tag)."""


class ContentRequestError(Exception):
    """A content request failed. `reason` is a short machine-readable tag."""

    reason = "error"

    def __init__(self, message: str = "", *, reason: str | None = None):
        super().__init__(message or self.reason)
        if reason is not None:
            self.reason = reason


class NetworkError(ContentRequestError):
    """Transport failure (connection refused, HTTP error status, ...)."""

    reason = "network"


class RequestTimeoutError(ContentRequestError):
    """Request did not complete within its timeout."""

    reason = "timeout"


class ParseError(ContentRequestError):
    """Response body is not a valid results document."""

    reason = "parse"


class ValidationError(Exception):
    """Client error: bad state input (e.g., page < 1, page beyond total)."""


class ConfigError(ValueError):
    """Invalid ResultsConfig value."""
