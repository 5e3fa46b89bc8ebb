"""Immutable configuration for the results orchestrator."""

from __future__ import annotations

import re
from dataclasses import dataclass

import validators

from .errors import ConfigError

# --- Defaults ---
RENDERING_DELAY_MS = 700
CONTENT_REQUEST_TIMEOUT_MS = 5000
MOCK_DELAY_MS = 300
DEFAULT_FILTER_ID = "*"
FIRST_PAGE = 1
FALLBACK_HOST_PATTERN = r"^(localhost|127\.0\.0\.1)(:\d+)?$"
URL_SEGMENT = "/newsroom/archive"

STATE_LOADING = "results-loading"
STATE_RENDERING = "results-rendering"


@dataclass(frozen=True, slots=True)
class ResultsConfig:
    rendering_delay_ms: int = RENDERING_DELAY_MS
    request_timeout_ms: int = CONTENT_REQUEST_TIMEOUT_MS
    mock_delay_ms: int = MOCK_DELAY_MS
    fallback_host_pattern: str = FALLBACK_HOST_PATTERN
    endpoint_url: str | None = None  # external data endpoint, overrides the relative one
    default_filter_id: str = DEFAULT_FILTER_ID
    first_page: int = FIRST_PAGE
    url_filter_keys: tuple[str, ...] = ("year", "month", "topic")
    url_segment: str = URL_SEGMENT
    mock_seed: int | None = None
    scroll_offset: int = 0

    def __post_init__(self):
        for name in ("rendering_delay_ms", "request_timeout_ms", "mock_delay_ms"):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive")
        if self.first_page < 1:
            raise ConfigError("first_page must be >= 1")
        if not self.url_filter_keys:
            raise ConfigError("url_filter_keys must not be empty")
        if self.endpoint_url is not None and not validators.url(self.endpoint_url):
            raise ConfigError(f"endpoint_url is not a valid URL: {self.endpoint_url!r}")
        try:
            re.compile(self.fallback_host_pattern)
        except re.error as e:
            raise ConfigError(f"bad fallback_host_pattern: {e}") from e

    def needs_fallback(self, host: str) -> bool:
        """No endpoint configured and the host is one we have no backend for."""
        return self.endpoint_url is None and re.search(self.fallback_host_pattern, host or "") is not None
