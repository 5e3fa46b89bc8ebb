"""Single in-flight content request: cancel-previous, timeout watchdog, mock fallback."""

from __future__ import annotations

import json
import logging
import random
from collections.abc import Callable

from .config import ResultsConfig
from .errors import ContentRequestError, NetworkError, ParseError, RequestTimeoutError
from .logging_utils import get_logger
from .mock_data import MockFixture
from .network import NetworkClient, RequestHandle
from .scheduling import Scheduler, TimerHandle
from .schemas import Location, ResultPayload
from .url_codec import build_request_url

PayloadCallback = Callable[[ResultPayload], None]
ErrorCallback = Callable[[ContentRequestError], None]

DEFAULT_SCHEME = "https"


class _Ticket:
    """Identity of one issued request; callbacks holding a stale ticket are no-ops."""

    __slots__ = ("url",)

    def __init__(self, url: str):
        self.url = url


class RequestOrchestrator:
    def __init__(  # noqa: PLR0913
        self,
        config: ResultsConfig,
        network: NetworkClient,
        scheduler: Scheduler,
        *,
        fixture: MockFixture | None = None,
        rng: random.Random | None = None,
        logger: logging.Logger | None = None,
    ):
        self.config = config
        self.network = network
        self.scheduler = scheduler
        self._fixture = fixture
        self.rng = rng or random.Random(config.mock_seed)
        self.logger = logger or get_logger("orchestrator")

        self._ticket: _Ticket | None = None
        self._current: RequestHandle | None = None
        self._watchdog: TimerHandle | None = None

    @property
    def busy(self) -> bool:
        return self._ticket is not None

    @property
    def current(self) -> RequestHandle | None:
        return self._current

    @property
    def fixture(self) -> MockFixture:
        if self._fixture is None:
            self._fixture = MockFixture.load_default()
        return self._fixture

    # --- real requests ---

    def request(
        self,
        url: str,
        *,
        on_success: PayloadCallback,
        on_error: ErrorCallback,
        timeout_ms: int | None = None,
    ) -> RequestHandle | None:
        """Issue a GET for `url`, cancelling whatever request is still live."""
        self.cancel()

        ticket = _Ticket(url)
        self._ticket = ticket
        timeout_ms = timeout_ms or self.config.request_timeout_ms

        def _on_body(body: str) -> None:
            if not self._finish(ticket):
                return
            try:
                payload = ResultPayload.from_dict(json.loads(body))
            except ParseError as e:
                self._report(url, e, on_error)
                return
            except ValueError as e:
                self._report(url, ParseError(f"bad JSON from {url}: {e}"), on_error)
                return
            self.logger.debug("content received from %s: %d results", url, len(payload.results))
            on_success(payload)

        def _on_error(err: ContentRequestError) -> None:
            if self._finish(ticket):
                self._report(url, err, on_error)

        try:
            handle = self.network.get(url, on_success=_on_body, on_error=_on_error, timeout_ms=timeout_ms)
        except RuntimeError as e:
            # например, пул уже остановлен после close()
            if self._finish(ticket):
                self._report(url, NetworkError(f"GET {url} could not be issued: {e}"), on_error)
            return None

        # клиент мог ответить синхронно, тогда билет уже погашен
        if self._ticket is ticket:
            self._current = handle
            self._watchdog = self.scheduler.call_later(
                timeout_ms / 1000, lambda: self._on_timeout(ticket, timeout_ms, on_error)
            )
        return handle

    def cancel(self) -> None:
        handle = self._current
        ticket = self._ticket
        self._clear()
        if handle is not None:
            handle.cancel()
        if ticket is not None:
            self.logger.debug("cancelled request %s", ticket.url)

    def _on_timeout(self, ticket: _Ticket, timeout_ms: int, on_error: ErrorCallback) -> None:
        if self._ticket is not ticket:
            return
        handle = self._current
        self._clear()
        if handle is not None:
            handle.cancel()
        self._report(ticket.url, RequestTimeoutError(f"no response within {timeout_ms} ms"), on_error)

    def _finish(self, ticket: _Ticket) -> bool:
        if self._ticket is not ticket:
            return False
        self._clear()
        return True

    def _clear(self) -> None:
        if self._watchdog is not None:
            self._watchdog.cancel()
        self._ticket = None
        self._current = None
        self._watchdog = None

    def _report(self, url: str, err: ContentRequestError, on_error: ErrorCallback) -> None:
        self.logger.warning("content request failed url=%s reason=%s: %s", url, err.reason, err)
        on_error(err)

    # --- entry point used by the controller ---

    def fetch_content(
        self,
        location: Location,
        url_path: str,
        *,
        on_success: PayloadCallback,
        on_error: ErrorCallback,
    ) -> RequestHandle | None:
        if self.config.needs_fallback(location.host):
            self.logger.info("requesting fake content update for %r", url_path)
            self.request_fake(url_path, on_success=on_success)
            return None

        endpoint = self.config.endpoint_url
        origin = endpoint.rstrip("/") if endpoint else page_origin(location)
        host = origin + location.pathname
        url = build_request_url(host, location.search)
        self.logger.info("requesting content update from %s", url)
        return self.request(url, on_success=on_success, on_error=on_error)

    def request_fake(self, url_path: str, *, on_success: PayloadCallback) -> None:
        """Fixture-backed answer after a short delay; not cancelable and never fails."""
        payload = self.fixture.synthesize(url_path, self.rng)
        self.scheduler.call_later(self.config.mock_delay_ms / 1000, lambda: on_success(payload))


def page_origin(location: Location) -> str:
    """`scheme://host` the content is served from; requests needs an absolute URL."""
    if location.origin:
        return location.origin.rstrip("/")
    return f"{DEFAULT_SCHEME}://{location.host}"
