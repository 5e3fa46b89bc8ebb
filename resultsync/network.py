"""Cancelable GET client on top of requests.

requests is blocking, so each call runs on a worker thread; completion is handed
back to the event-loop thread through `dispatch` (loop.call_soon_threadsafe by
default). Callbacks of a cancelled handle are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Protocol

import requests

from .config import CONTENT_REQUEST_TIMEOUT_MS
from .errors import ContentRequestError, NetworkError, RequestTimeoutError
from .logging_utils import get_logger

MAX_WORKERS = 2

SuccessCallback = Callable[[str], None]
ErrorCallback = Callable[[ContentRequestError], None]


class RequestHandle:
    def __init__(self, url: str):
        self.url = url
        self.cancelled = False
        self.done = False
        self._future: Future | None = None

    def attach(self, future: Future) -> None:
        self._future = future

    def cancel(self) -> None:
        if self.cancelled or self.done:
            return
        self.cancelled = True
        if self._future is not None:
            # уже запущенный запрос не прервать, но его результат будет проигнорирован
            self._future.cancel()

    @property
    def live(self) -> bool:
        return not (self.cancelled or self.done)


class NetworkClient(Protocol):
    def get(
        self,
        url: str,
        *,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        timeout_ms: int | None = None,
    ) -> RequestHandle: ...


class RequestsNetworkClient:
    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        pool: ThreadPoolExecutor | None = None,
        dispatch: Callable[..., object] | None = None,
        logger: logging.Logger | None = None,
    ):
        self.session = session or requests.Session()
        self.pool = pool or ThreadPoolExecutor(max_workers=MAX_WORKERS, thread_name_prefix="resultsync-http")
        self._dispatch = dispatch
        self.logger = logger or get_logger("network")

    def _get_dispatch(self) -> Callable[..., object]:
        if self._dispatch is None:
            self._dispatch = asyncio.get_running_loop().call_soon_threadsafe
        return self._dispatch

    def get(
        self,
        url: str,
        *,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        timeout_ms: int | None = None,
    ) -> RequestHandle:
        handle = RequestHandle(url)
        dispatch = self._get_dispatch()
        timeout_s = (timeout_ms or CONTENT_REQUEST_TIMEOUT_MS) / 1000

        def _fetch() -> str:
            resp = self.session.get(url, timeout=timeout_s)
            resp.raise_for_status()
            return resp.text

        def _deliver(fut: Future) -> None:
            if not handle.live or fut.cancelled():
                return
            handle.done = True
            exc = fut.exception()
            if exc is None:
                on_success(fut.result())
            elif isinstance(exc, requests.Timeout):
                on_error(RequestTimeoutError(f"GET {url} timed out: {exc}"))
            else:
                on_error(NetworkError(f"GET {url} failed: {exc}"))

        fut = self.pool.submit(_fetch)
        handle.attach(fut)
        fut.add_done_callback(lambda f: dispatch(_deliver, f))
        self.logger.debug("GET %s (timeout=%.1fs)", url, timeout_s)
        return handle

    def close(self) -> None:
        self.pool.shutdown(wait=False, cancel_futures=True)
        self.session.close()
