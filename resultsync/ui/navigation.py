"""Route history on top of the Flet page route."""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urlsplit

import flet as ft

from resultsync.schemas import Location, ViewState
from resultsync.url_codec import join_route

DEFAULT_HOST = "localhost"


class RouteNavigation:
    """
    Pushes listing paths to `page.route` and remembers the ViewState pushed for each
    route, so a back/forward route change can restore it through `on_navigate`.
    """

    def __init__(
        self,
        page: ft.Page,
        base_url: str,
        *,
        host: str | None = None,
        on_navigate: Callable[[ViewState], None] | None = None,
    ):
        self.page = page
        self.base_url = base_url
        page_url = urlsplit(getattr(page, "url", None) or "")
        self.host = host or page_url.netloc or DEFAULT_HOST
        self.origin = f"{page_url.scheme}://{page_url.netloc}" if page_url.scheme and page_url.netloc else ""
        self.on_navigate = on_navigate
        self.history: dict[str, ViewState] = {}

    def attach(self) -> None:
        self.page.on_route_change = self.on_route_change

    def remember(self, route: str, state: ViewState) -> None:
        self.history[route] = state.snapshot()

    def set_page_url(self, url: str, state: ViewState) -> None:
        route = join_route(self.base_url, url)
        self.remember(route, state)
        self.page.go(route, skip_route_change_event=True)

    def current_location(self) -> Location:
        parts = urlsplit(self.page.route or "/")
        pathname, search = parts.path, f"?{parts.query}" if parts.query else ""
        if not self.within_base(pathname):
            # маршрут вне листинга (обычно "/" при старте): данные берём по базовому пути
            pathname, search = join_route(self.base_url, "/"), ""
        return Location(host=self.host, pathname=pathname, search=search, origin=self.origin)

    def within_base(self, pathname: str) -> bool:
        base = self.base_url.rstrip("/")
        return pathname == base or pathname.startswith(base + "/")

    def on_route_change(self, e) -> None:
        state = self.history.get(e.route)
        if state is None or self.on_navigate is None:
            return
        self.on_navigate(state.snapshot())
