"""Pure mapping between ViewState and the listing's route path."""

from __future__ import annotations

from .config import ResultsConfig
from .schemas import UrlSegment, ViewState

PAGE_SEGMENT = "page"


def current_page(state: ViewState, config: ResultsConfig) -> int:
    return state.pagination.data.current or config.first_page


def build_segments(state: ViewState, config: ResultsConfig) -> list[UrlSegment]:
    """Ordered [*filter keys, page] segments; order comes from config, not from the selection."""
    selection = state.filter.data
    segments = []
    for key in config.url_filter_keys:
        value = selection.get(key, config.default_filter_id)
        segments.append(UrlSegment(name=key, included=value != config.default_filter_id, value=value))

    page = current_page(state, config)
    segments.append(UrlSegment(name=PAGE_SEGMENT, included=page != config.first_page, value=f"?page={page}"))
    return segments


def construct_url(segments: list[UrlSegment], with_trailing_slash: bool) -> str:
    url = "/".join(s.value for s in segments if s.included)
    return url + ("/" if with_trailing_slash else "")


def encode(state: ViewState, config: ResultsConfig) -> str:
    """
    "2020/" for a year filter on page 1, "?page=3" for no filters on page 3, "/" when
    nothing is selected. A query segment is never followed by a slash.
    """
    segments = build_segments(state, config)
    with_page = any(s.included for s in segments if s.name == PAGE_SEGMENT)
    return construct_url(segments, with_trailing_slash=not with_page)


def build_request_url(host: str, query: str = "") -> str:
    """Data URL for a listing path: '/archive/2020/' + '?page=2' -> '/archive/2020.json?page=2'."""
    if host.endswith("/"):
        host = host[:-1]
    return f"{host}.json{query}"


def relative_base_url(pathname: str, url_segment: str) -> str:
    """Prefix of `pathname` up to and including `url_segment`; the whole path if it is absent."""
    idx = pathname.find(url_segment)
    if idx < 0:
        return pathname
    return pathname[: idx + len(url_segment)]


def join_route(base_url: str, path: str) -> str:
    """Route for a listing path under `base_url`; "/" maps to the base itself."""
    base = base_url.rstrip("/")
    if path == "/":
        return base + "/"
    if path.startswith("?"):
        return base + "/" + path
    return f"{base}/{path}"
