"""Interfaces the controller talks to. Concrete Flet versions live in resultsync.ui."""

from __future__ import annotations

from typing import Protocol

from .events import EventChannel
from .schemas import (
    DropdownState,
    FilterSelection,
    FilterState,
    Location,
    PaginationData,
    PaginationState,
    ResultPayload,
    ViewState,
)


class Navigation(Protocol):
    def set_page_url(self, url: str, state: ViewState) -> None: ...

    def current_location(self) -> Location: ...


class FilterUI(Protocol):
    filter_changed: EventChannel[FilterSelection]

    def reset(self) -> None: ...

    def return_focus(self) -> None: ...

    def update_disabled_options(self, filter_state: list[DropdownState] | None) -> None: ...

    def update_selected_options(self, filter_state: FilterState) -> None: ...


class PaginationUI(Protocol):
    pagination_changed: EventChannel[PaginationData]

    def reset_state(self) -> None: ...

    def set_pagination_state(self, state: PaginationState) -> None: ...


class ResultsRenderer(Protocol):
    title: str

    def show(self, flag: str, on: bool) -> None: ...

    def render(self, payload: ResultPayload, pagination: PaginationState) -> None: ...

    def scroll_to(self, offset: int) -> None: ...

    def focus_first_result(self) -> None: ...


class LoadingIndicator(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...
