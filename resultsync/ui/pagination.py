"""Prev / next pagination control."""

from __future__ import annotations

from collections.abc import Callable

import flet as ft

from resultsync.config import FIRST_PAGE
from resultsync.events import EventChannel
from resultsync.schemas import ActionKind, PaginationData, PaginationState


def _direct(fn, *args):
    fn(*args)


class PaginationControl:
    def __init__(
        self,
        page: ft.Page,
        *,
        current: int = FIRST_PAGE,
        total: int = 0,
        dispatch: Callable[..., object] = _direct,
    ):
        self.page = page
        self.current = current
        self.total = total
        self._dispatch = dispatch
        self.pagination_changed: EventChannel[PaginationData] = EventChannel("pagination.changed")

        self.btn_prev = ft.IconButton(icon=ft.Icons.CHEVRON_LEFT, tooltip="Previous", on_click=lambda e: self.on_prev())
        self.btn_next = ft.IconButton(icon=ft.Icons.CHEVRON_RIGHT, tooltip="Next", on_click=lambda e: self.on_next())
        self.label = ft.Text("")
        self.control = ft.Row(
            controls=[self.btn_prev, self.label, self.btn_next],
            alignment=ft.MainAxisAlignment.CENTER,
        )
        self._refresh()

    @property
    def last_page(self) -> int:
        return max(self.total, FIRST_PAGE)

    def _refresh(self) -> None:
        self.label.value = f"{self.current} / {self.last_page}"
        self.btn_prev.disabled = self.current <= FIRST_PAGE
        self.btn_next.disabled = self.current >= self.last_page

    def _emit(self, current: int, action: ActionKind) -> None:
        self.current = current
        self._refresh()
        data = PaginationData(current=current, total=self.total, last_action=action)
        self._dispatch(self.pagination_changed.emit, data)

    def on_prev(self) -> None:
        if self.current > FIRST_PAGE:
            self._emit(self.current - 1, ActionKind.PREV)

    def on_next(self) -> None:
        if self.current < self.last_page:
            self._emit(self.current + 1, ActionKind.NEXT)

    def jump(self, page_no: int) -> None:
        page_no = min(max(page_no, FIRST_PAGE), self.last_page)
        if page_no != self.current:
            self._emit(page_no, ActionKind.JUMP)

    def reset_state(self) -> None:
        """Back to page 1; always reports back, even when already there."""
        self._emit(FIRST_PAGE, ActionKind.RESET)

    def set_pagination_state(self, state: PaginationState) -> None:
        self.current = state.data.current
        self.total = state.data.total
        self._refresh()
        self.page.update()
