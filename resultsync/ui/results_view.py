"""Results list: title, loading ring and the result items themselves."""

from __future__ import annotations

import flet as ft

from resultsync.config import STATE_LOADING, STATE_RENDERING
from resultsync.schemas import PaginationState, ResultItem, ResultPayload

SCROLL_DURATION_MS = 100
DIMMED_OPACITY = 0.4
LIST_HEIGHT = 420


def build_result_item(item: ResultItem) -> ft.TextButton:
    label = item.get("title") or item.get("id") or "untitled"
    meta = " · ".join(str(item[k]) for k in ("category", "date") if item.get(k))
    return ft.TextButton(
        text=f"{label}  ({meta})" if meta else label,
        url=item.get("url"),
        data=item,
    )


class ResultsView:
    """Render target and loading indicator for the controller."""

    def __init__(self, page: ft.Page, *, title: str = "Archive", t=lambda k: k):
        self.page = page
        self.t = t
        self.flags: set[str] = set()

        self.title_text = ft.Text(title, size=20, weight=ft.FontWeight.BOLD)
        self.progress = ft.ProgressRing(visible=False, width=24, height=24)
        self.empty_hint = ft.Text(t("No results"), visible=False)
        self.results_column = ft.Column(controls=[], scroll=ft.ScrollMode.AUTO, height=LIST_HEIGHT)
        self.page_label = ft.Text("")
        self.control = ft.Column(
            controls=[
                ft.Row([self.title_text, self.progress]),
                self.empty_hint,
                self.results_column,
                self.page_label,
            ]
        )

    @property
    def title(self) -> str:
        return self.title_text.value

    @title.setter
    def title(self, value: str) -> None:
        self.title_text.value = value

    def show(self, flag: str, on: bool) -> None:
        if on:
            self.flags.add(flag)
        else:
            self.flags.discard(flag)
        busy = STATE_LOADING in self.flags or STATE_RENDERING in self.flags
        self.results_column.opacity = DIMMED_OPACITY if busy else 1.0
        self.page.update()

    def start(self) -> None:
        self.progress.visible = True
        self.page.update()

    def stop(self) -> None:
        self.progress.visible = False
        self.page.update()

    def render(self, payload: ResultPayload, pagination: PaginationState) -> None:
        self.results_column.controls = [build_result_item(it) for it in payload.results]
        self.empty_hint.visible = not payload.results
        self.page_label.value = f"{self.t('Page')} {pagination.data.current} / {max(pagination.data.total, 1)}"
        self.page.update()

    def scroll_to(self, offset: int) -> None:
        self.results_column.scroll_to(offset=offset, duration=SCROLL_DURATION_MS)

    def focus_first_result(self) -> None:
        if self.results_column.controls:
            self.results_column.controls[0].focus()
