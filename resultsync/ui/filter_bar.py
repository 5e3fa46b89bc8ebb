"""Filter bar: one dropdown per filter dimension (year, month, topic)."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence

import flet as ft

from resultsync.config import DEFAULT_FILTER_ID
from resultsync.events import EventChannel
from resultsync.schemas import DropdownState, FilterSelection, FilterState

ALL_LABEL = "All"
DROPDOWN_WIDTH = 140


def _direct(fn, *args):
    fn(*args)


class FilterBar:
    def __init__(
        self,
        page: ft.Page,
        options: Mapping[str, Sequence[tuple[str, str]]],
        *,
        t=lambda k: k,
        default_filter_id: str = DEFAULT_FILTER_ID,
        selection: FilterSelection | None = None,
        dispatch: Callable[..., object] = _direct,
    ):
        """`options`: dimension id -> [(option key, label), ...] in display order."""
        self.page = page
        self.default_filter_id = default_filter_id
        self._dispatch = dispatch
        self._last_changed: str | None = None
        self.filter_changed: EventChannel[FilterSelection] = EventChannel("filter.changed")

        selection = selection or {}
        self.dropdowns: dict[str, ft.Dropdown] = {}
        for dim, choices in options.items():
            dd = ft.Dropdown(
                label=t(dim.capitalize()),
                width=DROPDOWN_WIDTH,
                options=[ft.dropdown.Option(key=default_filter_id, text=t(ALL_LABEL))]
                + [ft.dropdown.Option(key=key, text=label) for key, label in choices],
                value=selection.get(dim, default_filter_id),
                on_change=lambda e, dim=dim: self._on_change(dim),
            )
            self.dropdowns[dim] = dd

        self.control = ft.Row(controls=list(self.dropdowns.values()), wrap=True, spacing=8)

    @property
    def state(self) -> FilterSelection:
        return {dim: dd.value or self.default_filter_id for dim, dd in self.dropdowns.items()}

    def _on_change(self, dim: str) -> None:
        self._last_changed = dim
        # flet зовёт обработчики из своего пула потоков: отдаём событие в цикл
        self._dispatch(self.filter_changed.emit, self.state)

    def reset(self) -> None:
        for dd in self.dropdowns.values():
            dd.value = self.default_filter_id
        self.page.update()

    def return_focus(self) -> None:
        dim = self._last_changed or next(iter(self.dropdowns), None)
        if dim is not None:
            self.dropdowns[dim].focus()

    def update_disabled_options(self, filter_state: list[DropdownState] | None) -> None:
        for ds in filter_state or []:
            dd = self.dropdowns.get(ds.id)
            if dd is None:
                continue
            disabled = set(ds.disabled_options)
            for opt in dd.options:
                opt.disabled = opt.key in disabled
        self.page.update()

    def update_selected_options(self, filter_state: FilterState) -> None:
        for dim, dd in self.dropdowns.items():
            dd.value = filter_state.data.get(dim, self.default_filter_id)
        self.page.update()
