from __future__ import annotations

import logging

from .errors import ValidationError
from .events import EventChannel
from .logging_utils import get_logger
from .schemas import (
    FilterSelection,
    FilterState,
    PaginationData,
    PaginationState,
    ResultPayload,
    StoreSignal,
    ViewState,
)

FILTER_KEY = "filter"
PAGINATION_KEY = "pagination"


class StateStore:
    """
    Holds the ViewState and applies updates.

    Filter changes never fetch by themselves: they leave a pending reset that is
    cleared once the pagination collaborator reports its page-1 state back.
    """

    def __init__(self, initial: ViewState | None = None, *, logger: logging.Logger | None = None):
        self._state = initial or ViewState()
        self._pending_reset = False
        self.logger = logger or get_logger("state")
        # (key, state) after each mutation
        self.changed: EventChannel[tuple[str, ViewState]] = EventChannel("state.changed")

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def pending_reset(self) -> bool:
        return self._pending_reset

    def apply_filter_change(self, selection: FilterSelection) -> StoreSignal:
        self._state.filter = FilterState(is_initial=False, data=dict(selection))
        self._pending_reset = True
        self.logger.debug("filter changed: %s (pagination reset pending)", self._state.filter.data)
        self.changed.emit((FILTER_KEY, self._state))
        return StoreSignal.PENDING_RESET

    def apply_pagination_change(self, data: PaginationData) -> StoreSignal:
        _validate_pagination(data)
        self._state.pagination = PaginationState(
            is_initial=False,
            data=PaginationData(current=data.current, total=data.total, last_action=data.last_action),
        )
        self._pending_reset = False
        self.logger.debug(
            "pagination changed: current=%d total=%d action=%s",
            data.current,
            data.total,
            data.last_action.value if data.last_action else None,
        )
        self.changed.emit((PAGINATION_KEY, self._state))
        return StoreSignal.FETCH_NOW

    def merge_result(self, payload: ResultPayload) -> PaginationState:
        # позицию выбирает пагинация, а не ответ сервера
        self._state.pagination.data.total = payload.total_pages
        self.changed.emit((PAGINATION_KEY, self._state))
        return self._state.pagination

    def replace(self, state: ViewState) -> None:
        """Swap in a whole state, e.g. one restored from route history."""
        self._state = state.snapshot()
        self._pending_reset = False
        self.changed.emit((FILTER_KEY, self._state))
        self.changed.emit((PAGINATION_KEY, self._state))


def _validate_pagination(data: PaginationData) -> None:
    if data.current < 1:
        raise ValidationError(f"page must be >= 1, got {data.current}")
    if data.total < 0:
        raise ValidationError(f"total must be >= 0, got {data.total}")
    if data.current > max(data.total, 1):
        raise ValidationError(f"page {data.current} is beyond total {data.total}")
