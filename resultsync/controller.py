from __future__ import annotations

import logging

from .collaborators import FilterUI, LoadingIndicator, Navigation, PaginationUI, ResultsRenderer
from .config import STATE_LOADING, STATE_RENDERING, ResultsConfig
from .errors import ContentRequestError
from .events import EventChannel, Subscription
from .logging_utils import get_logger
from .orchestrator import RequestOrchestrator
from .scheduling import DebounceTimer, Scheduler
from .schemas import (
    ActionKind,
    FilterSelection,
    NavigationHint,
    PaginationData,
    Phase,
    ResultPayload,
    StoreSignal,
    ViewState,
)
from .state_store import StateStore
from .url_codec import encode


class ContentUpdateController:
    """
    One content-update cycle per triggering state change:
    route update -> fetch -> debounced render hand-off.

    IDLE -> LOADING -> RENDERING -> IDLE, or LOADING -> IDLE on a request error.
    A new cycle cancels the in-flight request and any render still pending.
    """

    def __init__(  # noqa: PLR0913
        self,
        config: ResultsConfig,
        store: StateStore,
        orchestrator: RequestOrchestrator,
        navigation: Navigation,
        filter_ui: FilterUI,
        pagination_ui: PaginationUI,
        view: ResultsRenderer,
        loading_indicator: LoadingIndicator,
        scheduler: Scheduler,
        *,
        logger: logging.Logger | None = None,
    ):
        self.config = config
        self.store = store
        self.orchestrator = orchestrator
        self.navigation = navigation
        self.filter_ui = filter_ui
        self.pagination_ui = pagination_ui
        self.view = view
        self.loading_indicator = loading_indicator
        self.logger = logger or get_logger("controller")

        self.loading = False
        self.rendering = False
        self._render_timer = DebounceTimer(scheduler, config.rendering_delay_ms)
        self._subscriptions: list[Subscription] = []

        self.phase_changed: EventChannel[Phase] = EventChannel("controller.phase")
        self.rendered: EventChannel[ResultPayload] = EventChannel("controller.rendered")
        self.hints: EventChannel[NavigationHint] = EventChannel("controller.hints")

    @property
    def phase(self) -> Phase:
        if self.rendering:
            return Phase.RENDERING
        if self.loading:
            return Phase.LOADING
        return Phase.IDLE

    # --- wiring ---

    def attach(self) -> None:
        if self._subscriptions:
            return
        self._subscriptions = [
            self.filter_ui.filter_changed.subscribe(self.on_filter_changed),
            self.pagination_ui.pagination_changed.subscribe(self.on_pagination_changed),
        ]

    def detach(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions = []
        self.orchestrator.cancel()
        self._render_timer.cancel()

    # --- state change events ---

    def on_filter_changed(self, selection: FilterSelection) -> None:
        signal = self.store.apply_filter_change(selection)
        if signal is StoreSignal.PENDING_RESET:
            # страница может оказаться вне диапазона: ждём page 1 от пагинации
            self.pagination_ui.reset_state()

    def on_pagination_changed(self, data: PaginationData) -> None:
        if self.store.apply_pagination_change(data) is StoreSignal.FETCH_NOW:
            self.execute_content_update()

    def execute_content_update(self) -> None:
        self.set_page_url()
        self.manage_content_update()

    def set_page_url(self) -> None:
        state = self.store.state
        self.navigation.set_page_url(encode(state, self.config), state.snapshot())

    def update_state_and_request_content(self, state: ViewState | None = None) -> None:
        """Back/forward entry point: restore a previously pushed state and refetch."""
        if state is not None:
            self.store.replace(state)
        current = self.store.state
        self.filter_ui.update_selected_options(current.filter)
        self.pagination_ui.set_pagination_state(current.pagination)
        self.manage_content_update()

    # --- content cycle ---

    def manage_content_update(self) -> None:
        self._render_timer.cancel()
        self._set_flags(loading=True, rendering=False)
        self.loading_indicator.start()

        location = self.navigation.current_location()
        self.orchestrator.fetch_content(
            location,
            encode(self.store.state, self.config),
            on_success=self.render_results,
            on_error=self.on_request_error,
        )

    def render_results(self, payload: ResultPayload) -> None:
        self._set_flags(loading=False, rendering=True)
        self._render_timer.schedule(lambda: self._after_render(payload))

    def on_request_error(self, err: ContentRequestError) -> None:
        self.logger.warning("content update failed (%s), keeping current results", err.reason)
        self._set_flags(loading=False, rendering=False)
        self.loading_indicator.stop()

    def _after_render(self, payload: ResultPayload) -> None:
        pagination = self.store.merge_result(payload)

        self.view.title = payload.title or self.view.title
        self.view.render(payload, pagination)
        self.filter_ui.update_disabled_options(payload.filter_state)
        self.pagination_ui.set_pagination_state(pagination)

        self._set_flags(loading=False, rendering=False)
        self.loading_indicator.stop()
        self.view.scroll_to(self.config.scroll_offset)

        if pagination.data.last_action is ActionKind.RESET:
            hint = NavigationHint.RETURN_FOCUS_TO_FILTER
            self.filter_ui.return_focus()
        else:
            hint = NavigationHint.FOCUS_FIRST_RESULT
            self.view.focus_first_result()

        self.logger.debug(
            "rendered %d results, page %d/%d", len(payload.results), pagination.data.current, pagination.data.total
        )
        self.hints.emit(hint)
        self.rendered.emit(payload)

    def _set_flags(self, *, loading: bool, rendering: bool) -> None:
        before = self.phase
        if loading != self.loading:
            self.loading = loading
            self.view.show(STATE_LOADING, loading)
        if rendering != self.rendering:
            self.rendering = rendering
            self.view.show(STATE_RENDERING, rendering)
        if self.phase is not before:
            self.phase_changed.emit(self.phase)
