# 1) Imports
from __future__ import annotations

import asyncio
import os

from resultsync import (
    AsyncioScheduler,
    ContentUpdateController,
    FilterState,
    PaginationData,
    PaginationState,
    RequestOrchestrator,
    RequestsNetworkClient,
    ResultsConfig,
    StateStore,
    ViewState,
    setup_logging,
)
from resultsync.url_codec import encode, relative_base_url

# 2) Константы / Конфигурация
LOG_ENABLED = True
LOG_DEBUG = os.getenv("RESULTSYNC_DEBUG") == "1"
LOG_FILE = "logs/results.log"
LOG_MAX_BYTES = 1_000_000
LOG_BACKUPS = 3

# None: данные с того же origin, что и страница (localhost → фикстура)
ENDPOINT_URL = os.getenv("RESULTSYNC_ENDPOINT") or None

PAGE_TITLE = "Newsroom Archive"

FILTER_OPTIONS = {
    "year": [(str(y), str(y)) for y in range(2020, 2016, -1)],
    "month": [(f"{m:02d}", f"{m:02d}") for m in range(1, 13)],
    "topic": [("retail", "Retail"), ("environment", "Environment"), ("education", "Education")],
}


def build_initial_state(filter_bar, pagination) -> ViewState:
    return ViewState(
        filter=FilterState(is_initial=True, data=filter_bar.state),
        pagination=PaginationState(
            is_initial=True,
            data=PaginationData(current=pagination.current, total=pagination.total),
        ),
    )


# 3) Точка входа (инициализация и «провода»)
async def main(page):
    # локальные импорты: чтобы не держать Flet на импорте модуля
    import flet as ft  # noqa: PLC0415

    from resultsync.ui.filter_bar import FilterBar  # noqa: PLC0415
    from resultsync.ui.navigation import RouteNavigation  # noqa: PLC0415
    from resultsync.ui.pagination import PaginationControl  # noqa: PLC0415
    from resultsync.ui.results_view import ResultsView  # noqa: PLC0415

    logger = setup_logging(
        enabled=LOG_ENABLED, debug=LOG_DEBUG, file_path=LOG_FILE, max_bytes=LOG_MAX_BYTES, backups=LOG_BACKUPS
    )
    config = ResultsConfig(endpoint_url=ENDPOINT_URL)

    # обработчики flet приходят из пула потоков; всё состояние живёт в потоке цикла
    loop = asyncio.get_running_loop()
    dispatch = loop.call_soon_threadsafe
    scheduler = AsyncioScheduler(loop)

    page.title = PAGE_TITLE
    page.vertical_alignment = ft.MainAxisAlignment.START

    filter_bar = FilterBar(page, FILTER_OPTIONS, dispatch=dispatch)
    pagination = PaginationControl(page, dispatch=dispatch)
    view = ResultsView(page, title=PAGE_TITLE)

    route = page.route or "/"
    base_url = relative_base_url(route, config.url_segment) if config.url_segment in route else config.url_segment
    navigation = RouteNavigation(page, base_url)

    store = StateStore(build_initial_state(filter_bar, pagination), logger=logger.getChild("state"))
    orchestrator = RequestOrchestrator(
        config,
        RequestsNetworkClient(dispatch=dispatch, logger=logger.getChild("network")),
        scheduler,
        logger=logger.getChild("orchestrator"),
    )
    controller = ContentUpdateController(
        config,
        store,
        orchestrator,
        navigation,
        filter_bar,
        pagination,
        view,
        view,
        scheduler,
        logger=logger.getChild("controller"),
    )

    navigation.on_navigate = lambda state: dispatch(controller.update_state_and_request_content, state)
    # стартовый маршрут часто "/": приводим его к листингу текущего состояния
    navigation.set_page_url(encode(store.state, config), store.state)
    navigation.attach()
    controller.attach()

    page.add(ft.Column([filter_bar.control, view.control, pagination.control], expand=True))
    page.update()

    # первая загрузка: серверной разметки нет, тянем данные сразу
    controller.update_state_and_request_content()


if __name__ == "__main__":  # pragma: no cover
    import flet as ft

    ft.app(target=main)
