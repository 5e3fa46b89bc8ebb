import asyncio

import flet as ft
from conftest import DummyPage

import results_app


def test_main_wires_page(monkeypatch):
    monkeypatch.setattr(results_app, "LOG_FILE", None)
    page = DummyPage(route="/newsroom/archive/")

    asyncio.run(results_app.main(page))

    assert isinstance(page.added, ft.Column)
    assert page.title == results_app.PAGE_TITLE
    assert page.on_route_change is not None
    assert page.updated >= 1


def test_initial_state_comes_from_controls(dummy_page):
    from resultsync.ui.filter_bar import FilterBar
    from resultsync.ui.pagination import PaginationControl

    bar = FilterBar(dummy_page, results_app.FILTER_OPTIONS)
    pag = PaginationControl(dummy_page, current=1, total=4)
    state = results_app.build_initial_state(bar, pag)
    assert state.filter.is_initial and state.pagination.is_initial
    assert state.filter.data == {"year": "*", "month": "*", "topic": "*"}
    assert state.pagination.data.total == 4


class RecordingClient:
    instances = []

    def __init__(self, **kwargs):
        self.urls = []
        RecordingClient.instances.append(self)

    def get(self, url, *, on_success, on_error, timeout_ms=None):
        from resultsync.network import RequestHandle

        self.urls.append(url)
        return RequestHandle(url)


def test_first_fetch_from_root_route_targets_listing(monkeypatch):
    monkeypatch.setattr(results_app, "LOG_FILE", None)
    monkeypatch.setattr(results_app, "ENDPOINT_URL", "https://api.example.com/")
    monkeypatch.setattr(results_app, "RequestsNetworkClient", RecordingClient)
    RecordingClient.instances.clear()
    page = DummyPage(route="/")

    asyncio.run(results_app.main(page))

    assert page.route == "/newsroom/archive/"
    assert RecordingClient.instances[0].urls == ["https://api.example.com/newsroom/archive.json"]
