import pytest

from resultsync.config import ResultsConfig
from resultsync.events import EventChannel
from resultsync.mock_data import MockFixture
from resultsync.network import RequestHandle
from resultsync.schemas import ActionKind, Location, PaginationData

# --- ВСПОМОГАТЕЛЬНОЕ ---


class FakeTimer:
    def __init__(self, due, fn):
        self.due = due
        self.fn = fn
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Manual clock: nothing fires until advance()."""

    def __init__(self):
        self.now = 0.0
        self.timers = []

    def call_later(self, delay_s, fn):
        t = FakeTimer(self.now + delay_s, fn)
        self.timers.append(t)
        return t

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds):
        target = self.now + seconds
        while True:
            due = sorted((t for t in self.pending if t.due <= target + 1e-9), key=lambda t: t.due)
            if not due:
                break
            t = due[0]
            self.timers.remove(t)
            self.now = t.due
            t.fn()
        self.now = target

    def advance_ms(self, ms):
        self.advance(ms / 1000)


class FakeNetworkClient:
    """Records GETs; the test decides when (and whether) each one completes."""

    def __init__(self):
        self.calls = []

    def get(self, url, *, on_success, on_error, timeout_ms=None):
        handle = RequestHandle(url)
        self.calls.append(
            {"url": url, "on_success": on_success, "on_error": on_error, "timeout_ms": timeout_ms, "handle": handle}
        )
        return handle

    # колбэки зовём даже для отменённых: проверяем, что оркестратор их глушит
    def succeed(self, idx, body):
        self.calls[idx]["on_success"](body)

    def fail(self, idx, err):
        self.calls[idx]["on_error"](err)

    @property
    def urls(self):
        return [c["url"] for c in self.calls]


class FakeNavigation:
    def __init__(self, host="www.example.com", pathname="/newsroom/archive/", search=""):
        self.location = Location(host=host, pathname=pathname, search=search)
        self.pushed = []

    def set_page_url(self, url, state):
        self.pushed.append((url, state))

    def current_location(self):
        return self.location


class FakeFilterUI:
    def __init__(self):
        self.filter_changed = EventChannel("filter.changed")
        self.calls = []

    def reset(self):
        self.calls.append(("reset",))

    def return_focus(self):
        self.calls.append(("return_focus",))

    def update_disabled_options(self, filter_state):
        self.calls.append(("disabled", filter_state))

    def update_selected_options(self, filter_state):
        self.calls.append(("selected", filter_state))


class FakePaginationUI:
    def __init__(self, echo_reset=True):
        self.pagination_changed = EventChannel("pagination.changed")
        self.echo_reset = echo_reset
        self.resets = 0
        self.states = []

    def reset_state(self):
        self.resets += 1
        if self.echo_reset:
            self.pagination_changed.emit(PaginationData(current=1, total=5, last_action=ActionKind.RESET))

    def set_pagination_state(self, state):
        self.states.append(state)


class FakeView:
    def __init__(self):
        self.title = "Archive"
        self.flags = []
        self.renders = []
        self.scrolls = []
        self.focused = 0
        self.loading_calls = []

    def show(self, flag, on):
        self.flags.append((flag, on))

    def render(self, payload, pagination):
        self.renders.append((payload, pagination))

    def scroll_to(self, offset):
        self.scrolls.append(offset)

    def focus_first_result(self):
        self.focused += 1

    def start(self):
        self.loading_calls.append("start")

    def stop(self):
        self.loading_calls.append("stop")


class DummyPage:
    def __init__(self, route="/", url="http://localhost:8550"):
        self.route = route
        self.url = url
        self.updated = 0
        self.added = None
        self.gone = []
        self.on_route_change = None
        self.title = None
        self.vertical_alignment = None

    def update(self):
        self.updated += 1

    def add(self, root):
        self.added = root

    def go(self, route, skip_route_change_event=False, **kwargs):
        self.route = route
        self.gone.append((route, skip_route_change_event))


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def network():
    return FakeNetworkClient()


@pytest.fixture
def config():
    return ResultsConfig(mock_seed=42)


@pytest.fixture
def fixture_data():
    return MockFixture.from_dict(
        {
            "filter": {
                "totalPages": 7,
                "filterState": [{"id": "year", "disabledOptions": []}, {"id": "topic", "disabledOptions": ["z"]}],
            },
            "A": {"filterState": [{"id": "year", "disabledOptions": ["x"]}, {"id": "topic", "disabledOptions": []}]},
            "B": {
                "filterState": [{"id": "year", "disabledOptions": ["y", "x"]}, {"id": "topic", "disabledOptions": []}]
            },
            "results": [{"id": str(i), "title": f"item {i}"} for i in range(10)],
        }
    )


@pytest.fixture
def dummy_page():
    return DummyPage()
