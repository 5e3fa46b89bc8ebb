import asyncio
from concurrent.futures import Future, ThreadPoolExecutor

import pytest
import requests
import requests.adapters

from resultsync.config import CONTENT_REQUEST_TIMEOUT_MS, ResultsConfig
from resultsync.network import RequestsNetworkClient
from resultsync.orchestrator import RequestOrchestrator
from resultsync.schemas import Location


class FakeResp:
    def __init__(self, text="{}", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    def __init__(self, resp=None, exc=None):
        self.resp = resp or FakeResp()
        self.exc = exc
        self.calls = []
        self.closed = False

    def get(self, url, timeout=None):
        self.calls.append((url, timeout))
        if self.exc:
            raise self.exc
        return self.resp

    def close(self):
        self.closed = True


class ImmediatePool:
    """Runs the job right away and returns a finished Future."""

    def submit(self, fn, *args, **kwargs):
        fut = Future()
        try:
            fut.set_result(fn(*args, **kwargs))
        except Exception as e:
            fut.set_exception(e)
        return fut

    def shutdown(self, wait=True, cancel_futures=False):
        pass


class ManualPool:
    """Keeps futures pending until the test resolves them."""

    def __init__(self):
        self.jobs = []

    def submit(self, fn, *args, **kwargs):
        fut = Future()
        self.jobs.append((fut, fn))
        return fut

    def run(self, idx):
        fut, fn = self.jobs[idx]
        if not fut.set_running_or_notify_cancel():
            return
        fut.set_result(fn())


def direct(fn, *args):
    fn(*args)


def _client(session, pool=None):
    return RequestsNetworkClient(session=session, pool=pool or ImmediatePool(), dispatch=direct)


def test_success_passes_body_and_timeout():
    session = FakeSession(FakeResp('{"ok": true}'))
    got, errs = [], []
    handle = _client(session).get("/a.json", on_success=got.append, on_error=errs.append, timeout_ms=2500)
    assert got == ['{"ok": true}']
    assert errs == []
    assert session.calls == [("/a.json", 2.5)]
    assert handle.done and not handle.live


def test_requests_timeout_maps_to_timeout_reason():
    got, errs = [], []
    _client(FakeSession(exc=requests.ReadTimeout("slow"))).get("/a", on_success=got.append, on_error=errs.append)
    assert got == []
    assert errs[0].reason == "timeout"


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(exc=requests.ConnectionError("refused")),
        FakeSession(FakeResp("oops", status_code=500)),
    ],
)
def test_transport_failures_map_to_network_reason(session):
    errs = []
    _client(session).get("/a", on_success=lambda b: None, on_error=errs.append)
    assert errs[0].reason == "network"


def test_cancel_before_start_drops_callbacks():
    pool = ManualPool()
    session = FakeSession()
    got, errs = [], []
    handle = _client(session, pool).get("/a", on_success=got.append, on_error=errs.append)
    handle.cancel()
    pool.run(0)
    assert handle.cancelled
    assert session.calls == []
    assert got == [] and errs == []


def test_cancel_while_running_drops_late_result():
    pool = ManualPool()
    got = []
    client = _client(FakeSession(), pool)
    handle = client.get("/a", on_success=got.append, on_error=got.append)
    fut, fn = pool.jobs[0]
    fut.set_running_or_notify_cancel()
    handle.cancel()
    fut.set_result(fn())
    assert got == []


def test_default_dispatch_goes_through_running_loop():
    async def scenario():
        got = []
        client = RequestsNetworkClient(session=FakeSession(FakeResp("body")), pool=ImmediatePool())
        client.get("/a", on_success=got.append, on_error=got.append)
        # доставка идёт через call_soon_threadsafe, а не синхронно
        before = list(got)
        await asyncio.sleep(0)
        return before, got

    before, after = asyncio.run(scenario())
    assert before == []
    assert after == ["body"]


def test_close_releases_session():
    session = FakeSession()
    _client(session).close()
    assert session.closed


class RecordingAdapter(requests.adapters.BaseAdapter):
    """Transport adapter that answers every request locally and remembers the URL."""

    def __init__(self, body):
        super().__init__()
        self.body = body
        self.urls = []

    def send(self, request, **kwargs):
        self.urls.append(request.url)
        resp = requests.Response()
        resp.status_code = 200
        resp._content = self.body.encode("utf-8")
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self):
        pass


@pytest.mark.parametrize(
    ("origin", "expected"),
    [
        ("https://news.example.com", "https://news.example.com/newsroom/archive/2020.json"),
        ("", "https://news.example.com/newsroom/archive/2020.json"),
        ("http://news.example.com", "http://news.example.com/newsroom/archive/2020.json"),
    ],
)
def test_same_origin_fetch_requests_absolute_url(scheduler, origin, expected):
    adapter = RecordingAdapter('{"results": [{"id": "1"}], "totalPages": 1}')
    session = requests.Session()
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    orch = RequestOrchestrator(ResultsConfig(), _client(session), scheduler)
    got, errs = [], []

    loc = Location(host="news.example.com", pathname="/newsroom/archive/2020/", origin=origin)
    orch.fetch_content(loc, "2020/", on_success=got.append, on_error=errs.append)

    assert errs == []
    assert adapter.urls == [expected]
    assert got[0].results == [{"id": "1"}]


def test_request_after_close_is_reported_not_stuck(scheduler):
    client = RequestsNetworkClient(session=FakeSession(), pool=ThreadPoolExecutor(max_workers=1), dispatch=direct)
    client.close()
    orch = RequestOrchestrator(ResultsConfig(), client, scheduler)
    errs = []

    orch.request("https://news.example.com/a.json", on_success=errs.append, on_error=errs.append)

    assert [e.reason for e in errs] == ["network"]
    assert not orch.busy


def test_default_timeout_matches_content_request_timeout():
    session = FakeSession()
    _client(session).get("/a", on_success=lambda b: None, on_error=lambda e: None)
    assert session.calls == [("/a", CONTENT_REQUEST_TIMEOUT_MS / 1000)]
