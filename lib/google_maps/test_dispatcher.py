"""
Unit tests for HTTP dispatcher
"""

import asyncio
import threading

import httpx
import pytest

from lib.google_maps.dispatcher import Dispatcher
from lib.google_maps.exceptions import TransportError, TransportErrorKind

URL = "https://maps.googleapis.com/maps/api/geocode/json?key=test_key&address=x"


def okHandler(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, content=b'{"status": "OK", "results": []}')


def test_send_returns_body():
    """Blocking call returns raw body, dood!"""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return okHandler(request)

    body = Dispatcher(transport=httpx.MockTransport(handler)).send(URL)

    assert body == b'{"status": "OK", "results": []}'
    assert len(requests) == 1
    assert str(requests[0].url) == URL
    assert requests[0].method == "GET"
    assert requests[0].headers["User-Agent"].startswith("GoogleMapsClient/")


@pytest.mark.asyncio
async def test_send_async_returns_body():
    body = await Dispatcher(asyncTransport=httpx.MockTransport(okHandler)).sendAsync(URL)
    assert body == b'{"status": "OK", "results": []}'


@pytest.mark.parametrize("statusCode", [400, 403, 404, 500, 503])
def test_non_2xx_status(statusCode):
    dispatcher = Dispatcher(transport=httpx.MockTransport(lambda request: httpx.Response(statusCode)))

    with pytest.raises(TransportError) as excInfo:
        dispatcher.send(URL)

    assert excInfo.value.kind == TransportErrorKind.HTTP_STATUS
    assert excInfo.value.statusCode == statusCode


@pytest.mark.parametrize(
    "error, kind",
    [
        (httpx.ReadTimeout("timed out"), TransportErrorKind.TIMEOUT),
        (httpx.ConnectTimeout("timed out"), TransportErrorKind.TIMEOUT),
        (httpx.ConnectError("connection refused"), TransportErrorKind.NETWORK),
        (httpx.RemoteProtocolError("bad response"), TransportErrorKind.NETWORK),
    ],
)
def test_transport_failures(error, kind):
    def handler(request: httpx.Request) -> httpx.Response:
        raise error

    with pytest.raises(TransportError) as excInfo:
        Dispatcher(transport=httpx.MockTransport(handler)).send(URL)

    assert excInfo.value.kind == kind
    assert excInfo.value.__cause__ is error


@pytest.mark.asyncio
async def test_async_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out")

    with pytest.raises(TransportError) as excInfo:
        await Dispatcher(asyncTransport=httpx.MockTransport(handler)).sendAsync(URL)

    assert excInfo.value.kind == TransportErrorKind.TIMEOUT


@pytest.mark.asyncio
async def test_async_http_status():
    dispatcher = Dispatcher(asyncTransport=httpx.MockTransport(lambda request: httpx.Response(502)))

    with pytest.raises(TransportError) as excInfo:
        await dispatcher.sendAsync(URL, asyncio.Event())

    assert excInfo.value.kind == TransportErrorKind.HTTP_STATUS
    assert excInfo.value.statusCode == 502


@pytest.mark.asyncio
async def test_cancel_in_flight_request():
    """Setting cancel event aborts the outstanding request"""
    started = asyncio.Event()
    finished = []

    async def slowHandler(request: httpx.Request) -> httpx.Response:
        started.set()
        await asyncio.sleep(10)
        finished.append(request)
        return okHandler(request)

    cancelEvent = asyncio.Event()
    dispatcher = Dispatcher(asyncTransport=httpx.MockTransport(slowHandler))
    task = asyncio.create_task(dispatcher.sendAsync(URL, cancelEvent))

    await started.wait()
    cancelEvent.set()

    with pytest.raises(TransportError) as excInfo:
        await asyncio.wait_for(task, timeout=5)

    assert excInfo.value.kind == TransportErrorKind.CANCELLED
    assert finished == []


@pytest.mark.asyncio
async def test_cancel_before_start():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return okHandler(request)

    cancelEvent = asyncio.Event()
    cancelEvent.set()

    with pytest.raises(TransportError) as excInfo:
        await Dispatcher(asyncTransport=httpx.MockTransport(handler)).sendAsync(URL, cancelEvent)

    assert excInfo.value.kind == TransportErrorKind.CANCELLED
    assert calls == []


@pytest.mark.asyncio
async def test_unset_cancel_event_does_not_interfere():
    cancelEvent = asyncio.Event()
    body = await Dispatcher(asyncTransport=httpx.MockTransport(okHandler)).sendAsync(URL, cancelEvent)
    assert body.startswith(b'{"status": "OK"')


class GatedTransport(httpx.BaseTransport, httpx.AsyncBaseTransport):
    """Shared transport which holds "slow" requests until released and fails once closed"""

    def __init__(self):
        self.closeCount = 0
        self.slowStarted = threading.Event()
        self.release = threading.Event()
        self.asyncSlowStarted = asyncio.Event()
        self.asyncRelease = asyncio.Event()

    def _respond(self, request: httpx.Request) -> httpx.Response:
        if self.closeCount:
            raise httpx.ConnectError("transport closed", request=request)
        return okHandler(request)

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        if "slow" in str(request.url):
            self.slowStarted.set()
            assert self.release.wait(5)
        return self._respond(request)

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if "slow" in str(request.url):
            self.asyncSlowStarted.set()
            await asyncio.wait_for(self.asyncRelease.wait(), timeout=5)
        return self._respond(request)

    def close(self) -> None:
        self.closeCount += 1

    async def aclose(self) -> None:
        self.closeCount += 1


def test_overlapping_calls_share_injected_transport():
    """Finishing one call must not close transport under another one, dood!"""
    transport = GatedTransport()
    dispatcher = Dispatcher(transport=transport)
    results = {}

    def runSlow():
        try:
            results["slow"] = dispatcher.send(URL + "&slow=1")
        except TransportError as e:
            results["slow"] = e

    thread = threading.Thread(target=runSlow)
    thread.start()
    assert transport.slowStarted.wait(5)

    results["fast"] = dispatcher.send(URL)
    transport.release.set()
    thread.join(5)

    assert results["fast"].startswith(b'{"status": "OK"')
    assert results["slow"] == results["fast"]
    assert transport.closeCount == 0


@pytest.mark.asyncio
async def test_overlapping_async_calls_share_injected_transport():
    transport = GatedTransport()
    dispatcher = Dispatcher(asyncTransport=transport)

    slowTask = asyncio.create_task(dispatcher.sendAsync(URL + "&slow=1"))
    await transport.asyncSlowStarted.wait()

    fast = await dispatcher.sendAsync(URL)
    transport.asyncRelease.set()
    slow = await asyncio.wait_for(slowTask, timeout=5)

    assert fast.startswith(b'{"status": "OK"')
    assert slow == fast
    assert transport.closeCount == 0


@pytest.mark.asyncio
async def test_close_closes_injected_transports():
    blocking = GatedTransport()
    nonBlocking = GatedTransport()
    dispatcher = Dispatcher(transport=blocking, asyncTransport=nonBlocking)

    dispatcher.send(URL)
    await dispatcher.sendAsync(URL)
    assert (blocking.closeCount, nonBlocking.closeCount) == (0, 0)

    await dispatcher.aclose()

    assert (blocking.closeCount, nonBlocking.closeCount) == (1, 1)
