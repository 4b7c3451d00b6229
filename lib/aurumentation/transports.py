"""Custom httpx transports for recording and replaying HTTP traffic.

Both transports serve ``httpx.Client`` and ``httpx.AsyncClient`` alike, so
the same golden data can drive blocking and non-blocking calls.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Set

import httpx

from .masker import MASKED_PLACEHOLDER
from .types import HttpCall, HttpRequest, HttpResponse

logger = logging.getLogger(__name__)

# Recorded body is stored decoded, so framing headers no longer apply
_DROPPED_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})


def _captureRequest(request: httpx.Request) -> HttpRequest:
    return HttpRequest(
        method=request.method,
        url=str(request.url),
        headers=dict(request.headers),
        params=[[name, value] for name, value in request.url.params.multi_items()],
        body=request.content.decode() if request.content else None,
    )


def _captureResponse(response: httpx.Response) -> HttpResponse:
    return HttpResponse(
        status_code=response.status_code,
        headers=dict(response.headers),
        content=response.content.decode() if response.content else "",
    )


class RecordingTransport(httpx.BaseTransport, httpx.AsyncBaseTransport):
    """Transport that records all HTTP traffic passing through it.

    Wraps real transports and stores request and response details of every
    call before handing the response back to the client.
    """

    def __init__(
        self,
        wrapped: Optional[httpx.BaseTransport] = None,
        asyncWrapped: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the recording transport.

        Args:
            wrapped: Real transport for blocking clients. If None, creates a default HTTPTransport.
            asyncWrapped: Real transport for async clients. If None, creates a default AsyncHTTPTransport.
        """
        self.wrapped = wrapped or httpx.HTTPTransport()
        self.asyncWrapped = asyncWrapped or httpx.AsyncHTTPTransport()
        self.recordings: List[HttpCall] = []

    def _store(self, request: httpx.Request, response: httpx.Response) -> None:
        self.recordings.append(
            HttpCall(
                request=_captureRequest(request),
                response=_captureResponse(response),
                timestamp=datetime.now(timezone.utc),
            )
        )
        logger.debug(f"Recorded call to {request.url.host}{request.url.path}, now have {len(self.recordings)}")

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        response = self.wrapped.handle_request(request)
        response.read()
        self._store(request, response)
        return response

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        response = await self.asyncWrapped.handle_async_request(request)
        await response.aread()
        self._store(request, response)
        return response

    def close(self) -> None:
        self.wrapped.close()

    async def aclose(self) -> None:
        await self.asyncWrapped.aclose()


class ReplayTransport(httpx.BaseTransport, httpx.AsyncBaseTransport):
    """Transport that replays recorded HTTP traffic.

    Incoming requests are matched against recorded ones by method, scheme,
    host, path and the ordered list of query parameters. A recorded value of
    ``***MASKED***`` matches any value.
    """

    def __init__(self, recordings: List[HttpCall]):
        self.recordings = recordings
        self.usedRecordings: Set[int] = set()
        self.requestCount = 0

    def _paramsMatch(self, recorded: List[List[str]], actual: List[List[str]]) -> bool:
        if len(recorded) != len(actual):
            return False
        for (recordedName, recordedValue), (name, value) in zip(recorded, actual):
            if recordedName != name:
                return False
            if recordedValue != MASKED_PLACEHOLDER and recordedValue != value:
                return False
        return True

    def _matches(self, recorded: HttpRequest, request: httpx.Request) -> bool:
        recordedUrl = httpx.URL(recorded.url)
        return (
            recorded.method == request.method
            and recordedUrl.scheme == request.url.scheme
            and recordedUrl.host == request.url.host
            and recordedUrl.path == request.url.path
            and self._paramsMatch(
                recorded.params, [[name, value] for name, value in request.url.params.multi_items()]
            )
        )

    def findRecording(self, request: httpx.Request) -> HttpCall:
        """Find recorded call matching request.

        Raises:
            ValueError: If no matching recorded call is found.
        """
        self.requestCount += 1
        for index, call in enumerate(self.recordings):
            if self._matches(call.request, request):
                self.usedRecordings.add(index)
                return call
        raise ValueError(f"No recorded call found for {request.method} {request.url}")

    def _buildResponse(self, call: HttpCall) -> httpx.Response:
        headers = {k: v for k, v in call.response.headers.items() if k.lower() not in _DROPPED_HEADERS}
        return httpx.Response(
            status_code=call.response.status_code,
            headers=headers,
            content=call.response.content.encode() if call.response.content else b"",
        )

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self._buildResponse(self.findRecording(request))

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        return self._buildResponse(self.findRecording(request))

    def verifyAllCallsUsed(self) -> bool:
        """Check if every recorded call was replayed at least once."""
        return len(self.usedRecordings) == len(self.recordings)
