"""
HTTP dispatch for Google Maps Web Services

The Dispatcher performs a single GET round trip, either blocking the calling
thread (``send``) or suspending only at network I/O (``sendAsync``).

Without an injected transport a new httpx session is created for each call.
An injected transport is shared by every call, so it is wrapped in one
long-lived session per mode which is only closed by ``close()``/``aclose()``.
"""

import asyncio
import logging
from typing import Optional

import httpx

from .constants import DEFAULT_TIMEOUT, USER_AGENT
from .exceptions import TransportError, TransportErrorKind
from .query import maskUrl

logger = logging.getLogger(__name__)


class Dispatcher:
    """Sends request URLs and returns raw response bodies, dood!

    Args:
        requestTimeout: HTTP request timeout in seconds
        transport: Optional httpx transport for blocking calls (tests, replay)
        asyncTransport: Optional httpx transport for non-blocking calls
    """

    def __init__(
        self,
        requestTimeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        asyncTransport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.requestTimeout = requestTimeout
        self.transport = transport
        self.asyncTransport = asyncTransport
        self.headers = {"User-Agent": USER_AGENT, "Accept": "application/json"}

        # Shared sessions for injected transports, closing them closes the transport
        self.session: Optional[httpx.Client] = None
        self.asyncSession: Optional[httpx.AsyncClient] = None
        if transport is not None:
            self.session = httpx.Client(timeout=requestTimeout, transport=transport)
        if asyncTransport is not None:
            self.asyncSession = httpx.AsyncClient(timeout=requestTimeout, transport=asyncTransport)

    def close(self) -> None:
        """Close shared blocking session and its injected transport"""
        if self.session is not None:
            self.session.close()

    async def aclose(self) -> None:
        """Close both shared sessions and their injected transports"""
        self.close()
        if self.asyncSession is not None:
            await self.asyncSession.aclose()

    def _checkResponse(self, response: httpx.Response, url: str) -> bytes:
        if not response.is_success:
            logger.warning(f"HTTP {response.status_code} from {maskUrl(url)}")
            raise TransportError(
                f"Unexpected HTTP status {response.status_code}",
                TransportErrorKind.HTTP_STATUS,
                statusCode=response.status_code,
            )
        logger.debug(f"HTTP {response.status_code}, {len(response.content)} bytes")
        return response.content

    def _translateError(self, error: httpx.HTTPError, url: str) -> TransportError:
        if isinstance(error, httpx.TimeoutException):
            logger.warning(f"Request timeout: {maskUrl(url)}")
            return TransportError(f"Request timed out: {error}", TransportErrorKind.TIMEOUT)
        logger.warning(f"Network error for {maskUrl(url)}: {error}")
        return TransportError(f"Network error: {error}", TransportErrorKind.NETWORK)

    def send(self, url: str) -> bytes:
        """Perform blocking GET request.

        Returns:
            Raw response body

        Raises:
            TransportError: On non-2xx status, timeout or network failure
        """
        logger.debug(f"GET {maskUrl(url)}")
        try:
            if self.session is not None:
                response = self.session.get(url, headers=self.headers)
            else:
                with httpx.Client(timeout=self.requestTimeout) as session:
                    response = session.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise self._translateError(e, url) from e
        return self._checkResponse(response, url)

    async def _fetchAsync(self, url: str) -> bytes:
        try:
            if self.asyncSession is not None:
                response = await self.asyncSession.get(url, headers=self.headers)
            else:
                async with httpx.AsyncClient(timeout=self.requestTimeout) as session:
                    response = await session.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            raise self._translateError(e, url) from e
        return self._checkResponse(response, url)

    async def sendAsync(self, url: str, cancelEvent: Optional[asyncio.Event] = None) -> bytes:
        """Perform non-blocking GET request.

        Args:
            url: Full request URL
            cancelEvent: Optional cancellation token. Setting it before the
                request completes aborts the in-flight request

        Returns:
            Raw response body

        Raises:
            TransportError: On non-2xx status, timeout, network failure or cancellation
        """
        if cancelEvent is not None and cancelEvent.is_set():
            raise TransportError("Request cancelled before start", TransportErrorKind.CANCELLED)

        logger.debug(f"GET (async) {maskUrl(url)}")
        if cancelEvent is None:
            return await self._fetchAsync(url)

        fetchTask = asyncio.ensure_future(self._fetchAsync(url))
        cancelTask = asyncio.ensure_future(cancelEvent.wait())
        try:
            done, _ = await asyncio.wait({fetchTask, cancelTask}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for task in (fetchTask, cancelTask):
                if not task.done():
                    task.cancel()

        if fetchTask in done:
            return fetchTask.result()

        # Let aborted request unwind before reporting
        await asyncio.gather(fetchTask, return_exceptions=True)
        logger.debug(f"Request cancelled: {maskUrl(url)}")
        raise TransportError("Request cancelled", TransportErrorKind.CANCELLED)
