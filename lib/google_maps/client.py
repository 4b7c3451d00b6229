"""
Google Maps Web Services Client

This module provides the GoogleMapsClient class which runs the request
pipeline: validate and build URL, dispatch (blocking or non-blocking),
resolve typed response. Both modes share every step except the transport.
"""

import asyncio
import dataclasses
import logging
from typing import Optional, Tuple, overload

import httpx

from .config import GoogleMapsConfig
from .constants import DEFAULT_TIMEOUT
from .dispatcher import Dispatcher
from .models.requests import (
    DirectionsRequest,
    ElevationRequest,
    GeocodingRequest,
    MapsRequest,
    PlaceAutocompleteRequest,
    PlacesRequest,
)
from .models.responses import (
    DirectionsResponse,
    ElevationResponse,
    GeocodingResponse,
    PlaceAutocompleteResponse,
    PlacesResponse,
)
from .query import QueryBuilder
from .resolver import MapsResponse, ResponseResolver

logger = logging.getLogger(__name__)

_DEFAULTED_FIELDS = ("apiKey", "language", "region", "clientId", "signingSecret")


class GoogleMapsClient:
    """Typed client for Google Maps Web Services, dood!

    Holds client-wide defaults only, no per-call state: one instance may be
    used concurrently from many threads or tasks. A new HTTP session is
    created for each call unless a transport is injected; injected transports
    are shared by all calls and closed by ``close()``/``aclose()`` (or by
    leaving the client's ``with``/``async with`` block).

    Example:
        >>> from lib.google_maps import GoogleMapsClient, PlacesRequest, Location
        >>>
        >>> client = GoogleMapsClient(apiKey="your_api_key", language="en")
        >>> response = client.query(PlacesRequest(location=Location(51.5, -0.12), radius=500))
        >>> for place in response.results:
        ...     print(place.name)
        >>>
        >>> # Same pipeline without blocking the event loop
        >>> response = await client.queryAsync(PlacesRequest(location=Location(51.5, -0.12), radius=500))
    """

    def __init__(
        self,
        apiKey: Optional[str] = None,
        *,
        language: Optional[str] = None,
        region: Optional[str] = None,
        clientId: Optional[str] = None,
        signingSecret: Optional[str] = None,
        useSsl: bool = True,
        requestTimeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.BaseTransport] = None,
        asyncTransport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize Google Maps client, dood!

        Args:
            apiKey: Default API key for requests which don't carry one
            language: Default result language
            region: Default region bias
            clientId: Default client ID for signed requests
            signingSecret: Default URL-safe base64 signing secret
            useSsl: Default scheme for endpoints allowing plain http (default: True)
            requestTimeout: HTTP request timeout in seconds (default: 10)
            transport: Optional httpx transport for blocking calls
            asyncTransport: Optional httpx transport for non-blocking calls
        """
        self.apiKey = apiKey
        self.language = language
        self.region = region
        self.clientId = clientId
        self.signingSecret = signingSecret
        self.useSsl = useSsl
        self.requestTimeout = requestTimeout
        self.queryBuilder = QueryBuilder()
        self.dispatcher = Dispatcher(requestTimeout=requestTimeout, transport=transport, asyncTransport=asyncTransport)
        self.resolver = ResponseResolver()

    def close(self) -> None:
        """Close injected blocking transport"""
        self.dispatcher.close()

    async def aclose(self) -> None:
        """Close injected transports"""
        await self.dispatcher.aclose()

    def __enter__(self) -> "GoogleMapsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    async def __aenter__(self) -> "GoogleMapsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @classmethod
    def fromConfig(
        cls,
        config: GoogleMapsConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        asyncTransport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "GoogleMapsClient":
        """Create client from loaded configuration"""
        return cls(
            config.apiKey,
            language=config.language,
            region=config.region,
            clientId=config.clientId,
            signingSecret=config.signingSecret,
            useSsl=config.useSsl,
            requestTimeout=config.requestTimeout,
            transport=transport,
            asyncTransport=asyncTransport,
        )

    def applyDefaults(self, request: MapsRequest) -> MapsRequest:
        """Return copy of request with unset common fields taken from client defaults"""
        changes = {}
        for name in _DEFAULTED_FIELDS:
            default = getattr(self, name)
            if default is not None and getattr(request, name) is None:
                changes[name] = default
        if not changes:
            return request
        return dataclasses.replace(request, **changes)

    def _prepare(self, request: MapsRequest) -> Tuple[MapsRequest, str]:
        """Apply defaults, validate and build URL. Raises before any network activity"""
        request = self.applyDefaults(request)
        url = self.queryBuilder.buildUrl(request, useSsl=self.useSsl)
        return request, url

    @overload
    def query(self, request: DirectionsRequest) -> DirectionsResponse: ...
    @overload
    def query(self, request: GeocodingRequest) -> GeocodingResponse: ...
    @overload
    def query(self, request: PlacesRequest) -> PlacesResponse: ...
    @overload
    def query(self, request: PlaceAutocompleteRequest) -> PlaceAutocompleteResponse: ...
    @overload
    def query(self, request: ElevationRequest) -> ElevationResponse: ...

    def query(self, request: MapsRequest) -> MapsResponse:
        """Run request, blocking until response is resolved.

        Raises:
            ValidationError: If request is invalid (no network call is made)
            TransportError: On HTTP failure
            ParseError: If response is malformed
        """
        request, url = self._prepare(request)
        body = self.dispatcher.send(url)
        return self.resolver.resolve(request, body)

    @overload
    async def queryAsync(
        self, request: DirectionsRequest, cancelEvent: Optional[asyncio.Event] = None
    ) -> DirectionsResponse: ...
    @overload
    async def queryAsync(
        self, request: GeocodingRequest, cancelEvent: Optional[asyncio.Event] = None
    ) -> GeocodingResponse: ...
    @overload
    async def queryAsync(self, request: PlacesRequest, cancelEvent: Optional[asyncio.Event] = None) -> PlacesResponse: ...
    @overload
    async def queryAsync(
        self, request: PlaceAutocompleteRequest, cancelEvent: Optional[asyncio.Event] = None
    ) -> PlaceAutocompleteResponse: ...
    @overload
    async def queryAsync(
        self, request: ElevationRequest, cancelEvent: Optional[asyncio.Event] = None
    ) -> ElevationResponse: ...

    async def queryAsync(self, request: MapsRequest, cancelEvent: Optional[asyncio.Event] = None) -> MapsResponse:
        """Run request without blocking the event loop.

        Args:
            request: Request to run
            cancelEvent: Optional cancellation token, see ``Dispatcher.sendAsync``

        Raises:
            ValidationError: If request is invalid (no network call is made)
            TransportError: On HTTP failure or cancellation
            ParseError: If response is malformed
        """
        request, url = self._prepare(request)
        body = await self.dispatcher.sendAsync(url, cancelEvent)
        return self.resolver.resolve(request, body)
