"""
Google Maps Web Services Client Library

This module provides a typed Python client for the Google Maps web services
(directions, geocoding, places search, place autocomplete and elevation)
with blocking and async calls sharing one request pipeline.

Example usage:
    from lib.google_maps import (
        DirectionsRequest,
        GeocodingRequest,
        GoogleMapsClient,
        Location,
        PlacesRequest,
        iterPages,
    )

    client = GoogleMapsClient(apiKey="your_api_key", language="en")

    # Directions
    directions = client.query(DirectionsRequest(origin="Boston, MA", destination="Concord, MA"))
    for point in directions.routes[0].overview_polyline.points:
        print(point)

    # Places, page by page
    for page in iterPages(client, PlacesRequest(location=Location(40.7, -74.0), radius=500)):
        ...

    # Async
    geocoding = await client.queryAsync(GeocodingRequest(address="1600 Amphitheatre Parkway"))
"""

from . import polyline
from .client import GoogleMapsClient
from .config import GoogleMapsConfig, loadConfig
from .constants import PAGE_TOKEN_DELAY
from .dispatcher import Dispatcher
from .exceptions import (
    ConfigurationError,
    DuplicateParameterError,
    GoogleMapsError,
    ParseError,
    TransportError,
    TransportErrorKind,
    UnsupportedOperationError,
    ValidationError,
)
from .models import (
    Bounds,
    DirectionsRequest,
    DirectionsResponse,
    Distance,
    Duration,
    ElevationRequest,
    ElevationResponse,
    GeocodingRequest,
    GeocodingResponse,
    Location,
    MapsRequest,
    PlaceAutocompleteRequest,
    PlaceAutocompleteResponse,
    PlacesRequest,
    PlacesResponse,
    RankBy,
    Status,
    StatusClass,
    TravelMode,
)
from .pagination import hasNextPage, iterPages, iterPagesAsync, nextPageRequest
from .query import QueryBuilder, QueryParameters
from .resolver import MapsResponse, ResponseResolver

__all__ = [
    "GoogleMapsClient",
    "GoogleMapsConfig",
    "loadConfig",
    "QueryBuilder",
    "QueryParameters",
    "Dispatcher",
    "ResponseResolver",
    "polyline",
    "hasNextPage",
    "nextPageRequest",
    "iterPages",
    "iterPagesAsync",
    "PAGE_TOKEN_DELAY",
    "GoogleMapsError",
    "ValidationError",
    "UnsupportedOperationError",
    "DuplicateParameterError",
    "TransportError",
    "TransportErrorKind",
    "ParseError",
    "ConfigurationError",
    "Location",
    "Bounds",
    "Distance",
    "Duration",
    "Status",
    "StatusClass",
    "RankBy",
    "TravelMode",
    "MapsRequest",
    "MapsResponse",
    "DirectionsRequest",
    "GeocodingRequest",
    "PlacesRequest",
    "PlaceAutocompleteRequest",
    "ElevationRequest",
    "DirectionsResponse",
    "GeocodingResponse",
    "PlacesResponse",
    "PlaceAutocompleteResponse",
    "ElevationResponse",
]
