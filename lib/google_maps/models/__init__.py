"""
Google Maps Web Services models: shared value types, enums, requests and responses.
"""

from .common import Bounds, Distance, Duration, Location
from .enums import (
    Avoid,
    RankBy,
    Status,
    StatusClass,
    TrafficModel,
    TransitMode,
    TransitRoutingPreference,
    TravelMode,
    Units,
    classifyStatus,
)
from .requests import (
    BaseMapsRequest,
    DirectionsRequest,
    ElevationRequest,
    GeocodingRequest,
    MapsRequest,
    PlaceAutocompleteRequest,
    PlacesRequest,
)
from .responses import (
    AddressComponent,
    BaseMapsResponse,
    DirectionsResponse,
    ElevationResponse,
    ElevationResult,
    GeocodedWaypoint,
    GeocodeResult,
    GeocodingResponse,
    Geometry,
    Leg,
    MatchedSubstring,
    PlaceAutocompleteResponse,
    PlaceResult,
    PlacesResponse,
    Polyline,
    Prediction,
    Route,
    Step,
    Term,
    TransitDetails,
    TransitLine,
    TransitStop,
    TransitTime,
    Vehicle,
)

__all__ = [
    "Location",
    "Bounds",
    "Distance",
    "Duration",
    "Status",
    "StatusClass",
    "classifyStatus",
    "RankBy",
    "TravelMode",
    "Avoid",
    "Units",
    "TransitMode",
    "TransitRoutingPreference",
    "TrafficModel",
    "BaseMapsRequest",
    "DirectionsRequest",
    "GeocodingRequest",
    "PlacesRequest",
    "PlaceAutocompleteRequest",
    "ElevationRequest",
    "MapsRequest",
    "BaseMapsResponse",
    "DirectionsResponse",
    "Route",
    "Leg",
    "Step",
    "Polyline",
    "TransitDetails",
    "TransitLine",
    "TransitStop",
    "TransitTime",
    "Vehicle",
    "GeocodedWaypoint",
    "GeocodingResponse",
    "GeocodeResult",
    "AddressComponent",
    "Geometry",
    "PlacesResponse",
    "PlaceResult",
    "PlaceAutocompleteResponse",
    "Prediction",
    "MatchedSubstring",
    "Term",
    "ElevationResponse",
    "ElevationResult",
]
