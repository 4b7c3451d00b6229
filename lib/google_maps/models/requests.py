"""
Request models for Google Maps Web Services.

Every endpoint has its own frozen request dataclass. All of them share the
common fields (API key, language, region, signing credentials, scheme) and
implement the same capability set:

- ``BASE_URL``: host and path of the endpoint (without scheme)
- ``REQUIRES_SSL``: whether the endpoint may only be called over https
- ``validate()``: raise ValidationError on the first problem found
- ``toQueryParameters()``: endpoint-specific parameters, assumes a valid request

The set of request variants is closed, see ``MapsRequest``.
"""

import datetime
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Sequence, Union, final

from .. import polyline
from ..constants import (
    DIRECTIONS_URL,
    ELEVATION_URL,
    GEOCODING_URL,
    MAX_PLACES_RADIUS,
    MIN_PLACES_RADIUS,
    PLACE_AUTOCOMPLETE_URL,
    PLACES_URL,
)
from ..exceptions import UnsupportedOperationError, ValidationError
from ..query import QueryParameters
from .common import Bounds, Location
from .enums import Avoid, RankBy, TrafficModel, TransitMode, TransitRoutingPreference, TravelMode, Units

Waypoint = Union[str, Location]


def toEpochSeconds(dt: datetime.datetime) -> int:
    """Convert datetime to unix timestamp, naive datetimes are treated as UTC"""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return int(dt.timestamp())


def _isBlank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _formatWaypoint(waypoint: Waypoint) -> str:
    return str(waypoint)


@dataclass(frozen=True, kw_only=True, slots=True)
class BaseMapsRequest(ABC):
    """
    Fields common to all endpoints
    """

    BASE_URL: ClassVar[str] = ""
    REQUIRES_SSL: ClassVar[bool] = False

    apiKey: Optional[str] = None
    """API key, filled from client configuration if not set"""
    language: Optional[str] = None
    """Language code for results (e.g. "en", "sv")"""
    region: Optional[str] = None
    """Region bias as ccTLD code (e.g. "nz")"""
    clientId: Optional[str] = None
    """Client ID for signed requests"""
    signingSecret: Optional[str] = field(default=None, repr=False)
    """URL-safe base64 signing secret, if set the URL is signed"""
    isSsl: Optional[bool] = None
    """Use https. None means client default"""

    def __post_init__(self) -> None:
        if self.REQUIRES_SSL and self.isSsl is False:
            raise UnsupportedOperationError(f"{type(self).__name__} must use SSL")

    @abstractmethod
    def validate(self) -> None:
        """Raise ValidationError on the first problem found"""

    @abstractmethod
    def toQueryParameters(self) -> QueryParameters:
        """Endpoint-specific parameters, assumes a valid request"""

    def _requireApiKey(self) -> None:
        if _isBlank(self.apiKey):
            raise ValidationError("ApiKey must be provided")


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class DirectionsRequest(BaseMapsRequest):
    """
    Route between origin and destination, optionally through waypoints
    """

    BASE_URL: ClassVar[str] = DIRECTIONS_URL

    origin: Optional[Waypoint] = None
    """Address or location to start from (required)"""
    destination: Optional[Waypoint] = None
    """Address or location to finish at (required)"""
    travelMode: Optional[TravelMode] = None
    """Travel mode, service default is driving"""
    waypoints: Sequence[Waypoint] = ()
    """Intermediate points, in order"""
    optimizeWaypoints: bool = False
    """Let the service reorder waypoints"""
    alternatives: bool = False
    """Ask for alternative routes"""
    avoid: Sequence[Avoid] = ()
    """Features to avoid"""
    units: Optional[Units] = None
    departureTime: Optional[datetime.datetime] = None
    arrivalTime: Optional[datetime.datetime] = None
    transitModes: Sequence[TransitMode] = ()
    transitRoutingPreference: Optional[TransitRoutingPreference] = None
    trafficModel: Optional[TrafficModel] = None

    @property
    def isTrafficAware(self) -> bool:
        """Request asks for duration in traffic"""
        if self.trafficModel is not None:
            return True
        return self.departureTime is not None and self.travelMode in (None, TravelMode.DRIVING)

    def validate(self) -> None:
        if self.origin is None or (isinstance(self.origin, str) and _isBlank(self.origin)):
            raise ValidationError("Origin must be provided")
        if self.destination is None or (isinstance(self.destination, str) and _isBlank(self.destination)):
            raise ValidationError("Destination must be provided")
        if self.departureTime is not None and self.arrivalTime is not None:
            raise ValidationError("Only one of DepartureTime and ArrivalTime may be provided")
        if self.arrivalTime is not None and self.travelMode != TravelMode.TRANSIT:
            raise ValidationError("ArrivalTime is supported for transit travel mode only")
        if self.trafficModel is not None and self.departureTime is None:
            raise ValidationError("TrafficModel requires DepartureTime")
        if self.isTrafficAware and _isBlank(self.apiKey) and _isBlank(self.clientId):
            raise ValidationError("ApiKey must be provided to get duration in traffic")

    def toQueryParameters(self) -> QueryParameters:
        parameters = QueryParameters()
        parameters.add("origin", _formatWaypoint(self.origin))  # type: ignore[arg-type]
        parameters.add("destination", _formatWaypoint(self.destination))  # type: ignore[arg-type]
        parameters.addOptional("mode", self.travelMode)

        if self.waypoints:
            waypoints = "|".join(_formatWaypoint(waypoint) for waypoint in self.waypoints)
            if self.optimizeWaypoints:
                waypoints = "optimize:true|" + waypoints
            parameters.add("waypoints", waypoints)

        if self.alternatives:
            parameters.add("alternatives", True)
        if self.avoid:
            parameters.add("avoid", "|".join(str(item) for item in self.avoid))
        parameters.addOptional("units", self.units)
        if self.departureTime is not None:
            parameters.add("departure_time", toEpochSeconds(self.departureTime))
        if self.arrivalTime is not None:
            parameters.add("arrival_time", toEpochSeconds(self.arrivalTime))
        if self.transitModes:
            parameters.add("transit_mode", "|".join(str(mode) for mode in self.transitModes))
        parameters.addOptional("transit_routing_preference", self.transitRoutingPreference)
        parameters.addOptional("traffic_model", self.trafficModel)
        return parameters


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class GeocodingRequest(BaseMapsRequest):
    """
    Forward (address to location) or reverse (location to address) geocoding
    """

    BASE_URL: ClassVar[str] = GEOCODING_URL

    address: Optional[str] = None
    """Address to geocode"""
    components: Optional[str] = None
    """Component filter, e.g. ``country:US|postal_code:94043``"""
    location: Optional[Location] = None
    """Location for reverse geocoding"""
    placeId: Optional[str] = None
    """Place ID to get address for"""
    bounds: Optional[Bounds] = None
    """Viewport to bias results to"""
    resultTypes: Sequence[str] = ()
    """Reverse geocoding: restrict results to these address types"""
    locationTypes: Sequence[str] = ()
    """Reverse geocoding: restrict results to these location types"""

    def validate(self) -> None:
        if _isBlank(self.address) and _isBlank(self.components) and self.location is None and _isBlank(self.placeId):
            raise ValidationError("One of Address, Components, Location or PlaceId must be provided")
        if self.location is not None and not _isBlank(self.address):
            raise ValidationError("Address and Location can't be used together")
        if self.location is not None:
            self.location.validateRange()

    def toQueryParameters(self) -> QueryParameters:
        parameters = QueryParameters()
        parameters.addOptional("address", self.address)
        parameters.addOptional("components", self.components)
        if self.location is not None:
            parameters.add("latlng", self.location)
        parameters.addOptional("place_id", self.placeId)
        parameters.addOptional("bounds", self.bounds)
        if self.resultTypes:
            parameters.add("result_type", "|".join(self.resultTypes))
        if self.locationTypes:
            parameters.add("location_type", "|".join(self.locationTypes))
        return parameters


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class PlacesRequest(BaseMapsRequest):
    """
    Nearby search for places around a location. SSL only.

    If ``pageToken`` is set, the service ignores every other parameter except
    the key. They are still sent.
    """

    BASE_URL: ClassVar[str] = PLACES_URL
    REQUIRES_SSL: ClassVar[bool] = True

    location: Optional[Location] = None
    """Location to search around (required)"""
    radius: Optional[float] = None
    """Search radius in meters, 1..50000. Must be omitted when ranking by distance"""
    keyword: Optional[str] = None
    """Term matched against all indexed content"""
    name: Optional[str] = None
    """Term matched against place names"""
    rankBy: RankBy = RankBy.PROMINENCE
    """Result ordering"""
    type: Optional[str] = None
    """Restrict results to this place type"""
    pageToken: Optional[str] = None
    """next_page_token from a previous response"""

    def validate(self) -> None:
        if self.location is None:
            raise ValidationError("Location must be provided")
        self.location.validateRange()
        if self.radius is not None and not MIN_PLACES_RADIUS <= self.radius <= MAX_PLACES_RADIUS:
            raise ValidationError(
                f"Radius must be greater than or equal to {MIN_PLACES_RADIUS} "
                f"and less than or equal to {MAX_PLACES_RADIUS}"
            )
        try:
            rankBy = RankBy(self.rankBy)
        except ValueError as e:
            raise ValidationError(f"Invalid RankBy value: {self.rankBy!r}") from e
        if rankBy == RankBy.DISTANCE and self.radius is not None:
            raise ValidationError("Radius must not be provided if RankBy is 'Distance'")
        if rankBy != RankBy.DISTANCE and self.radius is None:
            raise ValidationError("Radius must be specified unless RankBy is 'Distance'")
        self._requireApiKey()

    def toQueryParameters(self) -> QueryParameters:
        parameters = QueryParameters()
        parameters.add("location", self.location)
        parameters.addOptional("radius", self.radius)
        parameters.addOptional("keyword", self.keyword)
        parameters.addOptional("type", self.type)
        parameters.addOptional("name", self.name)
        if RankBy(self.rankBy) == RankBy.DISTANCE:
            parameters.add("rankby", RankBy.DISTANCE)
        parameters.addOptional("pagetoken", self.pageToken)
        return parameters


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class PlaceAutocompleteRequest(BaseMapsRequest):
    """
    Place predictions for a partially typed query. SSL only.

    Radius is passed as is: zero, negative or huge values are normalized by the service.
    """

    BASE_URL: ClassVar[str] = PLACE_AUTOCOMPLETE_URL
    REQUIRES_SSL: ClassVar[bool] = True

    input: Optional[str] = None
    """Text to get predictions for (required)"""
    offset: Optional[int] = None
    """Position of the last character the service should use for matching"""
    location: Optional[Location] = None
    """Point to bias predictions around"""
    radius: Optional[float] = None
    """Bias radius in meters"""
    type: Optional[str] = None
    """Restrict predictions to this type (e.g. "geocode")"""
    components: Optional[str] = None
    """Component filter, e.g. ``country:fr``"""
    strictBounds: bool = False
    """Only return places strictly within location/radius"""
    sessionToken: Optional[str] = None
    """Session token grouping autocomplete and details calls for billing"""

    def validate(self) -> None:
        if _isBlank(self.input):
            raise ValidationError("Input must be provided")
        if self.offset is not None and self.offset < 0:
            raise ValidationError("Offset must not be negative")
        if self.location is not None:
            self.location.validateRange()
        self._requireApiKey()

    def toQueryParameters(self) -> QueryParameters:
        parameters = QueryParameters()
        parameters.add("input", self.input)
        parameters.addOptional("offset", self.offset)
        parameters.addOptional("location", self.location)
        parameters.addOptional("radius", self.radius)
        parameters.addOptional("types", self.type)
        parameters.addOptional("components", self.components)
        if self.strictBounds:
            parameters.add("strictbounds", True)
        parameters.addOptional("sessiontoken", self.sessionToken)
        return parameters


@final
@dataclass(frozen=True, kw_only=True, slots=True)
class ElevationRequest(BaseMapsRequest):
    """
    Elevation for a set of discrete locations or for samples along a path
    """

    BASE_URL: ClassVar[str] = ELEVATION_URL

    locations: Sequence[Location] = ()
    """Discrete locations to get elevation for"""
    path: Sequence[Location] = ()
    """Path to sample elevation along"""
    samples: Optional[int] = None
    """Number of samples along the path (required with path)"""
    encodePolyline: bool = False
    """Send points as ``enc:<polyline>`` instead of ``lat,lng|lat,lng``"""

    def validate(self) -> None:
        if bool(self.locations) == bool(self.path):
            raise ValidationError("Exactly one of Locations and Path must be provided")
        if self.path:
            if len(self.path) < 2:
                raise ValidationError("Path must contain at least 2 points")
            if self.samples is None or self.samples < 1:
                raise ValidationError("Samples must be a positive number when Path is provided")
        for point in self.locations or self.path:
            point.validateRange()

    def _formatPoints(self, points: Sequence[Location]) -> str:
        if self.encodePolyline:
            return "enc:" + polyline.encode(points)
        return "|".join(str(point) for point in points)

    def toQueryParameters(self) -> QueryParameters:
        parameters = QueryParameters()
        if self.locations:
            parameters.add("locations", self._formatPoints(self.locations))
        else:
            parameters.add("path", self._formatPoints(self.path))
            parameters.add("samples", self.samples)
        return parameters


MapsRequest = Union[
    DirectionsRequest,
    GeocodingRequest,
    PlacesRequest,
    PlaceAutocompleteRequest,
    ElevationRequest,
]
"""All supported request variants"""
