"""
Response models for Google Maps Web Services.

Responses are frozen dataclasses built once per call by the ResponseResolver
from the decoded JSON payload. Encoded polylines are expanded into locations
while building. Missing mandatory fields or wrongly typed values raise
KeyError/TypeError/ValueError which the resolver turns into ParseError.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .. import polyline
from .common import Bounds, Distance, Duration, Location
from .enums import Status, StatusClass, classifyStatus


def _list(data: Dict[str, Any], key: str) -> List[Any]:
    """Get list value, absent key means empty list"""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"'{key}' must be a list, got {type(value).__name__}")
    return value


def _optionalLocation(data: Optional[Dict[str, Any]]) -> Optional[Location]:
    if data is None:
        return None
    return Location.from_dict(data)


@dataclass(frozen=True, slots=True)
class Polyline:
    """
    Encoded polyline together with its decoded points
    """

    encoded: str
    """Polyline as sent by the service"""
    points: List[Location] = field(default_factory=list)
    """Decoded points"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Polyline":
        encoded = data["points"]
        if not isinstance(encoded, str):
            raise TypeError("Polyline points must be a string")
        return cls(encoded=encoded, points=polyline.decode(encoded))

    @classmethod
    def fromOptional(cls, data: Optional[Dict[str, Any]]) -> Optional["Polyline"]:
        if data is None:
            return None
        return cls.from_dict(data)


@dataclass(frozen=True, slots=True, kw_only=True)
class BaseMapsResponse:
    """
    Status and error message common to all responses
    """

    status: Status
    """Outcome of the call"""
    error_message: Optional[str] = None
    """Detailed error reported by the service, never set for OK/ZERO_RESULTS"""

    @property
    def classification(self) -> StatusClass:
        """Success, transient or fatal outcome"""
        return classifyStatus(self.status)

    @property
    def isSuccess(self) -> bool:
        return self.classification == StatusClass.SUCCESS

    @staticmethod
    def _errorMessage(data: Dict[str, Any], status: Status) -> Optional[str]:
        if classifyStatus(status) == StatusClass.SUCCESS:
            return None
        return data.get("error_message")


# Directions


@dataclass(frozen=True, slots=True)
class TransitTime:
    """
    Transit arrival/departure time
    """

    value: int
    """Unix timestamp"""
    text: str = ""
    time_zone: str = ""

    @classmethod
    def fromOptional(cls, data: Optional[Dict[str, Any]]) -> Optional["TransitTime"]:
        if data is None:
            return None
        return cls(value=int(data["value"]), text=data.get("text", ""), time_zone=data.get("time_zone", ""))


@dataclass(frozen=True, slots=True)
class TransitStop:
    name: str
    location: Optional[Location] = None

    @classmethod
    def fromOptional(cls, data: Optional[Dict[str, Any]]) -> Optional["TransitStop"]:
        if data is None:
            return None
        return cls(name=data.get("name", ""), location=_optionalLocation(data.get("location")))


@dataclass(frozen=True, slots=True)
class Vehicle:
    name: str = ""
    type: str = ""
    icon: Optional[str] = None
    """URL of the vehicle icon"""


@dataclass(frozen=True, slots=True)
class TransitLine:
    name: str = ""
    short_name: str = ""
    color: Optional[str] = None
    vehicle: Optional[Vehicle] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TransitLine":
        vehicle = data.get("vehicle")
        return cls(
            name=data.get("name", ""),
            short_name=data.get("short_name", ""),
            color=data.get("color"),
            vehicle=(
                Vehicle(name=vehicle.get("name", ""), type=vehicle.get("type", ""), icon=vehicle.get("icon"))
                if vehicle is not None
                else None
            ),
        )


@dataclass(frozen=True, slots=True)
class TransitDetails:
    """
    Public transport details of a transit step
    """

    line: Optional[TransitLine] = None
    departure_stop: Optional[TransitStop] = None
    arrival_stop: Optional[TransitStop] = None
    departure_time: Optional[TransitTime] = None
    arrival_time: Optional[TransitTime] = None
    headsign: str = ""
    num_stops: int = 0

    @classmethod
    def fromOptional(cls, data: Optional[Dict[str, Any]]) -> Optional["TransitDetails"]:
        if data is None:
            return None
        line = data.get("line")
        return cls(
            line=TransitLine.from_dict(line) if line is not None else None,
            departure_stop=TransitStop.fromOptional(data.get("departure_stop")),
            arrival_stop=TransitStop.fromOptional(data.get("arrival_stop")),
            departure_time=TransitTime.fromOptional(data.get("departure_time")),
            arrival_time=TransitTime.fromOptional(data.get("arrival_time")),
            headsign=data.get("headsign", ""),
            num_stops=int(data.get("num_stops", 0)),
        )


@dataclass(frozen=True, slots=True)
class Step:
    """
    Maneuver-level part of a leg
    """

    html_instructions: str = ""
    travel_mode: str = ""
    distance: Optional[Distance] = None
    duration: Optional[Duration] = None
    start_location: Optional[Location] = None
    end_location: Optional[Location] = None
    polyline: Optional[Polyline] = None
    """Step geometry"""
    maneuver: Optional[str] = None
    steps: List["Step"] = field(default_factory=list)
    """Sub-steps (walking directions inside a transit step and similar)"""
    transit_details: Optional[TransitDetails] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Step":
        distance = data.get("distance")
        return cls(
            html_instructions=data.get("html_instructions", ""),
            travel_mode=data.get("travel_mode", ""),
            distance=Distance.from_dict(distance) if distance is not None else None,
            duration=Duration.fromOptional(data.get("duration")),
            start_location=_optionalLocation(data.get("start_location")),
            end_location=_optionalLocation(data.get("end_location")),
            polyline=Polyline.fromOptional(data.get("polyline")),
            maneuver=data.get("maneuver"),
            # The service sends sub steps under "steps" despite docs calling them "sub_steps"
            steps=[Step.from_dict(step) for step in _list(data, "steps")],
            transit_details=TransitDetails.fromOptional(data.get("transit_details")),
        )


@dataclass(frozen=True, slots=True)
class Leg:
    """
    Route part between two consecutive waypoints
    """

    steps: List[Step] = field(default_factory=list)
    distance: Optional[Distance] = None
    duration: Optional[Duration] = None
    duration_in_traffic: Optional[Duration] = None
    """Only present for traffic-aware requests"""
    start_address: str = ""
    end_address: str = ""
    start_location: Optional[Location] = None
    end_location: Optional[Location] = None
    departure_time: Optional[TransitTime] = None
    arrival_time: Optional[TransitTime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Leg":
        distance = data.get("distance")
        return cls(
            steps=[Step.from_dict(step) for step in _list(data, "steps")],
            distance=Distance.from_dict(distance) if distance is not None else None,
            duration=Duration.fromOptional(data.get("duration")),
            duration_in_traffic=Duration.fromOptional(data.get("duration_in_traffic")),
            start_address=data.get("start_address", ""),
            end_address=data.get("end_address", ""),
            start_location=_optionalLocation(data.get("start_location")),
            end_location=_optionalLocation(data.get("end_location")),
            departure_time=TransitTime.fromOptional(data.get("departure_time")),
            arrival_time=TransitTime.fromOptional(data.get("arrival_time")),
        )


@dataclass(frozen=True, slots=True)
class Route:
    summary: str = ""
    legs: List[Leg] = field(default_factory=list)
    waypoint_order: List[int] = field(default_factory=list)
    """Order of waypoints after optimization"""
    overview_polyline: Optional[Polyline] = None
    """Smoothed geometry of the whole route"""
    bounds: Optional[Bounds] = None
    copyrights: str = ""
    warnings: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Route":
        return cls(
            summary=data.get("summary", ""),
            legs=[Leg.from_dict(leg) for leg in _list(data, "legs")],
            waypoint_order=[int(index) for index in _list(data, "waypoint_order")],
            overview_polyline=Polyline.fromOptional(data.get("overview_polyline")),
            bounds=Bounds.fromOptional(data.get("bounds") or None),
            copyrights=data.get("copyrights", ""),
            warnings=list(_list(data, "warnings")),
        )


@dataclass(frozen=True, slots=True)
class GeocodedWaypoint:
    geocoder_status: str = ""
    place_id: Optional[str] = None
    types: List[str] = field(default_factory=list)


@dataclass(frozen=True, slots=True, kw_only=True)
class DirectionsResponse(BaseMapsResponse):
    routes: List[Route] = field(default_factory=list)
    geocoded_waypoints: List[GeocodedWaypoint] = field(default_factory=list)
    available_travel_modes: List[str] = field(default_factory=list)

    @property
    def results(self) -> List[Route]:
        return self.routes

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status: Status) -> "DirectionsResponse":
        return cls(
            status=status,
            error_message=cls._errorMessage(data, status),
            routes=[Route.from_dict(route) for route in _list(data, "routes")],
            geocoded_waypoints=[
                GeocodedWaypoint(
                    geocoder_status=waypoint.get("geocoder_status", ""),
                    place_id=waypoint.get("place_id"),
                    types=list(_list(waypoint, "types")),
                )
                for waypoint in _list(data, "geocoded_waypoints")
            ],
            available_travel_modes=list(_list(data, "available_travel_modes")),
        )


# Geocoding


@dataclass(frozen=True, slots=True)
class AddressComponent:
    long_name: str
    short_name: str
    types: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AddressComponent":
        return cls(
            long_name=data.get("long_name", ""),
            short_name=data.get("short_name", ""),
            types=list(_list(data, "types")),
        )


@dataclass(frozen=True, slots=True)
class Geometry:
    location: Location
    location_type: Optional[str] = None
    """ROOFTOP, RANGE_INTERPOLATED, GEOMETRIC_CENTER or APPROXIMATE"""
    viewport: Optional[Bounds] = None
    bounds: Optional[Bounds] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Geometry":
        return cls(
            location=Location.from_dict(data["location"]),
            location_type=data.get("location_type"),
            viewport=Bounds.fromOptional(data.get("viewport")),
            bounds=Bounds.fromOptional(data.get("bounds")),
        )


@dataclass(frozen=True, slots=True)
class GeocodeResult:
    formatted_address: str
    geometry: Geometry
    place_id: str = ""
    address_components: List[AddressComponent] = field(default_factory=list)
    types: List[str] = field(default_factory=list)
    partial_match: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeocodeResult":
        return cls(
            formatted_address=data.get("formatted_address", ""),
            geometry=Geometry.from_dict(data["geometry"]),
            place_id=data.get("place_id", ""),
            address_components=[AddressComponent.from_dict(item) for item in _list(data, "address_components")],
            types=list(_list(data, "types")),
            partial_match=bool(data.get("partial_match", False)),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class GeocodingResponse(BaseMapsResponse):
    results: List[GeocodeResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status: Status) -> "GeocodingResponse":
        return cls(
            status=status,
            error_message=cls._errorMessage(data, status),
            results=[GeocodeResult.from_dict(item) for item in _list(data, "results")],
        )


# Places


@dataclass(frozen=True, slots=True)
class PlaceResult:
    place_id: str
    name: str
    geometry: Optional[Geometry] = None
    vicinity: str = ""
    types: List[str] = field(default_factory=list)
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    price_level: Optional[int] = None
    business_status: Optional[str] = None
    open_now: Optional[bool] = None
    icon: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlaceResult":
        geometry = data.get("geometry")
        openingHours = data.get("opening_hours") or {}
        rating = data.get("rating")
        return cls(
            place_id=data.get("place_id", ""),
            name=data.get("name", ""),
            geometry=Geometry.from_dict(geometry) if geometry is not None else None,
            vicinity=data.get("vicinity", ""),
            types=list(_list(data, "types")),
            rating=float(rating) if rating is not None else None,
            user_ratings_total=data.get("user_ratings_total"),
            price_level=data.get("price_level"),
            business_status=data.get("business_status"),
            open_now=openingHours.get("open_now"),
            icon=data.get("icon"),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class PlacesResponse(BaseMapsResponse):
    results: List[PlaceResult] = field(default_factory=list)
    next_page_token: Optional[str] = None
    """Continuation token, valid shortly after issuance only"""
    html_attributions: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status: Status) -> "PlacesResponse":
        return cls(
            status=status,
            error_message=cls._errorMessage(data, status),
            results=[PlaceResult.from_dict(item) for item in _list(data, "results")],
            next_page_token=data.get("next_page_token") or None,
            html_attributions=list(_list(data, "html_attributions")),
        )


# Place Autocomplete


@dataclass(frozen=True, slots=True)
class MatchedSubstring:
    offset: int
    length: int


@dataclass(frozen=True, slots=True)
class Term:
    offset: int
    value: str


@dataclass(frozen=True, slots=True)
class Prediction:
    description: str
    place_id: Optional[str] = None
    types: List[str] = field(default_factory=list)
    matched_substrings: List[MatchedSubstring] = field(default_factory=list)
    terms: List[Term] = field(default_factory=list)
    main_text: Optional[str] = None
    secondary_text: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Prediction":
        formatting = data.get("structured_formatting") or {}
        return cls(
            description=data["description"],
            place_id=data.get("place_id"),
            types=list(_list(data, "types")),
            matched_substrings=[
                MatchedSubstring(offset=int(item["offset"]), length=int(item["length"]))
                for item in _list(data, "matched_substrings")
            ],
            terms=[Term(offset=int(item["offset"]), value=item["value"]) for item in _list(data, "terms")],
            main_text=formatting.get("main_text"),
            secondary_text=formatting.get("secondary_text"),
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class PlaceAutocompleteResponse(BaseMapsResponse):
    results: List[Prediction] = field(default_factory=list)
    """Predictions, sent by the service as "predictions\""""

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status: Status) -> "PlaceAutocompleteResponse":
        return cls(
            status=status,
            error_message=cls._errorMessage(data, status),
            results=[Prediction.from_dict(item) for item in _list(data, "predictions")],
        )


# Elevation


@dataclass(frozen=True, slots=True)
class ElevationResult:
    elevation: float
    """Elevation in meters relative to mean sea level"""
    location: Location
    resolution: Optional[float] = None
    """Max distance between data points the elevation was interpolated from"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ElevationResult":
        resolution = data.get("resolution")
        return cls(
            elevation=float(data["elevation"]),
            location=Location.from_dict(data["location"]),
            resolution=float(resolution) if resolution is not None else None,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class ElevationResponse(BaseMapsResponse):
    results: List[ElevationResult] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status: Status) -> "ElevationResponse":
        return cls(
            status=status,
            error_message=cls._errorMessage(data, status),
            results=[ElevationResult.from_dict(item) for item in _list(data, "results")],
        )
