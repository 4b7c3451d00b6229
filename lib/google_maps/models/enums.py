from enum import StrEnum
from typing import Dict

# Response Enums


class Status(StrEnum):
    """
    Per-call outcome reported by the service in the ``status`` field
    """

    OK = "OK"
    ZERO_RESULTS = "ZERO_RESULTS"
    NOT_FOUND = "NOT_FOUND"
    """At least one of the locations (origin, destination, waypoint) couldn't be geocoded"""
    OVER_QUERY_LIMIT = "OVER_QUERY_LIMIT"
    OVER_DAILY_LIMIT = "OVER_DAILY_LIMIT"
    """Key is missing or invalid, billing is not enabled or self-imposed cap exceeded"""
    REQUEST_DENIED = "REQUEST_DENIED"
    INVALID_REQUEST = "INVALID_REQUEST"
    MAX_WAYPOINTS_EXCEEDED = "MAX_WAYPOINTS_EXCEEDED"
    MAX_ROUTE_LENGTH_EXCEEDED = "MAX_ROUTE_LENGTH_EXCEEDED"
    DATA_NOT_AVAILABLE = "DATA_NOT_AVAILABLE"
    """No elevation data for the requested locations"""
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class StatusClass(StrEnum):
    """
    How a caller should treat a status. Informational only, nothing is retried automatically
    """

    SUCCESS = "success"
    """Call completed (OK or ZERO_RESULTS)"""
    TRANSIENT = "transient"
    """Call may succeed if repeated later"""
    FATAL = "fatal"
    """Configuration or client error, repeating won't help"""


_STATUS_CLASSES: Dict[Status, StatusClass] = {
    Status.OK: StatusClass.SUCCESS,
    Status.ZERO_RESULTS: StatusClass.SUCCESS,
    Status.OVER_QUERY_LIMIT: StatusClass.TRANSIENT,
    Status.OVER_DAILY_LIMIT: StatusClass.TRANSIENT,
    Status.UNKNOWN_ERROR: StatusClass.TRANSIENT,
    Status.NOT_FOUND: StatusClass.FATAL,
    Status.REQUEST_DENIED: StatusClass.FATAL,
    Status.INVALID_REQUEST: StatusClass.FATAL,
    Status.MAX_WAYPOINTS_EXCEEDED: StatusClass.FATAL,
    Status.MAX_ROUTE_LENGTH_EXCEEDED: StatusClass.FATAL,
    Status.DATA_NOT_AVAILABLE: StatusClass.FATAL,
}


def classifyStatus(status: Status) -> StatusClass:
    """Get StatusClass of given status"""
    return _STATUS_CLASSES[status]


# Request Enums


class RankBy(StrEnum):
    """
    Order of places search results
    """

    PROMINENCE = "prominence"
    DISTANCE = "distance"


class TravelMode(StrEnum):
    DRIVING = "driving"
    WALKING = "walking"
    BICYCLING = "bicycling"
    TRANSIT = "transit"


class Avoid(StrEnum):
    TOLLS = "tolls"
    HIGHWAYS = "highways"
    FERRIES = "ferries"
    INDOOR = "indoor"


class Units(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


class TransitMode(StrEnum):
    BUS = "bus"
    SUBWAY = "subway"
    TRAIN = "train"
    TRAM = "tram"
    RAIL = "rail"


class TransitRoutingPreference(StrEnum):
    LESS_WALKING = "less_walking"
    FEWER_TRANSFERS = "fewer_transfers"


class TrafficModel(StrEnum):
    """
    Assumptions to use when calculating time in traffic
    """

    BEST_GUESS = "best_guess"
    PESSIMISTIC = "pessimistic"
    OPTIMISTIC = "optimistic"
