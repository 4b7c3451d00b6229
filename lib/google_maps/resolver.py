"""
Response resolution for Google Maps Web Services

Decodes the raw JSON body, maps the ``status`` string through an explicit
table, checks it against the statuses the endpoint defines and builds the
typed response. Remote refusals are not raised: they are carried by the
response status and its classification.
"""

import json
import logging
from typing import Any, Dict, FrozenSet, Tuple, Type, Union

from .exceptions import ParseError, ValidationError
from .models.enums import Status, classifyStatus
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

logger = logging.getLogger(__name__)

MapsResponse = Union[
    DirectionsResponse,
    GeocodingResponse,
    PlacesResponse,
    PlaceAutocompleteResponse,
    ElevationResponse,
]

# Wire value -> Status. Anything not listed here is a parse error
STATUS_TABLE: Dict[str, Status] = {
    "OK": Status.OK,
    "ZERO_RESULTS": Status.ZERO_RESULTS,
    "NOT_FOUND": Status.NOT_FOUND,
    "OVER_QUERY_LIMIT": Status.OVER_QUERY_LIMIT,
    "OVER_DAILY_LIMIT": Status.OVER_DAILY_LIMIT,
    "REQUEST_DENIED": Status.REQUEST_DENIED,
    "INVALID_REQUEST": Status.INVALID_REQUEST,
    "MAX_WAYPOINTS_EXCEEDED": Status.MAX_WAYPOINTS_EXCEEDED,
    "MAX_ROUTE_LENGTH_EXCEEDED": Status.MAX_ROUTE_LENGTH_EXCEEDED,
    "DATA_NOT_AVAILABLE": Status.DATA_NOT_AVAILABLE,
    "UNKNOWN_ERROR": Status.UNKNOWN_ERROR,
}

_COMMON_STATUSES: FrozenSet[Status] = frozenset(
    {
        Status.OK,
        Status.ZERO_RESULTS,
        Status.OVER_QUERY_LIMIT,
        Status.REQUEST_DENIED,
        Status.INVALID_REQUEST,
        Status.UNKNOWN_ERROR,
    }
)

DIRECTIONS_STATUSES: FrozenSet[Status] = _COMMON_STATUSES | {
    Status.NOT_FOUND,
    Status.OVER_DAILY_LIMIT,
    Status.MAX_WAYPOINTS_EXCEEDED,
    Status.MAX_ROUTE_LENGTH_EXCEEDED,
}
GEOCODING_STATUSES: FrozenSet[Status] = _COMMON_STATUSES | {Status.OVER_DAILY_LIMIT}
PLACES_STATUSES: FrozenSet[Status] = _COMMON_STATUSES | {Status.NOT_FOUND}
PLACE_AUTOCOMPLETE_STATUSES: FrozenSet[Status] = _COMMON_STATUSES
ELEVATION_STATUSES: FrozenSet[Status] = _COMMON_STATUSES | {Status.OVER_DAILY_LIMIT, Status.DATA_NOT_AVAILABLE}

_ENDPOINTS: Dict[type, Tuple[Type[Any], FrozenSet[Status]]] = {
    DirectionsRequest: (DirectionsResponse, DIRECTIONS_STATUSES),
    GeocodingRequest: (GeocodingResponse, GEOCODING_STATUSES),
    PlacesRequest: (PlacesResponse, PLACES_STATUSES),
    PlaceAutocompleteRequest: (PlaceAutocompleteResponse, PLACE_AUTOCOMPLETE_STATUSES),
    ElevationRequest: (ElevationResponse, ELEVATION_STATUSES),
}


def parseStatus(rawStatus: Any, allowed: FrozenSet[Status]) -> Status:
    """Map wire status through STATUS_TABLE and check it against allowed subset.

    Raises:
        ParseError: If status is missing, unknown or not defined for the endpoint
    """
    if not isinstance(rawStatus, str):
        raise ParseError(f"Response status must be a string, got {rawStatus!r}")
    status = STATUS_TABLE.get(rawStatus)
    if status is None:
        raise ParseError(f"Unknown response status: {rawStatus!r}")
    if status not in allowed:
        raise ParseError(f"Status {rawStatus} is not defined for this endpoint")
    return status


class ResponseResolver:
    """Turns raw response body into typed response for given request, dood!

    Stateless, a single instance may be shared between concurrent calls.
    """

    def getEndpoint(self, request: MapsRequest) -> Tuple[Type[Any], FrozenSet[Status]]:
        """Get response type and allowed statuses for request variant"""
        endpoint = _ENDPOINTS.get(type(request))
        if endpoint is None:
            raise ValidationError(f"Unsupported request type: {type(request).__name__}")
        return endpoint

    def decode(self, body: Union[bytes, str]) -> Dict[str, Any]:
        """Decode JSON object from body.

        Raises:
            ParseError: If body isn't valid JSON object
        """
        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ParseError(f"Failed to parse JSON response: {e}") from e

        if not isinstance(data, dict):
            raise ParseError(f"Response must be a JSON object, got {type(data).__name__}")
        return data

    def resolve(self, request: MapsRequest, body: Union[bytes, str]) -> MapsResponse:
        """Build typed response for request from raw body.

        Args:
            request: Request the body answers
            body: Raw response body

        Returns:
            Response of the type matching the request variant. Non-success
            statuses are returned as well, see ``response.classification``

        Raises:
            ParseError: If body is malformed, status is unknown or not allowed
                for the endpoint, ZERO_RESULTS comes with results or embedded
                polyline is broken
        """
        data = self.decode(body)
        responseType, allowed = self.getEndpoint(request)
        status = parseStatus(data.get("status"), allowed)

        try:
            response = responseType.from_dict(data, status)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ParseError(f"Malformed {responseType.__name__}: {type(e).__name__}: {e}", response=data) from e

        if status == Status.ZERO_RESULTS and response.results:
            raise ParseError(
                f"ZERO_RESULTS status with {len(response.results)} results in {responseType.__name__}",
                response=data,
            )

        logger.debug(
            f"Resolved {responseType.__name__}: status={status}, class={classifyStatus(status)}, "
            f"results={len(response.results)}"
        )
        if response.error_message:
            logger.debug(f"Service error message: {response.error_message}")
        return response
