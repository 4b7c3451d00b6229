"""
Unit tests for request models: validation and endpoint parameters
"""

import dataclasses
import datetime

import pytest

from lib.google_maps.exceptions import UnsupportedOperationError, ValidationError
from lib.google_maps.models import (
    BaseMapsRequest,
    Bounds,
    DirectionsRequest,
    ElevationRequest,
    GeocodingRequest,
    Location,
    PlaceAutocompleteRequest,
    PlacesRequest,
    RankBy,
    TravelMode,
)
from lib.google_maps.models.enums import Avoid, TrafficModel, TransitMode, Units
from lib.google_maps.models.requests import toEpochSeconds

SYDNEY = Location(-33.8670522, 151.1957362)


def params(request) -> list:
    return list(request.toQueryParameters())


# Places


def test_places_valid_request():
    """Fully filled places request produces parameters in fixed order, dood!"""
    request = PlacesRequest(
        apiKey="key",
        location=SYDNEY,
        radius=500,
        keyword="cruise",
        name="harbour",
        type="restaurant",
    )
    request.validate()

    assert params(request) == [
        ("location", "-33.8670522,151.1957362"),
        ("radius", "500"),
        ("keyword", "cruise"),
        ("type", "restaurant"),
        ("name", "harbour"),
    ]


def test_places_requires_location():
    with pytest.raises(ValidationError, match="Location"):
        PlacesRequest(apiKey="key", radius=500).validate()


@pytest.mark.parametrize("radius", [1, 50000, 25000.5])
def test_places_radius_in_range(radius):
    PlacesRequest(apiKey="key", location=SYDNEY, radius=radius).validate()


@pytest.mark.parametrize("radius", [0, -1, 50001, 0.5])
def test_places_radius_out_of_range(radius):
    with pytest.raises(ValidationError, match="Radius"):
        PlacesRequest(apiKey="key", location=SYDNEY, radius=radius).validate()


def test_places_rank_by_distance():
    """Distance ranking forbids radius and is sent as rankby=distance"""
    request = PlacesRequest(apiKey="key", location=SYDNEY, rankBy=RankBy.DISTANCE, keyword="pizza")
    request.validate()
    assert params(request) == [
        ("location", "-33.8670522,151.1957362"),
        ("keyword", "pizza"),
        ("rankby", "distance"),
    ]

    with pytest.raises(ValidationError, match="Radius must not be provided"):
        PlacesRequest(apiKey="key", location=SYDNEY, rankBy=RankBy.DISTANCE, radius=100).validate()


def test_places_radius_required_unless_distance():
    with pytest.raises(ValidationError, match="Radius must be specified"):
        PlacesRequest(apiKey="key", location=SYDNEY).validate()


def test_places_invalid_rank_by():
    with pytest.raises(ValidationError, match="RankBy"):
        PlacesRequest(apiKey="key", location=SYDNEY, radius=10, rankBy="nearest").validate()  # type: ignore[arg-type]


@pytest.mark.parametrize("apiKey", [None, "", "   "])
def test_places_requires_api_key(apiKey):
    with pytest.raises(ValidationError, match="ApiKey"):
        PlacesRequest(apiKey=apiKey, location=SYDNEY, radius=500).validate()


def test_places_location_range():
    with pytest.raises(ValidationError, match="latitude"):
        PlacesRequest(apiKey="key", location=Location(91, 0), radius=500).validate()


def test_places_forbids_plain_http():
    with pytest.raises(UnsupportedOperationError):
        PlacesRequest(apiKey="key", location=SYDNEY, radius=500, isSsl=False)
    # Explicit true is fine
    PlacesRequest(apiKey="key", location=SYDNEY, radius=500, isSsl=True).validate()


def test_places_page_token_keeps_other_parameters():
    request = PlacesRequest(apiKey="key", location=SYDNEY, radius=500, keyword="cruise")
    nextPage = dataclasses.replace(request, pageToken="CpQCAgEAAF")

    assert params(nextPage)[-1] == ("pagetoken", "CpQCAgEAAF")
    assert params(nextPage)[:-1] == params(request)


# Place Autocomplete


def test_autocomplete_parameters():
    request = PlaceAutocompleteRequest(
        apiKey="key",
        input="Amoeba",
        offset=3,
        location=Location(37.76999, -122.44696),
        radius=500,
        type="establishment",
        components="country:us",
        strictBounds=True,
        sessionToken="session-1",
    )
    request.validate()

    assert params(request) == [
        ("input", "Amoeba"),
        ("offset", "3"),
        ("location", "37.76999,-122.44696"),
        ("radius", "500"),
        ("types", "establishment"),
        ("components", "country:us"),
        ("strictbounds", "true"),
        ("sessiontoken", "session-1"),
    ]


@pytest.mark.parametrize("radius", [0, -100, 100000000])
def test_autocomplete_accepts_any_radius(radius):
    PlaceAutocompleteRequest(apiKey="key", input="Vict", radius=radius).validate()


def test_autocomplete_validation():
    with pytest.raises(ValidationError, match="Input"):
        PlaceAutocompleteRequest(apiKey="key", input="  ").validate()
    with pytest.raises(ValidationError, match="Offset"):
        PlaceAutocompleteRequest(apiKey="key", input="Vict", offset=-1).validate()
    with pytest.raises(ValidationError, match="ApiKey"):
        PlaceAutocompleteRequest(input="Vict").validate()
    with pytest.raises(UnsupportedOperationError):
        PlaceAutocompleteRequest(apiKey="key", input="Vict", isSsl=False)


# Directions


def test_directions_minimal():
    request = DirectionsRequest(origin="Toronto", destination="Montreal")
    request.validate()
    assert params(request) == [("origin", "Toronto"), ("destination", "Montreal")]


def test_directions_all_parameters():
    departure = datetime.datetime(2024, 1, 1, 12, 0, tzinfo=datetime.timezone.utc)
    request = DirectionsRequest(
        apiKey="key",
        origin=Location(43.65, -79.38),
        destination="Montreal",
        travelMode=TravelMode.DRIVING,
        waypoints=["Kingston, ON", Location(45.42, -75.69)],
        optimizeWaypoints=True,
        alternatives=True,
        avoid=[Avoid.TOLLS, Avoid.FERRIES],
        units=Units.IMPERIAL,
        departureTime=departure,
        trafficModel=TrafficModel.PESSIMISTIC,
    )
    request.validate()

    assert params(request) == [
        ("origin", "43.65,-79.38"),
        ("destination", "Montreal"),
        ("mode", "driving"),
        ("waypoints", "optimize:true|Kingston, ON|45.42,-75.69"),
        ("alternatives", "true"),
        ("avoid", "tolls|ferries"),
        ("units", "imperial"),
        ("departure_time", "1704110400"),
        ("traffic_model", "pessimistic"),
    ]


def test_directions_transit():
    arrival = datetime.datetime(2024, 1, 1, 12, 0)
    request = DirectionsRequest(
        origin="Brooklyn",
        destination="Queens",
        travelMode=TravelMode.TRANSIT,
        arrivalTime=arrival,
        transitModes=[TransitMode.SUBWAY, TransitMode.BUS],
    )
    request.validate()

    assert params(request)[-2:] == [("arrival_time", "1704110400"), ("transit_mode", "subway|bus")]


def test_naive_datetime_is_utc():
    assert toEpochSeconds(datetime.datetime(1970, 1, 2)) == 86400


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"destination": "Montreal"}, "Origin"),
        ({"origin": "Toronto", "destination": " "}, "Destination"),
        (
            {
                "origin": "A",
                "destination": "B",
                "travelMode": TravelMode.TRANSIT,
                "departureTime": datetime.datetime(2024, 1, 1),
                "arrivalTime": datetime.datetime(2024, 1, 2),
            },
            "Only one of",
        ),
        ({"origin": "A", "destination": "B", "arrivalTime": datetime.datetime(2024, 1, 2)}, "transit"),
        ({"origin": "A", "destination": "B", "trafficModel": TrafficModel.BEST_GUESS}, "DepartureTime"),
        ({"origin": "A", "destination": "B", "departureTime": datetime.datetime(2024, 1, 2)}, "duration in traffic"),
    ],
)
def test_directions_validation(kwargs, message):
    with pytest.raises(ValidationError, match=message):
        DirectionsRequest(**kwargs).validate()


def test_directions_traffic_with_client_id():
    """Client ID is enough for traffic-aware request"""
    DirectionsRequest(
        origin="A", destination="B", clientId="gme-client", departureTime=datetime.datetime(2024, 1, 2)
    ).validate()


# Geocoding


def test_geocoding_forward():
    request = GeocodingRequest(
        address="1600 Amphitheatre Parkway, Mountain View, CA",
        components="country:US",
        bounds=Bounds(northeast=Location(34.24, -118.23), southwest=Location(34.17, -118.6)),
    )
    request.validate()

    assert params(request) == [
        ("address", "1600 Amphitheatre Parkway, Mountain View, CA"),
        ("components", "country:US"),
        ("bounds", "34.17,-118.6|34.24,-118.23"),
    ]


def test_geocoding_reverse():
    request = GeocodingRequest(
        location=Location(40.714224, -73.961452),
        resultTypes=["street_address", "route"],
        locationTypes=["ROOFTOP"],
    )
    request.validate()

    assert params(request) == [
        ("latlng", "40.714224,-73.961452"),
        ("result_type", "street_address|route"),
        ("location_type", "ROOFTOP"),
    ]


def test_geocoding_validation():
    with pytest.raises(ValidationError, match="One of"):
        GeocodingRequest().validate()
    with pytest.raises(ValidationError, match="together"):
        GeocodingRequest(address="Main St", location=SYDNEY).validate()
    with pytest.raises(ValidationError, match="longitude"):
        GeocodingRequest(location=Location(0, 181)).validate()
    GeocodingRequest(placeId="ChIJd8BlQ2BZwokRAFUEcm_qrcA").validate()


# Elevation


def test_elevation_locations():
    request = ElevationRequest(locations=[Location(39.7391536, -104.9847034), Location(36.455556, -116.866667)])
    request.validate()
    assert params(request) == [("locations", "39.7391536,-104.9847034|36.455556,-116.866667")]


def test_elevation_path_encoded():
    request = ElevationRequest(
        path=[Location(38.5, -120.2), Location(40.7, -120.95), Location(43.252, -126.453)],
        samples=3,
        encodePolyline=True,
    )
    request.validate()
    assert params(request) == [("path", "enc:_p~iF~ps|U_ulLnnqC_mqNvxq`@"), ("samples", "3")]


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"locations": [SYDNEY], "path": [SYDNEY, SYDNEY], "samples": 2},
        {"path": [SYDNEY], "samples": 2},
        {"path": [SYDNEY, SYDNEY]},
        {"path": [SYDNEY, SYDNEY], "samples": 0},
        {"locations": [Location(-91, 0)]},
    ],
)
def test_elevation_validation(kwargs):
    with pytest.raises(ValidationError):
        ElevationRequest(**kwargs).validate()


# Common


def test_base_request_is_abstract():
    """Only concrete endpoint requests can be created"""
    with pytest.raises(TypeError):
        BaseMapsRequest(apiKey="key")  # type: ignore[abstract]


@pytest.mark.parametrize(
    "mapsRequest",
    [
        DirectionsRequest(origin="a", destination="b"),
        GeocodingRequest(address="a"),
        PlacesRequest(location=SYDNEY, radius=100),
        PlaceAutocompleteRequest(input="a"),
        ElevationRequest(locations=[SYDNEY]),
    ],
    ids=lambda mapsRequest: type(mapsRequest).__name__,
)
def test_every_endpoint_implements_request_capabilities(mapsRequest):
    assert isinstance(mapsRequest, BaseMapsRequest)
    assert mapsRequest.BASE_URL
    assert list(mapsRequest.toQueryParameters())
