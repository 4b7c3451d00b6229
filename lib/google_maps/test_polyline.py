"""
Unit tests for encoded polyline codec
"""

import random

import pytest

from lib.google_maps import polyline
from lib.google_maps.models import Location

REFERENCE_POLYLINE = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"
REFERENCE_POINTS = [
    Location(38.5, -120.2),
    Location(40.7, -120.95),
    Location(43.252, -126.453),
]


def test_decode_reference_vector():
    """Decode well-known polyline, dood!"""
    assert polyline.decode(REFERENCE_POLYLINE) == REFERENCE_POINTS


def test_encode_reference_vector():
    assert polyline.encode(REFERENCE_POINTS) == REFERENCE_POLYLINE


def test_empty_polyline():
    assert polyline.decode("") == []
    assert polyline.encode([]) == ""


def test_round_trip_quantizes_to_five_digits():
    """Encoding then decoding keeps points up to 1e-5 degree"""
    points = [Location(55.7558301, 37.6172999), Location(-33.86882, 151.20929), Location(0.0, 0.0)]

    decoded = polyline.decode(polyline.encode(points))

    assert len(decoded) == len(points)
    for original, restored in zip(points, decoded):
        assert restored.lat == pytest.approx(original.lat, abs=1e-5)
        assert restored.lng == pytest.approx(original.lng, abs=1e-5)
    # Already quantized points survive exactly
    assert polyline.decode(polyline.encode(decoded)) == decoded


def randomPoints(rng: random.Random, count: int) -> list:
    return [Location(rng.uniform(-90.0, 90.0), rng.uniform(-180.0, 180.0)) for _ in range(count)]


def signFlippingPoints(rng: random.Random, count: int) -> list:
    """Consecutive points on opposite sides of the equator and the prime meridian"""
    points = []
    for i in range(count):
        sign = 1 if i % 2 == 0 else -1
        points.append(Location(sign * rng.uniform(0.0, 90.0), -sign * rng.uniform(0.0, 180.0)))
    return points


@pytest.mark.parametrize("seed", range(10))
@pytest.mark.parametrize("count", [1, 2, 7, 100, 1000])
@pytest.mark.parametrize("makePoints", [randomPoints, signFlippingPoints])
def test_round_trip_arbitrary_sequences(makePoints, count, seed):
    """Any sequence of valid points survives encode and decode within 1e-5 degree, dood!"""
    points = makePoints(random.Random(seed * 1000 + count), count)

    encoded = polyline.encode(points)
    decoded = polyline.decode(encoded)

    assert len(decoded) == count
    for original, restored in zip(points, decoded):
        assert abs(restored.lat - original.lat) <= 0.5e-5 + 1e-9
        assert abs(restored.lng - original.lng) <= 0.5e-5 + 1e-9
        assert -90.0 <= restored.lat <= 90.0
        assert -180.0 <= restored.lng <= 180.0
    assert polyline.encode(decoded) == encoded


def test_encode_extreme_coordinates():
    points = [Location(90.0, 180.0), Location(-90.0, -180.0)]
    assert polyline.decode(polyline.encode(points)) == points


@pytest.mark.parametrize(
    "encoded",
    [
        "_p~iF~ps|U_ulLnnqC_mqNvxq`",  # truncated value
        "_p~iF",  # latitude without longitude
        "_p~iF ~ps|U",  # character outside of alphabet
    ],
)
def test_decode_malformed(encoded):
    with pytest.raises(ValueError):
        polyline.decode(encoded)
