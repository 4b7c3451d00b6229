"""
Encoded Polyline Codec

Google transports route geometry as "encoded polylines": every coordinate is
quantized to 1e-5 degree, delta-encoded against the previous point, zigzag
encoded and emitted as 5-bit chunks (least significant first) mapped onto
printable ASCII characters starting at '?' (63). A chunk with bit 0x20 set is
followed by more chunks of the same value.

Example:
    >>> from lib.google_maps import polyline
    >>> points = polyline.decode("_p~iF~ps|U_ulLnnqC_mqNvxq`@")
    >>> points[0]
    Location(lat=38.5, lng=-120.2)
    >>> polyline.encode(points)
    '_p~iF~ps|U_ulLnnqC_mqNvxq`@'
"""

from typing import Iterable, List

from .constants import POLYLINE_PRECISION
from .models.common import Location

_FACTOR = 10**POLYLINE_PRECISION
_CHAR_OFFSET = 63
_CHUNK_MASK = 0x1F
_CONTINUATION_FLAG = 0x20


def _decodeValues(encoded: str) -> List[int]:
    """Split encoded string into signed integer deltas.

    Raises:
        ValueError: On characters outside of the polyline alphabet or truncated value
    """
    values: List[int] = []
    accumulated = 0
    shift = 0
    for position, char in enumerate(encoded):
        chunk = ord(char) - _CHAR_OFFSET
        if chunk < 0 or chunk > 0x3F:
            raise ValueError(f"Invalid polyline character {char!r} at position {position}")

        accumulated |= (chunk & _CHUNK_MASK) << shift
        shift += 5
        if chunk & _CONTINUATION_FLAG:
            continue

        # Un-zigzag
        values.append(~(accumulated >> 1) if accumulated & 1 else accumulated >> 1)
        accumulated = 0
        shift = 0

    if shift:
        raise ValueError("Polyline ends in the middle of a value")
    return values


def decode(encoded: str) -> List[Location]:
    """Decode an encoded polyline into the ordered list of its points.

    Args:
        encoded: Encoded polyline string (may be empty)

    Returns:
        List of decoded locations, quantized to 1e-5 degree

    Raises:
        ValueError: If the string is not a well-formed polyline
    """
    values = _decodeValues(encoded)
    if len(values) % 2:
        raise ValueError("Polyline contains latitude without longitude")

    points: List[Location] = []
    lat = 0
    lng = 0
    for i in range(0, len(values), 2):
        lat += values[i]
        lng += values[i + 1]
        points.append(Location(lat / _FACTOR, lng / _FACTOR))
    return points


def _encodeValue(value: int) -> str:
    # Same as (value << 1) ^ (value >> 31) for 32-bit values, but unbounded
    value = ~(value << 1) if value < 0 else value << 1

    chars: List[str] = []
    while value >= _CONTINUATION_FLAG:
        chars.append(chr(((value & _CHUNK_MASK) | _CONTINUATION_FLAG) + _CHAR_OFFSET))
        value >>= 5
    chars.append(chr(value + _CHAR_OFFSET))
    return "".join(chars)


def encode(points: Iterable[Location]) -> str:
    """Encode points into a polyline string.

    Exact inverse of :func:`decode` up to 1e-5 degree quantization.

    Args:
        points: Ordered locations

    Returns:
        Encoded polyline string
    """
    chunks: List[str] = []
    prevLat = 0
    prevLng = 0
    for point in points:
        lat = round(point.lat * _FACTOR)
        lng = round(point.lng * _FACTOR)
        chunks.append(_encodeValue(lat - prevLat))
        chunks.append(_encodeValue(lng - prevLng))
        prevLat = lat
        prevLng = lng
    return "".join(chunks)
