"""
Common models for Google Maps Web Services.

This module contains value types shared by requests and responses:
Location, Bounds, Distance and Duration.
"""

import datetime
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..exceptions import ValidationError


@dataclass(frozen=True, slots=True)
class Location:
    """
    Latitude/longitude pair in degrees
    """

    lat: float
    """Latitude"""
    lng: float
    """Longitude"""

    def __str__(self) -> str:
        """Format as ``lat,lng``, the way the web services expect it."""
        return f"{float(self.lat)!r},{float(self.lng)!r}"

    def validateRange(self, fieldName: str = "location") -> None:
        """Check that coordinates are within [-90, 90] x [-180, 180].

        Raises:
            ValidationError: If any coordinate is out of range
        """
        if not -90.0 <= self.lat <= 90.0:
            raise ValidationError(f"{fieldName}: latitude {self.lat} must be within [-90, 90]")
        if not -180.0 <= self.lng <= 180.0:
            raise ValidationError(f"{fieldName}: longitude {self.lng} must be within [-180, 180]")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Location":
        """Create Location from ``{"lat": ..., "lng": ...}``."""
        return cls(lat=float(data["lat"]), lng=float(data["lng"]))


@dataclass(frozen=True, slots=True)
class Bounds:
    """
    Rectangular area defined by its north-east and south-west corners
    """

    northeast: Location
    """North-east corner"""
    southwest: Location
    """South-west corner"""

    @property
    def center(self) -> Location:
        """Midpoint of the bounding box"""
        return Location(
            lat=(self.northeast.lat + self.southwest.lat) / 2,
            lng=(self.northeast.lng + self.southwest.lng) / 2,
        )

    def __str__(self) -> str:
        """Format as ``sw_lat,sw_lng|ne_lat,ne_lng``."""
        return f"{self.southwest}|{self.northeast}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bounds":
        """Create Bounds from API response dictionary."""
        return cls(
            northeast=Location.from_dict(data["northeast"]),
            southwest=Location.from_dict(data["southwest"]),
        )

    @classmethod
    def fromOptional(cls, data: Optional[Dict[str, Any]]) -> Optional["Bounds"]:
        """Same as from_dict() but tolerates missing value"""
        if data is None:
            return None
        return cls.from_dict(data)


@dataclass(frozen=True, slots=True)
class Distance:
    """
    Distance as reported by the service
    """

    value: int
    """Distance in meters"""
    text: str = ""
    """Human readable distance in request language/units"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Distance":
        return cls(value=int(data["value"]), text=data.get("text", ""))


@dataclass(frozen=True, slots=True)
class Duration:
    """
    Duration as reported by the service
    """

    value: int
    """Duration in seconds"""
    text: str = ""
    """Human readable duration in request language"""

    @property
    def timedelta(self) -> datetime.timedelta:
        return datetime.timedelta(seconds=self.value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Duration":
        return cls(value=int(data["value"]), text=data.get("text", ""))

    @classmethod
    def fromOptional(cls, data: Optional[Dict[str, Any]]) -> Optional["Duration"]:
        if data is None:
            return None
        return cls.from_dict(data)
