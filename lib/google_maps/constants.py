"""
Google Maps Web Services Constants

This module contains constants shared by the Google Maps client components.
"""

from typing import Final

VERSION: Final[str] = "0.1.0"

# Transport
HTTP_SCHEME: Final[str] = "http"
HTTPS_SCHEME: Final[str] = "https"
DEFAULT_TIMEOUT: Final[float] = 10.0
USER_AGENT: Final[str] = f"GoogleMapsClient/{VERSION}"

# Endpoints (host + path, scheme is chosen per request)
DIRECTIONS_URL: Final[str] = "maps.googleapis.com/maps/api/directions/json"
GEOCODING_URL: Final[str] = "maps.googleapis.com/maps/api/geocode/json"
PLACES_URL: Final[str] = "maps.googleapis.com/maps/api/place/search/json"
PLACE_AUTOCOMPLETE_URL: Final[str] = "maps.googleapis.com/maps/api/place/autocomplete/json"
ELEVATION_URL: Final[str] = "maps.googleapis.com/maps/api/elevation/json"

# Common query parameter names
PARAM_KEY: Final[str] = "key"
PARAM_LANGUAGE: Final[str] = "language"
PARAM_REGION: Final[str] = "region"
PARAM_CLIENT: Final[str] = "client"
PARAM_SIGNATURE: Final[str] = "signature"

# Places limits
MIN_PLACES_RADIUS: Final[int] = 1
MAX_PLACES_RADIUS: Final[int] = 50000

# Server side processing window before a next_page_token becomes valid (seconds)
PAGE_TOKEN_DELAY: Final[float] = 2.0

# Polyline precision (1e-5 degree)
POLYLINE_PRECISION: Final[int] = 5

# Placeholder for secrets in logs
MASKED_VALUE: Final[str] = "***"
