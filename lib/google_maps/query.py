"""
Query construction for Google Maps Web Services

This module provides the ordered query parameter container and the
QueryBuilder that merges common parameters (key, language, region, client)
with endpoint-specific ones, signs the result if a signing secret is
configured and produces the final request URL.
"""

import base64
import binascii
import hashlib
import hmac
import logging
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional, Tuple
from urllib.parse import urlencode

from .constants import (
    HTTP_SCHEME,
    HTTPS_SCHEME,
    MASKED_VALUE,
    PARAM_CLIENT,
    PARAM_KEY,
    PARAM_LANGUAGE,
    PARAM_REGION,
    PARAM_SIGNATURE,
)
from .exceptions import DuplicateParameterError, ValidationError

if TYPE_CHECKING:
    from .models.requests import MapsRequest

logger = logging.getLogger(__name__)


def formatValue(value: Any) -> str:
    """Convert python value into query string representation.

    Booleans become ``true``/``false``, integral floats lose their fraction
    (``10000.0`` -> ``10000``), everything else goes through ``str()``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class QueryParameters:
    """Ordered list of query parameters with unique keys, dood!

    Keeps insertion order. Adding a key twice raises DuplicateParameterError.
    """

    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: Dict[str, str] = {}

    def add(self, key: str, value: Any) -> "QueryParameters":
        """Append parameter.

        Raises:
            DuplicateParameterError: If key is already present
        """
        if key in self._items:
            raise DuplicateParameterError(key)
        self._items[key] = formatValue(value)
        return self

    def addOptional(self, key: str, value: Any) -> "QueryParameters":
        """Append parameter unless value is None or empty string"""
        if value is None or (isinstance(value, str) and not value.strip()):
            return self
        return self.add(key, value)

    def extend(self, other: "QueryParameters") -> "QueryParameters":
        """Append all parameters of other list, preserving their order"""
        for key, value in other:
            self.add(key, value)
        return self

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._items.get(key, default)

    def keys(self) -> list[str]:
        return list(self._items.keys())

    def encode(self) -> str:
        """Percent-encode as UTF-8 query string, spaces become '+'"""
        return urlencode(list(self._items.items()), encoding="utf-8")

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(list(self._items.items()))

    def __contains__(self, key: object) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QueryParameters):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"QueryParameters({list(self)!r})"


def signPath(pathAndQuery: str, signingSecret: str) -> str:
    """Compute URL signature for ``/path?query`` part of the URL.

    Signature is HMAC-SHA1 keyed with URL-safe base64 decoded secret,
    encoded back with URL-safe base64.

    Raises:
        ValidationError: If secret is not valid URL-safe base64
    """
    try:
        key = base64.b64decode(signingSecret, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValidationError(f"Signing secret is not valid URL-safe base64: {e}") from e
    if not key:
        raise ValidationError("Signing secret is empty")

    digest = hmac.new(key, pathAndQuery.encode("utf-8"), hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


def maskUrl(url: str) -> str:
    """Hide key and signature values in URL for logging"""
    base, _, query = url.partition("?")
    if not query:
        return url
    parts = []
    for part in query.split("&"):
        name, sep, _value = part.partition("=")
        if name in (PARAM_KEY, PARAM_SIGNATURE):
            part = f"{name}{sep}{MASKED_VALUE}"
        parts.append(part)
    return f"{base}?{'&'.join(parts)}"


class QueryBuilder:
    """Builds the request URL for any request variant.

    Stateless, a single instance may be shared between concurrent calls.
    """

    def buildParameters(self, request: "MapsRequest") -> QueryParameters:
        """Validate request and merge common and endpoint parameters.

        Common parameters come first (key, language, region, client),
        endpoint-specific ones follow in the order the request produces them.

        Raises:
            ValidationError: If request is invalid (nothing is built in that case)
            DuplicateParameterError: If endpoint parameters clash with common ones
        """
        request.validate()

        parameters = QueryParameters()
        parameters.addOptional(PARAM_KEY, request.apiKey)
        parameters.addOptional(PARAM_LANGUAGE, request.language)
        parameters.addOptional(PARAM_REGION, request.region)
        parameters.addOptional(PARAM_CLIENT, request.clientId)

        parameters.extend(request.toQueryParameters())
        return parameters

    def getScheme(self, request: "MapsRequest", useSsl: bool = True) -> str:
        """Choose URL scheme: explicit request setting wins over client default.

        Endpoints which require SSL always get https.
        """
        if request.REQUIRES_SSL:
            return HTTPS_SCHEME
        isSsl = useSsl if request.isSsl is None else request.isSsl
        return HTTPS_SCHEME if isSsl else HTTP_SCHEME

    def buildUrl(self, request: "MapsRequest", useSsl: bool = True) -> str:
        """Build full URL, signing it if request carries signing secret.

        Args:
            request: Request to build URL for
            useSsl: Default scheme choice for endpoints not forcing it

        Returns:
            ``scheme://host/path?query[&signature=...]``

        Raises:
            ValidationError: If request is invalid or signing secret is malformed
        """
        parameters = self.buildParameters(request)

        host, _, path = request.BASE_URL.partition("/")
        path = "/" + path
        query = parameters.encode()

        if request.signingSecret:
            signature = signPath(f"{path}?{query}", request.signingSecret)
            parameters.add(PARAM_SIGNATURE, signature)
            query = parameters.encode()

        url = f"{self.getScheme(request, useSsl)}://{host}{path}?{query}"
        logger.debug(f"Built URL: {maskUrl(url)}")
        return url
