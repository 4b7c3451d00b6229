"""
Places pagination

A places response carrying ``next_page_token`` has more results. The
follow-up request is a copy of the original one with the token set. The
service needs a short while (see PAGE_TOKEN_DELAY) before a fresh token
becomes valid; waiting is left to the caller, nothing here sleeps.
"""

import asyncio
import dataclasses
import logging
from typing import TYPE_CHECKING, AsyncIterator, Iterator, Optional

from .exceptions import ValidationError
from .models.requests import PlacesRequest
from .models.responses import PlacesResponse

if TYPE_CHECKING:
    from .client import GoogleMapsClient

logger = logging.getLogger(__name__)


def hasNextPage(response: PlacesResponse) -> bool:
    """Check if response has a continuation token"""
    return bool(response.next_page_token)


def nextPageRequest(request: PlacesRequest, response: PlacesResponse) -> PlacesRequest:
    """Build follow-up request for the next page.

    All fields of the original request are kept (and still serialized),
    only ``pageToken`` is replaced.

    Raises:
        ValidationError: If response has no next page
    """
    if not hasNextPage(response):
        raise ValidationError("Response has no next page")
    return dataclasses.replace(request, pageToken=response.next_page_token)


def iterPages(client: "GoogleMapsClient", request: PlacesRequest) -> Iterator[PlacesResponse]:
    """Iterate over result pages, dood!

    Each page is requested only when the caller advances the iterator, so the
    caller controls the delay between pages.
    """
    response = client.query(request)
    pageNumber = 1
    yield response
    while hasNextPage(response):
        request = nextPageRequest(request, response)
        pageNumber += 1
        logger.debug(f"Requesting places page {pageNumber}")
        response = client.query(request)
        yield response


async def iterPagesAsync(
    client: "GoogleMapsClient",
    request: PlacesRequest,
    cancelEvent: Optional[asyncio.Event] = None,
) -> AsyncIterator[PlacesResponse]:
    """Async version of iterPages()"""
    response = await client.queryAsync(request, cancelEvent)
    pageNumber = 1
    yield response
    while hasNextPage(response):
        request = nextPageRequest(request, response)
        pageNumber += 1
        logger.debug(f"Requesting places page {pageNumber}")
        response = await client.queryAsync(request, cancelEvent)
        yield response
