"""Data models for Golden Data Testing System.

This module defines the core data structures used for capturing,
storing, and replaying HTTP traffic in the golden data testing system.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class HttpRequest(BaseModel):
    """HTTP request details captured during recording.

    Query parameters are stored as ordered ``[name, value]`` pairs so that
    repeated names and parameter order survive the round trip.
    """

    method: str
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    params: List[List[str]] = Field(default_factory=list)
    body: Optional[str] = None


class HttpResponse(BaseModel):
    """HTTP response details captured during recording."""

    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    content: str


class HttpCall(BaseModel):
    """Complete HTTP call with request, response, and timestamp."""

    request: HttpRequest
    response: HttpResponse
    timestamp: datetime


class GoldenDataScenario(BaseModel):
    """Complete test scenario with metadata.

    ``kwargs`` holds whatever the collector used to build the request, so that
    the test can rebuild the very same request on replay.
    """

    description: str
    functionName: str
    kwargs: Dict[str, Any] = Field(default_factory=dict)
    recordings: List[HttpCall]
    createdAt: datetime
