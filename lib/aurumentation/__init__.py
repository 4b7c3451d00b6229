"""Golden Data Testing System.

This package provides infrastructure for recording and replaying HTTP traffic
for testing purposes. Recording and replay are plain httpx transports which
are handed to the client under test, working for blocking and async clients alike.
"""

from .masker import MASKED_PLACEHOLDER, SecretMasker
from .provider import GoldenDataProvider, findGoldenDataFiles, loadGoldenData, saveGoldenData
from .recorder import GoldenDataRecorder
from .transports import RecordingTransport, ReplayTransport
from .types import GoldenDataScenario, HttpCall, HttpRequest, HttpResponse

__all__ = [
    # Provider classes and functions
    "GoldenDataProvider",
    "findGoldenDataFiles",
    "loadGoldenData",
    "saveGoldenData",
    # Recorder and transports
    "GoldenDataRecorder",
    "RecordingTransport",
    "ReplayTransport",
    # Masking
    "SecretMasker",
    "MASKED_PLACEHOLDER",
    # Data models
    "GoldenDataScenario",
    "HttpCall",
    "HttpRequest",
    "HttpResponse",
]
