"""Recording coordinator for golden data testing.

This module implements the recorder which owns a RecordingTransport,
masks secrets in captured traffic and turns it into a scenario.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from .masker import SecretMasker
from .transports import RecordingTransport
from .types import GoldenDataScenario, HttpCall

logger = logging.getLogger(__name__)


class GoldenDataRecorder:
    """Coordinates the recording of HTTP traffic for golden data testing.

    Pass ``recorder.transport`` to the client under test (both blocking and
    async clients accept it), run the calls, then build the scenario. Closing
    the client closes the wrapped real transports, the recordings stay.
    """

    def __init__(
        self,
        secrets: Optional[List[str]] = None,
        wrapped: Optional[httpx.BaseTransport] = None,
        asyncWrapped: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the recorder.

        Args:
            secrets: List of secrets to mask in recorded data
            wrapped: Real transport for blocking calls (default: httpx.HTTPTransport)
            asyncWrapped: Real transport for async calls (default: httpx.AsyncHTTPTransport)
        """
        self.secrets = secrets or []
        self.masker = SecretMasker(secrets=self.secrets)
        self.transport = RecordingTransport(wrapped=wrapped, asyncWrapped=asyncWrapped)

    def getRecordedRecordings(self) -> List[HttpCall]:
        """Get all recorded calls, with secrets masked."""
        return [self.masker.maskHttpCall(call) for call in self.transport.recordings]

    def clearRecordedCalls(self) -> None:
        """Clear the recording buffer."""
        self.transport.recordings.clear()

    def createScenario(
        self,
        *,
        description: str,
        functionName: str,
        kwargs: Dict[str, Any],
    ) -> GoldenDataScenario:
        """Create a complete scenario from recorded calls.

        Args:
            description: Description of the test scenario
            functionName: Name of the method being recorded
            kwargs: Arguments used to build the call, secrets are masked

        Returns:
            GoldenDataScenario with masked recordings
        """
        recordings = self.getRecordedRecordings()
        logger.debug(f"Creating scenario '{description}' with {len(recordings)} recordings")
        return GoldenDataScenario(
            description=description,
            functionName=functionName,
            kwargs=self.masker.maskDict(kwargs),
            recordings=recordings,
            createdAt=datetime.now(timezone.utc),
        )
