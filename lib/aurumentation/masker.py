"""Secret masking functionality for HTTP traffic.

This module implements secret masking for HTTP requests and responses
to ensure sensitive data is not stored in golden data files.
"""

import re
from typing import Any, Dict, List, Optional

import httpx

from .types import HttpCall

MASKED_PLACEHOLDER = "***MASKED***"


class SecretMasker:
    """Masks secrets in HTTP requests and responses.

    Handles:
    - Exact secret values anywhere in URL, headers and bodies
    - Query parameters and headers whose names look like secrets
      (``key``, ``signature``, ``Authorization``, ...)
    """

    DEFAULT_PATTERNS = [r"^key$", r"api[_-]?key", r"signature", r"token", r"auth", r"password", r"secret"]

    MASKED_PLACEHOLDER = MASKED_PLACEHOLDER

    def __init__(self, secrets: List[str], patterns: Optional[List[str]] = None):
        """Initialize the secret masker.

        Args:
            secrets: List of specific secret strings to mask
            patterns: List of regex patterns for secret keys. If None, uses DEFAULT_PATTERNS.
        """
        if patterns is None:
            patterns = self.DEFAULT_PATTERNS

        self.secrets = [v for v in secrets if v]
        self.patterns = [re.compile(p, re.IGNORECASE) for p in patterns]

    def maskText(self, text: str) -> str:
        """Replace all exact secret values in text with masked placeholder."""
        if not text:
            return text

        result = text
        for secret in self.secrets:
            result = result.replace(secret, self.MASKED_PLACEHOLDER)
        return result

    def maskDict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Mask values of secret-looking keys and exact secrets in other string values."""
        masked = {}
        for key, value in data.items():
            if self._isSecretKey(key):
                masked[key] = self.MASKED_PLACEHOLDER
            elif isinstance(value, str):
                masked[key] = self.maskText(value)
            else:
                masked[key] = value
        return masked

    def maskParams(self, params: List[List[str]]) -> List[List[str]]:
        """Mask query parameter pairs."""
        return [
            [name, self.MASKED_PLACEHOLDER if self._isSecretKey(name) else self.maskText(value)]
            for name, value in params
        ]

    def maskUrl(self, url: str) -> str:
        """Mask secret query parameters in URL, keeping parameter order."""
        parsed = httpx.URL(url)
        if not parsed.query:
            return self.maskText(url)
        params = self.maskParams([[name, value] for name, value in parsed.params.multi_items()])
        # Keep placeholder readable instead of percent-encoded
        query = "&".join(
            f"{name}={value}" if value == self.MASKED_PLACEHOLDER else str(httpx.QueryParams({name: value}))
            for name, value in params
        )
        return self.maskText(url.partition("?")[0]) + "?" + query

    def maskHttpCall(self, call: HttpCall) -> HttpCall:
        """Return copy of HTTP call with secrets masked in request and response."""
        request = call.request.model_copy(
            update={
                "url": self.maskUrl(call.request.url),
                "headers": self.maskDict(call.request.headers),
                "params": self.maskParams(call.request.params),
                "body": self.maskText(call.request.body) if call.request.body is not None else None,
            }
        )
        response = call.response.model_copy(
            update={
                "headers": self.maskDict(call.response.headers),
                "content": self.maskText(call.response.content),
            }
        )
        return call.model_copy(update={"request": request, "response": response})

    def _isSecretKey(self, key: str) -> bool:
        """Check if a key name indicates it contains a secret."""
        return any(pattern.search(key) for pattern in self.patterns)
