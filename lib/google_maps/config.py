"""
Configuration for Google Maps client.

Configuration is read from a TOML file section, ``${ENV_VAR}`` placeholders
are substituted with environment variables:

    [google-maps]
    api-key = "${GOOGLE_MAPS_API_KEY}"
    language = "en"
    region = "us"
    use-ssl = true
    request-timeout = 10
"""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomli

from .constants import DEFAULT_TIMEOUT
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_-]*)\}")


def replaceMatchToEnv(match: re.Match[str]) -> str:
    """Replace ``${VAR}`` placeholder with environment value, keep placeholder if unset"""
    key = match.group(1)
    return os.getenv(key, match.group(0))


def substituteEnvVars(value: Any) -> Any:
    """Recursively substitute ``${VAR}`` placeholders in strings, dicts and lists"""
    if isinstance(value, str):
        return ENV_PLACEHOLDER_RE.sub(replaceMatchToEnv, value)
    elif isinstance(value, dict):
        return {k: substituteEnvVars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [substituteEnvVars(item) for item in value]
    return value


@dataclass(frozen=True, slots=True)
class GoogleMapsConfig:
    """
    Client-wide defaults applied to requests which don't set them
    """

    apiKey: Optional[str] = None
    language: Optional[str] = None
    region: Optional[str] = None
    clientId: Optional[str] = None
    signingSecret: Optional[str] = field(default=None, repr=False)
    useSsl: bool = True
    """Default scheme for endpoints which allow plain http"""
    requestTimeout: float = DEFAULT_TIMEOUT
    """HTTP request timeout in seconds"""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GoogleMapsConfig":
        """Create config from TOML section (kebab-case keys).

        Raises:
            ConfigurationError: On unknown keys, wrong value types or unresolved placeholders
        """
        known = {
            "api-key": "apiKey",
            "language": "language",
            "region": "region",
            "client-id": "clientId",
            "signing-secret": "signingSecret",
            "use-ssl": "useSsl",
            "request-timeout": "requestTimeout",
        }
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")

        kwargs: Dict[str, Any] = {}
        for key, attrName in known.items():
            if key not in data:
                continue
            value = data[key]
            if isinstance(value, str) and ENV_PLACEHOLDER_RE.search(value):
                raise ConfigurationError(f"Environment variable for '{key}' is not set: {value}")
            kwargs[attrName] = value

        if "useSsl" in kwargs and not isinstance(kwargs["useSsl"], bool):
            raise ConfigurationError("'use-ssl' must be a boolean")
        if "requestTimeout" in kwargs:
            timeout = kwargs["requestTimeout"]
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
                raise ConfigurationError("'request-timeout' must be a positive number")
            kwargs["requestTimeout"] = float(timeout)
        for attrName in ("apiKey", "language", "region", "clientId", "signingSecret"):
            if attrName in kwargs and not isinstance(kwargs[attrName], str):
                raise ConfigurationError(f"'{attrName}' must be a string")

        return cls(**kwargs)


def loadConfig(path: Union[str, Path], section: str = "google-maps") -> GoogleMapsConfig:
    """Load client configuration from TOML file section, dood!

    Args:
        path: Path to TOML file
        section: Table name holding client settings

    Raises:
        ConfigurationError: If file is missing, isn't valid TOML or section is invalid
    """
    configPath = Path(path)
    try:
        with open(configPath, "rb") as f:
            rawConfig = tomli.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file {configPath} not found") from e
    except tomli.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {configPath}: {e}") from e

    sectionData = rawConfig.get(section)
    if sectionData is None:
        raise ConfigurationError(f"Section [{section}] not found in {configPath}")
    if not isinstance(sectionData, dict):
        raise ConfigurationError(f"[{section}] in {configPath} must be a table")

    logger.debug(f"Loaded [{section}] from {configPath}")
    return GoogleMapsConfig.from_dict(substituteEnvVars(sectionData))
