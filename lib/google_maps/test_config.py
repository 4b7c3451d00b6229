"""
Unit tests for client configuration loading
"""

import pytest

from lib.google_maps.config import GoogleMapsConfig, loadConfig, substituteEnvVars
from lib.google_maps.exceptions import ConfigurationError


def writeConfig(tmp_path, content: str):
    path = tmp_path / "config.toml"
    path.write_text(content, encoding="utf-8")
    return path


def test_load_config_with_env(tmp_path, monkeypatch):
    """Placeholders are replaced from environment, dood!"""
    monkeypatch.setenv("TEST_GOOGLE_MAPS_KEY", "AIzaFromEnv")
    path = writeConfig(
        tmp_path,
        """
[google-maps]
api-key = "${TEST_GOOGLE_MAPS_KEY}"
language = "en"
region = "gb"
use-ssl = false
request-timeout = 5
""",
    )

    config = loadConfig(path)

    assert config == GoogleMapsConfig(apiKey="AIzaFromEnv", language="en", region="gb", useSsl=False, requestTimeout=5.0)


def test_load_config_custom_section(tmp_path):
    path = writeConfig(tmp_path, '[maps]\nclient-id = "gme-client"\nsigning-secret = "c2VjcmV0"\n')

    config = loadConfig(path, section="maps")

    assert config.clientId == "gme-client"
    assert config.signingSecret == "c2VjcmV0"
    assert "c2VjcmV0" not in repr(config)
    assert config.useSsl is True


def test_unset_env_variable(tmp_path, monkeypatch):
    monkeypatch.delenv("TEST_GOOGLE_MAPS_MISSING", raising=False)
    path = writeConfig(tmp_path, '[google-maps]\napi-key = "${TEST_GOOGLE_MAPS_MISSING}"\n')

    with pytest.raises(ConfigurationError, match="api-key"):
        loadConfig(path)


@pytest.mark.parametrize(
    "content",
    [
        "[other]\nx = 1\n",
        "google-maps = 1\n",
        "[google-maps]\nunknown = 1\n",
        "[google-maps]\nuse-ssl = \"yes\"\n",
        "[google-maps]\nrequest-timeout = 0\n",
        "[google-maps]\nrequest-timeout = true\n",
        "[google-maps]\napi-key = 42\n",
        "[google-maps\n",
    ],
)
def test_invalid_config(tmp_path, content):
    with pytest.raises(ConfigurationError):
        loadConfig(writeConfig(tmp_path, content))


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        loadConfig(tmp_path / "missing.toml")


def test_substitute_env_vars_nested(monkeypatch):
    monkeypatch.setenv("TEST_GOOGLE_MAPS_REGION", "au")
    assert substituteEnvVars({"a": ["${TEST_GOOGLE_MAPS_REGION}", 1], "b": "x-${TEST_GOOGLE_MAPS_REGION}"}) == {
        "a": ["au", 1],
        "b": "x-au",
    }
