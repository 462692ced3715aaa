"""Unit tests for configuration validation."""

import pytest

from src.config import Config
from src.models.reverse_zone import DEFAULT_REVERSE_ZONES


ENV_KEYS = ("UPSTREAM", "UPSTREAM_TIMEOUT", "HOST", "PORT", "VERBOSE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_config_defaults():
    """Test defaults when no environment variables are set."""
    config = Config.from_env()

    assert config.upstream_host == "api.findabuse.email"
    assert config.upstream_timeout == 5
    assert config.listen_host == "0.0.0.0"
    assert config.listen_port == 8080
    assert config.verbose is False
    assert config.reverse_zones is DEFAULT_REVERSE_ZONES


def test_config_from_env_valid(monkeypatch):
    """Test loading valid configuration from environment variables."""
    env_vars = {
        "UPSTREAM": "abuse.internal.example",
        "UPSTREAM_TIMEOUT": "10",
        "HOST": "127.0.0.1",
        "PORT": "9053",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)

    config = Config.from_env()

    assert config.upstream_host == "abuse.internal.example"
    assert config.upstream_timeout == 10
    assert config.listen_host == "127.0.0.1"
    assert config.listen_port == 9053


def test_config_empty_upstream_uses_default(monkeypatch):
    """Test an empty UPSTREAM falls back to the default host."""
    monkeypatch.setenv("UPSTREAM", "")
    assert Config.from_env().upstream_host == "api.findabuse.email"


def test_config_upstream_must_be_host(monkeypatch):
    """Test that a URL in UPSTREAM raises ValueError."""
    monkeypatch.setenv("UPSTREAM", "https://api.findabuse.email")

    with pytest.raises(ValueError, match="UPSTREAM must be a host name"):
        Config.from_env()


@pytest.mark.parametrize("value", ["0", "61"])
def test_config_timeout_range(monkeypatch, value):
    """Test that UPSTREAM_TIMEOUT outside 1..60 raises ValueError."""
    monkeypatch.setenv("UPSTREAM_TIMEOUT", value)

    with pytest.raises(ValueError, match="UPSTREAM_TIMEOUT must be between 1 and 60"):
        Config.from_env()


def test_config_port_not_integer(monkeypatch):
    """Test that a non-numeric PORT raises ValueError."""
    monkeypatch.setenv("PORT", "http")

    with pytest.raises(ValueError, match="PORT must be an integer"):
        Config.from_env()


def test_config_port_range(monkeypatch):
    """Test that PORT outside 1..65535 raises ValueError."""
    monkeypatch.setenv("PORT", "70000")

    with pytest.raises(ValueError, match="PORT must be between 1 and 65535"):
        Config.from_env()


def test_config_verbose_parsing(monkeypatch):
    """Test that VERBOSE boolean parsing works correctly."""
    for verbose_value in ["true", "True", "TRUE", "1", "yes"]:
        monkeypatch.setenv("VERBOSE", verbose_value)
        config = Config.from_env()
        assert config.verbose is True, f"Expected True for VERBOSE={verbose_value}"

    for verbose_value in ["false", "0", "no", ""]:
        monkeypatch.setenv("VERBOSE", verbose_value)
        config = Config.from_env()
        assert config.verbose is False, f"Expected False for VERBOSE={verbose_value}"
