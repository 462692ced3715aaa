"""Configuration module for the findabuse DoH responder.

Loads and validates environment variables.
"""

import os
from dataclasses import dataclass

from src.models.reverse_zone import DEFAULT_REVERSE_ZONES, ReverseZoneTable


@dataclass
class Config:
    """Application configuration loaded from environment variables."""

    # Upstream Configuration
    upstream_host: str
    upstream_timeout: int

    # Listener Configuration
    listen_host: str
    listen_port: int

    # Operational Configuration
    verbose: bool

    # Reverse zones are fixed at startup, not environment-driven
    reverse_zones: ReverseZoneTable = DEFAULT_REVERSE_ZONES

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ValueError: If variables are invalid.

        Returns:
            Config: Validated configuration instance.
        """
        # Upstream Configuration
        upstream_host = os.getenv("UPSTREAM", "").strip() or "api.findabuse.email"
        if "/" in upstream_host or " " in upstream_host:
            raise ValueError("UPSTREAM must be a host name, not a URL")

        upstream_timeout = cls._get_int_env("UPSTREAM_TIMEOUT", "5")
        if not 1 <= upstream_timeout <= 60:
            raise ValueError("UPSTREAM_TIMEOUT must be between 1 and 60 seconds")

        # Listener Configuration
        listen_host = os.getenv("HOST", "0.0.0.0")
        listen_port = cls._get_int_env("PORT", "8080")
        if not 1 <= listen_port <= 65535:
            raise ValueError("PORT must be between 1 and 65535")

        # Operational Configuration
        verbose_str = os.getenv("VERBOSE", "false").lower()
        verbose = verbose_str in ("true", "1", "yes")

        return cls(
            upstream_host=upstream_host,
            upstream_timeout=upstream_timeout,
            listen_host=listen_host,
            listen_port=listen_port,
            verbose=verbose,
        )

    @staticmethod
    def _get_int_env(key: str, default: str) -> int:
        """Get integer environment variable or raise ValueError.

        Args:
            key: Environment variable name.
            default: Value used when the variable is unset or empty.

        Returns:
            int: Parsed value.

        Raises:
            ValueError: If the value is not an integer.
        """
        value = os.getenv(key) or default
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got {value!r}") from None
