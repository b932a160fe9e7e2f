"""Configuration error definitions."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when configuration values are invalid."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration values are absent or blank."""


class InvalidEndpointError(ConfigurationError):
    """Raised when the configured API URL is not an absolute http(s) URL."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid Bronto API URL: {url!r}")
        self.url = url
