"""Application configuration helpers."""

from __future__ import annotations

from .bronto import BRONTO_API_URL, BrontoConfig, default_resilience_config, get_bronto_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, InvalidEndpointError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "BRONTO_API_URL",
    "BrontoConfig",
    "ConfigurationError",
    "InvalidEndpointError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_resilience_config",
    "get_bronto_config",
    "optional_env_var",
    "require_env_vars",
]
