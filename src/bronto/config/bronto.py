"""Bronto API configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlparse

from .env import optional_env_var, require_env_vars
from .errors import InvalidEndpointError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

BRONTO_API_URL = "https://api.bronto.com/v4"
BRONTO_NAMESPACE = "http://api.bronto.com/v4"
BRONTO_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True)
class BrontoConfig:
    """Holds Bronto API configuration values."""

    api_key: str
    resilience: ResilienceConfig
    namespace: str = BRONTO_NAMESPACE


def default_resilience_config(base_url: str = BRONTO_API_URL) -> ResilienceConfig:
    return ResilienceConfig(
        name="bronto",
        base_url=base_url,
        timeout_seconds=BRONTO_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=3),
        ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
        default_headers={"Content-Type": "text/xml; charset=utf-8"},
    )


def get_bronto_config(*, resilience: ResilienceConfig | None = None) -> BrontoConfig:
    values = require_env_vars(("BRONTO_API_KEY",))
    base_url = optional_env_var("BRONTO_API_URL", BRONTO_API_URL)
    parsed = urlparse(base_url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise InvalidEndpointError(base_url)
    return BrontoConfig(
        api_key=values["BRONTO_API_KEY"],
        resilience=resilience or default_resilience_config(base_url),
    )
