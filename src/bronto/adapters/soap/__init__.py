"""SOAP transport for the Bronto API."""

from __future__ import annotations

from .envelope import build_envelope, camelize, parse_envelope, snakify
from .errors import (
    AuthenticationError,
    BrontoError,
    SessionExpiredError,
    SoapFault,
    TransportError,
    UnexpectedResponseError,
)
from .transport import SoapTransport

__all__ = [
    "AuthenticationError",
    "BrontoError",
    "SessionExpiredError",
    "SoapFault",
    "SoapTransport",
    "TransportError",
    "UnexpectedResponseError",
    "build_envelope",
    "camelize",
    "parse_envelope",
    "snakify",
]
