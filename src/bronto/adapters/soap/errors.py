"""Exception taxonomy for the SOAP transport.

Whole-call failures are raised; per-item failures inside a batch response are data
and end up on the resource's ``errors`` container instead.
"""

from __future__ import annotations

import re

# Fault codes the service uses for rejected credentials and dead sessions.
AUTHENTICATION_FAULT_CODES = frozenset({101, 102, 103, 104, 105, 106, 107, 108, 116})
SESSION_EXPIRED_FAULT_CODES = frozenset({106, 116})

_FAULT_CODE_PATTERN = re.compile(r"^\s*\(?(\d+)\)?\s*:")
_SESSION_PATTERN = re.compile(r"(invalid|expired)\s+session|session\s+(has\s+)?expired", re.I)


class BrontoError(RuntimeError):
    """Base class for every error raised by the client."""


class TransportError(BrontoError):
    """Raised when a remote call cannot be serviced."""

    def __init__(self, message: str, *, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class UnexpectedResponseError(TransportError):
    """Raised when a response does not have the expected shape."""


class SoapFault(TransportError):
    """Raised when the service answers with a SOAP fault."""

    def __init__(
        self,
        message: str,
        *,
        code: int | None = None,
        fault_code: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.fault_code = fault_code


class AuthenticationError(SoapFault):
    """Raised when the service rejects the API key or the session header."""


class SessionExpiredError(AuthenticationError):
    """Raised when the cached session header is no longer accepted."""


def parse_fault_code(fault_string: str) -> int | None:
    match = _FAULT_CODE_PATTERN.match(fault_string)
    if match is None:
        return None
    return int(match.group(1))


def fault_from_response(fault_string: str, fault_code: str | None = None) -> SoapFault:
    """Map a SOAP fault onto the most specific exception type."""

    code = parse_fault_code(fault_string)
    if code in SESSION_EXPIRED_FAULT_CODES or _SESSION_PATTERN.search(fault_string):
        return SessionExpiredError(fault_string, code=code, fault_code=fault_code)
    if code in AUTHENTICATION_FAULT_CODES:
        return AuthenticationError(fault_string, code=code, fault_code=fault_code)
    return SoapFault(fault_string, code=code, fault_code=fault_code)
