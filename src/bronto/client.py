"""Authenticated request dispatch against the Bronto API."""

from __future__ import annotations

from functools import lru_cache
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from bronto.adapters.soap.errors import (
    AuthenticationError,
    SessionExpiredError,
    SoapFault,
    UnexpectedResponseError,
)
from bronto.adapters.soap.transport import SoapTransport
from bronto.config.bronto import get_bronto_config
from bronto.naming import Operation, procedure_name
from bronto.session import SessionHeader, SessionManager

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from bronto._types import Payload
    from bronto.adapters.http_resilience import ResilientClient
    from bronto.config.bronto import BrontoConfig
    from bronto.config.http_resilience import ResilienceConfig

log = getLogger(__name__)

LOGIN_PROCEDURE = "login"


class Transport(Protocol):
    def call(
        self,
        procedure: str,
        header: Payload | None,
        body: Payload | None,
    ) -> Mapping[str, object]: ...


class Client:
    """One API connection: a transport, an API key and the session cached for it."""

    def __init__(self, *, api_key: str, transport: Transport) -> None:
        self.api_key = api_key
        self.transport = transport
        self.session = SessionManager(self._login)

    @classmethod
    def from_config(
        cls,
        config: BrontoConfig,
        *,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> Client:
        transport = SoapTransport(config=config, client_factory=client_factory)
        return cls(api_key=config.api_key, transport=transport)

    def header(self, refresh: bool = False) -> SessionHeader:
        return self.session.header(refresh)

    def request(
        self,
        operation: Operation | str,
        collection: str,
        body: Payload | None = None,
        *,
        refresh: bool = False,
    ) -> dict[str, object]:
        """Execute one procedure and return the content of its response envelope.

        No retry happens here; see ``call`` for the session-expiry retry.
        """

        header = self.session.header(refresh)
        return self._dispatch(procedure_name(operation, collection), header, body)

    def call(
        self,
        operation: Operation | str,
        collection: str,
        body: Payload | None = None,
    ) -> dict[str, object]:
        """Like ``request``, retrying once with a fresh session when it has expired."""

        procedure = procedure_name(operation, collection)
        header = self.session.header()
        try:
            return self._dispatch(procedure, header, body)
        except SessionExpiredError as exc:
            log.warning(f"Session expired during {procedure} ({exc.code}); logging in again")
            fresh = self.session.header(refresh=True, stale=header)
            return self._dispatch(procedure, fresh, body)

    def _dispatch(
        self,
        procedure: str,
        header: SessionHeader,
        body: Payload | None,
    ) -> dict[str, object]:
        response = self.transport.call(procedure, header.to_hash(), body)
        return _unwrap(procedure, response)

    def _login(self) -> str:
        log.info("Logging in to Bronto")
        try:
            response = self.transport.call(LOGIN_PROCEDURE, None, {"api_token": self.api_key})
        except AuthenticationError:
            raise
        except SoapFault as exc:
            raise AuthenticationError(str(exc), code=exc.code, fault_code=exc.fault_code) from exc

        session_id = _unwrap(LOGIN_PROCEDURE, response).get("return")
        if not isinstance(session_id, str) or not session_id:
            raise AuthenticationError("Login response did not contain a session id")
        return session_id


def _unwrap(procedure: str, response: Mapping[str, object]) -> dict[str, object]:
    key = f"{procedure}_response"
    if key not in response:
        raise UnexpectedResponseError(f"Response for {procedure} is missing {key!r}")
    content = response[key]
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise UnexpectedResponseError(f"Unexpected {key} payload: {content!r}")
    return content


@lru_cache(maxsize=1)
def get_default_client() -> Client:
    """Client built from ``BRONTO_API_KEY`` / ``BRONTO_API_URL``."""

    return Client.from_config(get_bronto_config())
