"""HTTP transport that executes one SOAP procedure per call."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from bronto.adapters.http_resilience import ResilientClient

from .envelope import build_envelope, parse_envelope
from .errors import SoapFault, TransportError, UnexpectedResponseError

if TYPE_CHECKING:
    from collections.abc import Callable

    from bronto.config.bronto import BrontoConfig
    from bronto.config.http_resilience import ResilienceConfig
    from bronto._types import Payload

log = getLogger(__name__)


class SoapTransport:
    """Low-level SOAP client for the Bronto API.

    ``call`` returns the decoded response body still wrapped in its
    ``<procedure>_response`` envelope key; unwrapping is the caller's job.
    """

    def __init__(
        self,
        *,
        config: BrontoConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def call(
        self,
        procedure: str,
        header: Payload | None,
        body: Payload | None,
    ) -> dict[str, object]:
        return asyncio.run(self._call_async(procedure, header, body))

    async def _call_async(
        self,
        procedure: str,
        header: Payload | None,
        body: Payload | None,
    ) -> dict[str, object]:
        base_url = self._resilience.base_url
        if base_url is None:
            raise TransportError("Missing Bronto base_url in resilience configuration")

        content = build_envelope(
            procedure,
            body,
            namespace=self._config.namespace,
            header=header,
        )
        log.debug("Calling %s (%d bytes)", procedure, len(content))

        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.post(
                    base_url,
                    content=content,
                    headers={"SOAPAction": '""'},
                )
            except httpx.HTTPError as exc:
                raise TransportError(f"{procedure} request failed: {exc}") from exc

        return self._decode(procedure, response)

    def _decode(self, procedure: str, response: httpx.Response) -> dict[str, object]:
        # faults arrive with status 500 and still carry a SOAP body
        if response.status_code >= 400 and response.status_code != 500:
            raise TransportError(
                f"{procedure} failed with HTTP {response.status_code}",
                code=response.status_code,
            )
        try:
            return parse_envelope(response.content)
        except SoapFault as exc:
            log.error(f"Bronto fault for {procedure} ({exc.code}): {exc}")
            raise
        except UnexpectedResponseError:
            if response.status_code == 500:
                raise TransportError(
                    f"{procedure} failed with HTTP 500", code=response.status_code
                ) from None
            raise
