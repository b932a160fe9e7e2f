from __future__ import annotations

from collections.abc import Callable
from xml.etree import ElementTree as ET

import httpx
import pytest

from bronto.adapters.http_resilience import ResilientClient
from bronto.adapters.soap import SoapTransport
from bronto.adapters.soap.envelope import SOAP_ENV_NS
from bronto.adapters.soap.errors import SessionExpiredError, TransportError
from bronto.client import Client
from bronto.config import BrontoConfig, ResilienceConfig, RetryPolicy
from bronto.naming import Operation

NS = "http://api.bronto.com/v4"
API_URL = "https://api.example.test/v4"


def _envelope(body: str) -> str:
    return (
        f'<soap:Envelope xmlns:soap="{SOAP_ENV_NS}" xmlns:ns2="{NS}">'
        f"<soap:Body>{body}</soap:Body></soap:Envelope>"
    )


def _operation(request: httpx.Request) -> str:
    root = ET.fromstring(request.content)
    body = root.find(f"{{{SOAP_ENV_NS}}}Body")
    assert body is not None
    return list(body)[0].tag.rsplit("}", 1)[-1]


def _make_transport(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    retry: RetryPolicy | None = None,
) -> SoapTransport:
    resilience = ResilienceConfig(
        name="bronto-test",
        base_url=API_URL,
        retry=retry or RetryPolicy(total=0),
    )
    config = BrontoConfig(api_key="key", resilience=resilience)

    def factory(config: ResilienceConfig) -> ResilientClient:
        return ResilientClient(config, transport=httpx.MockTransport(handler))

    return SoapTransport(config=config, client_factory=factory)


def test_call_posts_envelope_and_decodes_response() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            text=_envelope(
                "<ns2:readListsResponse><return><id>1</id></return></ns2:readListsResponse>"
            ),
        )

    transport = _make_transport(handler)

    response = transport.call(
        "read_lists",
        {"session_header": {"session_id": "abc"}},
        {"filter": {"type": "AND"}, "page_number": 1},
    )

    assert response == {"read_lists_response": {"return": {"id": "1"}}}
    (request,) = requests
    assert request.method == "POST"
    assert str(request.url) == API_URL
    assert _operation(request) == "readLists"


def test_fault_with_status_500_is_raised_as_fault() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        fault = (
            "<soap:Fault><faultcode>soap:Server</faultcode>"
            "<faultstring>116: Session has expired.</faultstring></soap:Fault>"
        )
        return httpx.Response(500, text=_envelope(fault))

    transport = _make_transport(handler)

    with pytest.raises(SessionExpiredError):
        transport.call("read_lists", None, {})


def test_http_error_without_envelope_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        del request
        return httpx.Response(404, text="not found")

    transport = _make_transport(handler)

    with pytest.raises(TransportError) as exc:
        transport.call("read_lists", None, {})

    assert exc.value.code == 404


def test_network_failure_is_transport_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport = _make_transport(handler)

    with pytest.raises(TransportError, match="connection refused"):
        transport.call("read_lists", None, {})


def test_unavailable_service_is_retried() -> None:
    attempts: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        del request
        attempts.append(1)
        if len(attempts) == 1:
            return httpx.Response(503)
        return httpx.Response(200, text=_envelope("<ns2:deleteListsResponse/>"))

    transport = _make_transport(handler, retry=RetryPolicy(total=2, backoff_factor=0.0))

    assert transport.call("delete_lists", None, {}) == {"delete_lists_response": None}
    assert len(attempts) == 2


def test_client_logs_in_and_refreshes_expired_session() -> None:
    sessions = iter(["first", "second"])
    seen_sessions: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        operation = _operation(request)
        if operation == "login":
            session_id = next(sessions)
            return httpx.Response(
                200,
                text=_envelope(
                    f"<ns2:loginResponse><return>{session_id}</return></ns2:loginResponse>"
                ),
            )
        root = ET.fromstring(request.content)
        seen_sessions.append(
            root.findtext(f"{{{SOAP_ENV_NS}}}Header/{{{NS}}}sessionHeader/sessionId")
        )
        if len(seen_sessions) == 1:
            fault = (
                "<soap:Fault><faultcode>soap:Server</faultcode>"
                "<faultstring>116: Session has expired.</faultstring></soap:Fault>"
            )
            return httpx.Response(500, text=_envelope(fault))
        return httpx.Response(
            200,
            text=_envelope(
                "<ns2:readFieldsResponse><return><id>f1</id></return></ns2:readFieldsResponse>"
            ),
        )

    client = Client(api_key="key", transport=_make_transport(handler))

    content = client.call(Operation.READ, "fields", {"page_number": 1})

    assert content == {"return": {"id": "f1"}}
    assert seen_sessions == ["first", "second"]
