from __future__ import annotations

import pytest

from bronto.adapters.soap.errors import (
    AuthenticationError,
    SessionExpiredError,
    SoapFault,
    TransportError,
    UnexpectedResponseError,
)
from bronto.client import Client, get_default_client
from bronto.config import MissingConfigurationError
from bronto.naming import Operation
from tests.helpers.fake_transport import FakeTransport


def test_request_resolves_procedure_and_attaches_header(
    client: Client, transport: FakeTransport
) -> None:
    transport.queue("read_fields", {"return": {"id": "f1"}})

    content = client.request(Operation.READ, "fields", {"page_number": 1})

    assert content == {"return": {"id": "f1"}}
    login, read = transport.calls
    assert login.procedure == "login"
    assert login.header is None
    assert login.body == {"api_token": "test-key"}
    assert read.procedure == "read_fields"
    assert read.header == {"session_header": {"session_id": "session-1"}}
    assert read.body == {"page_number": 1}


def test_request_with_literal_procedure_name(client: Client, transport: FakeTransport) -> None:
    transport.queue("add_to_list", {"return": None})

    client.request("add_to_list", "contacts", {})

    assert transport.rpc_calls[0].procedure == "add_to_list"


def test_request_reuses_session(client: Client, transport: FakeTransport) -> None:
    transport.queue("read_lists", None).queue("read_lists", None)

    client.request(Operation.READ, "lists")
    client.request(Operation.READ, "lists")

    assert transport.logins == 1


def test_request_with_refresh_logs_in_again(client: Client, transport: FakeTransport) -> None:
    transport.queue("read_lists", None).queue("read_lists", None)

    client.request(Operation.READ, "lists")
    client.request(Operation.READ, "lists", refresh=True)

    assert transport.logins == 2
    assert transport.rpc_calls[1].header == {"session_header": {"session_id": "session-2"}}


def test_request_does_not_retry(client: Client, transport: FakeTransport) -> None:
    transport.queue_error("read_lists", SessionExpiredError("(116): session expired", code=116))

    with pytest.raises(SessionExpiredError):
        client.request(Operation.READ, "lists")

    assert len(transport.rpc_calls) == 1


def test_empty_response_content_becomes_empty_dict(
    client: Client, transport: FakeTransport
) -> None:
    transport.queue("read_lists", None)

    assert client.request(Operation.READ, "lists") == {}


def test_missing_response_envelope_is_rejected() -> None:
    class WrongEnvelope(FakeTransport):
        def call(self, procedure, header, body):  # type: ignore[override]
            if procedure == "login":
                return super().call(procedure, header, body)
            return {"something_else": {}}

    wrong = Client(api_key="k", transport=WrongEnvelope())

    with pytest.raises(UnexpectedResponseError, match="read_lists_response"):
        wrong.request(Operation.READ, "lists")


def test_call_retries_once_with_fresh_session(client: Client, transport: FakeTransport) -> None:
    transport.queue_error("read_lists", SessionExpiredError("(116): session expired", code=116))
    transport.queue("read_lists", {"return": None})

    content = client.call(Operation.READ, "lists")

    assert content == {"return": None}
    assert transport.logins == 2
    first, second = transport.rpc_calls
    assert first.header == {"session_header": {"session_id": "session-1"}}
    assert second.header == {"session_header": {"session_id": "session-2"}}


def test_call_propagates_second_session_failure(client: Client, transport: FakeTransport) -> None:
    expired = SessionExpiredError("(116): session expired", code=116)
    transport.queue_error("read_lists", expired).queue_error("read_lists", expired)

    with pytest.raises(SessionExpiredError):
        client.call(Operation.READ, "lists")

    assert len(transport.rpc_calls) == 2
    assert transport.logins == 2


def test_call_does_not_retry_other_failures(client: Client, transport: FakeTransport) -> None:
    transport.queue_error("read_lists", TransportError("connection reset"))

    with pytest.raises(TransportError):
        client.call(Operation.READ, "lists")

    assert transport.logins == 1
    assert len(transport.rpc_calls) == 1


def test_call_does_not_retry_authentication_faults_other_than_expiry(
    client: Client, transport: FakeTransport
) -> None:
    transport.queue_error("read_lists", AuthenticationError("(102): invalid token", code=102))

    with pytest.raises(AuthenticationError) as exc:
        client.call(Operation.READ, "lists")

    assert not isinstance(exc.value, SessionExpiredError)
    assert exc.value.code == 102
    assert transport.logins == 1
    assert len(transport.rpc_calls) == 1


def test_login_fault_becomes_authentication_error(transport: FakeTransport) -> None:
    transport.queue_error("login", SoapFault("(999): something odd", code=999))
    client = Client(api_key="bad", transport=transport)

    with pytest.raises(AuthenticationError) as exc:
        client.header()

    assert exc.value.code == 999


def test_login_without_session_id_is_rejected(transport: FakeTransport) -> None:
    transport.queue("login", {"return": None})
    client = Client(api_key="k", transport=transport)

    with pytest.raises(AuthenticationError, match="session id"):
        client.header()


def test_default_client_requires_api_key() -> None:
    with pytest.raises(MissingConfigurationError, match="BRONTO_API_KEY"):
        get_default_client()


def test_default_client_is_built_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BRONTO_API_KEY", "env-key")

    client = get_default_client()

    assert client.api_key == "env-key"
    assert get_default_client() is client
