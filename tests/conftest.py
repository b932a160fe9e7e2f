from __future__ import annotations

import pytest

from bronto.client import Client, get_default_client
from tests.helpers.fake_transport import FakeTransport


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("BRONTO_API_KEY", raising=False)
    monkeypatch.delenv("BRONTO_API_URL", raising=False)
    get_default_client.cache_clear()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport: FakeTransport) -> Client:
    return Client(api_key="test-key", transport=transport)
