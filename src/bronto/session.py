"""Session header acquisition and caching."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable

    from bronto._types import Payload

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionHeader:
    session_id: str

    def to_hash(self) -> Payload:
        return {"session_header": {"session_id": self.session_id}}


class SessionManager:
    """Caches one session header per client and refreshes it on demand.

    ``authenticate`` performs the login call and returns a session id; failures
    propagate to the caller unchanged.
    """

    def __init__(self, authenticate: Callable[[], str]) -> None:
        self._authenticate = authenticate
        self._header: SessionHeader | None = None
        self._lock = threading.Lock()
        self.login_count = 0

    @property
    def current(self) -> SessionHeader | None:
        return self._header

    def header(
        self,
        refresh: bool = False,
        *,
        stale: SessionHeader | None = None,
    ) -> SessionHeader:
        """Return the cached header, logging in when absent or when ``refresh`` is set.

        With ``stale`` given, a refresh only happens while the cached header is still
        ``stale``; a header already replaced by another caller is returned as is.
        """

        with self._lock:
            cached = self._header
            if cached is not None:
                if not refresh:
                    return cached
                if stale is not None and cached is not stale:
                    return cached

            if refresh:
                log.info("Refreshing Bronto session")
            session_id = self._authenticate()
            self.login_count += 1
            self._header = SessionHeader(session_id=session_id)
            log.debug("Obtained Bronto session (login #%d)", self.login_count)
            return self._header

    def invalidate(self) -> None:
        with self._lock:
            self._header = None
