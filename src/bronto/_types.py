"""Shared type aliases."""

from __future__ import annotations

from collections.abc import Mapping

Payload = Mapping[str, object]
"""Wire-shape mapping handed to, or returned by, the transport."""

MutablePayload = dict[str, object]
