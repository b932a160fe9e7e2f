"""Mailing lists."""

from __future__ import annotations

from typing import ClassVar

from .base import Resource


class MailList(Resource):
    collection_name: ClassVar[str | None] = "lists"
    read_only: ClassVar[frozenset[str]] = frozenset({"active_count", "status"})

    name: str | None = None
    label: str | None = None
    visibility: str | None = None
    active_count: int | None = None
    status: str | None = None
