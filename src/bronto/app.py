"""Application entry points used by the command line."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from bronto.client import get_default_client
from bronto.resources import Contact, Field, Filter, MailList

if TYPE_CHECKING:
    from bronto._types import MutablePayload
    from bronto.client import Client
    from bronto.resources import Resource

log = getLogger(__name__)

RESOURCE_TYPES: dict[str, type[Resource]] = {
    Contact.remote_collection(): Contact,
    Field.remote_collection(): Field,
    MailList.remote_collection(): MailList,
}


@dataclass(frozen=True, slots=True)
class DeleteOutcome:
    id: str
    deleted: bool
    errors: tuple[str, ...] = ()


def resource_type(collection: str) -> type[Resource]:
    try:
        return RESOURCE_TYPES[collection]
    except KeyError:
        raise ValueError(f"Unknown resource collection: {collection}") from None


def check_login(*, client: Client | None = None) -> str:
    """Log in with a fresh session and return its id."""

    active_client = client or get_default_client()
    header = active_client.header(refresh=True)
    log.info("Login succeeded")
    return header.session_id


def find_records(
    collection: str,
    *,
    page_number: int = 1,
    ids: list[str] | None = None,
    client: Client | None = None,
) -> list[MutablePayload]:
    cls = resource_type(collection)
    query = Filter()
    if ids:
        query.add_ids(*ids)
    found = cls.find(query, page_number, client=client)
    log.info("Found %d %s on page %d", len(found), collection, page_number)
    return [{"id": record.id, **record.to_hash()} for record in found]


def delete_records(
    collection: str,
    ids: list[str],
    *,
    client: Client | None = None,
) -> list[DeleteOutcome]:
    cls = resource_type(collection)
    records = [cls(id=record_id) for record_id in ids]
    cls.destroy_all(records, client=client)
    return [
        DeleteOutcome(
            id=record_id,
            deleted=record.id is None,
            errors=tuple(record.errors.messages),
        )
        for record_id, record in zip(ids, records, strict=True)
    ]
