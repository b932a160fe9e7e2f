"""Batch create/update/delete with per-item result reconciliation.

The n-th result entry of a batch response belongs to the n-th submitted
instance. Failures of single items are recorded on the instance's ``errors``
and never raised; only a call that cannot be serviced at all raises.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Protocol

from pydantic import BaseModel, ConfigDict, field_validator

from bronto.adapters.soap.errors import UnexpectedResponseError
from bronto.naming import Operation

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from bronto._types import Payload
    from bronto.client import Client
    from bronto.resources.errors import Errors

log = getLogger(__name__)


class BatchItem(Protocol):
    id: str | None

    @property
    def errors(self) -> Errors: ...

    def to_hash(self) -> Payload: ...


class BatchResultEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    is_new: bool = False
    is_error: bool = False
    error_code: int | None = None
    error_string: str | None = None

    @field_validator("is_new", "is_error", mode="before")
    @classmethod
    def _none_is_false(cls, value: object) -> object:
        return False if value is None else value


def normalize_results(value: object) -> list[BatchResultEntry]:
    """Return result entries as a list; a lone entry becomes a one-element list."""

    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    return [BatchResultEntry.model_validate(item) for item in items]


def _submit[T: BatchItem](
    client: Client,
    operation: Operation,
    collection: str,
    objs: Sequence[T],
    items: list[Payload],
) -> list[BatchResultEntry]:
    response = client.call(operation, collection, {collection: items})
    returned = response.get("return")
    results = normalize_results(returned.get("results") if isinstance(returned, dict) else None)
    if len(results) != len(objs):
        msg = (
            f"{operation.value}_{collection} returned {len(results)} results "
            f"for {len(objs)} submitted items"
        )
        raise UnexpectedResponseError(msg)
    return results


def _record_error(obj: BatchItem, result: BatchResultEntry, action: str) -> None:
    log.warning(
        "Failed to %s %s: (%s) %s",
        action,
        obj.id or "new item",
        result.error_code,
        result.error_string,
    )
    obj.errors.add(result.error_code, result.error_string)


def create[T: BatchItem](client: Client, collection: str, objs: Sequence[T]) -> Sequence[T]:
    """Add ``objs`` remotely, assigning server ids to the ones that were created."""

    results = _submit(client, Operation.CREATE, collection, objs, [o.to_hash() for o in objs])

    created = 0
    for obj, result in zip(objs, results, strict=True):
        if result.is_new and not result.is_error:
            obj.id = result.id
            created += 1
        elif result.is_error:
            _record_error(obj, result, "create")

    log.debug("Created %d of %d %s", created, len(objs), collection)
    return objs


def update[T: BatchItem](client: Client, collection: str, objs: Sequence[T]) -> Sequence[T]:
    """Update existing ``objs`` remotely; failed items get an entry in ``errors``."""

    results = _submit(client, Operation.UPDATE, collection, objs, [o.to_hash() for o in objs])

    for obj, result in zip(objs, results, strict=True):
        if result.is_error:
            _record_error(obj, result, "update")

    log.debug("Updated %d %s", len(objs), collection)
    return objs


def destroy[T: BatchItem](client: Client, collection: str, objs: Sequence[T]) -> Sequence[T]:
    """Delete ``objs`` remotely; deleted items lose their id.

    Items without an id are left out of the request and are not touched.
    """

    targets = [o for o in objs if o.id]
    if len(targets) != len(objs):
        log.debug("Skipping %d %s without id", len(objs) - len(targets), collection)
    if not targets:
        return objs

    items: list[Payload] = [{"id": o.id} for o in targets]
    results = _submit(client, Operation.DELETE, collection, targets, items)

    for obj, result in zip(targets, results, strict=True):
        if result.is_error:
            _record_error(obj, result, "delete")
        else:
            obj.id = None

    log.debug("Deleted %d %s", len(targets), collection)
    return objs


def read(
    client: Client,
    collection: str,
    filter_hash: Payload,
    page_number: int = 1,
) -> list[Mapping[str, object]]:
    """Read one page of raw hashes matching ``filter_hash``."""

    response = client.call(
        Operation.READ,
        collection,
        {"filter": filter_hash, "page_number": page_number},
    )
    returned = response.get("return")
    if returned is None:
        return []
    hashes = returned if isinstance(returned, list) else [returned]
    return [item for item in hashes if isinstance(item, dict)]
