"""Base class for remote resource types and their save/find lifecycle."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Self

from pydantic import BaseModel, ConfigDict, PrivateAttr

from bronto import batch
from bronto.client import get_default_client
from bronto.naming import plural_name

from .errors import Errors

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from bronto._types import MutablePayload
    from bronto.client import Client

    from .filter import Filter

log = getLogger(__name__)


class Resource(BaseModel):
    """A remote entity; ``id`` is set exactly when it is believed to exist remotely.

    Subclasses declare their attributes as pydantic fields. Keys of a hash that do
    not name a field are ignored on construction. ``collection_name`` overrides the
    name derived from the class name (``Field`` -> ``fields``).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, validate_assignment=True)

    collection_name: ClassVar[str | None] = None
    read_only: ClassVar[frozenset[str]] = frozenset()

    id: str | None = None

    _errors: Errors = PrivateAttr(default_factory=Errors)

    @property
    def errors(self) -> Errors:
        return self._errors

    @classmethod
    def remote_collection(cls) -> str:
        return cls.collection_name or plural_name(cls.__name__)

    @classmethod
    def from_hash(cls, data: Mapping[str, object]) -> Self:
        return cls.model_validate(dict(data))

    def to_hash(self) -> MutablePayload:
        """Wire-shape payload for add/update requests."""

        return self.model_dump(exclude_none=True, exclude=set(self.read_only))

    @classmethod
    def save_all(cls, objs: Sequence[Self], *, client: Client | None = None) -> Sequence[Self]:
        """Update the objects that have an id and create the ones that don't."""

        existing = [obj for obj in objs if obj.id]
        new = [obj for obj in objs if not obj.id]
        for obj in objs:
            obj.errors.clear()

        cls.update_all(existing, client=client)
        cls.create_all(new, client=client)
        return objs

    @classmethod
    def create_all(cls, objs: Sequence[Self], *, client: Client | None = None) -> Sequence[Self]:
        return batch.create(client or get_default_client(), cls.remote_collection(), objs)

    @classmethod
    def update_all(cls, objs: Sequence[Self], *, client: Client | None = None) -> Sequence[Self]:
        return batch.update(client or get_default_client(), cls.remote_collection(), objs)

    @classmethod
    def destroy_all(cls, objs: Sequence[Self], *, client: Client | None = None) -> Sequence[Self]:
        return batch.destroy(client or get_default_client(), cls.remote_collection(), objs)

    @classmethod
    def find(
        cls,
        filter: Filter,  # noqa: A002
        page_number: int = 1,
        *,
        client: Client | None = None,
    ) -> list[Self]:
        hashes = batch.read(
            client or get_default_client(),
            cls.remote_collection(),
            filter.to_hash(),
            page_number,
        )
        log.debug("Found %d %s on page %d", len(hashes), cls.remote_collection(), page_number)
        return [cls.from_hash(item) for item in hashes]

    def save(self, *, client: Client | None = None) -> Self:
        self.errors.clear()
        return self.update(client=client) if self.id else self.create(client=client)

    def create(self, *, client: Client | None = None) -> Self:
        return type(self).create_all([self], client=client)[0]

    def update(self, *, client: Client | None = None) -> Self:
        return type(self).update_all([self], client=client)[0]

    def destroy(self, *, client: Client | None = None) -> Self:
        return type(self).destroy_all([self], client=client)[0]
