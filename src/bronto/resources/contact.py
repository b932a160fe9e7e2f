"""Contacts."""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, field_validator

from .base import Resource


def _as_list(value: object) -> object:
    # a single repeated element decodes to a scalar
    if value is None:
        return []
    if isinstance(value, str | dict):
        return [value]
    return value


class ContactField(BaseModel):
    model_config = ConfigDict(extra="ignore")

    field_id: str
    content: str | None = None


class Contact(Resource):
    read_only: ClassVar[frozenset[str]] = frozenset({"created", "modified"})

    email: str | None = None
    mobile_number: str | None = None
    status: str | None = None
    msg_pref: str | None = None
    source: str | None = None
    custom_source: str | None = None
    list_ids: list[str] = []
    fields: list[ContactField] = []
    created: str | None = None
    modified: str | None = None

    _normalize_list_ids = field_validator("list_ids", mode="before")(_as_list)
    _normalize_fields = field_validator("fields", mode="before")(_as_list)

    def set_field(self, field_id: str, content: str | None) -> None:
        """Set a custom field value, replacing any previous value for the field."""

        values = [value for value in self.fields if value.field_id != field_id]
        values.append(ContactField(field_id=field_id, content=content))
        self.fields = values

    def field_value(self, field_id: str) -> str | None:
        for value in self.fields:
            if value.field_id == field_id:
                return value.content
        return None
