"""Custom contact fields."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

from .base import Resource

# Types the service documents; records read back may carry others and keep them as is.
FieldType = Literal[
    "text",
    "textarea",
    "password",
    "checkbox",
    "radio",
    "select",
    "integer",
    "currency",
    "float",
    "date",
]


class FieldOption(BaseModel):
    model_config = ConfigDict(extra="ignore")

    value: str | None = None
    label: str | None = None
    is_default: bool = False


class Field(Resource):
    name: str | None = None
    label: str | None = None
    type: FieldType | str | None = None
    visibility: str | None = None
    options: list[FieldOption] = []

    @field_validator("options", mode="before")
    @classmethod
    def _wrap_single_option(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, dict):
            return [value]
        return value
