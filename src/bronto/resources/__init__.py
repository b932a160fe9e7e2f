"""Remote resource types."""

from __future__ import annotations

from .base import Resource
from .contact import Contact, ContactField
from .errors import Errors
from .field import Field, FieldOption
from .filter import Criterion, Filter, FilterOperator
from .mail_list import MailList

__all__ = [
    "Contact",
    "ContactField",
    "Criterion",
    "Errors",
    "Field",
    "FieldOption",
    "Filter",
    "FilterOperator",
    "MailList",
    "Resource",
]
