"""Client library for the Bronto SOAP API."""

from __future__ import annotations

from importlib import metadata

from .client import Client, get_default_client
from .resources import Contact, Errors, Field, Filter, MailList, Resource

try:
    __version__ = metadata.version("bronto")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "Client",
    "Contact",
    "Errors",
    "Field",
    "Filter",
    "MailList",
    "Resource",
    "get_default_client",
]
