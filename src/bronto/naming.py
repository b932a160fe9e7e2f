"""Remote collection and procedure names for resource types."""

from __future__ import annotations

import re
from enum import StrEnum
from functools import cache

_IRREGULAR_PLURALS = {
    "child": "children",
    "man": "men",
    "move": "moves",
    "person": "people",
    "sex": "sexes",
    "zombie": "zombies",
}
_UNCOUNTABLE = frozenset(
    {
        "equipment",
        "fish",
        "information",
        "jeans",
        "money",
        "police",
        "rice",
        "series",
        "sheep",
        "sms",
        "species",
    }
)

# First match wins; mirrors the common Rails inflector rules.
_PLURAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern), replacement)
    for pattern, replacement in (
        (r"(quiz)$", r"\1zes"),
        (r"^(ox)$", r"\1en"),
        (r"^(oxen)$", r"\1"),
        (r"([ml])ouse$", r"\1ice"),
        (r"([ml])ice$", r"\1ice"),
        (r"(matr|vert|ind)(?:ix|ex)$", r"\1ices"),
        (r"(x|ch|ss|sh)$", r"\1es"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"(hive)$", r"\1s"),
        (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
        (r"sis$", "ses"),
        (r"([ti])a$", r"\1a"),
        (r"([ti])um$", r"\1a"),
        (r"(buffal|tomat)o$", r"\1oes"),
        (r"(bu)s$", r"\1ses"),
        (r"(alias|status)$", r"\1es"),
        (r"(octop|vir)(?:us|i)$", r"\1i"),
        (r"(ax|test)is$", r"\1es"),
        (r"s$", "s"),
    )
)


class Operation(StrEnum):
    """Abstract CRUD verbs, valued as the remote procedure prefix."""

    CREATE = "add"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


@cache
def pluralize(word: str) -> str:
    """Apply English pluralization rules to a lowercase noun."""

    if not word or word in _UNCOUNTABLE:
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    for pattern, replacement in _PLURAL_RULES:
        if pattern.search(word):
            return pattern.sub(replacement, word, count=1)
    return word + "s"


def plural_name(type_name: str) -> str:
    """``Field`` -> ``fields``; namespace qualification is dropped."""

    simple = re.split(r"[.:]+", type_name)[-1]
    return pluralize(simple.lower())


def procedure_name(operation: Operation | str, collection: str) -> str:
    """Resolve an operation into a concrete procedure name.

    An ``Operation`` is combined with the collection name (``read`` + ``fields`` ->
    ``read_fields``); any other string is taken as a literal procedure name.
    """

    if isinstance(operation, Operation):
        return f"{operation.value}_{collection}"
    return operation
