from __future__ import annotations

import pytest

from bronto.naming import Operation, plural_name, pluralize, procedure_name


@pytest.mark.parametrize(
    ("type_name", "expected"),
    [
        ("Field", "fields"),
        ("Contact", "contacts"),
        ("List", "lists"),
        ("Bronto::Message", "messages"),
        ("bronto.resources.Delivery", "deliveries"),
        ("Address", "addresses"),
        ("Day", "days"),
        ("Person", "people"),
    ],
)
def test_plural_name(type_name: str, expected: str) -> None:
    assert plural_name(type_name) == expected


def test_plural_name_is_stable_and_lowercase() -> None:
    assert plural_name("MessageRule") == plural_name("MessageRule") == "messagerules"


def test_pluralize_keeps_uncountable_words() -> None:
    assert pluralize("sms") == "sms"
    assert pluralize("information") == "information"


@pytest.mark.parametrize(
    ("word", "expected"),
    [
        ("quiz", "quizzes"),
        ("shelf", "shelves"),
        ("wife", "wives"),
        ("index", "indices"),
        ("matrix", "matrices"),
        ("mouse", "mice"),
        ("ox", "oxen"),
        ("bus", "buses"),
        ("status", "statuses"),
        ("analysis", "analyses"),
        ("medium", "media"),
        ("tomato", "tomatoes"),
        ("hero", "heros"),
        ("query", "queries"),
        ("box", "boxes"),
        ("news", "news"),
        ("man", "men"),
    ],
)
def test_pluralize_follows_inflector_rules(word: str, expected: str) -> None:
    assert pluralize(word) == expected


def test_procedure_name_combines_operation_and_collection() -> None:
    assert procedure_name(Operation.READ, "fields") == "read_fields"
    assert procedure_name(Operation.CREATE, "contacts") == "add_contacts"
    assert procedure_name(Operation.DELETE, "lists") == "delete_lists"


def test_procedure_name_uses_literal_names_unchanged() -> None:
    assert procedure_name("add_to_list", "contacts") == "add_to_list"
