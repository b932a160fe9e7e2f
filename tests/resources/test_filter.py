from __future__ import annotations

import pytest

from bronto.resources import Filter, FilterOperator


def test_filter_groups_criteria_by_field() -> None:
    query = (
        Filter(type="OR")
        .add("email", FilterOperator.ENDS_WITH, "@example.com")
        .add("email", "StartsWith", "info")
        .add_ids("a", "b")
    )

    assert query.to_hash() == {
        "type": "OR",
        "id": ["a", "b"],
        "email": [
            {"operator": "EndsWith", "value": "@example.com"},
            {"operator": "StartsWith", "value": "info"},
        ],
    }


def test_empty_filter() -> None:
    assert Filter().to_hash() == {"type": "AND"}


def test_filter_rejects_unknown_operator() -> None:
    with pytest.raises(ValueError, match="Resembles"):
        Filter().add("email", "Resembles", "x")
