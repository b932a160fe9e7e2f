from __future__ import annotations

from bronto.resources import Errors


def test_errors_keep_insertion_order_per_code() -> None:
    errors = Errors()
    errors.add(303, "first")
    errors.add(101, "other")
    errors.add(303, "second")

    assert len(errors) == 3
    assert errors[303] == ["first", "second"]
    assert errors.codes == [303, 101]
    assert list(errors) == [(303, "first"), (101, "other"), (303, "second")]
    assert 101 in errors
    assert 999 not in errors


def test_errors_clear() -> None:
    errors = Errors()
    errors.add(None, "no code")

    errors.clear()

    assert len(errors) == 0
    assert not errors
    assert errors.messages == []
