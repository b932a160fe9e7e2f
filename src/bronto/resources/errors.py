"""Per-instance error container."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

ErrorEntry = tuple[int | None, str | None]


class Errors:
    """Ordered multimap from an error code to the messages recorded for it."""

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[ErrorEntry] = []

    def add(self, code: int | None, message: str | None) -> None:
        self._entries.append((code, message))

    def clear(self) -> None:
        self._entries.clear()

    def __getitem__(self, code: int | None) -> list[str | None]:
        return [message for entry_code, message in self._entries if entry_code == code]

    def __contains__(self, code: object) -> bool:
        return any(entry_code == code for entry_code, _ in self._entries)

    def __iter__(self) -> Iterator[ErrorEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def codes(self) -> list[int | None]:
        seen: list[int | None] = []
        for code, _ in self._entries:
            if code not in seen:
                seen.append(code)
        return seen

    @property
    def messages(self) -> list[str]:
        return [message for _, message in self._entries if message]

    def __repr__(self) -> str:
        return f"Errors({self._entries!r})"
