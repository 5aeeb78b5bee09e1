"""Authoritative ordered branch list, replaced wholesale on refresh."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..errors import OutOfRange
from .types import Entry


class ItemStore:
    def __init__(self, entries: Iterable[Entry] = ()) -> None:
        self._entries: tuple[Entry, ...] = tuple(entries)

    def replace(self, entries: Iterable[Entry]) -> None:
        """Swap the full list in one step. No incremental edits exist."""
        self._entries = tuple(entries)

    def get(self, index: int) -> Entry:
        if not 0 <= index < len(self._entries):
            raise OutOfRange(f"entry index {index} outside store of {len(self._entries)}")
        return self._entries[index]

    @property
    def entries(self) -> tuple[Entry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)
