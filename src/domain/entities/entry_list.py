"""Ordered container for embedded sub-entries."""

from collections import OrderedDict
from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class EntryList(Generic[T]):
    """Most-recent-first list of entries indexed by a key.

    Backed by an ``OrderedDict`` so head insertion, lookup and removal by key
    are O(1) while iteration keeps insertion order (newest first). The key
    defaults to the entry's ``id``; likes use the liking user's id instead,
    which makes "one like per user" a property of the container.
    """

    def __init__(
        self,
        entries: Iterable[T] = (),
        key: Callable[[T], Hashable] = lambda entry: entry.id,  # type: ignore[attr-defined]
    ) -> None:
        self._key = key
        self._entries: OrderedDict[Hashable, T] = OrderedDict()
        # Stored order is already newest first
        for entry in entries:
            self._entries[key(entry)] = entry

    def push_front(self, entry: T) -> None:
        """Insert an entry at the head. An existing entry with the same key is replaced."""
        k = self._key(entry)
        self._entries[k] = entry
        self._entries.move_to_end(k, last=False)

    def get(self, key: Hashable) -> T | None:
        return self._entries.get(key)

    def remove(self, key: Hashable) -> T | None:
        """Remove and return the entry stored under ``key``, or None."""
        return self._entries.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[T]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntryList):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"EntryList({list(self)!r})"
