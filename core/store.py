"""
Entry Store - In-Memory Collection of Leasing Entries

Holds the canonical list of entries for the session. Loaded once from
storage at startup and written back only on an explicit save, so every
mutation here is in-memory only.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional

from core.errors import EntryNotFoundError
from core.models import LeasingEntry


class EntryStore:
    """
    Repository for the session's leasing entries.

    Provides CRUD operations and wholesale replacement. Entry ids are
    unique; the store refuses any operation that would duplicate one.
    """

    def __init__(self, entries: Optional[Iterable[LeasingEntry]] = None):
        """
        Initialise store.

        Args:
            entries: Optional initial entries (e.g. loaded from storage)
        """
        self._entries: List[LeasingEntry] = []
        self._revision = 0
        if entries is not None:
            self.replace_all(entries)
            self._revision = 0

    @property
    def revision(self) -> int:
        """Counter bumped by every successful mutation."""
        return self._revision

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LeasingEntry]:
        return iter(list(self._entries))

    @staticmethod
    def _check_unique(entries: List[LeasingEntry]) -> None:
        seen: set[str] = set()
        for entry in entries:
            if entry.id in seen:
                raise ValueError(f"Duplicate entry id: {entry.id}")
            seen.add(entry.id)

    def _index_of(self, entry_id: str) -> int:
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                return index
        raise EntryNotFoundError(entry_id)

    # =========================================================================
    # CRUD Operations
    # =========================================================================

    def all(self) -> List[LeasingEntry]:
        """Return a copy of all entries in store order."""
        return list(self._entries)

    def get(self, entry_id: str) -> Optional[LeasingEntry]:
        """
        Get an entry by id.

        Returns:
            The entry if found, None otherwise
        """
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def create(self, entry: LeasingEntry) -> LeasingEntry:
        """
        Add a new entry at the top of the list.

        Raises:
            ValueError: If the id already exists
        """
        if self.get(entry.id) is not None:
            raise ValueError(f"Entry {entry.id} already exists")
        self._entries.insert(0, entry)
        self._revision += 1
        return entry

    def update(self, entry: LeasingEntry) -> LeasingEntry:
        """
        Replace the entry with the same id, keeping its position.

        Raises:
            EntryNotFoundError: If no entry has that id
        """
        index = self._index_of(entry.id)
        self._entries[index] = entry
        self._revision += 1
        return entry

    def delete(self, entry_id: str) -> LeasingEntry:
        """
        Remove an entry by id.

        Returns:
            The removed entry

        Raises:
            EntryNotFoundError: If no entry has that id
        """
        index = self._index_of(entry_id)
        removed = self._entries.pop(index)
        self._revision += 1
        return removed

    def replace_all(self, entries: Iterable[LeasingEntry]) -> None:
        """
        Replace the whole collection.

        Raises:
            ValueError: If the new entries contain duplicate ids; the store
                is left unchanged in that case
        """
        new_entries = list(entries)
        self._check_unique(new_entries)
        self._entries = new_entries
        self._revision += 1
