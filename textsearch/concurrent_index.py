"""
Thread-safe inverted index.

Wraps a private InvertedIndex with one read/write lock for the whole
structure. Writers are expected to batch their work into a local index and
merge it with add_index, so the write lock is taken once per document rather
than once per token.
"""

from typing import Iterable

from .posting import InvertedIndex, Score, SearchMode
from .rwlock import ReadWriteLock


class ConcurrentInvertedIndex:
    def __init__(self) -> None:
        self._index = InvertedIndex()
        self._lock = ReadWriteLock()

    def add(self, term: str, location: str, position: int) -> bool:
        with self._lock.write_locked():
            return self._index.add(term, location, position)

    def add_count(self, location: str, count: int) -> bool:
        with self._lock.write_locked():
            return self._index.add_count(location, count)

    def add_all(self, location: str, stems: list[str]) -> bool:
        with self._lock.write_locked():
            return self._index.add_all(location, stems)

    def add_index(self, other: "InvertedIndex | ConcurrentInvertedIndex") -> None:
        """Merge a local index into this one as a single atomic write."""
        if isinstance(other, ConcurrentInvertedIndex):
            # Copy the source out first so the two locks are never held together.
            snapshot = InvertedIndex()
            with other._lock.read_locked():
                snapshot.add_index(other._index)
            with self._lock.write_locked():
                self._index.add_index(snapshot)
        else:
            with self._lock.write_locked():
                self._index.add_index(other)

    def words(self) -> tuple[str, ...]:
        with self._lock.read_locked():
            return self._index.words()

    def word_count(self) -> int:
        with self._lock.read_locked():
            return self._index.word_count()

    def locations(self, term: str) -> tuple[str, ...]:
        with self._lock.read_locked():
            return self._index.locations(term)

    def positions(self, term: str, location: str) -> frozenset[int]:
        with self._lock.read_locked():
            return self._index.positions(term, location)

    def location_count(self, term: str) -> int:
        with self._lock.read_locked():
            return self._index.location_count(term)

    def position_count(self, term: str, location: str) -> int:
        with self._lock.read_locked():
            return self._index.position_count(term, location)

    def has_term(self, term: str) -> bool:
        with self._lock.read_locked():
            return self._index.has_term(term)

    def has_location(self, term: str, location: str) -> bool:
        with self._lock.read_locked():
            return self._index.has_location(term, location)

    def has_position(self, term: str, location: str, position: int) -> bool:
        with self._lock.read_locked():
            return self._index.has_position(term, location, position)

    def term_count(self, location: str) -> int:
        with self._lock.read_locked():
            return self._index.term_count(location)

    def has_count(self, location: str) -> bool:
        with self._lock.read_locked():
            return self._index.has_count(location)

    def counts(self) -> dict[str, int]:
        with self._lock.read_locked():
            return self._index.counts()

    def terms_with_prefix(self, prefix: str) -> list[str]:
        with self._lock.read_locked():
            return self._index.terms_with_prefix(prefix)

    def search(self, queries: Iterable[str], mode: SearchMode = SearchMode.EXACT) -> list[Score]:
        with self._lock.read_locked():
            return self._index.search(queries, mode)

    def is_empty(self) -> bool:
        with self._lock.read_locked():
            return self._index.is_empty()

    def to_dict(self) -> dict:
        with self._lock.read_locked():
            return self._index.to_dict()

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._index)

    def __contains__(self, term: str) -> bool:
        return self.has_term(term)

    def __repr__(self) -> str:
        with self._lock.read_locked():
            return f"Concurrent{self._index!r}"
