"""
Inverted index data structures.

The index maps each term to the locations (file paths or page URIs) it occurs
in and, per location, the set of 1-based positions of its occurrences. It also
keeps the total number of terms parsed from every location, which is what the
term-frequency score is normalized by.
"""

import bisect
from dataclasses import dataclass
from enum import Enum
from pathlib import PurePosixPath
from typing import Iterable


@dataclass
class Score:
    """
    One search result row: how often the query matched a location and the
    frequency-normalized score.
    - count: number of matching term occurrences in the location
    - score: sum over matches of occurrences / total terms in the location
    - location: where the matches were found
    """

    count: int = 0
    score: float = 0.0
    location: str = ""

    def update(self, matches: int, total: int) -> None:
        self.count += matches
        self.score += matches / total

    def sort_key(self) -> tuple:
        # Higher score first, then higher count, then the normalized path, then
        # the raw location for paths that normalize alike.
        return (-self.score, -self.count, str(PurePosixPath(self.location)), self.location)

    def __lt__(self, other: "Score") -> bool:
        return self.sort_key() < other.sort_key()

    def to_dict(self) -> dict:
        return {"count": self.count, "score": self.score, "where": self.location}


class SearchMode(Enum):
    """How a query token is resolved to index terms."""

    EXACT = "exact"
    PARTIAL = "partial"

    def resolve(self, index: "InvertedIndex", token: str) -> Iterable[str]:
        if self is SearchMode.PARTIAL:
            return index.terms_with_prefix(token)
        return (token,) if index.has_term(token) else ()


class InvertedIndex:
    """
    Inverted index: term -> location -> positions, plus location -> term count.
    Entries are only ever added; accessors hand out copies, never the backing
    containers.
    """

    def __init__(self) -> None:
        self._index: dict[str, dict[str, set[int]]] = {}
        self._counts: dict[str, int] = {}
        self._terms: list[str] = []  # sorted, for prefix lookups

    def add(self, term: str, location: str, position: int) -> bool:
        """
        Record term at the 0-based position of location (stored 1-based).
        Returns False if that position was already recorded.
        """
        locations = self._index.get(term)
        if locations is None:
            locations = self._index[term] = {}
            bisect.insort(self._terms, term)
        positions = locations.setdefault(location, set())
        if position + 1 in positions:
            return False
        positions.add(position + 1)
        return True

    def add_count(self, location: str, count: int) -> bool:
        """Record the number of terms in location. Counts below 1 are rejected."""
        if count < 1:
            return False
        self._counts[location] = count
        return True

    def add_all(self, location: str, stems: list[str]) -> bool:
        """Index a whole document's stems in order and record its term count."""
        for position, stem in enumerate(stems):
            self.add(stem, location, position)
        return self.add_count(location, len(stems))

    def add_index(self, other: "InvertedIndex") -> None:
        """
        Merge another index into this one. Positions are unioned and counts are
        added together, so merging partial indexes in any order gives the same
        result.
        """
        for term, locations in other._index.items():
            mine = self._index.get(term)
            if mine is None:
                mine = self._index[term] = {}
                bisect.insort(self._terms, term)
            for location, positions in locations.items():
                mine.setdefault(location, set()).update(positions)
        for location, count in other._counts.items():
            self._counts[location] = self._counts.get(location, 0) + count

    def words(self) -> tuple[str, ...]:
        """All terms in sorted order."""
        return tuple(self._terms)

    def word_count(self) -> int:
        """Number of distinct terms."""
        return len(self._terms)

    def locations(self, term: str) -> tuple[str, ...]:
        return tuple(sorted(self._index.get(term, ())))

    def positions(self, term: str, location: str) -> frozenset[int]:
        return frozenset(self._index.get(term, {}).get(location, ()))

    def location_count(self, term: str) -> int:
        return len(self._index.get(term, ()))

    def position_count(self, term: str, location: str) -> int:
        return len(self._index.get(term, {}).get(location, ()))

    def has_term(self, term: str) -> bool:
        return term in self._index

    def has_location(self, term: str, location: str) -> bool:
        return location in self._index.get(term, ())

    def has_position(self, term: str, location: str, position: int) -> bool:
        return position in self._index.get(term, {}).get(location, ())

    def term_count(self, location: str) -> int:
        """Total terms parsed from location, 0 if it was never indexed."""
        return self._counts.get(location, 0)

    def has_count(self, location: str) -> bool:
        return location in self._counts

    def counts(self) -> dict[str, int]:
        """Copy of location -> term count, in sorted key order."""
        return {location: self._counts[location] for location in sorted(self._counts)}

    def terms_with_prefix(self, prefix: str) -> list[str]:
        """Every term that starts with prefix, including prefix itself."""
        matches = []
        start = bisect.bisect_left(self._terms, prefix)
        for term in self._terms[start:]:
            if not term.startswith(prefix):
                break
            matches.append(term)
        return matches

    def search(self, queries: Iterable[str], mode: SearchMode = SearchMode.EXACT) -> list[Score]:
        """
        Score every location matching the query tokens and return the rows
        ranked best first.
        """
        matches: dict[str, Score] = {}
        for query in queries:
            for term in mode.resolve(self, query):
                for location, positions in self._index[term].items():
                    total = self._counts.get(location, 0)
                    if total < 1:
                        # Positions added before the location's count are not scored yet.
                        continue
                    score = matches.get(location)
                    if score is None:
                        score = matches[location] = Score(location=location)
                    score.update(len(positions), total)
        return sorted(matches.values())

    def is_empty(self) -> bool:
        return not self._index

    def to_dict(self) -> dict:
        """Serialize to a JSON-serializable dict, every level in sorted order."""
        return {
            term: {
                location: sorted(self._index[term][location])
                for location in sorted(self._index[term])
            }
            for term in self._terms
        }

    def __len__(self) -> int:
        return len(self._index)

    def __contains__(self, term: str) -> bool:
        return term in self._index

    def __repr__(self) -> str:
        return f"InvertedIndex(terms={len(self._index)}, locations={len(self._counts)})"
