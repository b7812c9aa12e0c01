"""
Query processing over an inverted index.

Each query line is cleaned, stemmed, de-duplicated and sorted; the joined
stems are the query's key in the results map, so lines that stem to the same
set of tokens are searched only once. Results per key are Score rows ranked
best first.
"""

import logging
import os
import threading
from functools import partial
from pathlib import Path
from typing import Iterable

from nltk.stem.snowball import SnowballStemmer

from .posting import Score, SearchMode
from .tokenizer import make_stemmer, read_text_file, unique_stems
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


def canonical_query(line: str, stemmer: SnowballStemmer | None = None) -> tuple[list[str], str]:
    """Return the query's unique sorted stems and the key they form."""
    stems = unique_stems(line, stemmer)
    return stems, " ".join(stems)


def _read_query_lines(source) -> list[str]:
    """A path is read as a query file; anything else is taken as the lines themselves."""
    if isinstance(source, (str, os.PathLike)):
        try:
            return read_text_file(Path(source)).splitlines()
        except (OSError, ValueError) as e:
            logger.warning("Could not read queries from %s: %s", source, e)
            return []
    return list(source)


class QueryProcessor:
    """Runs queries one at a time on the calling thread."""

    def __init__(self, index, mode: SearchMode = SearchMode.EXACT) -> None:
        self.index = index
        self.mode = mode
        self._results: dict[str, list[Score]] = {}
        self._stemmer = make_stemmer()

    def process_line(self, line: str) -> None:
        stems, query = canonical_query(line, self._stemmer)
        if not query or query in self._results:
            return
        self._results[query] = self.index.search(stems, self.mode)

    def process_queries(self, source: str | os.PathLike | Iterable[str]) -> None:
        """Run every query in a query file or an iterable of lines."""
        for line in _read_query_lines(source):
            self.process_line(line)

    def queries(self) -> tuple[str, ...]:
        return tuple(sorted(self._results))

    def results(self, query: str) -> tuple[Score, ...]:
        """Ranked results for a raw query line, empty if it was never run."""
        _, key = canonical_query(query, self._stemmer)
        return tuple(self._results.get(key, ()))

    def to_dict(self) -> dict[str, list[dict]]:
        return {
            query: [score.to_dict() for score in self._results[query]]
            for query in sorted(self._results)
        }

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, query: str) -> bool:
        return query in self._results


class ConcurrentQueryProcessor(QueryProcessor):
    """
    Runs each query line as its own work queue task. Every task uses its own
    stemmer; the results map is only touched under a lock, and the first task
    to finish a key wins.
    """

    def __init__(self, index, queue: WorkQueue, mode: SearchMode = SearchMode.EXACT) -> None:
        super().__init__(index, mode)
        self.queue = queue
        self._lock = threading.Lock()

    def process_line(self, line: str) -> None:
        self.queue.execute(partial(self._search, line))

    def process_queries(self, source: str | os.PathLike | Iterable[str]) -> None:
        super().process_queries(source)
        self.queue.finish()

    def _search(self, line: str) -> None:
        stems, query = canonical_query(line, make_stemmer())
        if not query:
            return
        with self._lock:
            if query in self._results:
                return
        scores = self.index.search(stems, self.mode)
        with self._lock:
            self._results.setdefault(query, scores)

    def queries(self) -> tuple[str, ...]:
        with self._lock:
            return super().queries()

    def results(self, query: str) -> tuple[Score, ...]:
        _, key = canonical_query(query, make_stemmer())
        with self._lock:
            return tuple(self._results.get(key, ()))

    def to_dict(self) -> dict[str, list[dict]]:
        with self._lock:
            return super().to_dict()

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

    def __contains__(self, query: str) -> bool:
        with self._lock:
            return query in self._results


def process_queries(
    index,
    source: str | os.PathLike | Iterable[str],
    mode: SearchMode = SearchMode.EXACT,
    threads: int | None = None,
) -> QueryProcessor:
    """
    Run all queries against index and return the processor holding the results.
    With threads, the queries run on a work queue of that many workers.
    """
    if threads is None:
        processor = QueryProcessor(index, mode)
        processor.process_queries(source)
        return processor
    with WorkQueue(threads) as queue:
        processor = ConcurrentQueryProcessor(index, queue, mode)
        processor.process_queries(source)
    return processor
