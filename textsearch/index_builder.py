"""
Index builder: constructs an inverted index from text documents.

A file is indexed as one location (its path). A directory is walked
recursively and every .txt/.text file in it is indexed; other files are
skipped. The concurrent builder hands each file to the work queue, where it is
indexed into a private local index and merged into the shared index.
"""

import logging
from functools import partial
from pathlib import Path
from typing import Iterator

from .concurrent_index import ConcurrentInvertedIndex
from .config import TEXT_EXTENSIONS
from .posting import InvertedIndex
from .tokenizer import file_stems, make_stemmer
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)


def is_text_file(path: Path) -> bool:
    """True for .txt and .text files, in any case."""
    return Path(path).suffix.lower() in TEXT_EXTENSIONS


def iter_text_files(root: Path) -> Iterator[Path]:
    """
    Yield the documents to index under root.
    A file given directly is always yielded; a directory is searched recursively.
    """
    root = Path(root)
    if not root.is_dir():
        yield root
        return
    for path in sorted(root.rglob("*")):
        if path.is_file() and is_text_file(path):
            yield path


def _read_stems(filepath: Path, stemmer=None) -> list[str] | None:
    try:
        return file_stems(filepath, stemmer)
    except (OSError, ValueError) as e:
        logger.warning("Could not read %s: %s", filepath, e)
        return None


class IndexBuilder:
    """Builds an index one file at a time on the calling thread."""

    def __init__(self, index: InvertedIndex | None = None) -> None:
        self.index = index if index is not None else InvertedIndex()
        self._stemmer = make_stemmer()

    def build(self, root: Path) -> InvertedIndex:
        for filepath in iter_text_files(root):
            self.index_file(filepath)
        return self.index

    def index_file(self, filepath: Path) -> int:
        """Index one document. Returns the number of terms added."""
        stems = _read_stems(filepath, self._stemmer)
        if not stems:
            return 0
        self.index.add_all(str(filepath), stems)
        return len(stems)


class ConcurrentIndexBuilder:
    """
    Builds a shared index with one work queue task per file.
    Each task indexes its file into a local index, then merges it into the
    shared index under a single write lock.
    """

    def __init__(self, index: ConcurrentInvertedIndex, queue: WorkQueue) -> None:
        self.index = index
        self.queue = queue

    def build(self, root: Path) -> ConcurrentInvertedIndex:
        for filepath in iter_text_files(root):
            self.queue.execute(partial(self.index_file, filepath))
        # Callers rely on the index being complete once build returns.
        self.queue.finish()
        return self.index

    def index_file(self, filepath: Path) -> int:
        stems = _read_stems(filepath, make_stemmer())
        if not stems:
            return 0
        local = InvertedIndex()
        local.add_all(str(filepath), stems)
        self.index.add_index(local)
        logger.debug("Indexed %s (%d terms)", filepath, len(stems))
        return len(stems)


def build_index(
    root: Path,
    threads: int | None = None,
) -> InvertedIndex | ConcurrentInvertedIndex:
    """
    Build an index from a file or directory.
    Without threads the index is built sequentially; otherwise a thread-safe
    index is built on a work queue of that many workers.
    """
    if threads is None:
        return IndexBuilder().build(root)
    index = ConcurrentInvertedIndex()
    with WorkQueue(threads) as queue:
        ConcurrentIndexBuilder(index, queue).build(root)
    return index
