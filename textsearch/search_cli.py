"""
Command-line driver for the search engine.

Builds an in-memory index from a directory of text files or by crawling from
a seed URL, optionally writes the index and word counts, runs a file of
queries and writes the ranked results, or drops into an interactive search
loop.

Usage (from repo root):
    python -m textsearch.search_cli --text data/ --threads 4 \
        --index --counts --query queries.txt --partial --results
    python -m textsearch.search_cli --html https://example.com/ --max 20 --interactive
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Iterable

from . import config
from .concurrent_index import ConcurrentInvertedIndex
from .crawler import crawl
from .index_builder import build_index
from .json_writer import write_counts, write_index, write_results
from .posting import InvertedIndex, SearchMode
from .query import QueryProcessor, process_queries

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer")
    if number < 1:
        raise argparse.ArgumentTypeError(f"{value!r} must be at least 1")
    return number


def run_search_loop(index, mode: SearchMode = SearchMode.EXACT, top_k: int = 10) -> None:
    """
    Interactive command-line search loop over an in-memory index.
    """
    processor = QueryProcessor(index, mode)
    print(f"Index holds {index.word_count()} terms. Mode: {mode.value}.")
    print("Enter queries. Empty line or Ctrl+C to exit.")

    while True:
        try:
            raw_query = input("query> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break
        if not raw_query:
            break

        processor.process_line(raw_query)
        ranked = processor.results(raw_query)
        if not ranked:
            print("No documents matched the query.")
            continue

        print(f"Top {min(top_k, len(ranked))} results:")
        for rank, score in enumerate(ranked[:top_k], start=1):
            print(f"{rank:2d}. score={score.score:.8f}  count={score.count}  {score.location}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build and search an inverted index.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--text", type=Path, help="Text file or directory to index.")
    source.add_argument("--html", help="Seed URL to crawl and index.")
    parser.add_argument(
        "--max",
        type=positive_int,
        default=config.DEFAULT_MAX_PAGES,
        help="Maximum number of pages to crawl (default: %(default)s, seed only).",
    )
    parser.add_argument(
        "--threads",
        type=positive_int,
        nargs="?",
        const=config.DEFAULT_THREADS,
        default=None,
        help="Build and search with this many worker threads (default when given: %(const)s).",
    )
    parser.add_argument(
        "--index",
        type=Path,
        nargs="?",
        const=Path(config.INDEX_PATH),
        help="Write the inverted index as JSON (default path: %(const)s).",
    )
    parser.add_argument(
        "--counts",
        type=Path,
        nargs="?",
        const=Path(config.COUNTS_PATH),
        help="Write per-location word counts as JSON (default path: %(const)s).",
    )
    parser.add_argument("--query", type=Path, help="File of queries, one per line.")
    parser.add_argument("--partial", action="store_true", help="Use prefix (partial) search.")
    parser.add_argument(
        "--results",
        type=Path,
        nargs="?",
        const=Path(config.RESULTS_PATH),
        help="Write query results as JSON (default path: %(const)s).",
    )
    parser.add_argument("--interactive", action="store_true", help="Start an interactive search loop.")
    parser.add_argument("--top", type=positive_int, default=10, help="Results shown per interactive query.")
    return parser


def main(argv: Iterable[str] | None = None) -> None:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    start = time.perf_counter()

    threads = args.threads
    if args.html and threads is None:
        # Crawling always runs on the work queue.
        threads = config.DEFAULT_THREADS

    if args.html:
        index = crawl(args.html, threads, args.max)
    elif args.text:
        index = build_index(args.text, threads)
    else:
        index = ConcurrentInvertedIndex() if threads else InvertedIndex()

    if args.index:
        write_index(index, args.index)
        logger.info("Index saved to %s", args.index)
    if args.counts:
        write_counts(index, args.counts)
        logger.info("Counts saved to %s", args.counts)

    mode = SearchMode.PARTIAL if args.partial else SearchMode.EXACT
    if args.query or args.results:
        processor = process_queries(index, args.query or [], mode, threads)
        if args.results:
            write_results(processor, args.results)
            logger.info("Results saved to %s", args.results)

    if args.interactive:
        run_search_loop(index, mode, args.top)

    elapsed = time.perf_counter() - start
    print(f"Elapsed: {elapsed:f} seconds")


if __name__ == "__main__":
    main()
