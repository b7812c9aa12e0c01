"""
Build an inverted index from a directory of text files and print index analytics.

Usage:
    python build_index.py data/ --threads 4

Output:
  - index.json   (term -> location -> positions)
  - counts.json  (location -> number of terms)
  - Analytics table printed to console
"""

import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).resolve().parent))

from textsearch import config
from textsearch.index_builder import build_index
from textsearch.json_writer import write_counts, write_index


def main() -> None:
    import argparse
    parser = argparse.ArgumentParser(description="Build an inverted index from text files")
    parser.add_argument("data_dir", type=Path, help="Text file or directory to index")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(config.INDEX_PATH),
        help="Output path for index JSON (default: %(default)s)",
    )
    parser.add_argument(
        "--counts",
        type=Path,
        default=Path(config.COUNTS_PATH),
        help="Output path for location -> term count JSON (default: %(default)s)",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of worker threads (default: build sequentially)",
    )
    args = parser.parse_args()
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)

    if not args.data_dir.exists():
        print(f"No such file or directory: {args.data_dir}")
        sys.exit(1)
    if args.threads is not None and args.threads < 1:
        parser.error("--threads must be at least 1")

    index = build_index(args.data_dir, args.threads)
    counts = index.counts()
    if not counts:
        print(f"No .txt or .text documents found in {args.data_dir}.")
        sys.exit(1)

    write_index(index, args.output)
    write_counts(index, args.counts)

    index_size_kb = args.output.stat().st_size / 1024

    print("\n" + "=" * 50)
    print("INDEX ANALYTICS")
    print("=" * 50)
    print()
    print("| Metric                      | Value |")
    print("|-----------------------------|-------|")
    print(f"| Number of indexed documents | {len(counts)} |")
    print(f"| Number of unique terms      | {index.word_count()} |")
    print(f"| Total terms indexed         | {sum(counts.values())} |")
    print(f"| Total size of index (KB)    | {index_size_kb:.2f} |")
    print()
    print("=" * 50)
    print(f"\nIndex saved to: {args.output}")
    print(f"Counts saved to: {args.counts}")
    print()


if __name__ == "__main__":
    main()
