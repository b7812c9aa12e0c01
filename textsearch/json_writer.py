"""
Pretty JSON output for the index, the word counts and the query results.

Every mapping is written in sorted key order with 2-space indentation so the
output of two runs over the same input can be diffed directly.
"""

import json
from pathlib import Path


def to_json(data) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def write_json(data, output_path: Path) -> None:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(to_json(data))
        f.write("\n")


def write_index(index, output_path: Path) -> None:
    """term -> location -> [positions]"""
    write_json(index.to_dict(), output_path)


def write_counts(index, output_path: Path) -> None:
    """location -> number of terms"""
    write_json(index.counts(), output_path)


def write_results(processor, output_path: Path) -> None:
    """query -> [{"count", "score", "where"}, ...]"""
    write_json(processor.to_dict(), output_path)
