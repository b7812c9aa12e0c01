import json

from textsearch.json_writer import to_json, write_counts, write_index, write_results
from textsearch.posting import InvertedIndex
from textsearch.query import process_queries


def make_index() -> InvertedIndex:
    index = InvertedIndex()
    index.add_all("b.txt", ["mat", "cat"])
    index.add_all("a.txt", ["cat", "sat", "cat", "on"])
    return index


def test_index_output_is_sorted_and_indented(tmp_path):
    output = tmp_path / "out" / "index.json"
    write_index(make_index(), output)
    text = output.read_text(encoding="utf-8")
    data = json.loads(text)

    assert list(data) == ["cat", "mat", "on", "sat"]
    assert list(data["cat"]) == ["a.txt", "b.txt"]
    assert data["cat"]["a.txt"] == [1, 3]
    assert text.startswith('{\n  "cat": {\n    "a.txt": [\n      1,')


def test_counts_output(tmp_path):
    output = tmp_path / "counts.json"
    write_counts(make_index(), output)
    assert json.loads(output.read_text(encoding="utf-8")) == {"a.txt": 4, "b.txt": 2}


def test_results_output(tmp_path):
    processor = process_queries(make_index(), ["cat", "dog", "sat cat"])
    output = tmp_path / "results.json"
    write_results(processor, output)
    data = json.loads(output.read_text(encoding="utf-8"))

    assert list(data) == ["cat", "cat sat", "dog"]
    assert data["dog"] == []
    assert data["cat"] == [
        {"count": 2, "score": 0.5, "where": "a.txt"},
        {"count": 1, "score": 0.5, "where": "b.txt"},
    ]
    assert data["cat sat"][0] == {"count": 3, "score": 0.75, "where": "a.txt"}


def test_to_json_keeps_unicode():
    assert to_json({"café": 1}) == '{\n  "café": 1\n}'
