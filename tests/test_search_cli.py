import argparse
import json

import pytest

from textsearch import search_cli


def test_builds_writes_and_queries(corpus, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    queries = tmp_path / "queries.txt"
    queries.write_text("cat\nru\n", encoding="utf-8")

    search_cli.main([
        "--text", str(corpus),
        "--threads", "3",
        "--index",
        "--counts", "out/counts.json",
        "--query", str(queries),
        "--partial",
        "--results",
    ])

    index = json.loads((tmp_path / "index.json").read_text(encoding="utf-8"))
    counts = json.loads((tmp_path / "out" / "counts.json").read_text(encoding="utf-8"))
    results = json.loads((tmp_path / "results.json").read_text(encoding="utf-8"))

    assert index["cat"] == {str(corpus / "cat.txt"): [2]}
    assert counts[str(corpus / "cat.txt")] == 6
    assert list(results) == ["cat", "ru"]
    assert [row["where"] for row in results["ru"]] == [
        str(corpus / "sub" / "run.txt"),
        str(corpus / "sub" / "runner.TEXT"),
    ]


def test_sequential_and_threaded_output_match(corpus, tmp_path):
    for name, extra in [("seq", []), ("par", ["--threads"])]:
        search_cli.main([
            "--text", str(corpus),
            "--index", str(tmp_path / f"{name}.json"),
            *extra,
        ])
    assert (tmp_path / "seq.json").read_text() == (tmp_path / "par.json").read_text()


def test_results_without_input_are_empty(tmp_path):
    output = tmp_path / "results.json"
    search_cli.main(["--results", str(output)])
    assert json.loads(output.read_text(encoding="utf-8")) == {}


def test_interactive_loop(corpus, monkeypatch, capsys):
    answers = iter(["cat", "zebra", ""])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))
    search_cli.main(["--text", str(corpus), "--interactive"])
    out = capsys.readouterr().out
    assert "score=0.16666667" in out
    assert str(corpus / "cat.txt") in out
    assert "No documents matched the query." in out


def test_positive_int():
    assert search_cli.positive_int("4") == 4
    with pytest.raises(argparse.ArgumentTypeError):
        search_cli.positive_int("0")
    with pytest.raises(argparse.ArgumentTypeError):
        search_cli.positive_int("many")


def test_rejects_bad_thread_count():
    with pytest.raises(SystemExit):
        search_cli.main(["--threads", "0"])
