from pathlib import Path

import pytest


def write(path: Path, text: str, encoding: str = "utf-8") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding=encoding)
    return path


@pytest.fixture
def corpus(tmp_path: Path) -> Path:
    """
    docs/
      cat.txt          the cat sat on the mat
      notes.md         skipped (not a text extension)
      numbers.txt      no terms at all
      sub/run.txt      run running
      sub/runner.TEXT  run
    """
    root = tmp_path / "docs"
    write(root / "cat.txt", "the cat sat on the mat\n")
    write(root / "notes.md", "cat cat cat\n")
    write(root / "numbers.txt", "123 456 !!!\n")
    write(root / "sub" / "run.txt", "run\nrunning\n")
    write(root / "sub" / "runner.TEXT", "Run!\n")
    return root
