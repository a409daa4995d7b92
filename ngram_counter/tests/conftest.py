"""Shared fixtures: small on-disk corpora."""

from pathlib import Path

import pytest


def write_corpus(root: Path, files: dict[str, str]) -> list[Path]:
    paths = []
    for name, text in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        paths.append(path)
    return paths


@pytest.fixture
def cat_corpus(tmp_path):
    """One file holding the two-clause cat example."""
    return write_corpus(tmp_path, {"cats.txt": "The cat sat. The cat ran."})


@pytest.fixture
def mixed_corpus(tmp_path):
    """Several files, nested directories, an empty file and non-.txt noise."""
    return write_corpus(
        tmp_path,
        {
            "a.txt": "the quick brown fox jumps over the lazy dog\n"
                     "the dog was really lazy, but the fox was quick",
            "b.txt": "The quick brown fox! The quick brown fox? The lazy dog.",
            "nested/c.txt": "over the lazy dog over the lazy dog\tover the lazy dog",
            "nested/deeper/d.txt": "a b c d e f g h i j k l m n o p",
            "nested/empty.txt": "",
            "notes.md": "the quick brown fox jumps over the lazy dog",
        },
    )
