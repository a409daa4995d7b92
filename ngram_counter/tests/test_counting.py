"""
Tests for per-file local counting and the sequential reference counter.
"""

import pytest

from ngram_counter.counting import count_file, count_ngrams_sequential, read_text
from ngram_counter.errors import FileReadError


def test_count_file_cat_example(cat_corpus):
    local_freq = {}
    windows = count_file(cat_corpus[0], local_freq, 2)

    assert windows == 4
    assert local_freq == {"the cat": 2, "cat sat": 1, "cat ran": 1}


def test_count_file_accumulates_into_existing_mapping(cat_corpus):
    local_freq = {"the cat": 3, "dog ran": 1}
    count_file(cat_corpus[0], local_freq, 2)

    assert local_freq["the cat"] == 5
    assert local_freq["dog ran"] == 1
    assert local_freq["cat sat"] == 1


def test_empty_file_counts_nothing(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("")
    local_freq = {}

    assert count_file(path, local_freq, 1) == 0
    assert local_freq == {}


def test_missing_file_raises_and_leaves_mapping_untouched(tmp_path):
    local_freq = {"keep me": 1}
    missing = tmp_path / "missing.txt"

    with pytest.raises(FileReadError) as excinfo:
        count_file(missing, local_freq, 2)

    assert excinfo.value.path == str(missing)
    assert isinstance(excinfo.value.reason, OSError)
    assert local_freq == {"keep me": 1}


def test_directory_is_not_readable_as_file(tmp_path):
    with pytest.raises(FileReadError):
        read_text(tmp_path)


def test_invalid_utf8_between_words(tmp_path):
    path = tmp_path / "latin.txt"
    path.write_bytes(b"good \xff\xfe words here")
    local_freq = {}

    count_file(path, local_freq, 2)
    assert local_freq == {"good words": 1, "words here": 1}


def test_invalid_utf8_inside_a_word_splits_it(tmp_path):
    """An undecodable byte ends a word; the letters around it are never joined."""
    path = tmp_path / "latin1.txt"
    path.write_bytes(b"na\xefve caf\xe9 ok")
    local_freq = {}

    count_file(path, local_freq, 1)
    assert local_freq == {"na": 1, "ve": 1, "caf": 1, "ok": 1}
    assert "nave" not in local_freq


def test_sequential_counter_skips_unreadable_files(mixed_corpus, tmp_path):
    files = [path for path in mixed_corpus if path.suffix == ".txt"]
    with_missing = files + [tmp_path / "gone.txt"]

    assert count_ngrams_sequential(with_missing, 2) == count_ngrams_sequential(files, 2)


def test_sequential_counter_sums_across_files(tmp_path):
    (tmp_path / "one.txt").write_text("the cat sat")
    (tmp_path / "two.txt").write_text("the cat ran")

    result = count_ngrams_sequential(
        [tmp_path / "one.txt", tmp_path / "two.txt"], 2
    )
    assert result == {"the cat": 2, "cat sat": 1, "cat ran": 1}
