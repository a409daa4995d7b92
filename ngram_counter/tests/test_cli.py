"""
Tests for the command line entry point.
"""

import pytest

from ngram_counter.__main__ import main, parse_arguments
from ngram_counter.errors import ConfigurationError

USAGE_LINE = "Usage: ngram-counter <dir> <num_threads> <n>\n"


@pytest.mark.parametrize("argv", [[], ["dir"], ["dir", "2"]])
def test_too_few_arguments_print_usage(argv, capsys):
    assert main(argv) == 1
    assert capsys.readouterr().out == USAGE_LINE


@pytest.mark.parametrize(
    "args",
    [
        ["two", "2"],
        ["2", "n"],
        ["2", "0"],
        ["0", "2"],
        ["-1", "2"],
    ],
)
def test_invalid_arguments_print_usage(args, tmp_path, capsys):
    assert main([str(tmp_path)] + args) == 1
    assert capsys.readouterr().out == USAGE_LINE


def test_missing_directory_prints_usage(tmp_path, capsys):
    assert main([str(tmp_path / "nope"), "2", "2"]) == 1
    assert capsys.readouterr().out == USAGE_LINE


def test_file_as_directory_prints_usage(cat_corpus, capsys):
    assert main([str(cat_corpus[0]), "2", "2"]) == 1
    assert capsys.readouterr().out == USAGE_LINE


def test_arguments_after_ngram_size_are_ignored(cat_corpus, tmp_path, capsys):
    assert main([str(tmp_path), "1", "2", "extra", "--flag"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Thread 0:\n       the cat: 2\n")


def test_parse_arguments_builds_config(tmp_path):
    config = parse_arguments([str(tmp_path), "4", "3"])
    assert config.data_dir == tmp_path
    assert config.num_workers == 4
    assert config.ngram == 3
    assert config.top_k == 5


def test_parse_arguments_rejects_bad_ngram(tmp_path):
    with pytest.raises(ConfigurationError):
        parse_arguments([str(tmp_path), "4", "0"])


def test_main_prints_one_block_per_worker(cat_corpus, tmp_path, capsys):
    assert main([str(tmp_path), "3", "2"]) == 0

    out = capsys.readouterr().out
    headers = [line for line in out.splitlines() if line.startswith("Thread ")]
    assert sorted(headers) == ["Thread 0:", "Thread 1:", "Thread 2:"]
    assert len(out.splitlines()) == 3 * 6
    assert "       the cat: 2" in out
