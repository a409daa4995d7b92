"""
Local counting of n-grams.

Each worker folds the files it claims into one worker-local mapping. A file is
first counted on its own and only merged once it has been read completely, so
a read failure leaves the worker's mapping untouched.
"""

import logging
import time
from collections import Counter, defaultdict
from pathlib import Path
from typing import Iterable, MutableMapping, Union

from .errors import FileReadError
from .tokenizer import Ngrams

logger = logging.getLogger(__name__)


def read_text(path: Union[str, Path]) -> str:
    """Read a whole file as text, raising FileReadError on any OS failure."""
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return f.read()
    except OSError as e:
        raise FileReadError(str(path), e) from e


def count_file(
    path: Union[str, Path], local_freq: MutableMapping[str, int], ngram: int
) -> int:
    """Add every n-gram of one file to local_freq.

    Returns the number of n-gram windows found in the file.
    """
    start_time = time.time()
    contents = read_text(path)
    file_freq = Counter(Ngrams(contents, ngram))
    for gram, count in file_freq.items():
        local_freq[gram] = local_freq.get(gram, 0) + count

    windows = sum(file_freq.values())
    logger.debug(
        f"Counted {windows} n-grams in {path} in {time.time() - start_time:.6f} seconds"
    )
    return windows


def count_ngrams_sequential(
    files: Iterable[Union[str, Path]], ngram: int
) -> dict[str, int]:
    """Single-threaded reference count over the whole corpus.

    Unreadable files are skipped, matching the partitioned run.
    """
    totals = defaultdict(int)
    for path in files:
        try:
            count_file(path, totals, ngram)
        except FileReadError as e:
            logger.warning(f"Skipping file: {e}")
    return dict(totals)
