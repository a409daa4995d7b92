"""
Text normalization and n-gram extraction.

Raw text is normalized into lowercase words grouped into clauses. Punctuation,
digits and symbols become a hard separator: an n-gram never spans two
clauses. Inside a clause a window of `ngram` words slides with stride 1.

Example:
    >>> list(Ngrams("The cat sat. The cat ran.", 2))
    ['the cat', 'cat sat', 'the cat', 'cat ran']
"""

import re
from typing import Generator, Iterator, List

from .configs import validate_positive

SENTINEL = "|"

WORD_RE = re.compile(r"[a-z]+")


def _build_translation_table() -> dict[int, str]:
    table = {}
    for code in range(ord("A"), ord("Z") + 1):
        table[code] = chr(code + 32)
    table[ord("\t")] = " "
    table[ord("\n")] = " "
    # ASCII punctuation, digits and symbols
    for start, end in ((33, 64), (91, 96), (123, 126)):
        for code in range(start, end + 1):
            table[code] = SENTINEL
    return table


NORMALIZATION_TABLE = _build_translation_table()


def normalize(text: str) -> str:
    """Lowercase ASCII letters, turn tab/newline into spaces and punctuation
    into the clause sentinel."""
    return text.translate(NORMALIZATION_TABLE)


def split_clauses(text: str) -> Generator[List[str], None, None]:
    """Yield the word list of every non-empty clause in raw text."""
    for clause in normalize(text).split(SENTINEL):
        if not clause:
            continue
        words = WORD_RE.findall(clause)
        if words:
            yield words


def iter_ngrams(text: str, ngram: int) -> Generator[str, None, None]:
    """Yield every n-gram of `ngram` words in text, clause by clause."""
    validate_positive("ngram", ngram)
    for words in split_clauses(text):
        for start in range(len(words) - ngram + 1):
            yield " ".join(words[start:start + ngram])


class Ngrams:
    """Lazy, restartable sequence of the n-grams in a piece of text.

    Each call to iter() starts a fresh pass over the text.
    """

    def __init__(self, text: str, ngram: int):
        validate_positive("ngram", ngram)
        self.text = text
        self.ngram = ngram

    def __iter__(self) -> Iterator[str]:
        return iter_ngrams(self.text, self.ngram)
