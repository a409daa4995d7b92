"""
Configuration dataclass for an n-gram counting run.

Groups the parameters of one run and validates them up front, so that a bad
configuration is rejected before any worker thread is started.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from .errors import ConfigurationError


@dataclass
class RunConfig:
    """
    Configuration for one partitioned n-gram counting run.

    Attributes:
        data_dir (Path): Root directory scanned recursively for input files
        num_workers (int): Number of worker threads (and key-space partitions)
        ngram (int): Number of words per n-gram
        top_k (int): Number of report slots per worker
        extension (str): File suffix selected by the scanner

    Example:
        config = RunConfig(data_dir="./corpus", num_workers=4, ngram=2)
    """
    data_dir: Union[str, Path]
    num_workers: int
    ngram: int
    top_k: int = 5
    extension: str = ".txt"

    def __post_init__(self):
        self.data_dir = Path(self.data_dir)
        if not self.data_dir.is_dir():
            raise ConfigurationError(f"data_dir {self.data_dir} is not a directory")
        validate_positive("num_workers", self.num_workers)
        validate_positive("ngram", self.ngram)
        validate_positive("top_k", self.top_k)


def validate_positive(name: str, value) -> None:
    """Raise ConfigurationError unless value is an integer >= 1."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be >= 1, got {value}")
