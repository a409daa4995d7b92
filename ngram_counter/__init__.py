"""
Partitioned n-gram frequency counting.

Modules:
    tokenizer: Text normalization and n-gram extraction
    scanner: Recursive corpus discovery
    counting: Per-file and sequential n-gram counting
    shuffle: Owner partitioning and the all-to-all exchange
    topk: Top-K selection and report formatting
    scheduler: Worker pool orchestration
"""

from .configs import RunConfig
from .counting import count_file, count_ngrams_sequential
from .errors import (
    ConfigurationError,
    FileReadError,
    NgramCounterError,
    SynchronizationHazard,
)
from .scanner import find_all_files
from .scheduler import NgramCounter, RunResult, SharedCounter, run
from .shuffle import ShuffleExchange, owner
from .tokenizer import Ngrams, iter_ngrams
from .topk import WorkerReport, select_topk

__version__ = "1.0.0"

__all__ = [
    # Configuration and errors
    "RunConfig",
    "NgramCounterError",
    "ConfigurationError",
    "FileReadError",
    "SynchronizationHazard",
    # Pipeline stages
    "Ngrams",
    "iter_ngrams",
    "find_all_files",
    "count_file",
    "count_ngrams_sequential",
    "owner",
    "ShuffleExchange",
    "select_topk",
    "WorkerReport",
    # Orchestration
    "SharedCounter",
    "NgramCounter",
    "RunResult",
    "run",
]
