"""
Partitioned n-gram counting across a fixed pool of worker threads.

A run has two phases separated by the shuffle exchange:

1. Local count: workers claim files through a shared counter
   (fetch-and-increment, first come first served) and count them into a
   worker-local mapping.
2. Merge: every worker hands one bucket of its local counts to each owner,
   waits for the buckets addressed to it, sums them, and reports its top-K.

Example:
    counter = NgramCounter(files, num_workers=4, ngram=2)
    result = counter.compute()
"""

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, TextIO, Union

from .configs import RunConfig, validate_positive
from .counting import count_file
from .errors import FileReadError, SynchronizationHazard
from .scanner import find_all_files
from .shuffle import ShuffleExchange
from .topk import ReportPrinter, WorkerReport

logger = logging.getLogger(__name__)


class SharedCounter:
    """Atomic fetch-and-increment counter shared by all workers"""

    def __init__(self, start: int = 0):
        self._value = start
        self._lock = threading.Lock()

    def fetch_and_increment(self) -> int:
        with self._lock:
            value = self._value
            self._value += 1
            return value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class WorkerStats:
    """What one worker did during a run"""
    worker_id: int
    files_processed: List[Path] = field(default_factory=list)
    skipped_files: List[Path] = field(default_factory=list)
    windows: int = 0
    local_size: int = 0
    bucket_sizes: List[int] = field(default_factory=list)
    merged: Dict[str, int] = field(default_factory=dict)
    report: Optional[WorkerReport] = None


@dataclass
class RunResult:
    """Outcome of a run, indexed by worker id"""
    workers: List[WorkerStats]
    elapsed: float

    @property
    def merged(self) -> List[Dict[str, int]]:
        return [worker.merged for worker in self.workers]

    @property
    def reports(self) -> List[WorkerReport]:
        return [worker.report for worker in self.workers]

    @property
    def skipped_files(self) -> List[Path]:
        return [path for worker in self.workers for path in worker.skipped_files]

    @property
    def total_windows(self) -> int:
        return sum(worker.windows for worker in self.workers)

    def totals(self) -> Dict[str, int]:
        """Recombine the disjoint partitions into one global mapping."""
        combined = {}
        for partition in self.merged:
            combined.update(partition)
        return combined


class NgramCounter:
    """Counts n-grams of a fixed corpus with num_workers threads."""

    exchange_class = ShuffleExchange

    def __init__(
        self,
        files: Sequence[Union[str, Path]],
        num_workers: int,
        ngram: int,
        top_k: int = 5,
        stream: Optional[TextIO] = None,
    ):
        validate_positive("num_workers", num_workers)
        validate_positive("ngram", ngram)
        validate_positive("top_k", top_k)
        self.files = tuple(Path(path) for path in files)
        self.num_workers = num_workers
        self.ngram = ngram
        self.top_k = top_k
        self.stream = stream

    @classmethod
    def from_config(cls, config: RunConfig, stream: Optional[TextIO] = None):
        files = find_all_files(config.data_dir, lambda ext: ext == config.extension)
        return cls(files, config.num_workers, config.ngram, config.top_k, stream)

    def compute(self) -> RunResult:
        """Run both phases on a fresh pool and return every worker's outcome."""
        logger.info(
            f"Counting {self.ngram}-grams in {len(self.files)} files "
            f"with {self.num_workers} workers"
        )
        start_time = time.time()

        next_file = SharedCounter()
        exchange = self.exchange_class(self.num_workers)
        printer = ReportPrinter(self.stream)

        with ThreadPoolExecutor(
            max_workers=self.num_workers, thread_name_prefix="ngram-worker"
        ) as pool:
            futures = [
                pool.submit(self._sweep, worker_id, next_file, exchange, printer)
                for worker_id in range(self.num_workers)
            ]
            wait(futures)

        failures = [
            (worker_id, future.exception())
            for worker_id, future in enumerate(futures)
            if future.exception() is not None
        ]
        if failures:
            # Prefer the worker that actually broke over peers woken by the abort
            worker_id, error = next(
                (
                    (worker_id, error)
                    for worker_id, error in failures
                    if not isinstance(error, SynchronizationHazard)
                ),
                failures[0],
            )
            raise SynchronizationHazard(
                f"Run aborted, worker {worker_id} failed: {error}", worker_id=worker_id
            ) from error

        elapsed = time.time() - start_time
        logger.info(f"Run finished in {elapsed:.4f} seconds")
        return RunResult([future.result() for future in futures], elapsed)

    def _sweep(
        self,
        worker_id: int,
        next_file: SharedCounter,
        exchange: ShuffleExchange,
        printer: ReportPrinter,
    ) -> WorkerStats:
        stats = WorkerStats(worker_id)

        try:
            local_freq: Dict[str, int] = {}
            while True:
                file_index = next_file.fetch_and_increment()
                if file_index >= len(self.files):
                    break
                path = self.files[file_index]
                try:
                    stats.windows += count_file(path, local_freq, self.ngram)
                except FileReadError as e:
                    logger.warning(f"Worker {worker_id} skipping file: {e}")
                    stats.skipped_files.append(path)
                    continue
                stats.files_processed.append(path)

            stats.local_size = len(local_freq)
            stats.bucket_sizes = exchange.send(worker_id, local_freq)
            del local_freq
        except Exception as e:
            exchange.abort(worker_id, e)
            raise

        stats.merged = exchange.receive(worker_id)
        stats.report = WorkerReport.from_counts(worker_id, stats.merged, self.top_k)
        printer.emit(stats.report)

        logger.info(
            f"Worker {worker_id}: {len(stats.files_processed)} files, "
            f"{stats.local_size} local n-grams, {len(stats.merged)} merged n-grams"
        )
        return stats


def run(config: RunConfig, stream: Optional[TextIO] = None) -> RunResult:
    """Scan config.data_dir and count its n-grams."""
    return NgramCounter.from_config(config, stream).compute()
