"""
Top-K selection and per-worker report formatting.

Entries are ranked by descending count. Equal counts are ordered by the
n-gram text, ascending, so a report never depends on mapping iteration order.

Report block shape:

    Thread 0:
           the cat: 2
           cat ran: 1
           ...
"""

import heapq
import sys
import threading
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, TextIO, Tuple

INDENT = "       "
PLACEHOLDER = "..."


def select_topk(freq: Mapping[str, int], k: int = 5) -> List[Tuple[str, int]]:
    """Return up to k (ngram, count) pairs, highest count first.

    Example:
        >>> select_topk({"cat": 2, "dog": 2, "the": 4}, 2)
        [('the', 4), ('cat', 2)]
    """
    return heapq.nsmallest(k, freq.items(), key=lambda item: (-item[1], item[0]))


@dataclass
class WorkerReport:
    """Top-K entries of one worker's merged partition."""
    worker_id: int
    entries: List[Tuple[str, int]]
    slots: int = 5

    @classmethod
    def from_counts(cls, worker_id: int, freq: Mapping[str, int], slots: int = 5):
        return cls(worker_id, select_topk(freq, slots), slots)

    def lines(self) -> List[str]:
        lines = [f"Thread {self.worker_id}:"]
        for gram, count in self.entries:
            lines.append(f"{INDENT}{gram}: {count}")
        for _ in range(self.slots - len(self.entries)):
            lines.append(f"{INDENT}{PLACEHOLDER}")
        return lines

    def format(self) -> str:
        return "\n".join(self.lines()) + "\n"


@dataclass
class ReportPrinter:
    """Writes report blocks one at a time so blocks never interleave."""
    stream: Optional[TextIO] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    order: List[int] = field(default_factory=list)

    def emit(self, report: WorkerReport) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        with self._lock:
            stream.write(report.format())
            stream.flush()
            self.order.append(report.worker_id)
