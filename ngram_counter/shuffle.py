"""
All-to-all shuffle exchange between workers.

Every worker partitions its local counts by owner and hands one bucket to
every worker, itself included, through a grid of one-shot channels:

    channels[sender][receiver]

Each channel is written exactly once by its sender and read exactly once by
its receiver. A receiver merges only after all of its inbound channels are
filled, which makes the exchange a full barrier between the local counting
phase and the merge phase.

If a worker fails before its handoff it poisons its outgoing channels, so
every receiver wakes up with SynchronizationHazard instead of waiting forever.
"""

import hashlib
import logging
import threading
from collections import defaultdict
from concurrent.futures import Future
from typing import Dict, List, Mapping, Optional, Tuple

from .configs import validate_positive
from .errors import SynchronizationHazard

logger = logging.getLogger(__name__)

Bucket = List[Tuple[str, int]]


def owner(ngram: str, num_workers: int) -> int:
    """Worker responsible for the final count of an n-gram.

    md5 keeps the assignment stable across processes, unlike the salted hash().
    """
    return int(hashlib.md5(ngram.encode("utf-8")).hexdigest(), 16) % num_workers


def partition_counts(local_freq: Mapping[str, int], num_workers: int) -> List[Bucket]:
    """Split a local mapping into one bucket per destination worker."""
    buckets: List[Bucket] = [[] for _ in range(num_workers)]
    for gram, count in local_freq.items():
        buckets[owner(gram, num_workers)].append((gram, count))
    return buckets


class OneShotChannel:
    """Write-once / read-once handoff from one sender to one receiver."""

    def __init__(self, sender: int, receiver: int):
        self.sender = sender
        self.receiver = receiver
        self._future: Future = Future()
        self._lock = threading.Lock()
        self.writes = 0
        self.reads = 0

    @property
    def written(self) -> bool:
        return self._future.done()

    def put(self, bucket: Bucket) -> None:
        with self._lock:
            if self._future.done():
                raise SynchronizationHazard(
                    f"Channel {self.sender}->{self.receiver} written twice",
                    worker_id=self.sender,
                )
            self.writes += 1
            self._future.set_result(bucket)

    def fail(self, error: BaseException) -> None:
        """Poison the channel if nothing has been written to it yet."""
        with self._lock:
            if not self._future.done():
                self._future.set_exception(error)

    def take(self, timeout: Optional[float] = None) -> Bucket:
        """Block until the sender's bucket is available, then return it."""
        with self._lock:
            if self.reads:
                raise SynchronizationHazard(
                    f"Channel {self.sender}->{self.receiver} read twice",
                    worker_id=self.receiver,
                )
            self.reads += 1
        return self._future.result(timeout)


class ShuffleExchange:
    """Grid of num_workers x num_workers one-shot channels."""

    channel_class = OneShotChannel

    def __init__(self, num_workers: int):
        validate_positive("num_workers", num_workers)
        self.num_workers = num_workers
        self.channels = [
            [self.channel_class(sender, receiver) for receiver in range(num_workers)]
            for sender in range(num_workers)
        ]

    def send(self, sender: int, local_freq: Mapping[str, int]) -> List[int]:
        """Partition a worker's local counts and deliver every bucket.

        Returns the bucket sizes, indexed by destination.
        """
        buckets = partition_counts(local_freq, self.num_workers)
        for receiver, bucket in enumerate(buckets):
            self.channels[sender][receiver].put(bucket)
        return [len(bucket) for bucket in buckets]

    def receive(self, receiver: int) -> Dict[str, int]:
        """Wait for every inbound bucket and merge them by summation."""
        merged = defaultdict(int)
        for sender in range(self.num_workers):
            for gram, count in self.channels[sender][receiver].take():
                merged[gram] += count
        return dict(merged)

    def abort(self, sender: int, error: BaseException) -> None:
        """Unblock every receiver still waiting on this sender."""
        hazard = SynchronizationHazard(
            f"Worker {sender} failed before completing its shuffle handoff: {error}",
            worker_id=sender,
        )
        hazard.__cause__ = error
        for channel in self.channels[sender]:
            channel.fail(hazard)
        logger.error(f"Worker {sender} aborted the shuffle exchange: {error}")
