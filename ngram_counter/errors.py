"""
Error taxonomy for the n-gram counter.

Three kinds of failure are distinguished:
1. ConfigurationError - bad arguments, detected before any worker starts
2. FileReadError - one input file could not be read; local to one worker
3. SynchronizationHazard - the shuffle exchange was broken, either by a
   worker dying before its handoff or by a channel being misused
"""

from typing import Optional


class NgramCounterError(Exception):
    """Base class for all errors raised by the n-gram counter"""


class ConfigurationError(NgramCounterError, ValueError):
    """Invalid run configuration (arity, non-numeric values, ngram < 1, ...)"""


class FileReadError(NgramCounterError):
    """A corpus file could not be opened or read"""

    def __init__(self, path: str, reason: Optional[BaseException] = None):
        self.path = path
        self.reason = reason
        message = f"Could not read {path}"
        if reason is not None:
            message += f": {reason}"
        super().__init__(message)


class SynchronizationHazard(NgramCounterError, RuntimeError):
    """The all-to-all shuffle exchange could not complete"""

    def __init__(self, message: str, worker_id: Optional[int] = None):
        self.worker_id = worker_id
        super().__init__(message)
