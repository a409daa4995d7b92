"""
Command line entry point.

Usage:
    python -m ngram_counter <dir> <num_threads> <n>

Prints one report block per worker with its five most frequent n-grams.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .configs import RunConfig
from .errors import ConfigurationError, SynchronizationHazard
from .scheduler import run

logger = logging.getLogger(__name__)

USAGE = "Usage: {prog} <dir> <num_threads> <n>"


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigurationError(message)


def parse_arguments(argv: List[str], prog: str = "ngram-counter") -> RunConfig:
    """Parse `<dir> <num_threads> <n>` into a validated RunConfig."""
    if len(argv) < 3:
        raise ConfigurationError(f"expected 3 arguments, got {len(argv)}")

    parser = _ArgumentParser(
        prog=prog,
        description="Partitioned n-gram frequency counter",
        add_help=False,
    )
    parser.add_argument("dir", type=str, help="Directory searched recursively for .txt files")
    parser.add_argument("num_threads", type=int, help="Number of worker threads")
    parser.add_argument("n", type=int, help="Number of words per n-gram")
    # Anything after <n> is ignored
    args = parser.parse_args(argv[:3])

    return RunConfig(data_dir=args.dir, num_workers=args.num_threads, ngram=args.n)


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    prog = "ngram-counter"
    if argv is None:
        argv = sys.argv[1:]

    try:
        config = parse_arguments(argv, prog)
    except ConfigurationError as e:
        logger.debug(f"Invalid arguments: {e}")
        print(USAGE.format(prog=prog))
        return 1

    try:
        run(config)
    except SynchronizationHazard as e:
        logger.error(f"Run failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
