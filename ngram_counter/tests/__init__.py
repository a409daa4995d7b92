"""
Test suite for the partitioned n-gram counter.

Covers tokenization, local counting, the shuffle exchange, top-K reporting,
the threaded scheduler and the command line entry point.
"""
