"""
Timeline CLI package.

Enumerates every distinct single-CPU interleaving of a small process set,
drops the ones that run a process before it arrives, and reports turnaround
and wait metrics for the rest.
"""

__all__ = ["cli"]
