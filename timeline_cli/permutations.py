from __future__ import annotations

from collections import Counter
from typing import Iterator, List, Optional, Sequence

from .baseline import multinomial
from .models import Timeline


def next_timeline(timeline: Sequence[str]) -> Optional[Timeline]:
    """
    Return the next distinct arrangement in lexicographic order, or None when
    `timeline` is already the largest one.

    Repeated ids are handled without producing duplicates: reversing the
    suffix after the swap always gives the smallest completion of the new prefix.
    """
    seq: List[str] = list(timeline)

    i = len(seq) - 2
    while i >= 0 and seq[i] >= seq[i + 1]:
        i -= 1
    if i < 0:
        return None

    j = len(seq) - 1
    while seq[j] <= seq[i]:
        j -= 1

    seq[i], seq[j] = seq[j], seq[i]
    seq[i + 1 :] = reversed(seq[i + 1 :])
    return tuple(seq)


def enumerate_timelines(base: Sequence[str]) -> Iterator[Timeline]:
    """
    Lazily yield `base` and every lexicographically larger arrangement of it.

    Started from the sorted baseline this yields each distinct arrangement of
    the multiset exactly once. Call again to restart.
    """
    current: Optional[Timeline] = tuple(base)
    while current is not None:
        yield current
        current = next_timeline(current)


def timeline_at(base: Sequence[str], rank: int) -> Timeline:
    """
    Return the arrangement at 0-based lexicographic `rank` without walking its
    predecessors. Lets a caller split the rank space into independent chunks.
    """
    counts = Counter(base)
    remaining = len(base)
    total = multinomial(counts.values())
    if not 0 <= rank < total:
        raise IndexError(f"rank {rank} out of range for {total} arrangements")

    result: List[str] = []
    symbols = sorted(counts)
    while remaining:
        for symbol in symbols:
            if counts[symbol] == 0:
                continue
            # Arrangements of the rest once `symbol` is fixed at this position.
            block = total * counts[symbol] // remaining
            if rank < block:
                result.append(symbol)
                counts[symbol] -= 1
                remaining -= 1
                total = block
                break
            rank -= block
    return tuple(result)
