"""Utilities for working with iterables."""
from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import chain, tee


def pairwise(iterable: Iterable) -> Iterator[tuple]:
    """Return consecutive pairs from ``iterable``."""
    a, b = tee(iterable)
    next(b, None)
    return zip(a, b)


def chunk_edges(start: int, stop: int, step: int) -> list[int]:
    """Return ``start``, every multiple of ``step`` in between, and ``stop``.

    >>> chunk_edges(990, 2010, 1000)
    [990, 1000, 2000, 2010]
    """
    if start >= stop:
        return [start]
    first = (start // step + 1) * step
    return list(chain([start], range(first, stop, step), [stop]))


__all__ = ["chunk_edges", "pairwise"]
