"""
Lazyfold: reduce, count, filter, map and pmap rebuilt from first principles.

filter and map return lazy, memoising sequences; pmap dispatches every
task up front and lets the caller collect results lazily, in order.

Usage:
    from lazyfold import reduce, count, filter, map, pmap

    reduce(operator.add, [1, 2, 3])            # 6
    count(None)                                # 0
    list(filter(is_even, range(10)))           # [0, 2, 4, 6, 8]
    list(map(operator.add, [1, 2], [3, 4]))    # [4, 6]

    # Every call to slow_fn starts before the first result is read
    for result in pmap(slow_fn, items, max_workers=8):
        ...
"""

from .seq import (
    Seq,
    Empty,
    Cons,
    LazySeq,
    EMPTY,
    lazy,
    seq,
    cons,
    head,
    tail,
    is_empty,
    take,
)
from .primitives import reduce, count, filter, map, reorder
from .parallel import pmap, apmap

__version__ = "0.1.0"
__all__ = [
    # Core primitives
    "reduce",
    "count",
    "filter",
    "map",
    "reorder",
    # Parallel (built on reduce and map)
    "pmap",
    "apmap",
    # Sequences
    "Seq",
    "Empty",
    "Cons",
    "LazySeq",
    "EMPTY",
    "lazy",
    "seq",
    "cons",
    "head",
    "tail",
    "is_empty",
    "take",
]
