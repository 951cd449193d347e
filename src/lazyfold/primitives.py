"""
Sequence primitives: reduce, count, filter, map and reorder.

reduce and count are eager. filter, map and reorder return lazy
sequences: nothing is computed until an element is observed, and every
element is computed at most once no matter how often the result is
traversed.
"""

from __future__ import annotations
from typing import TypeVar, Callable, Iterable, Any

from .seq import Seq, LazySeq, Cons, EMPTY, seq

T = TypeVar("T")
U = TypeVar("U")


def reduce(f: Callable[..., Any], *args: Any) -> Any:
    """
    Left fold, called as ``reduce(f, coll)`` or ``reduce(f, initial, coll)``.

    With an initial value, an empty ``coll`` returns ``initial`` and ``f``
    is never called. Without one:

        empty coll        -> f()
        one element x     -> x, f is never called
        otherwise         -> fold of the tail, starting from the head

    ``f()`` on an empty collection raises TypeError when ``f`` takes no
    zero-argument form; that error reaches the caller untouched.

    Example:
        reduce(operator.add, [1, 2, 3])      # 6
        reduce(operator.add, 10, [1, 2, 3])  # 16
    """
    if len(args) == 1:
        s = seq(args[0])
        if s.is_empty():
            return f()
        acc = s.head
        s = s.tail
    elif len(args) == 2:
        acc = args[0]
        s = seq(args[1])
    else:
        raise TypeError(
            f"reduce() takes 2 or 3 positional arguments but {len(args) + 1} were given"
        )

    while not s.is_empty():
        acc = f(acc, s.head)
        s = s.tail
    return acc


def count(coll: Iterable[Any] | None) -> int:
    """Number of elements in ``coll``; 0 when empty or None."""
    return reduce(lambda acc, _: acc + 1, 0, coll)


def filter(pred: Callable[[T], Any], coll: Iterable[T] | None) -> Seq[T]:
    """
    Lazy sequence of the elements of ``coll`` for which ``pred`` is true.

    ``pred`` runs left to right, once per source element, and only as far
    as the result is consumed, so infinite sources are fine.
    """
    s = seq(coll)

    def step() -> Seq[T]:
        if s.is_empty():
            return EMPTY
        x = s.head
        if pred(x):
            return Cons(x, filter(pred, s.tail))
        # Skipped: hand back the next lazy step, LazySeq unwraps it.
        return filter(pred, s.tail)

    return LazySeq(step)


def map(f: Callable[..., U], coll: Iterable[Any] | None, *colls: Iterable[Any] | None) -> Seq[U]:
    """
    Lazy sequence of ``f`` applied to the elements of one or more
    collections in lockstep.

    With several collections ``f`` receives one positional argument per
    collection and the result stops at the shortest input:

        map(operator.add, [1, 2], [3, 4])   # (4 6)
        map(lambda *xs: xs, "ab", "cd")     # (('a', 'c') ('b', 'd'))
    """
    if colls:
        return map(lambda args: f(*args), reorder((coll,) + colls))

    s = seq(coll)

    def step() -> Seq[U]:
        if s.is_empty():
            return EMPTY
        return Cons(f(s.head), map(f, s.tail))

    return LazySeq(step)


def _head(s: Seq[T]) -> T:
    return s.head


def _tail(s: Seq[T]) -> Seq[T]:
    return s.tail


def reorder(colls: Iterable[Iterable[Any] | None]) -> Seq[tuple[Any, ...]]:
    """
    Transpose collections into a lazy sequence of tuples.

    The i-th tuple holds the i-th element of every collection; the
    sequence ends as soon as any collection runs out.

        reorder([[1, 2, 3], "ab"])   # ((1, 'a') (2, 'b'))
    """
    seqs = map(seq, colls)

    def step() -> Seq[tuple[Any, ...]]:
        ss = tuple(seqs)
        if not ss or any(s.is_empty() for s in ss):
            return EMPTY
        return Cons(tuple(map(_head, ss)), reorder(map(_tail, ss)))

    return LazySeq(step)
