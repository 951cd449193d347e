"""
Persistent, memoising sequences observed through head and tail.

Every sequence is one of three shapes:

    EMPTY           - the empty sequence
    Cons(x, rest)   - a realised node
    LazySeq(fn)     - a deferred node; fn() runs once and yields a Seq

Emptiness is structural (``is_empty()``), so ``None`` is an ordinary
element and never marks the end of a sequence.

Example:
    s = seq(iter([1, 2, 3]))     # pulls from the iterator on demand
    assert s.head == 1
    assert list(s) == [1, 2, 3]
    assert list(s) == [1, 2, 3]  # replayed from the cached nodes
"""

from __future__ import annotations
from typing import TypeVar, Generic, Callable, Iterable, Iterator, Any

T = TypeVar("T")

_MAX_REPR = 10


class Seq(Generic[T]):
    """Base class for all sequence shapes."""

    __slots__ = ()

    def is_empty(self) -> bool:
        raise NotImplementedError

    @property
    def head(self) -> T:
        raise NotImplementedError

    @property
    def tail(self) -> Seq[T]:
        raise NotImplementedError

    def __iter__(self) -> Iterator[T]:
        s: Seq[T] = self
        while not s.is_empty():
            yield s.head
            s = s.tail

    def __repr__(self) -> str:
        # Shows what has been realised so far; never forces.
        items = []
        s: Seq[Any] = self
        while len(items) < _MAX_REPR:
            if isinstance(s, LazySeq):
                if not s.is_realized():
                    items.append("...")
                    break
                s = s._sv
            elif isinstance(s, Cons):
                items.append(repr(s.head))
                s = s._rest
            else:
                break
        else:
            items.append("...")
        return f"({' '.join(items)})"


class Empty(Seq[Any]):
    """The empty sequence. Use the ``EMPTY`` singleton."""

    __slots__ = ()

    def is_empty(self) -> bool:
        return True

    @property
    def head(self) -> Any:
        raise IndexError("head of empty sequence")

    @property
    def tail(self) -> Seq[Any]:
        return self


EMPTY: Seq[Any] = Empty()


class Cons(Seq[T]):
    """A realised node: a head value and the rest of the sequence."""

    __slots__ = ("_head", "_rest")

    def __init__(self, head: T, rest: Seq[T]):
        self._head = head
        self._rest = rest

    def is_empty(self) -> bool:
        return False

    @property
    def head(self) -> T:
        return self._head

    @property
    def tail(self) -> Seq[T]:
        return self._rest


class LazySeq(Seq[T]):
    """
    A sequence whose contents are computed on first observation.

    ``compute`` takes no arguments and returns a Seq: EMPTY, a Cons, or
    another LazySeq. It runs at most once; its result is cached and every
    later observation, from any retained reference, sees the same nodes.
    If ``compute`` raises, nothing is cached and the next observation
    runs it again.

    A LazySeq returned by ``compute`` is unwrapped in a loop rather than
    by recursion, so a filter skipping a long run of elements uses
    constant stack.
    """

    __slots__ = ("_fn", "_sv")

    def __init__(self, compute: Callable[[], Seq[T]]):
        self._fn: Callable[[], Seq[T]] | None = compute
        self._sv: Seq[T] | None = None

    def _step(self) -> Seq[T]:
        """Run compute if still pending; return its raw result."""
        if self._fn is not None:
            self._sv = self._fn()
            self._fn = None
        return self._sv  # type: ignore[return-value]

    def _realize(self) -> Seq[T]:
        s = self._step()
        while isinstance(s, LazySeq):
            s = s._step()
        self._sv = s
        return s

    def is_realized(self) -> bool:
        return self._fn is None

    def is_empty(self) -> bool:
        return self._realize().is_empty()

    @property
    def head(self) -> T:
        return self._realize().head

    @property
    def tail(self) -> Seq[T]:
        return self._realize().tail


def lazy(compute: Callable[[], Seq[T]]) -> Seq[T]:
    """Defer ``compute`` until the returned sequence is first observed."""
    return LazySeq(compute)


def cons(x: T, coll: Iterable[T] | None) -> Seq[T]:
    """Prepend ``x`` to ``coll``."""
    return Cons(x, seq(coll))


def _from_iterator(it: Iterator[T]) -> Seq[T]:
    def step() -> Seq[T]:
        try:
            x = next(it)
        except StopIteration:
            return EMPTY
        return Cons(x, _from_iterator(it))

    return LazySeq(step)


def seq(coll: Iterable[T] | None) -> Seq[T]:
    """
    Coerce ``coll`` to a Seq.

    None becomes EMPTY, a Seq is returned as is, and any other iterable
    is wrapped so that its iterator is advanced once per node, on demand.
    """
    if coll is None:
        return EMPTY
    if isinstance(coll, Seq):
        return coll
    return _from_iterator(iter(coll))


def is_empty(coll: Iterable[Any] | None) -> bool:
    return seq(coll).is_empty()


def head(coll: Iterable[T] | None) -> T:
    """First element of ``coll``. Raises IndexError when empty."""
    return seq(coll).head


def tail(coll: Iterable[T] | None) -> Seq[T]:
    """Everything after the first element; EMPTY when nothing remains."""
    return seq(coll).tail


def take(n: int, coll: Iterable[T] | None) -> Seq[T]:
    """
    Lazy sequence of at most the first ``n`` elements of ``coll``.

    Element ``n`` itself is never forced, so this is safe on unbounded
    sequences.
    """
    if n < 0:
        raise ValueError(f"take() count must be non-negative, got {n}")

    s = seq(coll)

    def step() -> Seq[T]:
        if n == 0:
            return EMPTY
        if s.is_empty():
            return EMPTY
        return Cons(s.head, take(n - 1, s.tail))

    return LazySeq(step)
