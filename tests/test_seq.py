"""Tests for lazy, memoising sequences."""

import itertools
import pytest
from lazyfold import EMPTY, Cons, LazySeq, lazy, seq, cons, head, tail, is_empty, take


def counting(compute):
    """Wrap a zero-argument compute function and count its calls."""
    calls = []

    def wrapped():
        calls.append(1)
        return compute()

    return wrapped, calls


class TestShapes:
    def test_empty(self):
        assert EMPTY.is_empty()
        assert EMPTY.tail is EMPTY
        assert list(EMPTY) == []

    def test_head_of_empty_raises(self):
        with pytest.raises(IndexError):
            EMPTY.head

    def test_cons(self):
        s = Cons(1, Cons(2, EMPTY))
        assert not s.is_empty()
        assert s.head == 1
        assert s.tail.head == 2
        assert s.tail.tail is EMPTY
        assert list(s) == [1, 2]

    def test_none_is_an_element(self):
        s = seq([None, None])
        assert not s.is_empty()
        assert s.head is None
        assert list(s) == [None, None]


class TestLazySeq:
    def test_deferred_until_observed(self):
        compute, calls = counting(lambda: Cons(1, EMPTY))
        s = lazy(compute)
        assert calls == []
        assert not s.is_realized()
        assert s.head == 1
        assert s.is_realized()
        assert len(calls) == 1

    def test_computes_once(self):
        compute, calls = counting(lambda: Cons(1, EMPTY))
        s = lazy(compute)
        s.is_empty()
        s.head
        s.tail
        assert list(s) == [1]
        assert list(s) == [1]
        assert len(calls) == 1

    def test_lazy_empty(self):
        s = lazy(lambda: EMPTY)
        assert s.is_empty()
        assert list(s) == []

    def test_nested_lazy_unwrapped(self):
        s = lazy(lambda: lazy(lambda: lazy(lambda: Cons("x", EMPTY))))
        assert s.head == "x"
        assert list(s) == ["x"]

    def test_long_lazy_chain_does_not_recurse(self):
        def chain(n):
            if n == 0:
                return lazy(lambda: Cons("end", EMPTY))
            return lazy(lambda: chain(n - 1))

        assert chain(50_000).head == "end"

    def test_failure_not_cached(self):
        attempts = []

        def compute():
            attempts.append(1)
            if len(attempts) == 1:
                raise ValueError("boom")
            return Cons(1, EMPTY)

        s = lazy(compute)
        with pytest.raises(ValueError):
            s.head
        assert s.head == 1
        assert len(attempts) == 2

    def test_repr_does_not_force(self):
        compute, calls = counting(lambda: Cons(1, EMPTY))
        s = lazy(compute)
        assert repr(s) == "(...)"
        assert calls == []
        s.head
        assert repr(s) == "(1)"


class TestCoercion:
    def test_none_is_empty(self):
        assert seq(None) is EMPTY
        assert is_empty(None)

    def test_seq_is_identity(self):
        s = Cons(1, EMPTY)
        assert seq(s) is s

    def test_list(self):
        assert list(seq([1, 2, 3])) == [1, 2, 3]

    def test_not_iterable(self):
        with pytest.raises(TypeError):
            seq(42)

    def test_generator_is_replayable(self):
        gen = (x * x for x in range(4))
        s = seq(gen)
        assert list(s) == [0, 1, 4, 9]
        assert list(s) == [0, 1, 4, 9]

    def test_pulls_one_element_per_node(self):
        pulled = []

        def source():
            for x in range(5):
                pulled.append(x)
                yield x

        s = seq(source())
        assert pulled == []
        assert s.head == 0
        assert pulled == [0]
        assert s.tail.head == 1
        assert pulled == [0, 1]

    def test_helpers(self):
        assert head([7, 8]) == 7
        assert list(tail([7, 8])) == [8]
        assert tail([]) is EMPTY
        assert list(cons(0, [1, 2])) == [0, 1, 2]
        assert list(cons(0, None)) == [0]


class TestTake:
    def test_take_prefix(self):
        assert list(take(3, range(10))) == [0, 1, 2]

    def test_take_more_than_available(self):
        assert list(take(5, [1, 2])) == [1, 2]

    def test_take_zero(self):
        assert list(take(0, [1, 2])) == []

    def test_take_infinite(self):
        assert list(take(4, itertools.count())) == [0, 1, 2, 3]

    def test_take_does_not_force_past_n(self):
        pulled = []

        def source():
            for x in itertools.count():
                pulled.append(x)
                yield x

        assert list(take(2, source())) == [0, 1]
        assert pulled == [0, 1]

    def test_negative(self):
        with pytest.raises(ValueError):
            take(-1, [1])

    def test_isinstance(self):
        assert isinstance(take(1, [1]), LazySeq)
