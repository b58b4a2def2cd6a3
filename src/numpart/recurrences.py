# src/numpart/recurrences.py
# Partition numbers p(n) via Euler's pentagonal number recurrence.

from __future__ import annotations

import operator
from collections.abc import Callable, Iterable, Iterator, Mapping
from itertools import count, islice, takewhile
from types import MappingProxyType
from typing import Any

import gmpy2

from numpart.utility import typename


def _as_int(n: Any, what: str) -> int:
    if isinstance(n, bool):
        raise ValueError(f"{what} must be an integer, got bool")
    try:
        return operator.index(n)
    except TypeError:
        raise ValueError(f"{what} must be an integer, got {typename(n)}") from None


def _as_index(n: Any, what: str = "partition index") -> int:
    """Coerce n to a non-negative Python int or raise ValueError."""
    k = _as_int(n, what)
    if k < 0:
        raise ValueError(f"{what} must be non-negative, got {k}")
    return k


def resolve_backend(backend: str | Callable[[int], Any] = "int") -> Callable[[int], Any]:
    """
    Map a backend name to the constructor of the element type.

    "int"   → built-in int
    "gmpy2" → gmpy2.mpz
    A callable must turn a Python int into an exact integer (anything with __index__).
    """
    if callable(backend):
        try:
            one = backend(1)
            exact = (
                not isinstance(one, bool)
                and operator.index(backend(0)) == 0
                and operator.index(one) == 1
            )
        except (TypeError, ValueError):
            exact = False
        if not exact:
            raise ValueError(f"backend {backend!r} must produce exact integers")
        return backend
    name = str(backend).strip().lower()
    if name in ("int", "python"):
        return int
    if name in ("gmpy2", "mpz"):
        return gmpy2.mpz
    raise ValueError(f"unknown backend {backend!r} (expected 'int' or 'gmpy2')")


# --- Pentagonal numbers ------------------------------------------------------

def pentagonal_indices() -> Iterator[int]:
    """Infinite indices of the generalized pentagonal numbers: 0, 1, -1, 2, -2, 3, -3, ..."""
    yield 0
    for i in count(1):
        yield i
        yield -i


def pent(k: int) -> int:
    """
    Generalized pentagonal number (3k² − k) / 2.

    k(3k − 1) is always even, so the division is exact.
    >>> pent(2), pent(-2)
    (5, 7)
    """
    return (3 * k * k - k) // 2


def pentagonal_numbers() -> Iterator[int]:
    """Infinite, strictly increasing: 0, 1, 2, 5, 7, 12, 15, 22, 26, 35, ..."""
    return map(pent, pentagonal_indices())


def pentagonal_signs(values: Iterable[Any]) -> list[Any]:
    """
    Apply the recurrence's sign pattern +, +, −, −, +, +, ... to values.

    The sign of position i is + when (i // 2) is even; a trailing unpaired
    element takes the sign of its pair.
    >>> pentagonal_signs([1, 2, 3, 4, 5])
    [1, 2, -3, -4, 5]
    """
    return [x if (i // 2) % 2 == 0 else -x for i, x in enumerate(values)]


# --- Partition numbers -------------------------------------------------------

class PartitionSequence:
    """
    Lazy, memoized sequence p(0), p(1), p(2), ...

    p(n) = p(n-1) + p(n-2) - p(n-5) - p(n-7) + p(n-12) + p(n-15) - ...

    Every instance owns its memo; values are appended in increasing n and never
    rewritten. Iterating the instance yields p(0), p(1), ... once; random access
    via value(n) / seq[n] extends the memo as far as needed.
    """

    def __init__(
        self,
        backend: str | Callable[[int], Any] = "int",
        *,
        on_lookup: Callable[[int, int], None] | None = None,
    ):
        self._make = resolve_backend(backend)
        self._zero = self._make(0)
        self._memo: dict[int, Any] = {0: self._make(1)}
        self._pos = 0
        self._on_lookup = on_lookup

    def __repr__(self) -> str:
        backend = getattr(self._make, "__name__", self._make)
        return f"{type(self).__name__}(backend={backend!r}, computed={self.computed})"

    # iteration: p(0), p(1), ...
    def __iter__(self) -> PartitionSequence:
        return self

    def __next__(self) -> Any:
        value = self.value(self._pos)
        self._pos += 1
        return value

    def __getitem__(self, key):
        if isinstance(key, slice):
            if key.stop is None:
                raise ValueError("slice of an infinite sequence needs a stop")
            start, stop, step = key.start or 0, key.stop, 1 if key.step is None else key.step
            if step == 0:
                raise ValueError("slice step cannot be zero")
            return [self.value(i) for i in range(_as_index(start), _as_index(stop), step)]
        return self.value(key)

    @property
    def computed(self) -> int:
        """Number of values held in the memo."""
        return len(self._memo)

    @property
    def memo(self) -> Mapping[int, Any]:
        return MappingProxyType(self._memo)

    def next_value(self) -> Any:
        """Compute p(n) for the first n not yet in the memo, store it and return it."""
        n = len(self._memo)
        memo = self._memo
        terms = []
        # the leading 0 would repeat p(n) itself
        for g in takewhile(lambda g: n - g >= 0, islice(pentagonal_numbers(), 1, None)):
            if self._on_lookup is not None:
                self._on_lookup(n, n - g)
            terms.append(memo[n - g])
        value = sum(pentagonal_signs(terms), self._zero)
        memo[n] = value
        return value

    def value(self, n: int) -> Any:
        """p(n), extending the memo up to n if needed."""
        n = _as_index(n)
        while len(self._memo) <= n:
            self.next_value()
        return self._memo[n]

    def take(self, count: int) -> list[Any]:
        """[p(0), ..., p(count-1)]."""
        count = _as_index(count, "count")
        if count:
            self.value(count - 1)
        return [self._memo[i] for i in range(count)]

    def index_of(self, m: int) -> int | None:
        """
        Smallest k with p(k) == m, or None when m is not a partition number.
        Extends the memo only until p(k) >= m.
        """
        m = _as_int(m, "value")
        if m < 1:
            return None
        for k in count():
            v = self.value(k)
            if v == m:
                return k
            if v > m:
                return None


def partition_values(backend: str | Callable[[int], Any] = "int") -> Iterator[Any]:
    """Infinite p(0), p(1), p(2), ... from a fresh memo."""
    yield from PartitionSequence(backend)


def partition(n: int, backend: str | Callable[[int], Any] = "int") -> Any:
    """p(n) from a fresh memo."""
    return PartitionSequence(backend).value(n)


def is_partition_number(m: int) -> tuple[bool, str | None]:
    """
    Returns (True, details) if m == p(k) for some k ≥ 0.
    """
    if m < 1:
        return False, None
    k = PartitionSequence().index_of(m)
    if k is None:
        return False, None
    if k == 0:
        return True, f"{m} = p(0) = p(1)."
    return True, f"{m} = p({k})."
