"""
Index sequences: the ascending integers `0..N-1` that drive positional unpacking.

Sequences are built by splitting the length in two halves and concatenating the
halves with an offset, so the recursion depth is logarithmic in the length.
"""

import functools
import operator
from collections.abc import Iterable
from typing import SupportsIndex, final, override

__all__ = (
    "IndexSequence",
    "build_index_sequence",
    "concat",
    "make_integer_sequence",
)


@final
class IndexSequence(tuple[int, ...]):  # noqa: SLOT001
    __slots__ = ()

    def __new__(cls, values: Iterable[SupportsIndex] = (), /) -> "IndexSequence":
        indices = (_non_negative(i, "index") for i in values)
        return super().__new__(cls, indices)

    @property
    def size(self, /) -> int:
        return len(self)

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}({', '.join(map(str, self))})"


def concat(a: IndexSequence, b: IndexSequence, /) -> IndexSequence:
    """
    Concatenate two index sequences, shifting the values of `b` by `len(a)`.

    If `a` is `0..m-1` and `b` is `0..n-1`, the result is `0..m+n-1`.
    """
    offset = len(a)
    return IndexSequence((*a, *(offset + i for i in b)))


def _non_negative(n: SupportsIndex, /, name: str = "n") -> int:
    i = operator.index(n)
    if i < 0:
        raise ValueError(f"{name} must be non-negative, got {i}")
    return i


@functools.cache  # type: ignore[no-any-expr]
def _build(n: int, /) -> IndexSequence:
    match n:
        case 0:
            return IndexSequence()
        case 1:
            return IndexSequence((0,))
        case _:
            low = n // 2
            return concat(_build(low), _build(n - low))


def build_index_sequence(n: SupportsIndex, /) -> IndexSequence:
    """Return the index sequence `0, 1, ..., n-1`."""
    return _build(_non_negative(n))


def make_integer_sequence(
    n: SupportsIndex,
    /,
    start: SupportsIndex = 0,
) -> IndexSequence:
    """Return the `n` consecutive integers starting at `start`."""
    n, start = _non_negative(n), _non_negative(start, "start")
    return IndexSequence(start + i for i in _build(n))
