import sys

import pytest
from tupply.sequences import (
    IndexSequence,
    _build,  # pyright: ignore[reportPrivateUsage]
    build_index_sequence,
    concat,
    make_integer_sequence,
)


def test_build_empty():
    seq = build_index_sequence(0)
    assert seq == ()
    assert seq.size == 0
    assert repr(seq) == "IndexSequence()"


def test_build_single():
    assert build_index_sequence(1) == (0,)


def test_build_five():
    seq = build_index_sequence(5)
    assert isinstance(seq, IndexSequence)
    assert seq == (0, 1, 2, 3, 4)
    assert repr(seq) == "IndexSequence(0, 1, 2, 3, 4)"


@pytest.mark.parametrize("n", [*range(40), 127, 128, 129, 1000])
def test_build_is_range(n: int):
    assert build_index_sequence(n) == tuple(range(n))


def test_build_depth_is_logarithmic():
    # a linear recursion would blow the stack here
    n = 4 * sys.getrecursionlimit()
    assert build_index_sequence(n) == tuple(range(n))


def test_build_cached():
    assert build_index_sequence(17) is build_index_sequence(17)


def test_build_index_protocol():
    assert build_index_sequence(True) == (0,)


@pytest.mark.parametrize("n", [-1, -42])
def test_build_negative(n: int):
    with pytest.raises(ValueError, match="non-negative"):
        _ = build_index_sequence(n)


@pytest.mark.parametrize("n", [2.0, "3", None])
def test_build_not_an_index(n: object):
    with pytest.raises(TypeError):
        _ = build_index_sequence(n)  # type: ignore[arg-type]  # pyright: ignore[reportArgumentType]


def test_concat_offsets_right():
    a = IndexSequence((0, 1))
    b = IndexSequence((0, 1, 2))
    assert concat(a, b) == (0, 1, 2, 3, 4)


def test_concat_arbitrary_values():
    a = IndexSequence((3, 1))
    b = IndexSequence((1, 0))
    assert concat(a, b) == (3, 1, 3, 2)


@pytest.mark.parametrize(("m", "n"), [(0, 0), (0, 3), (3, 0), (2, 5), (7, 7)])
def test_concat_lengths(m: int, n: int):
    a, b = build_index_sequence(m), build_index_sequence(n)
    c = concat(a, b)
    assert isinstance(c, IndexSequence)
    assert len(c) == m + n
    assert c[:m] == a
    assert c[m:] == tuple(i + m for i in b)
    assert c == build_index_sequence(m + n)


@pytest.mark.parametrize(("l", "m", "n"), [(0, 0, 0), (1, 2, 3), (4, 0, 2), (3, 3, 3)])
def test_concat_associative(l: int, m: int, n: int):  # noqa: E741
    a, b, c = map(build_index_sequence, (l, m, n))
    assert concat(concat(a, b), c) == concat(a, concat(b, c))


def test_integer_sequence():
    assert make_integer_sequence(3) == (0, 1, 2)
    assert make_integer_sequence(3, start=4) == (4, 5, 6)
    assert make_integer_sequence(0, start=9) == ()
    assert isinstance(make_integer_sequence(2, start=1), IndexSequence)


def test_integer_sequence_negative_start():
    with pytest.raises(ValueError, match="start"):
        _ = make_integer_sequence(2, start=-1)


def test_immutable():
    seq = build_index_sequence(3)
    with pytest.raises(TypeError):
        seq[0] = 1  # type: ignore[index]  # pyright: ignore[reportIndexIssue]


def test_integer_sequence_large_start_not_cached():
    _build.cache_clear()
    assert make_integer_sequence(1, start=2_000_000) == (2_000_000,)
    assert make_integer_sequence(2, start=1_000_000) == (1_000_000, 1_000_001)
    assert _build.cache_info().currsize < 10


@pytest.mark.parametrize("values", [(-1,), (0, 1, -3)])
def test_index_sequence_negative(values: tuple[int, ...]):
    with pytest.raises(ValueError, match="index must be non-negative"):
        _ = IndexSequence(values)


@pytest.mark.parametrize("values", [("x",), (0, 1.0), (None,)])
def test_index_sequence_not_an_index(values: tuple[object, ...]):
    with pytest.raises(TypeError):
        _ = IndexSequence(values)  # type: ignore[arg-type]  # pyright: ignore[reportArgumentType]


def test_index_sequence_coerces_bools():
    seq = IndexSequence((True, False))
    assert seq == (1, 0)
    assert all(type(i) is int for i in seq)
    assert repr(seq) == "IndexSequence(1, 0)"
