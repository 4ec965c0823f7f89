import inspect
from collections.abc import Callable, Iterable
from typing import Final, final, override

from ._types import AnyFunction, Invoker
from .codegen import compile_invoker, invoker_for
from .exceptions import ArityMismatchError
from .sequences import (
    IndexSequence,
    _non_negative,  # pyright: ignore[reportPrivateUsage]
)

__all__ = ("Applier", "apply", "apply_indices", "make_applier")


def apply[*Ts, R](f: Callable[[*Ts], R], t: tuple[*Ts], /) -> R:
    """
    Call `f` with the elements of `t` as positional arguments, i.e.
    `f(t[0], t[1], ..., t[n-1])`, and return the result.
    """
    return compile_invoker(len(t))(f, t)  # type: ignore[return-value]


def apply_indices[R](
    f: Callable[..., R],  # type: ignore[no-any-explicit]
    t: tuple[object, ...],
    indices: Iterable[int],
    /,
) -> R:
    """Call `f` with `t[i]` for each `i` in `indices`, in order."""
    return invoker_for(IndexSequence(indices))(f, t)  # type: ignore[return-value]


def _callable_name(f: object, /) -> str:
    return getattr(f, "__qualname__", None) or repr(f)


def _check_arity(f: AnyFunction, arity: int, /) -> None:
    try:
        signature = inspect.signature(f)
    except (TypeError, ValueError):
        # some builtins have no introspectable signature
        return

    try:
        _ = signature.bind(*range(arity))
    except TypeError as e:
        raise ArityMismatchError(
            f"{_callable_name(f)}{signature} cannot be called with {arity} argument(s)",
            arity,
        ) from e


@final
class Applier[*Ts, R]:
    """A callable prepared for invocation with tuples of a fixed arity."""

    __slots__ = "_invoke", "arity", "func"
    __match_args__ = "func", "arity"

    func: Final[Callable[[*Ts], R]]
    arity: Final[int]
    _invoke: Final[Invoker]

    def __init__(self, func: Callable[[*Ts], R], arity: int, /) -> None:
        arity = _non_negative(arity, "arity")
        _check_arity(func, arity)
        self.func = func
        self.arity = arity
        self._invoke = compile_invoker(arity)

    def __call__(self, t: tuple[*Ts], /) -> R:
        if len(t) != self.arity:
            raise ArityMismatchError(
                f"expected a tuple of length {self.arity}, got {len(t)}",
                len(t),
            )
        return self._invoke(self.func, t)  # type: ignore[return-value]

    @override
    def __repr__(self, /) -> str:
        return f"{type(self).__name__}({_callable_name(self.func)}, {self.arity})"


def make_applier[*Ts, R](f: Callable[[*Ts], R], arity: int, /) -> Applier[*Ts, R]:
    """
    Prepare `f` for invocation with tuples of length `arity`.

    Raises:
        ArityMismatchError: if the signature of `f` does not accept `arity` positional
            arguments.
    """
    return Applier(f, arity)
