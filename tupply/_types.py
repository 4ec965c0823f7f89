from collections.abc import Callable

__all__ = ("AnyFunction", "Invoker")


type AnyFunction = Callable[..., object]  # type: ignore[no-any-explicit]
type Invoker = Callable[[AnyFunction, tuple[object, ...]], object]
