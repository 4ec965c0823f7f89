from typing import Self, override

__all__ = ("ApplyError", "ArityMismatchError")


class ApplyError(Exception):
    pass


class ArityMismatchError(ApplyError, TypeError):
    """Raised when a callable cannot accept the number of elements of a tuple."""

    def __init__(self, /, message: str, arity: int) -> None:
        super().__init__(message)
        self.arity = arity

    @override
    def __reduce__(self, /) -> tuple[type[Self], tuple[str, int]]:
        return type(self), (str(self), self.arity)
