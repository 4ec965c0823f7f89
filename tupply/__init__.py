from typing import LiteralString

import mainpy

from tupply.unpack import Applier, apply, apply_indices, make_applier
from tupply.exceptions import ApplyError, ArityMismatchError
from tupply.main import app
from tupply.sequences import (
    IndexSequence,
    build_index_sequence,
    concat,
    make_integer_sequence,
)

__all__ = (
    "Applier",
    "ApplyError",
    "ArityMismatchError",
    "IndexSequence",
    "__version__",
    "apply",
    "apply_indices",
    "build_index_sequence",
    "concat",
    "make_applier",
    "make_integer_sequence",
)
__version__: LiteralString

_ = mainpy.main(app)


def __getattr__(name: str, /) -> object:
    if name == "__version__":
        from tupply._meta import get_version  # noqa: PLC0415

        return get_version()

    import sys  # noqa: PLC0415

    raise AttributeError(
        f"module {__name__!r} has no attribute {name!r}",
        name=name,
        obj=sys.modules[__name__],
    )


def __dir__() -> list[str]:
    return list(__all__)
