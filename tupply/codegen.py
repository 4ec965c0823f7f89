"""
Generation of the functions that splice the elements of a tuple into a call.

For an index sequence `(0, 1, 2)` the generated invoker reads

    def _invoke_3(f, t, /):
        return f(t[0], t[1], t[2])

so that, once generated, an invocation runs without loops or branching.
"""

import enum
import functools
import logging
from collections.abc import Iterable, Sequence
from typing import Final

import libcst as cst

from . import _cst as uncst
from ._types import Invoker
from .sequences import IndexSequence, build_index_sequence

__all__ = (
    "Target",
    "compile_invoker",
    "invoker_def",
    "invoker_for",
    "render_module",
)

_logger: Final = logging.getLogger(__name__)

_NAME_FUNC: Final = "f"
_NAME_ARGS: Final = "t"
_NAME_RETURN: Final = "R"
_NAME_CALLABLE: Final = "Callable"
_NAME_TVAR: Final = "TypeVar"
_PREFIX_APPLY: Final = "apply_"
_PREFIX_INVOKE: Final = "_invoke_"
_INVOKER_CACHE_SIZE: Final = 256


class Target(enum.StrEnum):
    PY310 = "3.10"
    PY311 = "3.11"
    PY312 = "3.12"
    PY313 = "3.13"

    @property
    def version(self, /) -> tuple[int, int]:
        major, minor = map(int, self.value.split("."))
        return major, minor

    @property
    def pep695(self, /) -> bool:
        """Whether the target supports `def f[T](...)` type parameter syntax."""
        return self.version >= (3, 12)


def _typevar_name(i: int, /) -> str:
    return f"T{i}"


def _typevar_names(arity: int, /) -> list[str]:
    return [_typevar_name(i) for i in range(arity)]


def _type_parameters(names: Iterable[str], /) -> cst.TypeParameters:
    return cst.TypeParameters([cst.TypeParam(cst.TypeVar(cst.Name(n))) for n in names])


def _call_expr(indices: IndexSequence, /) -> cst.Call:
    args = [uncst.parse_subscript(_NAME_ARGS, uncst.parse_index(i)) for i in indices]
    return uncst.parse_call(_NAME_FUNC, *args)


def invoker_def(
    indices: Iterable[int],
    /,
    *,
    name: str,
    annotated: bool = False,
    pep695: bool = True,
) -> cst.FunctionDef:
    """
    Build the function `name(f, t, /)` that returns `f(t[i], ...)` for `i` in
    `indices`, in order.

    If `annotated`, the function is generic in the element types `T0, T1, ...` and the
    return type `R`. Type parameters are declared inline with PEP 695 syntax, unless
    `pep695` is false, in which case the type variables are assumed to be declared at
    module level.
    """
    indices = IndexSequence(indices)
    stmt = cst.SimpleStatementLine([cst.Return(_call_expr(indices))])
    body = cst.IndentedBlock([stmt])

    if not annotated:
        params = [uncst.parse_param(_NAME_FUNC), uncst.parse_param(_NAME_ARGS)]
        return cst.FunctionDef(
            cst.Name(name),
            cst.Parameters(posonly_params=params),
            body,
        )

    if indices != build_index_sequence(indices.size):
        raise ValueError(f"cannot annotate an invoker for {indices!r}")

    arg_types = _typevar_names(indices.size)
    func_type = uncst.parse_subscript(
        _NAME_CALLABLE,
        uncst.parse_list(arg_types),
        _NAME_RETURN,
    )
    if arg_types:
        args_type = uncst.parse_subscript("tuple", *arg_types)
    else:
        args_type = uncst.parse_subscript("tuple", uncst.parse_tuple([]))

    params = [
        uncst.parse_param(_NAME_FUNC, func_type),
        uncst.parse_param(_NAME_ARGS, args_type),
    ]
    tparams = _type_parameters([*arg_types, _NAME_RETURN]) if pep695 else None
    return cst.FunctionDef(
        cst.Name(name),
        cst.Parameters(posonly_params=params),
        body,
        returns=cst.Annotation(cst.Name(_NAME_RETURN)),
        type_parameters=tparams,
    )


@functools.lru_cache(maxsize=_INVOKER_CACHE_SIZE)  # type: ignore[no-any-expr]
def invoker_for(indices: IndexSequence, /) -> Invoker:
    """Generate and compile the (unannotated) invoker for the given indices."""
    name = f"{_PREFIX_INVOKE}{len(indices)}"
    code = cst.Module([invoker_def(indices, name=name)]).code
    _logger.debug("generated invoker for %r:\n%s", indices, code)

    namespace: dict[str, object] = {}
    exec(compile(code, f"<tupply {name}>", "exec"), namespace)  # noqa: S102
    return namespace[name]  # type: ignore[return-value]


@functools.cache  # type: ignore[no-any-expr]
def compile_invoker(n: int, /) -> Invoker:
    """Return the invoker that unpacks a tuple of length `n` as `n` arguments."""
    return invoker_for(build_index_sequence(n))


def _import_from(module: str, name: str, /) -> cst.SimpleStatementLine:
    return cst.SimpleStatementLine([
        cst.ImportFrom(
            module=cst.parse_expression(module),  # type: ignore[arg-type]
            names=[cst.ImportAlias(cst.Name(name))],
        ),
    ])


def _assign(
    target: str,
    value: cst.BaseExpression,
    /,
    leading_lines: Sequence[cst.EmptyLine] = (),
) -> cst.SimpleStatementLine:
    return cst.SimpleStatementLine(
        [cst.Assign([cst.AssignTarget(cst.Name(target))], value)],
        leading_lines=leading_lines,
    )


def render_module(max_arity: int, /, *, target: Target = Target.PY312) -> str:
    """
    Render the source of a module that defines a typed `apply_{n}` function for each
    arity `n` in `0..max_arity`.
    """
    if max_arity < 0:
        raise ValueError(f"max_arity must be non-negative, got {max_arity}")

    names = [f"{_PREFIX_APPLY}{n}" for n in range(max_arity + 1)]
    blank = [cst.EmptyLine()]

    body: list[cst.SimpleStatementLine | cst.BaseCompoundStatement] = [
        _import_from("collections.abc", _NAME_CALLABLE),
    ]
    if not target.pep695:
        body.append(_import_from("typing", _NAME_TVAR))

    dunder_all = uncst.parse_tuple(map(uncst.parse_str, names))
    body.append(_assign("__all__", dunder_all, leading_lines=blank))

    if not target.pep695:
        for i, tvar in enumerate([*_typevar_names(max_arity), _NAME_RETURN]):
            value = uncst.parse_call(_NAME_TVAR, uncst.parse_str(tvar))
            body.append(_assign(tvar, value, leading_lines=blank if i == 0 else []))

    for n, name in enumerate(names):
        fdef = invoker_def(
            build_index_sequence(n),
            name=name,
            annotated=True,
            pep695=target.pep695,
        )
        body.append(fdef.with_changes(leading_lines=blank * 2))

    comment = cst.Comment(f"# generated by tupply for Python >= {target}")
    header = [cst.EmptyLine(comment=comment)]
    return cst.Module(body, header=header).code
