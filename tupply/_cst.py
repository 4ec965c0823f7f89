from collections.abc import Iterable
from typing import TypeAlias

import libcst as cst

__all__ = [
    "parse_call",
    "parse_index",
    "parse_list",
    "parse_param",
    "parse_str",
    "parse_subscript",
    "parse_tuple",
]

# PEP 695 "syntax" breaks `isinstance`
_Expr: TypeAlias = cst.BaseExpression | str


def _name_or_expr[T: cst.BaseExpression](value: T | str, /) -> T | cst.Name:
    return cst.Name(value) if isinstance(value, str) else value


def parse_str(value: str, /) -> cst.SimpleString:
    return cst.SimpleString(f'"{value}"')


def parse_index(value: int, /) -> cst.Integer:
    return cst.Integer(str(value))


def parse_tuple(exprs: Iterable[_Expr], /) -> cst.Tuple:
    return cst.Tuple([cst.Element(_name_or_expr(el)) for el in exprs])


def parse_list(exprs: Iterable[_Expr], /) -> cst.List:
    return cst.List([cst.Element(_name_or_expr(el)) for el in exprs])


def parse_call(func: _Expr, /, *args: _Expr) -> cst.Call:
    return cst.Call(_name_or_expr(func), [cst.Arg(_name_or_expr(a)) for a in args])


def parse_subscript(base: _Expr, /, *ixs: _Expr) -> cst.Subscript:
    elems = [cst.SubscriptElement(cst.Index(_name_or_expr(ix))) for ix in ixs]
    return cst.Subscript(_name_or_expr(base), elems)


def parse_param(name: str, annotation: _Expr | None = None, /) -> cst.Param:
    if annotation is None:
        return cst.Param(cst.Name(name))
    return cst.Param(cst.Name(name), cst.Annotation(_name_or_expr(annotation)))
