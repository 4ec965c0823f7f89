# ruff: noqa: UP040
from __future__ import annotations

import difflib
import logging
from pathlib import Path
from typing import Annotated, Final, TypeAlias

import typer

from .codegen import Target, render_module
from .sequences import build_index_sequence

__all__ = ("app",)

_DEFAULT_OUTPUT: Final = Path("-")
_DEFAULT_TARGET: Final = Target.PY312
_DEFAULT_MAX_ARITY: Final = 8


def _version_callback(*, value: bool) -> None:
    if not value:
        return

    from ._meta import get_version  # noqa: PLC0415

    typer.echo(f"tupply {get_version()}")
    raise typer.Exit


def _verbose_callback(*, value: bool) -> None:
    if value:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


_ArgumentLength: TypeAlias = Annotated[
    int,
    typer.Argument(min=0, help="The length of the index sequence."),
]
_ArgumentOutput: TypeAlias = Annotated[
    Path,
    typer.Argument(
        dir_okay=False,
        writable=True,
        allow_dash=True,
        show_default=False,
        help="Path to the output .py file. Defaults to stdout.",
    ),
]
_OptionVersion: TypeAlias = Annotated[
    bool | None,
    typer.Option(
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
]
_OptionVerbose: TypeAlias = Annotated[
    bool,
    typer.Option(
        "--verbose",
        "-v",
        callback=_verbose_callback,
        help="Log the generated code",
    ),
]
_OptionMaxArity: TypeAlias = Annotated[
    int,
    typer.Option(
        "--max-arity",
        "-n",
        min=0,
        help="The largest arity for which an `apply_{n}` function is generated.",
    ),
]
_OptionTarget: TypeAlias = Annotated[
    Target,
    typer.Option(
        "--target",
        help="The minimum Python version that should be supported.",
    ),
]
_OptionDiff: TypeAlias = Annotated[
    bool,
    typer.Option(
        "--diff",
        help="Show the changes to the output in unified diff format",
    ),
]


def _read_existing(output: Path, /) -> str:
    if str(output) == "-" or not output.is_file():
        return ""
    return output.read_text(encoding="utf-8", errors="strict")


def _write_output(output: Path, /, output_str: str) -> None:
    if str(output) == "-":
        typer.echo(output_str, nl=False)
    else:
        _ = output.write_text(output_str, encoding="utf-8")


def _echo_diff(file_in: str, src_in: str, file_out: str, src_out: str) -> None:
    diff_lines = difflib.unified_diff(
        src_in.splitlines(keepends=True),
        src_out.splitlines(keepends=True),
        fromfile=file_in,
        tofile=file_out,
    )
    for line in diff_lines:
        fg = None
        bold = dim = False
        match line[0]:
            case "@" if line[:2] == "@@":
                bold = dim = True
            case "-" if line[:3] == "---":
                dim = True
            case "+" if line[:3] == "+++":
                dim = True
            case "-":
                fg = typer.colors.RED
            case "+":
                fg = typer.colors.GREEN
            case _:
                pass

        # add some space after the diff prefix
        msg = line if dim else f"{line[0]} {line[1:]}"

        typer.secho(msg, fg=fg, bold=bold, dim=dim, nl=False)


app: Final = typer.Typer(
    name="tupply",
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback()  # type: ignore[no-any-expr]
def main(
    *,
    version: _OptionVersion = None,
    verbose: _OptionVerbose = False,  # noqa: ARG001
) -> None:
    """Unpack tuples into function calls, one generated invoker per arity."""
    assert not version


@app.command()  # type: ignore[no-any-expr]
def indices(n: _ArgumentLength) -> None:
    """Print the index sequence 0..N-1."""
    typer.echo(" ".join(map(str, build_index_sequence(n))))


@app.command()  # type: ignore[no-any-expr]
def render(
    output: _ArgumentOutput = _DEFAULT_OUTPUT,
    *,
    max_arity: _OptionMaxArity = _DEFAULT_MAX_ARITY,
    target: _OptionTarget = _DEFAULT_TARGET,
    diff: _OptionDiff = False,
) -> None:
    """Generate a module with a typed `apply_{n}` function for each arity."""
    if str(output) != "-" and output.suffix not in {".py", ".pyi"}:
        typer.echo("Output must be a .py or .pyi file", err=True)
        raise typer.Exit(1)

    output_str = render_module(max_arity, target=target)

    if diff:
        name = str(output)
        _echo_diff(name, _read_existing(output), name, output_str)

        if output == _DEFAULT_OUTPUT:
            return

    _write_output(output, output_str)
