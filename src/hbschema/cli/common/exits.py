"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from hbschema.cli.common.output import out

USAGE_EXIT_CODE = 2


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def usage_exit(ctx: typer.Context, msg: str) -> NoReturn:
    """Print an input error followed by the command's usage text."""
    out.error(msg)
    typer.echo(ctx.get_help())
    raise typer.Exit(USAGE_EXIT_CODE)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Print an error message, point at --help, and exit with the given code.

    Chains the original exception so tracebacks stay useful with -vv.
    """
    out.error(message)
    out.hint("Run with --help for usage.")
    raise typer.Exit(code) from exc
