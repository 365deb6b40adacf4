"""Shared helpers for CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from relsync.core.errors import exit_code_for_kind
from relsync.core.result import Err, Ok, Result
from relsync.release.contracts import ReleaseSpec
from relsync.release.errors import ReleaseError

if TYPE_CHECKING:
    from relsync.cli.context import CLIContext

T = TypeVar("T")


def exit_on_error(result: Result[T, ReleaseError], ctx: CLIContext) -> T:
    """Return the value of ``result`` or report the error and exit.

    The exit code follows the error kind: input errors exit 1, everything
    else exits 2.
    """
    if isinstance(result, Err):
        report_error(result.error, ctx)
        exit_with_code(int(exit_code_for_kind(result.error.kind)))
    assert isinstance(result, Ok)
    return result.value


def report_error(error: ReleaseError, ctx: CLIContext) -> None:
    ctx.console.error(error.render())


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def flag(value: bool) -> str:
    return "true" if value else "false"


def spec_outputs(spec: ReleaseSpec) -> dict[str, str]:
    """Step outputs describing the resolved release."""
    return {
        "release": spec.release_name,
        "tag": spec.tag_name,
        "draft": flag(spec.draft),
        "prerelease": flag(spec.prerelease),
        "files": json.dumps([p.as_posix() for p in spec.files]),
    }

