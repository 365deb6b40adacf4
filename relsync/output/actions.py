"""GitHub Actions step outputs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from uuid import uuid4

from relsync.core.result import Err, Ok, Result
from relsync.release.errors import ReleaseError

__all__ = ["running_in_actions", "format_output", "write_outputs"]


def running_in_actions(env: Mapping[str, str] | None = None) -> bool:
    env = os.environ if env is None else env
    return env.get("GITHUB_ACTIONS", "").lower() == "true"


def format_output(name: str, value: str) -> str:
    """Render one ``GITHUB_OUTPUT`` entry, using a heredoc for multi-line values."""
    if "\n" not in value and "\r" not in value:
        return f"{name}={value}\n"
    delimiter = f"ghadelimiter_{uuid4().hex}"
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(
    outputs: Mapping[str, str], env: Mapping[str, str] | None = None
) -> Result[Path | None, ReleaseError]:
    """Append outputs to the file named by ``GITHUB_OUTPUT``.

    Returns the file written, or None when not running under a runner that
    provides an output file.
    """
    env = os.environ if env is None else env
    target = env.get("GITHUB_OUTPUT", "").strip()
    if not target:
        return Ok(None)

    path = Path(target)
    try:
        with path.open("a", encoding="utf-8") as handle:
            for name, value in outputs.items():
                handle.write(format_output(name, value))
    except OSError as e:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"cannot write step outputs to {path}: {e.strerror}",
                hint="GITHUB_OUTPUT must name a writable file.",
            )
        )
    return Ok(path)
