"""Console output abstraction.

Services receive a ``ConsoleProtocol`` instead of printing, so the same run can
render through Rich in a terminal, through GitHub workflow commands on an
Actions runner, or into a MockConsole in tests.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol, TextIO

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "ActionsConsole",
    "MockConsole",
    "OutputRecord",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    SUCCESS = auto()
    ERROR = auto()
    WARNING = auto()
    INFO = auto()
    DIM = auto()
    HEADER = auto()

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    """Protocol for console output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def mask(self, secret: str) -> None:
        """Ensure ``secret`` is never shown in this console's output."""
        ...

    def group(self, title: str) -> AbstractContextManager[None]:
        """Context manager wrapping the output of one reconciliation step."""
        ...


def _redact(message: str, secrets: set[str]) -> str:
    for secret in secrets:
        message = message.replace(secret, "***")
    return message


class RichConsole:
    """Terminal console using Rich."""

    def __init__(self) -> None:
        from rich.console import Console

        self._console = Console(highlight=False)
        self._secrets: set[str] = set()
        self._style_map = {
            Style.DEFAULT: "",
            Style.SUCCESS: "green",
            Style.ERROR: "red bold",
            Style.WARNING: "yellow",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.HEADER: "blue bold",
        }

    def _out(self, message: str, markup_prefix: str = "", style: str = "") -> None:
        from rich.markup import escape

        text = escape(_redact(message, self._secrets))
        if style:
            self._console.print(f"{markup_prefix}{text}", style=style)
        else:
            self._console.print(f"{markup_prefix}{text}")

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._out(message, style=self._style_map.get(style, ""))

    def success(self, message: str) -> None:
        self._out(message, "[green]OK[/green] ")

    def error(self, message: str) -> None:
        self._out(message, "[red bold]error:[/red bold] ")

    def warning(self, message: str) -> None:
        self._out(message, "[yellow]warning:[/yellow] ")

    def info(self, message: str) -> None:
        self._out(message, "[cyan]info:[/cyan] ")

    def mask(self, secret: str) -> None:
        if secret:
            self._secrets.add(secret)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self._out(title, style="blue bold")
        yield


class ActionsConsole:
    """Plain console speaking GitHub Actions workflow commands.

    Errors and warnings become annotations, groups fold in the job log, and
    masked secrets are registered with the runner via ``::add-mask::``.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._secrets: set[str] = set()

    def _write(self, line: str) -> None:
        self._stream.write(_redact(line, self._secrets) + "\n")
        self._stream.flush()

    @staticmethod
    def _escape_data(value: str) -> str:
        return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._write(message)

    def success(self, message: str) -> None:
        self._write(f"OK {message}")

    def error(self, message: str) -> None:
        self._write(f"::error::{self._escape_data(message)}")

    def warning(self, message: str) -> None:
        self._write(f"::warning::{self._escape_data(message)}")

    def info(self, message: str) -> None:
        self._write(message)

    def mask(self, secret: str) -> None:
        if not secret:
            return
        # Registered before it is added to the local redaction set.
        self._write(f"::add-mask::{secret}")
        self._secrets.add(secret)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self._write(f"::group::{title}")
        try:
            yield
        finally:
            self._write("::endgroup::")


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


@dataclass
class MockConsole:
    """Console that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=list[OutputRecord])
    groups: list[str] = field(default_factory=list[str])
    secrets: set[str] = field(default_factory=set[str])

    def _add(self, message: str, style: Style) -> None:
        self.outputs.append(OutputRecord(_redact(message, self.secrets), style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._add(message, style)

    def success(self, message: str) -> None:
        self._add(f"OK {message}", Style.SUCCESS)

    def error(self, message: str) -> None:
        self._add(f"error: {message}", Style.ERROR)

    def warning(self, message: str) -> None:
        self._add(f"warning: {message}", Style.WARNING)

    def info(self, message: str) -> None:
        self._add(f"info: {message}", Style.INFO)

    def mask(self, secret: str) -> None:
        if secret:
            self.secrets.add(secret)

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        self.groups.append(title)
        self._add(title, Style.HEADER)
        yield

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def has_warning(self) -> bool:
        return any(o.style == Style.WARNING for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]
