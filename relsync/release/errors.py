"""Error payload for the release bounded context."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "invalid_input",
    "file_not_found",
    "not_found",
    "remote_failed",
]

FAILURE_PREFIX = "An error occurred while updating the release:"


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical failure payload.

    ``status`` and ``url`` are set when the failure came from an HTTP call.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    status: int | None = None
    url: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message

    def as_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {"kind": self.kind, "message": self.message}
        if self.hint is not None:
            payload["hint"] = self.hint
        if self.status is not None:
            payload["status"] = self.status
        if self.url is not None:
            payload["url"] = self.url
        return payload

    def render(self) -> str:
        """Human-readable failure report: static prefix plus the JSON payload."""
        return f"{FAILURE_PREFIX}\n{json.dumps(self.as_payload(), indent=4)}"
