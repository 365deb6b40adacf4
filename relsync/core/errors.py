"""Process exit codes.

The values are part of the tool's contract with CI runners and must stay stable:
- 0: Release, tag and assets converged
- 1: Input error (missing configuration, file not found)
- 2: Reconciliation aborted (remote call failed, remote object missing)
"""

from enum import IntEnum

__all__ = ["ErrorCode", "exit_code_for_kind"]


class ErrorCode(IntEnum):
    """Exit codes for the relsync CLI."""

    OK = 0
    INPUT_ERROR = 1
    RECONCILE_ERROR = 2

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


_INPUT_KINDS = frozenset({"invalid_input", "file_not_found"})


def exit_code_for_kind(kind: str) -> ErrorCode:
    """Map a ``ReleaseError.kind`` to the exit code the CLI should use."""
    if kind in _INPUT_KINDS:
        return ErrorCode.INPUT_ERROR
    return ErrorCode.RECONCILE_ERROR
