"""Tests for exit codes and error payloads."""

import json

import pytest

from relsync.core.errors import ErrorCode, exit_code_for_kind
from relsync.release.errors import FAILURE_PREFIX, ReleaseError


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert int(ErrorCode.OK) == 0
        assert int(ErrorCode.INPUT_ERROR) == 1
        assert int(ErrorCode.RECONCILE_ERROR) == 2

    def test_str(self) -> None:
        assert str(ErrorCode.INPUT_ERROR) == "input error"

    def test_is_success(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.RECONCILE_ERROR.is_success


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("invalid_input", ErrorCode.INPUT_ERROR),
        ("file_not_found", ErrorCode.INPUT_ERROR),
        ("not_found", ErrorCode.RECONCILE_ERROR),
        ("remote_failed", ErrorCode.RECONCILE_ERROR),
    ],
)
def test_exit_code_for_kind(kind: str, code: ErrorCode) -> None:
    assert exit_code_for_kind(kind) == code


class TestReleaseError:
    def test_pretty_without_hint(self) -> None:
        error = ReleaseError(kind="not_found", message="could not find release nightly")
        assert error.pretty() == "could not find release nightly"

    def test_pretty_with_hint(self) -> None:
        error = ReleaseError(
            kind="invalid_input", message="missing input: sha", hint="set GITHUB_SHA"
        )
        assert error.pretty() == "missing input: sha (hint: set GITHUB_SHA)"

    def test_payload_skips_unset_fields(self) -> None:
        error = ReleaseError(kind="not_found", message="gone")
        assert error.as_payload() == {"kind": "not_found", "message": "gone"}

    def test_render_has_prefix_and_json(self) -> None:
        error = ReleaseError(
            kind="remote_failed",
            message="delete asset 7 failed: Not Found",
            status=404,
            url="https://api.github.com/repos/o/r/releases/assets/7",
        )
        first, rest = error.render().split("\n", 1)
        assert first == FAILURE_PREFIX
        assert json.loads(rest) == {
            "kind": "remote_failed",
            "message": "delete asset 7 failed: Not Found",
            "status": 404,
            "url": "https://api.github.com/repos/o/r/releases/assets/7",
        }
