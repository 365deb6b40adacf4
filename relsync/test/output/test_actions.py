from __future__ import annotations

from pathlib import Path

from relsync.core.result import Err, Ok
from relsync.output.actions import format_output, running_in_actions, write_outputs


def test_running_in_actions() -> None:
    assert running_in_actions({"GITHUB_ACTIONS": "true"})
    assert running_in_actions({"GITHUB_ACTIONS": "TRUE"})
    assert not running_in_actions({})
    assert not running_in_actions({"GITHUB_ACTIONS": "false"})


def test_format_single_line() -> None:
    assert format_output("release", "nightly") == "release=nightly\n"


def test_format_multi_line_uses_heredoc() -> None:
    rendered = format_output("body", "a\nb")
    header, first, second, footer, trailing = rendered.split("\n")
    assert header.startswith("body<<ghadelimiter_")
    assert footer == header.split("<<", 1)[1]
    assert (first, second, trailing) == ("a", "b", "")


def test_write_outputs_appends(tmp_path: Path) -> None:
    target = tmp_path / "output.txt"
    target.write_text("existing=1\n", encoding="utf-8")

    result = write_outputs(
        {"release": "nightly", "draft": "false"}, env={"GITHUB_OUTPUT": str(target)}
    )

    assert result == Ok(target)
    assert target.read_text(encoding="utf-8") == "existing=1\nrelease=nightly\ndraft=false\n"


def test_write_outputs_without_runner() -> None:
    assert write_outputs({"release": "nightly"}, env={}) == Ok(None)


def test_write_outputs_unwritable_target(tmp_path: Path) -> None:
    """A directory in GITHUB_OUTPUT is reported, not raised."""
    result = write_outputs({"release": "nightly"}, env={"GITHUB_OUTPUT": str(tmp_path)})

    assert isinstance(result, Err)
    assert result.error.kind == "invalid_input"
    assert str(tmp_path) in result.error.message
