from __future__ import annotations

import pytest

from relsync.core.result import Err, Ok, Result
from relsync.github.mock import MockRepoApi
from relsync.github.model import RemoteRelease
from relsync.output.console import MockConsole
from relsync.release.errors import ReleaseError
from relsync.services.releases import (
    ReleaseOutcome,
    ensure_release,
    find_release,
    require_release,
    resolve_body,
)


def _ensure(
    api: MockRepoApi,
    console: MockConsole | None = None,
    *,
    body: str = "",
    draft: bool = False,
    prerelease: bool = True,
) -> Result[ReleaseOutcome, ReleaseError]:
    return ensure_release(
        api,
        release_name="nightly",
        tag_name="nightly",
        body=body,
        draft=draft,
        prerelease=prerelease,
        commit_sha="c0ffee",
        console=console or MockConsole(),
    )


def test_find_release_exact_match() -> None:
    api = MockRepoApi()
    api.add_release(name="nightly-old", tag_name="x")
    wanted = api.add_release(name="nightly", tag_name="nightly")

    assert find_release(api, "nightly") == Ok(wanted)
    assert find_release(api, "Nightly") == Ok(None)


def test_find_release_first_match_wins() -> None:
    api = MockRepoApi()
    first = api.add_release(name="dup", tag_name="a")
    api.add_release(name="dup", tag_name="b")

    assert find_release(api, "dup") == Ok(first)


def test_require_release_missing() -> None:
    result = require_release(MockRepoApi(), "ghost")
    assert isinstance(result, Err)
    assert result.error.kind == "not_found"
    assert result.error.message == "could not find release ghost"


def test_resolve_body_prefers_input() -> None:
    api = MockRepoApi(commit_messages={"c0ffee": "commit msg"})
    assert resolve_body(api, body="given", commit_sha="c0ffee") == Ok("given")
    assert api.calls == []


def test_resolve_body_falls_back_to_commit_message() -> None:
    api = MockRepoApi(commit_messages={"c0ffee": "Fix build\n\nLonger text"})
    assert resolve_body(api, body="", commit_sha="c0ffee") == Ok("Fix build\n\nLonger text")


def test_creates_missing_release() -> None:
    api = MockRepoApi(commit_messages={"c0ffee": "commit msg"})
    console = MockConsole()

    result = _ensure(api, console)

    assert isinstance(result, Ok)
    assert result.value.created is True
    release = api.release_named("nightly")
    assert release is not None
    assert result.value.release_id == release.id
    assert release.body == "commit msg"
    assert release.prerelease is True
    assert console.groups == ["Creating release nightly..."]


def test_updates_existing_release() -> None:
    api = MockRepoApi()
    existing = api.add_release(name="nightly", tag_name="nightly", body="old", draft=True)
    console = MockConsole()

    result = _ensure(api, console, body="new body", draft=False, prerelease=False)

    assert isinstance(result, Ok)
    assert result.value.created is False
    assert result.value.release_id == existing.id
    assert api.mutations == ["update_release"]
    updated = api.release_named("nightly")
    assert updated is not None
    assert (updated.body, updated.draft, updated.prerelease) == ("new body", False, False)
    assert console.groups == [f"Updating release nightly ({existing.id})..."]


def test_update_uses_commit_message_when_body_empty() -> None:
    api = MockRepoApi(commit_messages={"c0ffee": "from commit"})
    api.add_release(name="nightly", tag_name="nightly", body="old")

    _ensure(api)

    updated = api.release_named("nightly")
    assert updated is not None
    assert updated.body == "from commit"


def test_update_does_not_retarget_tag() -> None:
    api = MockRepoApi()
    api.add_release(name="nightly", tag_name="other-tag")
    console = MockConsole()

    _ensure(api, console, body="b")

    release = api.release_named("nightly")
    assert release is not None
    assert release.tag_name == "other-tag"
    assert console.find("release points at tag other-tag")


def test_converges_after_two_runs() -> None:
    api = MockRepoApi()

    first = _ensure(api, body="b")
    second = _ensure(api, body="b")

    assert isinstance(first, Ok)
    assert isinstance(second, Ok)
    assert first.value.release_id == second.value.release_id
    assert [r.name for r in api.releases] == ["nightly"]
    assert api.mutations == ["create_release", "update_release"]


def test_create_failure() -> None:
    api = MockRepoApi()
    api.fail("create_release", ReleaseError(kind="remote_failed", message="create release failed"))

    result = _ensure(api, body="b")

    assert isinstance(result, Err)
    assert result.error.message == "create release failed"


def test_release_missing_after_create(monkeypatch: pytest.MonkeyPatch) -> None:
    """A release not listed by name after the mutation is an error."""
    api = MockRepoApi()
    seen: list[int] = []
    real_list = api.list_releases

    def list_without_new() -> Result[list[RemoteRelease], ReleaseError]:
        seen.append(1)
        if len(seen) > 1:
            return Ok([])
        return real_list()

    monkeypatch.setattr(api, "list_releases", list_without_new)

    result = _ensure(api, body="b")

    assert isinstance(result, Err)
    assert result.error.kind == "not_found"
