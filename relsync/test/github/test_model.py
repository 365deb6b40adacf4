from __future__ import annotations

from relsync.github.model import (
    TAGGER_EMAIL,
    TAGGER_NAME,
    RemoteAsset,
    RemoteRelease,
    RemoteTag,
    Tagger,
    parse_asset,
    parse_release,
    parse_tag,
)


def test_tagger_now_is_utc_seconds() -> None:
    tagger = Tagger.now()
    assert tagger.name == TAGGER_NAME
    assert tagger.email == TAGGER_EMAIL
    assert tagger.date.endswith("Z")
    assert len(tagger.date) == len("2024-01-02T03:04:05Z")


def test_tagger_payload() -> None:
    tagger = Tagger(name="n", email="e", date="2024-01-02T03:04:05Z")
    assert tagger.as_payload() == {"name": "n", "email": "e", "date": "2024-01-02T03:04:05Z"}


def test_parse_tag() -> None:
    data: dict[str, object] = {"name": "v1.0", "commit": {"sha": "abc123", "url": "..."}}
    assert parse_tag(data) == RemoteTag(name="v1.0", commit_sha="abc123")


def test_parse_tag_without_commit() -> None:
    assert parse_tag({"name": "v1.0"}) is None


def test_parse_release_keeps_name_verbatim() -> None:
    data: dict[str, object] = {
        "id": 5,
        "name": "nightly ",
        "tag_name": "nightly",
        "body": None,
        "draft": False,
        "prerelease": True,
        "upload_url": "https://uploads.github.com/repos/o/r/releases/5/assets{?name,label}",
    }
    release = parse_release(data)
    assert release == RemoteRelease(
        id=5,
        name="nightly ",
        tag_name="nightly",
        body="",
        draft=False,
        prerelease=True,
        upload_url="https://uploads.github.com/repos/o/r/releases/5/assets{?name,label}",
    )


def test_parse_release_null_name() -> None:
    """Releases created without a name list it as null."""
    release = parse_release({"id": 9, "name": None, "tag_name": "v9"})
    assert release is not None
    assert release.name == ""


def test_parse_release_requires_id() -> None:
    assert parse_release({"name": "nightly"}) is None


def test_parse_asset() -> None:
    asset = parse_asset({"id": 3, "name": "app.zip", "size": 10})
    assert asset == RemoteAsset(id=3, name="app.zip")
    assert parse_asset({"id": 3}) is None
