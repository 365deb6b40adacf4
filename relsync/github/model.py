from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime

from relsync.core.structured import (
    StrDict,
    get_bool,
    get_int,
    get_raw_str,
    get_str,
    get_table,
)

TAGGER_NAME = "update-existing-release github action"
TAGGER_EMAIL = "none"


@dataclass(frozen=True, slots=True)
class Tagger:
    """Identity recorded on tag objects created by relsync."""

    name: str
    email: str
    date: str

    @classmethod
    def now(cls) -> Tagger:
        stamp = datetime.now(UTC).isoformat(timespec="seconds").replace("+00:00", "Z")
        return cls(name=TAGGER_NAME, email=TAGGER_EMAIL, date=stamp)

    def as_payload(self) -> dict[str, str]:
        return {"name": self.name, "email": self.email, "date": self.date}


@dataclass(frozen=True, slots=True)
class RemoteTag:
    name: str
    commit_sha: str


@dataclass(frozen=True, slots=True)
class RemoteRelease:
    id: int
    name: str
    tag_name: str
    body: str
    draft: bool
    prerelease: bool
    upload_url: str = ""


@dataclass(frozen=True, slots=True)
class RemoteAsset:
    id: int
    name: str


def parse_tag(data: StrDict) -> RemoteTag | None:
    name = get_raw_str(data, "name")
    commit = get_table(data, "commit")
    sha = get_str(commit, "sha") if commit is not None else None
    if not name or sha is None:
        return None
    return RemoteTag(name=name, commit_sha=sha)


def parse_release(data: StrDict) -> RemoteRelease | None:
    release_id = get_int(data, "id")
    if release_id is None:
        return None
    return RemoteRelease(
        id=release_id,
        name=get_raw_str(data, "name"),
        tag_name=get_raw_str(data, "tag_name"),
        body=get_raw_str(data, "body"),
        draft=get_bool(data, "draft"),
        prerelease=get_bool(data, "prerelease"),
        upload_url=get_raw_str(data, "upload_url"),
    )


def parse_asset(data: StrDict) -> RemoteAsset | None:
    asset_id = get_int(data, "id")
    name = get_raw_str(data, "name")
    if asset_id is None or not name:
        return None
    return RemoteAsset(id=asset_id, name=name)
