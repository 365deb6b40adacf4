"""In-memory ``RepoApi`` for tests.

MockRepoApi keeps tags, releases and assets in plain lists so reconciliation
runs can be executed end to end and the resulting remote state inspected.

Usage:
    api = MockRepoApi()
    api.add_release(name="nightly", tag_name="nightly")
    api.fail("delete_release_asset", ReleaseError(kind="remote_failed", message="boom"))
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from relsync.core.result import Err, Ok, Result
from relsync.github.model import RemoteAsset, RemoteRelease, RemoteTag, Tagger
from relsync.release.errors import ReleaseError

MUTATING_CALLS = frozenset(
    {
        "create_tag_object",
        "create_ref",
        "update_ref",
        "create_release",
        "update_release",
        "delete_release_asset",
        "upload_release_asset",
    }
)

UPLOAD_URL_TEMPLATE = "https://uploads.example.test/repos/o/r/releases/{id}/assets{{?name,label}}"


@dataclass(frozen=True, slots=True)
class UploadRecord:
    release_id: int
    upload_url: str
    name: str
    content_type: str
    content_length: int
    data: bytes


@dataclass(frozen=True, slots=True)
class TagObject:
    sha: str
    tag_name: str
    message: str
    commit_sha: str
    tagger: Tagger


@dataclass
class MockRepoApi:
    tags: list[RemoteTag] = field(default_factory=list[RemoteTag])
    releases: list[RemoteRelease] = field(default_factory=list[RemoteRelease])
    assets: dict[int, list[RemoteAsset]] = field(default_factory=dict[int, list[RemoteAsset]])
    commit_messages: dict[str, str] = field(default_factory=dict[str, str])
    tag_objects: list[TagObject] = field(default_factory=list[TagObject])
    uploads: list[UploadRecord] = field(default_factory=list[UploadRecord])
    calls: list[str] = field(default_factory=list[str])
    failures: dict[str, ReleaseError] = field(default_factory=dict[str, ReleaseError])
    _next_id: int = 100

    # -- test helpers -----------------------------------------------------

    def fail(self, method: str, error: ReleaseError) -> None:
        """Make every call to ``method`` return ``Err(error)``."""
        self.failures[method] = error

    def add_tag(self, name: str, commit_sha: str) -> RemoteTag:
        tag = RemoteTag(name=name, commit_sha=commit_sha)
        self.tags.append(tag)
        return tag

    def add_release(
        self,
        *,
        name: str,
        tag_name: str,
        body: str = "",
        draft: bool = False,
        prerelease: bool = False,
        assets: tuple[str, ...] = (),
    ) -> RemoteRelease:
        release_id = self._allocate_id()
        release = RemoteRelease(
            id=release_id,
            name=name,
            tag_name=tag_name,
            body=body,
            draft=draft,
            prerelease=prerelease,
            upload_url=UPLOAD_URL_TEMPLATE.format(id=release_id),
        )
        self.releases.append(release)
        self.assets[release_id] = [RemoteAsset(id=self._allocate_id(), name=n) for n in assets]
        return release

    def release_named(self, name: str) -> RemoteRelease | None:
        return next((r for r in self.releases if r.name == name), None)

    def asset_names(self, release_id: int) -> list[str]:
        return [a.name for a in self.assets.get(release_id, [])]

    @property
    def mutations(self) -> list[str]:
        return [c for c in self.calls if c in MUTATING_CALLS]

    def _allocate_id(self) -> int:
        self._next_id += 1
        return self._next_id

    def _enter(self, method: str) -> ReleaseError | None:
        self.calls.append(method)
        return self.failures.get(method)

    # -- RepoApi ----------------------------------------------------------

    def list_tags(self) -> Result[list[RemoteTag], ReleaseError]:
        if (error := self._enter("list_tags")) is not None:
            return Err(error)
        return Ok(list(self.tags))

    def create_tag_object(
        self, *, tag_name: str, message: str, commit_sha: str, tagger: Tagger
    ) -> Result[str, ReleaseError]:
        if (error := self._enter("create_tag_object")) is not None:
            return Err(error)
        sha = f"tagobj{self._allocate_id():034d}"
        self.tag_objects.append(
            TagObject(
                sha=sha, tag_name=tag_name, message=message, commit_sha=commit_sha, tagger=tagger
            )
        )
        return Ok(sha)

    def create_ref(self, *, ref: str, sha: str) -> Result[None, ReleaseError]:
        if (error := self._enter("create_ref")) is not None:
            return Err(error)
        name = ref.removeprefix("refs/tags/")
        if any(t.name == name for t in self.tags):
            return Err(ReleaseError(kind="remote_failed", message="Reference already exists"))
        # Tags list the commit an annotated tag object peels to.
        commit = next((o.commit_sha for o in self.tag_objects if o.sha == sha), sha)
        self.tags.append(RemoteTag(name=name, commit_sha=commit))
        return Ok(None)

    def update_ref(self, *, ref: str, sha: str) -> Result[None, ReleaseError]:
        if (error := self._enter("update_ref")) is not None:
            return Err(error)
        name = ref.removeprefix("tags/")
        for i, tag in enumerate(self.tags):
            if tag.name == name:
                self.tags[i] = replace(tag, commit_sha=sha)
                return Ok(None)
        return Err(ReleaseError(kind="remote_failed", message="Reference does not exist"))

    def get_commit_message(self, sha: str) -> Result[str, ReleaseError]:
        if (error := self._enter("get_commit_message")) is not None:
            return Err(error)
        return Ok(self.commit_messages.get(sha, ""))

    def list_releases(self) -> Result[list[RemoteRelease], ReleaseError]:
        if (error := self._enter("list_releases")) is not None:
            return Err(error)
        return Ok(list(self.releases))

    def create_release(
        self, *, tag_name: str, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[int, ReleaseError]:
        if (error := self._enter("create_release")) is not None:
            return Err(error)
        release_id = self._allocate_id()
        self.releases.append(
            RemoteRelease(
                id=release_id,
                name=name,
                tag_name=tag_name,
                body=body,
                draft=draft,
                prerelease=prerelease,
                upload_url=UPLOAD_URL_TEMPLATE.format(id=release_id),
            )
        )
        self.assets[release_id] = []
        return Ok(release_id)

    def update_release(
        self, *, release_id: int, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[None, ReleaseError]:
        if (error := self._enter("update_release")) is not None:
            return Err(error)
        for i, release in enumerate(self.releases):
            if release.id == release_id:
                self.releases[i] = replace(
                    release, name=name, body=body, draft=draft, prerelease=prerelease
                )
                return Ok(None)
        return Err(ReleaseError(kind="remote_failed", message="Not Found", status=404))

    def list_release_assets(self, release_id: int) -> Result[list[RemoteAsset], ReleaseError]:
        if (error := self._enter("list_release_assets")) is not None:
            return Err(error)
        return Ok(list(self.assets.get(release_id, [])))

    def delete_release_asset(self, asset_id: int) -> Result[None, ReleaseError]:
        if (error := self._enter("delete_release_asset")) is not None:
            return Err(error)
        for items in self.assets.values():
            for asset in items:
                if asset.id == asset_id:
                    items.remove(asset)
                    return Ok(None)
        return Err(ReleaseError(kind="remote_failed", message="Not Found", status=404))

    def upload_release_asset(
        self,
        *,
        release_id: int,
        upload_url: str,
        name: str,
        content_type: str,
        content_length: int,
        data: bytes,
    ) -> Result[RemoteAsset, ReleaseError]:
        if (error := self._enter("upload_release_asset")) is not None:
            return Err(error)
        items = self.assets.setdefault(release_id, [])
        if any(a.name == name for a in items):
            return Err(
                ReleaseError(kind="remote_failed", message="already_exists", status=422)
            )
        asset = RemoteAsset(id=self._allocate_id(), name=name)
        items.append(asset)
        self.uploads.append(
            UploadRecord(
                release_id=release_id,
                upload_url=upload_url,
                name=name,
                content_type=content_type,
                content_length=content_length,
                data=data,
            )
        )
        return Ok(asset)
