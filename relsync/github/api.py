"""GitHub repository API used by the reconciliation stages.

``RepoApi`` is the seam between the reconciler and GitHub: the stages only
ever talk to this protocol, and ``GitHubRepoApi`` implements it over an
``HttpClient``. Every method returns a Result; nothing raises.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Protocol, TypeVar
from urllib.parse import quote

from relsync.core.result import Err, Ok, Result
from relsync.core.structured import StrDict, as_obj_list, as_str_dict, get_raw_str, get_str
from relsync.github.http import HttpClient, HttpError, HttpResponse
from relsync.github.model import (
    RemoteAsset,
    RemoteRelease,
    RemoteTag,
    Tagger,
    parse_asset,
    parse_release,
    parse_tag,
)
from relsync.github.timeouts import MAX_PAGES, PAGE_SIZE, UPLOAD_TIMEOUT_SECONDS
from relsync.release.contracts import DEFAULT_API_URL, RepoCoordinates
from relsync.release.errors import ReleaseError

__all__ = ["RepoApi", "GitHubRepoApi", "expand_upload_url"]

M = TypeVar("M")

_URI_TEMPLATE = re.compile(r"\{[^}]*\}")


class RepoApi(Protocol):
    """Remote repository operations needed to reconcile one release."""

    def list_tags(self) -> Result[list[RemoteTag], ReleaseError]: ...

    def create_tag_object(
        self, *, tag_name: str, message: str, commit_sha: str, tagger: Tagger
    ) -> Result[str, ReleaseError]:
        """Create an annotated tag object and return its SHA."""
        ...

    def create_ref(self, *, ref: str, sha: str) -> Result[None, ReleaseError]: ...

    def update_ref(self, *, ref: str, sha: str) -> Result[None, ReleaseError]:
        """Force-move ``ref`` (e.g. ``tags/v1``) to ``sha``."""
        ...

    def get_commit_message(self, sha: str) -> Result[str, ReleaseError]: ...

    def list_releases(self) -> Result[list[RemoteRelease], ReleaseError]: ...

    def create_release(
        self, *, tag_name: str, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[int, ReleaseError]: ...

    def update_release(
        self, *, release_id: int, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[None, ReleaseError]: ...

    def list_release_assets(self, release_id: int) -> Result[list[RemoteAsset], ReleaseError]: ...

    def delete_release_asset(self, asset_id: int) -> Result[None, ReleaseError]: ...

    def upload_release_asset(
        self,
        *,
        release_id: int,
        upload_url: str,
        name: str,
        content_type: str,
        content_length: int,
        data: bytes,
    ) -> Result[RemoteAsset, ReleaseError]: ...


def expand_upload_url(template: str, name: str) -> str:
    """Turn a release ``upload_url`` URI template into a concrete upload URL.

    GitHub returns e.g. ``https://uploads.github.com/repos/o/r/releases/1/assets{?name,label}``.
    """
    base = _URI_TEMPLATE.sub("", template)
    return f"{base}?name={quote(name, safe='')}"


def _remote_error(action: str, error: HttpError) -> ReleaseError:
    return ReleaseError(
        kind="remote_failed",
        message=f"{action} failed: {error.message}",
        status=error.status or None,
        url=error.url,
    )


def _payload_error(action: str, url: str) -> ReleaseError:
    return ReleaseError(
        kind="remote_failed",
        message=f"unexpected payload from {action}",
        url=url,
    )


class GitHubRepoApi:
    """``RepoApi`` backed by the GitHub REST API."""

    def __init__(
        self,
        http: HttpClient,
        repo: RepoCoordinates,
        *,
        api_url: str = DEFAULT_API_URL,
    ) -> None:
        self._http = http
        self._repo = repo
        self._base = f"{api_url.rstrip('/')}/repos/{repo.owner}/{repo.name}"

    # -- plumbing ---------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self._base}/{path}"

    def _call(
        self,
        action: str,
        method: str,
        url: str,
        *,
        json_body: object | None = None,
    ) -> Result[HttpResponse, ReleaseError]:
        result = self._http.request(method, url, json_body=json_body)
        if isinstance(result, Err):
            return Err(_remote_error(action, result.error))
        return result

    def _call_json(
        self,
        action: str,
        method: str,
        url: str,
        *,
        json_body: object | None = None,
    ) -> Result[StrDict, ReleaseError]:
        response = self._call(action, method, url, json_body=json_body)
        if isinstance(response, Err):
            return response
        decoded = response.value.json()
        if isinstance(decoded, Err):
            return Err(_remote_error(action, decoded.error))
        data = as_str_dict(decoded.value)
        if data is None:
            return Err(_payload_error(action, url))
        return Ok(data)

    def _list_all(
        self,
        action: str,
        path: str,
        parse: Callable[[StrDict], M | None],
    ) -> Result[list[M], ReleaseError]:
        sep = "&" if "?" in path else "?"
        url: str | None = self._url(f"{path}{sep}per_page={PAGE_SIZE}")
        items: list[M] = []
        pages = 0
        while url is not None and pages < MAX_PAGES:
            response = self._call(action, "GET", url)
            if isinstance(response, Err):
                return response
            decoded = response.value.json()
            if isinstance(decoded, Err):
                return Err(_remote_error(action, decoded.error))
            raw = as_obj_list(decoded.value)
            if raw is None:
                return Err(_payload_error(action, url))
            for entry in raw:
                data = as_str_dict(entry)
                if data is None:
                    continue
                parsed = parse(data)
                if parsed is not None:
                    items.append(parsed)
            pages += 1
            url = response.value.next_link()
        if url is not None:
            return Err(
                ReleaseError(
                    kind="remote_failed",
                    message=f"{action}: more than {MAX_PAGES} pages",
                    url=url,
                )
            )
        return Ok(items)

    # -- tags and refs ----------------------------------------------------

    def list_tags(self) -> Result[list[RemoteTag], ReleaseError]:
        return self._list_all("list tags", "tags", parse_tag)

    def create_tag_object(
        self, *, tag_name: str, message: str, commit_sha: str, tagger: Tagger
    ) -> Result[str, ReleaseError]:
        url = self._url("git/tags")
        data = self._call_json(
            f"create tag object {tag_name}",
            "POST",
            url,
            json_body={
                "tag": tag_name,
                "message": message,
                "object": commit_sha,
                "type": "commit",
                "tagger": tagger.as_payload(),
            },
        )
        if isinstance(data, Err):
            return data
        sha = get_str(data.value, "sha")
        if sha is None:
            return Err(_payload_error(f"create tag object {tag_name}", url))
        return Ok(sha)

    def create_ref(self, *, ref: str, sha: str) -> Result[None, ReleaseError]:
        result = self._call(
            f"create ref {ref}", "POST", self._url("git/refs"), json_body={"ref": ref, "sha": sha}
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def update_ref(self, *, ref: str, sha: str) -> Result[None, ReleaseError]:
        result = self._call(
            f"update ref {ref}",
            "PATCH",
            self._url(f"git/refs/{ref}"),
            json_body={"sha": sha, "force": True},
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    def get_commit_message(self, sha: str) -> Result[str, ReleaseError]:
        data = self._call_json(f"get commit {sha}", "GET", self._url(f"git/commits/{sha}"))
        if isinstance(data, Err):
            return data
        return Ok(get_raw_str(data.value, "message"))

    # -- releases ---------------------------------------------------------

    def list_releases(self) -> Result[list[RemoteRelease], ReleaseError]:
        return self._list_all("list releases", "releases", parse_release)

    def create_release(
        self, *, tag_name: str, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[int, ReleaseError]:
        url = self._url("releases")
        data = self._call_json(
            f"create release {name}",
            "POST",
            url,
            json_body={
                "tag_name": tag_name,
                "name": name,
                "body": body,
                "draft": draft,
                "prerelease": prerelease,
            },
        )
        if isinstance(data, Err):
            return data
        release = parse_release(data.value)
        if release is None:
            return Err(_payload_error(f"create release {name}", url))
        return Ok(release.id)

    def update_release(
        self, *, release_id: int, name: str, body: str, draft: bool, prerelease: bool
    ) -> Result[None, ReleaseError]:
        result = self._call(
            f"update release {release_id}",
            "PATCH",
            self._url(f"releases/{release_id}"),
            json_body={"name": name, "body": body, "draft": draft, "prerelease": prerelease},
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

    # -- assets -----------------------------------------------------------

    def list_release_assets(self, release_id: int) -> Result[list[RemoteAsset], ReleaseError]:
        return self._list_all(
            f"list assets of release {release_id}", f"releases/{release_id}/assets", parse_asset
        )

    def delete_release_asset(self, asset_id: int) -> Result[None, ReleaseError]:
        result = self._call(
            f"delete asset {asset_id}", "DELETE", self._url(f"releases/assets/{asset_id}")
        )
        if isinstance(result, Err):
            return result
        return Ok(None)

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
        action = f"upload asset {name} to release {release_id}"
        url = expand_upload_url(upload_url, name)
        result = self._http.request(
            "POST",
            url,
            data=data,
            headers={"Content-Type": content_type, "Content-Length": str(content_length)},
            timeout=UPLOAD_TIMEOUT_SECONDS,
        )
        if isinstance(result, Err):
            return Err(_remote_error(action, result.error))
        decoded = result.value.json()
        if isinstance(decoded, Err):
            return Err(_remote_error(action, decoded.error))
        payload = as_str_dict(decoded.value)
        asset = parse_asset(payload) if payload is not None else None
        if asset is None:
            return Err(_payload_error(action, url))
        return Ok(asset)
