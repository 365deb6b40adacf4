from __future__ import annotations

from dataclasses import dataclass

from relsync.core.result import Err, Ok, Result
from relsync.github.api import RepoApi
from relsync.github.model import RemoteRelease
from relsync.output.console import ConsoleProtocol, Style
from relsync.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    release_id: int
    created: bool


def find_release(api: RepoApi, release_name: str) -> Result[RemoteRelease | None, ReleaseError]:
    """Return the first release whose name equals ``release_name`` exactly."""
    releases = api.list_releases()
    if isinstance(releases, Err):
        return releases
    return Ok(next((r for r in releases.value if r.name == release_name), None))


def require_release(api: RepoApi, release_name: str) -> Result[RemoteRelease, ReleaseError]:
    found = find_release(api, release_name)
    if isinstance(found, Err):
        return found
    if found.value is None:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"could not find release {release_name}",
                hint="The release was created or updated but is not listed by name.",
            )
        )
    return Ok(found.value)


def resolve_body(api: RepoApi, *, body: str, commit_sha: str) -> Result[str, ReleaseError]:
    """Use ``body`` as given, or the current commit message when it is empty."""
    if body:
        return Ok(body)
    return api.get_commit_message(commit_sha)


def ensure_release(
    api: RepoApi,
    *,
    release_name: str,
    tag_name: str,
    body: str,
    draft: bool,
    prerelease: bool,
    commit_sha: str,
    console: ConsoleProtocol,
) -> Result[ReleaseOutcome, ReleaseError]:
    """Create or update the release named ``release_name``.

    The id is re-resolved by name after the mutation; create/update responses
    are not trusted to carry it.
    """
    existing = find_release(api, release_name)
    if isinstance(existing, Err):
        return existing

    resolved_body = resolve_body(api, body=body, commit_sha=commit_sha)
    if isinstance(resolved_body, Err):
        return resolved_body

    release = existing.value
    if release is None:
        with console.group(f"Creating release {release_name}..."):
            created = api.create_release(
                tag_name=tag_name,
                name=release_name,
                body=resolved_body.value,
                draft=draft,
                prerelease=prerelease,
            )
            if isinstance(created, Err):
                return created
    else:
        with console.group(f"Updating release {release_name} ({release.id})..."):
            if release.tag_name != tag_name:
                console.print(
                    f"release points at tag {release.tag_name}, not {tag_name}", Style.DIM
                )
            updated = api.update_release(
                release_id=release.id,
                name=release_name,
                body=resolved_body.value,
                draft=draft,
                prerelease=prerelease,
            )
            if isinstance(updated, Err):
                return updated

    resolved = require_release(api, release_name)
    if isinstance(resolved, Err):
        return resolved

    console.print(f"release id: {resolved.value.id}", Style.DIM)
    return Ok(ReleaseOutcome(release_id=resolved.value.id, created=release is None))
