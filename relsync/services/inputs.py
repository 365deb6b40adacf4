"""Input resolution.

Configuration is built in two phases: ``RawInputs`` holds the strings exactly
as read from CLI options and the environment, and ``resolve_inputs`` turns them
into a validated ``RunConfig``. Nothing touches the remote repository until
resolution has succeeded, so a missing file aborts the run before any mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.release.contracts import DEFAULT_API_URL, ReleaseSpec, RepoCoordinates, RunConfig
from relsync.release.errors import ReleaseError
from relsync.services.identifiers import resolve_identifiers
from relsync.services.local_files import resolve_files
from relsync.services.tags import default_tag_message

_TRUTHY = frozenset({"true", "yes"})
_FALSY = frozenset({"false", "no"})


def is_truthy(value: str) -> bool:
    return value.strip().lower() in _TRUTHY


def is_falsy(value: str) -> bool:
    return value.strip().lower() in _FALSY


@dataclass(frozen=True, slots=True)
class RawInputs:
    """Unresolved inputs; every field is the raw string, "" when unset."""

    token: str = ""
    release: str = ""
    tag: str = ""
    message: str = ""
    body: str = ""
    draft: str = ""
    prerelease: str = ""
    files: str = ""
    replace: str = ""
    update_tag: str = ""
    repository: str = ""
    ref: str = ""
    sha: str = ""
    workspace: str = ""
    api_url: str = ""


def parse_repository(value: str) -> Result[RepoCoordinates, ReleaseError]:
    owner, sep, name = value.strip().partition("/")
    if not sep or not owner or not name or "/" in name:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message=f"invalid repository: {value or '(empty)'}",
                hint="Expected owner/name, e.g. GITHUB_REPOSITORY=octo/project",
            )
        )
    return Ok(RepoCoordinates(owner=owner, name=name))


def _missing(name: str, hint: str) -> Err[ReleaseError]:
    return Err(ReleaseError(kind="invalid_input", message=f"missing input: {name}", hint=hint))


def resolve_spec(raw: RawInputs, *, workspace_root: Path) -> Result[ReleaseSpec, ReleaseError]:
    release_name, tag_name = resolve_identifiers(raw.release, raw.tag, raw.ref)

    files = resolve_files(raw.files, workspace_root)
    if isinstance(files, Err):
        return files

    return Ok(
        ReleaseSpec(
            release_name=release_name,
            tag_name=tag_name,
            message=raw.message or default_tag_message(release_name),
            body=raw.body,
            draft=is_truthy(raw.draft),
            prerelease=not is_falsy(raw.prerelease),
            files=files.value,
            replace_assets=is_truthy(raw.replace),
            update_tag=not is_falsy(raw.update_tag),
        )
    )


def resolve_inputs(
    raw: RawInputs,
    *,
    cwd: Path,
    require_token: bool = True,
) -> Result[RunConfig, ReleaseError]:
    """Validate ``raw`` and produce the configuration for one run."""
    token = raw.token.strip()
    if require_token and not token:
        return _missing("token", "Pass --token or set INPUT_TOKEN / GITHUB_TOKEN.")

    repo = parse_repository(raw.repository)
    if isinstance(repo, Err):
        return repo

    sha = raw.sha.strip()
    if not sha:
        return _missing("sha", "Pass --sha or set GITHUB_SHA.")

    workspace_root = Path(raw.workspace).expanduser() if raw.workspace.strip() else cwd
    spec = resolve_spec(raw, workspace_root=workspace_root.resolve())
    if isinstance(spec, Err):
        return spec

    return Ok(
        RunConfig(
            repo=repo.value,
            token=token,
            commit_sha=sha,
            workspace_root=workspace_root.resolve(),
            spec=spec.value,
            api_url=raw.api_url.strip() or DEFAULT_API_URL,
        )
    )
