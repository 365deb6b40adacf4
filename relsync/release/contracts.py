"""Cross-layer contracts for the release bounded context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from relsync.release.errors import ReleaseError

RunStage = Literal[
    "start",
    "tag_resolved",
    "release_resolved",
    "assets_reconciled",
    "done",
]

DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True, slots=True)
class RepoCoordinates:
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class ReleaseSpec:
    """Desired state of the release for this run.

    ``files`` holds resolved absolute paths in the order they will be uploaded.
    """

    release_name: str
    tag_name: str
    message: str
    body: str
    draft: bool
    prerelease: bool
    files: tuple[Path, ...]
    replace_assets: bool = False
    update_tag: bool = True


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Fully resolved input; produced before any remote call is made."""

    repo: RepoCoordinates
    token: str
    commit_sha: str
    workspace_root: Path
    spec: ReleaseSpec
    api_url: str = DEFAULT_API_URL


@dataclass(frozen=True, slots=True)
class RunReport:
    """What a successful run did to the remote repository."""

    release_name: str
    tag_name: str
    release_id: int
    tag_created: bool
    release_created: bool
    deleted_assets: tuple[str, ...]
    uploaded_assets: tuple[str, ...]
    tag_repointed: bool
    stage: RunStage = "done"


@dataclass(frozen=True, slots=True)
class RunFailure:
    """An aborted run: the last stage reached and the error that stopped it."""

    stage: RunStage
    error: ReleaseError
