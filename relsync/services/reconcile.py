"""Run driver: tag -> release -> assets -> optional tag repoint.

Each stage hands the identifiers the next one needs through its return value.
The first ``Err`` stops the run; nothing is retried or rolled back, re-running
the whole procedure converges instead.
"""

from __future__ import annotations

from collections.abc import Callable

from relsync.core.result import Err, Ok, Result
from relsync.github.api import RepoApi
from relsync.github.model import Tagger
from relsync.output.console import ConsoleProtocol
from relsync.release.contracts import RunConfig, RunFailure, RunReport, RunStage
from relsync.services.assets import reconcile_assets
from relsync.services.releases import ensure_release
from relsync.services.tags import ensure_tag, repoint_tag


def run_reconcile(
    api: RepoApi,
    config: RunConfig,
    *,
    console: ConsoleProtocol,
    tagger: Callable[[], Tagger] = Tagger.now,
) -> Result[RunReport, RunFailure]:
    spec = config.spec
    stage: RunStage = "start"

    tag = ensure_tag(
        api,
        tag_name=spec.tag_name,
        commit_sha=config.commit_sha,
        message=spec.message,
        console=console,
        tagger=tagger(),
    )
    if isinstance(tag, Err):
        return Err(RunFailure(stage=stage, error=tag.error))
    stage = "tag_resolved"

    release = ensure_release(
        api,
        release_name=spec.release_name,
        tag_name=spec.tag_name,
        body=spec.body,
        draft=spec.draft,
        prerelease=spec.prerelease,
        commit_sha=config.commit_sha,
        console=console,
    )
    if isinstance(release, Err):
        return Err(RunFailure(stage=stage, error=release.error))
    stage = "release_resolved"
    release_id = release.value.release_id

    assets = reconcile_assets(
        api,
        release_name=spec.release_name,
        release_id=release_id,
        files=spec.files,
        replace_all=spec.replace_assets,
        console=console,
    )
    if isinstance(assets, Err):
        return Err(RunFailure(stage=stage, error=assets.error))
    stage = "assets_reconciled"

    if spec.update_tag:
        moved = repoint_tag(
            api, tag_name=spec.tag_name, commit_sha=config.commit_sha, console=console
        )
        if isinstance(moved, Err):
            return Err(RunFailure(stage=stage, error=moved.error))

    return Ok(
        RunReport(
            release_name=spec.release_name,
            tag_name=spec.tag_name,
            release_id=release_id,
            tag_created=tag.value.created,
            release_created=release.value.created,
            deleted_assets=assets.value.deleted,
            uploaded_assets=assets.value.uploaded,
            tag_repointed=spec.update_tag,
        )
    )
