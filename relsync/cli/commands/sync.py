from __future__ import annotations

from pathlib import Path

from relsync.cli import options
from relsync.cli.commands._helpers import (
    exit_on_error,
    exit_with_code,
    report_error,
    spec_outputs,
)
from relsync.cli.context import CLIContext, build_context, build_repo_api
from relsync.core.errors import ErrorCode
from relsync.core.result import Err
from relsync.output.actions import write_outputs
from relsync.output.console import Style
from relsync.release.contracts import RunConfig, RunReport
from relsync.services.inputs import RawInputs, resolve_inputs
from relsync.services.reconcile import run_reconcile


def sync(
    token: options.Token = "",
    release: options.Release = "",
    tag: options.Tag = "",
    message: options.Message = "",
    body: options.Body = "",
    draft: options.Draft = "",
    prerelease: options.Prerelease = "",
    files: options.Files = "",
    replace: options.Replace = "",
    update_tag: options.UpdateTag = "",
    repository: options.Repository = "",
    ref: options.Ref = "",
    sha: options.Sha = "",
    workspace: options.Workspace = "",
    api_url: options.ApiUrl = "",
) -> None:
    """Create or update the release, its tag and its assets."""
    ctx = build_context()
    ctx.console.mask(token.strip())

    raw = RawInputs(
        token=token,
        release=release,
        tag=tag,
        message=message,
        body=body,
        draft=draft,
        prerelease=prerelease,
        files=files,
        replace=replace,
        update_tag=update_tag,
        repository=repository,
        ref=ref,
        sha=sha,
        workspace=workspace,
        api_url=api_url,
    )
    config = exit_on_error(resolve_inputs(raw, cwd=Path.cwd()), ctx)

    ctx.console.info(
        f"updating release {config.spec.release_name} (tag {config.spec.tag_name}) "
        f"in {config.repo.slug}"
    )
    result = run_reconcile(build_repo_api(config), config, console=ctx.console)
    if isinstance(result, Err):
        report_error(result.error.error, ctx)
        ctx.console.print(f"run aborted after stage: {result.error.stage}", Style.DIM)
        exit_with_code(int(ErrorCode.RECONCILE_ERROR))

    _print_summary(ctx, result.value)
    _emit_outputs(ctx, config)


def _print_summary(ctx: CLIContext, report: RunReport) -> None:
    console = ctx.console
    verb = "created" if report.release_created else "updated"
    console.success(f"release {report.release_name} {verb} (id {report.release_id})")
    if report.tag_created:
        console.print(f"tag {report.tag_name}: created", Style.DIM)
    if report.deleted_assets:
        console.print(f"deleted: {', '.join(report.deleted_assets)}", Style.DIM)
    console.print(f"uploaded: {', '.join(report.uploaded_assets)}", Style.DIM)
    if report.tag_repointed:
        console.print(f"tag {report.tag_name}: moved to build commit", Style.DIM)


def _emit_outputs(ctx: CLIContext, config: RunConfig) -> None:
    outputs = spec_outputs(config.spec)
    exit_on_error(write_outputs(outputs), ctx)
    for name, value in outputs.items():
        ctx.console.print(f"{name}={value}")
