from __future__ import annotations

from pathlib import Path

from relsync.cli import options
from relsync.cli.commands._helpers import exit_on_error, spec_outputs
from relsync.cli.context import build_context
from relsync.output.console import Style
from relsync.services.inputs import RawInputs, resolve_inputs


def resolve(
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
) -> None:
    """Show the resolved release, tag, flags and files without calling GitHub."""
    ctx = build_context()
    raw = RawInputs(
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
    )
    config = exit_on_error(resolve_inputs(raw, cwd=Path.cwd(), require_token=False), ctx)
    spec = config.spec

    for name, value in spec_outputs(spec).items():
        ctx.console.print(f"{name}={value}")
    ctx.console.print(f"repository: {config.repo.slug}", Style.DIM)
    ctx.console.print(f"tag message: {spec.message}", Style.DIM)
    ctx.console.print(f"replace assets: {spec.replace_assets}", Style.DIM)
    ctx.console.print(f"update tag after publish: {spec.update_tag}", Style.DIM)
