from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.github.api import RepoApi
from relsync.github.model import RemoteAsset
from relsync.output.console import ConsoleProtocol, Style
from relsync.release.errors import ReleaseError
from relsync.services.local_files import DEFAULT_CONTENT_TYPE, inspect_local_file, read_local_file
from relsync.services.releases import require_release


@dataclass(frozen=True, slots=True)
class AssetReport:
    deleted: tuple[str, ...]
    uploaded: tuple[str, ...]


def plan_deletions(
    existing: Sequence[RemoteAsset],
    incoming_names: Iterable[str],
    *,
    replace_all: bool,
) -> list[RemoteAsset]:
    """Select the assets to delete before uploading.

    Everything goes in replace-all mode; otherwise only assets whose name
    collides with an incoming file. Listing order is preserved.
    """
    if replace_all:
        return list(existing)
    names = set(incoming_names)
    return [asset for asset in existing if asset.name in names]


def delete_assets(
    api: RepoApi,
    assets: Sequence[RemoteAsset],
    *,
    console: ConsoleProtocol,
) -> Result[tuple[str, ...], ReleaseError]:
    deleted: list[str] = []
    for asset in assets:
        with console.group(f"Deleting old release asset {asset.name} ({asset.id})..."):
            result = api.delete_release_asset(asset.id)
            if isinstance(result, Err):
                return result
            deleted.append(asset.name)
    return Ok(tuple(deleted))


def upload_file(
    api: RepoApi,
    *,
    release_name: str,
    release_id: int,
    path: Path,
    console: ConsoleProtocol,
) -> Result[RemoteAsset, ReleaseError]:
    local = inspect_local_file(path)
    if isinstance(local, Err):
        return local
    info = local.value

    if not info.content_type_guessed:
        console.warning(
            f"content type for file {path} could not be automatically determined "
            f"from extension; going with {DEFAULT_CONTENT_TYPE}"
        )

    # Re-resolved for every file; release metadata may change between stages.
    target = require_release(api, release_name)
    if isinstance(target, Err):
        return target
    if not target.value.upload_url:
        return Err(
            ReleaseError(
                kind="not_found",
                message=f"could not find upload_url corresponding to release {release_name}",
            )
        )

    data = read_local_file(info)
    if isinstance(data, Err):
        return data

    console.print(f"uploading {info.name} ({info.size} bytes, {info.content_type})", Style.DIM)
    return api.upload_release_asset(
        release_id=release_id,
        upload_url=target.value.upload_url,
        name=info.name,
        content_type=info.content_type,
        content_length=info.size,
        data=data.value,
    )


def reconcile_assets(
    api: RepoApi,
    *,
    release_name: str,
    release_id: int,
    files: Sequence[Path],
    replace_all: bool,
    console: ConsoleProtocol,
) -> Result[AssetReport, ReleaseError]:
    """Delete colliding (or all) assets, then upload ``files`` in order."""
    with console.group(f"Getting assets for release {release_name}..."):
        existing = api.list_release_assets(release_id)
        if isinstance(existing, Err):
            return existing
        names = ", ".join(a.name for a in existing.value) or "(none)"
        console.print(f"existing assets: {names}", Style.DIM)

    doomed = plan_deletions(existing.value, (p.name for p in files), replace_all=replace_all)
    deleted = delete_assets(api, doomed, console=console)
    if isinstance(deleted, Err):
        return deleted

    uploaded: list[str] = []
    with console.group(f"Uploading {len(files)} release asset(s)..."):
        for path in files:
            result = upload_file(
                api,
                release_name=release_name,
                release_id=release_id,
                path=path,
                console=console,
            )
            if isinstance(result, Err):
                return result
            uploaded.append(result.value.name)

    return Ok(AssetReport(deleted=deleted.value, uploaded=tuple(uploaded)))
