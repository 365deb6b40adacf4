"""Local release files: list parsing, path resolution and upload metadata."""

from __future__ import annotations

import mimetypes
import re
from dataclasses import dataclass
from pathlib import Path

from relsync.core.result import Err, Ok, Result
from relsync.release.errors import ReleaseError

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_FILE_LIST_SPLIT = re.compile(r"[ ,\r\n\t]+")

# Built-in table only; the host's /etc/mime.types must not change uploads.
_MIME = mimetypes.MimeTypes(filenames=())

_ENCODING_TYPES = {
    "gzip": "application/gzip",
    "bzip2": "application/x-bzip2",
    "xz": "application/x-xz",
    "compress": "application/x-compress",
    "br": "application/x-brotli",
}


@dataclass(frozen=True, slots=True)
class LocalFile:
    path: Path
    size: int
    content_type: str
    content_type_guessed: bool

    @property
    def name(self) -> str:
        return self.path.name


def split_file_list(raw: str) -> list[str]:
    """Split a files input on runs of space, comma, tab, CR and LF."""
    return [token for token in _FILE_LIST_SPLIT.split(raw) if token]


def resolve_file(token: str, workspace_root: Path) -> Result[Path, ReleaseError]:
    """Resolve one file token to an absolute path.

    A token is used as given when it is absolute and exists; otherwise it is
    looked up relative to the workspace root.
    """
    given = Path(token).expanduser()
    candidate = given if given.is_absolute() and given.exists() else workspace_root / token

    if not candidate.exists():
        return Err(
            ReleaseError(
                kind="file_not_found",
                message=(
                    f"could not find {token} as either absolute path "
                    "or path relative to workspace"
                ),
                hint=str(workspace_root),
            )
        )
    if not candidate.is_file():
        return Err(
            ReleaseError(
                kind="file_not_found",
                message=f"{token} is not a regular file",
                hint=str(candidate),
            )
        )
    return Ok(candidate.resolve())


def resolve_files(raw: str, workspace_root: Path) -> Result[tuple[Path, ...], ReleaseError]:
    tokens = split_file_list(raw)
    if not tokens:
        return Err(
            ReleaseError(
                kind="invalid_input",
                message="no files given",
                hint="Set the files input to one or more paths.",
            )
        )

    resolved: list[Path] = []
    seen: dict[str, Path] = {}
    for token in tokens:
        result = resolve_file(token, workspace_root)
        if isinstance(result, Err):
            return result
        path = result.value
        if path in resolved:
            continue
        # Asset names are basenames and must be unique within a release.
        if path.name in seen:
            return Err(
                ReleaseError(
                    kind="invalid_input",
                    message=f"duplicate asset name {path.name}",
                    hint=f"{seen[path.name]} and {path}",
                )
            )
        seen[path.name] = path
        resolved.append(path)
    return Ok(tuple(resolved))


def guess_content_type(path: Path) -> str | None:
    content_type, encoding = _MIME.guess_type(path.name, strict=False)
    if encoding is not None:
        return _ENCODING_TYPES.get(encoding, content_type)
    return content_type


def inspect_local_file(path: Path) -> Result[LocalFile, ReleaseError]:
    """Collect the size and content type of a file about to be uploaded."""
    try:
        size = path.stat().st_size
    except OSError as e:
        return Err(
            ReleaseError(kind="file_not_found", message=f"cannot stat {path}: {e.strerror}")
        )

    content_type = guess_content_type(path)
    return Ok(
        LocalFile(
            path=path,
            size=size,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            content_type_guessed=content_type is not None,
        )
    )


def read_local_file(local: LocalFile) -> Result[bytes, ReleaseError]:
    try:
        return Ok(local.path.read_bytes())
    except OSError as e:
        return Err(
            ReleaseError(kind="file_not_found", message=f"cannot read {local.path}: {e.strerror}")
        )
