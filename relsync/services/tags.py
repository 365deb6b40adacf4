from __future__ import annotations

from dataclasses import dataclass

from relsync.core.result import Err, Ok, Result
from relsync.github.api import RepoApi
from relsync.github.model import RemoteTag, Tagger
from relsync.output.console import ConsoleProtocol, Style
from relsync.release.errors import ReleaseError


@dataclass(frozen=True, slots=True)
class TagOutcome:
    tag: RemoteTag
    created: bool


def default_tag_message(release_name: str) -> str:
    return f"{release_name} (automatically created)"


def find_tag(api: RepoApi, tag_name: str) -> Result[RemoteTag | None, ReleaseError]:
    tags = api.list_tags()
    if isinstance(tags, Err):
        return tags
    return Ok(next((t for t in tags.value if t.name == tag_name), None))


def ensure_tag(
    api: RepoApi,
    *,
    tag_name: str,
    commit_sha: str,
    message: str,
    console: ConsoleProtocol,
    tagger: Tagger | None = None,
) -> Result[TagOutcome, ReleaseError]:
    """Make sure ``tag_name`` exists, creating it at ``commit_sha`` if needed.

    An existing tag is returned untouched even when it points at another
    commit; moving it is the job of ``repoint_tag``.
    """
    with console.group(f"Resolving tag {tag_name}..."):
        existing = find_tag(api, tag_name)
        if isinstance(existing, Err):
            return existing
        if existing.value is not None:
            console.print(
                f"tag {tag_name} exists at {existing.value.commit_sha[:12]}", Style.DIM
            )
            return Ok(TagOutcome(tag=existing.value, created=False))

        tag_object = api.create_tag_object(
            tag_name=tag_name,
            message=message,
            commit_sha=commit_sha,
            tagger=tagger or Tagger.now(),
        )
        if isinstance(tag_object, Err):
            return tag_object

        ref = api.create_ref(ref=f"refs/tags/{tag_name}", sha=tag_object.value)
        if isinstance(ref, Err):
            return ref

        console.success(f"created tag {tag_name} at {commit_sha[:12]}")
        return Ok(TagOutcome(tag=RemoteTag(name=tag_name, commit_sha=commit_sha), created=True))


def repoint_tag(
    api: RepoApi,
    *,
    tag_name: str,
    commit_sha: str,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    """Force-move ``tags/<tag_name>`` to ``commit_sha``.

    Previous tag targets are not preserved.
    """
    with console.group(f"Updating tag {tag_name} to {commit_sha}..."):
        result = api.update_ref(ref=f"tags/{tag_name}", sha=commit_sha)
        if isinstance(result, Err):
            return result
        console.success(f"tag {tag_name} now points at {commit_sha[:12]}")
        return Ok(None)
