from __future__ import annotations

UNKNOWN_RELEASE = "unknown-release"

_NAMESPACE = "refs/"
_REF_KINDS = ("heads/", "tags/")


def ref_to_release_name(ref: str) -> str:
    """Convert a git ref into a release-friendly name.

    ``refs/heads/feature/x`` -> ``feature-x``, ``refs/tags/v2.0`` -> ``v2.0``.
    """
    name = ref.strip().removeprefix(_NAMESPACE)
    for kind in _REF_KINDS:
        if name.startswith(kind):
            name = name.removeprefix(kind)
            break
    return name.replace("/", "-")


def resolve_identifiers(release: str, tag: str, ref: str) -> tuple[str, str]:
    """Return ``(release_name, tag_name)``, both non-empty.

    The release name falls back to the sanitized ref, the tag name to the
    release name.
    """
    release_name = release.strip() or ref_to_release_name(ref) or UNKNOWN_RELEASE
    tag_name = tag.strip() or release_name
    return release_name, tag_name
