"""Input options shared by ``sync`` and ``resolve``.

Each option falls back to the environment variable a GitHub Actions runner
sets for the matching action input (``INPUT_<NAME>``) or context value.
"""

from __future__ import annotations

from typing import Annotated

import typer

Token = Annotated[
    str,
    typer.Option(
        "--token",
        envvar=["INPUT_TOKEN", "GITHUB_TOKEN"],
        help="GitHub token with contents:write permission.",
        show_default=False,
    ),
]
Release = Annotated[
    str,
    typer.Option("--release", envvar="INPUT_RELEASE", help="Release name (default: from ref)."),
]
Tag = Annotated[
    str, typer.Option("--tag", envvar="INPUT_TAG", help="Tag name (default: release name).")
]
Message = Annotated[
    str, typer.Option("--message", envvar="INPUT_MESSAGE", help="Message for a created tag.")
]
Body = Annotated[
    str,
    typer.Option("--body", envvar="INPUT_BODY", help="Release body (default: commit message)."),
]
Draft = Annotated[
    str, typer.Option("--draft", envvar="INPUT_DRAFT", help="true/yes to mark as draft.")
]
Prerelease = Annotated[
    str,
    typer.Option(
        "--prerelease", envvar="INPUT_PRERELEASE", help="false/no for a full release."
    ),
]
Files = Annotated[
    str,
    typer.Option(
        "--files",
        envvar="INPUT_FILES",
        help="Files to upload, separated by spaces, commas, tabs or newlines.",
    ),
]
Replace = Annotated[
    str,
    typer.Option(
        "--replace", envvar="INPUT_REPLACE", help="true/yes to delete every existing asset."
    ),
]
UpdateTag = Annotated[
    str,
    typer.Option(
        "--update-tag",
        envvar="INPUT_UPDATETAG",
        help="false/no to keep the tag where it was first created.",
    ),
]
Repository = Annotated[
    str, typer.Option("--repository", envvar="GITHUB_REPOSITORY", help="owner/name.")
]
Ref = Annotated[str, typer.Option("--ref", envvar="GITHUB_REF", help="Git ref of the build.")]
Sha = Annotated[str, typer.Option("--sha", envvar="GITHUB_SHA", help="Commit SHA of the build.")]
Workspace = Annotated[
    str,
    typer.Option(
        "--workspace", envvar="GITHUB_WORKSPACE", help="Root for relative file paths."
    ),
]
ApiUrl = Annotated[
    str, typer.Option("--api-url", envvar="GITHUB_API_URL", help="GitHub REST API base URL.")
]

