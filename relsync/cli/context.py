from __future__ import annotations

from dataclasses import dataclass

from relsync.github.api import GitHubRepoApi, RepoApi
from relsync.github.http import RealHttpClient
from relsync.output.actions import running_in_actions
from relsync.output.console import ActionsConsole, ConsoleProtocol, RichConsole
from relsync.release.contracts import RunConfig


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    in_actions: bool


def build_context() -> CLIContext:
    in_actions = running_in_actions()
    console: ConsoleProtocol = ActionsConsole() if in_actions else RichConsole()
    return CLIContext(console=console, in_actions=in_actions)


def build_repo_api(config: RunConfig) -> RepoApi:
    return GitHubRepoApi(RealHttpClient(config.token), config.repo, api_url=config.api_url)
