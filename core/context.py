"""Everything a command needs, wired from one project root."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from config.settings import ProjectPaths, ToolSettings
from core.credential_store import CredentialStore
from core.git import GitClient
from core.github import GitHubClient
from core.global_settings import GlobalSettingsStore
from core.process import ProcessRunner, SubprocessRunner
from core.shop_store import ShopConfigStore
from core.shopify import ShopifyCLI


@dataclass
class ShopContext:
    paths: ProjectPaths
    settings: ToolSettings
    runner: ProcessRunner
    shops: ShopConfigStore
    credentials: CredentialStore
    global_settings: GlobalSettingsStore
    git: GitClient
    github: GitHubClient
    shopify: ShopifyCLI

    @property
    def cwd(self) -> Path:
        return self.paths.root


def create_context(
    root: str | Path | None = None,
    settings: ToolSettings | None = None,
    runner: ProcessRunner | None = None,
) -> ShopContext:
    paths = ProjectPaths.for_root(root)
    settings = settings or ToolSettings.from_env()
    runner = runner or SubprocessRunner()
    cwd = str(paths.root)
    credentials = CredentialStore(paths.credentials_dir)
    return ShopContext(
        paths=paths,
        settings=settings,
        runner=runner,
        shops=ShopConfigStore(paths.shops_dir, credentials, settings.max_config_file_size),
        credentials=credentials,
        global_settings=GlobalSettingsStore(paths.settings_file),
        git=GitClient(runner, cwd, settings.command_timeout),
        github=GitHubClient(runner, cwd, settings.command_timeout),
        shopify=ShopifyCLI(runner, cwd, settings.command_timeout),
    )
