"""``multi-shop init``: prepare a Shopify theme repository for several shops."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from config.settings import ProjectPaths
from core.credential_store import DIR_MODE
from core.jsonfile import write_json_atomic
from core.result import Err, ErrorKind, Ok, Result, cancelled
from tui.prompts import Prompter

logger = logging.getLogger(__name__)

THEME_DIRECTORIES = ("config", "sections", "templates", "assets")

GITIGNORE_ENTRIES = (
    "# System files",
    ".DS_Store",
    "._*",
    "# Environment files",
    ".env",
    ".env.local",
    "# Multi-shop credentials (NEVER COMMIT)",
    "shops/credentials/",
    "*.credentials.json",
)

EXAMPLE_CONFIG = {
    "shopId": "example-shop",
    "name": "Example Shop",
    "shopify": {
        "stores": {
            "production": {
                "domain": "example-shop.myshopify.com",
                "branch": "example-shop/main",
            },
            "staging": {
                "domain": "staging-example-shop.myshopify.com",
                "branch": "example-shop/staging",
            },
        },
        "authentication": {
            "method": "theme-access-app",
            "notes": {
                "setup": "Install Theme Access app from Shopify App Store",
                "credentials": "Theme tokens are stored in shops/credentials/ (NOT committed to git)",
            },
        },
    },
}


@dataclass
class InitReport:
    created_directories: list[str] = field(default_factory=list)
    gitignore_added: list[str] = field(default_factory=list)
    example_config: str = ""


class Initializer:
    def __init__(self, paths: ProjectPaths, prompter: Prompter, force: bool = False):
        self.paths = paths
        self.prompter = prompter
        self.force = force

    def run(self) -> Result[InitReport]:
        validated = self.validate_project()
        if not validated.success:
            return validated

        report = InitReport()
        try:
            report.created_directories = self.create_directories()
            report.gitignore_added = self.update_gitignore()
            report.example_config = self.create_example_config()
        except OSError as e:
            return Err(ErrorKind.IO_ERROR, f"Initialization failed: {e}")
        logger.info("initialized %s", self.paths.root)
        return Ok(report)

    def has_theme_structure(self) -> bool:
        return any((self.paths.root / name).is_dir() for name in THEME_DIRECTORIES)

    def validate_project(self) -> Result[None]:
        if not self.force and not self.has_theme_structure():
            if not self.prompter.confirm("This doesn't look like a Shopify theme. Continue anyway?", default=False):
                return cancelled("Initialization cancelled")
        if not self.force and self.paths.shops_dir.exists():
            if not self.prompter.confirm("Multi-shop appears to already be set up. Reinitialize?", default=False):
                return cancelled("Initialization cancelled")
        return Ok()

    def create_directories(self) -> list[str]:
        created = []
        for path in (self.paths.shops_dir, self.paths.credentials_dir, self.paths.workflows_dir):
            if not path.exists():
                path.mkdir(parents=True, exist_ok=True)
                created.append(str(path.relative_to(self.paths.root)))
        try:
            os.chmod(self.paths.credentials_dir, DIR_MODE)
        except OSError as e:
            logger.debug("chmod %o %s failed: %s", DIR_MODE, self.paths.credentials_dir, e)
        return created

    def update_gitignore(self) -> list[str]:
        """Append missing entries; existing lines are left alone."""
        gitignore = self.paths.gitignore
        content = gitignore.read_text(encoding="utf-8") if gitignore.exists() else ""
        existing = {line.strip() for line in content.splitlines()}

        added = [entry for entry in GITIGNORE_ENTRIES if entry not in existing]
        if not added:
            return []
        if content and not content.endswith("\n"):
            content += "\n"
        content += "\n" + "\n".join(added) + "\n"
        gitignore.write_text(content, encoding="utf-8")
        return [entry for entry in added if not entry.startswith("#")]

    def create_example_config(self) -> str:
        write_json_atomic(self.paths.example_config, EXAMPLE_CONFIG)
        return str(self.paths.example_config.relative_to(self.paths.root))
