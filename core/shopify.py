"""Shopify CLI wrapper."""

from __future__ import annotations

from config.rules import DOMAIN_SUFFIX
from core.process import ProcessRunner

SHOPIFY_REMEDIATION = "Install: npm install -g @shopify/cli"


def store_handle(domain: str) -> str:
    """``my-shop.myshopify.com`` -> ``my-shop``."""
    return domain.removesuffix(DOMAIN_SUFFIX)


class ShopifyCLI:
    def __init__(self, runner: ProcessRunner, cwd: str | None = None, timeout: float = 5.0):
        self.runner = runner
        self.cwd = cwd
        self.timeout = timeout

    def version(self) -> str | None:
        result = self.runner.run("shopify", ["version"], cwd=self.cwd, timeout=self.timeout)
        return result.output if result.success else None

    def is_available(self) -> bool:
        return self.version() is not None

    def latest_version(self) -> str | None:
        result = self.runner.run("npm", ["view", "@shopify/cli", "version"], cwd=self.cwd, timeout=self.timeout)
        return result.output.strip('"') if result.success and result.output else None

    def theme_dev(self, domain: str, token: str) -> int:
        """Run ``shopify theme dev`` in the foreground until the user stops it."""
        handle = store_handle(domain)
        env = {
            "SHOPIFY_CLI_THEME_TOKEN": token,
            "SHOPIFY_FLAG_STORE": handle,
        }
        return self.runner.run_interactive(
            "shopify", ["theme", "dev", f"--store={handle}"], cwd=self.cwd, env=env
        )
