"""Per-shop health check: configuration, credentials, branches, protection."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Literal

from config.rules import PRODUCTION_BRANCH, STAGING_BRANCH
from core.context import ShopContext

CheckLevel = Literal["pass", "warn", "fail", "info"]


@dataclass
class CheckStatus:
    status: CheckLevel
    message: str
    details: list[str] = field(default_factory=list)


@dataclass
class HealthReport:
    shop_id: str
    config: CheckStatus
    credentials: CheckStatus
    branches: CheckStatus
    content_protection: CheckStatus
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def checks(self) -> dict[str, CheckStatus]:
        return {
            "Configuration": self.config,
            "Credentials": self.credentials,
            "Git Branches": self.branches,
            "Content Protection": self.content_protection,
        }

    @property
    def overall(self) -> CheckLevel:
        if self.errors:
            return "fail"
        if self.warnings:
            return "warn"
        return "pass"


class _Findings:
    def __init__(self):
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.recommendations: list[str] = []


def check_shop_health(context: ShopContext, shop_id: str) -> HealthReport:
    findings = _Findings()
    config = _check_configuration(context, shop_id, findings)
    credentials = _check_credentials(context, shop_id, findings)
    branches = _check_branches(context, shop_id, findings)
    protection = _check_content_protection(context, shop_id)
    return HealthReport(
        shop_id=shop_id,
        config=config,
        credentials=credentials,
        branches=branches,
        content_protection=protection,
        errors=findings.errors,
        warnings=findings.warnings,
        recommendations=findings.recommendations,
    )


def _check_configuration(context: ShopContext, shop_id: str, findings: _Findings) -> CheckStatus:
    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        findings.errors.append(f"Config file missing or invalid: {loaded.error}")
        return CheckStatus("fail", f"Config file missing or invalid: {loaded.error}")

    config = loaded.data
    return CheckStatus(
        "pass",
        "Configuration valid",
        [
            f"Production: {config.shopify.stores.production.domain}",
            f"Staging: {config.shopify.stores.staging.domain}",
            f"Auth: {config.shopify.authentication.method}",
        ],
    )


def _check_credentials(context: ShopContext, shop_id: str, findings: _Findings) -> CheckStatus:
    loaded = context.credentials.load_credentials(shop_id)
    if not loaded.success:
        findings.errors.append(f"Credentials unreadable: {loaded.error}")
        return CheckStatus("fail", "Credentials unreadable")
    if loaded.data is None:
        findings.errors.append("No credentials configured")
        findings.recommendations.append(f"Create credentials: shops/credentials/{shop_id}.credentials.json")
        return CheckStatus("fail", "Credentials missing")

    credentials = loaded.data
    if not credentials.has_production or not credentials.has_staging:
        findings.warnings.append("Missing tokens")
        if not credentials.has_production:
            findings.recommendations.append("Add production token")
        if not credentials.has_staging:
            findings.recommendations.append("Add staging token")
        return CheckStatus("warn", "Some tokens missing")

    details = ["Production token present", "Staging token present"]
    if os.name == "nt":
        return CheckStatus("pass", "Credentials configured", [*details, "Windows (permissions N/A)"])

    info = context.credentials.file_info(shop_id)
    if info is not None and not info.is_private:
        findings.warnings.append(f"Insecure permissions: {info.permissions}")
        findings.recommendations.append(f"Run: chmod 600 shops/credentials/{shop_id}.credentials.json")
        return CheckStatus("warn", f"Permissions too open ({info.permissions})", details)
    return CheckStatus("pass", "Credentials configured", [*details, "File permissions: 600"])


def _check_branches(context: ShopContext, shop_id: str, findings: _Findings) -> CheckStatus:
    main = PRODUCTION_BRANCH.format(shop_id=shop_id)
    staging = STAGING_BRANCH.format(shop_id=shop_id)

    missing = [b for b in (main, staging) if not context.git.remote_branch_exists(b)]
    if missing:
        for branch in missing:
            findings.errors.append(f"Branch {branch} not found")
            findings.recommendations.append(
                f"Create and push: git checkout -b {branch} && git push -u origin {branch}"
            )
        return CheckStatus("fail", "Required branches missing")

    details = [f"{main} exists", f"{staging} exists"]
    behind = context.git.commits_behind(staging, main)
    if behind > 0:
        findings.warnings.append(f"{staging} is {behind} commits behind {main}")
        findings.recommendations.append(f"Consider syncing: Create PR from {main} to {staging}")
        return CheckStatus("warn", f"Branches out of sync ({behind} commits behind)", details)
    return CheckStatus("pass", "Git branches configured", details)


def _check_content_protection(context: ShopContext, shop_id: str) -> CheckStatus:
    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        return CheckStatus("info", "Cannot check (config unavailable)")

    protection = loaded.data.content_protection
    if protection is None or not protection.enabled:
        return CheckStatus("info", "Disabled", ["Enable in: Tools -> Content Protection"])
    return CheckStatus(
        "pass",
        f"Enabled ({protection.mode} mode, {protection.verbosity})",
        [f"Mode: {protection.mode}", f"Verbosity: {protection.verbosity}"],
    )
