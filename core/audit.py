"""Security audit of credential storage.

Checks file and directory permissions, credential metadata, the .gitignore
rules that keep credentials out of git, and whether credentials were ever
committed. Nothing here modifies the project.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Literal

from core.context import ShopContext
from core.credential_store import permission_bits
from core.result import Ok, Result

logger = logging.getLogger(__name__)

IssueLevel = Literal["error", "warning", "info"]

CREDENTIALS_DIR_PATTERNS = (
    "shops/credentials/",
    "shops/credentials",
    "**/credentials/",
    "credentials/",
)
CREDENTIALS_FILE_PATTERN = "*.credentials.json"
HISTORY_PATH = "shops/credentials/"


def _posix_permissions() -> bool:
    return os.name != "nt"


@dataclass
class SecurityIssue:
    level: IssueLevel
    message: str
    recommendation: str = ""
    shop_id: str | None = None


@dataclass
class ShopAudit:
    shop_id: str
    file_permissions: str = "none"
    last_modified: str = "never"
    has_production: bool = False
    has_staging: bool = False
    # presence of _metadata.created, not tamper detection
    metadata_present: bool = False


@dataclass
class AuditReport:
    timestamp: str
    shops: list[ShopAudit] = field(default_factory=list)
    issues: list[SecurityIssue] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.level == "error" for issue in self.issues)

    def issues_at(self, level: IssueLevel) -> list[SecurityIssue]:
        return [issue for issue in self.issues if issue.level == level]

    def to_dict(self) -> dict:
        data = asdict(self)
        data["has_errors"] = self.has_errors
        return data


def run_security_audit(context: ShopContext) -> Result[AuditReport]:
    issues: list[SecurityIssue] = []
    audits: list[ShopAudit] = []
    credentials_dir = context.paths.credentials_dir

    if credentials_dir.is_dir():
        mode = permission_bits(credentials_dir)
        if mode != "700" and _posix_permissions():
            issues.append(
                SecurityIssue(
                    "warning",
                    f"Credential directory has permissive permissions: {mode}",
                    f"Run: chmod 700 {credentials_dir}",
                )
            )
    else:
        issues.append(
            SecurityIssue(
                "info",
                "Credential directory does not exist yet",
                'Run "multi-shop shop" to create your first shop',
            )
        )

    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    for shop_id in shops.data:
        audit, shop_issues = audit_shop_credentials(context, shop_id)
        audits.append(audit)
        issues.extend(shop_issues)

    issues.extend(check_gitignore(context))

    if check_git_history(context):
        issues.append(
            SecurityIssue(
                "warning",
                "Potential credential files detected in git history",
                f'Review git history: git log --all --full-history -- "{HISTORY_PATH}"',
            )
        )

    return Ok(
        AuditReport(
            timestamp=datetime.now(timezone.utc).isoformat(),
            shops=audits,
            issues=issues,
            recommendations=generate_recommendations(issues),
        )
    )


def audit_shop_credentials(context: ShopContext, shop_id: str) -> tuple[ShopAudit, list[SecurityIssue]]:
    audit = ShopAudit(shop_id=shop_id)
    info = context.credentials.file_info(shop_id)
    if info is None:
        return audit, []

    issues: list[SecurityIssue] = []
    audit.file_permissions = info.permissions
    audit.last_modified = info.modified.isoformat()

    loaded = context.credentials.load_credentials(shop_id)
    if not loaded.success or loaded.data is None:
        issues.append(
            SecurityIssue(
                "error",
                f"Credential file cannot be read: {loaded.error}",
                f"Recreate credentials for {shop_id} via \"multi-shop shop\"",
                shop_id,
            )
        )
    else:
        credentials = loaded.data
        audit.has_production = credentials.has_production
        audit.has_staging = credentials.has_staging
        audit.metadata_present = bool(credentials.metadata and credentials.metadata.created)
        if not audit.metadata_present:
            issues.append(
                SecurityIssue(
                    "warning",
                    "Credential file exists but metadata is missing",
                    "Credentials are valid but consider regenerating to add metadata",
                    shop_id,
                )
            )

    if not info.is_private and _posix_permissions():
        issues.append(
            SecurityIssue(
                "warning",
                f"Credential file has permissive permissions: {info.permissions}",
                f"Run: chmod 600 {info.path}",
                shop_id,
            )
        )
    return audit, issues


def check_gitignore(context: ShopContext) -> list[SecurityIssue]:
    gitignore = context.paths.gitignore
    try:
        content = gitignore.read_text(encoding="utf-8") if gitignore.exists() else ""
    except OSError as e:
        logger.warning("Could not read %s: %s", gitignore, e)
        content = ""

    issues = []
    if not any(pattern in content for pattern in CREDENTIALS_DIR_PATTERNS):
        issues.append(
            SecurityIssue(
                "error",
                "Credentials directory pattern not found in .gitignore",
                'Add "shops/credentials/" to .gitignore to prevent credential leaks',
            )
        )
    if CREDENTIALS_FILE_PATTERN not in content:
        issues.append(
            SecurityIssue(
                "error",
                f"{CREDENTIALS_FILE_PATTERN} pattern not found in .gitignore",
                f'Add "{CREDENTIALS_FILE_PATTERN}" to .gitignore to prevent credential leaks',
            )
        )
    return issues


def check_git_history(context: ShopContext) -> bool:
    """True when some commit touched the credentials directory."""
    if not (context.paths.root / ".git").exists():
        return False
    return context.git.history_touches(HISTORY_PATH)


def generate_recommendations(issues: list[SecurityIssue]) -> list[str]:
    errors = [i for i in issues if i.level == "error"]
    warnings = [i for i in issues if i.level == "warning"]

    recommendations = []
    if errors:
        recommendations.append("CRITICAL: Fix error-level issues immediately")
        recommendations.extend(f"  - {i.message}: {i.recommendation}" for i in errors)
    if warnings:
        recommendations.append("Address warning-level issues when possible")
    if not issues:
        recommendations.append("No security issues detected")
    return recommendations
