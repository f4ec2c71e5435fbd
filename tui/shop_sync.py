"""Sync the current branch into shops by opening pull requests.

For each selected shop a PR ``<current branch> -> <shop>/staging`` is created
with ``gh``. Content protection is applied per shop before anything is opened.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from config.rules import STAGING_BRANCH
from core.content_guard import GuardAction, effective_protection, evaluate_sync
from core.context import ShopContext
from core.github import GH_REMEDIATION, GitHubClient
from core.result import Err, ErrorKind, Ok, Result, cancelled
from tui.prompts import Option, Prompter

logger = logging.getLogger(__name__)

ALL_SHOPS = "__all__"


@dataclass
class SyncReport:
    created: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    skipped: dict[str, str] = field(default_factory=dict)


def sync_shops(context: ShopContext, prompter: Prompter) -> Result[SyncReport]:
    shops = context.shops.list_shops()
    if not shops.success:
        return shops
    if not shops.data:
        prompter.note("No shops configured yet. Create shops first.", "Sync Shops")
        return Ok(SyncReport())

    head = context.git.current_branch()
    if not head:
        return Err(ErrorKind.INVALID_FORMAT, "Detached HEAD: check out a branch before syncing shops")
    prompter.note(f"Create PRs from {head} into each shop's staging branch", "Shop Sync")

    options = [Option(ALL_SHOPS, "All Shops", f"Deploy to all {len(shops.data)} shops")]
    options += [Option(shop, shop, f"Deploy to {shop} only") for shop in shops.data]
    choice = prompter.select("Select shops to sync:", options)
    if choice is None:
        return cancelled("No shops selected")
    selected = shops.data if choice == ALL_SHOPS else [choice]

    title = prompter.text(
        "PR title for shop sync",
        default=f"Deploy latest changes from {head}",
        validate=lambda v: None if v else "PR title is required",
    )
    if title is None:
        return cancelled("No PR title provided")

    if not context.github.is_available():
        prompter.note(GH_REMEDIATION, "GitHub CLI not found")
        show_manual_commands(prompter, selected, head, title)
        return Err(ErrorKind.PROCESS_ERROR, f"GitHub CLI not available. {GH_REMEDIATION}")

    report = create_sync_prs(context, prompter, selected, head, title)
    show_report(prompter, report, head, title)
    return Ok(report)


def guard_allows(context: ShopContext, prompter: Prompter, shop_id: str, head: str) -> tuple[bool, str]:
    """Apply content protection for one shop; returns (allowed, reason)."""
    loaded = context.shops.load_config(shop_id)
    shop_protection = loaded.data.content_protection if loaded.success else None
    protection = effective_protection(shop_protection, context.global_settings.default_content_protection())

    base = STAGING_BRANCH.format(shop_id=shop_id)
    changed = context.git.changed_files(f"origin/{base}", head)
    decision = evaluate_sync(head, shop_id, changed, protection)

    if decision.content_files and protection.verbosity == "verbose":
        prompter.info(f"\n{shop_id}: {decision.sync_type} sync, {len(decision.content_files)} content file(s):")
        for path in decision.content_files:
            prompter.info(f"  - {path}")

    if decision.action is GuardAction.BLOCK:
        prompter.error(f"{shop_id}: {decision.message}")
        return False, decision.message
    if decision.action is GuardAction.CONFIRM:
        prompter.warning(f"{shop_id}: {decision.message}")
        if not prompter.confirm(f"Create PR for {shop_id} anyway?", default=False):
            return False, "Skipped by user"
    return True, ""


def create_sync_prs(
    context: ShopContext,
    prompter: Prompter,
    shops: list[str],
    head: str,
    title: str,
) -> SyncReport:
    report = SyncReport()
    for shop_id in shops:
        allowed, reason = guard_allows(context, prompter, shop_id, head)
        if not allowed:
            report.skipped[shop_id] = reason
            continue

        result = context.github.create_pr(STAGING_BRANCH.format(shop_id=shop_id), head, title)
        if result.success:
            report.created.append(shop_id)
            if result.output:
                prompter.info(f"{shop_id}: {result.output}")
        else:
            logger.debug("gh pr create for %s failed: %s", shop_id, result.error_text)
            report.failed[shop_id] = result.error_text
    return report


def show_report(prompter: Prompter, report: SyncReport, head: str, title: str) -> None:
    if report.created:
        prompter.success(f"Created PRs for: {', '.join(report.created)}")
    for shop_id, reason in report.skipped.items():
        prompter.warning(f"Skipped {shop_id}: {reason}")
    if report.failed:
        prompter.note(
            "\n".join(f"{shop_id}: {error}" for shop_id, error in report.failed.items()),
            "Manual Required",
        )
        show_manual_commands(prompter, list(report.failed), head, title)


def show_manual_commands(prompter: Prompter, shops: list[str], head: str, title: str) -> None:
    prompter.info("\nManual PR creation commands:")
    for shop_id in shops:
        prompter.info(GitHubClient.manual_command(STAGING_BRANCH.format(shop_id=shop_id), head, title))
