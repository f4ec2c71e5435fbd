"""Guard against syncing shop-specific content files across shops.

Theme settings, JSON templates, locales and markets hold per-store content.
Pushing them from one shop's branch into another shop would overwrite the
target store's customizations.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from config.schema import ContentProtection, ContentProtectionDefaults
from core.dispatcher import classify_branch

CONTENT_PATTERNS = (
    "config/settings_data.json",
    "templates/*.json",
    "locales/*.json",
    "config/markets.json",
)

WITHIN_SHOP = "within-shop"
CROSS_SHOP = "cross-shop"


class GuardAction(str, Enum):
    PROCEED = "proceed"
    CONFIRM = "confirm"
    BLOCK = "block"


def is_content_file(path: str) -> bool:
    # "*" crosses "/", so nested templates and locales match too
    return any(fnmatch.fnmatchcase(path, pattern) for pattern in CONTENT_PATTERNS)


def split_files(files: Iterable[str]) -> tuple[list[str], list[str]]:
    """(content files, code files)"""
    content, code = [], []
    for path in files:
        (content if is_content_file(path) else code).append(path)
    return content, code


def sync_type(current_branch: str, target_shop: str) -> str:
    context = classify_branch(current_branch)
    if context.is_shop_branch and context.shop_id == target_shop:
        return WITHIN_SHOP
    return CROSS_SHOP


@dataclass
class GuardDecision:
    action: GuardAction
    sync_type: str
    mode: str
    content_files: list[str] = field(default_factory=list)
    code_files: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        if self.action is GuardAction.BLOCK:
            return (
                f"Blocked: {len(self.content_files)} content file(s) would sync across shops "
                f"(content protection is strict)"
            )
        if self.action is GuardAction.CONFIRM:
            return f"Warning: {len(self.content_files)} content file(s) would sync across shops"
        return "No cross-shop content changes"


def effective_protection(
    shop_protection: ContentProtection | None,
    defaults: ContentProtectionDefaults,
) -> ContentProtection:
    """The shop's own settings, or the global defaults when it has none."""
    if shop_protection is not None:
        return shop_protection
    return defaults.as_protection()


def evaluate_sync(
    current_branch: str,
    target_shop: str,
    changed_files: Iterable[str],
    protection: ContentProtection,
) -> GuardDecision:
    content, code = split_files(changed_files)
    kind = sync_type(current_branch, target_shop)
    mode = protection.mode if protection.enabled else "off"

    if not content or kind == WITHIN_SHOP or mode == "off":
        action = GuardAction.PROCEED
    elif mode == "strict":
        action = GuardAction.BLOCK
    else:
        action = GuardAction.CONFIRM
    return GuardDecision(action=action, sync_type=kind, mode=mode, content_files=content, code_files=code)
