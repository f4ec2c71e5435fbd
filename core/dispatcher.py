"""Route ``multi-shop dev`` by the checked-out branch.

``<shop>/<anything>`` is a shop-specific branch: the development flow starts
with that shop preselected. Any other name is a feature branch and the user
picks the shop.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.git import GitClient

logger = logging.getLogger(__name__)


class BranchKind(str, Enum):
    SHOP = "shop-specific"
    FEATURE = "feature"


@dataclass(frozen=True)
class BranchContext:
    branch: str
    kind: BranchKind
    shop_id: str | None = None

    @property
    def is_shop_branch(self) -> bool:
        return self.kind is BranchKind.SHOP


def classify_branch(name: str) -> BranchContext:
    branch = name.strip()
    prefix, sep, _ = branch.partition("/")
    if sep and prefix:
        return BranchContext(branch=branch, kind=BranchKind.SHOP, shop_id=prefix)
    return BranchContext(branch=branch, kind=BranchKind.FEATURE)


@dataclass
class DispatchOutcome:
    context: BranchContext
    result: Any


class BranchDispatcher:
    """Calls ``shop_flow(preselected_shop=...)`` or ``feature_flow()``."""

    def __init__(
        self,
        git: GitClient,
        shop_flow: Callable[..., Any],
        feature_flow: Callable[[], Any],
    ):
        self.git = git
        self.shop_flow = shop_flow
        self.feature_flow = feature_flow

    def run(self) -> DispatchOutcome:
        context = classify_branch(self.git.current_branch())
        logger.debug("branch %r classified as %s", context.branch, context.kind.value)
        if context.is_shop_branch:
            return DispatchOutcome(context, self.shop_flow(preselected_shop=context.shop_id))
        return DispatchOutcome(context, self.feature_flow())
