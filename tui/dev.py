"""Development server workflow and the branch-aware ``dev`` command."""

from __future__ import annotations

import logging

from core.context import ShopContext
from core.dispatcher import BranchDispatcher, DispatchOutcome
from core.result import Err, ErrorKind, Ok, Result, cancelled
from core.shopify import SHOPIFY_REMEDIATION, store_handle
from tui.prompts import Prompter, select_environment, select_shop

logger = logging.getLogger(__name__)


def start_development(
    context: ShopContext,
    prompter: Prompter,
    preselected_shop: str | None = None,
) -> Result[None]:
    """Pick shop (unless preselected) and environment, then run the dev server."""
    if preselected_shop is None:
        shops = context.shops.list_shops()
        if not shops.success:
            return shops
        if not shops.data:
            prompter.note("No shops configured. Create a shop first.", "Setup Required")
            return Err(ErrorKind.NOT_FOUND, "No shops available")
        shop_id = select_shop(prompter, shops.data, "Select shop for development:", "Start dev server for {shop}")
        if shop_id is None:
            return cancelled("No shop selected")
    else:
        shop_id = preselected_shop
        prompter.info(f"Shop: [cyan]{shop_id}[/cyan] (from branch)")

    environment = select_environment(prompter)
    if environment is None:
        return cancelled("No environment selected")

    return start_dev_server(context, prompter, shop_id, environment)


def start_dev_server(context: ShopContext, prompter: Prompter, shop_id: str, environment: str) -> Result[None]:
    loaded = context.shops.load_config(shop_id)
    if not loaded.success:
        return loaded
    store = loaded.data.store(environment)

    credentials = context.credentials.load_credentials(shop_id)
    if not credentials.success:
        return credentials
    token = credentials.data.token(environment) if credentials.data else ""
    if not token:
        prompter.note(
            f"No theme token found for {environment}.\nAdd one via: multi-shop shop -> Edit Shop -> Edit Credentials",
            "Setup Required",
        )
        return Err(ErrorKind.NOT_FOUND, f"No {environment} theme token for {shop_id}")

    if not context.shopify.is_available():
        prompter.note(SHOPIFY_REMEDIATION, "Shopify CLI not found")
        return Err(ErrorKind.PROCESS_ERROR, f"Shopify CLI not available. {SHOPIFY_REMEDIATION}")

    prompter.info(f"\nShop: {shop_id} ({environment})")
    prompter.info(f"Store: {store.domain}")
    prompter.info(f"Running: shopify theme dev --store={store_handle(store.domain)}\n")
    logger.info("starting dev server for %s (%s)", shop_id, environment)

    exit_code = context.shopify.theme_dev(store.domain, token)
    if exit_code != 0:
        return Err(ErrorKind.PROCESS_ERROR, f"Shopify CLI exited with code {exit_code}")
    return Ok()


def run_contextual_dev(context: ShopContext, prompter: Prompter) -> DispatchOutcome:
    """Start development for the current branch.

    Raises:
        GitError: the current branch cannot be determined.
    """

    def shop_flow(preselected_shop: str) -> Result[None]:
        prompter.info(f"Shop-specific branch detected: [cyan]{preselected_shop}[/cyan]")
        return start_development(context, prompter, preselected_shop=preselected_shop)

    def feature_flow() -> Result[None]:
        prompter.info("Feature branch detected, choose a shop to develop against")
        return start_development(context, prompter)

    return BranchDispatcher(context.git, shop_flow, feature_flow).run()
